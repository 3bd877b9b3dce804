from datetime import datetime

import pytest

from srtrail.constants import API_ENDPOINTS
from srtrail.errors import SRTError, SRTNotLoggedInError, SRTResponseError
from srtrail.payment import PaymentProcessor
from srtrail.reservation import SRTReservation, SRTTicket
from srtrail.session import Session

from .payloads import reservation_rows, result, ticket_row


@pytest.fixture
def reservation():
    train, pay = reservation_rows()
    return SRTReservation(train, pay, [SRTTicket(ticket_row())])


def settlement(status, msg=""):
    return {"outDataSets": {"dsOutput0": [{"strResult": status, "msgTxt": msg}]}}


def test_pay_with_card(session, http, reservation):
    http.queue(settlement("SUCC"))

    assert PaymentProcessor(session).pay_with_card(reservation, "1234567890123456", "12", "981204", "2309")
    assert reservation.paid

    url, data = http.calls[0]
    assert url == API_ENDPOINTS["payment"]
    assert data["stlDmnDt"] == datetime.now().strftime("%Y%m%d")
    assert data["mbCrdNo"] == session.membership_number
    assert data["pnrNo"] == reservation.reservation_number
    assert data["totNewStlAmt"] == 59800
    assert data["athnDvCd1"] == "J"
    assert data["stlCrCrdNo1"] == "1234567890123456"
    assert data["dptTm"] == "080000"


def test_corporate_card(session, http, reservation):
    http.queue(settlement("SUCC"))
    PaymentProcessor(session).pay_with_card(reservation, "1", "12", "1234567890", "2309", card_type="corporate")
    assert http.calls[0][1]["athnDvCd1"] == "S"


def test_payment_failure(session, http, reservation):
    http.queue(settlement("FAIL", "카드 비밀번호가 틀렸습니다"))

    with pytest.raises(SRTResponseError, match="카드 비밀번호"):
        PaymentProcessor(session).pay_with_card(reservation, "1", "12", "981204", "2309")
    assert not reservation.paid


def test_payment_ignores_general_envelope(session, http, reservation):
    http.queue(result("SUCC"))

    with pytest.raises(SRTError):
        PaymentProcessor(session).pay_with_card(reservation, "1", "12", "981204", "2309")


def test_unknown_card_type(session, http, reservation):
    with pytest.raises(ValueError):
        PaymentProcessor(session).pay_with_card(reservation, "1", "12", "981204", "2309", card_type="debit")
    assert http.calls == []


def test_requires_login(http, reservation):
    with pytest.raises(SRTNotLoggedInError):
        PaymentProcessor(Session("1234567890", "pw", http=http)).pay_with_card(
            reservation, "1", "12", "981204", "2309"
        )
