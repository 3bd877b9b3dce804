import pytest

from srtrail.constants import API_ENDPOINTS
from srtrail.errors import SRTError, SRTNotLoggedInError, SRTResponseError
from srtrail.passenger import Adult, Child
from srtrail.session import Session
from srtrail.train import SeatType, SRTTrain
from srtrail.workflow import ReservationWorkflow

from .payloads import reservation_rows, result, ticket_row, train_row

PNR_NO = "320240101000123"


def listing(*rows):
    trains = [train for train, _ in rows]
    pays = [pay for _, pay in rows]
    return result(trainListMap=trains, payListMap=pays)


def tickets():
    return result(trainListMap=[ticket_row()])


def queue_verified_reservation(http, pnr_no=PNR_NO):
    http.queue(result(reservListMap=[{"pnrNo": pnr_no}]))
    http.queue(listing(reservation_rows(pnr_no)))
    http.queue(tickets())


def test_reserve_returns_verified_reservation(session, http):
    queue_verified_reservation(http)
    train = SRTTrain.from_data(train_row())

    reservation = ReservationWorkflow(session).reserve(train, [Adult(1), Adult(1), Child(1)], window_seat=True)

    assert reservation.reservation_number == PNR_NO
    assert reservation.total_cost == 59800
    assert reservation.train_name == "SRT"
    assert not reservation.paid
    assert reservation.tickets[0].car == "5"

    url, data = http.calls[0]
    assert url == API_ENDPOINTS["reserve"]
    assert data["jobId"] == "1101"
    assert data["reserveType"] == "11"
    assert data["trnNo1"] == "00301"
    assert data["dptStnRunOrdr1"] == "000001"
    assert data["arvStnConsOrdr1"] == "000010"
    assert data["totPrnb"] == "3"
    assert data["psgGridcnt"] == "2"
    assert data["psrmClCd1"] == "1"
    assert data["locSeatAttCd1"] == "012"
    assert data["locSeatAttCd2"] == "012"
    assert [call[0] for call in http.calls[1:]] == [API_ENDPOINTS["tickets"], API_ENDPOINTS["ticket_info"]]


def test_reserve_special_seat_when_general_sold_out(session, http):
    queue_verified_reservation(http)
    train = SRTTrain.from_data(train_row(general="매진"))

    ReservationWorkflow(session).reserve(train, option=SeatType.GENERAL_FIRST)

    assert http.calls[0][1]["psrmClCd1"] == "2"


def test_reserve_not_found_after_creation_raises_integrity_error(session, http):
    http.queue(result(reservListMap=[{"pnrNo": PNR_NO}]))
    http.queue(listing(reservation_rows("999999999999999")))
    http.queue(tickets())

    with pytest.raises(SRTError, match="Ticket not found") as excinfo:
        ReservationWorkflow(session).reserve(SRTTrain.from_data(train_row()))
    assert not isinstance(excinfo.value, SRTResponseError)


def test_reserve_rejected_by_server(session, http):
    http.queue(result("FAIL", "잔여석없음"))

    with pytest.raises(SRTResponseError, match="잔여석없음"):
        ReservationWorkflow(session).reserve(SRTTrain.from_data(train_row()))
    assert len(http.calls) == 1


def test_reserve_rejects_other_train_type(session, http):
    train = SRTTrain.from_data(train_row(train_code="00"))
    with pytest.raises(ValueError):
        ReservationWorkflow(session).reserve(train)
    assert http.calls == []


@pytest.mark.parametrize("passengers", [[Adult(0)], [Adult(0), Child(0)]])
def test_reserve_rejects_zero_passengers(session, http, passengers):
    train = SRTTrain.from_data(train_row())
    with pytest.raises(ValueError, match="passenger"):
        ReservationWorkflow(session).reserve(train, passengers)
    assert http.calls == []


def test_reserve_standby_rejects_zero_passengers(session, http):
    train = SRTTrain.from_data(train_row(general="매진", special="매진", wait_code="9"))
    with pytest.raises(ValueError):
        ReservationWorkflow(session).reserve_standby(train, [Child(0)])
    assert http.calls == []


def test_reserve_rejects_non_train(session):
    with pytest.raises(TypeError):
        ReservationWorkflow(session).reserve(train_row())


def test_reserve_requires_login(http):
    workflow = ReservationWorkflow(Session("1234567890", "pw", http=http))
    with pytest.raises(SRTNotLoggedInError):
        workflow.reserve(SRTTrain.from_data(train_row()))
    assert http.calls == []


def test_reserve_standby_omits_seat_preferences(session, http):
    queue_verified_reservation(http)
    train = SRTTrain.from_data(train_row(general="매진", special="매진", wait_code="9"))

    ReservationWorkflow(session).reserve_standby(
        train, [Adult(2)], option=SeatType.GENERAL_ONLY, mblPhone="010-1234-5678"
    )

    _, data = http.calls[0]
    assert data["jobId"] == "1102"
    assert data["mblPhone"] == "010-1234-5678"
    assert data["totPrnb"] == "2"
    assert data["psrmClCd1"] == "1"
    assert "reserveType" not in data
    assert "locSeatAttCd1" not in data


def test_standby_option_settings_returns_transport_status(session, http):
    http.queue("not even json", status_code=200)

    assert ReservationWorkflow(session).reserve_standby_option_settings(PNR_NO, True, False, "01012345678")

    _, data = http.calls[0]
    assert data == {"pnrNo": PNR_NO, "psrmClChgFlg": "N", "smsSndFlg": "Y", "telNo": "01012345678"}


def test_standby_option_settings_without_sms_sends_no_phone(session, http):
    http.queue("", status_code=500)

    assert not ReservationWorkflow(session).reserve_standby_option_settings(PNR_NO, False, True, "01012345678")
    assert http.calls[0][1]["telNo"] == ""


def test_get_reservations_paid_only(session, http):
    http.queue(listing(reservation_rows("1", paid="Y"), reservation_rows("2", paid="N")))
    http.queue(tickets())

    reservations = ReservationWorkflow(session).get_reservations(paid_only=True)

    assert [r.reservation_number for r in reservations] == ["1"]
    assert reservations[0].paid
    assert http.calls[1][1]["pnrNo"] == "1"


def test_get_reservations_length_mismatch(session, http):
    train, pay = reservation_rows()
    http.queue(result(trainListMap=[train, train], payListMap=[pay]))

    with pytest.raises(SRTError, match="mismatch"):
        ReservationWorkflow(session).get_reservations()


def test_get_reservations_empty(session, http):
    http.queue(result())
    assert ReservationWorkflow(session).get_reservations() == []


def test_ticket_info(session, http):
    http.queue(tickets())

    [ticket] = ReservationWorkflow(session).ticket_info(PNR_NO)

    assert http.calls[0][1] == {"pnrNo": PNR_NO, "jrnySqno": "1"}
    assert ticket.seat == "7A"
    assert ticket.seat_type == "일반실"
    assert ticket.passenger_type == "어른/청소년"
    assert ticket.price == 59800
    assert str(ticket) == "5호차 7A (일반실) 어른/청소년 [59800원(0원 할인)]"


def test_cancel(session, http):
    http.queue(result(msg="취소되었습니다"))
    assert ReservationWorkflow(session).cancel(PNR_NO) is True
    assert http.calls[0][1] == {"pnrNo": PNR_NO, "jrnyCnt": "1", "rsvChgTno": "0"}


def test_cancel_failure(session, http):
    http.queue(result("FAIL", "취소할 수 없습니다"))
    with pytest.raises(SRTResponseError):
        ReservationWorkflow(session).cancel(PNR_NO)
