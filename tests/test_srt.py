import pytest

from srtrail.errors import SRTNotLoggedInError
from srtrail.passenger import Adult
from srtrail.srt import SRT

from .payloads import login_success, reservation_rows, result, ticket_row, train_row


def test_auto_login(http):
    http.queue(login_success())
    srt = SRT("010-1234-5678", "password", http=http)
    assert srt.is_login
    assert srt.membership_number == "1234567890"


def test_no_auto_login(http):
    srt = SRT("010-1234-5678", "password", auto_login=False, http=http)
    assert not srt.is_login
    assert http.calls == []


def test_search_reserve_cancel_flow(srt, http):
    train, pay = reservation_rows("42")
    http.queue(result(outDataSets={"dsOutput1": [train_row()]}))
    http.queue(result(outDataSets={"dsOutput1": []}))
    http.queue(result(reservListMap=[{"pnrNo": "42"}]))
    http.queue(result(trainListMap=[train], payListMap=[pay]))
    http.queue(result(trainListMap=[ticket_row()]))
    http.queue(result())

    [found] = srt.search_train("수서", "부산", "20240101", passengers=[Adult(2)])
    reservation = srt.reserve(found, passengers=[Adult(2)])

    assert reservation.reservation_number == "42"
    assert srt.cancel(reservation) is True
    assert http.calls[-1][1]["pnrNo"] == "42"


def test_logout_then_calls_fail(srt, http):
    http.queue({})
    srt.logout()

    with pytest.raises(SRTNotLoggedInError, match="Not logged in"):
        srt.get_reservations()
