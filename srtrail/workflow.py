import logging
from typing import List, Optional, Union

from .constants import RESERVE_JOBID, SRT_TRAIN_CODE, TRAIN_NAME
from .errors import SRTError, SRTResponseError
from .passenger import Adult, Passenger
from .reservation import SRTReservation, SRTTicket
from .response import SRTResponseData
from .session import Session
from .train import SeatType, SRTTrain, is_special_seat

logger = logging.getLogger(__name__)


def _reservation_number(reservation: Union[SRTReservation, str, int]) -> str:
    return str(getattr(reservation, "reservation_number", reservation))


class ReservationWorkflow:
    """Creates, verifies, lists and cancels reservations for one session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _post(self, endpoint: str, data=None) -> SRTResponseData:
        r = self._session.post(endpoint, data)
        parser = SRTResponseData(r.text)
        if not parser.success():
            raise SRTResponseError(parser.message())
        return parser

    def reserve(
        self,
        train: SRTTrain,
        passengers: Optional[List[Passenger]] = None,
        option: SeatType = SeatType.GENERAL_FIRST,
        window_seat: Optional[bool] = None,
    ) -> SRTReservation:
        """Reserve a train.

        Args:
            train: Train to reserve
            passengers: List of passengers (default: 1 adult)
            option: Seat type preference
            window_seat: True for window, False for aisle, None for either

        Returns:
            SRTReservation object for the reservation

        Examples:
            >>> trains = srt.search_train("수서", "부산", "20240101", "000000")
            >>> srt.reserve(trains[0])
        """
        return self._reserve(
            RESERVE_JOBID["PERSONAL"],
            train,
            passengers,
            option,
            window_seat=window_seat,
        )

    def reserve_standby(
        self,
        train: SRTTrain,
        passengers: Optional[List[Passenger]] = None,
        option: SeatType = SeatType.GENERAL_FIRST,
        mblPhone: Optional[str] = None,
    ) -> SRTReservation:
        """Request waitlist reservation.

        Args:
            train: Train to waitlist
            passengers: List of passengers (default: 1 adult)
            option: Seat type preference
            mblPhone: Phone number for notifications

        Returns:
            SRTReservation object for the waitlist
        """
        return self._reserve(
            RESERVE_JOBID["STANDBY"],
            train,
            passengers,
            option,
            mblPhone=mblPhone,
        )

    def _reserve(
        self,
        jobid: str,
        train: SRTTrain,
        passengers: Optional[List[Passenger]] = None,
        option: SeatType = SeatType.GENERAL_FIRST,
        mblPhone: Optional[str] = None,
        window_seat: Optional[bool] = None,
    ) -> SRTReservation:
        """Common reservation request handler.

        The reservation number in the creation reply is only trusted once the
        same number shows up in the reservation listing.

        Raises:
            SRTNotLoggedInError: If not logged in
            TypeError: If train is not SRTTrain
            ValueError: If train is not SRT or no passengers are given
            SRTResponseError: If the server rejects the reservation
            SRTError: If reservation not found after creation
        """
        self._session.require_login()

        if not isinstance(train, SRTTrain):
            raise TypeError('"train" must be SRTTrain instance')

        if train.train_code != SRT_TRAIN_CODE:
            raise ValueError(f'Expected "{TRAIN_NAME[SRT_TRAIN_CODE]}" train, got {train.train_name}')

        passengers = Passenger.combine(passengers or [Adult()])
        if not passengers:
            raise ValueError("At least one passenger is required")
        special_seat = is_special_seat(train, option)

        data = {
            "jobId": jobid,
            "jrnyCnt": "1",
            "jrnyTpCd": "11",
            "jrnySqno1": "001",
            "stndFlg": "N",
            "trnGpCd1": "300",
            "trnGpCd": "109",
            "grpDv": "0",
            "rtnDv": "0",
            "stlbTrnClsfCd1": train.train_code,
            "dptRsStnCd1": train.dep_station_code,
            "dptRsStnCdNm1": train.dep_station_name,
            "arvRsStnCd1": train.arr_station_code,
            "arvRsStnCdNm1": train.arr_station_name,
            "dptDt1": train.dep_date,
            "dptTm1": train.dep_time,
            "arvTm1": train.arr_time,
            "trnNo1": f"{int(train.train_number):05d}",
            "runDt1": train.dep_date,
            "dptStnConsOrdr1": train.dep_station_constitution_order,
            "arvStnConsOrdr1": train.arr_station_constitution_order,
            "dptStnRunOrdr1": train.dep_station_run_order,
            "arvStnRunOrdr1": train.arr_station_run_order,
        }

        if jobid == RESERVE_JOBID["PERSONAL"]:
            data["reserveType"] = "11"
            data.update(Passenger.get_passenger_dict(
                passengers,
                special_seat=special_seat,
                window_seat=window_seat,
            ))
        else:
            data.update(Passenger.get_count_dict(passengers))
            data["psrmClCd1"] = "2" if special_seat else "1"
            if mblPhone:
                data["mblPhone"] = mblPhone

        parser = self._post("reserve", data)

        try:
            reservation_number = parser.get_all()["reservListMap"][0]["pnrNo"]
        except (KeyError, IndexError, TypeError) as ex:
            raise SRTError(f"Reservation number is not given [{parser}]") from ex

        for reservation in self.get_reservations():
            if str(reservation.reservation_number) == str(reservation_number):
                logger.info("예약 완료: %s", reservation)
                return reservation

        raise SRTError("Ticket not found: check reservation status")

    def reserve_standby_option_settings(
        self,
        reservation: Union[SRTReservation, str, int],
        isAgreeSMS: bool,
        isAgreeClassChange: bool,
        telNo: Optional[str] = None,
    ) -> bool:
        """Configure waitlist options.

        Only the HTTP status is checked; the reply body is not decoded, so a
        True result does not prove the options were applied.

        Returns:
            bool: Whether the server answered with 200
        """
        self._session.require_login()

        data = {
            "pnrNo": _reservation_number(reservation),
            "psrmClChgFlg": "Y" if isAgreeClassChange else "N",
            "smsSndFlg": "Y" if isAgreeSMS else "N",
            "telNo": telNo if isAgreeSMS and telNo else "",
        }

        r = self._session.post("standby_option", data)
        return r.status_code == 200

    def get_reservations(self, paid_only: bool = False) -> List[SRTReservation]:
        """Get all reservations.

        Args:
            paid_only: Whether to only return paid reservations

        Returns:
            List of SRTReservation objects

        Raises:
            SRTNotLoggedInError: If not logged in
            SRTResponseError: If server returns error
            SRTError: If train and payment lists do not pair up
        """
        self._session.require_login()

        parser = self._post("tickets", {"pageNo": "0"})
        trains = parser.get_all().get("trainListMap") or []
        pays = parser.get_all().get("payListMap") or []

        if len(trains) != len(pays):
            raise SRTError(
                f"Reservation list mismatch: {len(trains)} trains, {len(pays)} payments"
            )

        return [
            SRTReservation(train, pay, self.ticket_info(train["pnrNo"]))
            for train, pay in zip(trains, pays)
            if not paid_only or pay.get("stlFlg") != "N"
        ]

    def ticket_info(self, reservation: Union[SRTReservation, str, int]) -> List[SRTTicket]:
        """Get seat tickets of one reservation.

        Raises:
            SRTNotLoggedInError: If not logged in
            SRTResponseError: If server returns error
        """
        self._session.require_login()

        parser = self._post(
            "ticket_info",
            {"pnrNo": _reservation_number(reservation), "jrnySqno": "1"},
        )
        return [SRTTicket(ticket) for ticket in parser.get_all().get("trainListMap") or []]

    def cancel(self, reservation: Union[SRTReservation, str, int]) -> bool:
        """Cancel a reservation.

        Returns:
            bool: True once the server accepts the cancellation

        Raises:
            SRTNotLoggedInError: If not logged in
            SRTResponseError: If server returns error
        """
        self._session.require_login()

        reservation_number = _reservation_number(reservation)
        data = {
            "pnrNo": reservation_number,
            "jrnyCnt": "1",
            "rsvChgTno": "0",
        }

        self._post("cancel", data)
        logger.info("예약 취소: %s", reservation_number)
        return True
