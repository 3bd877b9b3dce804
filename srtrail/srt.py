from typing import Any, List, Optional

from .passenger import Passenger
from .payment import PaymentProcessor
from .reservation import SRTReservation, SRTTicket
from .search import TrainSearchEngine
from .session import Session
from .train import SeatType, SRTTrain
from .workflow import ReservationWorkflow


class SRT:
    """SRT client class for interacting with the SRT train booking system.

    Args:
        srt_id (str): SRT account ID (membership number, email, or phone)
        srt_pw (str): SRT account password
        auto_login (bool): Whether to automatically login on initialization
        verbose (bool): Whether to log raw responses
        http: Optional transport replacing the default ``requests`` session

    Examples:
        >>> srt = SRT("1234567890", YOUR_PASSWORD) # with membership number
        >>> srt = SRT("def6488@gmail.com", YOUR_PASSWORD) # with email
        >>> srt = SRT("010-1234-xxxx", YOUR_PASSWORD) # with phone number
    """

    def __init__(
        self,
        srt_id: str,
        srt_pw: str,
        auto_login: bool = True,
        verbose: bool = False,
        http: Optional[Any] = None,
    ) -> None:
        self.session = Session(srt_id, srt_pw, verbose=verbose, http=http)
        self._search = TrainSearchEngine(self.session)
        self._workflow = ReservationWorkflow(self.session)
        self._payment = PaymentProcessor(self.session)

        if auto_login:
            self.login()

    @property
    def is_login(self) -> bool:
        return self.session.is_login

    @property
    def membership_number(self) -> Optional[str]:
        return self.session.membership_number

    @property
    def phone_number(self) -> Optional[str]:
        return self.session.phone_number

    def login(self, srt_id: Optional[str] = None, srt_pw: Optional[str] = None) -> bool:
        return self.session.login(srt_id, srt_pw)

    def logout(self) -> bool:
        return self.session.logout()

    def search_train(
        self,
        dep: str,
        arr: str,
        date: Optional[str] = None,
        time: str = "000000",
        time_limit: Optional[str] = None,
        available_only: bool = True,
        passengers: Optional[List[Passenger]] = None,
    ) -> List[SRTTrain]:
        return self._search.search_train(
            dep, arr, date, time, time_limit, available_only, passengers
        )

    def reserve(
        self,
        train: SRTTrain,
        passengers: Optional[List[Passenger]] = None,
        option: SeatType = SeatType.GENERAL_FIRST,
        window_seat: Optional[bool] = None,
    ) -> SRTReservation:
        return self._workflow.reserve(train, passengers, option, window_seat)

    def reserve_standby(
        self,
        train: SRTTrain,
        passengers: Optional[List[Passenger]] = None,
        option: SeatType = SeatType.GENERAL_FIRST,
        mblPhone: Optional[str] = None,
    ) -> SRTReservation:
        return self._workflow.reserve_standby(train, passengers, option, mblPhone)

    def reserve_standby_option_settings(
        self,
        reservation,
        isAgreeSMS: bool,
        isAgreeClassChange: bool,
        telNo: Optional[str] = None,
    ) -> bool:
        return self._workflow.reserve_standby_option_settings(
            reservation, isAgreeSMS, isAgreeClassChange, telNo
        )

    def get_reservations(self, paid_only: bool = False) -> List[SRTReservation]:
        return self._workflow.get_reservations(paid_only)

    def ticket_info(self, reservation) -> List[SRTTicket]:
        return self._workflow.ticket_info(reservation)

    def cancel(self, reservation) -> bool:
        return self._workflow.cancel(reservation)

    def pay_with_card(
        self,
        reservation: SRTReservation,
        number: str,
        password: str,
        validation_number: str,
        expire_date: str,
        installment: int = 0,
        card_type: str = "personal",
    ) -> bool:
        return self._payment.pay_with_card(
            reservation, number, password, validation_number,
            expire_date, installment, card_type
        )
