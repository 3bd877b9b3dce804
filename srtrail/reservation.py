from typing import Any, Dict, List, Optional

from .constants import STATION_NAME, TRAIN_NAME
from .passenger import PassengerType


def _amount(value) -> int:
    return int(value or 0)


class SRTTicket:
    SEAT_TYPE = {"1": "일반실", "2": "특실"}

    PASSENGER_TYPE = {kind.type_code: kind.label for kind in PassengerType}

    DISCOUNT_TYPE = {
        "000": "어른/청소년",
        "101": "탄력운임기준할인",
        "105": "자유석 할인",
        "106": "입석 할인",
        "107": "역방향석 할인",
        "108": "출입구석 할인",
        "109": "가족석 일반전환 할인",
        "111": "구간별 특정운임",
        "112": "열차별 특정운임",
        "113": "구간별 비율할인(기준)",
        "114": "열차별 비율할인(기준)",
        "121": "공항직결 수색연결운임",
        "131": "구간별 특별할인(기준)",
        "132": "열차별 특별할인(기준)",
        "133": "기본 특별할인(기준)",
        "191": "정차역 할인",
        "192": "매체 할인",
        "201": "어린이",
        "202": "동반유아 할인",
        "204": "경로",
        "205": "1~3급 장애인",
        "206": "4~6급 장애인",
    }

    def __init__(self, data: Dict[str, Any]) -> None:
        self.car = data.get("scarNo")
        self.seat = data.get("seatNo") or ""
        self.seat_type_code = data.get("psrmClCd")
        self.seat_type = self.SEAT_TYPE.get(self.seat_type_code, "")
        self.passenger_type_code = data.get("psgTpCd")
        self.passenger_type = self.PASSENGER_TYPE.get(self.passenger_type_code, "")
        self.discount_type_code = data.get("dcntKndCd")
        self.discount_type = self.DISCOUNT_TYPE.get(self.discount_type_code, "기타 할인")
        self.price = _amount(data.get("rcvdAmt"))
        self.original_price = _amount(data.get("stdrPrc"))
        self.discount = _amount(data.get("dcntPrc"))
        self.is_waiting = self.seat == ""

    def __str__(self) -> str:
        return self.dump()

    __repr__ = __str__

    def dump(self) -> str:
        passenger = self.passenger_type or self.discount_type
        if self.is_waiting:
            return (
                f"예약대기 ({self.seat_type}) {passenger}"
                f"[{self.price}원({self.discount}원 할인)]"
            )
        return (
            f"{self.car}호차 {self.seat} ({self.seat_type}) {passenger} "
            f"[{self.price}원({self.discount}원 할인)]"
        )


def _month_day(yyyymmdd: str) -> str:
    return f"{yyyymmdd[4:6]}월 {yyyymmdd[6:8]}일"


def _hhmm(hhmmss: str) -> str:
    return f"{hhmmss[:2]}:{hhmmss[2:4]}"


class SRTReservation:
    """A reservation as listed by the server, paired with its tickets.

    Built from two rows at the same position of the listing reply: ``train``
    from ``trainListMap`` carries the reservation number, cost and seat count,
    ``pay`` from ``payListMap`` carries the itinerary and the payment deadline.
    A reservation with no deadline that is not yet paid is a standby request.

    ``paid`` is the only field updated after construction, by card payment.
    """

    reservation_number: str
    total_cost: int
    seat_count: int

    train_code: str
    train_name: str
    train_number: str

    dep_date: str
    dep_time: str
    dep_station_code: str
    dep_station_name: str
    arr_time: str
    arr_station_code: str
    arr_station_name: str

    payment_date: Optional[str]
    payment_time: Optional[str]
    paid: bool
    is_running: bool

    def __init__(self, train: Dict[str, Any], pay: Dict[str, Any], tickets: List[SRTTicket]):
        self.reservation_number = train.get("pnrNo")
        self.total_cost = _amount(train.get("rcvdAmt"))
        self.seat_count = int(train.get("tkSpecNum") or train.get("seatNum") or len(tickets))
        # 발권 매수가 없으면 이미 운행 중인 열차
        self.is_running = "tkSpecNum" not in train

        self.train_code = pay.get("stlbTrnClsfCd")
        self.train_name = TRAIN_NAME.get(self.train_code, self.train_code)
        self.train_number = pay.get("trnNo")

        self.dep_date = pay.get("dptDt")
        self.dep_time = pay.get("dptTm")
        self.dep_station_code = pay.get("dptRsStnCd")
        self.dep_station_name = STATION_NAME.get(self.dep_station_code, self.dep_station_code)
        self.arr_time = pay.get("arvTm")
        self.arr_station_code = pay.get("arvRsStnCd")
        self.arr_station_name = STATION_NAME.get(self.arr_station_code, self.arr_station_code)

        self.payment_date = pay.get("iseLmtDt") or None
        self.payment_time = pay.get("iseLmtTm") or None
        self.paid = pay.get("stlFlg") == "Y"

        self._tickets = list(tickets)

    @property
    def is_waiting(self) -> bool:
        return not (self.paid or self.payment_date or self.payment_time)

    @property
    def tickets(self) -> List[SRTTicket]:
        return self._tickets

    def __str__(self) -> str:
        return self.dump()

    __repr__ = __str__

    def _status(self) -> str:
        if self.paid:
            return ""
        if self.is_waiting:
            return ", 예약대기"
        return f", 구입기한 {_month_day(self.payment_date)} {_hhmm(self.payment_time)}"

    def dump(self) -> str:
        parts = [
            f"[{self.train_name}] {_month_day(self.dep_date)}, ",
            f"{self.dep_station_name}~{self.arr_station_name}",
            f"({_hhmm(self.dep_time)}~{_hhmm(self.arr_time)}) ",
            f"{self.total_cost}원({self.seat_count}석)",
            self._status(),
        ]
        if self.is_running:
            parts.append(" (운행중)")
        return "".join(parts)
