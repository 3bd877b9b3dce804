from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .constants import STATION_NAME, TRAIN_NAME


class SeatType(Enum):
    GENERAL_FIRST = 1  # 일반실 우선
    GENERAL_ONLY = 2   # 일반실만
    SPECIAL_FIRST = 3  # 특실 우선
    SPECIAL_ONLY = 4   # 특실만


@dataclass(frozen=True)
class SRTTrain:
    """One scheduled service as returned by the schedule search."""

    train_code: str
    train_name: str
    train_number: str

    dep_date: str
    dep_time: str
    dep_station_code: str
    dep_station_name: str
    dep_station_run_order: str
    dep_station_constitution_order: str

    arr_date: str
    arr_time: str
    arr_station_code: str
    arr_station_name: str
    arr_station_run_order: str
    arr_station_constitution_order: str

    general_seat_state: str
    special_seat_state: str
    reserve_wait_possible_name: str
    # -1: 예약대기 없음, 9: 예약대기 가능, 0: 매진, -2: 예약대기 불가능
    reserve_wait_possible_code: int

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> "SRTTrain":
        train_code = data["stlbTrnClsfCd"]
        return cls(
            train_code=train_code,
            train_name=TRAIN_NAME.get(train_code, train_code),
            train_number=data["trnNo"],
            dep_date=data["dptDt"],
            dep_time=data["dptTm"],
            dep_station_code=data["dptRsStnCd"],
            dep_station_name=STATION_NAME.get(data["dptRsStnCd"], data["dptRsStnCd"]),
            dep_station_run_order=data["dptStnRunOrdr"],
            dep_station_constitution_order=data["dptStnConsOrdr"],
            arr_date=data["arvDt"],
            arr_time=data["arvTm"],
            arr_station_code=data["arvRsStnCd"],
            arr_station_name=STATION_NAME.get(data["arvRsStnCd"], data["arvRsStnCd"]),
            arr_station_run_order=data["arvStnRunOrdr"],
            arr_station_constitution_order=data["arvStnConsOrdr"],
            general_seat_state=data["gnrmRsvPsbStr"],
            special_seat_state=data["sprmRsvPsbStr"],
            reserve_wait_possible_name=data.get("rsvWaitPsbCdNm", ""),
            reserve_wait_possible_code=int(data.get("rsvWaitPsbCd") or -1),
        )

    def __str__(self):
        return self.dump()

    def dump(self):
        dep_hour, dep_min = self.dep_time[0:2], self.dep_time[2:4]
        arr_hour, arr_min = self.arr_time[0:2], self.arr_time[2:4]
        month, day = self.dep_date[4:6], self.dep_date[6:8]

        msg = (
            f"[{self.train_name} {self.train_number}] "
            f"{month}월 {day}일, "
            f"{self.dep_station_name}~{self.arr_station_name}"
            f"({dep_hour}:{dep_min}~{arr_hour}:{arr_min}) "
            f"특실 {self.special_seat_state}, 일반실 {self.general_seat_state}"
        )
        if self.reserve_wait_possible_code >= 0:
            msg += f", 예약대기 {self.reserve_wait_possible_name}"
        return msg

    def general_seat_available(self) -> bool:
        return "예약가능" in self.general_seat_state

    def special_seat_available(self) -> bool:
        return "예약가능" in self.special_seat_state

    def reserve_standby_available(self) -> bool:
        return self.reserve_wait_possible_code == 9

    def seat_available(self) -> bool:
        return self.general_seat_available() or self.special_seat_available()


def is_special_seat(train: SRTTrain, option: SeatType) -> bool:
    """Decide between special and general class for a reservation request."""
    if option is SeatType.GENERAL_ONLY:
        return False
    if option is SeatType.SPECIAL_ONLY:
        return True
    if option is SeatType.GENERAL_FIRST:
        return not train.general_seat_available()
    if option is SeatType.SPECIAL_FIRST:
        return train.special_seat_available()
    raise ValueError(f"Unknown seat type: {option!r}")
