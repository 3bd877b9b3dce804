from enum import Enum
from typing import Dict, List, Optional

from .constants import WINDOW_SEAT


class PassengerType(Enum):
    """Passenger kinds with their display name and SRT fare-type code."""

    ADULT = ("어른/청소년", "1")
    DISABILITY_1_TO_3 = ("장애 1~3급", "2")
    DISABILITY_4_TO_6 = ("장애 4~6급", "3")
    SENIOR = ("경로", "4")
    CHILD = ("어린이", "5")

    def __init__(self, label: str, type_code: str):
        self.label = label
        self.type_code = type_code


class Passenger:
    """A number of passengers sharing one fare type.

    Passengers of the same kind add up; adding different kinds is an error.
    """

    def __init__(self, kind: PassengerType, count: int = 1):
        if not isinstance(kind, PassengerType):
            raise TypeError(f'"kind" must be PassengerType, got {kind!r}')
        if count < 0:
            raise ValueError(f"Passenger count must not be negative: {count}")
        self.kind = kind
        self.count = count

    @property
    def name(self) -> str:
        return self.kind.label

    @property
    def type_code(self) -> str:
        return self.kind.type_code

    def __repr__(self) -> str:
        return f"{self.name} {self.count}명"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Passenger):
            return NotImplemented
        return self.kind is other.kind and self.count == other.count

    def __hash__(self):
        return hash((self.kind, self.count))

    def __add__(self, other: "Passenger") -> "Passenger":
        if not isinstance(other, Passenger) or other.kind is not self.kind:
            raise TypeError("Passenger types must be the same")
        return Passenger.of(self.kind, self.count + other.count)

    @staticmethod
    def of(kind: PassengerType, count: int = 1) -> "Passenger":
        return _PASSENGER_BY_KIND[kind](count)

    @staticmethod
    def _check(passengers: List["Passenger"]) -> None:
        if not all(isinstance(p, Passenger) for p in passengers):
            raise TypeError("All passengers must be based on Passenger")

    @classmethod
    def combine(cls, passengers: List["Passenger"]) -> List["Passenger"]:
        """Merge passengers of the same kind, dropping zero counts.

        Kinds keep the order in which they first appear.
        """
        cls._check(passengers)

        merged: Dict[PassengerType, Passenger] = {}
        for passenger in passengers:
            kind = passenger.kind
            merged[kind] = merged.get(kind, Passenger.of(kind, 0)) + passenger

        return [p for p in merged.values() if p.count > 0]

    @classmethod
    def total_count(cls, passengers: List["Passenger"]) -> str:
        cls._check(passengers)
        return str(sum(p.count for p in passengers))

    @classmethod
    def get_count_dict(cls, passengers: List["Passenger"]) -> Dict[str, str]:
        combined = cls.combine(passengers)
        data = {
            "totPrnb": cls.total_count(combined),
            "psgGridcnt": str(len(combined)),
        }
        for i, passenger in enumerate(combined, start=1):
            data[f"psgTpCd{i}"] = passenger.type_code
            data[f"psgInfoPerPrnb{i}"] = str(passenger.count)
        return data

    @classmethod
    def get_passenger_dict(
        cls,
        passengers: List["Passenger"],
        special_seat: bool = False,
        window_seat: Optional[bool] = None,
    ) -> Dict[str, str]:
        """Passenger counts plus per-passenger seat preferences."""
        data = cls.get_count_dict(passengers)
        for i in range(1, int(data["psgGridcnt"]) + 1):
            data.update({
                f"locSeatAttCd{i}": WINDOW_SEAT.get(window_seat, "000"),
                # '015': 일반, '021': 휠체어
                f"rqSeatAttCd{i}": "015",
                # '009': 정방향
                f"dirSeatAttCd{i}": "009",
                f"smkSeatAttCd{i}": "000",
                f"etcSeatAttCd{i}": "000",
                # '1': 일반실, '2': 특실
                f"psrmClCd{i}": "2" if special_seat else "1",
            })
        return data


class Adult(Passenger):
    def __init__(self, count: int = 1):
        super().__init__(PassengerType.ADULT, count)


class Child(Passenger):
    def __init__(self, count: int = 1):
        super().__init__(PassengerType.CHILD, count)


class Senior(Passenger):
    def __init__(self, count: int = 1):
        super().__init__(PassengerType.SENIOR, count)


class Disability1To3(Passenger):
    def __init__(self, count: int = 1):
        super().__init__(PassengerType.DISABILITY_1_TO_3, count)


class Disability4To6(Passenger):
    def __init__(self, count: int = 1):
        super().__init__(PassengerType.DISABILITY_4_TO_6, count)


_PASSENGER_BY_KIND = {
    PassengerType.ADULT: Adult,
    PassengerType.CHILD: Child,
    PassengerType.SENIOR: Senior,
    PassengerType.DISABILITY_1_TO_3: Disability1To3,
    PassengerType.DISABILITY_4_TO_6: Disability4To6,
}
