from .errors import (
    SRTDuplicateError,
    SRTError,
    SRTLoginError,
    SRTNotLoggedInError,
    SRTResponseError,
)
from .passenger import (
    Adult,
    Child,
    Disability1To3,
    Disability4To6,
    Passenger,
    PassengerType,
    Senior,
)
from .payment import PaymentProcessor
from .reservation import SRTReservation, SRTTicket
from .response import SRTResponseData
from .search import TrainSearchEngine
from .session import Session
from .srt import SRT
from .train import SeatType, SRTTrain
from .workflow import ReservationWorkflow

__all__ = [
    "SRT",
    "Session",
    "TrainSearchEngine",
    "ReservationWorkflow",
    "PaymentProcessor",
    "SRTResponseData",
    "SRTTrain",
    "SRTReservation",
    "SRTTicket",
    "SeatType",
    "Passenger",
    "PassengerType",
    "Adult",
    "Child",
    "Senior",
    "Disability1To3",
    "Disability4To6",
    "SRTError",
    "SRTLoginError",
    "SRTResponseError",
    "SRTDuplicateError",
    "SRTNotLoggedInError",
]
