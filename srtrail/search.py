import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from .constants import SRT_TRAIN_CODE, STATION_CODE
from .errors import SRTResponseError
from .passenger import Adult, Passenger
from .response import SRTResponseData
from .session import Session
from .train import SRTTrain

logger = logging.getLogger(__name__)


def _next_departure(dep_time: str) -> Optional[str]:
    """One second after ``dep_time`` (HHMMSS), or None past midnight."""
    current = datetime.strptime(dep_time, "%H%M%S")
    following = current + timedelta(seconds=1)
    if following.date() != current.date():
        return None
    return following.strftime("%H%M%S")


class TrainSearchEngine:
    """Paginated schedule search over an authenticated :class:`Session`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _query(self, data: Dict[str, Any]) -> SRTResponseData:
        data["dptTm1"] = data["dptTm"][:2] + "0000"
        r = self._session.post("search_schedule", data)
        return SRTResponseData(r.text)

    @staticmethod
    def _rows(parser: SRTResponseData) -> List[Dict[str, Any]]:
        out_data_sets = parser.get_all().get("outDataSets") or {}
        return list(out_data_sets.get("dsOutput1") or [])

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
        """Search for trains.

        Pages through the schedule by re-querying from one second after the
        last departure seen, until a page comes back empty or failed.

        Args:
            dep: Departure station name
            arr: Arrival station name
            date: Date in YYYYMMDD format (default: today)
            time: Time in HHMMSS format (default: 000000)
            time_limit: Only return trains departing at or before this time
            available_only: Only return trains with available seats
            passengers: List of passengers (default: 1 adult)

        Returns:
            List of matching SRTTrain objects in departure order

        Raises:
            SRTNotLoggedInError: If not logged in
            ValueError: If invalid station names or no passengers provided
            SRTResponseError: If the first page reports failure
        """
        self._session.require_login()

        if dep not in STATION_CODE:
            raise ValueError(f'Station "{dep}" not exists')
        if arr not in STATION_CODE:
            raise ValueError(f'Station "{arr}" not exists')

        date = date or datetime.now().strftime("%Y%m%d")
        time = time or "000000"
        passengers = Passenger.combine(passengers or [Adult()])
        if not passengers:
            raise ValueError("At least one passenger is required")

        data = {
            "chtnDvCd": "1",
            "dptDt": date,
            "dptTm": time,
            "dptDt1": date,
            "dptRsStnCd": STATION_CODE[dep],
            "arvRsStnCd": STATION_CODE[arr],
            "stlbTrnClsfCd": "05",
            "trnGpCd": "109",
            "trnNo": "",
            "psgNum": Passenger.total_count(passengers),
            "seatAttCd": "015",
            "arriveTime": "N",
            "tkDptDt": "",
            "tkDptTm": "",
            "tkTrnNo": "",
            "tkTripChgFlg": "",
            "dlayTnumAplFlg": "Y",
        }

        parser = self._query(data)
        if not parser.success():
            raise SRTResponseError(parser.message())

        page = self._rows(parser)
        rows = list(page)

        while page:
            next_time = _next_departure(page[-1]["dptTm"])
            if next_time is None:
                break

            data["dptTm"] = next_time
            parser = self._query(data)
            if not parser.success():
                break

            page = self._rows(parser)
            rows.extend(page)

        logger.info("%s~%s %s: %d개 열차 조회", dep, arr, date, len(rows))

        return [
            train for train in (
                SRTTrain.from_data(row) for row in rows
                if row["stlbTrnClsfCd"] == SRT_TRAIN_CODE
            )
            if (not available_only or train.seat_available()) and
               (not time_limit or train.dep_time <= time_limit)
        ]
