import json
import logging
from datetime import datetime

from .constants import CARD_TYPE
from .errors import SRTError, SRTResponseError
from .reservation import SRTReservation
from .session import Session

logger = logging.getLogger(__name__)


class PaymentProcessor:
    """Card settlement for reservations made on a :class:`Session`."""

    STATUS_FAIL = "FAIL"

    def __init__(self, session: Session) -> None:
        self._session = session

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
        """Pay for a reservation with credit card.

        The payment endpoint answers with its own result block under
        ``outDataSets.dsOutput0`` instead of the usual ``resultMap``.

        Args:
            reservation: Reservation to pay for
            number: Card number (no hyphens)
            password: First 2 digits of card password
            validation_number: Birth date (personal) or business number (corporate)
            expire_date: Card expiry date (YYMM)
            installment: Number of installments (0,2-12,24)
            card_type: "personal" (J) or "corporate" (S)

        Returns:
            bool: Whether payment was successful

        Examples:
            >>> reservation = srt.reserve(train)
            >>> srt.pay_with_card(reservation, "1234567890123456", "12", "981204", "2309")

        Raises:
            SRTNotLoggedInError: If not logged in
            ValueError: If card_type is unknown
            SRTResponseError: If payment fails
            SRTError: If the payment reply cannot be understood
        """
        self._session.require_login()

        if card_type not in CARD_TYPE:
            raise ValueError(f"Unknown card type: {card_type}")

        data = {
            "stlDmnDt": datetime.now().strftime("%Y%m%d"),
            "mbCrdNo": self._session.membership_number,
            "stlMnsSqno1": "1",
            "ststlGridcnt": "1",
            "totNewStlAmt": reservation.total_cost,
            "athnDvCd1": CARD_TYPE[card_type],
            "vanPwd1": password,
            "crdVlidTrm1": expire_date,
            "stlMnsCd1": "02",  # 02: 신용카드
            "rsvChgTno": "0",
            "chgMcs": "0",
            "ismtMnthNum1": installment,
            "ctlDvCd": "3102",
            "cgPsId": "korail",
            "pnrNo": reservation.reservation_number,
            "totPrnb": reservation.seat_count,
            "mnsStlAmt1": reservation.total_cost,
            "crdInpWayCd1": "@",
            "athnVal1": validation_number,
            "stlCrCrdNo1": number,
            "jrnyCnt": "1",
            "strJobId": "3102",
            "inrecmnsGridcnt": "1",
            "dptTm": reservation.dep_time,
            "arvTm": reservation.arr_time,
            "dptStnConsOrdr2": "000000",
            "arvStnConsOrdr2": "000000",
            "trnGpCd": "300",
            "pageNo": "-",
            "rowCnt": "-",
            "pageUrl": "",
        }

        r = self._session.post("payment", data)

        try:
            result = json.loads(r.text)["outDataSets"]["dsOutput0"][0]
        except (TypeError, ValueError, KeyError, IndexError) as ex:
            raise SRTError(f"Unexpected payment response [{r.text}]") from ex

        if result.get("strResult") == self.STATUS_FAIL:
            raise SRTResponseError(result.get("msgTxt") or "")

        reservation.paid = True
        logger.info("결제 완료: %s", reservation.reservation_number)
        return True
