import json
import logging
from typing import Any, Dict, Optional

import requests

from .constants import (
    API_ENDPOINTS,
    DEFAULT_HEADERS,
    EMAIL_REGEX,
    LOGIN_TYPE,
    PHONE_NUMBER_REGEX,
)
from .errors import SRTError, SRTLoginError, SRTNotLoggedInError, SRTResponseError

logger = logging.getLogger(__name__)

LOGIN_FAIL_NO_USER = "존재하지않는 회원입니다"
LOGIN_FAIL_PASSWORD = "비밀번호 오류"
LOGIN_FAIL_IP_BLOCKED = "Your IP Address Blocked"


class Session:
    """Authenticated SRT session.

    Owns the cookie-persisting HTTP session, the credentials and the login
    state. Every other component receives a ``Session`` and posts through it.
    A ``Session`` is not safe to share between concurrent call chains.

    Args:
        srt_id (str): SRT account ID (membership number, email, or phone)
        srt_pw (str): SRT account password
        verbose (bool): Whether to log raw response bodies
        http: Transport with a ``requests.Session`` compatible ``post()``
    """

    def __init__(
        self,
        srt_id: str,
        srt_pw: str,
        verbose: bool = False,
        http: Optional[Any] = None,
    ) -> None:
        if http is None:
            http = requests.session()
            http.headers.update(DEFAULT_HEADERS)
        self._http = http
        self.srt_id = srt_id
        self.srt_pw = srt_pw
        self.verbose = verbose
        self.is_login = False
        self.membership_number = None
        self.membership_name = None
        self.phone_number = None

    def _log(self, msg: str) -> None:
        if self.verbose:
            logger.debug("[*] %s", msg)

    @staticmethod
    def classify(srt_id: str) -> str:
        if EMAIL_REGEX.match(srt_id):
            return LOGIN_TYPE["EMAIL"]
        if PHONE_NUMBER_REGEX.match(srt_id):
            return LOGIN_TYPE["PHONE_NUMBER"]
        return LOGIN_TYPE["MEMBERSHIP_ID"]

    @property
    def login_type(self) -> str:
        return self.classify(self.srt_id)

    def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None):
        r = self._http.post(url=API_ENDPOINTS[endpoint], data=data)
        self._log(r.text)
        return r

    def require_login(self) -> None:
        if not self.is_login:
            raise SRTNotLoggedInError()

    def _clear(self) -> None:
        self.is_login = False
        self.membership_number = None
        self.membership_name = None
        self.phone_number = None

    def login(self, srt_id: Optional[str] = None, srt_pw: Optional[str] = None) -> bool:
        """Login to SRT server.

        Args:
            srt_id: Optional override of the session's srt_id
            srt_pw: Optional override of the session's srt_pw

        Returns:
            bool: Whether login was successful

        Raises:
            SRTLoginError: If the server rejects the credentials
            SRTError: If the login reply cannot be understood
        """
        self.srt_id = srt_id or self.srt_id
        self.srt_pw = srt_pw or self.srt_pw

        login_type = self.login_type
        login_id = self.srt_id
        if login_type == LOGIN_TYPE["PHONE_NUMBER"]:
            login_id = login_id.replace("-", "")

        data = {
            "auto": "Y",
            "check": "Y",
            "page": "menu",
            "deviceKey": "-",
            "customerYn": "",
            "login_referer": API_ENDPOINTS["main"],
            "srchDvCd": login_type,
            "srchDvNm": login_id,
            "hmpgPwdCphd": self.srt_pw,
        }

        r = self.post("login", data)
        text = r.text

        if LOGIN_FAIL_NO_USER in text or LOGIN_FAIL_PASSWORD in text:
            self._clear()
            raise SRTLoginError(self._login_message(text))
        if LOGIN_FAIL_IP_BLOCKED in text:
            self._clear()
            raise SRTLoginError(text.strip())

        try:
            user_info = json.loads(text)["userMap"]
            membership_number = user_info["MB_CRD_NO"]
        except (TypeError, ValueError, KeyError) as ex:
            self._clear()
            raise SRTError(f"Unexpected login response [{text}]") from ex

        if not membership_number:
            self._clear()
            raise SRTError(f"Membership number is not given [{text}]")

        self.is_login = True
        self.membership_number = membership_number
        self.membership_name = user_info.get("CUST_NM")
        self.phone_number = user_info.get("MBL_PHONE")

        logger.info("로그인 성공: %s (멤버십번호: %s)", self.membership_name, self.membership_number)
        return True

    @staticmethod
    def _login_message(text: str) -> str:
        try:
            return json.loads(text).get("MSG") or text.strip()
        except (ValueError, AttributeError):
            return text.strip()

    def logout(self) -> bool:
        """Logout from SRT server.

        Returns:
            bool: Whether logout was successful

        Raises:
            SRTResponseError: If server returns error
        """
        if not self.is_login:
            return True

        r = self.post("logout")
        if not 200 <= r.status_code < 300:
            raise SRTResponseError(r.text)

        self._clear()
        logger.info("정상적으로 로그아웃 되었습니다.")
        return True
