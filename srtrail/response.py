import json
from typing import Any, Dict, Union

from .errors import SRTError, SRTResponseError


class SRTResponseData:
    """Envelope around a single SRT API reply.

    The reply is either a JSON string or an already decoded mapping. A
    ``resultMap`` block carries the status row; a bare ``ErrorCode`` /
    ``ErrorMsg`` pair is treated as an immediate failure.
    """

    STATUS_SUCCESS = "SUCC"
    STATUS_FAIL = "FAIL"

    def __init__(self, response: Union[str, bytes, Dict[str, Any]]) -> None:
        self._json = self._load(response)
        self._status = self._parse()

    def __str__(self) -> str:
        return json.dumps(self._json, ensure_ascii=False)

    dump = __str__

    @staticmethod
    def _load(response) -> Dict[str, Any]:
        if isinstance(response, dict):
            return response
        try:
            data = json.loads(response)
        except (TypeError, ValueError) as ex:
            raise SRTError(f"Malformed response [{response!r}]") from ex
        if not isinstance(data, dict):
            raise SRTError(f"Unexpected case [{data}]")
        return data

    def _parse(self) -> Dict[str, Any]:
        if "resultMap" in self._json:
            result_map = self._json["resultMap"]
            if not isinstance(result_map, list) or not result_map or not isinstance(result_map[0], dict):
                raise SRTError(f"Unexpected case [{self._json}]")
            return result_map[0]

        if "ErrorCode" in self._json and "ErrorMsg" in self._json:
            raise SRTResponseError(
                f'Undefined result status "[{self._json["ErrorCode"]}]: {self._json["ErrorMsg"]}"'
            )
        raise SRTError(f"Unexpected case [{self._json}]")

    def success(self) -> bool:
        result = self._status.get("strResult")
        if result is None:
            raise SRTResponseError("Response status is not given")

        if result == self.STATUS_SUCCESS:
            return True
        if result == self.STATUS_FAIL:
            return False

        raise SRTResponseError(f'Undefined result status "{result}"')

    def message(self) -> str:
        return self._status.get("msgTxt") or ""

    def get_all(self) -> Dict[str, Any]:
        return self._json.copy()

    def get_status(self) -> Dict[str, Any]:
        return self._status.copy()
