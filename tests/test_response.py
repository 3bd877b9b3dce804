import json

import pytest

from srtrail.errors import SRTError, SRTResponseError
from srtrail.response import SRTResponseData

from .payloads import result


def test_success_envelope():
    parser = SRTResponseData(json.dumps(result("SUCC", "정상처리되었습니다")))
    assert parser.success() is True
    assert parser.message() == "정상처리되었습니다"


def test_fail_envelope_exposes_message():
    parser = SRTResponseData(result("FAIL", "잔여석없음"))
    assert parser.success() is False
    assert parser.message() == "잔여석없음"


def test_missing_message_is_empty_string():
    parser = SRTResponseData({"resultMap": [{"strResult": "SUCC"}]})
    assert parser.message() == ""


def test_missing_status_raises():
    parser = SRTResponseData({"resultMap": [{"msgTxt": "?"}]})
    with pytest.raises(SRTResponseError):
        parser.success()


def test_unknown_status_raises():
    parser = SRTResponseData(result("WAIT"))
    with pytest.raises(SRTResponseError, match="WAIT"):
        parser.success()


def test_error_code_pair_fails_immediately():
    with pytest.raises(SRTResponseError, match=r"\[E001\]: 세션 만료"):
        SRTResponseData({"ErrorCode": "E001", "ErrorMsg": "세션 만료"})


def test_neither_status_nor_error_code_raises_protocol_error():
    with pytest.raises(SRTError) as excinfo:
        SRTResponseData({"outDataSets": {}})
    assert not isinstance(excinfo.value, SRTResponseError)


@pytest.mark.parametrize("body", [
    {"resultMap": {"strResult": "SUCC"}},
    {"resultMap": ["SUCC"]},
    {"resultMap": []},
    {"resultMap": None},
])
def test_malformed_result_map_raises_protocol_error(body):
    with pytest.raises(SRTError, match="Unexpected case") as excinfo:
        SRTResponseData(body)
    assert not isinstance(excinfo.value, SRTResponseError)


def test_non_json_body_raises_protocol_error():
    with pytest.raises(SRTError):
        SRTResponseData("<html>maintenance</html>")


def test_get_all_returns_copy():
    parser = SRTResponseData(result(reservListMap=[{"pnrNo": "1"}]))
    payload = parser.get_all()
    payload["extra"] = True
    assert "extra" not in parser.get_all()
    assert parser.get_status()["strResult"] == "SUCC"
