import pytest

from srtrail.session import Session
from srtrail.srt import SRT

from .payloads import FakeHttp, login_success


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def session(http):
    http.queue(login_success())
    session = Session("010-1234-5678", "password", http=http)
    session.login()
    http.calls.clear()
    return session


@pytest.fixture
def srt(http):
    http.queue(login_success())
    client = SRT("010-1234-5678", "password", http=http)
    http.calls.clear()
    return client
