import logging
import time
from datetime import datetime, timedelta
from random import gammavariate
from typing import List, Optional

import click
import inquirer
import keyring
from requests.exceptions import ConnectionError
from termcolor import colored

from .constants import STATION_CODE
from .errors import SRTError
from .notify import notify, set_telegram
from .passenger import Adult, Child, Disability1To3, Disability4To6, Passenger, Senior
from .reservation import SRTReservation
from .srt import SRT
from .train import SeatType, SRTTrain

KEYRING_SERVICE = "SRT"

STATIONS = list(STATION_CODE)
DEFAULT_DEPARTURE = "수서"
DEFAULT_ARRIVAL = "동대구"

PASSENGER_CLASSES = {
    "adult": ("어른/청소년", Adult),
    "child": ("어린이", Child),
    "senior": ("경로우대", Senior),
    "disability1to3": ("1~3급 장애인", Disability1To3),
    "disability4to6": ("4~6급 장애인", Disability4To6),
}

SEAT_TYPE_CHOICES = [
    ("일반실 우선", SeatType.GENERAL_FIRST),
    ("일반실만", SeatType.GENERAL_ONLY),
    ("특실 우선", SeatType.SPECIAL_FIRST),
    ("특실만", SeatType.SPECIAL_ONLY),
]

# 예약 간격 (평균 간격 (초) = SHAPE * SCALE)
RESERVE_INTERVAL_SHAPE = 5
RESERVE_INTERVAL_SCALE = 0.25

# 재시도로 넘길 서버 메시지
RETRYABLE_MESSAGES = (
    "잔여석없음",
    "사용자가 많아 접속이 원활하지 않습니다",
    "예약대기 접수가 마감되었습니다",
    "예약대기자한도수초과",
)

WAITING_BAR = ["|", "/", "-", "\\"]


def _warn(msg: str) -> None:
    print(colored(msg, "green", "on_red") + "\n")


@click.command()
@click.option("--debug", is_flag=True, help="Debug mode")
def srtrail(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
    )

    menu_choices = [
        ("예매 시작", 1),
        ("예매 확인/결제/취소", 2),
        ("로그인 설정", 3),
        ("텔레그램 설정", 4),
        ("카드 설정", 5),
        ("나가기", -1),
    ]

    actions = {
        1: lambda: reserve(debug),
        2: lambda: check_reservation(debug),
        3: lambda: set_login(debug),
        4: set_telegram,
        5: set_card,
    }

    while True:
        choice = inquirer.list_input(message="메뉴 선택 (↕:이동, Enter: 선택)", choices=menu_choices)
        if choice in (None, -1):
            break
        actions[choice]()


def set_login(debug=False) -> bool:
    login_info = inquirer.prompt([
        inquirer.Text(
            "id",
            message="SRT 계정 아이디 (멤버십 번호, 이메일, 전화번호)",
            default=keyring.get_password(KEYRING_SERVICE, "id") or "",
        ),
        inquirer.Password(
            "pass",
            message="SRT 계정 패스워드",
            default=keyring.get_password(KEYRING_SERVICE, "pass") or "",
        ),
    ])
    if not login_info:
        return False

    try:
        SRT(login_info["id"], login_info["pass"], verbose=debug)
    except SRTError as err:
        _warn(str(err))
        return False

    keyring.set_password(KEYRING_SERVICE, "id", login_info["id"])
    keyring.set_password(KEYRING_SERVICE, "pass", login_info["pass"])
    return True


def login(debug=False) -> Optional[SRT]:
    if keyring.get_password(KEYRING_SERVICE, "id") is None or keyring.get_password(KEYRING_SERVICE, "pass") is None:
        if not set_login(debug):
            return None

    return SRT(
        keyring.get_password(KEYRING_SERVICE, "id"),
        keyring.get_password(KEYRING_SERVICE, "pass"),
        verbose=debug,
    )


def set_card() -> None:
    card_info = inquirer.prompt([
        inquirer.Password("number", message="신용카드 번호 (하이픈 제외(-), Enter: 완료, Ctrl-C: 취소)",
                          default=keyring.get_password("card", "number") or ""),
        inquirer.Password("password", message="카드 비밀번호 앞 2자리 (Enter: 완료, Ctrl-C: 취소)",
                          default=keyring.get_password("card", "password") or ""),
        inquirer.Password("birthday", message="생년월일 (YYMMDD) / 사업자등록번호 (Enter: 완료, Ctrl-C: 취소)",
                          default=keyring.get_password("card", "birthday") or ""),
        inquirer.Password("expire", message="카드 유효기간 (YYMM, Enter: 완료, Ctrl-C: 취소)",
                          default=keyring.get_password("card", "expire") or ""),
    ])
    if card_info:
        for key, value in card_info.items():
            keyring.set_password("card", key, value)
        keyring.set_password("card", "ok", "1")


def pay_card(rail: SRT, reservation: SRTReservation) -> bool:
    if not keyring.get_password("card", "ok"):
        _warn("카드 정보가 없습니다")
        return False

    birthday = keyring.get_password("card", "birthday")
    return rail.pay_with_card(
        reservation,
        keyring.get_password("card", "number"),
        keyring.get_password("card", "password"),
        birthday,
        keyring.get_password("card", "expire"),
        0,
        "personal" if len(birthday) == 6 else "corporate",
    )


def _ask_itinerary() -> Optional[dict]:
    now = datetime.now() + timedelta(minutes=10)

    defaults = {
        "departure": keyring.get_password(KEYRING_SERVICE, "departure") or DEFAULT_DEPARTURE,
        "arrival": keyring.get_password(KEYRING_SERVICE, "arrival") or DEFAULT_ARRIVAL,
        "time": keyring.get_password(KEYRING_SERVICE, "time") or "120000",
    }

    date_choices = [((now + timedelta(days=i)).strftime("%Y/%m/%d %a"),
                     (now + timedelta(days=i)).strftime("%Y%m%d")) for i in range(28)]
    time_choices = [(f"{h:02d}", f"{h:02d}0000") for h in range(24)]

    questions = [
        inquirer.List("departure", message="출발역 선택 (↕:이동, Enter: 선택, Ctrl-C: 취소)",
                      choices=STATIONS, default=defaults["departure"]),
        inquirer.List("arrival", message="도착역 선택 (↕:이동, Enter: 선택, Ctrl-C: 취소)",
                      choices=STATIONS, default=defaults["arrival"]),
        inquirer.List("date", message="출발 날짜 선택 (↕:이동, Enter: 선택, Ctrl-C: 취소)",
                      choices=date_choices),
        inquirer.List("time", message="출발 시각 선택 (↕:이동, Enter: 선택, Ctrl-C: 취소)",
                      choices=time_choices, default=defaults["time"]),
    ]
    for key, (label, _) in PASSENGER_CLASSES.items():
        questions.append(inquirer.List(
            key, message=f"{label} 승객수 (↕:이동, Enter: 선택, Ctrl-C: 취소)",
            choices=range(10), default=int(keyring.get_password(KEYRING_SERVICE, key) or (1 if key == "adult" else 0)),
        ))

    info = inquirer.prompt(questions)
    if not info:
        _warn("예매 정보 입력 중 취소되었습니다")
        return None

    if info["departure"] == info["arrival"]:
        _warn("출발역과 도착역이 같습니다")
        return None

    for key, value in info.items():
        if key != "date":
            keyring.set_password(KEYRING_SERVICE, key, str(value))

    this_time = now.strftime("%H%M%S")
    if info["date"] == now.strftime("%Y%m%d") and info["time"] < this_time:
        info["time"] = this_time

    return info


def _passengers(info: dict) -> List[Passenger]:
    return Passenger.combine([cls(info[key]) for key, (_, cls) in PASSENGER_CLASSES.items()])


def _train_decorator(train: SRTTrain) -> str:
    return str(train).replace("예약가능", colored("가능", "green"))


def _is_seat_available(train: SRTTrain, seat_type: SeatType) -> bool:
    if not train.seat_available():
        return train.reserve_standby_available()
    if seat_type in (SeatType.GENERAL_FIRST, SeatType.SPECIAL_FIRST):
        return True
    if seat_type == SeatType.GENERAL_ONLY:
        return train.general_seat_available()
    return train.special_seat_available()


def _reserve_train(rail: SRT, train: SRTTrain, passengers: List[Passenger], seat_type: SeatType) -> SRTReservation:
    if train.seat_available() or not train.reserve_standby_available():
        return rail.reserve(train, passengers=passengers, option=seat_type)

    reservation = rail.reserve_standby(train, passengers=passengers, option=seat_type, mblPhone=rail.phone_number)
    if rail.phone_number:
        rail.reserve_standby_option_settings(
            reservation,
            isAgreeSMS=True,
            isAgreeClassChange=seat_type in (SeatType.GENERAL_FIRST, SeatType.SPECIAL_FIRST),
            telNo=rail.phone_number,
        )
    return reservation


def _announce_reservation(rail: SRT, reservation: SRTReservation, pay: bool) -> None:
    msg = f"{reservation}\n" + "\n".join(str(ticket) for ticket in reservation.tickets)
    print(colored(f"\n\n🎫 🎉 예매 성공!!! 🎉 🎫\n{msg}\n", "red", "on_green"))

    if pay and not reservation.is_waiting:
        # 결제 실패는 예매 루프로 전파하지 않음
        try:
            if pay_card(rail, reservation):
                print(colored("\n\n💳 ✨ 결제 성공!!! ✨ 💳\n\n", "green", "on_red"), end="")
                msg += "\n결제 완료"
        except SRTError as err:
            _warn(f"결제 실패: {err}")
            msg += f"\n결제 실패: {err}"

    notify(msg)


def _sleep():
    time.sleep(gammavariate(RESERVE_INTERVAL_SHAPE, RESERVE_INTERVAL_SCALE))


def _handle_error(ex, msg=None) -> bool:
    msg = msg or f"\nException: {ex}, Type: {type(ex).__name__}"
    print(msg)
    notify(msg)
    return inquirer.confirm(message="계속할까요", default=True)


def reserve(debug=False):
    rail = login(debug)
    if rail is None:
        return

    info = _ask_itinerary()
    if info is None:
        return

    passengers = _passengers(info)
    if not passengers:
        _warn("승객수는 0이 될 수 없습니다")
        return
    if int(Passenger.total_count(passengers)) >= 10:
        _warn("승객수는 10명을 초과할 수 없습니다")
        return
    print(*passengers)

    params = {
        "dep": info["departure"],
        "arr": info["arrival"],
        "date": info["date"],
        "time": info["time"],
        "available_only": False,
        "passengers": passengers,
    }

    trains = rail.search_train(**params)
    if not trains:
        _warn("예약 가능한 열차가 없습니다")
        return

    choice = inquirer.prompt([
        inquirer.Checkbox(
            "trains",
            message="예약할 열차 선택 (↕:이동, Space: 선택, Enter: 완료, Ctrl-A: 전체선택, Ctrl-R: 선택해제, Ctrl-C: 취소)",
            choices=[(_train_decorator(train), train.train_number) for train in trains],
        ),
        inquirer.List("type", message="선택 유형", choices=SEAT_TYPE_CHOICES),
        inquirer.Confirm("pay", message="예매 시 카드 결제", default=False),
    ])
    if choice is None or not choice["trains"]:
        _warn("선택한 열차가 없습니다!")
        return

    wanted = set(choice["trains"])
    seat_type = choice["type"]

    def _reserve(train):
        reservation = _reserve_train(rail, train, passengers, seat_type)
        _announce_reservation(rail, reservation, choice["pay"])

    i_try = 0
    start_time = time.time()
    while True:
        try:
            i_try += 1
            elapsed = int(time.time() - start_time)
            hours, remainder = divmod(elapsed, 3600)
            minutes, seconds = divmod(remainder, 60)
            print(f"\r예매 대기 중... {WAITING_BAR[i_try & 3]} {i_try:4d} ({hours:02d}:{minutes:02d}:{seconds:02d}) ",
                  end="", flush=True)

            for train in rail.search_train(**params):
                if train.train_number in wanted and _is_seat_available(train, seat_type):
                    _reserve(train)
                    return
            _sleep()

        except SRTError as ex:
            if "로그인 후 사용하십시오" in ex.msg:
                rail.login()
            elif not any(err in ex.msg for err in RETRYABLE_MESSAGES):
                if not _handle_error(ex):
                    return
            _sleep()

        except ConnectionError as ex:
            if not _handle_error(ex, "연결이 끊겼습니다"):
                return


def check_reservation(debug=False):
    rail = login(debug)
    if rail is None:
        return

    while True:
        reservations = rail.get_reservations()
        if not reservations:
            _warn("예약 내역이 없습니다")
            return

        for reservation in reservations:
            print(reservation)
            for ticket in reservation.tickets:
                print(f"  {ticket}")

        selected = inquirer.list_input(
            message="예약 선택 (Enter: 결정)",
            choices=[(str(r), i) for i, r in enumerate(reservations)] + [("돌아가기", -1)],
        )
        if selected in (None, -1):
            return

        reservation = reservations[selected]
        actions = [("예약 취소", "cancel"), ("돌아가기", None)]
        if not reservation.paid and not reservation.is_waiting:
            actions.insert(0, ("카드 결제", "pay"))

        action = inquirer.list_input(message=str(reservation), choices=actions)
        try:
            if action == "pay" and pay_card(rail, reservation):
                print(colored("결제 완료", "green"))
            elif action == "cancel" and inquirer.confirm(message=colored("정말 취소하시겠습니까", "green", "on_red")):
                rail.cancel(reservation)
                print(colored("취소 완료", "green"))
        except SRTError as err:
            _warn(str(err))
