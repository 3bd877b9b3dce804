import asyncio
import logging
from typing import Awaitable, Callable, Optional

import inquirer
import keyring
import telegram

logger = logging.getLogger(__name__)

KEYRING_SERVICE = "telegram"


def set_telegram() -> bool:
    token = keyring.get_password(KEYRING_SERVICE, "token") or ""
    chat_id = keyring.get_password(KEYRING_SERVICE, "chat_id") or ""

    telegram_info = inquirer.prompt([
        inquirer.Text("token", message="텔레그램 token (Enter: 완료, Ctrl-C: 취소)", default=token),
        inquirer.Text("chat_id", message="텔레그램 chat_id (Enter: 완료, Ctrl-C: 취소)", default=chat_id),
    ])
    if not telegram_info:
        return False

    keyring.set_password(KEYRING_SERVICE, "token", telegram_info["token"])
    keyring.set_password(KEYRING_SERVICE, "chat_id", telegram_info["chat_id"])

    try:
        notify("[SRTRAIL] 텔레그램 설정 완료")
    except telegram.error.TelegramError as err:
        print(err)
        if keyring.get_password(KEYRING_SERVICE, "ok"):
            keyring.delete_password(KEYRING_SERVICE, "ok")
        return False

    keyring.set_password(KEYRING_SERVICE, "ok", "1")
    return True


def get_telegram() -> Optional[Callable[[str], Awaitable[None]]]:
    token = keyring.get_password(KEYRING_SERVICE, "token")
    chat_id = keyring.get_password(KEYRING_SERVICE, "chat_id")
    if not (token and chat_id):
        return None

    async def tgprintf(text: str) -> None:
        bot = telegram.Bot(token=token)
        async with bot:
            await bot.send_message(chat_id=chat_id, text=text)

    return tgprintf


def notify(text: str) -> None:
    tgprintf = get_telegram()
    if tgprintf is None:
        logger.debug("텔레그램 미설정, 알림 생략")
        return
    asyncio.run(tgprintf(text))
