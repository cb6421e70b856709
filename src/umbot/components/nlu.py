"""Разбор NLU платформы и поиск сущностей в тексте."""
import re
from typing import Any

from umbot.utils.text import is_say_false, is_say_true

LINK_PATTERN = re.compile(r"https?://[^\s]+", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"([\d\-() ]{4,}\d)|((?:\+|\d)[\d\-() ]{9,}\d)")
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^.\s]+\.\S+")


def _find_all(pattern: re.Pattern, query: str | None) -> dict[str, Any]:
    result = [match.group(0) for match in pattern.finditer(query or "")]
    if result:
        return {"status": True, "result": result}
    return {"status": False, "result": None}


class Nlu:
    """
    Обёртка над NLU из запроса платформы.

    Ожидаемая структура (как у Алисы):
        {
            "thisUser": {"username", "first_name", "last_name"},
            "entities": [{"type": "YANDEX.FIO", "tokens": {...}, "value": ...}],
            "intents": {"name": {"slots": {...}}}
        }
    """

    T_FIO = "YANDEX.FIO"
    T_GEO = "YANDEX.GEO"
    T_DATETIME = "YANDEX.DATETIME"
    T_NUMBER = "YANDEX.NUMBER"

    T_INTENT_CONFIRM = "YANDEX.CONFIRM"
    T_INTENT_REJECT = "YANDEX.REJECT"
    T_INTENT_HELP = "YANDEX.HELP"
    T_INTENT_REPEAT = "YANDEX.REPEAT"

    def __init__(self) -> None:
        self._nlu: dict[str, Any] = {}

    def set_nlu(self, nlu: dict[str, Any] | None) -> None:
        self._nlu = dict(nlu or {})

    def _get_data(self, entity_type: str) -> list[Any] | None:
        data = [
            entity.get("value")
            for entity in self._nlu.get("entities") or []
            if entity.get("type") == entity_type
        ]
        return data or None

    def _get_result(self, entity_type: str) -> dict[str, Any]:
        data = self._get_data(entity_type)
        return {"status": data is not None, "result": data}

    def get_user_name(self) -> dict[str, Any] | None:
        """Имя пользователя (Telegram, VK): {username, first_name, last_name}."""
        return self._nlu.get("thisUser")

    def get_fio(self) -> dict[str, Any]:
        return self._get_result(self.T_FIO)

    def get_geo(self) -> dict[str, Any]:
        return self._get_result(self.T_GEO)

    def get_date_time(self) -> dict[str, Any]:
        return self._get_result(self.T_DATETIME)

    def get_number(self) -> dict[str, Any]:
        return self._get_result(self.T_NUMBER)

    def get_intents(self) -> dict[str, Any] | None:
        return self._nlu.get("intents") or None

    def get_intent(self, intent_name: str) -> dict[str, Any] | None:
        intents = self.get_intents()
        if intents:
            return intents.get(intent_name)
        return None

    def is_intent_confirm(self, user_command: str = "") -> bool:
        """Согласие: интент YANDEX.CONFIRM или слова 'да', 'конечно'..."""
        if self.get_intent(self.T_INTENT_CONFIRM) is not None:
            return True
        return bool(user_command) and is_say_true(user_command)

    def is_intent_reject(self, user_command: str = "") -> bool:
        if self.get_intent(self.T_INTENT_REJECT) is not None:
            return True
        return bool(user_command) and is_say_false(user_command)

    def is_intent_help(self) -> bool:
        return self.get_intent(self.T_INTENT_HELP) is not None

    def is_intent_repeat(self) -> bool:
        return self.get_intent(self.T_INTENT_REPEAT) is not None

    @staticmethod
    def get_link(query: str) -> dict[str, Any]:
        return _find_all(LINK_PATTERN, query)

    @staticmethod
    def get_phone(query: str) -> dict[str, Any]:
        return _find_all(PHONE_PATTERN, query)

    @staticmethod
    def get_e_mail(query: str) -> dict[str, Any]:
        return _find_all(EMAIL_PATTERN, query)
