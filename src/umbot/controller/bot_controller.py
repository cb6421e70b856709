"""Контроллер с логикой навыка."""
from abc import ABC, abstractmethod
from typing import Any

from umbot.components import Buttons, Card, Nlu, Sound
from umbot.core.app_context import (
    AppContext,
    HELP_INTENT_NAME,
    T_ALISA,
    T_MARUSIA,
    WELCOME_INTENT_NAME,
)
from umbot.utils.text import get_text, is_say_text


class BotController(ABC):
    """
    Состояние одного запроса и логика навыка.

    Адаптер платформы заполняет входные поля (user_id, user_command, nlu,
    ...), run() определяет интент и вызывает action(), после чего адаптер
    собирает ответ из выходных полей (text, tts, buttons, card, sound,
    is_end).

    Attributes
    ----------
    user_data : dict | None
        Сохраняемые данные пользователя. Между запросами хранятся в
        UsersData или в хранилище платформы.
    state : Any
        Состояние, пришедшее от платформы (Алиса, Маруся).
    is_send : bool
        Отправлять ответ (VK, Telegram, Viber).
    is_send_rating : bool
        Вместо ответа запросить оценку (SmartApp).
    """

    def __init__(self, app_context: AppContext) -> None:
        self.app_context = app_context
        self.buttons = Buttons(app_context)
        self.card = Card(app_context)
        self.nlu = Nlu()
        self.sound = Sound(app_context)

        self.text = ""
        self.tts: str | None = None
        self.user_id: str | int | None = None
        self.user_token: str | None = None
        self.user_meta: Any = None
        self.message_id: int | str | None = None
        self.user_command: str | None = None
        self.original_user_command: str | None = None
        self.payload: Any = None
        self.user_data: dict[str, Any] | None = None
        self.is_auth = False
        self.is_auth_success: bool | None = None
        self.state: Any = None
        self.is_screen = True
        self.is_end = False
        self.is_send = True
        self.request_object: Any = None
        self.old_intent_name: str | None = None
        self.this_intent_name: str | None = None
        self.emotion: str | None = None
        self.appeal: str | None = None
        self.user_events: dict[str, Any] | None = None
        self.is_send_rating = False

    def _intents(self) -> list[Any]:
        return self.app_context.params.intents

    def get_intent(self, text: str | None) -> str | None:
        """Имя первого интента, слоты которого встречаются в тексте."""
        for intent in self._intents():
            if is_say_text(intent.slots, text, intent.is_pattern):
                return intent.name
        return None

    def _run_command(self) -> tuple[bool, str | None]:
        """
        Ищет зарегистрированную команду.

        Returns
        -------
        tuple[bool, str | None]
            (найдена ли команда, имя интента для action()).
            У команд с обработчиком интент не передаётся.
        """
        for name, command in self.app_context.commands.items():
            if not is_say_text(list(command.slots), self.user_command, command.is_pattern):
                continue
            if command.cb is None:
                return True, name
            result = command.cb(self.user_command, self)
            if isinstance(result, str):
                self.text = result
            return True, None
        return False, None

    @abstractmethod
    def action(self, intent_name: str | None, is_command: bool = False) -> None:
        """
        Логика навыка.

        Parameters
        ----------
        intent_name : str | None
            Найденный интент или None.
        is_command : bool, optional
            Запрос уже обработан зарегистрированной командой.
        """

    def run(self) -> None:
        is_command, intent = self._run_command()
        if not is_command:
            intent = self.get_intent(self.user_command)
            if intent is None and self.message_id == 0:
                intent = WELCOME_INTENT_NAME
            params = self.app_context.params
            if intent == WELCOME_INTENT_NAME:
                self.text = get_text(params.welcome_text or "")
            elif intent == HELP_INTENT_NAME:
                self.text = get_text(params.help_text or "")
        self.action(intent, is_command)
        if self.tts is None and self.app_context.app_type in (T_ALISA, T_MARUSIA):
            self.tts = self.text


class BaseBotController(BotController):
    """Контроллер по умолчанию: приветствие, помощь и ответ на непонятный запрос."""

    def action(self, intent_name: str | None, is_command: bool = False) -> None:
        if is_command:
            return
        params = self.app_context.params
        if intent_name == WELCOME_INTENT_NAME:
            self.text = get_text(params.welcome_text or "")
        elif intent_name == HELP_INTENT_NAME:
            self.text = get_text(params.help_text or "")
        else:
            self.text = get_text(params.empty_text or "")
