"""Базовый адаптер платформы."""
import json
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from umbot.core.app_context import AppContext

if TYPE_CHECKING:
    from umbot.controller import BotController


class BasePlatform(ABC):
    """
    Адаптер платформы.

    Жизненный цикл одного запроса:
        1. init(query, controller) разбирает вебхук и заполняет контроллер;
        2. контроллер обрабатывает команду пользователя;
        3. get_context() собирает ответ платформе из состояния контроллера;
        4. deliver(context) доставляет его.

    Платформы с ответом в теле вебхука (Алиса, Маруся, SmartApp) возвращают
    собранный ответ из deliver() как есть. Платформы, где ответ
    отправляется отдельным запросом к API (VK, Telegram, Viber),
    отправляют его в deliver() и возвращают 'ok'.

    Attributes
    ----------
    error : str | None
        Текст последней ошибки обработки запроса.
    time_start : float
        Момент начала обработки (time.monotonic()).
    is_used_local_storage : bool
        Данные пользователя хранятся на стороне платформы.
    send_in_init : Any
        Готовый ответ, сформированный уже в init() (ping, confirmation).
    """

    def __init__(self, app_context: AppContext) -> None:
        self.app_context = app_context
        self.controller: "BotController | None" = None
        self.error: str | None = None
        self.is_used_local_storage = False
        self.send_in_init: Any = None
        self.time_start = time.monotonic()

    @staticmethod
    def _parse_query(query: str | dict[str, Any] | None) -> dict[str, Any] | None:
        if not query:
            return None
        if isinstance(query, str):
            return json.loads(query)
        return dict(query)

    def _init_tts(self) -> None:
        """Подставляет звуки в tts голосового ответа."""
        sound = self.controller.sound
        if sound.sounds or sound.is_used_standard_sound:
            if self.controller.tts is None:
                self.controller.tts = self.controller.text
            self.controller.tts = sound.get_sounds(self.controller.tts)

    def get_processing_time(self) -> int:
        """Время обработки запроса в миллисекундах."""
        return int((time.monotonic() - self.time_start) * 1000)

    def get_error(self) -> str | None:
        return self.error

    @abstractmethod
    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        """
        Разбирает запрос и заполняет контроллер.

        Returns
        -------
        bool
            False, если запрос пустой или некорректный (текст в self.error).
        """

    @abstractmethod
    def get_context(self) -> Any:
        """Собирает ответ платформе."""

    def get_rating_context(self) -> Any:
        """Ответ с запросом оценки. По умолчанию обычный ответ."""
        return self.get_context()

    def deliver(self, context: Any) -> Any:
        """Доставляет ответ. Для вебхук платформ ответ возвращается как есть."""
        return context

    def is_local_storage(self) -> bool:
        return False

    def get_local_storage(self) -> Any:
        return None

    def set_local_storage(self, data: Any) -> None:
        pass
