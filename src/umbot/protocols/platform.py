"""Протокол адаптера платформы."""
from typing import Protocol, runtime_checkable, Any


@runtime_checkable
class PlatformProtocol(Protocol):
    """
    Адаптер платформы: разбирает входящий вебхук и формирует ответ.

    Примеры реализаций:
        - Alisa, Marusia, SmartApp (ответ возвращается в теле вебхука)
        - Vk, Telegram, Viber (ответ отправляется через API платформы)
    """

    send_in_init: Any
    is_used_local_storage: bool

    def init(self, query: str | dict[str, Any], controller: Any) -> bool:
        """
        Разбирает запрос и заполняет состояние контроллера.

        Returns
        -------
        bool
            False, если запрос некорректен (текст ошибки в get_error()).
        """
        ...

    def get_context(self) -> Any:
        """Формирует ответ платформе из состояния контроллера."""
        ...

    def get_rating_context(self) -> Any:
        ...

    def deliver(self, context: Any) -> Any:
        """Доставляет ответ и возвращает тело ответа на вебхук."""
        ...

    def get_error(self) -> str | None:
        ...

    def is_local_storage(self) -> bool:
        ...

    def get_local_storage(self) -> Any:
        ...

    def set_local_storage(self, data: Any) -> None:
        ...
