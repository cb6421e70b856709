"""Протоколы форматтеров кнопок, карточек и звуков."""
from typing import Protocol, runtime_checkable, Any, Sequence


@runtime_checkable
class ButtonFormatterProtocol(Protocol):
    """
    Преобразует кнопки в формат конкретной платформы.

    Форматтер не хранит состояние: список кнопок передаётся
    неизменяемым кортежем при каждом вызове.
    """

    def get_buttons(self, buttons: Sequence[Any]) -> Any:
        """
        Parameters
        ----------
        buttons : Sequence[Button]
            Кнопки в порядке добавления.

        Returns
        -------
        Any
            Структура платформы (dict, list) или None, если кнопок нет.
        """
        ...


@runtime_checkable
class CardFormatterProtocol(Protocol):
    """Преобразует карточку (CardData) в формат платформы."""

    def get_card(self, card: Any) -> Any:
        ...


@runtime_checkable
class SoundFormatterProtocol(Protocol):
    """Подставляет звуки в текст или отправляет их пользователю."""

    def get_sounds(self, sounds: Sequence[dict[str, Any]], text: str) -> Any:
        ...
