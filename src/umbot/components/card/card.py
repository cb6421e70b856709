"""Карточка с изображениями."""
import json
from dataclasses import dataclass
from typing import Any, Callable

from umbot.components.button import Buttons
from umbot.components.card.formatters import (
    AlisaCardFormatter,
    MarusiaCardFormatter,
    SmartAppCardFormatter,
    TelegramCardFormatter,
    ViberCardFormatter,
    VkCardFormatter,
)
from umbot.components.image import Image
from umbot.core.app_context import (
    AppContext,
    T_ALISA,
    T_MARUSIA,
    T_SMARTAPP,
    T_TELEGRAM,
    T_USER_APP,
    T_VIBER,
    T_VK,
)
from umbot.protocols import CardFormatterProtocol


@dataclass(frozen=True)
class CardData:
    """Снимок карточки, передаваемый форматтеру."""
    title: str | None
    desc: str | None
    images: tuple[Image, ...]
    button: Buttons
    is_one: bool = False
    is_used_gallery: bool = False
    user_id: str | int | None = None


CardFormatterFactory = Callable[[AppContext], CardFormatterProtocol]

CARD_FORMATTERS: dict[str, CardFormatterFactory] = {
    T_ALISA: AlisaCardFormatter,
    T_MARUSIA: MarusiaCardFormatter,
    T_VK: VkCardFormatter,
    T_TELEGRAM: TelegramCardFormatter,
    T_VIBER: ViberCardFormatter,
    T_SMARTAPP: SmartAppCardFormatter,
}


def register_card_formatter(app_type: str, factory: CardFormatterFactory) -> None:
    CARD_FORMATTERS[app_type] = factory


class Card:
    """
    Карточка ответа: заголовок, изображения и общая кнопка.

    Attributes
    ----------
    is_one : bool
        Показать только первое изображение.
    is_used_gallery : bool
        Использовать галерею (Алиса).
    template : Any
        Готовая структура карточки. Если задана, возвращается как есть.
    """

    def __init__(self, app_context: AppContext) -> None:
        self.app_context = app_context
        self.title: str | None = None
        self.desc: str | None = None
        self.images: list[Image] = []
        self.button = Buttons(app_context)
        self.is_one = False
        self.is_used_gallery = False
        self.template: Any = None

    def clear(self) -> None:
        self.images = []

    def add(
        self,
        image: str | None,
        title: str,
        desc: str = " ",
        button: str | dict[str, Any] | None = None
    ) -> bool:
        """Добавляет изображение. False, если заголовок пустой."""
        img = Image(self.app_context)
        if img.init(image, title, desc, button):
            self.images.append(img)
            return True
        return False

    def get_cards(
        self,
        user_formatter: CardFormatterProtocol | None = None,
        user_id: str | int | None = None
    ) -> Any:
        """
        Возвращает карточку в формате текущей платформы.

        Parameters
        ----------
        user_formatter : CardFormatterProtocol, optional
            Форматтер для платформы user_application.
        user_id : str | int, optional
            Получатель изображений на платформах, где они отправляются
            отдельными сообщениями (Telegram).
        """
        if self.template:
            return self.template
        app_type = self.app_context.app_type
        if app_type == T_USER_APP and user_formatter is not None:
            formatter = user_formatter
        else:
            factory = CARD_FORMATTERS.get(app_type)
            if factory is None:
                return []
            formatter = factory(self.app_context)
        card = CardData(
            title=self.title,
            desc=self.desc,
            images=tuple(self.images),
            button=self.button,
            is_one=self.is_one,
            is_used_gallery=self.is_used_gallery,
            user_id=user_id,
        )
        return formatter.get_card(card)

    def get_cards_json(self, user_formatter: CardFormatterProtocol | None = None) -> str:
        return json.dumps(self.get_cards(user_formatter), ensure_ascii=False)
