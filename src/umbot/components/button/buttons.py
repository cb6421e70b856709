"""Коллекция кнопок и реестр форматтеров."""
import json
from typing import Any, Callable

from umbot.components.button.button import B_BTN, B_LINK, Button
from umbot.components.button.formatters import (
    AlisaButtonFormatter,
    SmartAppButtonFormatter,
    TelegramButtonFormatter,
    ViberButtonFormatter,
    VkButtonFormatter,
)
from umbot.core.app_context import AppContext
from umbot.protocols import ButtonFormatterProtocol

T_ALISA_BUTTONS = "alisa_btn"
T_ALISA_CARD_BUTTON = "alisa_card_btn"
T_VK_BUTTONS = "vk_btn"
T_TELEGRAM_BUTTONS = "telegram_btn"
T_VIBER_BUTTONS = "viber_btn"
T_SMARTAPP_BUTTONS = "smart-app_btn"
T_SMARTAPP_BUTTON_CARD = "smart-app_card_btn"
T_USER_APP_BUTTONS = "user_app_btn"

ButtonFormatterFactory = Callable[[], ButtonFormatterProtocol]

BUTTON_FORMATTERS: dict[str, ButtonFormatterFactory] = {
    T_ALISA_BUTTONS: lambda: AlisaButtonFormatter(is_card=False),
    T_ALISA_CARD_BUTTON: lambda: AlisaButtonFormatter(is_card=True),
    T_VK_BUTTONS: VkButtonFormatter,
    T_TELEGRAM_BUTTONS: TelegramButtonFormatter,
    T_VIBER_BUTTONS: ViberButtonFormatter,
    T_SMARTAPP_BUTTONS: lambda: SmartAppButtonFormatter(is_card=False),
    T_SMARTAPP_BUTTON_CARD: lambda: SmartAppButtonFormatter(is_card=True),
}


def register_button_formatter(button_type: str, factory: ButtonFormatterFactory) -> None:
    """Регистрирует форматтер кнопок (например, для user_app_btn)."""
    BUTTON_FORMATTERS[button_type] = factory


class Buttons:
    """
    Кнопки ответа.

    Кнопки добавляются через add_btn/add_link или сырыми списками btns и
    links (строка или {"title", "url", "payload", "options"}). При
    get_buttons() сырые списки переносятся в buttons, после чего весь
    набор передаётся форматтеру платформы кортежем.
    """

    def __init__(self, app_context: AppContext) -> None:
        self.app_context = app_context
        self.buttons: list[Button] = []
        self.btns: list[str | dict[str, Any]] = []
        self.links: list[str | dict[str, Any]] = []
        self.type = T_ALISA_BUTTONS

    def clear(self) -> None:
        self.buttons = []
        self.btns = []
        self.links = []

    def _add(
        self,
        title: str | None,
        url: str | None,
        payload: Any,
        hide: bool,
        options: dict[str, Any] | None = None
    ) -> "Buttons":
        button = Button.create(
            title,
            url,
            payload,
            hide,
            options,
            utm_text=self.app_context.params.utm_text,
        )
        if button is not None:
            self.buttons.append(button)
        return self

    def add_btn(
        self,
        title: str | None,
        url: str | None = "",
        payload: Any = "",
        options: dict[str, Any] | None = None
    ) -> "Buttons":
        """Добавляет кнопку-подсказку."""
        return self._add(title, url, payload, B_BTN, options)

    def add_link(
        self,
        title: str | None,
        url: str | None = "",
        payload: Any = "",
        options: dict[str, Any] | None = None
    ) -> "Buttons":
        """Добавляет кнопку-ссылку."""
        return self._add(title, url, payload, B_LINK, options)

    def _add_raw(self, button: str | dict[str, Any], hide: bool) -> None:
        if isinstance(button, str):
            self._add(button, "", "", hide)
            return
        self._add(
            button.get("title", button.get("text")),
            button.get("url", ""),
            button.get("payload"),
            hide,
            button.get("options"),
        )

    def _processing(self) -> None:
        for button in self.btns:
            self._add_raw(button, B_BTN)
        for button in self.links:
            self._add_raw(button, B_LINK)
        self.btns = []
        self.links = []

    def get_buttons(
        self,
        button_type: str | None = None,
        user_formatter: ButtonFormatterProtocol | None = None
    ) -> Any:
        """
        Возвращает кнопки в формате платформы.

        Parameters
        ----------
        button_type : str, optional
            Ключ форматтера в реестре. По умолчанию self.type.
        user_formatter : ButtonFormatterProtocol, optional
            Форматтер для T_USER_APP_BUTTONS.

        Returns
        -------
        Any
            Результат форматтера или None для неизвестного типа.
        """
        self._processing()
        button_type = button_type or self.type
        if button_type == T_USER_APP_BUTTONS and user_formatter is not None:
            formatter = user_formatter
        else:
            factory = BUTTON_FORMATTERS.get(button_type)
            if factory is None:
                return None
            formatter = factory()
        return formatter.get_buttons(tuple(self.buttons))

    def get_buttons_json(
        self,
        button_type: str | None = None,
        user_formatter: ButtonFormatterProtocol | None = None
    ) -> str | None:
        buttons = self.get_buttons(button_type, user_formatter)
        if buttons:
            return json.dumps(buttons, ensure_ascii=False)
        return None
