"""Кнопка: платформо-независимое описание."""
from dataclasses import dataclass, field
from typing import Any

from umbot.utils.text import is_url

B_LINK = False
B_BTN = True

VK_COLOR_PRIMARY = "primary"
VK_COLOR_SECONDARY = "secondary"
VK_COLOR_NEGATIVE = "negative"
VK_COLOR_POSITIVE = "positive"

VK_TYPE_TEXT = "text"
VK_TYPE_LINK = "open_link"
VK_TYPE_LOCATION = "location"
VK_TYPE_PAY = "vkpay"
VK_TYPE_APPS = "open_app"

DEFAULT_UTM = "utm_source=Yandex_Alisa&utm_medium=cpc&utm_campaign=phone"


def add_utm(url: str, utm_text: str | None) -> str:
    """
    Добавляет UTM метку к ссылке.

    utm_text=None добавляет метку по умолчанию, если в ссылке ещё нет
    utm_source. Пустая строка отключает метку.
    """
    separator = "&" if "?" in url else "?"
    if utm_text is None:
        if "utm_source" not in url:
            return f"{url}{separator}{DEFAULT_UTM}"
        return url
    if utm_text:
        return f"{url}{separator}{utm_text}"
    return url


@dataclass(frozen=True)
class Button:
    """
    Неизменяемая кнопка.

    Attributes
    ----------
    title : str
        Текст кнопки.
    url : str | None
        Ссылка (только корректный http(s) адрес).
    payload : Any
        Произвольные данные, которые вернутся при нажатии.
    hide : bool
        B_BTN - кнопка-подсказка, B_LINK - кнопка-ссылка.
    options : dict
        Платформо-специфичные параметры (цвет, группа VK, поля Viber).
    type : str | None
        Явный тип кнопки VK.
    """

    title: str
    url: str | None = None
    payload: Any = None
    hide: bool = B_LINK
    options: dict[str, Any] = field(default_factory=dict)
    type: str | None = None

    @classmethod
    def create(
        cls,
        title: str | None,
        url: str | None = "",
        payload: Any = None,
        hide: bool = B_LINK,
        options: dict[str, Any] | None = None,
        utm_text: str | None = None,
        type: str | None = None
    ) -> "Button | None":
        """Создаёт кнопку. Возвращает None, если title не задан."""
        if title is None:
            return None
        if url and is_url(url):
            url = add_utm(url, utm_text)
        else:
            url = None
        return cls(
            title=str(title),
            url=url,
            payload=payload,
            hide=hide,
            options=dict(options or {}),
            type=type,
        )
