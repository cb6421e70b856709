"""Изображение для карточек."""
from typing import Any

from umbot.components.button import Buttons
from umbot.core.app_context import AppContext
from umbot.utils.files import is_file
from umbot.utils.text import is_url


def init_button(button: str | dict[str, Any], buttons: Buttons) -> None:
    """Добавляет кнопку, заданную строкой или словарём, в набор кнопок."""
    if isinstance(button, str):
        buttons.add_btn(button)
    else:
        buttons.add_btn(
            button.get("title") or button.get("text"),
            button.get("url"),
            button.get("payload"),
        )


class Image:
    """
    Изображение карточки.

    Ссылка или путь к существующему файлу сохраняется в image_dir
    (идентификатор будет получен загрузкой), иное значение считается
    готовым идентификатором image_token.
    """

    def __init__(
        self,
        app_context: AppContext,
        image: str | None = None,
        title: str = "",
        desc: str = " ",
        button: str | dict[str, Any] | None = None
    ) -> None:
        self.app_context = app_context
        self.button = Buttons(app_context)
        self.title = title
        self.desc = desc
        self.image_token: str | None = None
        self.image_dir: str | None = None
        self.is_token = False
        # оформление SmartApp: title_typeface, desc_text_color, ...
        self.params: dict[str, Any] = {}
        if image is not None or title:
            self.init(image, title, desc, button)

    def init(
        self,
        image: str | None,
        title: str,
        desc: str = " ",
        button: str | dict[str, Any] | None = None
    ) -> bool:
        """Заполняет изображение. Возвращает False при пустом заголовке."""
        if self.is_token:
            self.image_token = image
        elif image and (is_url(image) or is_file(image)):
            self.image_dir = image
            self.image_token = None
        else:
            self.image_token = image

        if not title:
            return False
        self.title = title
        self.desc = desc or " "
        if button:
            init_button(button, self.button)
        return True
