"""Кэш загруженных изображений: путь к файлу -> идентификатор на платформе."""
from typing import Any

from umbot.api.marusia import MarusiaRequest
from umbot.api.telegram import TelegramRequest
from umbot.api.vk import VkRequest
from umbot.api.yandex import YandexImageRequest
from umbot.core.app_context import AppContext
from umbot.models.db.model import Model
from umbot.utils.text import is_url


class ImageTokens(Model):
    """
    Идентификаторы изображений, загруженных на платформы.

    Запись ищется по (path, type). Если изображение ещё не загружено,
    get_token() загружает его через API платформы и сохраняет результат.
    """

    TABLE_NAME = "ImageTokens"

    T_ALISA = 0
    T_VK = 1
    T_TELEGRAM = 2
    T_MARUSIA = 3

    def __init__(self, app_context: AppContext) -> None:
        super().__init__(app_context)
        self.type = self.T_ALISA
        self.caption: str | None = None

    def rules(self) -> list[dict[str, Any]]:
        return [
            {"name": ["image_token", "path"], "type": "string", "max": 150},
            {"name": ["type"], "type": "integer"},
        ]

    def attribute_labels(self) -> dict[str, str]:
        return {
            "image_token": "ID",
            "path": "Image path",
            "type": "Type",
        }

    def _store(self, token: str | None) -> str | None:
        if not token:
            return None
        self.image_token = token
        if self.save(True):
            return self.image_token
        return None

    def get_token(self, user_id: str | int | None = None) -> str | None:
        """
        Возвращает идентификатор изображения, загружая его при необходимости.

        Parameters
        ----------
        user_id : str | int, optional
            Получатель для платформ, где загрузка идёт через отправку
            сообщения (Telegram) или требует peer_id (VK). По умолчанию
            params.user_id.

        Returns
        -------
        str | None
            Идентификатор или None, если загрузить изображение не удалось.
        """
        recipient = user_id or self.app_context.params.user_id
        where = {"path": self.path, "type": self.type}

        if self.type == self.T_ALISA:
            if self.where_one(where):
                return self.image_token
            y_image = YandexImageRequest(self.app_context)
            if is_url(self.path):
                res = y_image.download_image_url(self.path)
            else:
                res = y_image.download_image_file(self.path)
            return self._store(res["id"] if res else None)

        if self.type == self.T_VK:
            if self.where_one(where):
                return self.image_token
            vk_api = VkRequest(self.app_context)
            server = vk_api.photos_get_messages_upload_server(recipient)
            if not server:
                return None
            upload = vk_api.upload(server["upload_url"], self.path)
            if not upload:
                return None
            photo = vk_api.photos_save_messages_photo(upload["photo"], upload["server"], upload["hash"])
            if isinstance(photo, list):
                photo = photo[0] if photo else None
            if not photo:
                return None
            return self._store(f"photo{photo['owner_id']}_{photo['id']}")

        if self.type == self.T_MARUSIA:
            if self.where_one(where):
                return self.image_token
            marusia_api = MarusiaRequest(self.app_context)
            link = marusia_api.marusia_get_picture_upload_link()
            if not link:
                return None
            upload = marusia_api.upload(link["picture_upload_link"], self.path)
            if not upload:
                return None
            picture = marusia_api.marusia_save_picture(upload["photo"], upload["server"], upload["hash"])
            if not picture:
                return None
            return self._store(str(picture["photo_id"]))

        if self.type == self.T_TELEGRAM:
            telegram_api = TelegramRequest(self.app_context)
            if self.where_one(where):
                telegram_api.send_photo(recipient, self.image_token, self.caption)
                return self.image_token
            photo = telegram_api.send_photo(recipient, self.path, self.caption)
            sizes = (photo or {}).get("result", {}).get("photo")
            if not sizes:
                return None
            return self._store(sizes[-1].get("file_id"))

        return None
