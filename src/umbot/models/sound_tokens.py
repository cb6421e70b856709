"""Кэш загруженных звуков: путь к файлу -> идентификатор на платформе."""
from typing import Any

from umbot.api.marusia import MarusiaRequest
from umbot.api.telegram import TelegramRequest
from umbot.api.vk import VkRequest
from umbot.api.yandex import YandexSoundRequest
from umbot.core.app_context import AppContext
from umbot.models.db.model import Model
from umbot.utils.text import is_url


class SoundTokens(Model):
    """Идентификаторы звуков, загруженных на платформы. Ключ поиска (path, type)."""

    TABLE_NAME = "SoundTokens"

    T_ALISA = 0
    T_VK = 1
    T_TELEGRAM = 2
    T_MARUSIA = 3

    def __init__(self, app_context: AppContext) -> None:
        super().__init__(app_context)
        self.type = self.T_ALISA

    def rules(self) -> list[dict[str, Any]]:
        return [
            {"name": ["sound_token", "path"], "type": "string", "max": 150},
            {"name": ["type"], "type": "integer"},
        ]

    def attribute_labels(self) -> dict[str, str]:
        return {
            "sound_token": "ID",
            "path": "Sound path",
            "type": "Type",
        }

    def _store(self, token: str | None) -> str | None:
        if not token:
            return None
        self.sound_token = token
        if isinstance(self.path, bytes):
            return self.sound_token
        if self.save(True):
            return self.sound_token
        return None

    def _find(self, where: dict[str, Any]) -> bool:
        if isinstance(self.path, bytes):
            return False
        return self.where_one(where)

    def get_token(self, user_id: str | int | None = None) -> str | None:
        """Возвращает идентификатор звука, загружая файл при необходимости."""
        # path может содержать сам аудиофайл (bytes), такие звуки не кэшируются
        recipient = user_id or self.app_context.params.user_id
        where = {"path": self.path, "type": self.type}

        if self.type == self.T_ALISA:
            if self._find(where):
                return self.sound_token
            if not self.path:
                return None
            if isinstance(self.path, str) and is_url(self.path):
                self.app_context.log_error("SoundTokens.get_token(): Нельзя отправить звук в навык для Алисы через url!")
                return None
            res = YandexSoundRequest(self.app_context).download_sound_file(self.path)
            return self._store(res["id"] if res else None)

        if self.type == self.T_VK:
            if self._find(where):
                return self.sound_token
            if not self.path:
                return None
            vk_api = VkRequest(self.app_context)
            server = vk_api.docs_get_messages_upload_server(recipient, "audio_message")
            if not server:
                return None
            upload = vk_api.upload(server["upload_url"], self.path)
            if not upload:
                return None
            doc = vk_api.docs_save(upload["file"], "Voice message")
            if isinstance(doc, list):
                doc = doc[0] if doc else None
            if isinstance(doc, dict) and doc.get("type") in doc:
                doc = doc[doc["type"]]
            if not doc:
                return None
            return self._store(f"doc{doc['owner_id']}_{doc['id']}")

        if self.type == self.T_TELEGRAM:
            telegram_api = TelegramRequest(self.app_context)
            if self._find(where):
                telegram_api.send_audio(recipient, self.sound_token)
                return self.sound_token
            if not self.path:
                return None
            sound = telegram_api.send_audio(recipient, self.path)
            audio = (sound or {}).get("result", {}).get("audio")
            if not audio:
                return None
            return self._store(audio.get("file_id"))

        if self.type == self.T_MARUSIA:
            if self._find(where):
                return self.sound_token
            if not self.path:
                return None
            marusia_api = MarusiaRequest(self.app_context)
            link = marusia_api.marusia_get_audio_upload_link()
            if not link:
                return None
            upload = marusia_api.upload(link["audio_upload_link"], self.path)
            if not upload:
                return None
            audio = marusia_api.marusia_create_audio(upload)
            if not audio:
                return None
            return self._store(str(audio["id"]))

        return None
