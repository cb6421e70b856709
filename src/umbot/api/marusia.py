"""Клиент API Маруси (загрузка картинок и аудио в навык)."""
import json
from typing import Any

from umbot.api.vk import VkRequest


class MarusiaRequest(VkRequest):
    """Методы marusia.* работают через VK API с токеном навыка Маруси."""

    TOKEN_NAME = "marusia_token"
    LOG_NAME = "MarusiaApi"

    def marusia_get_picture_upload_link(self) -> Any:
        return self.call("marusia.getPictureUploadLink")

    def marusia_save_picture(self, photo: str, server: str | int, hash_: str) -> Any:
        return self.call("marusia.savePicture", {"photo": photo, "server": server, "hash": hash_})

    def marusia_get_pictures(self) -> Any:
        return self.call("marusia.getPictures")

    def marusia_get_audio_upload_link(self) -> Any:
        return self.call("marusia.getAudioUploadLink")

    def marusia_create_audio(self, audio_meta: dict[str, Any]) -> Any:
        return self.call("marusia.createAudio", {"audio_meta": json.dumps(audio_meta, ensure_ascii=False)})
