"""Форматтеры звуков под конкретные платформы."""
import re
from typing import Any, Sequence

from umbot.api.telegram import TelegramRequest
from umbot.api.viber import ViberRequest
from umbot.api.yandex import YandexSpeechKit
from umbot.components.sound.standard import ALISA_STANDARD_SOUNDS, MARUSIA_STANDARD_SOUNDS
from umbot.core.app_context import AppContext
from umbot.models.sound_tokens import SoundTokens
from umbot.utils.files import is_file
from umbot.utils.text import get_text, is_url


def _is_resource(value: str) -> bool:
    return is_file(value) or is_url(value)


class BaseSoundFormatter:
    """Общие параметры форматтеров звуков."""

    TOKEN_TYPE: int | None = None

    def __init__(
        self,
        app_context: AppContext,
        user_id: str | int | None = None,
        is_used_standard_sound: bool = True
    ) -> None:
        self.app_context = app_context
        self.user_id = user_id or app_context.params.user_id
        self.is_used_standard_sound = is_used_standard_sound

    def _upload(self, path: str | bytes) -> str | None:
        model = SoundTokens(self.app_context)
        model.type = self.TOKEN_TYPE
        model.path = path
        return model.get_token(self.user_id)


class AlisaSoundFormatter(BaseSoundFormatter):
    """
    Подставляет звуки в tts Алисы.

    Ключ #key# в тексте заменяется тегом <speaker audio="...">. Файлы и
    ссылки предварительно загружаются в навык.
    """

    TOKEN_TYPE = SoundTokens.T_ALISA
    STANDARD_SOUNDS = ALISA_STANDARD_SOUNDS
    AUDIO_TAG = '<speaker audio="{}">'
    REMOVE_PATTERN = re.compile(
        r'(<speaker audio="([^"]+)">)|(<speaker effect="([^"]+)">)|(sil <\[\d*\]>)',
        re.IGNORECASE | re.MULTILINE,
    )

    @staticmethod
    def get_pause(milliseconds: int) -> str:
        """Пауза в tts."""
        return f"sil <[{milliseconds}]>"

    @classmethod
    def remove_sound(cls, text: str) -> str:
        """Убирает из текста звуки, эффекты и паузы."""
        return cls.REMOVE_PATTERN.sub("", text)

    def get_sounds(self, sounds: Sequence[dict[str, Any]], text: str) -> str:
        if self.is_used_standard_sound:
            sounds = [*self.STANDARD_SOUNDS, *sounds]
        for sound in sounds:
            if not isinstance(sound, dict) or not sound.get("key") or not sound.get("sounds"):
                continue
            value = get_text(sound["sounds"])
            if _is_resource(value):
                token = self._upload(value)
                if not token:
                    continue
                value = self.AUDIO_TAG.format(token)
            if value:
                text = text.replace(sound["key"], value, 1)
        return text


class MarusiaSoundFormatter(AlisaSoundFormatter):
    """Звуки Маруси. Загруженные файлы подставляются через audio_vk_id."""

    TOKEN_TYPE = SoundTokens.T_MARUSIA
    STANDARD_SOUNDS = MARUSIA_STANDARD_SOUNDS
    AUDIO_TAG = '<speaker audio_vk_id="{}">'
    REMOVE_PATTERN = re.compile(
        r'(<speaker audio="([^"]+)">)|(<speaker audio_vk_id="([^"]+)">)',
        re.IGNORECASE | re.MULTILINE,
    )


class TelegramSoundFormatter(BaseSoundFormatter):
    """
    Отправляет звуки и озвученный текст отдельными аудиосообщениями.

    Returns
    -------
    list[str]
        Идентификаторы отправленных файлов.
    """

    TOKEN_TYPE = SoundTokens.T_TELEGRAM

    def get_sounds(self, sounds: Sequence[dict[str, Any]], text: str = "") -> list[str]:
        data = []
        for sound in sounds:
            if not isinstance(sound, dict) or not sound.get("key") or not sound.get("sounds"):
                continue
            value = get_text(sound["sounds"])
            if _is_resource(value):
                value = self._upload(value)
            else:
                TelegramRequest(self.app_context).send_audio(self.user_id, value)
            if value:
                data.append(value)
        if text:
            content = YandexSpeechKit(self.app_context).get_tts(text)
            if content:
                TelegramRequest(self.app_context).send_audio(self.user_id, content)
        return data


class VkSoundFormatter(BaseSoundFormatter):
    """Звуки и озвученный текст как вложения-голосовые сообщения VK."""

    TOKEN_TYPE = SoundTokens.T_VK

    def get_sounds(self, sounds: Sequence[dict[str, Any]], text: str = "") -> list[str]:
        data = []
        for sound in sounds:
            if not isinstance(sound, dict) or not sound.get("key") or not sound.get("sounds"):
                continue
            value = get_text(sound["sounds"])
            if _is_resource(value):
                value = self._upload(value)
            if value:
                data.append(value)
        if text:
            content = YandexSpeechKit(self.app_context).get_tts(text)
            token = self._upload(content) if content else None
            if token:
                data.append(token)
        return data


class ViberSoundFormatter(BaseSoundFormatter):
    """Viber принимает только ссылки на файлы, они отправляются сообщением."""

    def get_sounds(self, sounds: Sequence[dict[str, Any]], text: str = "") -> list[str]:
        for sound in sounds:
            if not isinstance(sound, dict) or not sound.get("key") or not sound.get("sounds"):
                continue
            ViberRequest(self.app_context).send_file(self.user_id, get_text(sound["sounds"]))
        return []
