"""Звуки в ответе навыка."""
import re
from typing import Any, Callable

from umbot.components.sound.formatters import (
    AlisaSoundFormatter,
    MarusiaSoundFormatter,
    TelegramSoundFormatter,
    ViberSoundFormatter,
    VkSoundFormatter,
)
from umbot.core.app_context import (
    AppContext,
    T_ALISA,
    T_MARUSIA,
    T_TELEGRAM,
    T_USER_APP,
    T_VIBER,
    T_VK,
)
from umbot.protocols import SoundFormatterProtocol

# ключи звуков, оставшиеся в тексте без замены
UNUSED_KEY_PATTERN = re.compile(r"(?:^|\s)#\w+#(?:\s|$)")

SoundFormatterFactory = Callable[..., SoundFormatterProtocol]

SOUND_FORMATTERS: dict[str, SoundFormatterFactory] = {
    T_ALISA: AlisaSoundFormatter,
    T_MARUSIA: MarusiaSoundFormatter,
    T_VK: VkSoundFormatter,
    T_TELEGRAM: TelegramSoundFormatter,
    T_VIBER: ViberSoundFormatter,
}


def register_sound_formatter(app_type: str, factory: SoundFormatterFactory) -> None:
    """
    Регистрирует форматтер звуков.

    Фабрика вызывается как factory(app_context, user_id=...,
    is_used_standard_sound=...).
    """
    SOUND_FORMATTERS[app_type] = factory


class Sound:
    """
    Звуки ответа.

    Attributes
    ----------
    sounds : list[dict]
        Пользовательские звуки: [{"key": "#my_sound#", "sounds": [...]}].
    is_used_standard_sound : bool
        Подключать стандартные звуки платформы (Алиса, Маруся).
    """

    def __init__(self, app_context: AppContext) -> None:
        self.app_context = app_context
        self.sounds: list[dict[str, Any]] = []
        self.is_used_standard_sound = True

    def get_sounds(
        self,
        text: str | None,
        user_formatter: SoundFormatterProtocol | None = None,
        user_id: str | int | None = None
    ) -> Any:
        """
        Подставляет звуки в текст.

        Returns
        -------
        str | list[str]
            Текст со звуками (голосовые платформы), список вложений
            (VK, Telegram, Viber) или исходный текст, если платформа
            звуки не поддерживает.
        """
        if not text:
            return ""
        app_type = self.app_context.app_type
        if app_type == T_USER_APP and user_formatter is not None:
            formatter = user_formatter
        else:
            factory = SOUND_FORMATTERS.get(app_type)
            if factory is None:
                return text
            formatter = factory(
                self.app_context,
                user_id=user_id,
                is_used_standard_sound=self.is_used_standard_sound,
            )
        result = formatter.get_sounds(tuple(self.sounds), text)
        if isinstance(result, str):
            return UNUSED_KEY_PATTERN.sub("", result)
        return result
