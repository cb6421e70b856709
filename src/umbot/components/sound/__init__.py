from .sound import Sound, SOUND_FORMATTERS, register_sound_formatter
from .formatters import (
    AlisaSoundFormatter,
    MarusiaSoundFormatter,
    TelegramSoundFormatter,
    ViberSoundFormatter,
    VkSoundFormatter,
)

__all__ = [
    'Sound',
    'SOUND_FORMATTERS',
    'register_sound_formatter',
    'AlisaSoundFormatter',
    'MarusiaSoundFormatter',
    'TelegramSoundFormatter',
    'ViberSoundFormatter',
    'VkSoundFormatter',
]
