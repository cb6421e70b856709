from .logger import LoggerProtocol
from .storage import StorageProtocol
from .formatter import ButtonFormatterProtocol, CardFormatterProtocol, SoundFormatterProtocol
from .platform import PlatformProtocol

__all__ = [
    'LoggerProtocol',
    'StorageProtocol',
    'ButtonFormatterProtocol',
    'CardFormatterProtocol',
    'SoundFormatterProtocol',
    'PlatformProtocol',
]
