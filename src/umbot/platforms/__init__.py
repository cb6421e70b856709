from .base import BasePlatform
from .alisa import Alisa
from .marusia import Marusia
from .vk import Vk
from .telegram import Telegram
from .viber import Viber
from .smart_app import SmartApp
from .registry import PLATFORMS, register_platform, get_platform

__all__ = [
    'BasePlatform',
    'Alisa',
    'Marusia',
    'Vk',
    'Telegram',
    'Viber',
    'SmartApp',
    'PLATFORMS',
    'register_platform',
    'get_platform',
]
