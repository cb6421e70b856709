from .request import Request
from .telegram import TelegramRequest
from .vk import VkRequest
from .marusia import MarusiaRequest
from .viber import ViberRequest
from .yandex import YandexRequest, YandexImageRequest, YandexSoundRequest, YandexSpeechKit

__all__ = [
    'Request',
    'TelegramRequest',
    'VkRequest',
    'MarusiaRequest',
    'ViberRequest',
    'YandexRequest',
    'YandexImageRequest',
    'YandexSoundRequest',
    'YandexSpeechKit',
]
