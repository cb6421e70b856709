from .card import CARD_FORMATTERS, Card, CardData, register_card_formatter
from .formatters import (
    AlisaCardFormatter,
    MarusiaCardFormatter,
    SmartAppCardFormatter,
    TelegramCardFormatter,
    ViberCardFormatter,
    VkCardFormatter,
)

__all__ = [
    'CARD_FORMATTERS',
    'Card',
    'CardData',
    'register_card_formatter',
    'AlisaCardFormatter',
    'MarusiaCardFormatter',
    'SmartAppCardFormatter',
    'TelegramCardFormatter',
    'ViberCardFormatter',
    'VkCardFormatter',
]
