from .button import (
    B_BTN,
    B_LINK,
    Button,
    VK_COLOR_NEGATIVE,
    VK_COLOR_POSITIVE,
    VK_COLOR_PRIMARY,
    VK_COLOR_SECONDARY,
    VK_TYPE_APPS,
    VK_TYPE_LINK,
    VK_TYPE_LOCATION,
    VK_TYPE_PAY,
    VK_TYPE_TEXT,
)
from .buttons import (
    BUTTON_FORMATTERS,
    Buttons,
    T_ALISA_BUTTONS,
    T_ALISA_CARD_BUTTON,
    T_SMARTAPP_BUTTON_CARD,
    T_SMARTAPP_BUTTONS,
    T_TELEGRAM_BUTTONS,
    T_USER_APP_BUTTONS,
    T_VIBER_BUTTONS,
    T_VK_BUTTONS,
    register_button_formatter,
)

__all__ = [
    'B_BTN',
    'B_LINK',
    'Button',
    'VK_COLOR_NEGATIVE',
    'VK_COLOR_POSITIVE',
    'VK_COLOR_PRIMARY',
    'VK_COLOR_SECONDARY',
    'VK_TYPE_APPS',
    'VK_TYPE_LINK',
    'VK_TYPE_LOCATION',
    'VK_TYPE_PAY',
    'VK_TYPE_TEXT',
    'BUTTON_FORMATTERS',
    'Buttons',
    'T_ALISA_BUTTONS',
    'T_ALISA_CARD_BUTTON',
    'T_SMARTAPP_BUTTON_CARD',
    'T_SMARTAPP_BUTTONS',
    'T_TELEGRAM_BUTTONS',
    'T_USER_APP_BUTTONS',
    'T_VIBER_BUTTONS',
    'T_VK_BUTTONS',
    'register_button_formatter',
]
