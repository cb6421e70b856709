"""Реестр адаптеров платформ."""
from typing import Callable

from umbot.core.app_context import (
    AppContext,
    T_ALISA,
    T_MARUSIA,
    T_SMARTAPP,
    T_TELEGRAM,
    T_VIBER,
    T_VK,
)
from umbot.platforms.alisa import Alisa
from umbot.platforms.marusia import Marusia
from umbot.platforms.smart_app import SmartApp
from umbot.platforms.telegram import Telegram
from umbot.platforms.viber import Viber
from umbot.platforms.vk import Vk
from umbot.protocols import PlatformProtocol

PlatformFactory = Callable[[AppContext], PlatformProtocol]

PLATFORMS: dict[str, PlatformFactory] = {
    T_ALISA: Alisa,
    T_MARUSIA: Marusia,
    T_VK: Vk,
    T_TELEGRAM: Telegram,
    T_VIBER: Viber,
    T_SMARTAPP: SmartApp,
}


def register_platform(app_type: str, factory: PlatformFactory) -> None:
    """
    Регистрирует адаптер платформы.

    Так подключается собственная платформа (например, user_application)
    или переопределяется встроенная.
    """
    PLATFORMS[app_type] = factory


def get_platform(app_type: str, app_context: AppContext) -> PlatformProtocol | None:
    """Создаёт адаптер платформы или возвращает None для неизвестного типа."""
    factory = PLATFORMS.get(app_type)
    if factory is None:
        return None
    return factory(app_context)
