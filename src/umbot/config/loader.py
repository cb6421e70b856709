"""Загрузка и валидация конфигурации из YAML + .env."""
from pathlib import Path
import yaml
import os
from dotenv import load_dotenv
from pydantic import ValidationError
from umbot.config.models import AppConfig
from umbot.exceptions import ConfigError


# Переменная окружения -> поле в разделе platform
PLATFORM_ENV = {
    "VIBER_TOKEN": "viber_token",
    "TELEGRAM_TOKEN": "telegram_token",
    "VK_TOKEN": "vk_token",
    "VK_CONFIRMATION_TOKEN": "vk_confirmation_token",
    "MARUSIA_TOKEN": "marusia_token",
    "YANDEX_TOKEN": "yandex_token",
    "YANDEX_SPEECH_KIT_TOKEN": "yandex_speech_kit_token",
}

# Переменная окружения -> поле в разделе db
DB_ENV = {
    "DB_HOST": "host",
    "DB_USER": "user",
    "DB_PASSWORD": "password",
    "DB_NAME": "database",
}


def _apply_env(section: dict, mapping: dict[str, str]) -> None:
    for env_name, field_name in mapping.items():
        value = os.getenv(env_name)
        if value:
            section[field_name] = value


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """
    Загружает конфигурацию из YAML и дополняет значениями из .env.

    Parameters
    ----------
    config_path : str | Path, optional
        Путь к файлу конфигурации. Если None, ищет config.yaml в текущей
        директории, а при его отсутствии использует значения по умолчанию.

    Returns
    -------
    AppConfig
        Валидированная конфигурация.

    Raises
    ------
    FileNotFoundError
        Если явно указанный файл конфигурации не найден.
    ConfigError
        Если конфигурация не прошла валидацию (наследник ValueError).
    """
    # 1. Загружаем .env
    load_dotenv()

    # 2. Определяем путь к конфигу
    yaml_config: dict = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Файл конфигурации не найден: {config_path.resolve()}\n"
                f"Создайте config.yaml в корне проекта"
            )
    elif Path("config.yaml").exists():
        config_path = Path("config.yaml")

    # 3. Загружаем YAML
    if config_path is not None:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Ошибка парсинга YAML: {e}") from e
        if not isinstance(yaml_config, dict):
            raise ConfigError(f"Корень конфигурации должен быть словарём, получено: {type(yaml_config).__name__}")

    # 4. Секреты и доступ к БД берём из окружения, они важнее YAML
    for section_name, mapping in (("platform", PLATFORM_ENV), ("db", DB_ENV)):
        section = yaml_config.setdefault(section_name, {})
        if not isinstance(section, dict):
            raise ConfigError(f"Раздел {section_name} должен быть словарём")
        _apply_env(section, mapping)

    # 5. Валидируем конфигурацию
    try:
        return AppConfig(**yaml_config)
    except ValidationError as e:
        error_lines = ["Ошибка валидации конфигурации:"]
        for error in e.errors():
            loc = " → ".join(str(part) for part in error["loc"])
            msg = error["msg"]
            error_lines.append(f"  • [{loc}] {msg}")
        raise ConfigError("\n".join(error_lines)) from e
