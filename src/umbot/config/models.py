"""Pydantic V2 модели для валидации конфигурации (только BaseModel)."""
from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, field_validator, ConfigDict, SecretStr


PLATFORM_TYPES = ("alisa", "marusia", "vk", "telegram", "viber", "smart_app", "user_application")


class LoggingConfig(BaseModel):
    """Конфигурация логирования."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info",
        description="Уровень логирования"
    )
    log_dir: str = Field(
        default="logs",
        description="Директория для логов"
    )
    max_log_days: int = Field(
        default=7,
        ge=1,
        description="Дней хранения ротированных логов"
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.lower()
        allowed = {"debug", "info", "warning", "error", "critical"}
        if v not in allowed:
            raise ValueError(f"Уровень логирования должен быть одним из: {allowed}")
        return v


class DatabaseConfig(BaseModel):
    """Параметры подключения к MongoDB."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    host: str | None = Field(default=None, description="Адрес сервера (host[:port] или mongodb:// URI)")
    user: str | None = Field(default=None, description="Пользователь")
    password: SecretStr | None = Field(default=None, description="Пароль")
    database: str | None = Field(default=None, description="Имя базы данных")
    options: dict[str, str | int | bool] = Field(
        default_factory=dict,
        description="Дополнительные параметры клиента pymongo"
    )


class IntentConfig(BaseModel):
    """Описание интента: имя и слова-триггеры."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = Field(..., description="Имя интента")
    slots: list[str] = Field(default_factory=list, description="Слова или регулярные выражения")
    is_pattern: bool = Field(default=False, description="Слоты являются регулярными выражениями")


def _default_intents() -> list[IntentConfig]:
    return [
        IntentConfig(name="welcome", slots=["привет", "здравст"]),
        IntentConfig(name="help", slots=["помощ", "что ты умеешь"]),
    ]


class PlatformParams(BaseModel):
    """Токены платформ и тексты навыка по умолчанию."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    viber_token: SecretStr | None = Field(default=None, description="Токен Viber")
    viber_sender: str | None = Field(default=None, description="Имя отправителя в Viber")
    viber_api_version: int | None = Field(default=None, description="Версия Viber API")
    telegram_token: SecretStr | None = Field(default=None, description="Токен Telegram бота")
    vk_api_version: str | None = Field(default=None, description="Версия VK API")
    vk_confirmation_token: str | None = Field(default=None, description="Код подтверждения Callback API VK")
    vk_token: SecretStr | None = Field(default=None, description="Токен сообщества VK")
    marusia_token: SecretStr | None = Field(default=None, description="Токен Маруси")
    yandex_token: SecretStr | None = Field(default=None, description="OAuth токен Яндекс.Диалогов")
    yandex_speech_kit_token: SecretStr | None = Field(default=None, description="Токен Yandex SpeechKit")
    y_is_auth_user: bool = Field(default=False, description="Использовать авторизованного пользователя Алисы")
    app_id: str | None = Field(default=None, description="Идентификатор навыка")
    user_id: str | int | None = Field(default=None, description="Идентификатор пользователя для загрузки медиа")
    welcome_text: str | list[str] = Field(default="Текст приветствия", description="Приветствие")
    help_text: str | list[str] = Field(default="Текст помощи", description="Текст помощи")
    empty_text: str | list[str] = Field(default="Извини, я тебя не понимаю", description="Ответ на непонятный запрос")
    utm_text: str | None = Field(default=None, description="UTM метка для ссылок (None: метка по умолчанию)")
    intents: list[IntentConfig] = Field(default_factory=_default_intents)


class ServerConfig(BaseModel):
    """Параметры HTTP сервера для вебхуков."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    host: str = Field(default="localhost", description="Адрес сервера")
    port: int = Field(default=3000, ge=1, le=65535, description="Порт сервера")


class HttpConfig(BaseModel):
    """Параметры HTTP клиентов платформ."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    timeout: float = Field(default=5.5, gt=0.0, description="Таймаут запроса (сек)")
    max_retries: int = Field(
        default=2,
        ge=1,
        description="Макс. попыток при сетевых ошибках"
    )


class AppConfig(BaseModel):
    """Корневая конфигурация приложения."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    platform: PlatformParams = Field(default_factory=PlatformParams)
    server: ServerConfig = Field(default_factory=ServerConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

    platform_type: str = Field(
        default="alisa",
        description="Платформа по умолчанию"
    )
    json_dir: str = Field(
        default="json",
        description="Директория для хранения данных в json файлах"
    )
    is_save_db: bool = Field(
        default=False,
        description="Хранить данные в MongoDB вместо json файлов"
    )
    is_local_storage: bool = Field(
        default=False,
        description="Использовать хранилище платформы, если оно доступно"
    )

    @field_validator("platform_type", mode="before")
    @classmethod
    def validate_platform_type(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.lower()
        if v not in PLATFORM_TYPES:
            raise ValueError(f"Платформа должна быть одной из: {PLATFORM_TYPES}")
        return v

    @field_validator("json_dir", mode="before")
    @classmethod
    def validate_dirs(cls, v: str) -> str:
        path = Path(v)
        path.mkdir(parents=True, exist_ok=True)
        return str(path.resolve())
