"""Модель пользовательских данных."""
import json
from typing import Any

from umbot.core.app_context import (
    AppContext,
    T_ALISA,
    T_MARUSIA,
    T_SMARTAPP,
    T_TELEGRAM,
    T_USER_APP,
    T_VIBER,
    T_VK,
)
from umbot.models.db.model import Model

PLATFORM_CODES = {
    T_ALISA: 0,
    T_VK: 1,
    T_TELEGRAM: 2,
    T_VIBER: 3,
    T_MARUSIA: 4,
    T_SMARTAPP: 5,
    T_USER_APP: 512,
}


class UsersData(Model):
    """
    Данные пользователя навыка: {user_id, meta, data, type}.

    В режиме MongoDB поля meta и data хранятся строкой JSON и
    декодируются при чтении.
    """

    TABLE_NAME = "UsersData"

    T_ALISA = 0
    T_VK = 1
    T_TELEGRAM = 2
    T_VIBER = 3
    T_MARUSIA = 4
    T_SMART_APP = 5
    T_USER_APP = 512

    def __init__(self, app_context: AppContext) -> None:
        super().__init__(app_context)
        self.type = self.T_ALISA

    def rules(self) -> list[dict[str, Any]]:
        return [
            {"name": ["user_id"], "type": "string", "max": 250},
            {"name": ["meta", "data"], "type": "text"},
            {"name": ["type"], "type": "integer"},
        ]

    def attribute_labels(self) -> dict[str, str]:
        return {
            "user_id": "ID",
            "meta": "User meta data",
            "data": "User Data",
            "type": "Type",
        }

    @classmethod
    def type_for(cls, app_type: str) -> int:
        """Код платформы для поля type."""
        return PLATFORM_CODES.get(app_type, cls.T_USER_APP)

    def get_one(self) -> bool:
        """Загружает запись по user_id."""
        result = self.select_one()
        if result and result.get("status"):
            self.init(result["data"])
            return True
        return False

    def validate(self) -> None:
        if self.app_context.is_save_db:
            if not isinstance(self.meta, str):
                self.meta = json.dumps(self.meta, ensure_ascii=False)
            if not isinstance(self.data, str):
                self.data = json.dumps(self.data, ensure_ascii=False)

    def init(self, data: dict[str, Any] | None) -> None:
        super().init(data)
        if not self.app_context.is_save_db:
            return
        for name in ("meta", "data"):
            value = getattr(self, name)
            if isinstance(value, str) and value:
                try:
                    setattr(self, name, json.loads(value))
                except ValueError as e:
                    self.app_context.log_error(f"UsersData: Ошибка при разборе поля {name}: {e}")
