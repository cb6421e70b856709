"""Условия и данные запроса к хранилищу."""
import re
from typing import Any

QUERY_PATTERN = re.compile(r'`([^`]+)`=("[^"]+"|[^ ]+)')


class QueryData:
    """Пара (условие выборки, данные для записи)."""

    def __init__(self, query: dict[str, Any] | None = None, data: dict[str, Any] | None = None) -> None:
        self.query = query
        self.data = data

    @staticmethod
    def parse(text: str | None) -> dict[str, Any] | None:
        """
        Разбирает строку условий вида `userId`="123" `type`=1.

        Числовые значения приводятся к int или float, кавычки убираются.

        >>> QueryData.parse('`userId`="user 1" `type`=3')
        {'userId': 'user 1', 'type': 3}
        """
        if not text:
            return None
        result: dict[str, Any] = {}
        for key, raw in QUERY_PATTERN.findall(text):
            value: Any = raw.replace('"', "")
            try:
                value = int(value)
            except ValueError:
                try:
                    value = float(value)
                except ValueError:
                    pass
            result[key] = value
        return result
