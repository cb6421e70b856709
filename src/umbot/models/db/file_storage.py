"""Файловое хранилище: по одному json файлу на таблицу."""
import copy
import os
import threading
from pathlib import Path
from typing import Any

from umbot.protocols import LoggerProtocol
from umbot.utils.files import read_json, write_json

NOT_FOUND_ERROR = "Не удалось получить данные"


class FileStorage:
    """
    Хранилище моделей в json файлах.

    Файл {json_dir}/{table}.json содержит словарь записей, где ключ -
    значение первичного ключа. Чтение кэшируется по времени изменения
    файла, запись выполняется под блокировкой.
    """

    def __init__(self, json_dir: str | Path, logger: LoggerProtocol) -> None:
        self.json_dir = Path(json_dir)
        self.logger = logger
        self._lock = threading.Lock()
        self._cache: dict[str, tuple[float, dict[str, Any]]] = {}

    def _path(self, table: str) -> Path:
        return self.json_dir / f"{table}.json"

    def _read(self, table: str) -> dict[str, Any]:
        path = self._path(table)
        try:
            mtime = os.path.getmtime(path)
        except OSError:
            return {}
        cached = self._cache.get(table)
        if cached and cached[0] == mtime:
            return dict(cached[1])
        try:
            content = read_json(path)
        except (OSError, ValueError) as e:
            self.logger.error(f"Не удалось прочитать файл {path}: {e}")
            return {}
        if not isinstance(content, dict):
            self.logger.error(f"Некорректное содержимое файла {path}")
            return {}
        self._cache[table] = (mtime, content)
        return dict(content)

    def _write(self, table: str, content: dict[str, Any]) -> bool:
        path = self._path(table)
        try:
            write_json(path, content)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Не удалось сохранить файл {path}: {e}")
            return False
        self._cache.pop(table, None)
        return True

    def select(
        self,
        table: str,
        where: dict[str, Any] | None,
        is_one: bool = False,
        rules: list[dict[str, Any]] | None = None
    ) -> dict[str, Any]:
        """
        Линейный поиск по записям таблицы.

        Сравниваются только поля условия, которые есть в записи. Запись
        подходит, если хотя бы одно поле сравнилось и все сравнения равны.
        """
        content = self._read(table)
        if not where:
            if is_one:
                result = next(iter(content.values()), None)
            else:
                result = list(content.values()) or None
        else:
            matched = []
            for record in content.values():
                compared = [key for key in where if key in record]
                if compared and all(record[key] == where[key] for key in compared):
                    if is_one:
                        return {"status": True, "data": copy.deepcopy(record)}
                    matched.append(record)
            result = matched or None

        if result:
            return {"status": True, "data": copy.deepcopy(result)}
        return {"status": False, "error": NOT_FOUND_ERROR}

    def insert(
        self,
        table: str,
        data: dict[str, Any],
        primary_key: str,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        id_value = data.get(primary_key)
        if not id_value:
            return None
        with self._lock:
            content = self._read(table)
            content[str(id_value)] = data
            return self._write(table, content)

    def update(
        self,
        table: str,
        query: dict[str, Any],
        data: dict[str, Any],
        primary_key: str,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        """Дополняет запись данными. None, если в условии нет первичного ключа."""
        if primary_key not in (query or {}):
            return None
        key = str(query[primary_key])
        with self._lock:
            content = self._read(table)
            if key in content:
                content[key] = {**content[key], **data}
                return self._write(table, content)
        return True

    def save(
        self,
        table: str,
        query: dict[str, Any],
        data: dict[str, Any],
        primary_key: str,
        is_new: bool = False,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        if is_new or not self.select(table, query, True)["status"]:
            return self.insert(table, {**data, **query}, primary_key, rules)
        return self.update(table, query, data, primary_key, rules)

    def remove(self, table: str, query: dict[str, Any], primary_key: str) -> bool:
        if primary_key not in (query or {}):
            return False
        key = str(query[primary_key])
        with self._lock:
            content = self._read(table)
            if key in content:
                del content[key]
                return self._write(table, content)
        return True

    def is_connected(self) -> bool:
        return True

    def close(self) -> None:
        self._cache.clear()
