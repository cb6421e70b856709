"""Вспомогательные функции для работы с файлами."""
import json
import os
from pathlib import Path
from typing import Any


def is_file(path: str | Path | None) -> bool:
    """Является ли строка путём к существующему файлу."""
    if not path:
        return False
    try:
        return os.path.isfile(path)
    except (TypeError, ValueError):
        return False


def read_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str | Path, data: Any) -> None:
    """Сохраняет данные в json файл, создавая директорию при необходимости."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
    os.replace(tmp_path, path)
