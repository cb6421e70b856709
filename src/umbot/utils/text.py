"""Работа с текстом: обрезка, поиск ключевых слов, склонение, схожесть строк."""
import random
import re
from difflib import SequenceMatcher
from functools import lru_cache
from typing import Any, Sequence

CONFIRM_PATTERNS = (
    r"(?:^|\s)да(?:^|\s|$)",
    r"(?:^|\s)конечно(?:^|\s|$)",
    r"(?:^|\s)соглас\S+(?:^|\s|$)",
    r"(?:^|\s)подтвер\S+(?:^|\s|$)",
)

REJECT_PATTERNS = (
    r"(?:^|\s)нет(?:^|\s|$)",
    r"(?:^|\s)неа(?:^|\s|$)",
    r"(?:^|\s)не(?:^|\s|$)",
)

URL_PATTERN = re.compile(r"https?://[^ \n]+", re.IGNORECASE)


def resize(text: str | None, size: int = 950, is_ellipsis: bool = True) -> str:
    """
    Обрезает текст до нужной длины.

    Parameters
    ----------
    text : str | None
        Исходный текст.
    size : int, optional
        Максимальная длина результата (по умолчанию 950).
    is_ellipsis : bool, optional
        Заменять последние 3 символа на '...' при обрезке.

    Returns
    -------
    str
        Пустая строка для пустого текста, иначе текст не длиннее size.
    """
    if not text:
        return ""
    if len(text) <= size:
        return text
    if not is_ellipsis:
        return text[:size]
    return text[:max(0, size - 3)] + "..."


def is_url(link: str | None) -> bool:
    """Содержит ли строка http(s) ссылку."""
    if not link:
        return False
    return URL_PATTERN.search(link) is not None


@lru_cache(maxsize=3000)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE | re.MULTILINE)


def is_say_pattern(patterns: str | Sequence[str], text: str | None) -> bool:
    """Совпадает ли текст хотя бы с одним регулярным выражением."""
    if not text:
        return False
    if isinstance(patterns, str):
        pattern = patterns
    else:
        pattern = "(" + ")|(".join(patterns) + ")"
    return _compile(pattern).search(text) is not None


def is_say_true(text: str | None) -> bool:
    """Пользователь согласился ('да', 'конечно', 'согласен', 'подтверждаю')."""
    return is_say_pattern(CONFIRM_PATTERNS, text)


def is_say_false(text: str | None) -> bool:
    """Пользователь отказался ('нет', 'неа', 'не ...')."""
    return is_say_pattern(REJECT_PATTERNS, text)


def is_say_text(find: str | Sequence[str], text: str | None, is_pattern: bool = False) -> bool:
    """
    Ищет в тексте подстроку (или одну из подстрок).

    При is_pattern=True элементы find трактуются как регулярные выражения.
    """
    if not text:
        return False
    if is_pattern:
        return is_say_pattern(find, text)
    if isinstance(find, str):
        return find in text
    return any(value in text for value in find)


def get_text(value: str | Sequence[str]) -> str:
    """Возвращает строку или случайный элемент списка."""
    if isinstance(value, str):
        return value
    return random.choice(list(value))


def text_replace(key: str, value: str | Sequence[str], text: str) -> str:
    """Заменяет все вхождения key на value (для списка: на случайный элемент)."""
    return re.sub(re.escape(key), lambda _: get_text(value), text)


def get_ending(num: int, titles: Sequence[str], index: int | None = None) -> str | None:
    """
    Склоняет слово по числу.

    Parameters
    ----------
    num : int
        Число.
    titles : Sequence[str]
        Формы слова для 1, 2 и 5 ('яблоко', 'яблока', 'яблок').
    index : int, optional
        Принудительно выбрать форму по индексу.

    Returns
    -------
    str | None
        Подходящая форма или None, если формы не хватает.
    """
    if index is not None and 0 <= index < len(titles):
        return titles[index]
    abs_num = abs(num)
    cases = [2, 0, 1, 1, 1, 2]
    if 4 < abs_num % 100 < 20:
        title_index = 2
    else:
        title_index = cases[min(abs_num % 10, 5)]
    if title_index < len(titles):
        return titles[title_index]
    return None


def similar_text(first: str, second: str) -> float:
    """Процент схожести двух строк (0-100)."""
    if not first and not second:
        return 100.0
    return SequenceMatcher(None, first, second).ratio() * 100


def text_similarity(orig_text: str, compare_text: str | Sequence[str], threshold: float = 80) -> dict[str, Any]:
    """
    Ищет среди compare_text строку, наиболее похожую на orig_text.

    Returns
    -------
    dict
        {
            "status": bool,        # схожесть не ниже threshold
            "index": int | None,   # индекс найденной строки
            "percent": float,
            "text": str | None
        }
    """
    texts = [compare_text] if isinstance(compare_text, str) else list(compare_text)
    normalized = orig_text.lower()
    for index, current in enumerate(texts):
        if current.lower() == normalized:
            return {"status": True, "index": index, "percent": 100, "text": current}

    result: dict[str, Any] = {"status": False, "index": None, "percent": 0, "text": None}
    for index, current in enumerate(texts):
        percent = similar_text(normalized, current.lower())
        if percent > result["percent"]:
            result = {
                "status": percent >= threshold,
                "index": index,
                "percent": percent,
                "text": current,
            }
    return result
