"""Постраничная навигация по списку элементов."""
import math
import re
from typing import Any, Sequence

from umbot.utils.text import is_say_text, text_similarity

PAGE_PATTERN = re.compile(r"(-?\d) страни", re.IGNORECASE)
DIGIT_PATTERN = re.compile(r"\d")


class Navigation:
    """
    Навигация по страницам: «дальше», «назад», «3 страница» и выбор
    элемента по номеру на странице или по похожести текста.
    """

    STANDARD_NEXT_TEXT = ("дальше", "вперед")
    STANDARD_OLD_TEXT = ("назад",)

    def __init__(self, max_visible_elements: int = 5) -> None:
        self.is_used_standard_text = True
        self.next_text: list[str] = []
        self.old_text: list[str] = []
        self.elements: list[Any] = []
        self.max_visible_elements = max_visible_elements
        self.this_page = 0

    def is_next(self, text: str) -> bool:
        next_text = list(self.next_text)
        if self.is_used_standard_text:
            next_text.extend(self.STANDARD_NEXT_TEXT)
        return is_say_text(next_text, text)

    def is_old(self, text: str) -> bool:
        old_text = list(self.old_text)
        if self.is_used_standard_text:
            old_text.extend(self.STANDARD_OLD_TEXT)
        return is_say_text(old_text, text)

    def _validate_page(self, max_page: int | None = None) -> None:
        if max_page is None:
            max_page = self.get_max_page()
        if self.this_page >= max_page:
            self.this_page = max_page - 1
        if self.this_page < 0:
            self.this_page = 0

    def number_page(self, text: str) -> bool:
        """Переход на страницу по фразе вида '2 страница'."""
        match = PAGE_PATTERN.search(text or "")
        if not match:
            return False
        self.this_page = int(match.group(1)) - 1
        self._validate_page()
        return True

    def _next_page(self, text: str) -> bool:
        if self.is_next(text):
            self.this_page += 1
            self._validate_page()
            return True
        return False

    def _old_page(self, text: str) -> bool:
        if self.is_old(text):
            self.this_page -= 1
            self._validate_page()
            return True
        return False

    def get_page_elements(self, elements: Sequence[Any] | None = None, text: str = "") -> list[Any]:
        """Элементы текущей страницы с учётом команд «дальше»/«назад» в text."""
        if elements:
            self.elements = list(elements)
        self._next_page(text)
        self._old_page(text)
        start = self.this_page * self.max_visible_elements
        return self.elements[start:start + self.max_visible_elements]

    def selected_element(
        self,
        elements: Sequence[Any] | None = None,
        text: str = "",
        keys: str | Sequence[str] | None = None,
        this_page: int | None = None
    ) -> Any:
        """
        Выбирает элемент текущей страницы.

        Сначала ищется номер элемента на странице (первая цифра в тексте),
        затем элемент, наиболее похожий на текст (порог 75%). Для словарей
        сравниваются значения полей keys.

        Returns
        -------
        Any
            Найденный элемент или None.
        """
        if this_page is not None:
            self.this_page = this_page
        if elements:
            self.elements = list(elements)

        match = DIGIT_PATTERN.search(text or "")
        number = int(match.group(0)) if match else None

        start = self.this_page * self.max_visible_elements
        selected = None
        max_percent = 0.0
        if isinstance(keys, str):
            keys = [keys]

        for index, element in enumerate(self.elements[start:start + self.max_visible_elements], start=1):
            if index == number:
                return element
            if keys is None or isinstance(element, str):
                values = [str(element)]
            elif isinstance(element, dict):
                values = [element[key] for key in keys if element.get(key)]
            else:
                values = []
            for value in values:
                res = text_similarity(value, text, 75)
                if res["status"] and res["percent"] > max_percent:
                    selected = element
                    max_percent = res["percent"]
            if max_percent > 90:
                return selected
        return selected

    def get_page_nav(self, is_number: bool = False) -> list[str]:
        """Кнопки навигации: «Назад»/«Дальше» или номера страниц."""
        max_page = self.get_max_page()
        self._validate_page(max_page)
        buttons = []
        if not is_number:
            if self.this_page:
                buttons.append("👈 Назад")
            if self.this_page + 1 < max_page:
                buttons.append("Дальше 👉")
            return buttons

        index = max(self.this_page - 2, 0)
        if index == 1:
            buttons.append("1")
        elif index:
            buttons.append("1 ...")
        count = 0
        for i in range(index, max_page):
            buttons.append(f"[{i + 1}]" if i == self.this_page else f"{i + 1}")
            count += 1
            if count > 4:
                if i == max_page - 2:
                    buttons.append(f"{max_page}")
                elif i < max_page - 2:
                    buttons.append(f"... {max_page}")
                break
        return buttons

    def get_page_info(self) -> str:
        """Строка вида '2 страница из 5' или '', если страница одна."""
        if self.this_page < 0 or self.this_page * self.max_visible_elements >= len(self.elements):
            self.this_page = 0
        max_page = self.get_max_page()
        if max_page > 1:
            return f"{self.this_page + 1} страница из {max_page}"
        return ""

    def get_max_page(self, elements: Sequence[Any] | None = None) -> int:
        if elements:
            self.elements = list(elements)
        return math.ceil(len(self.elements) / self.max_visible_elements)
