import pytest

from umbot.components import Navigation

ELEMENTS = list(range(1, 11))


@pytest.mark.unit
def test_max_page():
    navigation = Navigation()
    assert navigation.get_max_page(ELEMENTS) == 2
    assert navigation.get_max_page(list(range(11))) == 3


@pytest.mark.unit
def test_page_elements():
    navigation = Navigation()
    assert navigation.get_page_elements(ELEMENTS) == [1, 2, 3, 4, 5]
    assert navigation.get_page_elements(ELEMENTS, "дальше") == [6, 7, 8, 9, 10]
    assert navigation.this_page == 1
    assert navigation.get_page_elements(ELEMENTS, "дальше") == [6, 7, 8, 9, 10]
    assert navigation.this_page == 1
    assert navigation.get_page_elements(ELEMENTS, "назад") == [1, 2, 3, 4, 5]
    assert navigation.this_page == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, page",
    [("1 страница", 0), ("2 страница", 1), ("3 страница", 1), ("-2 страница", 0)],
)
def test_number_page(text, page):
    navigation = Navigation()
    navigation.elements = ELEMENTS
    assert navigation.number_page(text) is True
    assert navigation.this_page == page


@pytest.mark.unit
def test_number_page_without_number():
    assert Navigation().number_page("страница") is False


@pytest.mark.unit
class TestSelectedElement:
    def test_by_number(self):
        assert Navigation().selected_element(ELEMENTS, "2") == 2

    def test_by_number_on_page(self):
        assert Navigation().selected_element(ELEMENTS, "2", this_page=1) == 7

    def test_dict_elements(self):
        elements = [{"id": i, "title": f"привет{i}"} for i in range(1, 11)]
        elements[3]["title"] = "приветствую тебя мир"
        navigation = Navigation()
        assert navigation.selected_element(elements, "2")["id"] == 2
        assert navigation.selected_element(elements, "приветствую тебя мир", ["title"])["id"] == 4
        assert navigation.selected_element(elements, "пока", ["title"]) is None


@pytest.mark.unit
class TestPageNav:
    def test_arrows(self):
        navigation = Navigation()
        navigation.elements = ELEMENTS
        assert navigation.get_page_nav() == ["Дальше 👉"]
        navigation.this_page = 1
        assert navigation.get_page_nav() == ["👈 Назад"]

        navigation = Navigation(2)
        navigation.elements = ELEMENTS
        navigation.this_page = 1
        assert navigation.get_page_nav() == ["👈 Назад", "Дальше 👉"]

    def test_numbers(self):
        navigation = Navigation()
        navigation.elements = ELEMENTS
        assert navigation.get_page_nav(True) == ["[1]", "2"]
        navigation.this_page = 1
        assert navigation.get_page_nav(True) == ["1", "[2]"]

    @pytest.mark.parametrize(
        "page, expected",
        [
            (1, ["1", "[2]", "3", "4", "5", "... 10"]),
            (4, ["1 ...", "3", "4", "[5]", "6", "7", "... 10"]),
            (9, ["1 ...", "8", "9", "[10]"]),
        ],
    )
    def test_numbers_with_many_pages(self, page, expected):
        navigation = Navigation(1)
        navigation.elements = ELEMENTS
        navigation.this_page = page
        assert navigation.get_page_nav(True) == expected


@pytest.mark.unit
def test_page_info():
    navigation = Navigation()
    navigation.elements = ELEMENTS
    navigation.this_page = 1
    assert navigation.get_page_info() == "2 страница из 2"
    navigation.elements = [1, 2, 3]
    assert navigation.get_page_info() == ""
