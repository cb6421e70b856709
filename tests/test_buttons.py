import json

import pytest

from umbot.components.button import (
    B_BTN,
    Button,
    Buttons,
    T_ALISA_BUTTONS,
    T_ALISA_CARD_BUTTON,
    T_SMARTAPP_BUTTONS,
    T_TELEGRAM_BUTTONS,
    T_USER_APP_BUTTONS,
    T_VIBER_BUTTONS,
    T_VK_BUTTONS,
    register_button_formatter,
)
from umbot.components.button.buttons import BUTTON_FORMATTERS

URL = "https://test.ru"


@pytest.fixture
def buttons(app_context):
    result = Buttons(app_context)
    for i in range(1, 4):
        result.add_btn(str(i))
        result.add_link(str(i), URL)
    return result


@pytest.mark.unit
class TestButton:
    def test_create_without_title(self):
        assert Button.create(None) is None

    def test_create_drops_invalid_url(self):
        button = Button.create("title", "not a url")
        assert button.url is None

    def test_button_is_immutable(self):
        button = Button.create("title", URL)
        with pytest.raises(AttributeError):
            button.title = "other"

    @pytest.mark.parametrize(
        "url, utm_text, expected",
        [
            ("https://google.com", None, "https://google.com?utm_source=Yandex_Alisa&utm_medium=cpc&utm_campaign=phone"),
            ("https://google.com?utm_source=test", None, "https://google.com?utm_source=test"),
            ("https://google.com?data=test", None,
             "https://google.com?data=test&utm_source=Yandex_Alisa&utm_medium=cpc&utm_campaign=phone"),
            ("https://google.com", "my_utm_text", "https://google.com?my_utm_text"),
            ("https://google.com", "", "https://google.com"),
        ],
    )
    def test_utm(self, url, utm_text, expected):
        assert Button.create("btn", url, utm_text=utm_text).url == expected


@pytest.mark.unit
class TestAlisaButtons:
    def test_buttons(self, buttons):
        expected = []
        for i in range(1, 4):
            expected.append({"title": str(i), "hide": True})
            expected.append({"title": str(i), "hide": False, "url": URL})
        assert buttons.get_buttons(T_ALISA_BUTTONS) == expected

    def test_raw_buttons(self, buttons):
        buttons.btns = [{"title": "btn", "url": URL, "payload": "test"}]
        buttons.links = [{"title": "link", "url": URL, "payload": "test"}]
        result = buttons.get_buttons(T_ALISA_BUTTONS)
        assert result[-2] == {"title": "btn", "hide": True, "payload": "test", "url": URL}
        assert result[-1] == {"title": "link", "hide": False, "payload": "test", "url": URL}
        assert buttons.btns == []
        assert buttons.links == []

    def test_string_raw_buttons(self, app_context):
        buttons = Buttons(app_context)
        buttons.btns = ["да", "нет"]
        assert buttons.get_buttons(T_ALISA_BUTTONS) == [
            {"title": "да", "hide": B_BTN},
            {"title": "нет", "hide": B_BTN},
        ]

    def test_card_button(self, buttons):
        assert buttons.get_buttons(T_ALISA_CARD_BUTTON) == {"text": "1"}

    def test_card_button_without_buttons(self, app_context):
        assert Buttons(app_context).get_buttons(T_ALISA_CARD_BUTTON) == []

    def test_long_title_is_cut(self, app_context):
        buttons = Buttons(app_context)
        buttons.add_btn("x" * 100)
        assert len(buttons.get_buttons(T_ALISA_BUTTONS)[0]["title"]) == 64


@pytest.mark.unit
class TestVkButtons:
    def test_buttons(self, buttons):
        expected = []
        for i in range(1, 4):
            expected.append({"action": {"type": "text", "label": str(i)}})
            expected.append({"action": {"type": "open_link", "link": URL, "label": str(i)}})
        assert buttons.get_buttons(T_VK_BUTTONS) == {"one_time": True, "buttons": expected}

    def test_raw_button_with_url(self, app_context):
        buttons = Buttons(app_context)
        buttons.btns = [{"title": "btn", "url": URL, "payload": "test"}]
        assert buttons.get_buttons(T_VK_BUTTONS) == {
            "one_time": True,
            "buttons": [{"action": {"type": "open_link", "link": URL, "label": "btn", "payload": "test"}}],
        }

    def test_empty(self, buttons):
        buttons.clear()
        assert buttons.get_buttons(T_VK_BUTTONS) == {"one_time": False, "buttons": []}

    def test_groups(self, app_context):
        buttons = Buttons(app_context)
        buttons.add_btn("1", None, {"_group": 0})
        buttons.add_link("1", URL, {"_group": 0})
        buttons.add_btn("2", None, {"_group": 0})
        buttons.add_link("2", URL, {"_group": 0})
        buttons.add_btn("3", None, {"_group": 1})
        buttons.add_link("3", URL)

        text = lambda title: {"action": {"type": "text", "label": title, "payload": "{}"}}
        link = lambda title: {"action": {"type": "open_link", "link": URL, "label": title, "payload": "{}"}}
        expected = [
            [text("1"), link("1"), text("2"), link("2")],
            [text("3")],
            {"action": {"type": "open_link", "link": URL, "label": "3"}},
        ]
        assert buttons.get_buttons(T_VK_BUTTONS)["buttons"] == expected

        buttons.btns = [{"title": "btn", "url": URL, "payload": {"_group": 1}}]
        buttons.links = [{"title": "link", "url": URL, "payload": "test"}]
        result = buttons.get_buttons(T_VK_BUTTONS)["buttons"]
        assert result[1] == [
            text("3"),
            {"action": {"type": "open_link", "link": URL, "label": "btn", "payload": "{}"}},
        ]
        assert result[-1] == {"action": {"type": "open_link", "link": URL, "label": "link", "payload": "test"}}

    def test_group_from_options(self, app_context):
        buttons = Buttons(app_context)
        buttons.add_btn("1", options={"_group": "row"})
        buttons.add_btn("2", options={"_group": "row"})
        assert buttons.get_buttons(T_VK_BUTTONS)["buttons"] == [[
            {"action": {"type": "text", "label": "1"}},
            {"action": {"type": "text", "label": "2"}},
        ]]

    def test_color_from_payload(self, app_context):
        buttons = Buttons(app_context)
        buttons.add_btn("1", payload={"color": "positive"})
        result = buttons.get_buttons(T_VK_BUTTONS)["buttons"][0]
        assert result["color"] == "positive"
        assert json.loads(result["action"]["payload"]) == {"color": "positive"}


@pytest.mark.unit
class TestTelegramButtons:
    def test_keyboard(self, buttons):
        assert buttons.get_buttons(T_TELEGRAM_BUTTONS) == {"keyboard": ["1", "2", "3"]}

    def test_inline_keyboard(self, buttons):
        buttons.btns = [{"title": "btn", "url": URL, "payload": "test"}]
        buttons.links = [{"title": "link", "url": URL, "payload": "test"}]
        assert buttons.get_buttons(T_TELEGRAM_BUTTONS) == {
            "inline_keyboard": [
                {"text": "btn", "url": URL, "callback_data": "test"},
                {"text": "link", "url": URL, "callback_data": "test"},
            ],
            "keyboard": ["1", "2", "3"],
        }

    def test_remove_keyboard(self, buttons):
        buttons.clear()
        assert buttons.get_buttons(T_TELEGRAM_BUTTONS) == {"remove_keyboard": True}


@pytest.mark.unit
class TestViberButtons:
    def test_keyboard(self, buttons):
        expected = []
        for i in range(1, 4):
            expected.append({"Text": str(i), "ActionType": "reply", "ActionBody": str(i)})
            expected.append({"Text": str(i), "ActionType": "open-url", "ActionBody": URL})
        assert buttons.get_buttons(T_VIBER_BUTTONS) == {
            "DefaultHeight": True,
            "BgColor": "#FFFFFF",
            "Buttons": expected,
        }

    def test_raw_buttons_with_url(self, app_context):
        buttons = Buttons(app_context)
        buttons.btns = [{"title": "btn", "url": URL, "payload": "test"}]
        assert buttons.get_buttons(T_VIBER_BUTTONS)["Buttons"] == [
            {"Text": "btn", "ActionType": "open-url", "ActionBody": URL},
        ]

    def test_empty(self, app_context):
        assert Buttons(app_context).get_buttons(T_VIBER_BUTTONS) is None


@pytest.mark.unit
def test_smart_app_suggestions(app_context):
    buttons = Buttons(app_context)
    buttons.add_btn("1")
    buttons.add_btn("2", payload={"action": "go"})
    assert buttons.get_buttons(T_SMARTAPP_BUTTONS) == [
        {"title": "1", "action": {"text": "1", "type": "text"}},
        {"title": "2", "action": {"server_action": {"action": "go"}, "type": "server_action"}},
    ]


@pytest.mark.unit
def test_unknown_type_returns_none(buttons):
    assert buttons.get_buttons("unknown") is None


@pytest.mark.unit
def test_user_formatter(buttons):
    class _TitlesFormatter:
        def get_buttons(self, items):
            assert isinstance(items, tuple)
            return [item.title for item in items]

    assert buttons.get_buttons(T_USER_APP_BUTTONS, _TitlesFormatter()) == ["1", "1", "2", "2", "3", "3"]


@pytest.mark.unit
def test_register_button_formatter(buttons, monkeypatch):
    class _CountFormatter:
        def get_buttons(self, items):
            return len(items)

    monkeypatch.setitem(BUTTON_FORMATTERS, "count_btn", _CountFormatter)
    register_button_formatter("count_btn", _CountFormatter)
    assert buttons.get_buttons("count_btn") == 6


@pytest.mark.unit
def test_get_buttons_json(buttons):
    assert json.loads(buttons.get_buttons_json(T_TELEGRAM_BUTTONS)) == {"keyboard": ["1", "2", "3"]}
