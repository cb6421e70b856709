from unittest.mock import MagicMock

import pytest

from umbot.config.models import IntentConfig
from umbot.controller import BaseBotController


class _RecordController(BaseBotController):
    def __init__(self, app_context):
        super().__init__(app_context)
        self.calls = []

    def action(self, intent_name, is_command=False):
        self.calls.append((intent_name, is_command))
        super().action(intent_name, is_command)


def _controller(context, command, message_id=1):
    controller = _RecordController(context)
    controller.user_command = command
    controller.message_id = message_id
    return controller


@pytest.mark.unit
class TestBotController:
    def test_get_intent(self, app_context):
        controller = BaseBotController(app_context)

        assert controller.get_intent("привет") == "welcome"
        assert controller.get_intent("нужна помощь") == "help"
        assert controller.get_intent("погода") is None
        assert controller.get_intent(None) is None

    def test_pattern_intent(self, make_context):
        context = make_context(intents=[IntentConfig(name="number", slots=[r"\d+"], is_pattern=True)])

        assert BaseBotController(context).get_intent("число 42") == "number"

    def test_welcome_on_first_message(self, make_context):
        context = make_context(welcome_text="Добро пожаловать")
        controller = _controller(context, "", message_id=0)

        controller.run()

        assert controller.calls == [("welcome", False)]
        assert controller.text == "Добро пожаловать"
        assert controller.tts == "Добро пожаловать"

    def test_help(self, make_context):
        controller = _controller(make_context(help_text=["Помощь"]), "помощь")

        controller.run()

        assert controller.text == "Помощь"

    def test_empty_text(self, make_context):
        controller = _controller(make_context(empty_text="Не понял"), "погода")

        controller.run()

        assert controller.calls == [(None, False)]
        assert controller.text == "Не понял"

    def test_tts_only_for_voice_platforms(self, make_context):
        controller = _controller(make_context("telegram"), "привет")

        controller.run()

        assert controller.text == "Текст приветствия"
        assert controller.tts is None

    def test_command_without_callback(self, app_context):
        app_context.add_command("game", ["играть"])
        controller = _controller(app_context, "давай играть")

        controller.run()

        assert controller.calls == [("game", True)]

    def test_command_callback(self, app_context):
        received = []

        def callback(text, controller):
            received.append((text, controller))
            return "ответ"

        app_context.add_command("game", ["играть"], callback)
        controller = _controller(app_context, "играть")

        controller.run()

        assert received == [("играть", controller)]
        assert controller.calls == [(None, True)]
        assert controller.text == "ответ"

    def test_command_before_intents(self, app_context):
        app_context.add_command("hello", ["привет"], lambda text, controller: "команда")
        controller = _controller(app_context, "привет")

        controller.run()

        assert controller.text == "команда"

    def test_remove_command(self, app_context):
        app_context.add_command("game", ["играть"])
        app_context.remove_command("game")
        controller = _controller(app_context, "играть")

        controller.run()

        assert controller.calls == [(None, False)]

    def test_pattern_command(self, app_context):
        app_context.add_command("number", [r"^\d+$"], is_pattern=True)
        controller = _controller(app_context, "15")

        controller.run()

        assert controller.calls == [("number", True)]

    def test_dangerous_pattern_warning(self, app_context):
        app_context.logger = MagicMock()

        app_context.add_command("bad", [r"(a+)+"], is_pattern=True)

        assert "небезопасные" in app_context.logger.warning.call_args[0][0]
        assert "bad" in app_context.commands
