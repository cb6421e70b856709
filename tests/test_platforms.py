import json

import pytest

from umbot.controller import BaseBotController
from umbot.platforms import (
    Alisa,
    BasePlatform,
    Marusia,
    SmartApp,
    Telegram,
    Viber,
    Vk,
    PLATFORMS,
    get_platform,
    register_platform,
)
from umbot.protocols import PlatformProtocol


def _alisa_query(command="привет", **overrides):
    query = {
        "meta": {"locale": "ru-RU", "timezone": "Europe/Moscow", "interfaces": {"screen": {}}},
        "session": {
            "message_id": 1,
            "session_id": "session",
            "skill_id": "skill",
            "user_id": "user",
            "application": {"application_id": "app_user"},
            "new": False,
        },
        "request": {
            "command": command,
            "original_utterance": command.capitalize(),
            "type": "SimpleUtterance",
            "nlu": {"tokens": command.split(), "entities": []},
        },
        "version": "1.0",
    }
    query.update(overrides)
    return query


def _smart_app_query(message_name="MESSAGE_TO_SKILL", payload=None):
    base_payload = {
        "device": {"capabilities": {"screen": {"available": True}}},
        "app_info": {"applicationId": "app"},
        "projectName": "project",
        "intent": "old",
        "character": {"appeal": "official"},
        "message": {
            "original_text": "Привет",
            "normalized_text": "привет",
            "entities": {},
            "tokenized_elements_list": [],
        },
        "meta": {},
    }
    base_payload.update(payload or {})
    return {
        "messageName": message_name,
        "sessionId": "session",
        "messageId": 5,
        "uuid": {"userId": "user", "userChannel": "B2C"},
        "payload": base_payload,
    }


class _FakeVkClient:
    def __init__(self):
        self.sent = []

    def users_get(self, user_id):
        return [{"first_name": "fn", "last_name": "ln"}]

    def messages_send(self, peer_id, message, params=None):
        self.sent.append((peer_id, message, params))
        return 1


class _FakeTelegramClient:
    def __init__(self):
        self.messages = []
        self.polls = []

    def send_message(self, chat_id, message, params=None):
        self.messages.append((chat_id, message, params))
        return {"ok": True}

    def send_poll(self, chat_id, question, options, params=None):
        self.polls.append((chat_id, question, options))
        return {"ok": True}


class _FakeViberClient:
    def __init__(self):
        self.messages = []
        self.rich = []

    def send_message(self, receiver, sender, text, params=None):
        self.messages.append((receiver, sender, text, params))
        return {"status": 0}

    def rich_media(self, receiver, rich_media, params=None):
        self.rich.append((receiver, rich_media))
        return {"status": 0}


class _FakeRequest:
    def __init__(self, data=None, status=True):
        self.data = data
        self.status = status
        self.calls = []

    def send(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if not self.status:
            return {"status": False, "err": "error"}
        return {"status": True, "data": self.data}


def _init(platform_cls, context, query, **kwargs):
    controller = BaseBotController(context)
    platform = platform_cls(context, **kwargs)
    return platform, controller, platform.init(query, controller)


@pytest.mark.unit
class TestAlisa:
    def test_init_fills_controller(self, make_context):
        context = make_context("alisa")
        platform, controller, result = _init(Alisa, context, _alisa_query())

        assert result is True
        assert controller.user_id == "app_user"
        assert controller.user_command == "привет"
        assert controller.original_user_command == "Привет"
        assert controller.message_id == 1
        assert controller.is_screen is True
        assert context.params.app_id == "skill"
        assert context.params.user_id == "app_user"
        assert controller.nlu.get_intents() is None

    def test_init_accepts_json_string(self, make_context):
        _, controller, result = _init(Alisa, make_context("alisa"), json.dumps(_alisa_query()))

        assert result is True
        assert controller.user_command == "привет"

    def test_auth_user_id(self, make_context):
        context = make_context("alisa", y_is_auth_user=True)
        query = _alisa_query()
        query["session"]["user"] = {"user_id": "auth_user", "access_token": "token"}
        platform, controller, _ = _init(Alisa, context, query)

        assert controller.user_id == "auth_user"
        assert controller.user_token == "token"

    def test_button_payload_command(self, make_context):
        query = _alisa_query()
        query["request"] = {"type": "ButtonPressed", "payload": "да", "nlu": {}}
        _, controller, _ = _init(Alisa, make_context("alisa"), query)

        assert controller.user_command == "да"
        assert controller.payload == "да"

    def test_empty_query(self, make_context):
        platform, _, result = _init(Alisa, make_context("alisa"), None)

        assert result is False
        assert platform.get_error() == "Alisa.init(): Отправлен пустой запрос!"

    def test_incorrect_query(self, make_context):
        platform, _, result = _init(Alisa, make_context("alisa"), {"version": "1.0"})

        assert result is False
        assert "Не корректные данные" in platform.get_error()

    def test_account_linking_complete(self, make_context):
        query = {"account_linking_complete_event": {}, "version": "1.0"}
        _, controller, result = _init(Alisa, make_context("alisa"), query)

        assert result is True
        assert controller.is_auth_success is True
        assert controller.user_events == {"auth": {"status": True}}

    def test_ping(self, make_context):
        query = _alisa_query("ping")
        query["request"]["original_utterance"] = "ping"
        platform, _, result = _init(Alisa, make_context("alisa"), query)

        assert result is True
        assert platform.send_in_init["response"]["text"] == "pong"

    def test_get_context(self, make_context):
        platform, controller, _ = _init(Alisa, make_context("alisa"), _alisa_query())
        controller.text = "a" * 1100
        controller.buttons.add_btn("1")
        controller.is_end = True

        result = platform.get_context()

        assert result["version"] == "1.0"
        response = result["response"]
        assert len(response["text"]) == 1024
        assert response["text"].endswith("...")
        assert response["end_session"] is True
        assert response["buttons"] == [{"title": "1", "hide": True}]
        assert "card" not in response

    def test_get_context_without_screen(self, make_context):
        query = _alisa_query()
        query["meta"]["interfaces"] = {}
        platform, controller, _ = _init(Alisa, make_context("alisa"), query)
        controller.text = "text"

        response = platform.get_context()["response"]

        assert controller.is_screen is False
        assert "buttons" not in response

    def test_start_account_linking(self, make_context):
        platform, controller, _ = _init(Alisa, make_context("alisa"), _alisa_query())
        controller.is_auth = True

        result = platform.get_context()

        assert result["start_account_linking"] == {}
        assert "response" not in result

    def test_local_storage_state(self, make_context):
        query = _alisa_query(state={"session": {"value": 1}})
        platform, controller, _ = _init(Alisa, make_context("alisa"), query)

        assert platform.is_local_storage() is True
        assert platform.get_local_storage() == {"value": 1}

        platform.is_used_local_storage = True
        controller.user_data = {"value": 2}
        result = platform.get_context()

        assert result["session_state"] == {"value": 2}

    def test_processing_time_error(self, make_context):
        platform, controller, _ = _init(Alisa, make_context("alisa"), _alisa_query())
        controller.text = "text"
        platform.time_start -= 3

        platform.get_context()

        assert "Превышено ограничение" in platform.get_error()


@pytest.mark.unit
class TestMarusia:
    def test_session_in_response(self, make_context):
        query = _alisa_query()
        platform, controller, result = _init(Marusia, make_context("marusia"), query)
        controller.text = "text"
        controller.tts = "tts"

        context = platform.get_context()

        assert result is True
        assert controller.user_id == "user"
        assert context["session"] == {"session_id": "session", "message_id": 1, "user_id": "user"}
        assert context["response"]["text"] == "text"
        assert context["response"]["tts"] == "tts"

    def test_state_only_with_local_storage(self, make_context):
        query = _alisa_query(state={"user": {"value": 1}})
        platform, controller, _ = _init(Marusia, make_context("marusia"), query)
        controller.user_data = {"value": 2}

        assert "user_state_update" not in platform.get_context()

        platform.is_used_local_storage = True
        assert platform.get_context()["user_state_update"] == {"value": 2}


@pytest.mark.unit
class TestVk:
    def test_confirmation(self, make_context):
        context = make_context("vk", vk_confirmation_token="code")
        platform, _, result = _init(Vk, context, {"type": "confirmation"}, client=_FakeVkClient())

        assert result is True
        assert platform.send_in_init == "code"

    def test_confirmation_without_token(self, make_context):
        platform, _, result = _init(Vk, make_context("vk"), {"type": "confirmation"}, client=_FakeVkClient())

        assert result is False
        assert "код подтверждения" in platform.get_error()

    def test_message_new(self, make_context):
        client = _FakeVkClient()
        query = {
            "type": "message_new",
            "object": {"message": {"from_id": 42, "id": 7, "text": " Привет ", "payload": '{"a": 1}'}},
        }
        platform, controller, result = _init(Vk, make_context("vk"), query, client=client)

        assert result is True
        assert controller.user_id == 42
        assert controller.user_command == "привет"
        assert controller.original_user_command == "Привет"
        assert controller.message_id == 7
        assert controller.nlu.get_user_name() == {"username": None, "first_name": "fn", "last_name": "ln"}

        controller.text = "ответ"
        context = platform.get_context()

        assert context["peer_id"] == 42
        assert context["message"] == "ответ"
        assert "keyboard" in context["params"]
        assert platform.deliver(context) == "ok"
        assert client.sent == [(42, "ответ", context["params"])]

    def test_old_api_message(self, make_context):
        query = {"type": "message_new", "object": {"from_id": 1, "id": 2, "text": "тест"}}
        _, controller, result = _init(Vk, make_context("vk"), query, client=_FakeVkClient())

        assert result is True
        assert controller.user_id == 1
        assert controller.user_command == "тест"

    def test_not_send(self, make_context):
        client = _FakeVkClient()
        query = {"type": "message_new", "object": {"message": {"from_id": 1, "id": 2, "text": "тест"}}}
        platform, controller, _ = _init(Vk, make_context("vk"), query, client=client)
        controller.is_send = False

        assert platform.deliver(platform.get_context()) == "ok"
        assert client.sent == []

    def test_unknown_type(self, make_context):
        platform, _, result = _init(Vk, make_context("vk"), {"type": "wall_post_new"}, client=_FakeVkClient())

        assert result is False
        assert platform.get_error() == "Vk.init(): Некорректный тип данных!"


@pytest.mark.unit
class TestTelegram:
    def test_message(self, make_context):
        client = _FakeTelegramClient()
        query = {
            "update_id": 1,
            "message": {
                "message_id": 3,
                "text": "Привет",
                "chat": {"id": 100, "username": "user", "first_name": "fn", "last_name": "ln"},
            },
        }
        platform, controller, result = _init(Telegram, make_context("telegram"), query, client=client)

        assert result is True
        assert controller.user_id == 100
        assert controller.user_command == "привет"
        assert controller.message_id == 3
        assert controller.nlu.get_user_name()["username"] == "user"

        controller.text = "ответ"
        context = platform.get_context()

        assert context["chat_id"] == 100
        assert context["params"]["parse_mode"] == "markdown"
        assert context["params"]["reply_markup"] == {"remove_keyboard": True}
        assert context["poll"] is None
        assert platform.deliver(context) == "ok"
        assert client.messages == [(100, "ответ", context["params"])]
        assert client.polls == []

    def test_callback_query(self, make_context):
        query = {
            "callback_query": {
                "data": "Да",
                "from": {"id": 5},
                "message": {"message_id": 9, "chat": {"id": 100}},
            }
        }
        _, controller, result = _init(Telegram, make_context("telegram"), query, client=_FakeTelegramClient())

        assert result is True
        assert controller.user_id == 100
        assert controller.user_command == "да"
        assert controller.payload == "Да"

    def test_deliver_poll(self, make_context):
        client = _FakeTelegramClient()
        platform = Telegram(make_context("telegram"), client=client)
        context = {
            "chat_id": 1,
            "text": "выбор",
            "params": {},
            "poll": {"question": "вопрос", "options": ["1", "2"]},
        }

        assert platform.deliver(context) == "ok"
        assert client.polls == [(1, "вопрос", ["1", "2"])]

    def test_unknown_update(self, make_context):
        platform, _, result = _init(Telegram, make_context("telegram"), {"edited_message": {}}, client=_FakeTelegramClient())

        assert result is False
        assert "Неизвестный тип" in platform.get_error()


@pytest.mark.unit
class TestViber:
    def test_conversation_started(self, make_context):
        query = {"event": "conversation_started", "user": {"id": "u1", "name": "user first last", "api_version": 3}}
        context = make_context("viber")
        _, controller, result = _init(Viber, context, query, client=_FakeViberClient())

        assert result is True
        assert controller.user_id == "u1"
        assert controller.message_id == 0
        assert context.params.viber_api_version == 3
        assert controller.nlu.get_user_name() == {"username": "user", "first_name": "first", "last_name": "last"}

    def test_message(self, make_context):
        client = _FakeViberClient()
        query = {
            "event": "message",
            "message_token": 123,
            "sender": {"id": "u1", "name": "user"},
            "message": {"type": "text", "text": "Привет"},
        }
        context = make_context("viber", viber_sender="bot")
        platform, controller, result = _init(Viber, context, query, client=client)

        assert result is True
        assert controller.user_command == "привет"
        assert controller.message_id == 123

        controller.text = "ответ"
        controller.buttons.add_btn("1")
        response = platform.get_context()

        assert response["params"]["keyboard"]["Type"] == "keyboard"
        assert response["rich_media"] == []
        assert platform.deliver(response) == "ok"
        assert client.messages == [("u1", "bot", "ответ", response["params"])]
        assert client.rich == []

    def test_unknown_event(self, make_context):
        platform, _, result = _init(Viber, make_context("viber"), {"event": "seen"}, client=_FakeViberClient())

        assert result is False
        assert platform.get_error() == "Viber.init(): Событие seen не обрабатывается!"


@pytest.mark.unit
class TestSmartApp:
    def test_message_to_skill(self, make_context):
        context = make_context("smart_app")
        platform, controller, result = _init(SmartApp, context, _smart_app_query(), request=_FakeRequest())

        assert result is True
        assert controller.user_id == "user"
        assert controller.user_command == "привет"
        assert controller.original_user_command == "Привет"
        assert controller.old_intent_name == "old"
        assert controller.appeal == "official"
        assert context.params.app_id == "app"

        controller.text = "ответ"
        controller.this_intent_name = "greeting"
        response = platform.get_context()

        assert response["messageName"] == "ANSWER_TO_USER"
        assert response["uuid"] == {"userId": "user", "userChannel": "B2C"}
        payload = response["payload"]
        assert payload["pronounceText"] == "ответ"
        assert payload["pronounceTextType"] == "application/text"
        assert payload["intent"] == "greeting"
        assert payload["projectName"] == "project"
        assert payload["items"] == [
            {"bubble": {"text": "ответ", "markdown": True, "expand_policy": "auto_expand"}}
        ]
        assert payload["suggestions"] == {"buttons": []}

    def test_end_session(self, make_context):
        platform, controller, _ = _init(SmartApp, make_context("smart_app"), _smart_app_query(), request=_FakeRequest())
        controller.text = "пока"
        controller.is_end = True

        payload = platform.get_context()["payload"]

        assert payload["finished"] is True
        assert payload["auto_listening"] is False
        assert payload["items"][-1] == {"command": {"type": "close_app"}}

    def test_run_app(self, make_context):
        query = _smart_app_query("RUN_APP", {"server_action": {"parameters": "start"}})
        _, controller, result = _init(SmartApp, make_context("smart_app"), query, request=_FakeRequest())

        assert result is True
        assert controller.message_id == 0
        assert controller.user_command == "start"
        assert controller.original_user_command == "start"

    def test_rating(self, make_context):
        query = _smart_app_query(
            "RATING_RESULT",
            {"status_code": {"code": 1}, "rating": {"estimation": 5}},
        )
        platform, controller, _ = _init(SmartApp, make_context("smart_app"), query, request=_FakeRequest())

        assert controller.user_events == {"rating": {"status": True, "value": 5}}
        rating = platform.get_rating_context()
        assert rating["messageName"] == "CALL_RATING"
        assert rating["payload"] == {}

    def test_incorrect_query(self, make_context):
        platform, _, result = _init(SmartApp, make_context("smart_app"), {"payload": {}}, request=_FakeRequest())

        assert result is False
        assert platform.get_error() == "SmartApp.init(): Не корректные данные!"

    def test_local_storage(self, make_context):
        request = _FakeRequest({"value": 1})
        platform, _, _ = _init(SmartApp, make_context("smart_app"), _smart_app_query(), request=request)

        assert platform.is_local_storage() is True
        assert platform.get_local_storage() == {"value": 1}

        platform.set_local_storage({"value": 2})
        url, kwargs = request.calls[-1]
        assert url.endswith("/user")
        assert kwargs["json"] == {"value": 2}

    def test_local_storage_failure(self, make_context):
        platform, _, _ = _init(SmartApp, make_context("smart_app"), _smart_app_query(), request=_FakeRequest(status=False))

        assert platform.get_local_storage() == {}


@pytest.mark.unit
class TestRegistry:
    def test_builtin_platforms(self, app_context):
        assert isinstance(get_platform("alisa", app_context), Alisa)
        assert isinstance(get_platform("marusia", app_context), Marusia)
        assert get_platform("unknown", app_context) is None

    @pytest.mark.parametrize("app_type", ["alisa", "marusia", "vk", "telegram", "viber", "smart_app"])
    def test_platform_protocol(self, make_context, app_type):
        assert isinstance(get_platform(app_type, make_context(app_type)), PlatformProtocol)

    def test_register_platform(self, monkeypatch, app_context):
        class UserPlatform(BasePlatform):
            def init(self, query, controller):
                self.controller = controller
                return True

            def get_context(self):
                return {"text": self.controller.text}

        monkeypatch.setitem(PLATFORMS, "user_application", UserPlatform)
        register_platform("user_application", UserPlatform)

        assert isinstance(get_platform("user_application", app_context), UserPlatform)
