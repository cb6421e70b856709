import json

import pytest
import requests

from umbot.api import (
    MarusiaRequest,
    Request,
    TelegramRequest,
    ViberRequest,
    VkRequest,
    YandexImageRequest,
    YandexSpeechKit,
)


class _FakeResponse:
    def __init__(self, data=None, status_code=200, content=None):
        self.data = data
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = json.dumps(data) if data is not None else ""
        self.content = content if content is not None else self.text.encode()

    def json(self):
        if self.data is None:
            raise ValueError("No JSON object could be decoded")
        return self.data


class _FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class _FakeRequest:
    """Подменяет Request у клиентов API и запоминает вызовы."""

    def __init__(self, data=None, status=True):
        self.data = data
        self.status = status
        self.calls = []

    def send(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if not self.status:
            return {"status": False, "err": "network error"}
        return {"status": True, "data": self.data}


@pytest.mark.unit
class TestRequest:
    def test_empty_url(self, logger):
        session = _FakeSession([])

        result = Request(logger, session=session).send(None)

        assert result == {"status": False, "err": "Не указан url!"}
        assert session.calls == []

    def test_get_by_default(self, logger):
        session = _FakeSession([_FakeResponse({"a": 1})])

        result = Request(logger, session=session).send("https://test.ru", params={"q": 1})

        assert result == {"status": True, "data": {"a": 1}}
        assert session.calls[0]["method"] == "GET"
        assert session.calls[0]["params"] == {"q": 1}

    def test_post_with_body(self, logger):
        session = _FakeSession([_FakeResponse({"ok": True})])

        Request(logger, session=session).send("https://test.ru", json={"a": 1})

        assert session.calls[0]["method"] == "POST"
        assert session.calls[0]["json"] == {"a": 1}

    def test_http_error(self, logger):
        session = _FakeSession([_FakeResponse({"error": "boom"}, status_code=500)])

        result = Request(logger, session=session).send("https://test.ru")

        assert result["status"] is False
        assert "HTTP 500" in result["err"]

    def test_invalid_json(self, logger):
        session = _FakeSession([_FakeResponse(None)])

        result = Request(logger, session=session).send("https://test.ru")

        assert result["status"] is False
        assert "Некорректный JSON" in result["err"]

    def test_raw_content(self, logger):
        session = _FakeSession([_FakeResponse(None, content=b"audio")])

        result = Request(logger, session=session).send("https://test.ru", is_convert_json=False)

        assert result == {"status": True, "data": b"audio"}

    def test_missing_attach(self, logger, tmp_path):
        session = _FakeSession([])

        result = Request(logger, session=session).send("https://test.ru", attach=str(tmp_path / "none.png"))

        assert result["status"] is False
        assert "Не удалось найти файл" in result["err"]
        assert session.calls == []

    def test_attach_file(self, logger, tmp_path):
        path = tmp_path / "image.png"
        path.write_bytes(b"image")
        session = _FakeSession([_FakeResponse({"ok": True})])

        Request(logger, session=session).send("https://test.ru", attach=str(path), attach_name="photo")

        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["files"]["photo"][0] == "image.png"

    def test_retry_on_connection_error(self, logger):
        session = _FakeSession([requests.exceptions.ConnectionError("reset"), _FakeResponse({"a": 1})])

        result = Request(logger, max_retries=2, session=session).send("https://test.ru")

        assert result == {"status": True, "data": {"a": 1}}
        assert len(session.calls) == 2

    def test_connection_error(self, logger):
        session = _FakeSession([requests.exceptions.Timeout("timeout")])

        result = Request(logger, max_retries=1, session=session).send("https://test.ru")

        assert result["status"] is False
        assert "timeout" in result["err"]

    def test_retry_resends_attached_file(self, logger, tmp_path):
        path = tmp_path / "image.png"
        path.write_bytes(b"IMAGEDATA")
        bodies = []

        class ReadingSession(_FakeSession):
            def request(self, method, url, **kwargs):
                bodies.append(kwargs["files"]["photo"][1].read())
                return super().request(method, url, **kwargs)

        session = ReadingSession([requests.exceptions.ConnectionError("reset"), _FakeResponse({"ok": True})])

        result = Request(logger, max_retries=2, session=session).send(
            "https://test.ru", attach=str(path), attach_name="photo"
        )

        assert result["status"] is True
        assert bodies == [b"IMAGEDATA", b"IMAGEDATA"]

    def test_read_timeout_is_not_retried(self, logger):
        session = _FakeSession([requests.exceptions.ReadTimeout("read timeout"), _FakeResponse({"a": 1})])

        result = Request(logger, max_retries=2, session=session).send("https://test.ru", json={"text": "hi"})

        assert result["status"] is False
        assert len(session.calls) == 1

    def test_connect_timeout_is_retried(self, logger):
        session = _FakeSession([requests.exceptions.ConnectTimeout("connect timeout"), _FakeResponse({"a": 1})])

        result = Request(logger, max_retries=2, session=session).send("https://test.ru")

        assert result == {"status": True, "data": {"a": 1}}
        assert len(session.calls) == 2


@pytest.mark.unit
class TestVkRequest:
    def test_without_token(self, make_context):
        request = _FakeRequest({"response": 1})
        vk = VkRequest(make_context("vk"), request=request)

        assert vk.messages_send(1, "text") is None
        assert request.calls == []

    def test_messages_send(self, make_context):
        request = _FakeRequest({"response": 10})
        vk = VkRequest(make_context("vk", vk_token="token"), request=request)

        result = vk.messages_send(
            1,
            "text",
            {
                "keyboard": {"one_time": False, "buttons": []},
                "template": {"type": "carousel"},
                "attachments": ["photo1_2", "doc1_3"],
                "random_id": 5,
            },
        )

        assert result == 10
        call = request.calls[0]
        assert call["url"] == "https://api.vk.ru/method/messages.send"
        form = call["data"]
        assert form["peer_id"] == 1
        assert form["message"] == "text"
        assert form["random_id"] == 5
        assert form["attachment"] == "photo1_2,doc1_3"
        assert json.loads(form["keyboard"]) == {"one_time": False, "buttons": []}
        assert "template" not in form
        assert form["access_token"] == "token"
        assert form["v"] == VkRequest.VK_API_VERSION

    def test_domain_peer(self, make_context):
        request = _FakeRequest({"response": 1})
        vk = VkRequest(make_context("vk", vk_token="token"), request=request)

        vk.messages_send("durov", "text")

        assert request.calls[0]["data"]["domain"] == "durov"

    def test_api_error(self, make_context):
        request = _FakeRequest({"error": {"error_code": 5, "error_msg": "auth failed"}})
        vk = VkRequest(make_context("vk", vk_token="token"), request=request)

        assert vk.users_get("durov") is None
        assert "auth failed" in vk.error
        assert request.calls[0]["data"]["user_ids"] == "durov"

    def test_network_error(self, make_context):
        vk = VkRequest(make_context("vk", vk_token="token"), request=_FakeRequest(status=False))

        assert vk.users_get(1) is None


@pytest.mark.unit
def test_marusia_request_uses_marusia_token(make_context):
    request = _FakeRequest({"response": {"id": 1}})
    marusia = MarusiaRequest(make_context("marusia", marusia_token="m_token", vk_token="vk_token"), request=request)

    assert marusia.marusia_create_audio({"sha": "1"}) == {"id": 1}
    call = request.calls[0]
    assert call["url"].endswith("marusia.createAudio")
    assert call["data"]["access_token"] == "m_token"
    assert json.loads(call["data"]["audio_meta"]) == {"sha": "1"}


@pytest.mark.unit
class TestTelegramRequest:
    def test_send_message(self, make_context):
        request = _FakeRequest({"ok": True, "result": {"message_id": 1}})
        telegram = TelegramRequest(make_context("telegram", telegram_token="token"), request=request)

        result = telegram.send_message(1, "text", {"parse_mode": "markdown"})

        assert result["ok"] is True
        call = request.calls[0]
        assert call["url"] == "https://api.telegram.org/bottoken/sendMessage"
        assert call["json"] == {"parse_mode": "markdown", "chat_id": 1, "text": "text"}

    def test_api_error(self, make_context):
        request = _FakeRequest({"ok": False, "description": "chat not found"})
        telegram = TelegramRequest(make_context("telegram", telegram_token="token"), request=request)

        assert telegram.send_message(1, "text") is None
        assert telegram.error == "chat not found"

    def test_poll_needs_two_options(self, make_context):
        request = _FakeRequest({"ok": True})
        telegram = TelegramRequest(make_context("telegram", telegram_token="token"), request=request)

        assert telegram.send_poll(1, "question", ["1"]) is None
        assert request.calls == []

    def test_send_photo_by_url(self, make_context):
        request = _FakeRequest({"ok": True})
        telegram = TelegramRequest(make_context("telegram", telegram_token="token"), request=request)

        telegram.send_photo(1, "https://test.ru/image.png", "desc")

        assert request.calls[0]["json"] == {"caption": "desc", "chat_id": 1, "photo": "https://test.ru/image.png"}

    def test_send_photo_bytes(self, make_context):
        request = _FakeRequest({"ok": True})
        telegram = TelegramRequest(make_context("telegram", telegram_token="token"), request=request)

        telegram.send_photo(1, b"image", params={"reply_markup": {"remove_keyboard": True}})

        call = request.calls[0]
        assert call["attach"] == b"image"
        assert call["attach_name"] == "photo"
        assert call["data"]["reply_markup"] == '{"remove_keyboard": true}'


@pytest.mark.unit
class TestViberRequest:
    def test_send_message(self, make_context):
        request = _FakeRequest({"status": 0, "status_message": "ok"})
        viber = ViberRequest(make_context("viber", viber_token="token"), request=request)

        result = viber.send_message("user", "bot", "text")

        assert result["status"] == 0
        call = request.calls[0]
        assert call["url"] == "https://chatapi.viber.com/pa/send_message"
        assert call["headers"] == {"X-Viber-Auth-Token": "token"}
        assert call["json"]["sender"] == {"name": "bot"}
        assert call["json"]["min_api_version"] == 2

    def test_error_status(self, make_context):
        request = _FakeRequest({"status": 5, "status_message": "receiverNotSubscribed"})
        viber = ViberRequest(make_context("viber", viber_token="token"), request=request)

        assert viber.send_message("user", "bot", "text") is None
        assert viber.error == "receiverNotSubscribed"

    def test_rich_media_rows(self, make_context):
        request = _FakeRequest({"status": 0})
        viber = ViberRequest(make_context("viber", viber_token="token"), request=request)

        viber.rich_media("user", [{"Columns": 6}, {"Columns": 6}])

        assert request.calls[0]["json"]["rich_media"]["ButtonsGroupRows"] == 2

    def test_send_local_file(self, make_context):
        request = _FakeRequest({"status": 0})
        viber = ViberRequest(make_context("viber", viber_token="token"), request=request)

        assert viber.send_file("user", "/tmp/file.txt") is None
        assert request.calls == []


@pytest.mark.unit
class TestYandex:
    def test_upload_without_skill(self, make_context):
        request = _FakeRequest({"image": {"id": "1"}})
        image = YandexImageRequest(make_context("alisa", yandex_token="token"), request=request)

        assert image.download_image_url("https://test.ru/image.png") is None
        assert request.calls == []

    def test_upload_image(self, make_context):
        request = _FakeRequest({"image": {"id": "image_id", "origUrl": "https://test.ru/image.png"}})
        image = YandexImageRequest(make_context("alisa", yandex_token="token"), skill_id="skill", request=request)

        result = image.download_image_url("https://test.ru/image.png")

        assert result["id"] == "image_id"
        call = request.calls[0]
        assert call["url"] == "https://dialogs.yandex.net/api/v1/skills/skill/images"
        assert call["method"] == "POST"
        assert call["headers"] == {"Authorization": "OAuth token"}

    def test_quota(self, make_context):
        request = _FakeRequest({"images": {"quota": {"total": 100, "used": 1}}})
        image = YandexImageRequest(make_context("alisa", yandex_token="token"), request=request)

        assert image.check_out_place() == {"total": 100, "used": 1}

    def test_speech_kit_without_token(self, make_context):
        request = _FakeRequest(b"audio")
        speech = YandexSpeechKit(make_context("alisa"), request=request)

        assert speech.get_tts("текст") is None
        assert request.calls == []

    def test_speech_kit(self, make_context):
        request = _FakeRequest(b"audio")
        speech = YandexSpeechKit(make_context("alisa", yandex_speech_kit_token="key"), request=request)
        speech.voice = YandexSpeechKit.V_ALENA
        speech.emotion = YandexSpeechKit.E_GOOD

        assert speech.get_tts("текст") == b"audio"
        call = request.calls[0]
        assert call["headers"] == {"Authorization": "Api-Key key"}
        assert call["is_convert_json"] is False
        assert call["data"]["emotion"] == "good"
        assert "speed" not in call["data"]

    def test_speech_kit_speed_bounds(self, make_context):
        speech = YandexSpeechKit(make_context("alisa"), request=_FakeRequest())
        speech.text = "текст"
        speech.speed = 5
        speech.voice = YandexSpeechKit.V_NICK

        post = speech._init_post()

        assert post["speed"] == 1.0
        assert "emotion" not in post
