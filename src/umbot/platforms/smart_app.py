"""Адаптер Сбер SmartApp."""
from typing import TYPE_CHECKING, Any

from umbot.api.request import Request
from umbot.components.button.buttons import T_SMARTAPP_BUTTONS
from umbot.core.app_context import AppContext
from umbot.platforms.base import BasePlatform
from umbot.utils.text import resize

if TYPE_CHECKING:
    from umbot.controller import BotController

USER_DATA_URL = "https://smartapp-code.sberdevices.ru/tools/api/data/"


class SmartApp(BasePlatform):
    """
    Смартап Салюта.

    Ответ ANSWER_TO_USER возвращается в теле вебхука. Данные пользователя
    можно хранить на стороне платформы (is_local_storage всегда True).
    """

    MAX_TIME_REQUEST = 2800
    MAX_BUBBLE_LENGTH = 250

    def __init__(self, app_context: AppContext, request: Request | None = None) -> None:
        super().__init__(app_context)
        self.request = request or Request(
            app_context.logger,
            timeout=app_context.config.http.timeout,
            max_retries=app_context.config.http.max_retries,
        )
        self._session: dict[str, Any] = {}

    def _get_payload(self) -> dict[str, Any]:
        controller = self.controller
        payload: dict[str, Any] = {
            "pronounceText": controller.text,
            "pronounceTextType": "application/text",
            "device": self._session.get("device"),
            "intent": controller.this_intent_name,
            "projectName": self._session.get("projectName"),
            "auto_listening": not controller.is_end,
            "finished": controller.is_end,
        }
        if controller.emotion:
            payload["emotion"] = {"emotionId": controller.emotion}

        items: list[dict[str, Any]] = []
        if controller.text:
            items.append({
                "bubble": {
                    "text": resize(controller.text, self.MAX_BUBBLE_LENGTH),
                    "markdown": True,
                    "expand_policy": "auto_expand",
                }
            })
        if controller.tts:
            payload["pronounceText"] = controller.tts
            payload["pronounceTextType"] = "application/ssml"

        if controller.is_screen:
            if controller.card.images or controller.card.template:
                card = controller.card.get_cards()
                if card:
                    items.append(card)
            payload["suggestions"] = {
                "buttons": controller.buttons.get_buttons(T_SMARTAPP_BUTTONS),
            }
        if controller.is_end:
            items.append({"command": {"type": "close_app"}})
        if items:
            payload["items"] = items
        return payload

    def _init_user_command(self, content: dict[str, Any]) -> None:
        controller = self.controller
        payload = content.get("payload") or {}
        message = payload.get("message") or {}
        controller.message_id = content.get("messageId")
        message_name = content.get("messageName")

        if message_name in ("MESSAGE_TO_SKILL", "CLOSE_APP"):
            controller.user_command = message.get("normalized_text") or ""
            controller.original_user_command = message.get("original_text") or ""
        elif message_name in ("SERVER_ACTION", "RUN_APP"):
            controller.payload = (payload.get("server_action") or {}).get("parameters")
            if isinstance(controller.payload, str):
                controller.user_command = controller.payload
                controller.original_user_command = controller.payload
            if message_name == "RUN_APP":
                controller.message_id = 0
                controller.original_user_command = controller.user_command
                controller.user_command = ""
        elif message_name == "RATING_RESULT":
            controller.payload = payload
            controller.message_id = 0
            controller.user_events = {
                "rating": {
                    "status": (payload.get("status_code") or {}).get("code") == 1,
                    "value": (payload.get("rating") or {}).get("estimation"),
                }
            }

        if not controller.user_command:
            controller.user_command = controller.original_user_command

    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        content = self._parse_query(query)
        if not content:
            self.error = "SmartApp.init(): Отправлен пустой запрос!"
            return False
        if "payload" not in content or "uuid" not in content:
            self.error = "SmartApp.init(): Не корректные данные!"
            return False
        self.controller = controller
        controller.request_object = content
        self._init_user_command(content)

        payload = content["payload"]
        message = payload.get("message") or {}
        device = payload.get("device") or {}
        self._session = {
            "device": device,
            "meta": payload.get("meta"),
            "sessionId": content.get("sessionId"),
            "messageId": content.get("messageId"),
            "uuid": content["uuid"],
            "projectName": payload.get("projectName"),
        }

        controller.old_intent_name = payload.get("intent")
        controller.appeal = (payload.get("character") or {}).get("appeal")
        controller.user_id = content["uuid"].get("userId")
        self.app_context.params.user_id = controller.user_id
        controller.nlu.set_nlu({
            "entities": message.get("entities"),
            "tokens": message.get("tokenized_elements_list"),
        })
        controller.user_meta = payload.get("meta") or {}
        self.app_context.params.app_id = (payload.get("app_info") or {}).get("applicationId")

        screen = (device.get("capabilities") or {}).get("screen")
        controller.is_screen = screen.get("available", True) if screen else True
        return True

    def _base_response(self, message_name: str) -> dict[str, Any]:
        return {
            "messageName": message_name,
            "sessionId": self._session.get("sessionId"),
            "messageId": self._session.get("messageId"),
            "uuid": self._session.get("uuid"),
        }

    def get_rating_context(self) -> dict[str, Any]:
        result = self._base_response("CALL_RATING")
        result["payload"] = {}
        return result

    def get_context(self) -> dict[str, Any]:
        controller = self.controller
        result = self._base_response("ANSWER_TO_USER")
        if controller.sound.sounds:
            if controller.tts is None:
                controller.tts = controller.text
            controller.tts = controller.sound.get_sounds(controller.tts)
        result["payload"] = self._get_payload()
        time_end = self.get_processing_time()
        if time_end >= self.MAX_TIME_REQUEST:
            self.error = (
                f"SmartApp.get_context(): Превышено ограничение на отправку ответа. "
                f"Время ответа составило: {time_end / 1000} сек."
            )
        return result

    def is_local_storage(self) -> bool:
        return True

    def get_local_storage(self) -> Any:
        result = self.request.send(f"{USER_DATA_URL}{self.controller.user_id}", method="GET")
        if result["status"] and result["data"]:
            return result["data"]
        return {}

    def set_local_storage(self, data: Any) -> None:
        result = self.request.send(
            f"{USER_DATA_URL}{self.controller.user_id}",
            json=data,
            headers=Request.HEADER_AP_JSON,
        )
        if not result["status"]:
            self.app_context.log_error(f"SmartApp.set_local_storage(): {result['err']}")
