"""Шаблоны входящих запросов платформ для локального консольного теста."""
import time
from typing import Any, Callable


def alisa_request(query: str, user_id: str, count: int, state: Any = None) -> dict[str, Any]:
    return {
        "meta": {
            "locale": "ru-Ru",
            "timezone": "UTC",
            "client_id": "local",
            "interfaces": {"payments": None, "account_linking": None},
        },
        "session": {
            "message_id": count,
            "session_id": "local",
            "skill_id": "local_test",
            "user_id": user_id,
            "new": count == 0,
        },
        "request": {
            "command": query.lower(),
            "original_utterance": query,
            "nlu": {},
            "type": "SimpleUtterance",
        },
        "state": {"session": state or {}},
        "version": "1.0",
    }


def marusia_request(query: str, user_id: str, count: int, state: Any = None) -> dict[str, Any]:
    content = alisa_request(query, user_id, count)
    content["request"]["nlu"] = None
    del content["state"]
    return content


def vk_request(query: str, user_id: str, count: int, state: Any = None) -> dict[str, Any]:
    return {
        "type": "message_new",
        "object": {"message": {"from_id": user_id, "text": query, "id": count}},
    }


def telegram_request(query: str, user_id: str, count: int, state: Any = None) -> dict[str, Any]:
    return {"message": {"chat": {"id": user_id}, "text": query, "message_id": count}}


def viber_request(query: str, user_id: str, count: int, state: Any = None) -> dict[str, Any]:
    return {
        "event": "message",
        "message": {"text": query, "type": "text"},
        "message_token": int(time.time() * 1000),
        "sender": {"id": user_id, "name": "local_name", "api_version": 8},
    }


def smart_app_request(query: str, user_id: str, count: int, state: Any = None) -> dict[str, Any]:
    return {
        "messageName": "MESSAGE_TO_SKILL",
        "uuid": {"userId": user_id, "userChannel": "", "sub": ""},
        "messageId": count,
        "sessionId": user_id,
        "payload": {
            "device": {
                "platformType": "",
                "surface": "",
                "features": {"appTypes": []},
                "capabilities": {
                    "screen": {"available": True},
                    "mic": {"available": True},
                    "speak": {"available": True},
                },
            },
            "app_info": {"projectId": "", "applicationId": "", "appversionId": ""},
            "character": {"id": "sber", "name": "Сбер", "gender": "male", "appeal": "official"},
            "intent": "",
            "meta": {"time": {"timezone_id": "", "timezone_offset_sec": 0, "timestamp": int(time.time() * 1000)}},
            "projectName": "test",
            "new_session": count == 0,
            "message": {
                "normalized_text": query,
                "original_text": query,
                "asr_normalized_message": "",
                "tokenized_elements_list": [],
            },
        },
    }


RequestTemplate = Callable[[str, str, int, Any], dict[str, Any]]

REQUEST_TEMPLATES: dict[str, RequestTemplate] = {
    "alisa": alisa_request,
    "marusia": marusia_request,
    "vk": vk_request,
    "telegram": telegram_request,
    "viber": viber_request,
    "smart_app": smart_app_request,
}
