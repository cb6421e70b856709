"""Форматтеры кнопок под конкретные платформы."""
import json
from typing import Any, Sequence

from umbot.components.button.button import (
    B_LINK,
    Button,
    VK_TYPE_LINK,
    VK_TYPE_PAY,
    VK_TYPE_TEXT,
)
from umbot.utils.text import resize


class AlisaButtonFormatter:
    """Кнопки Алисы: подсказки (hide) и ссылки, или кнопка карточки."""

    def __init__(self, is_card: bool = False) -> None:
        self.is_card = is_card

    def _get_button(self, button: Button) -> dict[str, Any] | None:
        title = resize(button.title, 64)
        if not title:
            return None
        if self.is_card:
            obj: dict[str, Any] = {"text": title}
        else:
            obj = {"title": title, "hide": button.hide}
        if button.payload:
            obj["payload"] = button.payload
        if button.url:
            obj["url"] = resize(button.url, 1024)
        return obj

    def get_buttons(self, buttons: Sequence[Button]) -> list[dict[str, Any]] | dict[str, Any] | None:
        if self.is_card:
            if buttons:
                return self._get_button(buttons[0])
            return []
        objects = []
        for button in buttons:
            obj = self._get_button(button)
            if obj:
                objects.append(obj)
        return objects


class SmartAppButtonFormatter:
    """Подсказки SmartApp (suggestions) или действие карточки."""

    def __init__(self, is_card: bool = False) -> None:
        self.is_card = is_card

    def get_buttons(self, buttons: Sequence[Button]) -> list[dict[str, Any]] | dict[str, Any] | None:
        if self.is_card:
            if not buttons:
                return []
            button = buttons[0]
            if button.url:
                return {"deep_link": button.url, "type": "deep_link"}
            text = resize(button.title, 64)
            if text:
                return {"text": text, "type": "text"}
            return []

        objects = []
        for button in buttons:
            title = resize(button.title, 64)
            if not title:
                continue
            if button.payload:
                action = {"server_action": button.payload, "type": "server_action"}
            else:
                action = {"text": title, "type": "text"}
            objects.append({"title": title, "action": action})
        return objects


class TelegramButtonFormatter:
    """
    Клавиатура Telegram.

    Кнопки со ссылкой и payload попадают в inline_keyboard, кнопки без
    ссылки - в обычную клавиатуру. Без кнопок клавиатура убирается.
    """

    def get_buttons(self, buttons: Sequence[Button]) -> dict[str, Any]:
        inlines = []
        reply = []
        for button in buttons:
            if button.url:
                if button.payload:
                    inlines.append({"text": button.title, "url": button.url, "callback_data": button.payload})
            else:
                reply.append(button.title or "")

        if not inlines and not reply:
            return {"remove_keyboard": True}
        obj: dict[str, Any] = {}
        if inlines:
            obj["inline_keyboard"] = inlines
        if reply:
            obj["keyboard"] = reply
        return obj


class ViberButtonFormatter:
    """Клавиатура Viber."""

    T_REPLY = "reply"
    T_OPEN_URL = "open-url"
    T_LOCATION_PICKER = "location-picker"
    T_SHARE_PHONE = "share-phone"
    T_NONE = "none"

    def get_buttons(self, buttons: Sequence[Button]) -> dict[str, Any] | None:
        result = []
        for button in buttons:
            btn: dict[str, Any] = {"Text": button.title}
            if button.url:
                btn["ActionType"] = self.T_OPEN_URL
                btn["ActionBody"] = button.url
            else:
                btn["ActionType"] = self.T_REPLY
                btn["ActionBody"] = button.title
            btn.update(button.options)
            result.append(btn)

        if not result:
            return None
        return {"DefaultHeight": True, "BgColor": "#FFFFFF", "Buttons": result}


class VkButtonFormatter:
    """
    Клавиатура VK.

    Кнопки с одинаковым значением _group (в options или payload)
    собираются в один ряд клавиатуры.
    """

    GROUP_NAME = "_group"

    def get_buttons(self, buttons: Sequence[Button]) -> dict[str, Any]:
        groups: dict[Any, int] = {}
        rows: list[Any] = []
        for button in buttons:
            button_type = button.type or (VK_TYPE_LINK if button.hide == B_LINK else VK_TYPE_TEXT)
            action: dict[str, Any] = {"type": button_type}
            if button.url:
                action["type"] = VK_TYPE_LINK
                action["link"] = button.url
            action["label"] = button.title

            payload = button.payload
            group = button.options.get(self.GROUP_NAME)
            if isinstance(payload, dict):
                payload = dict(payload)
                if group is None:
                    group = payload.get(self.GROUP_NAME)
                payload.pop(self.GROUP_NAME, None)
            if payload is not None and payload != "":
                action["payload"] = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)

            obj: dict[str, Any] = {"action": action}
            if isinstance(button.payload, dict):
                if "color" in button.payload and not button.url:
                    obj["color"] = button.payload["color"]
                if button_type == VK_TYPE_PAY:
                    obj["hash"] = button.payload.get("hash")
            obj.update({key: value for key, value in button.options.items() if key != self.GROUP_NAME})

            if group is None:
                rows.append(obj)
            elif group in groups:
                rows[groups[group]].append(obj)
            else:
                groups[group] = len(rows)
                rows.append([obj])

        return {"one_time": bool(rows), "buttons": rows}
