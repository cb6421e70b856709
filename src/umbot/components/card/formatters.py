"""Форматтеры карточек под конкретные платформы."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from umbot.api.telegram import TelegramRequest
from umbot.components.button import (
    T_ALISA_CARD_BUTTON,
    T_SMARTAPP_BUTTON_CARD,
    T_VIBER_BUTTONS,
    T_VK_BUTTONS,
)
from umbot.core.app_context import AppContext
from umbot.models.image_tokens import ImageTokens
from umbot.utils.text import resize

if TYPE_CHECKING:
    from umbot.components.card.card import CardData
    from umbot.components.image import Image


class BaseCardFormatter(ABC):
    """
    Общая часть форматтеров: получение идентификатора изображения.

    Если у изображения нет image_token, но задан image_dir, файл
    загружается на платформу через ImageTokens.
    """

    TOKEN_TYPE: int | None = None

    def __init__(self, app_context: AppContext) -> None:
        self.app_context = app_context

    def _get_token(self, image: "Image", user_id: str | int | None = None) -> str | None:
        if image.image_token or not image.image_dir or self.TOKEN_TYPE is None:
            return image.image_token
        model = ImageTokens(self.app_context)
        model.type = self.TOKEN_TYPE
        model.path = image.image_dir
        model.caption = image.desc
        return model.get_token(user_id)

    @abstractmethod
    def get_card(self, card: "CardData") -> Any:
        pass


class AlisaCardFormatter(BaseCardFormatter):
    """BigImage, ItemsList или ImageGallery."""

    CARD_BIG_IMAGE = "BigImage"
    CARD_ITEMS_LIST = "ItemsList"
    CARD_IMAGE_GALLERY = "ImageGallery"
    MAX_IMAGES = 5
    MAX_GALLERY_IMAGES = 7
    TOKEN_TYPE = ImageTokens.T_ALISA
    SUPPORTS_GALLERY = True

    def _get_items(self, card: "CardData") -> list[dict[str, Any]]:
        is_gallery = card.is_used_gallery and self.SUPPORTS_GALLERY
        max_count = self.MAX_GALLERY_IMAGES if is_gallery else self.MAX_IMAGES
        items = []
        for image in card.images[:max_count]:
            item: dict[str, Any] = {"title": resize(image.title, 128)}
            if not is_gallery:
                item["description"] = resize(image.desc, 256)
            token = self._get_token(image, card.user_id)
            if token:
                item["image_id"] = token
            if not is_gallery:
                button = image.button.get_buttons(T_ALISA_CARD_BUTTON)
                if button and button.get("text"):
                    item["button"] = button
            items.append(item)
        return items

    def get_card(self, card: "CardData") -> dict[str, Any] | None:
        if not card.images:
            return None

        if card.is_one:
            image = card.images[0]
            token = self._get_token(image, card.user_id)
            if not token:
                return None
            button = image.button.get_buttons(T_ALISA_CARD_BUTTON)
            if not (button and button.get("text")):
                button = card.button.get_buttons(T_ALISA_CARD_BUTTON)
            obj: dict[str, Any] = {
                "type": self.CARD_BIG_IMAGE,
                "image_id": token,
                "title": resize(image.title, 128),
                "description": resize(image.desc, 256),
            }
            if button and button.get("text"):
                obj["button"] = button
            return obj

        if card.is_used_gallery and self.SUPPORTS_GALLERY:
            return {"type": self.CARD_IMAGE_GALLERY, "items": self._get_items(card)}

        obj = {
            "type": self.CARD_ITEMS_LIST,
            "header": {"text": resize(card.title or "", 64)},
            "items": self._get_items(card),
        }
        button = card.button.get_buttons(T_ALISA_CARD_BUTTON)
        if button and button.get("text"):
            obj["footer"] = {"text": button["text"], "button": button}
        return obj


class MarusiaCardFormatter(AlisaCardFormatter):
    """Карточки Маруси повторяют формат Алисы, но без галереи."""

    TOKEN_TYPE = ImageTokens.T_MARUSIA
    SUPPORTS_GALLERY = False


class VkCardFormatter(BaseCardFormatter):
    """
    Вложение-фото или карусель.

    В карусель попадают только изображения с кнопками, не больше 3
    кнопок на элемент.
    """

    TOKEN_TYPE = ImageTokens.T_VK
    MAX_BUTTONS = 3

    def get_card(self, card: "CardData") -> dict[str, Any] | list[str]:
        if not card.images:
            return []

        if len(card.images) == 1 or card.is_one:
            token = self._get_token(card.images[0], card.user_id)
            return [token] if token else []

        elements = []
        for image in card.images:
            token = self._get_token(image, card.user_id)
            if not token:
                continue
            button = image.button.get_buttons(T_VK_BUTTONS)
            if not button["one_time"]:
                continue
            elements.append({
                "title": image.title,
                "description": image.desc,
                "photo_id": token.replace("photo", ""),
                "buttons": button["buttons"][:self.MAX_BUTTONS],
                "action": {"type": "open_photo"},
            })
        if elements:
            return {"type": "carousel", "elements": elements}
        return []


class ViberCardFormatter(BaseCardFormatter):
    """Элементы rich media. Изображение передаётся ссылкой, без загрузки."""

    MAX_IMAGES = 7

    @staticmethod
    def _get_element(image: "Image", count_image: int = 1) -> dict[str, Any]:
        element: dict[str, Any] = {"Columns": count_image, "Rows": 6}
        token = image.image_token or image.image_dir
        if token:
            element["Image"] = token
        button = image.button.get_buttons(T_VIBER_BUTTONS)
        if button and button.get("Buttons"):
            element.update(button["Buttons"][0])
            element["Text"] = (
                f"<font color=#000><b>{image.title}</b></font>"
                f"<font color=#000>{image.desc}</font>"
            )
        return element

    def get_card(self, card: "CardData") -> list[dict[str, Any]] | dict[str, Any]:
        count_image = min(len(card.images), self.MAX_IMAGES)
        if not count_image:
            return []
        if count_image == 1 or card.is_one:
            image = card.images[0]
            if image.image_token or image.image_dir:
                return self._get_element(image)
            return []
        return [self._get_element(image, count_image) for image in card.images[:count_image]]


class TelegramCardFormatter(BaseCardFormatter):
    """
    Изображения отправляются пользователю отдельными сообщениями.

    Если изображений больше одного, возвращается опрос
    {question, options} из заголовков.
    """

    TOKEN_TYPE = ImageTokens.T_TELEGRAM

    def get_card(self, card: "CardData") -> dict[str, Any] | None:
        user_id = card.user_id or self.app_context.params.user_id
        options = []
        for image in card.images:
            if image.image_token:
                TelegramRequest(self.app_context).send_photo(user_id, image.image_token, image.desc)
            else:
                self._get_token(image, user_id)
            options.append(image.title)
        if len(options) > 1:
            return {"question": card.title or "", "options": options}
        return None


class SmartAppCardFormatter(BaseCardFormatter):
    """list_card из ячеек SmartApp."""

    @staticmethod
    def _get_one_cells(image: "Image") -> list[dict[str, Any]]:
        params = image.params
        cells: list[dict[str, Any]] = []
        if image.image_dir:
            cells.append({"type": "image_cell_view", "content": {"url": image.image_dir}})
        if image.title:
            cells.append({
                "type": "text_cell_view",
                "paddings": {"top": "6x", "left": "8x", "right": "8x"},
                "content": {
                    "text": image.title,
                    "typeface": params.get("title_typeface") or "title1",
                    "text_color": params.get("title_text_color") or "default",
                },
            })
        if image.desc:
            cells.append({
                "type": "text_cell_view",
                "paddings": {"top": "4x", "left": "8x", "right": "8x"},
                "content": {
                    "text": image.desc,
                    "typeface": params.get("desc_typeface") or "footnote1",
                    "text_color": params.get("desc_text_color") or "secondary",
                },
            })
        button = image.button.get_buttons(T_SMARTAPP_BUTTON_CARD)
        if button:
            cells.append({
                "type": "text_cell_view",
                "paddings": {"top": "12x", "left": "8x", "right": "8x"},
                "content": {
                    "actions": [button],
                    "text": button.get("text"),
                    "typeface": "button1",
                    "text_color": "brand",
                },
            })
        return cells

    @staticmethod
    def _get_cell(image: "Image") -> dict[str, Any]:
        params = image.params
        icon_and_value: dict[str, Any] = {
            "value": {
                "text": image.desc,
                "typeface": params.get("desc_typeface") or "body3",
                "text_color": params.get("desc_text_color") or "default",
                "max_lines": params.get("desc_max_lines") or 0,
            }
        }
        if image.image_dir:
            icon_and_value["icon"] = {
                "address": {"type": "url", "url": image.image_dir},
                "size": {"width": "xlarge", "height": "xlarge"},
                "margin": {"left": "0x", "right": "6x"},
            }
        cell: dict[str, Any] = {
            "type": "left_right_cell_view",
            "paddings": {"left": "4x", "top": "4x", "right": "4x", "bottom": "4x"},
            "left": {
                "type": "fast_answer_left_view",
                "icon_vertical_gravity": "top",
                "icon_and_value": icon_and_value,
                "label": {
                    "text": image.title,
                    "typeface": params.get("title_typeface") or "headline2",
                    "text_color": params.get("title_text_color") or "default",
                    "max_lines": params.get("title_max_lines") or 0,
                },
            },
        }
        button = image.button.get_buttons(T_SMARTAPP_BUTTON_CARD)
        if button:
            cell["bottom_text"] = {
                "text": image.title,
                "typeface": params.get("desc_typeface") or "body3",
                "text_color": params.get("desc_text_color") or "default",
                "actions": button,
            }
        return cell

    def get_card(self, card: "CardData") -> dict[str, Any] | None:
        if not card.images:
            return None
        if card.is_one:
            return {"card": {"type": "list_card", "cells": self._get_one_cells(card.images[0])}}
        cells = []
        if card.title:
            cells.append({
                "type": "text_cell_view",
                "paddings": {"top": "4x", "left": "2x", "right": "2x"},
                "content": {"text": card.title, "typeface": "title1", "text_color": "default"},
            })
        cells.extend(self._get_cell(image) for image in card.images)
        return {"card": {"type": "list_card", "cells": cells}}
