"""Клиенты Яндекс.Диалогов (картинки, звуки) и Yandex SpeechKit."""
import json
import time
from typing import Any

from umbot.api.request import Request
from umbot.core.app_context import AppContext

STANDARD_URL = "https://dialogs.yandex.net/api/v1/"


class YandexRequest:
    """Базовый клиент Яндекс API с авторизацией по OAuth токену."""

    AUTH_SCHEME = "OAuth"
    TOKEN_NAME = "yandex_token"
    LOG_NAME = "YandexApi"

    def __init__(
        self,
        app_context: AppContext,
        oauth: str | None = None,
        request: Request | None = None
    ) -> None:
        self.app_context = app_context
        self.request = request or Request(
            app_context.logger,
            timeout=app_context.config.http.timeout,
            max_retries=app_context.config.http.max_retries,
        )
        self.oauth = oauth or app_context.token(self.TOKEN_NAME)
        self.error: str | None = None

    def set_oauth(self, oauth: str | None) -> None:
        self.oauth = oauth

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"{self.AUTH_SCHEME} {self.oauth}"}

    def call(self, url: str, method: str | None = None, **kwargs: Any) -> Any:
        """
        Выполняет запрос к API.

        Returns
        -------
        Any
            Ответ API или None, если запрос не удался или ответ содержит error.
        """
        result = self.request.send(url, method=method, headers=self._headers(), **kwargs)
        if not result["status"]:
            self._log(f"{url}: {result['err']}")
            return None
        data = result["data"]
        if isinstance(data, dict) and "error" in data:
            self.error = json.dumps(data["error"], ensure_ascii=False)
            self._log(f"{url}: {self.error}")
            return None
        return data

    def _log(self, error: str = "") -> None:
        self.app_context.log_error(f"{self.LOG_NAME}: Произошла ошибка при отправке запроса\nОшибка: {error}")


class YandexResourceRequest(YandexRequest):
    """
    Общая логика для ресурсов навыка (images, sounds): квота, загрузка,
    список и удаление.
    """

    RESOURCE = ""
    ITEM = ""

    def __init__(
        self,
        app_context: AppContext,
        oauth: str | None = None,
        skill_id: str | None = None,
        request: Request | None = None
    ) -> None:
        super().__init__(app_context, oauth, request)
        self.skill_id = skill_id or app_context.params.app_id

    def _resource_url(self) -> str:
        return f"{STANDARD_URL}skills/{self.skill_id}/{self.RESOURCE}"

    def check_out_place(self) -> dict[str, Any] | None:
        """Возвращает квоту хранилища {total, used}."""
        query = self.call(STANDARD_URL + "status")
        if query and "quota" in query.get(self.RESOURCE, {}):
            return query[self.RESOURCE]["quota"]
        self._log(f"{type(self).__name__}.check_out_place() Error: Не удалось проверить занятое место!")
        return None

    def _upload(self, **kwargs: Any) -> dict[str, Any] | None:
        if not self.skill_id:
            self._log(f"{type(self).__name__} Error: Не выбран навык!")
            return None
        query = self.call(self._resource_url(), method="POST", **kwargs)
        if query and "id" in query.get(self.ITEM, {}):
            return query[self.ITEM]
        return None

    def _get_loaded(self) -> list[dict[str, Any]] | None:
        if not self.skill_id:
            self._log(f"{type(self).__name__} Error: Не выбран навык!")
            return None
        query = self.call(self._resource_url())
        if query:
            return query.get(self.RESOURCE)
        return None

    def _delete(self, resource_id: str) -> str | None:
        if not self.skill_id:
            self._log(f"{type(self).__name__} Error: Не выбран навык!")
            return None
        if not resource_id:
            self._log(f"{type(self).__name__} Error: Не выбран ресурс для удаления!")
            return None
        query = self.call(f"{self._resource_url()}/{resource_id}", method="DELETE")
        if query and "result" in query:
            return query["result"]
        self._log(f"{type(self).__name__} Error: Не удалось удалить {resource_id}!")
        return None

    def _delete_all(self, pause: float = 0.0) -> bool:
        items = self._get_loaded()
        if items is None:
            self._log(f"{type(self).__name__} Error: Не удалось получить загруженные ресурсы!")
            return False
        success = True
        for item in items:
            if self._delete(item["id"]) is None:
                success = False
            if pause:
                time.sleep(pause)
        return success


class YandexImageRequest(YandexResourceRequest):
    """Загрузка изображений в навык Алисы."""

    RESOURCE = "images"
    ITEM = "image"

    def download_image_url(self, image_url: str) -> dict[str, Any] | None:
        """Загружает изображение по ссылке. Возвращает {id, origUrl, size, createdAt}."""
        image = self._upload(json={"url": image_url})
        if image is None:
            self._log(f"YandexImageRequest.download_image_url() Error: Не удалось загрузить изображение с сайта: {image_url}")
        return image

    def download_image_file(self, image_dir: str) -> dict[str, Any] | None:
        image = self._upload(attach=image_dir)
        if image is None:
            self._log(f"YandexImageRequest.download_image_file() Error: Не удалось загрузить изображение по пути: {image_dir}")
        return image

    def get_loaded_images(self) -> list[dict[str, Any]] | None:
        return self._get_loaded()

    def delete_image(self, image_id: str) -> str | None:
        return self._delete(image_id)

    def delete_images(self) -> bool:
        return self._delete_all()


class YandexSoundRequest(YandexResourceRequest):
    """Загрузка звуков в навык Алисы."""

    RESOURCE = "sounds"
    ITEM = "sound"

    def download_sound_file(self, sound_dir: str) -> dict[str, Any] | None:
        sound = self._upload(attach=sound_dir)
        if sound is None:
            self._log(f"YandexSoundRequest.download_sound_file() Error: Не удалось загрузить звук по пути: {sound_dir}")
        return sound

    def get_loaded_sounds(self) -> list[dict[str, Any]] | None:
        return self._get_loaded()

    def delete_sound(self, sound_id: str) -> str | None:
        return self._delete(sound_id)

    def delete_sounds(self) -> bool:
        return self._delete_all(pause=0.2)


class YandexSpeechKit(YandexRequest):
    """Синтез речи через Yandex SpeechKit."""

    TTS_API_URL = "https://tts.api.cloud.yandex.net/speech/v1/tts:synthesize"
    AUTH_SCHEME = "Api-Key"
    TOKEN_NAME = "yandex_speech_kit_token"
    LOG_NAME = "YandexSpeechKit"

    E_GOOD = "good"
    E_EVIL = "evil"
    E_NEUTRAL = "neutral"

    V_OKSANA = "oksana"
    V_JANE = "jane"
    V_OMAZH = "omazh"
    V_ZAHAR = "zahar"
    V_ERMIL = "ermil"
    V_SILAERKAN = "silaerkan"
    V_ERKANYAVAS = "erkanyavas"
    V_ALYSS = "alyss"
    V_NICK = "nick"
    V_ALENA = "alena"
    V_FILIPP = "filipp"

    L_RU = "ru-RU"
    L_EN = "en-US"
    L_TR = "tr-TR"

    F_LPCM = "lpcm"
    F_OGGOPUS = "oggopus"

    # голоса без поддержки эмоций
    NO_EMOTION_VOICES = (V_SILAERKAN, V_ERKANYAVAS, V_ALYSS, V_NICK)
    # голоса без поддержки скорости
    NO_SPEED_VOICES = (V_ALENA, V_FILIPP)

    def __init__(
        self,
        app_context: AppContext,
        oauth: str | None = None,
        request: Request | None = None
    ) -> None:
        super().__init__(app_context, oauth, request)
        self.text: str | None = None
        self.lang = self.L_RU
        self.voice = self.V_OKSANA
        self.emotion = self.E_NEUTRAL
        self.speed = 1.0
        self.format = self.F_OGGOPUS
        self.sample_rate_hertz: int | None = None
        self.folder_id: str | None = None

    def _init_post(self) -> dict[str, Any]:
        post: dict[str, Any] = {
            "text": self.text,
            "lang": self.lang,
            "voice": self.voice,
            "format": self.format,
        }
        if self.voice not in self.NO_EMOTION_VOICES:
            post["emotion"] = self.emotion
        if self.voice not in self.NO_SPEED_VOICES:
            if self.speed < 0.1 or self.speed > 3.0:
                self.speed = 1.0
            post["speed"] = self.speed
        if self.format == self.F_LPCM and self.sample_rate_hertz:
            post["sampleRateHertz"] = self.sample_rate_hertz
        if self.folder_id:
            post["folderId"] = self.folder_id
        return post

    def get_tts(self, text: str | None = None) -> bytes | None:
        """
        Синтезирует речь.

        Returns
        -------
        bytes | None
            Аудио в выбранном формате или None при ошибке.
        """
        if text:
            self.text = text
        if not self.text:
            return None
        if not self.oauth:
            self._log("Не указан токен Yandex SpeechKit!")
            return None
        return self.call(self.TTS_API_URL, method="POST", data=self._init_post(), is_convert_json=False)
