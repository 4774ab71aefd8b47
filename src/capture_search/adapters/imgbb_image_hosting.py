from __future__ import annotations

import base64
import logging

import keyring
import requests
from keyring.errors import KeyringError

from capture_search.adapters.image_codec import encode_png
from capture_search.domain.errors import SearchFailure, UploadError
from capture_search.domain.models import PixelBuffer
from capture_search.ports.image_hosting_port import ImageHostingPort
from capture_search.settings import (
    HTTP_TIMEOUT_SECONDS,
    IMGBB_API_KEY,
    IMGBB_API_URL,
    IMGBB_EXPIRATION_SECONDS,
    KEYRING_SERVICE,
)

logger = logging.getLogger(__name__)

KEYRING_USERNAME = "imgbb"


class ImgbbImageHosting(ImageHostingPort):
    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        expiration_seconds: int | None = None,
        timeout: float | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else IMGBB_API_KEY
        self._api_url = api_url or IMGBB_API_URL
        self._expiration_seconds = (
            IMGBB_EXPIRATION_SECONDS if expiration_seconds is None else expiration_seconds
        )
        self._timeout = timeout or HTTP_TIMEOUT_SECONDS

    def upload(self, image: PixelBuffer) -> str:
        api_key = self._resolve_api_key()
        if not api_key:
            raise UploadError(
                SearchFailure.UPLOAD_FAILED,
                "No ImgBB API key configured. Set IMGBB_API_KEY or store one in the keyring.",
            )
        payload = {
            "image": base64.b64encode(encode_png(image)).decode("ascii"),
            "expiration": str(self._expiration_seconds),
        }
        logger.info("Uploading %sx%s image to ImgBB", image.width, image.height)
        try:
            response = requests.post(
                self._api_url,
                params={"key": api_key},
                data=payload,
                timeout=self._timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise UploadError(SearchFailure.NETWORK_UNAVAILABLE, f"ImgBB unreachable: {exc}") from exc
        except requests.RequestException as exc:
            raise UploadError(SearchFailure.UPLOAD_FAILED, f"ImgBB request failed: {exc}") from exc
        self._raise_for_status(response)
        image_url = self._extract_url(response)
        logger.info("Image uploaded to %s", image_url)
        return image_url

    def _resolve_api_key(self) -> str:
        if self._api_key:
            return self._api_key
        try:
            return keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME) or ""
        except KeyringError as exc:
            logger.warning("Keyring lookup for the ImgBB key failed: %s", exc)
            return ""

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code in (401, 403):
            raise UploadError(SearchFailure.UPLOAD_FAILED, "ImgBB rejected the API key.")
        if response.status_code >= 400:
            raise UploadError(
                SearchFailure.UPLOAD_FAILED,
                f"ImgBB API error {response.status_code} while uploading image.",
            )

    @staticmethod
    def _extract_url(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError as exc:
            raise UploadError(SearchFailure.UPLOAD_FAILED, "ImgBB returned a non-JSON response.") from exc
        data = payload.get("data") if isinstance(payload, dict) else None
        image_url = data.get("url") if isinstance(data, dict) else None
        if not isinstance(image_url, str) or not image_url:
            raise UploadError(SearchFailure.UPLOAD_FAILED, "ImgBB response did not include an image URL.")
        return image_url
