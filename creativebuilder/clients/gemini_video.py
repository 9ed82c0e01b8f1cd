"""
Video generation via the Gemini API (Veo).

Generation is a long-running operation: ``start_generation`` returns an
operation handle that the caller refreshes with ``get_operation`` until it is
done. The finished video is then downloaded with the API key as a query
parameter.
"""

from typing import Any, Optional

import requests
from google import genai
from google.genai import types

from creativebuilder.clients.base import VideoGenerationClient
from creativebuilder.core.config import get_config_value
from creativebuilder.core.constants import DEFAULT_VIDEO_MODEL, DEFAULT_REQUEST_TIMEOUT
from creativebuilder.core.credentials import get_api_key
from creativebuilder.core.error_handler import APIError
from creativebuilder.core.logging_config import get_logger
from creativebuilder.models import ProductImage

logger = get_logger(__name__)


class GeminiVideoClient(VideoGenerationClient):
    """Client for Veo video generation through the google-genai SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key or get_api_key("gemini")
        self.model = model or get_config_value("video_generation.model", DEFAULT_VIDEO_MODEL)
        self.timeout = timeout or get_config_value("api.request_timeout", DEFAULT_REQUEST_TIMEOUT)
        self.client = genai.Client(api_key=self.api_key)

        logger.info(f"Initialized {self.__class__.__name__} with model {self.model}")

    def start_generation(self, prompt: str, image: Optional[ProductImage] = None) -> Any:
        logger.info(f"Starting video generation with model {self.model}"
                    f"{' conditioned on product image' if image else ''}")
        logger.debug(f"Video prompt: {prompt}")

        kwargs = {}
        if image is not None:
            kwargs["image"] = types.Image(image_bytes=image.to_bytes(), mime_type=image.mime_type)

        try:
            return self.client.models.generate_videos(
                model=self.model,
                prompt=prompt,
                config=types.GenerateVideosConfig(number_of_videos=1),
                **kwargs
            )
        except Exception as e:
            raise APIError(f"Video generation request failed: {e}", request_data={"model": self.model}) from e

    def get_operation(self, operation: Any) -> Any:
        try:
            return self.client.operations.get(operation)
        except Exception as e:
            raise APIError(f"Video operation status request failed: {e}") from e

    def is_done(self, operation: Any) -> bool:
        return bool(operation.done)

    def video_uri(self, operation: Any) -> Optional[str]:
        response = getattr(operation, "response", None)
        videos = getattr(response, "generated_videos", None) if response else None
        if not videos:
            return None
        video = videos[0].video
        return video.uri if video else None

    def download(self, uri: str) -> bytes:
        """
        Download the generated video.

        Args:
            uri (str): Location returned by the finished operation

        Returns:
            bytes: Raw video bytes

        Raises:
            APIError: If the download fails
        """
        logger.info("Downloading generated video")
        try:
            response = requests.get(uri, params={"key": self.api_key}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise APIError(f"Failed to download the generated video: {e}") from e

        if not response.ok:
            raise APIError(
                f"Failed to download the generated video: {response.reason}",
                status_code=response.status_code
            )

        logger.info(f"Downloaded video ({len(response.content)} bytes)")
        return response.content
