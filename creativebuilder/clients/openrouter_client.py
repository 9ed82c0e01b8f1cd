"""
Text and image generation via the OpenRouter.ai API.

This module provides a client for the OpenRouter chat-completions endpoint,
used for:
- Free text and JSON-schema-constrained text generation
- Text-to-image generation with an aspect ratio
- Image editing from an uploaded product image
"""

import copy
import json
import logging
from typing import Dict, Any, List, Optional

import requests

from creativebuilder.clients.base import GeneratedImage, TextGenerationClient, ImageGenerationClient
from creativebuilder.core.config import get_config_value
from creativebuilder.core.constants import (
    DEFAULT_TEXT_MODEL,
    DEFAULT_IMAGE_MODEL,
    DEFAULT_IMAGE_EDIT_MODEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    OPENROUTER_API_ENDPOINT
)
from creativebuilder.core.credentials import get_api_key
from creativebuilder.core.error_handler import APIError, handle_api_request
from creativebuilder.core.logging_config import get_logger
from creativebuilder.core.utils import parse_data_url
from creativebuilder.models import ProductImage

# Initialize logger
logger = get_logger(__name__)


class OpenRouterClient(TextGenerationClient, ImageGenerationClient):
    """
    Client for making API calls to OpenRouter.ai.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        edit_model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the OpenRouter client.

        Args:
            api_key (str, optional): OpenRouter API key. If not provided, read from the environment.
            text_model (str, optional): Model for text generation.
            image_model (str, optional): Model for text-to-image generation.
            edit_model (str, optional): Model for image editing.
            temperature (float, optional): Temperature for text generation.
            max_tokens (int, optional): Maximum tokens for text generation.
            timeout (float, optional): Request timeout in seconds.

        Raises:
            ConfigurationError: If no API key is available.
        """
        self.api_key = api_key or get_api_key("openrouter")

        self.text_model = text_model or get_config_value("text_generation.model", DEFAULT_TEXT_MODEL)
        self.image_model = image_model or get_config_value("image_generation.model", DEFAULT_IMAGE_MODEL)
        self.edit_model = edit_model or get_config_value("image_generation.edit_model", DEFAULT_IMAGE_EDIT_MODEL)
        self.temperature = temperature if temperature is not None else get_config_value(
            "text_generation.temperature", DEFAULT_TEMPERATURE)
        self.max_tokens = max_tokens or get_config_value("text_generation.max_tokens", DEFAULT_MAX_TOKENS)
        self.timeout = timeout or get_config_value("api.request_timeout", DEFAULT_REQUEST_TIMEOUT)

        self.api_base = OPENROUTER_API_ENDPOINT
        self.endpoint = f"{self.api_base}/chat/completions"

        logger.info(f"Initialized {self.__class__.__name__} with text model {self.text_model}, "
                    f"image model {self.image_model}")

    def generate_text(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
        schema_name: Optional[str] = None
    ) -> str:
        """
        Generate text with the configured text model.

        Args:
            prompt (str): Prompt to send
            response_schema (Dict[str, Any], optional): JSON schema constraining the response
            schema_name (str, optional): Name for the schema in the request

        Returns:
            str: The message content

        Raises:
            APIError: If the request fails or the response holds no text
        """
        logger.info(f"Generating text with model {self.text_model}")
        logger.debug(f"Prompt: {prompt[:100]}...")

        payload = {
            "model": self.text_model,
            "messages": [
                {
                    "role": "user",
                    "content": [{"type": "text", "text": prompt}]
                }
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens
        }

        if response_schema is not None:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name or "response",
                    "schema": response_schema
                }
            }

        result = self._post(payload, "Text generation request failed")
        content = self._extract_text(result)
        if content is None:
            raise APIError("No text content in response", endpoint=self.endpoint)

        logger.debug(f"Content: {content[:100]}...")
        return content

    def generate_images(
        self,
        prompt: str,
        aspect_ratio: str,
        num_images: int = 1,
        output_mime_type: str = "image/jpeg"
    ) -> List[GeneratedImage]:
        """
        Generate images from a prompt.

        OpenRouter returns one image per completion choice, so ``num_images``
        is sent as ``n``.

        Args:
            prompt (str): Text prompt describing the image
            aspect_ratio (str): Aspect ratio such as "1:1"
            num_images (int): Number of images requested
            output_mime_type (str): Preferred output MIME type, stated in the prompt

        Returns:
            List[GeneratedImage]: Generated images, empty if the model returned none
        """
        logger.info(f"Generating {num_images} image(s) at {aspect_ratio} with prompt: {prompt[:50]}...")

        payload = {
            "model": self.image_model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": f"{prompt}\nOutput format: {output_mime_type}."}
                    ]
                }
            ],
            "modalities": ["image", "text"],
            "image_config": {"aspect_ratio": aspect_ratio}
        }
        if num_images > 1:
            payload["n"] = num_images

        result = self._post(payload, "Image generation request failed")
        return self._extract_images(result)

    def edit_image(self, prompt: str, image: ProductImage) -> List[GeneratedImage]:
        """
        Edit a product image following a prompt.

        The image is sent as a data URL part ahead of the instructions.

        Args:
            prompt (str): Editing instructions
            image (ProductImage): Source image

        Returns:
            List[GeneratedImage]: Edited images, empty if the model returned none
        """
        logger.info(f"Editing image with prompt: {prompt[:50]}...")

        payload = {
            "model": self.edit_model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": image.to_data_url()}},
                        {"type": "text", "text": prompt}
                    ]
                }
            ],
            "modalities": ["image", "text"]
        }

        result = self._post(payload, "Image editing request failed")
        return self._extract_images(result)

    def _post(self, payload: Dict[str, Any], error_message: str) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        logger.info(f"Making API request to {self.endpoint}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Request payload (truncated): {json.dumps(self._truncate_for_logging(payload))}")

        result = handle_api_request(
            requests.post,
            self.endpoint,
            payload,
            headers,
            error_message=error_message,
            timeout=self.timeout
        )

        if "error" in result:
            raise APIError(
                f"{error_message}: {json.dumps(result['error'])}",
                endpoint=self.endpoint,
                response=result["error"]
            )

        logger.info(f"Response received with {len(result.get('choices', []))} choices")
        return result

    @staticmethod
    def _extract_text(result: Dict[str, Any]) -> Optional[str]:
        choices = result.get("choices") or []
        if not choices:
            return None

        content = choices[0].get("message", {}).get("content")
        if isinstance(content, list):
            # Content may come back as a list of parts
            return "".join(
                item.get("text", "") for item in content
                if isinstance(item, dict) and item.get("type") == "text"
            )
        return content

    @staticmethod
    def _extract_images(result: Dict[str, Any]) -> List[GeneratedImage]:
        images = []
        for choice in result.get("choices") or []:
            for image in choice.get("message", {}).get("images") or []:
                url = image.get("image_url", {}).get("url", "")
                try:
                    mime_type, data = parse_data_url(url)
                except ValueError:
                    logger.warning("Skipping image that is not a base64 data URL")
                    continue
                images.append(GeneratedImage(data=data, mime_type=mime_type))

        if not images:
            logger.warning("No image data in response")
        else:
            logger.info(f"Found {len(images)} image(s) in response")
        return images

    @staticmethod
    def _truncate_for_logging(payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a copy of a request payload that is safe to log.

        Base64 image data is replaced with a placeholder and long text parts
        are shortened.
        """
        truncated = copy.deepcopy(payload)
        for message in truncated.get("messages", []):
            for part in message.get("content", []):
                if part.get("type") == "image_url":
                    part["image_url"]["url"] = "data:image/...;base64,<base64_data_truncated>"
                elif part.get("type") == "text" and len(part.get("text", "")) > 200:
                    part["text"] = part["text"][:200] + "...<truncated>"
        return truncated
