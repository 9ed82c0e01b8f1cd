"""
Base client interfaces for the generative service.

The pipeline only talks to these interfaces, so the service behind each
capability (text, image, long-running video) can be swapped or faked.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from creativebuilder.core.utils import build_data_url
from creativebuilder.models import ProductImage


@dataclass(frozen=True)
class GeneratedImage:
    """An image returned by the service, base64 encoded."""

    data: str
    mime_type: str

    def to_data_url(self) -> str:
        return build_data_url(self.data, self.mime_type)


class TextGenerationClient(ABC):
    """
    Base interface for text generation services.
    """

    @abstractmethod
    def generate_text(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
        schema_name: Optional[str] = None
    ) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt (str): Prompt to send
            response_schema (Dict[str, Any], optional): JSON schema the response must follow.
                When given, the returned string is JSON text.
            schema_name (str, optional): Name reported to the service for the schema

        Returns:
            str: The generated text

        Raises:
            APIError: If the request fails
        """
        pass


class ImageGenerationClient(ABC):
    """
    Base interface for image generation and editing services.
    """

    @abstractmethod
    def generate_images(
        self,
        prompt: str,
        aspect_ratio: str,
        num_images: int = 1,
        output_mime_type: str = "image/jpeg"
    ) -> List[GeneratedImage]:
        """
        Generate images from a text prompt.

        Args:
            prompt (str): Text prompt describing the image
            aspect_ratio (str): Aspect ratio such as "1:1", "16:9" or "9:16"
            num_images (int): Number of images requested
            output_mime_type (str): Preferred output MIME type

        Returns:
            List[GeneratedImage]: Generated images; empty when the model produced none

        Raises:
            APIError: If the request fails
        """
        pass

    @abstractmethod
    def edit_image(
        self,
        prompt: str,
        image: ProductImage
    ) -> List[GeneratedImage]:
        """
        Edit an existing image following a prompt.

        Args:
            prompt (str): Editing instructions
            image (ProductImage): Source image

        Returns:
            List[GeneratedImage]: Edited images; empty when the model produced none

        Raises:
            APIError: If the request fails
        """
        pass


class VideoGenerationClient(ABC):
    """
    Base interface for long-running video generation services.

    Generation returns an operation handle that is polled until ``is_done``
    reports completion, then the video is downloaded from ``video_uri``.
    """

    @abstractmethod
    def start_generation(self, prompt: str, image: Optional[ProductImage] = None) -> Any:
        """Start a generation job and return its operation handle."""
        pass

    @abstractmethod
    def get_operation(self, operation: Any) -> Any:
        """Return a refreshed copy of the operation handle."""
        pass

    @abstractmethod
    def is_done(self, operation: Any) -> bool:
        pass

    @abstractmethod
    def video_uri(self, operation: Any) -> Optional[str]:
        """Return the location of the first generated video, if any."""
        pass

    @abstractmethod
    def download(self, uri: str) -> bytes:
        """
        Fetch the raw video bytes.

        Raises:
            APIError: If the download fails
        """
        pass
