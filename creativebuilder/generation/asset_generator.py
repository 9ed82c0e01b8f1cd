"""
Creative asset generation.

This module produces the visual assets of a run: three style variations of
an image, generated from scratch or edited from the user's product image, or
a single video generated as a long-running operation.
"""

import os
import tempfile
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from creativebuilder.clients.base import GeneratedImage, ImageGenerationClient, VideoGenerationClient
from creativebuilder.core.config import get_config_value
from creativebuilder.core.constants import (
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_VIDEO_MAX_POLLS,
    DEFAULT_VIDEO_POLL_INTERVAL,
    VARIATION_NAMES
)
from creativebuilder.core.error_handler import GenerationError, PipelineCancelled, required
from creativebuilder.core.logging_config import get_logger
from creativebuilder.generation.prompt_templates import (
    VARIATION_PROMPTS,
    image_edit_prompt,
    image_generation_prompt,
    video_prompt
)
from creativebuilder.models import CreativeType, UserInputs

logger = get_logger(__name__)


class CreativeAssetGenerator:
    """
    Generates image or video assets for a run.

    Image assets are returned as ``data:`` URLs in variation order. The video
    asset is written to ``work_dir`` and returned as a file path.
    """

    def __init__(
        self,
        image_client: Optional[ImageGenerationClient] = None,
        video_client: Optional[VideoGenerationClient] = None,
        work_dir: Optional[str] = None,
        poll_interval: Optional[float] = None,
        max_polls: Optional[int] = None,
        max_workers: Optional[int] = None,
        partial_text_to_image: Optional[bool] = None
    ):
        """
        Initialize the asset generator.

        Args:
            image_client: Client used for the image branch.
            video_client: Client used for the video branch.
            work_dir: Directory for downloaded videos. Defaults to a new temporary directory.
            poll_interval: Seconds between video operation status checks.
            max_polls: Maximum number of status checks before giving up.
            max_workers: Thread pool size for the image variations.
            partial_text_to_image: Accept partial results when generating images from scratch.
        """
        self.image_client = image_client
        self.video_client = video_client
        self.work_dir = work_dir
        self.poll_interval = poll_interval if poll_interval is not None else get_config_value(
            "video_generation.poll_interval", DEFAULT_VIDEO_POLL_INTERVAL)
        self.max_polls = max_polls if max_polls is not None else get_config_value(
            "video_generation.max_polls", DEFAULT_VIDEO_MAX_POLLS)
        self.max_workers = max_workers or get_config_value("image_generation.max_workers", len(VARIATION_PROMPTS))
        self.partial_text_to_image = partial_text_to_image if partial_text_to_image is not None else get_config_value(
            "image_generation.partial_text_to_image", False)

    @required("Failed to generate creative assets")
    def generate(
        self,
        inputs: UserInputs,
        product_info: str,
        cancel_event: Optional[threading.Event] = None,
        on_poll: Optional[Callable[[int], None]] = None
    ) -> List[str]:
        """
        Generate the assets requested by ``inputs.creative_type``.

        Args:
            inputs: User inputs (already proofread).
            product_info: Resolved product description.
            cancel_event: Set to stop waiting on a video operation.
            on_poll: Called with the poll count after each video status check.

        Returns:
            List[str]: Asset references.

        Raises:
            GenerationError: If no usable asset was produced.
        """
        if inputs.creative_type is CreativeType.VIDEO:
            return [self.generate_video(inputs, product_info, cancel_event, on_poll)]

        if inputs.product_image is not None:
            return self.generate_edited_images(inputs, product_info)
        return self.generate_images(inputs, product_info)

    def _fan_out(self, func: Callable[[str], List[GeneratedImage]], prompts: List[str]) -> list:
        """
        Run one request per prompt concurrently and wait for all of them.

        Returns one entry per prompt, in prompt order: the list of images, or
        the exception the request raised.
        """
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(func, prompt) for prompt in prompts]

        results = []
        for future in futures:
            try:
                results.append(future.result())
            except Exception as e:
                results.append(e)
        return results

    def generate_edited_images(self, inputs: UserInputs, product_info: str) -> List[str]:
        """
        Edit the product image once per style variation.

        Variations that return no image are dropped and the run only fails
        when none produce one. A request that raises fails the run.
        """
        prompts = [
            image_edit_prompt(variation, product_info, inputs.hook_text, inputs.font_style)
            for variation in VARIATION_PROMPTS
        ]
        logger.info(f"Editing product image in {len(prompts)} style variations")

        image = inputs.product_image
        results = self._fan_out(lambda prompt: self.image_client.edit_image(prompt, image), prompts)

        images = self._collect(results, partial=True)
        if not images:
            raise GenerationError(
                "Image editing failed to produce any images. The model may be unable to process the "
                "request. Please try a different image or prompt."
            )
        return images

    def generate_images(self, inputs: UserInputs, product_info: str) -> List[str]:
        """
        Generate one image per style variation from scratch.

        Every variation must produce an image unless partial results are
        enabled in the configuration. A request that raises always fails the run.
        """
        aspect_ratio = inputs.creative_format.aspect_ratio
        prompts = [
            image_generation_prompt(variation, product_info, inputs.creative_format,
                                    inputs.hook_text, inputs.font_style)
            for variation in VARIATION_PROMPTS
        ]
        logger.info(f"Generating {len(prompts)} style variations at {aspect_ratio}")

        results = self._fan_out(
            lambda prompt: self.image_client.generate_images(
                prompt,
                aspect_ratio=aspect_ratio,
                num_images=1,
                output_mime_type=DEFAULT_IMAGE_MIME_TYPE
            ),
            prompts
        )

        images = self._collect(results, partial=self.partial_text_to_image)
        if not images:
            raise GenerationError("Image generation failed to produce an image. Please try a different prompt.")
        return images

    def _collect(self, results: list, partial: bool) -> List[str]:
        images = []
        for index, result in enumerate(results):
            name = VARIATION_NAMES[index % len(VARIATION_NAMES)]

            if isinstance(result, Exception):
                logger.error(f"{name} variation request failed: {result}")
                raise result

            if not result:
                if not partial:
                    logger.error(f"{name} variation returned no image")
                    raise GenerationError(
                        "Image generation failed to produce an image. Please try a different prompt."
                    )
                logger.warning(f"{name} variation failed to produce an image")
                continue

            images.append(result[0].to_data_url())

        logger.info(f"{len(images)} of {len(results)} variations produced an image")
        return images

    def generate_video(
        self,
        inputs: UserInputs,
        product_info: str,
        cancel_event: Optional[threading.Event] = None,
        on_poll: Optional[Callable[[int], None]] = None
    ) -> str:
        """
        Generate one video and download it to ``work_dir``.

        The operation is polled every ``poll_interval`` seconds, at most
        ``max_polls`` times.

        Returns:
            str: Path of the downloaded video file.

        Raises:
            PipelineCancelled: If ``cancel_event`` is set while waiting.
            GenerationError: If polling runs out, or no video is returned or downloaded.
        """
        cancel_event = cancel_event or threading.Event()
        prompt = video_prompt(product_info, inputs.product_image is not None,
                              inputs.hook_text, inputs.font_style)

        operation = self.video_client.start_generation(prompt, image=inputs.product_image)

        polls = 0
        while not self.video_client.is_done(operation):
            if polls >= self.max_polls:
                raise GenerationError(
                    f"Video generation did not finish after {polls} status checks. Please try again later."
                )
            if cancel_event.wait(self.poll_interval):
                raise PipelineCancelled("Video generation was cancelled.")

            operation = self.video_client.get_operation(operation)
            polls += 1
            logger.info(f"Video operation status check {polls}: done={self.video_client.is_done(operation)}")
            if on_poll:
                on_poll(polls)

        uri = self.video_client.video_uri(operation)
        if not uri:
            logger.error("Video generation operation completed but returned no video URI.")
            raise GenerationError(
                "Video generation failed. The model did not return a video. "
                "Please try a different prompt or image."
            )

        content = self.video_client.download(uri)
        return self._write_video(content)

    def _write_video(self, content: bytes) -> str:
        if self.work_dir is None:
            self.work_dir = tempfile.mkdtemp(prefix="creativebuilder_")
        os.makedirs(self.work_dir, exist_ok=True)

        path = os.path.join(self.work_dir, f"video_{uuid.uuid4().hex[:8]}.mp4")
        with open(path, "wb") as f:
            f.write(content)

        logger.info(f"Saved generated video to {path}")
        return path
