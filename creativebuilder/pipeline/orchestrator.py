"""
Creative generation orchestrator.

This module runs one submission through the whole pipeline:

    inputs -> product info -> ad copy -> proofread copy -> assets -> creatives

Each run moves through ``PipelineState`` values strictly in order and ends in
``DONE`` with the full list of creatives, or in ``FAILED`` with a single
``GenerationError``. The current state is reported to an optional callback
after every transition.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from creativebuilder.clients.base import TextGenerationClient, ImageGenerationClient, VideoGenerationClient
from creativebuilder.core.constants import (
    DEFAULT_PRODUCT_DESCRIPTION,
    IMAGE_STATUS_MESSAGE,
    PRODUCT_DESCRIPTION_CONTEXT,
    VIDEO_STATUS_MESSAGES
)
from creativebuilder.core.error_handler import GenerationError
from creativebuilder.core.logging_config import get_logger, log_execution_context
from creativebuilder.generation.asset_generator import CreativeAssetGenerator
from creativebuilder.generation.copy_generator import CopyGenerator
from creativebuilder.generation.creative_assembler import CreativeAssembler
from creativebuilder.generation.product_info import ProductInfoResolver
from creativebuilder.generation.proofreader import Proofreader
from creativebuilder.models import AdCreative, CreativeType, UserInputs
from creativebuilder.pipeline.output_manager import OutputManager

logger = get_logger(__name__)


class PipelineState(Enum):
    IDLE = "idle"
    RESOLVING_INPUTS = "resolving_inputs"
    RESOLVING_PRODUCT_INFO = "resolving_product_info"
    GENERATING_COPY = "generating_copy"
    PROOFREADING_COPY = "proofreading_copy"
    GENERATING_ASSETS = "generating_assets"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


STATE_LABELS = {
    PipelineState.IDLE: "Ready",
    PipelineState.RESOLVING_INPUTS: "Checking your inputs...",
    PipelineState.RESOLVING_PRODUCT_INFO: "Reading product information...",
    PipelineState.GENERATING_COPY: "Writing ad copy...",
    PipelineState.PROOFREADING_COPY: "Proofreading ad copy...",
    PipelineState.GENERATING_ASSETS: IMAGE_STATUS_MESSAGE,
    PipelineState.ASSEMBLING: "Assembling creatives...",
    PipelineState.DONE: "Done",
    PipelineState.FAILED: "Failed",
}


@dataclass(frozen=True)
class PipelineStatus:
    """Snapshot of a run's progress."""

    state: PipelineState
    message: str
    error: Optional[str] = None


StatusCallback = Callable[[PipelineStatus], None]


class CreativeOrchestrator:
    """
    Runs the creative generation pipeline for one submission at a time.

    Components can be injected; any that are not are built from the clients.
    The OpenRouter client is the default for text and images. The video
    client is only created when a video is requested.
    """

    def __init__(
        self,
        text_client: Optional[TextGenerationClient] = None,
        image_client: Optional[ImageGenerationClient] = None,
        video_client: Optional[VideoGenerationClient] = None,
        output_manager: Optional[OutputManager] = None,
        product_info_resolver: Optional[ProductInfoResolver] = None,
        proofreader: Optional[Proofreader] = None,
        copy_generator: Optional[CopyGenerator] = None,
        asset_generator: Optional[CreativeAssetGenerator] = None,
        assembler: Optional[CreativeAssembler] = None,
        work_dir: Optional[str] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            text_client: Client for text generation.
            image_client: Client for image generation and editing. Defaults to ``text_client``
                when that client can also generate images.
            video_client: Client for video generation.
            output_manager: Used for step timings and error records.
            product_info_resolver: Product info step.
            proofreader: Proofreading step.
            copy_generator: Ad copy step.
            asset_generator: Asset step.
            assembler: Assembly step.
            work_dir: Directory for downloaded videos.
        """
        if text_client is None and None in (product_info_resolver, proofreader, copy_generator):
            from creativebuilder.clients.openrouter_client import OpenRouterClient
            text_client = OpenRouterClient()
        if image_client is None and isinstance(text_client, ImageGenerationClient):
            image_client = text_client

        self.output_manager = output_manager or OutputManager()
        self.product_info_resolver = product_info_resolver or ProductInfoResolver(text_client)
        self.proofreader = proofreader or Proofreader(text_client)
        self.copy_generator = copy_generator or CopyGenerator(text_client)
        self.asset_generator = asset_generator or CreativeAssetGenerator(
            image_client=image_client,
            video_client=video_client,
            work_dir=work_dir
        )
        self.assembler = assembler or CreativeAssembler()

        self.last_status = PipelineStatus(PipelineState.IDLE, STATE_LABELS[PipelineState.IDLE])
        self._on_status = None

    def _transition(self, state: PipelineState, message: Optional[str] = None, error: Optional[str] = None) -> None:
        self.last_status = PipelineStatus(state, message or STATE_LABELS[state], error)
        logger.info(f"Pipeline state: {state.value} ({self.last_status.message})")
        if self._on_status:
            self._on_status(self.last_status)

    def _enter(self, state: PipelineState, message: Optional[str] = None) -> None:
        if self.last_status.state not in (PipelineState.IDLE, PipelineState.DONE, PipelineState.FAILED):
            self.output_manager.end_timing(self.last_status.state.value)
        self._transition(state, message)
        if state not in (PipelineState.DONE, PipelineState.FAILED):
            self.output_manager.start_timing(state.value)

    def generate(
        self,
        inputs: UserInputs,
        on_status: Optional[StatusCallback] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> List[AdCreative]:
        """
        Generate ad creatives for one submission.

        Args:
            inputs: The user's submission. It is not modified.
            on_status: Called with a ``PipelineStatus`` after every state change.
            cancel_event: Set from another thread to cancel a video run while it waits.

        Returns:
            List[AdCreative]: The finished creatives.

        Raises:
            GenerationError: If any step fails. No partial results are returned.
        """
        self._on_status = on_status
        self.last_status = PipelineStatus(PipelineState.IDLE, STATE_LABELS[PipelineState.IDLE])
        self.output_manager.clear_metrics()
        self.output_manager.start_timing("total")
        log_execution_context(logger, inputs.summary())

        try:
            try:
                creatives = self._run(inputs, cancel_event)
            except Exception as e:
                message = self._fail(e)
                if isinstance(e, GenerationError):
                    raise
                raise GenerationError(message) from e

            self._enter(PipelineState.DONE)
            self.output_manager.end_timing("total")
            logger.info(f"Generated {len(creatives)} creatives")
            return creatives
        finally:
            self._on_status = None

    def _fail(self, error: Exception) -> str:
        if isinstance(error, GenerationError):
            message = error.message
        else:
            message = str(error) or "An unknown error occurred. Please check your API keys and try again."

        failed_state = self.last_status.state
        if failed_state is not PipelineState.IDLE:
            self.output_manager.end_timing(failed_state.value)
        self.output_manager.end_timing("total")
        self.output_manager.record_error(type(error).__name__, message, failed_state.value, False)

        logger.error(f"Creative generation failed during {failed_state.value}: {message}")
        self._transition(PipelineState.FAILED, error=message)
        return message

    def _run(self, inputs: UserInputs, cancel_event: Optional[threading.Event]) -> List[AdCreative]:
        self._enter(PipelineState.RESOLVING_INPUTS)
        inputs = self.resolve_inputs(inputs)

        self._enter(PipelineState.RESOLVING_PRODUCT_INFO)
        product_info = self.product_info_resolver.resolve(inputs)
        if inputs.hook_text:
            inputs = inputs.copy(hook_text=self.proofreader.proofread_text(inputs.hook_text, product_info))

        self._enter(PipelineState.GENERATING_COPY)
        copies = self.copy_generator.generate(product_info)

        self._enter(PipelineState.PROOFREADING_COPY)
        copies = self.proofreader.proofread_ad_copy(copies, product_info)
        if not copies:
            raise GenerationError("Failed to generate ad copy.")

        if inputs.creative_type is CreativeType.VIDEO:
            self._enter(PipelineState.GENERATING_ASSETS, VIDEO_STATUS_MESSAGES[0])
            self._ensure_video_client()
        else:
            self._enter(PipelineState.GENERATING_ASSETS, IMAGE_STATUS_MESSAGE)
        assets = self.asset_generator.generate(
            inputs,
            product_info,
            cancel_event=cancel_event,
            on_poll=self._on_video_poll
        )

        self._enter(PipelineState.ASSEMBLING)
        return self.assembler.assemble(inputs.creative_type, assets, copies)

    def resolve_inputs(self, inputs: UserInputs) -> UserInputs:
        """
        Return a working copy of ``inputs`` ready for generation.

        A default description is supplied when nothing identifies the product,
        and a directly entered description (no URL) is proofread.
        """
        inputs = inputs.copy()

        if not inputs.has_product_identity():
            logger.info("No product description, URL or image given; using default description")
            inputs.product_description = DEFAULT_PRODUCT_DESCRIPTION

        if not inputs.product_url and inputs.product_description:
            inputs.product_description = self.proofreader.proofread_text(
                inputs.product_description,
                PRODUCT_DESCRIPTION_CONTEXT
            )

        return inputs

    def _ensure_video_client(self) -> None:
        if self.asset_generator.video_client is None:
            from creativebuilder.clients.gemini_video import GeminiVideoClient
            self.asset_generator.video_client = GeminiVideoClient()

    def _on_video_poll(self, polls: int) -> None:
        message = VIDEO_STATUS_MESSAGES[polls % len(VIDEO_STATUS_MESSAGES)]
        self._transition(PipelineState.GENERATING_ASSETS, message)
