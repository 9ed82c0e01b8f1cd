"""
creativebuilder - Ad Creative Builder for Meta Campaigns

Turns a product description, URL or image into ready-to-run ad creatives:
three ad copy variants paired with generated images or a short video.
"""

__version__ = "0.1.0"

# Import main components for easier access
from creativebuilder.models import (
    AdCopy,
    AdCreative,
    CreativeFormat,
    CreativeType,
    FontStyle,
    ProductImage,
    UserInputs
)
from creativebuilder.pipeline.orchestrator import CreativeOrchestrator, PipelineState, PipelineStatus
from creativebuilder.pipeline.output_manager import OutputManager
