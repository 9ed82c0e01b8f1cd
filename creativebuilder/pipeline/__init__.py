"""
Pipeline orchestration and output handling.
"""

from creativebuilder.pipeline.orchestrator import (
    CreativeOrchestrator,
    PipelineState,
    PipelineStatus
)
from creativebuilder.pipeline.output_manager import OutputManager
