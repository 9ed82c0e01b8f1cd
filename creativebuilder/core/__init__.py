"""
Core utilities and configuration for the creativebuilder package.
"""

from creativebuilder.core.config import get_config, get_config_value, set_config_value
from creativebuilder.core.credentials import get_api_key
from creativebuilder.core.logging_config import get_logger, configure_logging
from creativebuilder.core.utils import is_valid_image_file
from creativebuilder.core.error_handler import (
    APIError,
    ValidationError,
    ConfigurationError,
    GenerationError,
    PipelineCancelled
)
