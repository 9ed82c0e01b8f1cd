"""
Constants for the creativebuilder package.

This module provides constants used throughout the creativebuilder package.
These constants can be easily changed in one place.
"""

# LLM Models
DEFAULT_TEXT_MODEL = "google/gemini-2.5-flash"

# Image Generation Models
DEFAULT_IMAGE_MODEL = "google/gemini-2.5-flash-image"
DEFAULT_IMAGE_EDIT_MODEL = "google/gemini-2.5-flash-image"

# Video Generation Models
DEFAULT_VIDEO_MODEL = "veo-2.0-generate-001"

# API Endpoints
OPENROUTER_API_ENDPOINT = "https://openrouter.ai/api/v1"

# Default Values
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
DEFAULT_REQUEST_TIMEOUT = 120
DEFAULT_NUM_AD_COPIES = 3
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
DEFAULT_OUTPUT_DIR = "output"

# Video polling
DEFAULT_VIDEO_POLL_INTERVAL = 10  # seconds between operation status checks
DEFAULT_VIDEO_MAX_POLLS = 60

# Product image upload handling
MAX_PRODUCT_IMAGE_SIZE = (1024, 1024)
PRODUCT_IMAGE_JPEG_QUALITY = 90

# Used when the user gives no description, URL or image
DEFAULT_PRODUCT_DESCRIPTION = (
    "Create wow-effect creatives for professional, hyper-realistic advertising"
)

PRODUCT_DESCRIPTION_CONTEXT = "A product description for an online ad."

# Style variations, in the order they are generated and labelled
VARIATION_NAMES = ["Minimalist", "Lifestyle", "Dynamic"]
VIDEO_VARIATION_LABEL = "Video Creative"

IMAGE_STATUS_MESSAGE = "Generating image creatives..."
VIDEO_STATUS_MESSAGES = [
    "Generating video concept... 🎬",
    "Rendering frames... this can take a few minutes. ✨",
    "Adding dynamic transitions... 🎞️",
    "Optimizing for high engagement... 🚀",
    "Finalizing your video creative... 🎨",
]
