"""
Clients for the generative service.

This module provides the client interfaces and their implementations for text,
image and video generation.
"""

from creativebuilder.clients.base import (
    GeneratedImage,
    TextGenerationClient,
    ImageGenerationClient,
    VideoGenerationClient
)
from creativebuilder.clients.openrouter_client import OpenRouterClient
from creativebuilder.clients.gemini_video import GeminiVideoClient
