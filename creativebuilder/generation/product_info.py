"""
Product info resolution.

Turns the user's inputs into the product description the rest of the
pipeline works from.
"""

from creativebuilder.clients.base import TextGenerationClient
from creativebuilder.core.error_handler import required
from creativebuilder.core.logging_config import get_logger
from creativebuilder.generation.prompt_templates import product_info_prompt
from creativebuilder.models import UserInputs

logger = get_logger(__name__)


class ProductInfoResolver:
    """
    Resolves a normalized product description from user inputs.

    With a product URL the service is asked to describe the product and its
    answer is used verbatim. Without one the description field is returned
    unchanged.
    """

    def __init__(self, client: TextGenerationClient):
        self.client = client

    @required("Failed to resolve product information")
    def resolve(self, inputs: UserInputs) -> str:
        if inputs.product_url:
            logger.info(f"Resolving product info from URL: {inputs.product_url}")
            return self.client.generate_text(product_info_prompt(inputs.product_url))

        logger.info("Using product description as product info")
        return inputs.product_description
