"""
Ad copy generation.

Requests a fixed number of ad copy variants in one schema-constrained call
and validates the response with jsonschema. Copy is required for every
creative, so a response that cannot be used fails the run.
"""

import json
from typing import List

import jsonschema

from creativebuilder.clients.base import TextGenerationClient
from creativebuilder.core.constants import DEFAULT_NUM_AD_COPIES
from creativebuilder.core.error_handler import GenerationError, required
from creativebuilder.core.logging_config import get_logger
from creativebuilder.generation.prompt_templates import ad_copy_prompt
from creativebuilder.models import AdCopy
from creativebuilder.schemas import load_schema

logger = get_logger(__name__)


class CopyGenerator:
    """
    Generates ad copy variants (headline, primary text, CTA) for a product.
    """

    def __init__(self, client: TextGenerationClient, num_copies: int = DEFAULT_NUM_AD_COPIES):
        self.client = client
        self.num_copies = num_copies
        self.schema = load_schema("ad_copy")

    @required("Failed to generate ad copy")
    def generate(self, product_info: str) -> List[AdCopy]:
        """
        Generate ad copy for the given product info.

        Args:
            product_info (str): Product description

        Returns:
            List[AdCopy]: Exactly ``num_copies`` variants

        Raises:
            GenerationError: If the request fails or the response is not a
                valid list of ``num_copies`` ad copies
        """
        logger.info(f"Generating {self.num_copies} ad copy variants")

        response = self.client.generate_text(
            ad_copy_prompt(product_info, self.num_copies),
            response_schema=self.schema,
            schema_name="ad_copy"
        )
        data = self.parse(response)

        if len(data) != self.num_copies:
            logger.error(f"Expected {self.num_copies} ad copies, got {len(data)}")
            raise GenerationError("Failed to generate valid ad copy.")

        return [AdCopy.from_dict(item) for item in data]

    def parse(self, response: str) -> list:
        try:
            data = json.loads(response)
            jsonschema.validate(data, self.schema)
        except (json.JSONDecodeError, TypeError, jsonschema.ValidationError) as e:
            logger.error(f"Failed to parse ad copy JSON: {e}")
            logger.debug(f"Raw ad copy response: {response}")
            raise GenerationError("Failed to generate valid ad copy.") from e
        return data
