"""
Proofreading pass.

Spelling and grammar correction for user-supplied text and generated ad copy.
Proofreading only polishes its input: every method here returns the original
value when the service call fails or its output cannot be used.
"""

import json
from typing import List

import jsonschema

from creativebuilder.clients.base import TextGenerationClient
from creativebuilder.core.error_handler import best_effort
from creativebuilder.core.logging_config import get_logger
from creativebuilder.generation.prompt_templates import proofread_text_prompt, proofread_ad_copy_prompt
from creativebuilder.models import AdCopy
from creativebuilder.schemas import load_schema

logger = get_logger(__name__)


def strip_wrapping_quotes(text: str) -> str:
    """Trim whitespace and remove one pair of surrounding double quotes."""
    text = text.strip()
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


class Proofreader:
    """
    Best-effort copy editor backed by a text generation client.
    """

    def __init__(self, client: TextGenerationClient):
        self.client = client
        self.ad_copy_schema = load_schema("ad_copy")

    @best_effort("Proofreading text")
    def proofread_text(self, text: str, context: str) -> str:
        """
        Correct spelling and grammar in a piece of text.

        Args:
            text (str): Text to correct. Empty or blank text is returned as is.
            context (str): Product context given to the editor

        Returns:
            str: Corrected text, or ``text`` if proofreading failed
        """
        if not text or not text.strip():
            return text

        corrected = strip_wrapping_quotes(self.client.generate_text(proofread_text_prompt(text, context)))
        if not corrected:
            logger.warning("Proofreading returned empty text, keeping original")
            return text

        logger.debug(f"Proofread text: {text!r} -> {corrected!r}")
        return corrected

    @best_effort("Proofreading ad copy")
    def proofread_ad_copy(self, copies: List[AdCopy], context: str) -> List[AdCopy]:
        """
        Correct headline and primary text of each ad copy variant.

        The corrected list must parse, match the ad copy schema and have the
        same length as the input; otherwise the input is returned.

        Args:
            copies (List[AdCopy]): Generated ad copy
            context (str): Product context given to the editor

        Returns:
            List[AdCopy]: Corrected ad copy, or ``copies`` if proofreading failed
        """
        if not copies:
            return copies

        response = self.client.generate_text(
            proofread_ad_copy_prompt(copies, context),
            response_schema=self.ad_copy_schema,
            schema_name="ad_copy"
        )
        data = json.loads(response)
        jsonschema.validate(data, self.ad_copy_schema)

        if len(data) != len(copies):
            logger.warning(f"Proofreading returned {len(data)} ad copies for {len(copies)}, keeping original")
            return copies

        logger.info(f"Proofread {len(data)} ad copy variants")
        return [AdCopy.from_dict(item) for item in data]
