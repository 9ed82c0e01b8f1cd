"""
Prompt templates for creative generation.

This module builds every prompt sent to the generative service:
- Product info extraction from a URL
- Ad copy generation and proofreading
- Image generation and image editing, one prompt per style variation
- Video generation
"""

import json
from typing import List, Optional

from creativebuilder.models import AdCopy, CreativeFormat, FontStyle

# Style treatments, index-aligned with constants.VARIATION_NAMES
VARIATION_PROMPTS = [
    "Focus on a clean, minimalist aesthetic with a bright, uncluttered background. "
    "The product should be the hero.",
    "Show the product in a vibrant, energetic lifestyle scene. "
    "Include a human element (e.g., hands using the product).",
    "Create a dynamic, eye-catching composition with bold colors and strong visual hierarchy. "
    "Emphasize a key feature."
]


def _font_name(font_style: Optional[FontStyle]) -> str:
    return (font_style or FontStyle.MODERN).value


def _lines(*lines: Optional[str]) -> str:
    return "\n".join(line for line in lines if line is not None)


def product_info_prompt(product_url: str) -> str:
    return (
        f"Act as an expert marketer. Given this product URL: {product_url}, extract the product name "
        "and create a concise, compelling description (2-3 sentences) suitable for an ad. "
        "Focus on key features and benefits."
    )


def ad_copy_prompt(product_info: str, num_copies: int = 3) -> str:
    return _lines(
        f"Based on the following product information, generate {num_copies} unique sets of ad copy "
        "(headline, primary text, CTA) for a Meta ad.",
        f'Product Info: "{product_info}"',
        "",
        "The copy must be conversion-focused, highlight benefits, use positive emotional triggers "
        "(trust, curiosity, aspiration), and be fully compliant with Meta policies "
        "(NO shocking claims, NO before/after, NO clickbait). The CTA should be strong and clear.",
        "Return the response as a JSON array."
    )


def proofread_text_prompt(text: str, context: str) -> str:
    return _lines(
        "You are an expert copy editor. Proofread and correct any spelling or grammatical errors "
        "in the following text.",
        "The text is for a marketing creative.",
        f'Product context: "{context}"',
        "",
        "Return ONLY the corrected text, without any additional comments, formatting, or quotation marks.",
        "",
        f'Text to correct: "{text}"'
    )


def proofread_ad_copy_prompt(copies: List[AdCopy], context: str) -> str:
    return _lines(
        "You are an expert copy editor. Proofread and correct any spelling or grammatical errors "
        "in the following JSON array of ad copy.",
        "Maintain the exact original JSON structure. Correct headline and primaryText only; "
        "return every cta exactly as given.",
        "The copy is for a marketing creative.",
        f'Product Context: "{context}"',
        "",
        "JSON to correct:",
        json.dumps([ad_copy.to_dict() for ad_copy in copies], indent=2)
    )


def image_edit_prompt(
    variation: str,
    product_info: str,
    hook_text: Optional[str],
    font_style: Optional[FontStyle]
) -> str:
    if hook_text:
        text_instruction = (
            f'Add the text "{hook_text}" using a professional and highly legible {_font_name(font_style)} font. '
            "Ensure it's well-placed and doesn't cover the main product."
        )
    else:
        text_instruction = "Do not add any text."

    return _lines(
        "You are an expert ad creative designer. Your task is to edit the provided image to turn it "
        "into a high-performing ad creative for Meta platforms.",
        "",
        "**Instructions:**",
        "1.  **Primary Subject:** The main product in the user's image is the hero. "
        "DO NOT alter, replace, or obscure it.",
        f'2.  **Style:** Apply a "{variation}" theme. This means adjusting the background, lighting, '
        "and mood accordingly.",
        f'3.  **Product Context:** The product is: "{product_info}". Use this to inform the style.',
        f"4.  **Text Overlay:** {text_instruction}",
        "5.  **Output:** Return ONLY the edited image. Do not return text explanations."
    )


def image_generation_prompt(
    variation: str,
    product_info: str,
    creative_format: CreativeFormat,
    hook_text: Optional[str],
    font_style: Optional[FontStyle]
) -> str:
    if creative_format is CreativeFormat.VERTICAL:
        format_instruction = "Adapt for Instagram Reels."
    else:
        format_instruction = "Use a clean, premium style."

    text_instruction = None
    if hook_text:
        text_instruction = f'Include the text "{hook_text}" in a stylish and legible {_font_name(font_style)} font.'

    return _lines(
        "A high-resolution, photorealistic image for a Meta ad.",
        f'Subject: "{product_info}".',
        f'Style: "{variation}".',
        format_instruction,
        text_instruction,
        "The image must be brand-safe and policy-compliant."
    )


def video_prompt(
    product_info: str,
    has_product_image: bool,
    hook_text: Optional[str],
    font_style: Optional[FontStyle]
) -> str:
    overlay = None
    if hook_text:
        overlay = f'Overlay the text "{hook_text}" in a stylish {_font_name(font_style)} font.'

    if has_product_image:
        return _lines(
            "Create an 8-15 second looping video ad for Meta.",
            "Use the provided image as the main subject.",
            f'Animate the product in a dynamic scene based on this description: "{product_info}".',
            "The video should be high-energy with an attention-grabbing hook in the first 2 seconds.",
            "Style: Clean, bright, professional.",
            overlay
        )

    return _lines(
        "Create an 8-15 second looping video ad for Meta.",
        f'Product description: "{product_info}".',
        "The video should be high-energy, visually appealing, and feature a motion hook in the first 2 seconds.",
        "Style: Clean, bright, professional.",
        overlay
    )
