"""
Product image loading.

Reads an image file, scales it down to fit the upload bounds and re-encodes it
as JPEG so every service receives the same, widely supported format.
"""

import io

from PIL import Image, UnidentifiedImageError

from creativebuilder.core.constants import MAX_PRODUCT_IMAGE_SIZE, PRODUCT_IMAGE_JPEG_QUALITY
from creativebuilder.core.error_handler import ValidationError
from creativebuilder.core.logging_config import get_logger
from creativebuilder.core.utils import is_valid_image_file
from creativebuilder.models import ProductImage

logger = get_logger(__name__)


def load_product_image(path: str) -> ProductImage:
    """
    Load a product image from disk.

    The image keeps its aspect ratio and is only ever scaled down.

    Args:
        path (str): Path to the image file

    Returns:
        ProductImage: JPEG-encoded image

    Raises:
        ValidationError: If the file is missing or not a readable image
    """
    if not is_valid_image_file(path):
        raise ValidationError("Product image must be an existing image file", field="product_image", value=path)

    try:
        with Image.open(path) as image:
            image = image.convert("RGB")
            original_size = image.size
            image.thumbnail(MAX_PRODUCT_IMAGE_SIZE)

            buffer = io.BytesIO()
            image.save(buffer, format="JPEG", quality=PRODUCT_IMAGE_JPEG_QUALITY)
    except (OSError, UnidentifiedImageError) as e:
        raise ValidationError(f"Could not read product image: {e}", field="product_image", value=path) from e

    logger.info(f"Loaded product image {path}: {original_size} -> {image.size}")
    return ProductImage.from_bytes(buffer.getvalue(), "image/jpeg")
