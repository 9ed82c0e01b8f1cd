"""
Common utility functions for the creativebuilder package.

This module provides utility functions used across the package:
- File and directory operations
- Data URL encoding and decoding
"""

import os
import base64
import datetime
import mimetypes
from typing import Tuple

VALID_IMAGE_EXTENSIONS = ['jpg', 'jpeg', 'png', 'gif', 'bmp', 'tiff', 'webp']


def ensure_dir(path: str) -> str:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path (str): Directory path

    Returns:
        str: The directory path
    """
    os.makedirs(path, exist_ok=True)
    return path


def generate_unique_id(prefix: str = "") -> str:
    """
    Generate a timestamp-based ID with optional prefix.

    Args:
        prefix (str, optional): ID prefix

    Returns:
        str: Unique ID
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%d%H%M%S%f")
    return f"{prefix}{timestamp}"


def get_file_extension(file_path: str) -> str:
    """
    Get the file extension from a file path.

    Args:
        file_path (str): File path

    Returns:
        str: File extension without the dot
    """
    return os.path.splitext(file_path)[1][1:].lower()


def is_valid_image_file(file_path: str) -> bool:
    """
    Check if a file exists and has an image extension.

    Args:
        file_path (str): Path to image file

    Returns:
        bool: True if file is a valid image, False otherwise
    """
    if not os.path.isfile(file_path):
        return False

    return get_file_extension(file_path) in VALID_IMAGE_EXTENSIONS


def build_data_url(data: str, mime_type: str) -> str:
    """Build a ``data:`` URL from base64 data."""
    return f"data:{mime_type};base64,{data}"


def parse_data_url(data_url: str) -> Tuple[str, str]:
    """
    Split a base64 ``data:`` URL into its MIME type and base64 payload.

    Args:
        data_url (str): URL of the form ``data:<mime>;base64,<data>``

    Returns:
        Tuple[str, str]: (mime_type, base64_data)

    Raises:
        ValueError: If the string is not a base64 data URL
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")

    header, encoded = data_url.split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")

    mime_type = header[len("data:"):-len(";base64")] or "application/octet-stream"
    return mime_type, encoded


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Return the MIME type and decoded bytes of a base64 data URL."""
    mime_type, encoded = parse_data_url(data_url)
    return mime_type, base64.b64decode(encoded)


def extension_for_mime_type(mime_type: str) -> str:
    """
    Get a file extension (without the dot) for a MIME type.

    Args:
        mime_type (str): MIME type such as ``image/png``

    Returns:
        str: Extension, ``bin`` when the type is unknown
    """
    if mime_type == "image/jpeg":
        return "jpg"
    extension = mimetypes.guess_extension(mime_type)
    return extension[1:] if extension else "bin"


def sanitize_filename(filename: str) -> str:
    """
    Sanitize a filename by removing invalid characters.

    Args:
        filename (str): Original filename

    Returns:
        str: Sanitized filename
    """
    invalid_chars = '<>:"/\\|?* '
    for char in invalid_chars:
        filename = filename.replace(char, '_')

    return filename
