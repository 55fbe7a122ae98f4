from __future__ import annotations

from .data import CombinationRecord


BASE_IMAGE_URL = "https://www.gstatic.com/android/keyboard/emojikitchen"


def build_identifier_url_part(identifier: str) -> str:
    """'1fa84-fe0f' -> 'u1fa84-ufe0f'"""
    return "-".join(f"u{part.lower()}" for part in identifier.split("-"))


def build_image_url(record: CombinationRecord, base_url: str = BASE_IMAGE_URL) -> str:
    """
    Image URL for a combination record.
    The left part is repeated: once as the directory, once as the first half of the filename.
    """
    left = build_identifier_url_part(record.left_identifier)
    right = build_identifier_url_part(record.right_identifier)
    return f"{base_url}/{record.date}/{left}/{left}_{right}.png"
