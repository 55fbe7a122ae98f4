"""
Build Google Emoji Kitchen image URLs for a pair of emojis.

    import emojimix
    url = emojimix.get_mix_url("🪄", "☕")

The module-level functions run against the bundled dataset; use EmojiMixer with your own
EmojiKitchenData to mix against a different table.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Mapping, Optional

from .core import EmojiMixer, MixResult
from .data import CombinationRecord, EmojiKitchenData, default_data, fetch_kitchen_data
from .errors import (
    DataError,
    EmojiMixError,
    InvalidEmojiError,
    NoCombinationError,
    NotSupportedEmojiError,
    UnsupportedIdentifierError,
)
from .urls import BASE_IMAGE_URL, build_identifier_url_part, build_image_url


__all__ = [
    "BASE_IMAGE_URL",
    "CombinationRecord",
    "DataError",
    "EmojiKitchenData",
    "EmojiMixError",
    "EmojiMixer",
    "InvalidEmojiError",
    "MixResult",
    "NoCombinationError",
    "NotSupportedEmojiError",
    "SUPPORTED_IDENTIFIERS",
    "SUPPORT_TABLE",
    "UnsupportedIdentifierError",
    "build_identifier_url_part",
    "build_image_url",
    "check_supported",
    "default_mixer",
    "fetch_kitchen_data",
    "get_mix_url",
    "resolve_combination",
    "support_table",
    "supported_identifiers",
    "to_canonical_identifier",
]


@lru_cache(maxsize=1)
def default_mixer() -> EmojiMixer:
    return EmojiMixer(default_data())


def supported_identifiers() -> tuple[str, ...]:
    return default_mixer().data.supported_identifiers


def support_table() -> Mapping[str, tuple[CombinationRecord, ...]]:
    return default_mixer().data.support_table


_LAZY_CONSTANTS = {
    "SUPPORTED_IDENTIFIERS": supported_identifiers,
    "SUPPORT_TABLE": support_table,
}


def __getattr__(name: str):
    # SUPPORTED_IDENTIFIERS and SUPPORT_TABLE load the bundled dataset on first access.
    if name in _LAZY_CONSTANTS:
        return _LAZY_CONSTANTS[name]()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def to_canonical_identifier(raw: str, legacy_remap: bool = False) -> Optional[str]:
    return default_mixer().to_canonical_identifier(raw, legacy_remap)


def check_supported(emoji: str, legacy_remap: bool = False) -> Optional[tuple[CombinationRecord, ...]]:
    return default_mixer().check_supported(emoji, legacy_remap)


def resolve_combination(left_identifier: str, right_identifier: str) -> Optional[CombinationRecord]:
    return default_mixer().resolve_combination(left_identifier, right_identifier)


def get_mix_url(
    left_emoji: str,
    right_emoji: str,
    detailed_errors: bool = False,
    legacy_remap: bool = False,
) -> Optional[str]:
    return default_mixer().get_mix_url(left_emoji, right_emoji, detailed_errors, legacy_remap)
