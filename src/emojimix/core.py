from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import emoji

from .data import CombinationRecord, EmojiKitchenData, is_canonical_identifier
from .errors import (
    EmojiMixError,
    InvalidEmojiError,
    NoCombinationError,
    NotSupportedEmojiError,
    UnsupportedIdentifierError,
)
from .urls import build_image_url


log = logging.getLogger(__name__)

# Distance between the retired code points and their current-generation replacements.
LEGACY_OFFSET = 204


def is_single_emoji(text: str) -> bool:
    return emoji.is_emoji(text)


@dataclass(frozen=True)
class MixResult:
    """Outcome of a mix attempt: either a url (with its record) or the error that stopped it."""

    url: Optional[str] = None
    record: Optional[CombinationRecord] = None
    error: Optional[EmojiMixError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class EmojiMixer:
    """
    Normalizes emoji input, resolves pairs against an EmojiKitchenData table
    and builds the image URL. Holds no state besides the (immutable) data.
    """

    def __init__(self, data: EmojiKitchenData) -> None:
        self.data = data

    def to_canonical_identifier(self, raw: str, legacy_remap: bool = False) -> Optional[str]:
        """
        Turn an identifier string ('1F525') or a literal emoji ('🔥') into the identifier the
        kitchen uses. Returns None for input that is neither.

        Raises UnsupportedIdentifierError when the identifier is known but no longer combinable,
        unless legacy_remap is set, in which case a best-guess replacement is returned unchecked.
        """
        if is_canonical_identifier(raw):
            candidate = raw.lower()
        elif is_single_emoji(raw):
            candidate = f"{ord(raw[0]):x}"
        else:
            log.debug("%r is neither an identifier nor an emoji", raw)
            return None

        # Prefix match so '1fa84' finds '1fa84-fe0f'; first hit in published order wins.
        match = next((i for i in self.data.supported_identifiers if i.startswith(candidate)), None)
        if match is None:
            log.debug("No supported identifier starts with %r", candidate)
            return None

        if match not in self.data.support_table:
            if legacy_remap:
                remapped = f"{ord(raw[0]) + LEGACY_OFFSET:x}-fe0f"
                log.debug("Remapped outdated %r to %r", match, remapped)
                return remapped
            raise UnsupportedIdentifierError(match, raw)

        return match

    def check_supported(self, raw: str, legacy_remap: bool = False) -> Optional[tuple[CombinationRecord, ...]]:
        ident = self.to_canonical_identifier(raw, legacy_remap)
        if not ident:
            return None
        return self.data.support_table.get(ident)

    def resolve_combination(self, left_id: str, right_id: str) -> Optional[CombinationRecord]:
        """Most recent record pairing the two identifiers in either orientation."""
        matches = [
            r
            for r in self.data.records_for(right_id)
            if (r.left_identifier == left_id and r.right_identifier == right_id)
            or (r.left_identifier == right_id and r.right_identifier == left_id)
        ]
        if not matches:
            return None
        # sorted() is stable, so equal dates keep their published order.
        matches = sorted(matches, key=lambda r: r.date, reverse=True)
        log.debug("%d record(s) for %s + %s, picked %s", len(matches), left_id, right_id, matches[0].date)
        return matches[0]

    def mix(self, left_emoji: str, right_emoji: str, legacy_remap: bool = False) -> MixResult:
        """
        Run the whole pipeline and report the first failure as a value.
        Normalization errors (outdated identifiers) are still raised.
        """
        left = self.to_canonical_identifier(left_emoji, legacy_remap)
        if not left:
            return MixResult(error=InvalidEmojiError("leftEmoji", left_emoji))
        right = self.to_canonical_identifier(right_emoji, legacy_remap)
        if not right:
            return MixResult(error=InvalidEmojiError("rightEmoji", right_emoji))

        if left not in self.data.supported_identifiers:
            return MixResult(error=NotSupportedEmojiError("leftEmoji", left))
        if right not in self.data.supported_identifiers:
            return MixResult(error=NotSupportedEmojiError("rightEmoji", right))

        record = self.resolve_combination(left, right)
        if record is None:
            return MixResult(error=NoCombinationError(left, right, self.data.compatible_with(right)))

        return MixResult(url=build_image_url(record), record=record)

    def get_mix_url(
        self,
        left_emoji: str,
        right_emoji: str,
        detailed_errors: bool = False,
        legacy_remap: bool = False,
    ) -> Optional[str]:
        """
        URL of the mixed image, or None when the pair can't be mixed.
        With detailed_errors the reason is raised instead of returning None.
        Outdated identifiers raise UnsupportedIdentifierError either way.
        """
        result = self.mix(left_emoji, right_emoji, legacy_remap)
        if result.error is not None:
            if detailed_errors:
                raise result.error
            log.debug("No mix for %r + %r: %s", left_emoji, right_emoji, result.error)
        return result.url
