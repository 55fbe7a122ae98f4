from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

import requests

from .errors import DataError


log = logging.getLogger(__name__)

UA = {"User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"}

IDENTIFIER_RE = re.compile(r"[0-9a-f]+(?:-[0-9a-f]+)*", re.IGNORECASE)
DATE_RE = re.compile(r"[0-9]{8}")

BUNDLED_DATA = Path(__file__).with_name("emoji_kitchen.json")


def is_canonical_identifier(value: str) -> bool:
    """True for hyphen-joined hex code points such as '1fa84-fe0f' (any case)."""
    return bool(IDENTIFIER_RE.fullmatch(value))


@dataclass(frozen=True)
class CombinationRecord:
    left_identifier: str
    right_identifier: str
    date: str  # YYYYMMDD, doubles as the image path segment

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CombinationRecord":
        try:
            left = str(raw["leftEmoji"]).lower()
            right = str(raw["rightEmoji"]).lower()
            date = str(raw["date"])
        except (KeyError, TypeError) as e:
            raise DataError(f"Malformed combination record {raw!r}: missing {e}") from e
        for ident in (left, right):
            if not is_canonical_identifier(ident):
                raise DataError(f"Malformed identifier {ident!r} in record {raw!r}")
        if not DATE_RE.fullmatch(date):
            raise DataError(f"Malformed date {date!r} in record {raw!r}; expected YYYYMMDD")
        return cls(left_identifier=left, right_identifier=right, date=date)

    def to_dict(self) -> dict[str, str]:
        return {"leftEmoji": self.left_identifier, "rightEmoji": self.right_identifier, "date": self.date}


@dataclass(frozen=True)
class EmojiKitchenData:
    """
    The static kitchen dataset:
    - supported_identifiers: every identifier the kitchen recognizes, in published order.
      Order matters; normalization picks the first entry with a matching prefix.
    - support_table: identifier -> combination records involving it, historical re-releases
      included, in published order. Published data files each pair under both of its emojis.
    """

    supported_identifiers: tuple[str, ...]
    support_table: Mapping[str, tuple[CombinationRecord, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze whatever mapping we were handed so callers can't mutate shared state.
        table = {k: tuple(v) for k, v in self.support_table.items()}
        object.__setattr__(self, "supported_identifiers", tuple(self.supported_identifiers))
        object.__setattr__(self, "support_table", MappingProxyType(table))

    @classmethod
    def from_records(
        cls,
        supported_identifiers: Iterable[str],
        records: Iterable[CombinationRecord],
    ) -> "EmojiKitchenData":
        """Group flat records under their right-hand identifier."""
        table: dict[str, list[CombinationRecord]] = {}
        for rec in records:
            table.setdefault(rec.right_identifier, []).append(rec)
        return cls(supported_identifiers=tuple(supported_identifiers), support_table=table)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EmojiKitchenData":
        """
        Build from the published layout:
          {"supportedEmojis": [...], "emojiCompatibilityData": {"<id>": [{"leftEmoji", "rightEmoji", "date"}]}}
        """
        if not isinstance(payload, Mapping):
            raise DataError(f"Expected a JSON object, got {type(payload).__name__}")
        supported = payload.get("supportedEmojis")
        compat = payload.get("emojiCompatibilityData")
        if not isinstance(supported, list) or not isinstance(compat, Mapping):
            raise DataError("Payload needs a 'supportedEmojis' list and an 'emojiCompatibilityData' object")

        identifiers: list[str] = []
        for ident in supported:
            ident = str(ident).lower()
            if not is_canonical_identifier(ident):
                raise DataError(f"Malformed supported identifier {ident!r}")
            identifiers.append(ident)

        table: dict[str, tuple[CombinationRecord, ...]] = {}
        for key, raw_records in compat.items():
            if not isinstance(raw_records, list):
                raise DataError(f"Records for {key!r} must be a list")
            table[str(key).lower()] = tuple(CombinationRecord.from_dict(r) for r in raw_records)

        log.debug("Loaded kitchen data: %d identifiers, %d table keys", len(identifiers), len(table))
        return cls(supported_identifiers=tuple(identifiers), support_table=table)

    @classmethod
    def load(cls, path: Path | str) -> "EmojiKitchenData":
        path = Path(path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataError(f"{path} is not valid JSON: {e}") from e
        return cls.from_dict(payload)

    def to_dict(self) -> dict[str, Any]:
        return {
            "supportedEmojis": list(self.supported_identifiers),
            "emojiCompatibilityData": {
                k: [r.to_dict() for r in recs] for k, recs in self.support_table.items()
            },
        }

    def records_for(self, identifier: str) -> tuple[CombinationRecord, ...]:
        return self.support_table.get(identifier, ())

    def compatible_with(self, identifier: str) -> list[str]:
        """Left-hand identifiers of every record filed under `identifier`."""
        return [r.left_identifier for r in self.records_for(identifier)]


@lru_cache(maxsize=1)
def default_data() -> EmojiKitchenData:
    """The sample dataset shipped with the package."""
    return EmojiKitchenData.load(BUNDLED_DATA)


@lru_cache(maxsize=8)
def fetch_kitchen_data(url: str, timeout_s: int = 30) -> EmojiKitchenData:
    """
    Download a dataset in the published layout.
    Cached per URL for the life of the process.
    """
    log.info("Fetching kitchen data from %s", url)
    r = requests.get(url, headers=UA, timeout=timeout_s)
    r.raise_for_status()
    try:
        payload = r.json()
    except ValueError as e:
        raise DataError(f"{url} did not return JSON: {e}") from e
    return EmojiKitchenData.from_dict(payload)


def resolve_data(path: Optional[str] = None, url: Optional[str] = None) -> EmojiKitchenData:
    if path:
        return EmojiKitchenData.load(path)
    if url:
        return fetch_kitchen_data(url)
    return default_data()
