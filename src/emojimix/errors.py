from __future__ import annotations

from typing import Optional, Sequence


class EmojiMixError(ValueError):
    """Base class for everything the mixer raises on bad emoji input."""


class DataError(EmojiMixError):
    """The kitchen dataset payload is malformed."""


class UnsupportedIdentifierError(EmojiMixError):
    """
    The input resolved to an identifier the kitchen no longer combines.
    Raised by normalization whenever legacy remapping is off.
    """

    def __init__(self, candidate: str, raw: str) -> None:
        self.candidate = candidate
        self.raw = raw
        super().__init__(
            f"'{candidate}' / '{raw}' is not a supported unicode emoji anymore. (It is outdated) "
            f"Visit https://unicodeplus.com/U+{candidate} to learn more about it."
        )


class InvalidEmojiError(EmojiMixError):
    def __init__(self, argument: str, value: Optional[str] = None) -> None:
        self.argument = argument
        self.value = value
        super().__init__(f"{value} [{argument}] argument is not a valid unicode emoji.")


class NotSupportedEmojiError(EmojiMixError):
    def __init__(self, argument: str, identifier: str) -> None:
        self.argument = argument
        self.identifier = identifier
        super().__init__(f"{identifier} [{argument}] argument is not a supported emoji.")


class NoCombinationError(EmojiMixError):
    """Both emojis are fine on their own but the kitchen never paired them."""

    def __init__(self, left: str, right: str, compatible: Sequence[str]) -> None:
        self.left = left
        self.right = right
        self.compatible = tuple(compatible)
        super().__init__(
            f"'{left}' is not compatible with '{right}'. "
            f"Here are all emojis compatible with '{right}':\n[{', '.join(self.compatible)}]"
        )
