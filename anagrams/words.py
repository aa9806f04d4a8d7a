"""
Word helpers shared by the tokenizer, the signature builder and the reconciler.

A word is a plain ``str`` made of Unicode letters and combining marks, with
optional interior joiner characters. Which characters count as joiners is a
``JoinerSet`` value handed to each component when it is built.
"""
import unicodedata
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidWordError

DEFAULT_JOINERS = "'’-"

JoinerProfile = Tuple[Tuple[int, str], ...]


def is_letter(ch: str) -> bool:
    """True for Unicode letters (L*) and combining marks (M*)."""
    return unicodedata.category(ch)[0] in ("L", "M")


@dataclass(frozen=True)
class JoinerSet:
    """Characters allowed inside a word without ending it."""
    chars: str = DEFAULT_JOINERS

    def __post_init__(self):
        if not isinstance(self.chars, str):
            raise ValueError(f"joiners must be a string, got {type(self.chars).__name__}")
        for ch in self.chars:
            if is_letter(ch) or ch.isspace() or ch == "_":
                raise ValueError(f"{ch!r} cannot be used as a joiner")

    def __contains__(self, ch) -> bool:
        return bool(ch) and ch in self.chars

    def strip(self, word: str) -> str:
        """Remove every joiner from ``word``."""
        return "".join(ch for ch in word if ch not in self.chars)

    def profile(self, word: str) -> JoinerProfile:
        """Positions and identities of the joiners in ``word``."""
        return tuple((i, ch) for i, ch in enumerate(word) if ch in self.chars)


DEFAULT_JOINER_SET = JoinerSet()


def fold_key(word: str, joiners: JoinerSet = DEFAULT_JOINER_SET) -> str:
    """Case and joiner insensitive form; equal keys mean the same word."""
    return joiners.strip(word).lower()


def validate_word(word, joiners: JoinerSet = DEFAULT_JOINER_SET) -> str:
    if not isinstance(word, str):
        raise InvalidWordError(word, "not a string")
    if len(word) < 2:
        raise InvalidWordError(word, "shorter than two characters")
    if not joiners.strip(word):
        raise InvalidWordError(word, "empty after joiner stripping")
    if word[0] in joiners or word[-1] in joiners:
        raise InvalidWordError(word, "leading or trailing joiner")
    for ch in word:
        if ch not in joiners and not is_letter(ch):
            raise InvalidWordError(word, f"unexpected character {ch!r}")
    return word
