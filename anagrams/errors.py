"""Errors raised by the anagram core."""


class AnagramError(ValueError):
    """Base class for core errors."""


class InvalidWordError(AnagramError):
    """A word does not satisfy the word invariant and cannot be signed."""

    def __init__(self, word, reason: str):
        super().__init__(f"invalid word {word!r}: {reason}")
        self.word = word
        self.reason = reason


class CorruptGroupError(AnagramError):
    """Bytes handed to the group decoder were not produced by the encoder."""
