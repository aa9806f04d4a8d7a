"""Emission policy: which finished groups reach the output, and how."""
from typing import Iterable, Iterator, Tuple

from .codec import format_record


def keep(entry) -> bool:
    """A group with a single spelling has no anagram partner."""
    return len(entry) > 1


def emit(records: Iterable[Tuple[str, frozenset]], include_signature: bool = False) -> Iterator[str]:
    for signature, entry in records:
        if keep(entry):
            yield format_record(signature, entry, include_signature)
