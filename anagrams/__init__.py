"""Group the words of a text corpus into sets of anagrams.

Module-level helpers use the default joiners (``'``, ``’`` and ``-``); build
``Tokenizer``, ``SignatureBuilder`` and ``Reconciler`` with a ``JoinerSet``
to use another set.
"""
from .codec import decode, encode, format_record, render
from .errors import AnagramError, CorruptGroupError, InvalidWordError
from .filters import emit, keep
from .reconciler import EMPTY, Reconciler
from .signature import SignatureBuilder, partition_hint
from .tokenizer import Tokenizer
from .words import DEFAULT_JOINERS, JoinerSet

__version__ = "0.1.0"

_tokenizer = Tokenizer()
_signatures = SignatureBuilder()
_reconciler = Reconciler()


def extract(line: str):
    return _tokenizer.extract(line)


def signature(word: str) -> str:
    return _signatures.signature(word)


def merge(entry, word: str) -> frozenset:
    return _reconciler.merge(frozenset(entry), word)


def merge_entries(left, right) -> frozenset:
    return _reconciler.merge_entries(frozenset(left), frozenset(right))


__all__ = [
    "AnagramError",
    "CorruptGroupError",
    "DEFAULT_JOINERS",
    "EMPTY",
    "InvalidWordError",
    "JoinerSet",
    "Reconciler",
    "SignatureBuilder",
    "Tokenizer",
    "decode",
    "emit",
    "encode",
    "extract",
    "format_record",
    "keep",
    "merge",
    "merge_entries",
    "partition_hint",
    "render",
    "signature",
]
