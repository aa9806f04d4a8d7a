"""Anagram signatures and the reducer routing hint."""
from .words import DEFAULT_JOINER_SET, JoinerSet, validate_word


class SignatureBuilder:
    """Compute the grouping key of a word.

    Lowercase, drop joiners, sort by code point. Two words share a signature
    iff they have the same letter multiset after that normalisation.
    """

    def __init__(self, joiners: JoinerSet = DEFAULT_JOINER_SET):
        self.joiners = joiners

    def signature(self, word: str) -> str:
        validate_word(word, self.joiners)
        return "".join(sorted(self.joiners.strip(word.lower())))

    __call__ = signature


def partition_hint(signature: str, worker_count: int) -> int:
    """Suggest which worker owns ``signature``.

    Words of different lengths never share a signature, so routing on length
    keeps every signature on one worker.
    """
    if worker_count < 1:
        return 0
    return len(signature) % worker_count
