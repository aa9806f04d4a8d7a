"""
Tokenizer: extract candidate words from one line of text.

Interface:
    Tokenizer(joiners).extract(line) -> iterator of words

The line is cut into spans on a space, ``--`` or ``_``. Each span yields at
most one word: its longest run that starts and ends on a letter (or combining
mark) with only letters, marks and joiners in between. A span containing
a digit yields nothing.
"""
import re
from typing import Iterator, Optional

from .words import DEFAULT_JOINER_SET, JoinerSet, is_letter

SPAN_BREAK = re.compile(r" |--|_")


class Tokenizer:
    def __init__(self, joiners: JoinerSet = DEFAULT_JOINER_SET):
        self.joiners = joiners

    def extract(self, line: str) -> Iterator[str]:
        """Lazily yield the words of ``line``; calling again restarts."""
        for span in SPAN_BREAK.split(line):
            # "42nd" or "mp3s" is not a word, not even partly
            if has_digit(span):
                continue
            word = self.longest_match(span)
            if word is not None and self.is_candidate(word):
                yield word

    def longest_match(self, span: str) -> Optional[str]:
        best = None
        start = last_letter = None
        for i, ch in enumerate(span):
            if is_letter(ch):
                if start is None:
                    start = i
                last_letter = i
            elif start is not None and ch not in self.joiners:
                best = _longer(best, span, start, last_letter)
                start = None
        if start is not None:
            best = _longer(best, span, start, last_letter)
        return best

    def is_candidate(self, word: str) -> bool:
        """Drop words that can never take part in a non-trivial anagram."""
        if len(word) <= 1:
            return False
        letters = self.joiners.strip(word).lower()
        return len(set(letters)) > 1


def has_digit(span: str) -> bool:
    return any(ch.isdigit() for ch in span)


def _longer(best: Optional[str], span: str, start: int, end: int) -> Optional[str]:
    # Ties keep the leftmost run.
    if end > start and (best is None or end + 1 - start > len(best)):
        return span[start:end + 1]
    return best
