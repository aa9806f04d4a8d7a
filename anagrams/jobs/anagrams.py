"""
Anagram MapReduce Job (Standardized Format)

Interface:
    iterator_fn(file_bytes, metadata) -> iterator[(line_number, line)]
    map_function(input_key, input_value) -> list[(signature, word)]
    combine_function(signature, [words]) -> (signature, entry)
    reduce_function(signature, [entries]) -> iterator[(signature, entry)]

This job groups words into sets of anagrams:
    signature -> { spelling, spelling, ... }
Spelling variants of one word (case, apostrophes, hyphens) collapse to a
single representative. Dropping groups with one spelling is left to the
worker's emission filter.
"""

from typing import Iterable, Iterator, List, Tuple

from anagrams.config import Settings
from anagrams.filters import keep
from anagrams.reconciler import EMPTY, Reconciler
from anagrams.signature import SignatureBuilder
from anagrams.tokenizer import Tokenizer


class AnagramJob:
    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings()
        joiners = self.settings.joiners
        self.tokenizer = Tokenizer(joiners)
        self.signatures = SignatureBuilder(joiners)
        self.reconciler = Reconciler(joiners)

    def iterator_fn(self, file_bytes: bytes, metadata: dict) -> Iterator[Tuple[int, str]]:
        """
        Split the file into (line_number, line) pairs for map_function.

        Args:
            file_bytes: The raw bytes of the input file.
            metadata: Dictionary with 'file_path' and 'size' (not used here).
        """
        content = file_bytes.decode("utf-8", errors="replace")
        for count, line in enumerate(content.splitlines()):
            yield (count, line)

    def map_function(self, input_key: int, input_value: str) -> List[Tuple[str, str]]:
        """
        Map phase: tokenize one line and emit (signature, word) pairs.

        Args:
            input_key: Position of the line. Not used, kept for the standard interface.
            input_value: The line of text.
        """
        return [(self.signatures.signature(word), word)
                for word in self.tokenizer.extract(input_value)]

    def combine_function(self, key: str, values: Iterable[str]) -> Tuple[str, frozenset]:
        """Pre-aggregation inside one map task: fold raw words into an entry."""
        return key, self.reconciler.reconcile(values)

    def reduce_function(self, key: str, values: Iterable[frozenset]) -> Iterator[Tuple[str, frozenset]]:
        """
        Reduce phase: combine the partial entries of one signature.

        Singletons are still yielded; the emission filter drops them.
        """
        entry = EMPTY
        for partial in values:
            entry = self.reconciler.merge_entries(entry, partial)
        yield key, entry


def make_job(settings: Settings = None) -> AnagramJob:
    return AnagramJob(settings)


_default = AnagramJob()
iterator_fn = _default.iterator_fn
map_function = _default.map_function
combine_function = _default.combine_function
reduce_function = _default.reduce_function


if __name__ == "__main__":
    sample_text = "Listen silent, enlist! The cat sat and acted; tinsel don't Don't"

    print("=== Map Phase ===")
    map_results = map_function(0, sample_text)
    print(f"Input: {sample_text}")
    print(f"Map output: {map_results}")

    print("\n=== Reduce Phase (simulated) ===")
    from collections import defaultdict
    grouped = defaultdict(list)
    for signature, word in map_results:
        grouped[signature].append(word)

    for signature in sorted(grouped):
        _, entry = combine_function(signature, grouped[signature])
        for key, final in reduce_function(signature, [entry]):
            if keep(final):
                print(f"{key}: {sorted(final)}")
