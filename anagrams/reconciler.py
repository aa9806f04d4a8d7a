"""
Reconciler: fold the spellings seen for one signature into a representative set.

Each entry is a ``frozenset`` of spellings. Spellings of the same word (same
letters once case and joiners are ignored) collapse to one representative;
genuine anagrams sharing the signature are kept side by side.

``merge`` compares the incoming spelling with every candidate of the entry
and applies the first rule of ``RULES`` that relates them. Every rule keeps
the most normalised spelling both sides agree on:

* letter case is kept when both spellings have the same case, otherwise the
  representative is lowercased;
* joiner placement is kept when both spellings place the same joiners at the
  same positions, otherwise the joiners are dropped.

Both choices only ever move towards the lowercase stripped form, so folding
the same words in any order, or combining partial entries in any grouping,
ends on the same entry.
"""
from typing import Callable, Iterable, List, NamedTuple, Optional

from .words import DEFAULT_JOINER_SET, JoinerSet

Entry = frozenset

EMPTY = frozenset()


class Rule(NamedTuple):
    name: str
    # (candidate, incoming, joiners) -> surviving spelling, or None if unrelated
    resolve: Callable[[str, str, JoinerSet], Optional[str]]


def _incoming_is_simpler(candidate, incoming, joiners):
    if candidate.lower() == incoming or joiners.strip(candidate) == incoming:
        return incoming
    return None


def _candidate_is_simpler(candidate, incoming, joiners):
    if incoming.lower() == candidate or joiners.strip(incoming) == candidate:
        return candidate
    return None


def _case_and_joiner_cross(candidate, incoming, joiners):
    if (candidate.lower() == joiners.strip(incoming).lower()
            or incoming.lower() == joiners.strip(candidate).lower()):
        return joiners.strip(candidate).lower()
    return None


def _identical(candidate, incoming, joiners):
    return candidate if candidate == incoming else None


def _joiner_placement(candidate, incoming, joiners):
    letters, other = joiners.strip(candidate), joiners.strip(incoming)
    if letters.lower() != other.lower():
        return None
    if joiners.profile(candidate) == joiners.profile(incoming):
        spelling = candidate
    else:
        spelling = letters
    return spelling if letters == other else spelling.lower()


RULES: List[Rule] = [
    Rule("incoming-is-simpler", _incoming_is_simpler),
    Rule("candidate-is-simpler", _candidate_is_simpler),
    Rule("case-and-joiner-cross", _case_and_joiner_cross),
    Rule("identical", _identical),
    Rule("joiner-placement", _joiner_placement),
]


class Reconciler:
    def __init__(self, joiners: JoinerSet = DEFAULT_JOINER_SET, rules: Optional[List[Rule]] = None):
        self.joiners = joiners
        self.rules = list(RULES if rules is None else rules)

    def resolve(self, entry: Entry, incoming: str):
        """Return ``(rule_name, candidate, survivor)`` for the first matching rule.

        ``(None, None, incoming)`` means no candidate is related and
        ``incoming`` is a new member.
        """
        for rule in self.rules:
            for candidate in sorted(entry):
                survivor = rule.resolve(candidate, incoming, self.joiners)
                if survivor is not None:
                    return rule.name, candidate, survivor
        return None, None, incoming

    def merge(self, entry: Entry, incoming: str) -> Entry:
        """Account for one more spelling; returns a new entry."""
        _, candidate, survivor = self.resolve(entry, incoming)
        if candidate is None:
            return entry | {survivor}
        if survivor == candidate:
            return entry
        return (entry - {candidate}) | {survivor}

    def merge_entries(self, left: Entry, right: Entry) -> Entry:
        """Combine two partial entries of the same signature."""
        merged = frozenset(left)
        for word in sorted(right):
            merged = self.merge(merged, word)
        return merged

    def reconcile(self, words: Iterable[str], entry: Entry = EMPTY) -> Entry:
        for word in words:
            entry = self.merge(entry, word)
        return entry
