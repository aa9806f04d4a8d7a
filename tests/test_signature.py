"""Unit tests for signatures, word validation and the partition hint."""

import itertools
import unittest

from anagrams.errors import InvalidWordError
from anagrams.signature import SignatureBuilder, partition_hint
from anagrams.words import JoinerSet, fold_key, validate_word

SIGNATURES = SignatureBuilder()


class TestSignature(unittest.TestCase):
    def test_sorted_lowercase_letters(self):
        self.assertEqual(SIGNATURES.signature("The"), "eht")
        self.assertEqual(SIGNATURES.signature("cat"), "act")
        self.assertEqual(SIGNATURES.signature("sat"), "ast")

    def test_joiners_removed(self):
        self.assertEqual(SIGNATURES.signature("don't"), "dnot")
        self.assertEqual(SIGNATURES.signature("don’t"), "dnot")
        self.assertEqual(SIGNATURES.signature("f-o'o"), "foo")

    def test_anagrams_share_signature(self):
        self.assertEqual(SIGNATURES("Listen"), SIGNATURES("silent"))
        self.assertEqual(SIGNATURES("Listen"), SIGNATURES("En-list"))
        self.assertNotEqual(SIGNATURES("listen"), SIGNATURES("listens"))

    def test_permutation_invariance(self):
        for perm in itertools.permutations("Stare"):
            word = "".join(perm)
            with self.subTest(word=word):
                self.assertEqual(SIGNATURES.signature(word), "aerst")

    def test_accents_are_distinct_letters(self):
        self.assertNotEqual(SIGNATURES.signature("fôö"), SIGNATURES.signature("foo"))
        self.assertEqual(SIGNATURES.signature("fôö"), SIGNATURES.signature("öfô"))

    def test_sorted_by_code_point(self):
        self.assertEqual(SIGNATURES.signature("Zebra"), "aberz")
        self.assertEqual(SIGNATURES.signature("éa"), "aé")

    def test_invalid_words_rejected(self):
        for word in ["", "a", "--", "'a", "a'", "ab1", "a b", None]:
            with self.subTest(word=word):
                with self.assertRaises(InvalidWordError):
                    SIGNATURES.signature(word)

    def test_custom_joiners(self):
        builder = SignatureBuilder(JoinerSet("."))
        self.assertEqual(builder.signature("U.S.A"), "asu")
        with self.assertRaises(InvalidWordError):
            builder.signature("don't")


class TestWords(unittest.TestCase):
    def test_fold_key(self):
        self.assertEqual(fold_key("F-o'O"), "foo")

    def test_validate_returns_word(self):
        self.assertEqual(validate_word("rock-n-roll"), "rock-n-roll")

    def test_error_carries_reason(self):
        with self.assertRaises(InvalidWordError) as ctx:
            validate_word("'tis")
        self.assertEqual(ctx.exception.word, "'tis")
        self.assertIn("joiner", ctx.exception.reason)


class TestPartitionHint(unittest.TestCase):
    def test_length_modulo_workers(self):
        self.assertEqual(partition_hint("act", 4), 3)
        self.assertEqual(partition_hint("aerst", 4), 1)
        self.assertEqual(partition_hint("aerst", 1), 0)

    def test_same_signature_same_worker(self):
        self.assertEqual(partition_hint(SIGNATURES("Listen"), 3), partition_hint(SIGNATURES("silent"), 3))

    def test_total(self):
        self.assertEqual(partition_hint("abc", 0), 0)
        self.assertEqual(partition_hint("", 5), 0)


if __name__ == "__main__":
    unittest.main()
