"""Unit tests for word extraction."""

import unittest

from anagrams.tokenizer import Tokenizer
from anagrams.words import JoinerSet

TOKENIZER = Tokenizer()


def words(line):
    return list(TOKENIZER.extract(line))


class TestTokenizer(unittest.TestCase):
    def test_simple_sentence(self):
        self.assertEqual(words("The cat sat"), ["The", "cat", "sat"])

    def test_punctuation_trimmed(self):
        self.assertEqual(words('"Hello," she said.'), ["Hello", "she", "said"])
        self.assertEqual(words("'quoted' -dash- (paren)"), ["quoted", "dash", "paren"])

    def test_interior_joiners_kept(self):
        self.assertEqual(words("don't rock-n-roll it’s"), ["don't", "rock-n-roll", "it’s"])

    def test_double_hyphen_and_underscore_split(self):
        self.assertEqual(words("well--known snake_case"), ["well", "known", "snake", "case"])
        self.assertEqual(words("well-known"), ["well-known"])

    def test_one_word_per_span(self):
        # longest run wins, the leftmost on ties
        self.assertEqual(words("ab.cdef"), ["cdef"])
        self.assertEqual(words("hello.world"), ["hello"])
        self.assertEqual(words("ab.cd abc.defg"), ["ab", "defg"])

    def test_spans_with_digits_dropped(self):
        self.assertEqual(words("42nd abc1defg mp3s"), [])
        self.assertEqual(words("the 42nd street"), ["the", "street"])
        self.assertEqual(words("B-52s bombed"), ["bombed"])

    def test_short_and_repeated_words_dropped(self):
        self.assertEqual(words("a I x"), [])
        self.assertEqual(words("aaaa Aa a-a zz"), [])
        self.assertEqual(words("aab"), ["aab"])

    def test_no_match(self):
        self.assertEqual(words(""), [])
        self.assertEqual(words("   "), [])
        self.assertEqual(words("123 456 -- ___ '''"), [])

    def test_unicode_letters_and_marks(self):
        self.assertEqual(words("naïve café Straße"), ["naïve", "café", "Straße"])
        # e followed by a combining acute accent
        self.assertEqual(words("cafe\u0301"), ["cafe\u0301"])
        self.assertEqual(words("слово μήλο"), ["слово", "μήλο"])

    def test_restartable(self):
        line = "Listen silent enlist"
        self.assertEqual(list(TOKENIZER.extract(line)), list(TOKENIZER.extract(line)))

    def test_lazy(self):
        it = TOKENIZER.extract("one two")
        self.assertEqual(next(it), "one")
        self.assertEqual(next(it), "two")
        with self.assertRaises(StopIteration):
            next(it)

    def test_custom_joiners(self):
        tokenizer = Tokenizer(JoinerSet("."))
        self.assertEqual(list(tokenizer.extract("U.S.A don't")), ["U.S.A", "don"])


class TestJoinerSet(unittest.TestCase):
    def test_strip_and_profile(self):
        joiners = JoinerSet()
        self.assertEqual(joiners.strip("f-o'o"), "foo")
        self.assertEqual(joiners.profile("f-o'o"), ((1, "-"), (3, "'")))
        self.assertEqual(joiners.profile("foo"), ())

    def test_letters_rejected(self):
        with self.assertRaises(ValueError):
            JoinerSet("a")
        with self.assertRaises(ValueError):
            JoinerSet("_")


if __name__ == "__main__":
    unittest.main()
