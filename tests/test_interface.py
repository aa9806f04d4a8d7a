"""The functions exposed to an execution engine, driven through small folds."""

import unittest

import anagrams
from anagrams import EMPTY, decode, encode, extract, keep, merge, merge_entries, signature


class TestScenarios(unittest.TestCase):
    def test_distinct_word_added(self):
        self.assertEqual(merge({"foo"}, "bar"), {"foo", "bar"})

    def test_same_word_not_duplicated(self):
        self.assertEqual(merge({"foo"}, "foo"), {"foo"})

    def test_case_variants(self):
        self.assertEqual(merge({"Foo"}, "Foo"), {"Foo"})
        self.assertEqual(merge({"foo"}, "Foo"), {"foo"})
        self.assertEqual(merge({"Foo"}, "foo"), {"foo"})

    def test_joiner_kept_without_collision(self):
        self.assertEqual(merge({"fo'o"}, "bar"), {"fo'o", "bar"})

    def test_joiner_form_collapses_to_plain(self):
        self.assertEqual(merge({"fo'o"}, "foo"), {"foo"})

    def test_case_collapses_placement_kept(self):
        self.assertEqual(merge({"f-o'o"}, "F-o'o"), {"f-o'o"})

    def test_different_placement_collapses(self):
        self.assertEqual(merge({"fo'o"}, "f-oo"), {"foo"})

    def test_line_without_anagrams(self):
        words = list(extract("The cat sat"))
        self.assertEqual(words, ["The", "cat", "sat"])
        self.assertEqual([signature(w) for w in words], ["eht", "act", "ast"])
        groups = {}
        for word in words:
            key = signature(word)
            groups[key] = merge(groups.get(key, EMPTY), word)
        self.assertEqual(len(groups), 3)
        self.assertFalse(any(keep(entry) for entry in groups.values()))


class TestEngineInterface(unittest.TestCase):
    def test_partial_results_combine(self):
        shard_a = EMPTY
        for word in ["Listen", "silent"]:
            shard_a = merge(shard_a, word)
        shard_b = EMPTY
        for word in ["listen", "En-list", "enlist"]:
            shard_b = merge(shard_b, word)
        combined = merge_entries(decode(encode(shard_a)), decode(encode(shard_b)))
        self.assertEqual(combined, {"listen", "silent", "enlist"})
        self.assertTrue(keep(combined))

    def test_exports(self):
        for name in anagrams.__all__:
            self.assertTrue(hasattr(anagrams, name), name)


if __name__ == "__main__":
    unittest.main()
