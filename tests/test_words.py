"""WordSource and word list loading test cases."""

import os
import sys
import tempfile
import unittest
from unittest import mock

import requests

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from errors import DictionaryUnavailable, EmptyWordList, InvalidTarget, NoTargetSet
from words import WordSource, fetch_words, load_words, parse_words, read_words


class TestWordSource(unittest.TestCase):
    def setUp(self):
        self.source = WordSource(["crane", "SLATE ", "Plumb"])

    def test_contains_is_case_insensitive(self):
        self.assertTrue(self.source.contains("crane"))
        self.assertTrue(self.source.contains("SLATE"))
        self.assertTrue(self.source.contains("pLuMb"))
        self.assertFalse(self.source.contains("GHOST"))
        self.assertFalse(self.source.contains("CRAN"))

    def test_no_target(self):
        with self.assertRaises(NoTargetSet):
            self.source.current_target()

    def test_set_target(self):
        self.source.set_target("SLATE")
        self.assertEqual(self.source.current_target(), "SLATE")

    def test_set_target_rejects_invalid_words(self):
        self.source.set_target("CRANE")
        for word in ["slate", "GHOST", "CRAN", "CRANES", "CR4NE"]:
            with self.assertRaises(InvalidTarget):
                self.source.set_target(word)
        self.assertEqual(self.source.current_target(), "CRANE")

    def test_constructor_validates_target(self):
        with self.assertRaises(InvalidTarget):
            WordSource(["CRANE"], target="GHOST")

    def test_pick_random_target(self):
        rng = mock.Mock()
        rng.shuffle.side_effect = lambda words: words.reverse()
        words = ["CRANE", "SLATE", "PLUMB"]
        self.assertEqual(self.source.pick_random_target(words, rng), "PLUMB")
        self.assertEqual(self.source.current_target(), "PLUMB")
        # the caller's list is left alone
        self.assertEqual(words, ["CRANE", "SLATE", "PLUMB"])

    def test_pick_random_target_uses_every_word(self):
        seen = {self.source.pick_random_target(["CRANE", "SLATE", "PLUMB"]) for _ in range(200)}
        self.assertEqual(seen, {"CRANE", "SLATE", "PLUMB"})

    def test_pick_from_empty_list(self):
        with self.assertRaises(EmptyWordList):
            self.source.pick_random_target([])


class TestParseWords(unittest.TestCase):
    def test_normalises_and_filters(self):
        text = "crane\n SLATE \nhello!\ntoolong\n\nab\nplumb\r\n"
        self.assertEqual(parse_words(text), ["CRANE", "SLATE", "PLUMB"])

    def test_drops_reserved_words(self):
        with self.assertLogs("words", level="WARNING"):
            self.assertEqual(parse_words("blanb\ncrane\nBLANC"), ["CRANE"])


class TestFetchWords(unittest.TestCase):
    @mock.patch("words.requests.get")
    def test_fetch(self, get):
        get.return_value.text = "crane\nslate\n"
        self.assertEqual(fetch_words("http://words", timeout=3), ["CRANE", "SLATE"])
        get.assert_called_once_with("http://words", timeout=3)

    @mock.patch("words.requests.get")
    def test_connection_error(self, get):
        get.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(DictionaryUnavailable):
            fetch_words("http://words")

    @mock.patch("words.requests.get")
    def test_http_error(self, get):
        get.return_value.raise_for_status.side_effect = requests.HTTPError("404")
        with self.assertRaises(DictionaryUnavailable):
            fetch_words("http://words")


class TestLoadWords(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "words.txt")

    def tearDown(self):
        self.tmp.cleanup()

    def test_read_from_path(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("crane\nslate\n")
        self.assertEqual(read_words(self.path), ["CRANE", "SLATE"])

    @mock.patch("words.requests.get")
    def test_path_wins_over_url(self, get):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("crane\n")
        self.assertEqual(load_words(url="http://words", path=self.path), ["CRANE"])
        get.assert_not_called()

    def test_missing_file(self):
        with self.assertRaises(DictionaryUnavailable):
            load_words(path=self.path)

    def test_empty_list(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("no\nword\nhere\n")
        with self.assertRaises(EmptyWordList):
            load_words(path=self.path)

    @mock.patch("words.requests.get")
    def test_load_from_url(self, get):
        get.return_value.text = "crane\n"
        self.assertEqual(load_words(url="http://words"), ["CRANE"])


if __name__ == "__main__":
    unittest.main()
