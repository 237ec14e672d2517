import tempfile
import unittest
from pathlib import Path

from wordsquare.core.exceptions import DictionaryLoadError, InvalidWordError
from wordsquare.data.dictionary import DictionaryConfig, WordDictionary
from wordsquare.data.loader import five_letter_words, load_words
from wordsquare.data.normalization import is_valid_word, normalize_word


class NormalizationTests(unittest.TestCase):
    def test_normalize_word_strips_and_lowercases(self) -> None:
        self.assertEqual(normalize_word("  GHOST\n"), "ghost")
        self.assertEqual(normalize_word(""), "")

    def test_is_valid_word(self) -> None:
        self.assertTrue(is_valid_word("ghost"))
        for bad in ("ghos", "ghosts", "Ghost", "gh0st", "ghöst", "", None, 12345):
            with self.subTest(bad=bad):
                self.assertFalse(is_valid_word(bad))


class DictionaryTests(unittest.TestCase):
    def test_sorted_and_deduplicated(self) -> None:
        dictionary = WordDictionary(["route", "ghost", "route", "erode"])
        self.assertEqual(dictionary.words, ("erode", "ghost", "route"))
        self.assertEqual(len(dictionary), 3)
        self.assertIn("ghost", dictionary)
        self.assertNotIn("grime", dictionary)
        self.assertEqual(dictionary.index_of("route"), 2)
        self.assertEqual(dictionary.index_of("zzzzz"), -1)

    def test_malformed_words_rejected(self) -> None:
        for bad in ("four", "sixsix", "GHOST", "gh0st", "gh st"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidWordError) as ctx:
                    WordDictionary(["ghost", bad])
                self.assertEqual(ctx.exception.word, bad)

    def test_invalid_word_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            WordDictionary([None])  # type: ignore[list-item]

    def test_normalize_option(self) -> None:
        dictionary = WordDictionary([" GHOST", "Route\n"], DictionaryConfig(normalize=True))
        self.assertEqual(dictionary.words, ("ghost", "route"))
        with self.assertRaises(InvalidWordError):
            WordDictionary(["toolong"], DictionaryConfig(normalize=True))

    def test_empty_dictionary(self) -> None:
        dictionary = WordDictionary([])
        self.assertEqual(len(dictionary), 0)
        self.assertNotIn("ghost", dictionary)

    def test_without_returns_new_dictionary(self) -> None:
        dictionary = WordDictionary(["ghost", "route", "erode"])
        smaller = dictionary.without("route", "absent")
        self.assertEqual(smaller.words, ("erode", "ghost"))
        self.assertEqual(dictionary.words, ("erode", "ghost", "route"))


class LoaderTests(unittest.TestCase):
    def test_five_letter_words_filters_lines(self) -> None:
        text = "ghost\nGhost\nroutes\nint3r\n\nerode\nmodes \n"
        self.assertEqual(five_letter_words(text), ["ghost", "erode"])

    def test_load_words_reads_file_with_limit(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "words.txt"
            sample.write_text("ghost\nroute\nlongword\ninter\n", encoding="utf-8")
            self.assertEqual(load_words(sample), ["ghost", "route", "inter"])
            self.assertEqual(load_words(sample, limit=2), ["ghost", "route"])
            self.assertEqual(load_words(sample, limit=0), [])

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(DictionaryLoadError):
                load_words(Path(tmpdir) / "absent.txt")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
