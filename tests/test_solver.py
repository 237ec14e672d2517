import unittest
from typing import List

from wordsquare.core.models import Solution
from wordsquare.data.dictionary import WordDictionary
from wordsquare.engine.builder import SquareBuilder
from wordsquare.engine.prefix_index import BisectPrefixIndex
from wordsquare.engine.solver import solve_word_squares

KNOWN_SQUARE = ["grime", "honor", "outdo", "steed", "terse", "ghost", "route", "inter", "modes", "erode"]
ELEVEN = ["event", "clues", "angel", "scent", "larva", "pests", "lance", "pelts", "salts", "clasp", "urges"]


def backtracking(words: List[str]) -> List[Solution]:
    index = BisectPrefixIndex(WordDictionary(words))
    builder = SquareBuilder(index)
    return [s for start in range(len(index.words)) for s in builder.search(start)]


class CpSatSolverTests(unittest.TestCase):
    def test_known_square(self) -> None:
        solutions = solve_word_squares(WordDictionary(KNOWN_SQUARE))
        expected = Solution(rows=("ghost", "route", "inter", "modes", "erode"))
        self.assertEqual(sorted(solutions), sorted([expected, expected.transpose()]))

    def test_agrees_with_backtracking(self) -> None:
        for words in (ELEVEN, KNOWN_SQUARE + ["ghoul", "grist", "steel"]):
            with self.subTest(first=words[0]):
                self.assertEqual(
                    sorted(solve_word_squares(WordDictionary(words))),
                    sorted(backtracking(words)),
                )

    def test_letters_at_both_ends_of_alphabet(self) -> None:
        square = Solution(rows=("zabcd", "efghi", "jklmn", "opqrs", "tuvwa"))
        words = list(square.words())
        solutions = solve_word_squares(WordDictionary(words))
        self.assertIn(square, solutions)
        self.assertIn(square.transpose(), solutions)
        self.assertEqual(sorted(solutions), sorted(backtracking(words)))

    def test_too_few_words(self) -> None:
        self.assertEqual(solve_word_squares(WordDictionary([])), [])
        self.assertEqual(solve_word_squares(WordDictionary(KNOWN_SQUARE[:9])), [])

    def test_no_square_is_not_an_error(self) -> None:
        words = ["aaaaa", "bbbbb", "ccccc", "ddddd", "eeeee", "fffff", "ggggg", "hhhhh", "iiiii", "jjjjj"]
        self.assertEqual(solve_word_squares(WordDictionary(words)), [])

    def test_sink_receives_squares(self) -> None:
        received: List[Solution] = []
        solutions = solve_word_squares(WordDictionary(KNOWN_SQUARE), sink=received.append)
        self.assertEqual(received, solutions)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
