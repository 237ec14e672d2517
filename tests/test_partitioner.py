import threading
import unittest
from typing import List
from unittest import mock

from wordsquare.core.models import Solution
from wordsquare.data.dictionary import WordDictionary
from wordsquare.engine.builder import SquareBuilder
from wordsquare.engine.partitioner import Partitioner, default_worker_count
from wordsquare.engine.prefix_index import BisectPrefixIndex, MapPrefixIndex

WORDS = [
    "grime", "honor", "outdo", "steed", "terse", "ghost", "route", "inter", "modes", "erode",
    "level", "oxide", "atria", "truck", "hasty", "loath", "extra", "virus", "edict", "leaky",
    "loses", "apple", "diode", "lured", "emery", "ladle", "opium", "spore", "elder", "seedy",
]


def sequential(index) -> List[Solution]:
    builder = SquareBuilder(index)
    found: List[Solution] = []
    for start in range(len(index.words)):
        found.extend(builder.search(start))
    return found


class PartitionerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = WordDictionary(WORDS)
        self.index = BisectPrefixIndex(self.dictionary)

    def test_default_worker_count_positive(self) -> None:
        self.assertGreaterEqual(default_worker_count(), 1)
        with mock.patch("wordsquare.engine.partitioner.psutil.cpu_count", return_value=None):
            self.assertEqual(default_worker_count(), 1)

    def test_worker_counts_agree(self) -> None:
        expected = sorted(sequential(self.index))
        self.assertGreaterEqual(len(expected), 6)
        for workers in (1, 2, 3, 8, 64):
            with self.subTest(workers=workers):
                result = Partitioner(self.index, workers=workers).run()
                self.assertTrue(result.ok)
                self.assertEqual(sorted(result.solutions), expected)
                self.assertLessEqual(result.workers, len(WORDS))

    def test_map_index_shared_across_workers(self) -> None:
        result = Partitioner(MapPrefixIndex(self.dictionary), workers=4).run()
        self.assertEqual(sorted(result.solutions), sorted(sequential(self.index)))

    def test_explicit_starts(self) -> None:
        start = self.dictionary.index_of("ghost")
        result = Partitioner(self.index, workers=2).run([start])
        self.assertEqual(len(result.solutions), 2)
        self.assertEqual(result.workers, 1)

    def test_empty_dictionary(self) -> None:
        index = BisectPrefixIndex(WordDictionary([]))
        result = Partitioner(index, workers=4).run()
        self.assertEqual(result.solutions, [])
        self.assertTrue(result.ok)

    def test_invalid_worker_count(self) -> None:
        with self.assertRaises(ValueError):
            Partitioner(self.index, workers=0)

    def test_failure_is_isolated_to_its_start(self) -> None:
        original = SquareBuilder.search
        failing = self.dictionary.index_of("level")

        def flaky(builder: SquareBuilder, start: int) -> List[Solution]:
            if start == failing:
                raise RuntimeError("boom")
            return original(builder, start)

        baseline = SquareBuilder(self.index)
        expected = sorted(
            solution
            for start in range(len(WORDS))
            if start != failing
            for solution in baseline.search(start)
        )

        with mock.patch.object(SquareBuilder, "search", flaky):
            result = Partitioner(self.index, workers=3).run()

        self.assertFalse(result.ok)
        self.assertEqual(len(result.failures), 1)
        failure = result.failures[0]
        self.assertEqual(failure.start_word, "level")
        self.assertEqual(failure.start_index, failing)
        self.assertIsInstance(failure.error, RuntimeError)
        self.assertIn("level", str(failure))
        self.assertEqual(sorted(result.solutions), expected)
        full = sequential(self.index)
        self.assertTrue(any(solution.rows[0] == "level" for solution in full))
        self.assertLess(len(expected), len(full))

    def test_sink_calls_are_serialized(self) -> None:
        received: List[Solution] = []
        active = []
        overlap = threading.Event()

        def sink(solution: Solution) -> None:
            if active:
                overlap.set()
            active.append(solution)
            received.append(solution)
            active.pop()

        result = Partitioner(self.index, workers=4, sink=sink).run()
        self.assertFalse(overlap.is_set())
        self.assertEqual(sorted(received), sorted(result.solutions))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
