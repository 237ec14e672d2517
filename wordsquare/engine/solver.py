"""CP-SAT word square enumeration using OR-Tools.

An independent second engine: each of the ten lines gets a word variable tied
to its five letter variables by a table constraint, and the ten word variables
must all differ. Enumerating every feasible assignment yields every valid
orientation of every square, the same set the backtracking engine reports.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import ALPHABET, WORD_LENGTH
from ..core.exceptions import SearchError
from ..core.models import COLUMNS, ROWS, Solution
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .builder import SolutionSink

LOGGER = get_logger(__name__)


class _SquareCollector(cp_model.CpSolverSolutionCallback):
    """Turns each feasible assignment into a :class:`Solution`."""

    def __init__(
        self,
        letters: Dict[Tuple[int, int], cp_model.IntVar],
        sink: Optional[SolutionSink] = None,
    ) -> None:
        super().__init__()
        self._letters = letters
        self._sink = sink
        self.solutions: List[Solution] = []

    def on_solution_callback(self) -> None:
        rows = tuple(
            "".join(ALPHABET[self.value(self._letters[(r, c)])] for c in range(WORD_LENGTH))
            for r in range(WORD_LENGTH)
        )
        solution = Solution(rows=rows)
        self.solutions.append(solution)
        if self._sink is not None:
            self._sink(solution)


def solve_word_squares(
    dictionary: WordDictionary,
    timeout: Optional[float] = None,
    sink: Optional[SolutionSink] = None,
) -> List[Solution]:
    """Enumerate every word square over ``dictionary`` via CP-SAT.

    Args:
        dictionary: Validated word dictionary.
        timeout: Optional solver time limit in seconds. Running out of time
            before the enumeration completes raises :class:`SearchError` with
            the squares found so far.
        sink: Optional callable receiving each square as it is found.

    Returns:
        Every valid square, transposes included, in discovery order.
    """
    # Ten distinct words are needed for any square.
    if len(dictionary) < 2 * WORD_LENGTH:
        return []

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell letter variables
    # ------------------------------------------------------------------
    letters: Dict[Tuple[int, int], cp_model.IntVar] = {
        (r, c): model.new_int_var(0, len(ALPHABET) - 1, f"L_{r}_{c}")
        for r in range(WORD_LENGTH)
        for c in range(WORD_LENGTH)
    }

    # ------------------------------------------------------------------
    # Step 2: One word variable per line, tied to its letters
    # ------------------------------------------------------------------
    table = [
        [position] + [ALPHABET.index(ch) for ch in word]
        for position, word in enumerate(dictionary.words)
    ]
    word_vars = []
    for slot in ROWS + COLUMNS:
        word_var = model.new_int_var(0, len(dictionary) - 1, f"W_{slot}")
        model.add_allowed_assignments([word_var] + [letters[cell] for cell in slot.cells], table)
        word_vars.append(word_var)

    # ------------------------------------------------------------------
    # Step 3: Ten distinct words
    # ------------------------------------------------------------------
    model.add_all_different(word_vars)

    # ------------------------------------------------------------------
    # Step 4: Enumerate
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    # enumeration is only supported by the single-worker search
    solver.parameters.num_workers = 1
    if timeout is not None:
        solver.parameters.max_time_in_seconds = timeout

    collector = _SquareCollector(letters, sink)
    LOGGER.info("CP-SAT: enumerating squares over %d words", len(dictionary))
    status = solver.solve(model, collector)

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: no squares (%.2fs)", solver.wall_time)
        return []
    if status != cp_model.OPTIMAL:
        LOGGER.warning(
            "CP-SAT: enumeration incomplete (status=%s) after %d squares",
            solver.status_name(status),
            len(collector.solutions),
        )
        raise SearchError(
            f"CP-SAT enumeration stopped early: {solver.status_name(status)}",
            solutions=collector.solutions,
        )

    LOGGER.info("CP-SAT: %d squares in %.2fs", len(collector.solutions), solver.wall_time)
    return collector.solutions
