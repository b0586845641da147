"""Independent solution counter built on OR-Tools CP-SAT.

The propagation engine never consults this module. It exists to confirm,
by exhaustive enumeration, that the engine's verdict on a puzzle is right.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Tuple

from ortools.sat.python import cp_model

from ..core.constants import Status
from ..core.models import Coordinate, Edge, Puzzle
from ..utils.logger import get_logger
from .geometry import Geometry

LOGGER = get_logger(__name__)


@dataclass
class CpSatConfig:
    timeout: float = 10.0
    num_workers: int = 4
    solution_limit: int = 2


@dataclass
class CpSatResult:
    status: Status
    solutions: List[FrozenSet[Edge]] = field(default_factory=list)
    exhausted: bool = True

    @property
    def count(self) -> int:
        return len(self.solutions)


def count_solutions(puzzle: Puzzle, config: CpSatConfig | None = None) -> CpSatResult:
    """Enumerate loops satisfying ``puzzle`` until ``solution_limit`` are found.

    Each solution found is blocked with a clause over the edge variables,
    so the counter stops as soon as it can tell unique from multiple.
    ``exhausted`` is False when the time limit cut the enumeration short.
    """

    config = config or CpSatConfig()
    geometry = Geometry(puzzle.size)
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Edge variables and directed arcs
    # ------------------------------------------------------------------
    node_index: Dict[Coordinate, int] = {node: i for i, node in enumerate(geometry.all_nodes())}
    edge_vars: Dict[Edge, cp_model.IntVar] = {}
    arcs: List[Tuple[int, int, cp_model.IntVar]] = []

    for edge in geometry.all_edges():
        x = model.new_bool_var(f"x_{edge.kind.value[0]}_{edge.row}_{edge.col}")
        edge_vars[edge] = x
        a, b = (node_index[n] for n in edge.nodes())
        forward = model.new_bool_var(f"a_{a}_{b}")
        backward = model.new_bool_var(f"a_{b}_{a}")
        arcs.append((a, b, forward))
        arcs.append((b, a, backward))
        model.add(x == forward + backward)

    for node, index in node_index.items():
        arcs.append((index, index, model.new_bool_var(f"skip_{node[0]}_{node[1]}")))

    # ------------------------------------------------------------------
    # Step 2: One circuit through the used nodes, hints, no empty loop
    # ------------------------------------------------------------------
    model.add_circuit(arcs)
    for row, col in puzzle.hinted_cells():
        model.add(sum(edge_vars[e] for e in geometry.edges_from_cell((row, col))) == puzzle.hint(row, col))
    model.add(sum(edge_vars.values()) >= 4)

    # ------------------------------------------------------------------
    # Step 3: Enumerate with blocking clauses
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = config.timeout
    solver.parameters.num_workers = config.num_workers

    solutions: List[FrozenSet[Edge]] = []
    exhausted = True
    while len(solutions) < config.solution_limit:
        status = solver.solve(model)
        if status == cp_model.INFEASIBLE:
            break
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            LOGGER.warning("CP-SAT: enumeration stopped (status=%s)", solver.status_name(status))
            exhausted = False
            break
        on_edges = frozenset(e for e, x in edge_vars.items() if solver.boolean_value(x))
        solutions.append(on_edges)
        model.add_bool_or([~x if e in on_edges else x for e, x in edge_vars.items()])

    if not solutions:
        verdict = Status.UNSOLVABLE if exhausted else Status.IN_PROGRESS
    elif len(solutions) == 1:
        verdict = Status.UNIQUE_SOLUTION if exhausted else Status.IN_PROGRESS
    else:
        verdict = Status.MULTIPLE_SOLUTIONS

    LOGGER.info("CP-SAT: %dx%d puzzle has %s (%d found)", puzzle.size, puzzle.size, verdict.value, len(solutions))
    return CpSatResult(status=verdict, solutions=solutions, exhausted=exhausted)
