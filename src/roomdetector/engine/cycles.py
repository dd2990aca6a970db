"""Face tracing over the wall graph.

Every minimal bounded face of the wall graph is a candidate room. A face
is traced by walking from a directed edge and, at each junction, taking
the most counter-clockwise turn. Bounded faces usually come out
counter-clockwise and the walk around the outside of a wall cluster comes
out clockwise; that outside walk is discarded once the rooms inside it
are known.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..config import MAX_TRACE_STEPS
from ..core.graph import WallGraph
from ..core.model import Cycle, TraceResult, TraceState
from ..geom.polygon import signed_polygon_area

LOGGER = logging.getLogger(__name__)

DirectedEdge = Tuple[int, int]


def turn_angle(graph: WallGraph, prev: int, current: int, candidate: int) -> float:
    """Signed turn from the incoming edge to an outgoing edge, in (-pi, pi]."""
    p = graph.position(prev)
    c = graph.position(current)
    n = graph.position(candidate)

    in_angle = math.atan2(c.z - p.z, c.x - p.x)
    out_angle = math.atan2(n.z - c.z, n.x - c.x)

    turn = out_angle - in_angle
    while turn > math.pi:
        turn -= 2 * math.pi
    while turn <= -math.pi:
        turn += 2 * math.pi
    return turn


def select_next(graph: WallGraph, prev: int, current: int, candidates: Sequence[int]) -> int:
    """Pick the candidate with the most counter-clockwise turn.

    Ties keep the first candidate in adjacency order.
    """
    if len(candidates) == 1:
        return candidates[0]
    return max(candidates, key=lambda candidate: turn_angle(graph, prev, current, candidate))


def trace_face(
    graph: WallGraph,
    start: int,
    first_step: int,
    max_steps: int = MAX_TRACE_STEPS,
) -> TraceResult:
    """Walk one face starting with the directed edge ``start -> first_step``.

    Args:
        graph: Wall graph to walk.
        start: Node the walk starts and must end at.
        first_step: Second node of the walk.
        max_steps: Step budget before the walk is abandoned.

    Returns:
        TraceResult in state CLOSED carrying the cycle, or in the state that
        stopped the walk (DEAD_END, SELF_INTERSECT, ITERATION_EXCEEDED).
    """
    path = [start]
    visited = {start}
    prev, current = start, first_step
    state = TraceState.TRACING
    steps = 0

    while state is TraceState.TRACING:
        if steps >= max_steps:
            state = TraceState.ITERATION_EXCEEDED
            break
        steps += 1

        if current == start:
            state = TraceState.CLOSED
        elif current in visited:
            state = TraceState.SELF_INTERSECT
        else:
            path.append(current)
            visited.add(current)
            candidates = [n for n in graph.nodes[current].neighbors if n != prev]
            if not candidates:
                state = TraceState.DEAD_END
            else:
                prev, current = current, select_next(graph, prev, current, candidates)

    if state is TraceState.CLOSED:
        return TraceResult(state, tuple(path))
    return TraceResult(state)


def cycle_edges(cycle: Cycle) -> List[DirectedEdge]:
    """Directed edges along a cycle, including the closing edge."""
    return [(cycle[i], cycle[(i + 1) % len(cycle)]) for i in range(len(cycle))]


def is_duplicate_cycle(existing: Iterable[Cycle], candidate: Cycle) -> bool:
    """Check whether an accepted cycle has the same length and node set.

    The comparison ignores order, rotation and winding. Two different faces
    over the same vertex set are therefore treated as one.
    """
    candidate_nodes = frozenset(candidate)
    return any(
        len(cycle) == len(candidate) and frozenset(cycle) == candidate_nodes
        for cycle in existing
    )


def is_clockwise(graph: WallGraph, cycle: Cycle) -> bool:
    """Check whether a cycle winds clockwise (negative signed area)."""
    return signed_polygon_area([graph.position(n) for n in cycle]) < 0


def is_outer_boundary(cycle: Cycle, rooms: Iterable[Cycle]) -> bool:
    """Check whether a clockwise cycle walks around already traced rooms.

    The outside of a wall cluster visits every node of the rooms it
    encloses, so some counter-clockwise room's node set is a subset of it.
    """
    nodes = frozenset(cycle)
    return any(frozenset(room) <= nodes for room in rooms)


def find_cycles(
    graph: WallGraph,
    processed: Optional[Set[DirectedEdge]] = None,
    max_steps: int = MAX_TRACE_STEPS,
) -> List[Cycle]:
    """Trace every bounded face of the graph.

    Clockwise cycles are kept: when a dead-end wall inside a room pulls
    every counter-clockwise trace away, the room is only found clockwise.
    Once the search is done, a clockwise cycle that encloses an accepted
    counter-clockwise cycle is dropped as the outline of a wall cluster.

    Args:
        graph: Wall graph to search.
        processed: Directed edges already covered by an accepted face. The
            set is updated in place with the edges of each new face, so a
            face is never traced twice in the same direction.
        max_steps: Step budget for each trace.

    Returns:
        Accepted cycles in discovery order.
    """
    if processed is None:
        processed = set()

    candidates: List[Cycle] = []
    clockwise: Set[Cycle] = set()
    stopped = 0

    for start, node in enumerate(graph.nodes):
        if len(node.neighbors) < 2:
            continue

        for first_step in node.neighbors:
            if (start, first_step) in processed:
                continue

            result = trace_face(graph, start, first_step, max_steps)
            if not result.ok:
                stopped += 1
                LOGGER.debug(
                    "Trace %s -> %s stopped: %s",
                    graph.keys[start],
                    graph.keys[first_step],
                    result.state.value,
                )
                continue

            cycle = result.cycle
            if len(cycle) < 3:
                continue
            if is_duplicate_cycle(candidates, cycle):
                continue

            candidates.append(cycle)
            if is_clockwise(graph, cycle):
                clockwise.add(cycle)
            processed.update(cycle_edges(cycle))

    rooms = [cycle for cycle in candidates if cycle not in clockwise]
    cycles = [
        cycle
        for cycle in candidates
        if cycle not in clockwise or not is_outer_boundary(cycle, rooms)
    ]

    LOGGER.debug(
        "Found %d cycles (%d outer boundaries dropped, %d traces stopped early)",
        len(cycles),
        len(candidates) - len(cycles),
        stopped,
    )
    return cycles
