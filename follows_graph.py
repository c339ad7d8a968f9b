"""Directed "follows" graph with an iterative topological sort."""
import enum
import logging
from collections.abc import Hashable
from typing import Dict, Generic, Iterator, List, Optional, Set, Tuple, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Hashable)

Mark = enum.Enum("Mark", ["TEMPORARY", "PERMANENT"])

_DONE = object()


class FollowsGraph(Generic[V]):
    """A directed graph over hashable vertices.

    Internally, the graph is an adjacency dict:
    vertex -> list of successors, in edge insertion order.
    An edge u -> v reads "v must come before u".
    """

    def __init__(self) -> None:
        """Create an empty graph."""
        self._adj: Dict[V, List[V]] = {}

    # ------------- Mutators -------------------------------------------------
    def add_vertex(self, vertex: V) -> None:
        """Add a vertex if it does not exist."""
        if vertex not in self._adj:
            self._adj[vertex] = []

    def add_edge(self, source: V, target: V) -> None:
        """Append target to the successors of source.

        Both ends must already be vertices. Duplicate edges are kept.
        """
        if source not in self._adj:
            raise KeyError(f"Vertex {source!r} does not exist.")
        if target not in self._adj:
            raise KeyError(f"Vertex {target!r} does not exist.")
        self._adj[source].append(target)

    # ------------- Basic queries -------------------------------------------
    def vertices(self) -> List[V]:
        """Return all vertices in insertion order."""
        return list(self._adj)

    def edges(self) -> List[Tuple[V, V]]:
        """Return all directed edges as (u, v) pairs."""
        res: List[Tuple[V, V]] = []
        for u, succs in self._adj.items():
            for v in succs:
                res.append((u, v))
        return res

    def successors(self, vertex: V) -> List[V]:
        """Return the direct successors of a vertex (copy)."""
        return list(self._adj[vertex])

    def __contains__(self, vertex: object) -> bool:
        """Return True if vertex exists in the graph."""
        return vertex in self._adj

    def __len__(self) -> int:
        """Return number of vertices."""
        return len(self._adj)

    def __iter__(self) -> Iterator[V]:
        """Iterate over vertices in insertion order."""
        return iter(self._adj)

    def __str__(self) -> str:
        """Render as {u=[v, w], ...}."""
        return "{" + ", ".join(
            f"{u}=[{', '.join(str(v) for v in succs)}]" for u, succs in self._adj.items()
        ) + "}"

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"{type(self).__name__}({self._adj!r})"

    # ------------- Algorithms ----------------------------------------------
    def topological_sort(self) -> List[V]:
        """Return the vertices ordered so that v precedes u for every edge u -> v.

        Depth-first search driven by an explicit stack:
        1) Peek the top of the stack.
        2) First visit: mark it discovered and push all its successors,
           leaving it on the stack until they are finished.
        3) Second visit: pop it and, unless already processed, append it.

        On a cyclic graph this still terminates and returns every vertex
        once, but at least one edge will be violated.
        """
        ordered: List[V] = []
        discovered: Set[V] = set()
        processed: Set[V] = set()
        stack: List[V] = []

        for start in self._adj:
            if start in discovered:
                continue
            stack.append(start)
            while stack:
                top = stack[-1]
                if top not in discovered:
                    discovered.add(top)
                    stack.extend(self._adj[top])
                else:
                    stack.pop()
                    if top not in processed:
                        processed.add(top)
                        ordered.append(top)

        return ordered

    def find_cycle(self) -> Optional[List[V]]:
        """Return one cycle as a list of vertices, or None if the graph is acyclic.

        The first vertex is repeated at the end, e.g. ['a', 'b', 'a'].
        """
        marks: Dict[V, Mark] = {}
        for start in self._adj:
            if start in marks:
                continue
            marks[start] = Mark.TEMPORARY
            path: List[V] = [start]
            stack: List[Iterator[V]] = [iter(self._adj[start])]
            while stack:
                child = next(stack[-1], _DONE)
                if child is _DONE:
                    stack.pop()
                    marks[path.pop()] = Mark.PERMANENT
                    continue
                mark = marks.get(child)
                if mark is Mark.TEMPORARY:
                    cycle = path[path.index(child):] + [child]
                    logger.debug("cycle found: %s", cycle)
                    return cycle
                if mark is None:
                    marks[child] = Mark.TEMPORARY
                    path.append(child)
                    stack.append(iter(self._adj[child]))
        return None
