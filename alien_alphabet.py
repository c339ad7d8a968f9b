"""Infer one possible alphabet ordering from a list of sorted words.

Given a partial set of ordered words in an unknown language with latin
letters, e.g. ``xza, ayh, ples, plares, bhaaz, bnc``, build a graph with the
letters as vertices and an edge between two letters when one "follows" the
other. Any topological sort of that graph is a possible ordering of the
alphabet, here ``x, z, e, a, y, h, p, l, s, r, b, n, c``.
"""
import logging
from typing import List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.table import Table

from follows_graph import FollowsGraph

logger = logging.getLogger(__name__)


class AlphabetOrderingError(ValueError):
    """Base class for input that has no consistent alphabet ordering."""


class InvalidWordOrderError(AlphabetOrderingError):
    """A word is listed after a longer word it is a prefix of."""

    def __init__(self, prev: str, curr: str) -> None:
        self.prev = prev
        self.curr = curr
        super().__init__(f"{curr!r} is a prefix of {prev!r} but is listed after it")


class ContradictoryOrderingError(AlphabetOrderingError):
    """The extracted constraints form a cycle."""

    def __init__(self, cycle: List[str]) -> None:
        self.cycle = cycle
        # edges point at predecessors, so read the cycle backwards
        chain = " < ".join(reversed(cycle))
        super().__init__(f"contradictory ordering: {chain}")


# ------------- Relation builder ------------------------------------------
def insert_vertices(graph: FollowsGraph[str], word: str) -> None:
    """Add every letter of word as a vertex."""
    for char in word:
        graph.add_vertex(char)


def generate_relationship(
    graph: FollowsGraph[str], prev: str, curr: str
) -> Optional[Tuple[str, str]]:
    """Add the constraint given by two adjacent words.

    The first position where the words differ tells that curr's letter comes
    after prev's letter, recorded as the edge curr_char -> prev_char. Returns
    ``(prev_char, curr_char)``, or None when one word is a prefix of the
    other and nothing can be learned.
    """
    i = 0
    while i < len(prev) and i < len(curr) and prev[i] == curr[i]:
        i += 1

    if i < len(prev) and i < len(curr):
        graph.add_edge(curr[i], prev[i])
        return prev[i], curr[i]
    return None


def build_follows_graph(
    words: Sequence[str], graph: Optional[FollowsGraph[str]] = None
) -> FollowsGraph[str]:
    """Build the follows graph for words, which must hold at least one word."""
    if not words:
        raise ValueError("at least one word is required to infer an ordering")
    if graph is None:
        graph = FollowsGraph()

    prev = words[0]
    insert_vertices(graph, prev)
    for curr in words[1:]:
        insert_vertices(graph, curr)
        pair = generate_relationship(graph, prev, curr)
        if pair is not None:
            logger.debug("%r < %r (from %r, %r)", pair[0], pair[1], prev, curr)
        prev = curr
    return graph


def _check_prefixes(words: Sequence[str], strict: bool) -> None:
    for prev, curr in zip(words, words[1:]):
        if len(curr) < len(prev) and prev.startswith(curr):
            if strict:
                raise InvalidWordOrderError(prev, curr)
            logger.warning(
                "skipping %r after %r: a word cannot follow its extension", curr, prev
            )


def find_alphabet_ordering(
    words: Sequence[str],
    strict: bool = False,
    graph: Optional[FollowsGraph[str]] = None,
) -> List[str]:
    """Return one alphabet ordering consistent with the sorted words.

    By default inconsistent input is only logged and a best-effort ordering
    is still returned. With ``strict=True`` it raises InvalidWordOrderError
    or ContradictoryOrderingError instead. A graph already built from the
    same words can be passed in to avoid building it again.
    """
    if graph is None:
        graph = build_follows_graph(words)
    logger.debug("followsGraph: %s", graph)
    _check_prefixes(words, strict)

    cycle = graph.find_cycle()
    if cycle is not None:
        if strict:
            raise ContradictoryOrderingError(cycle)
        logger.warning("words are not consistently sorted, cycle %s", cycle)

    return graph.topological_sort()


# ------------- Command line ----------------------------------------------
app = typer.Typer(add_completion=False, help="Infer an alphabet ordering from sorted words.")
console = Console()


def render_graph(graph: FollowsGraph[str]) -> Table:
    """Render the follows graph as a table, one row per letter."""
    table = Table(title="Follows graph")
    table.add_column("Letter")
    table.add_column("Comes after")
    for vertex in graph:
        table.add_row(vertex, ", ".join(graph.successors(vertex)) or "-")
    return table


@app.command()
def order(
    words: List[str] = typer.Argument(..., help="Words sorted in the unknown alphabet."),
    strict: bool = typer.Option(False, "--strict", help="Fail on inconsistent input."),
    show_graph: bool = typer.Option(False, "--show-graph", help="Print the follows graph."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Print one possible ordering of the letters used in WORDS."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    graph = build_follows_graph(words)
    if show_graph:
        console.print(render_graph(graph))

    try:
        ordering = find_alphabet_ordering(words, strict=strict, graph=graph)
    except AlphabetOrderingError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(", ".join(ordering))


def main() -> None:
    """Run the command line interface."""
    app()


if __name__ == "__main__":
    main()
