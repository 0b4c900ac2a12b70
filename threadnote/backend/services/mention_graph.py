"""
Mention Graph.

An in-memory snapshot of the mention edges used to validate a proposed
mention set before it is written. A graph is built from the edges read
inside the current transaction and discarded afterwards; it is never
cached between operations.

Usage:
    graph = MentionGraph(await mention_repo.get_all_edges())
    graph.remove_outgoing(note_id)
    cycle = graph.find_cycle(note_id, targets)
    if cycle is not None:
        raise CircularReferenceError(details={"cycle": cycle})
"""

from collections.abc import Iterable, Iterator


class MentionGraph:
    """Directed adjacency list of note → mentioned notes."""

    def __init__(self, edges: Iterable[tuple[str, str]] = ()) -> None:
        self._adjacency: dict[str, list[str]] = {}
        for source, target in edges:
            self.add_edge(source, target)

    def add_edge(self, source: str, target: str) -> None:
        """Add source → target. Repeated edges are kept once."""
        targets = self._adjacency.setdefault(source, [])
        if target not in targets:
            targets.append(target)

    def remove_outgoing(self, source: str) -> None:
        """Drop every edge leaving source."""
        self._adjacency.pop(source, None)

    def find_cycle(
        self,
        from_note_id: str,
        proposed_targets: Iterable[str] = (),
    ) -> list[str] | None:
        """
        Look for a cycle reachable from from_note_id once the proposed
        edges from_note_id → t are added.

        Iterative depth-first search keeping an on-stack set and a fully
        visited set. Reaching a node that is on the stack closes a cycle;
        reaching a fully visited node is skipped since everything below
        it is already known to be acyclic. The snapshot itself is not
        modified.

        Returns:
            The cycle as a node path that starts and ends on the same
            note, or None when the graph stays acyclic
        """
        adjacency = {source: list(targets) for source, targets in self._adjacency.items()}
        outgoing = adjacency.setdefault(from_note_id, [])
        for target in proposed_targets:
            if target not in outgoing:
                outgoing.append(target)

        visited: set[str] = set()
        on_stack: set[str] = {from_note_id}
        path: list[str] = [from_note_id]
        stack: list[tuple[str, Iterator[str]]] = [
            (from_note_id, iter(adjacency.get(from_note_id, ())))
        ]

        while stack:
            node, neighbors = stack[-1]
            descended = False
            for neighbor in neighbors:
                if neighbor in on_stack:
                    return path[path.index(neighbor):] + [neighbor]
                if neighbor in visited:
                    continue
                on_stack.add(neighbor)
                path.append(neighbor)
                stack.append((neighbor, iter(adjacency.get(neighbor, ()))))
                descended = True
                break
            if not descended:
                stack.pop()
                path.pop()
                on_stack.discard(node)
                visited.add(node)

        return None

    def would_create_cycle(self, from_note_id: str, proposed_targets: Iterable[str]) -> bool:
        """True if adding from_note_id → t for every proposed t closes a cycle."""
        return self.find_cycle(from_note_id, proposed_targets) is not None
