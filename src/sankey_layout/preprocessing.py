"""
Graph preprocessing utilities.

This module provides the ordering primitives used for column assignment:
- Cycle detection
- Topological sorting

Edges are ``(source, target)`` node index pairs.
"""

from __future__ import annotations

from collections import deque
from typing import Optional, Sequence

Edge = tuple[int, int]


def _adjacency(n: int, edges: Sequence[Edge]) -> list[list[int]]:
    adj: list[list[int]] = [[] for _ in range(n)]
    for src, tgt in edges:
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append(tgt)
    return adj


# =============================================================================
# Cycle Detection
# =============================================================================


def detect_cycle(n: int, edges: Sequence[Edge]) -> Optional[list[int]]:
    """
    Detect if a directed graph contains a cycle.

    Uses an iterative DFS so deep chains do not hit the recursion limit.
    Returns the first cycle found, or None if the graph is acyclic.

    Args:
        n: Number of nodes
        edges: Directed ``(source, target)`` index pairs

    Returns:
        List of node indices forming a cycle (first index repeated at the
        end), or None if acyclic.

    Example:
        >>> detect_cycle(2, [(0, 1), (1, 0)])
        [0, 1, 0]
    """
    adj = _adjacency(n, edges)

    # DFS states: 0=unvisited, 1=visiting, 2=visited
    state = [0] * n

    for start in range(n):
        if state[start] != 0:
            continue

        path: list[int] = [start]
        stack: list[tuple[int, int]] = [(start, 0)]
        state[start] = 1

        while stack:
            node, next_child = stack[-1]
            if next_child < len(adj[node]):
                stack[-1] = (node, next_child + 1)
                neighbor = adj[node][next_child]
                if state[neighbor] == 1:
                    cycle_start = path.index(neighbor)
                    return path[cycle_start:] + [neighbor]
                if state[neighbor] == 0:
                    state[neighbor] = 1
                    path.append(neighbor)
                    stack.append((neighbor, 0))
            else:
                state[node] = 2
                path.pop()
                stack.pop()

    return None


# =============================================================================
# Topological Sort
# =============================================================================


def topological_sort(n: int, edges: Sequence[Edge]) -> Optional[list[int]]:
    """
    Compute a topological ordering of nodes in a directed acyclic graph.

    Uses Kahn's algorithm (BFS-based). Ties are broken by node index, so the
    ordering is deterministic.

    Args:
        n: Number of nodes
        edges: Directed ``(source, target)`` index pairs

    Returns:
        List of node indices in topological order, or None if graph has cycles.

    Example:
        >>> topological_sort(3, [(0, 1), (1, 2)])
        [0, 1, 2]
    """
    adj = _adjacency(n, edges)
    in_degree = [0] * n
    for targets in adj:
        for tgt in targets:
            in_degree[tgt] += 1

    queue: deque[int] = deque(i for i in range(n) if in_degree[i] == 0)
    result: list[int] = []

    while queue:
        node = queue.popleft()
        result.append(node)

        for neighbor in adj[node]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    # If not all nodes processed, graph has a cycle
    if len(result) != n:
        return None

    return result


__all__ = [
    "detect_cycle",
    "topological_sort",
]
