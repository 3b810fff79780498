"""
Cycle checks over Blocks dependencies.

find_path backs the guard that runs before a blocking dependency is
stored. detect_cycles audits the whole stored graph, including state
that was imported without passing the guard.
"""

from collections import deque
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .store import DependencyStore


def find_path(store: 'DependencyStore', start: str, end: str) -> Optional[list[str]]:
    """
    Breadth-first search from start to end over Blocks edges.

    Returns the task IDs along the path (start and end included),
    or None if end is unreachable.
    """
    parents: dict[str, Optional[str]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == end:
            path = []
            node = current
            while node is not None:
                path.append(node)
                node = parents[node]
            return list(reversed(path))

        for task_id in store.get_blocked_tasks(current):
            if task_id not in parents:
                parents[task_id] = current
                queue.append(task_id)

    return None


def has_path(store: 'DependencyStore', start: str, end: str) -> bool:
    """Check if end is reachable from start over Blocks edges."""
    return find_path(store, start, end) is not None


def detect_cycles(store: 'DependencyStore') -> list[list[str]]:
    """
    Find circular Blocks dependencies in the stored graph.

    Vertices are every endpoint of every stored dependency (any type);
    only Blocks edges are followed. Each cycle is reported as the slice
    of the current DFS path from the revisited task to the last task.
    """
    cycles = []
    visited: set[str] = set()
    on_path: set[str] = set()

    all_tasks = dict.fromkeys(
        task_id
        for dep in store.all_dependencies()
        for task_id in (dep.from_task, dep.to_task)
    )

    for root in all_tasks:
        if root in visited:
            continue

        path = [root]
        visited.add(root)
        on_path.add(root)
        stack = [iter(store.get_blocked_tasks(root))]

        while stack:
            next_task = next(stack[-1], None)
            if next_task is None:
                stack.pop()
                on_path.discard(path.pop())
                continue

            if next_task not in visited:
                visited.add(next_task)
                on_path.add(next_task)
                path.append(next_task)
                stack.append(iter(store.get_blocked_tasks(next_task)))
            elif next_task in on_path:
                start_idx = path.index(next_task)
                cycles.append(path[start_idx:])

    return cycles
