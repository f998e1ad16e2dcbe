"""
Path reconstruction from predecessor maps
"""

from typing import Dict, List


def reconstruct_path(predecessor: Dict[str, str], current: str) -> List[str]:
    """
    Walk the predecessor map back from ``current`` to the search root.

    Returns:
    - path: node ids from the root to ``current``, inclusive.
    """
    path = [current]
    while current in predecessor:
        current = predecessor[current]
        path.append(current)

    path.reverse()
    return path


def reconstruct_bidirectional_path(forward_predecessor: Dict[str, str],
                                   backward_predecessor: Dict[str, str],
                                   meeting: str) -> List[str]:
    """
    Join the forward chain (start -> meeting) with the backward chain
    (meeting -> goal). The meeting node appears once.
    """
    path = reconstruct_path(forward_predecessor, meeting)

    # Backward predecessors point toward the goal, so this walk is already in order
    current = meeting
    while current in backward_predecessor:
        current = backward_predecessor[current]
        path.append(current)

    return path
