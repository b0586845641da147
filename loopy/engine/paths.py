"""Bookkeeping for the open path fragments formed by On edges."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..core.models import Coordinate

EndpointPair = Tuple[Coordinate, Coordinate]


class PathTracker:
    """Tracks the endpoints of every open fragment and the number of loops.

    Each node that terminates an open fragment maps to the endpoint pair of
    that fragment. Interior nodes are not stored, so adding an edge is O(1).
    """

    def __init__(self) -> None:
        self.endpoints: Dict[Coordinate, EndpointPair] = {}
        self.num_loops = 0

    def num_paths(self) -> int:
        return self.num_loops + len(self.endpoints) // 2

    def has_loop(self) -> bool:
        return self.num_loops > 0

    def is_endpoint(self, node: Coordinate) -> bool:
        return node in self.endpoints

    def would_create_loop(self, a: Coordinate, b: Coordinate) -> bool:
        pair = self.endpoints.get(a)
        if pair is None:
            return False
        return pair == (a, b) or pair == (b, a)

    def open_paths(self) -> List[EndpointPair]:
        seen = set()
        result: List[EndpointPair] = []
        for pair in self.endpoints.values():
            if pair not in seen:
                seen.add(pair)
                result.append(pair)
        return sorted(result)

    def add_edge(self, a: Coordinate, b: Coordinate) -> Optional[EndpointPair]:
        """Record a new On edge and return the endpoints of the fragment it joins.

        Returns ``None`` when the edge closes a loop.
        """

        path_a = self.endpoints.get(a)
        path_b = self.endpoints.get(b)

        if path_a is None and path_b is None:
            pair = (a, b)
            self.endpoints[a] = pair
            self.endpoints[b] = pair
            return pair

        if path_b is None:
            return self._extend(a, b, path_a)
        if path_a is None:
            return self._extend(b, a, path_b)

        other_a = path_a[1] if path_a[0] == a else path_a[0]
        other_b = path_b[1] if path_b[0] == b else path_b[0]
        del self.endpoints[a]
        del self.endpoints[b]
        if other_a == b and other_b == a:
            self.num_loops += 1
            return None
        pair = (other_a, other_b)
        self.endpoints[other_a] = pair
        self.endpoints[other_b] = pair
        return pair

    def _extend(self, known: Coordinate, new: Coordinate, path: EndpointPair) -> EndpointPair:
        other = path[1] if path[0] == known else path[0]
        pair = (new, other) if path[0] == known else (other, new)
        del self.endpoints[known]
        self.endpoints[new] = pair
        self.endpoints[other] = pair
        return pair
