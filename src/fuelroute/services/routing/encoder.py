"""Translation between integer genomes and concrete paths through a map.

A genome holds one gene per segment of the map. Each gene picks a branch out
of the point reached so far: ``0`` is the first segment leaving that point in
storage order, ``1`` the second, and so on. A gene larger than the number of
branches wraps around (``gene % len(branches)``), which keeps every gene drawn
from the shared domain meaningful at points with fewer branches. ``-1`` ends
the path early.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...models.domain import Segment
from .graph import BranchIndex

END_OF_ROUTE = -1


@dataclass(slots=True, frozen=True)
class DecodedPath:
    segments: tuple[Segment, ...]
    valid_gene_count: int

    @property
    def segment_ids(self) -> tuple[int, ...]:
        return tuple(segment.id for segment in self.segments)

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def final_destination(self) -> str | None:
        return self.segments[-1].destination if self.segments else None


class PathDecoder:
    """Walks the branch index following the choices encoded in a genome."""

    def __init__(self, index: BranchIndex) -> None:
        self.index = index

    @property
    def genome_length(self) -> int:
        return len(self.index.segments)

    def gene_bounds(self, position: int) -> tuple[int, int]:
        """Inclusive ``(low, high)`` domain of the gene at ``position``."""
        high = max(self.index.max_branch_count - 1, 0)
        low = 0 if position == 0 else END_OF_ROUTE
        return low, high

    def resolve(self, point: str, gene: int) -> int | None:
        """Segment id chosen by ``gene`` at ``point``, or ``None`` at a dead end."""
        links = self.index.branches(point)
        if not links:
            return None
        if gene >= len(links):
            gene %= len(links)
        return links[gene]

    def decode(self, origin: str, genes: Sequence[int]) -> DecodedPath:
        path: list[Segment] = []
        current_point = origin
        for gene in genes:
            gene = int(gene)
            if gene == END_OF_ROUTE:
                break
            segment_id = self.resolve(current_point, gene)
            if segment_id is None:
                break
            segment = self.index.segment(segment_id)
            path.append(segment)
            current_point = segment.destination
        return DecodedPath(segments=tuple(path), valid_gene_count=len(path))
