"""
MangaPanelCut - Áreas (Bounding Boxes)

Area é uma caixa alinhada aos eixos, semiaberta: [x_start, x_end) × [y_start, y_end).
AreaTracker mantém incrementalmente a caixa mínima de cada rótulo.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple


@dataclass(frozen=True)
class Area:
    x_start: int
    y_start: int
    x_end: int
    y_end: int

    @classmethod
    def unit(cls, x: int, y: int) -> "Area":
        """Área 1×1 do primeiro pixel de um rótulo."""
        return cls(x, y, x + 1, y + 1)

    @classmethod
    def from_size(cls, width: int, height: int) -> "Area":
        return cls(0, 0, width, height)

    @classmethod
    def from_bbox(cls, bbox: Tuple[int, int, int, int]) -> "Area":
        x1, y1, x2, y2 = bbox
        return cls(int(x1), int(y1), int(x2), int(y2))

    @property
    def width(self) -> int:
        return max(0, self.x_end - self.x_start)

    @property
    def height(self) -> int:
        return max(0, self.y_end - self.y_start)

    @property
    def x_range(self) -> range:
        return range(self.x_start, self.x_end)

    @property
    def y_range(self) -> range:
        return range(self.y_start, self.y_end)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def pixel_area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x_start + self.x_end) / 2, (self.y_start + self.y_end) / 2

    def contains(self, x: int, y: int) -> bool:
        return self.x_start <= x < self.x_end and self.y_start <= y < self.y_end

    def extended(self, x: int, y: int) -> "Area":
        """Menor área que contém esta e o pixel (x, y)."""
        if self.contains(x, y):
            return self
        return Area(
            min(self.x_start, x),
            min(self.y_start, y),
            max(self.x_end, x + 1),
            max(self.y_end, y + 1),
        )

    def union(self, other: "Area") -> "Area":
        return Area(
            min(self.x_start, other.x_start),
            min(self.y_start, other.y_start),
            max(self.x_end, other.x_end),
            max(self.y_end, other.y_end),
        )

    def to_bbox(self) -> Tuple[int, int, int, int]:
        """(x1, y1, x2, y2)"""
        return self.x_start, self.y_start, self.x_end, self.y_end

    def to_slices(self) -> Tuple[slice, slice]:
        """Fatias numpy (linhas, colunas)."""
        return slice(self.y_start, self.y_end), slice(self.x_start, self.x_end)


class AreaTracker:
    """Caixa mínima por rótulo, estendida em O(1) a cada pixel atribuído."""

    def __init__(self):
        self._areas: Dict[int, Area] = {}

    def track(self, label: int, x: int, y: int) -> Area:
        area = self._areas.get(label)
        area = Area.unit(x, y) if area is None else area.extended(x, y)
        self._areas[label] = area
        return area

    def merge(self, root: int, other: int) -> Area:
        """Funde Area[other] em Area[root] e descarta Area[other]."""
        if root == other:
            return self._areas[root]
        merged = self._areas[root].union(self._areas.pop(other))
        self._areas[root] = merged
        return merged

    def get(self, label: int) -> Area:
        return self._areas[label]

    def areas(self) -> Dict[int, Area]:
        return dict(self._areas)

    def __contains__(self, label: int) -> bool:
        return label in self._areas

    def __len__(self) -> int:
        return len(self._areas)

    def __iter__(self) -> Iterator[int]:
        return iter(self._areas)
