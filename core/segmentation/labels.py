"""
MangaPanelCut - Rótulos e Tabela de Rótulos

Rótulo é uma variante explícita {Frame, Region(id)}:
- Frame: pixel de moldura/fundo alcançado pelo flood fill
- Region(id): pixel de conteúdo com id atribuído na primeira passada

Ordenação: Frame < Region(qualquer id); entre Regions, menor id é canônico.

Transições permitidas em cada célula da tabela:
    vazio  -> Frame
    vazio  -> Region(id)
    Region(id) -> Region(root), root <= id   (resolução de equivalências)
Qualquer outra escrita lança LabelTransitionError.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Set, Tuple

import numpy as np

from core.exceptions import LabelTransitionError, OutOfRangeError

# Codificação interna das células
_UNSET = -2
_FRAME = -1


class LabelKind(IntEnum):
    """Tag da variante; FRAME ordena abaixo de REGION."""
    FRAME = 0
    REGION = 1


@dataclass(frozen=True, order=True)
class Label:
    kind: LabelKind
    region_id: int = -1

    @classmethod
    def frame(cls) -> "Label":
        return FRAME

    @classmethod
    def region(cls, region_id: int) -> "Label":
        if region_id < 0:
            raise ValueError(f"Region id deve ser não-negativo, recebido {region_id}")
        return cls(LabelKind.REGION, int(region_id))

    @property
    def is_frame(self) -> bool:
        return self.kind == LabelKind.FRAME

    @property
    def is_region(self) -> bool:
        return self.kind == LabelKind.REGION

    def __repr__(self) -> str:
        return "Frame" if self.is_frame else f"Region({self.region_id})"


FRAME = Label(LabelKind.FRAME)


class LabelTable:
    """
    Grid mutável width×height de rótulos opcionais.

    Alocada uma vez por execução e passada em sequência pelas fases
    (flood fill -> rotulagem -> reescrita de equivalências -> extração).
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Dimensões inválidas: {width}x{height}")
        self._codes = np.full((height, width), _UNSET, dtype=np.int64)

    @property
    def width(self) -> int:
        return int(self._codes.shape[1])

    @property
    def height(self) -> int:
        return int(self._codes.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise OutOfRangeError.for_point((x, y), self.size)

    # --------------------------------------------------
    def get(self, x: int, y: int) -> Optional[Label]:
        """Rótulo em (x, y), ou None se a célula ainda não foi rotulada."""
        self._check(x, y)
        code = int(self._codes[y, x])
        if code == _UNSET:
            return None
        if code == _FRAME:
            return FRAME
        return Label(LabelKind.REGION, code)

    def is_frame(self, x: int, y: int) -> bool:
        self._check(x, y)
        return self._codes[y, x] == _FRAME

    def mark_frame(self, x: int, y: int) -> None:
        self._check(x, y)
        code = self._codes[y, x]
        if code == _FRAME:
            return
        if code != _UNSET:
            raise LabelTransitionError(
                f"Célula ({x},{y}) já pertence a Region({code}); não pode virar Frame",
                coordinate=(x, y),
            )
        self._codes[y, x] = _FRAME

    def assign_region(self, x: int, y: int, region_id: int) -> None:
        self._check(x, y)
        if region_id < 0:
            raise ValueError(f"Region id deve ser não-negativo, recebido {region_id}")
        code = self._codes[y, x]
        if code != _UNSET:
            current = "Frame" if code == _FRAME else f"Region({code})"
            raise LabelTransitionError(
                f"Célula ({x},{y}) já rotulada como {current}",
                coordinate=(x, y),
            )
        self._codes[y, x] = region_id

    def rewrite_regions(self, roots: np.ndarray) -> int:
        """
        Reescreve cada Region(i) como Region(roots[i]) em uma varredura.

        Args:
            roots: Array onde roots[i] <= i é o id canônico de i

        Returns:
            Número de células reescritas
        """
        roots = np.asarray(roots, dtype=np.int64)
        if roots.size and np.any(roots > np.arange(roots.size)):
            bad = int(np.argmax(roots > np.arange(roots.size)))
            raise LabelTransitionError(
                f"Region({bad}) não pode ser reescrita para Region({int(roots[bad])})"
            )

        region = self._codes >= 0
        if not np.any(region):
            return 0
        if int(self._codes[region].max()) >= roots.size:
            raise LabelTransitionError("Tabela de raízes não cobre todos os ids da grade")

        new_codes = roots[self._codes[region]]
        changed = int(np.count_nonzero(new_codes != self._codes[region]))
        self._codes[region] = new_codes
        return changed

    # --------------------------------------------------
    def frame_mask(self) -> np.ndarray:
        """Máscara booleana (H, W) das células Frame."""
        return self._codes == _FRAME

    def unset_mask(self) -> np.ndarray:
        return self._codes == _UNSET

    def region_ids(self) -> np.ndarray:
        """Grid (H, W) de ids de região; -1 onde a célula não é Region."""
        return np.where(self._codes >= 0, self._codes, -1)

    def region_labels(self) -> Set[int]:
        return {int(v) for v in np.unique(self._codes[self._codes >= 0])}

    def frame_count(self) -> int:
        return int(np.count_nonzero(self._codes == _FRAME))

    def __repr__(self) -> str:
        return (f"LabelTable({self.width}x{self.height}, frame={self.frame_count()}, "
                f"regions={len(self.region_labels())})")
