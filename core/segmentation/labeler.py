"""
MangaPanelCut - Rotulagem de Regiões (Componentes Conexos em Duas Passadas)

Passada 1 - varredura por linhas dentro dos limites do recorte, pulando Frame.
Para cada célula olha os vizinhos já visitados (cima, esquerda):
- nenhum Region           -> novo Region(id) do contador monotônico
- exatamente um Region    -> adota
- dois Regions iguais     -> adota
- dois Regions diferentes -> adota o menor e registra maior == menor

Passada 2 - resolução de equivalências do maior id para o menor: funde a
área de cada id não-canônico na área da raiz e reescreve a grade.
Como as raízes vêm do union-find, cadeias longas (formato "U") convergem
em uma única passada.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from config.settings import LABEL_CAPACITY
from core.exceptions import OutOfRangeError
from core.segmentation.area import Area, AreaTracker
from core.segmentation.equivalence import EquivalenceTable
from core.segmentation.labels import LabelTable


@dataclass
class LabelingResult:
    """Resultado da rotulagem: áreas por id canônico + estatísticas."""
    areas: Dict[int, Area]
    raw_labels: int
    merges: int

    @property
    def num_regions(self) -> int:
        return len(self.areas)


class RegionLabeler:
    """
    Rotulador de componentes 4-conexos dos pixels que não são moldura.

    Args:
        capacity: Limite de ids brutos (None = cresce dinamicamente)
    """

    def __init__(self, capacity: Optional[int] = LABEL_CAPACITY):
        self.capacity = capacity

    def label(self, table: LabelTable, bounds: Optional[Area] = None) -> LabelingResult:
        """
        Rotula in-place as células vazias de `table` dentro de `bounds`.

        Args:
            table: Tabela com a moldura já finalizada pelo flood fill
            bounds: Sub-região a processar (pós-recorte); None = grade inteira

        Raises:
            OutOfRangeError: limites fora da grade
            CapacityExceededError: ids brutos acima de `capacity`
        """
        if bounds is None:
            bounds = Area.from_size(table.width, table.height)
        self._check_bounds(table, bounds)

        equivalences = EquivalenceTable(self.capacity)
        tracker = AreaTracker()

        if not bounds.is_empty:
            self._first_pass(table, bounds, equivalences, tracker)
            self._resolve(table, equivalences, tracker)

        return LabelingResult(
            areas=tracker.areas(),
            raw_labels=len(equivalences),
            merges=equivalences.merges,
        )

    @staticmethod
    def _check_bounds(table: LabelTable, bounds: Area) -> None:
        if bounds.x_start < 0 or bounds.y_start < 0:
            raise OutOfRangeError.for_point((bounds.x_start, bounds.y_start), table.size)
        if bounds.x_end < bounds.x_start or bounds.y_end < bounds.y_start:
            raise OutOfRangeError(
                f"Limites invertidos {bounds.to_bbox()} para imagem [{table.width},{table.height}]",
                coordinate=(bounds.x_end, bounds.y_end),
                dimensions=table.size,
            )
        # Largura ou altura zero: nada a rotular
        if bounds.is_empty:
            return
        if bounds.x_end > table.width or bounds.y_end > table.height:
            raise OutOfRangeError.for_point((bounds.x_end - 1, bounds.y_end - 1), table.size)

    # --------------------------------------------------
    def _first_pass(
        self,
        table: LabelTable,
        bounds: Area,
        equivalences: EquivalenceTable,
        tracker: AreaTracker,
    ) -> None:
        for y in bounds.y_range:
            for x in bounds.x_range:
                current = table.get(x, y)
                if current is not None:
                    # Frame (a fase 1 só deixa vazio ou Frame)
                    continue

                up = table.get(x, y - 1) if y > bounds.y_start else None
                left = table.get(x - 1, y) if x > bounds.x_start else None
                up_id = up.region_id if up is not None and up.is_region else None
                left_id = left.region_id if left is not None and left.is_region else None

                if up_id is None and left_id is None:
                    region_id = equivalences.new_label()
                elif up_id is None:
                    region_id = left_id
                elif left_id is None or left_id == up_id:
                    region_id = up_id
                else:
                    region_id = min(up_id, left_id)
                    equivalences.union(up_id, left_id)

                table.assign_region(x, y, region_id)
                tracker.track(region_id, x, y)

    @staticmethod
    def _resolve(table: LabelTable, equivalences: EquivalenceTable, tracker: AreaTracker) -> None:
        roots = equivalences.roots()

        for raw_id in range(len(roots) - 1, -1, -1):
            root = int(roots[raw_id])
            if root != raw_id:
                tracker.merge(root, raw_id)

        table.rewrite_regions(roots)
