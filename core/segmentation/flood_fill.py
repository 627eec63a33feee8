"""
MangaPanelCut - Detecção de Moldura (Flood Fill)

Busca em largura 4-vizinha a partir do ponto zero. Cada coordenada é
visitada no máximo uma vez (grade de visitados deduplica a fila):
- se casa com a cor de referência -> Frame e expande os vizinhos
- se não casa -> fica vazia e não expande

O resultado é pura alcançabilidade: independe da ordem de visita.
"""

from collections import deque
from typing import Iterator, Optional, Tuple

import numpy as np

from config.settings import FLOOD_FILL_MAX_PENDING
from core.exceptions import ResourceLimitError
from core.segmentation.buffer import PixelBuffer
from core.segmentation.labels import LabelTable
from core.segmentation.matcher import judge_array

Coord = Tuple[int, int]


def neighbours4(x: int, y: int, width: int, height: int) -> Iterator[Coord]:
    """Vizinhos (cima, baixo, esquerda, direita) dentro do grid."""
    if y > 0:
        yield x, y - 1
    if y + 1 < height:
        yield x, y + 1
    if x > 0:
        yield x - 1, y
    if x + 1 < width:
        yield x + 1, y


class FrameDetector:
    """
    Marca como Frame os pixels alcançáveis do ponto zero com a cor de referência.

    Args:
        tolerance: Norma máxima (exclusiva) do desvio de cor
        max_pending: Limite de coordenadas pendentes na fila
    """

    def __init__(self, tolerance: int, max_pending: Optional[int] = FLOOD_FILL_MAX_PENDING):
        if tolerance < 0:
            raise ValueError(f"Tolerância deve ser não-negativa, recebido {tolerance}")
        self.tolerance = int(tolerance)
        self.max_pending = max_pending

    def detect(
        self,
        buffer: PixelBuffer,
        zero_point: Coord,
        table: Optional[LabelTable] = None,
    ) -> LabelTable:
        """
        Executa o flood fill.

        Args:
            buffer: Imagem de entrada
            zero_point: Semente (x, y); também define a cor de referência
            table: Tabela a preencher; uma nova é alocada se None

        Returns:
            Tabela com as células de moldura marcadas

        Raises:
            OutOfRangeError: semente fora do buffer (nada é alterado)
            ResourceLimitError: fila excedeu max_pending
        """
        # Valida a semente antes de qualquer mutação
        reference = buffer.pixel(*zero_point)
        sx, sy = int(zero_point[0]), int(zero_point[1])

        if table is None:
            table = LabelTable(buffer.width, buffer.height)

        width, height = buffer.width, buffer.height
        matches = judge_array(buffer.pixels, reference, self.tolerance)
        visited = np.zeros((height, width), dtype=bool)

        queue = deque([(sx, sy)])
        visited[sy, sx] = True

        while queue:
            x, y = queue.popleft()
            if not matches[y, x]:
                continue

            table.mark_frame(x, y)

            for nx, ny in neighbours4(x, y, width, height):
                if visited[ny, nx]:
                    continue
                visited[ny, nx] = True
                queue.append((nx, ny))

            if self.max_pending is not None and len(queue) > self.max_pending:
                raise ResourceLimitError(
                    f"Fila do flood fill excedeu {self.max_pending} coordenadas pendentes",
                    limit=self.max_pending,
                )

        return table
