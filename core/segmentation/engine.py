"""
MangaPanelCut - Motor de Segmentação de Painéis

Executa as fases em sequência estrita sobre uma única LabelTable:
1. FrameDetector  - flood fill da moldura a partir do ponto zero
2. RegionLabeler  - rotulagem em duas passadas dentro dos limites do recorte
3. PanelExtractor - um raster por rótulo canônico

O motor não faz log nem recupera erros; quem chama decide.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from config.settings import (
    COLOR_TOLERANCE, FLOOD_FILL_MAX_PENDING, LABEL_CAPACITY, MIN_PANEL_PIXELS
)
from core.segmentation.area import Area
from core.segmentation.buffer import PixelSource, as_pixel_buffer
from core.segmentation.extractor import Panel, PanelExtractor
from core.segmentation.flood_fill import FrameDetector
from core.segmentation.labeler import LabelingResult, RegionLabeler
from core.segmentation.labels import LabelTable


@dataclass
class SegmentationResult:
    """Saída do motor para uma página."""
    table: LabelTable
    labeling: LabelingResult
    panels: List[Panel]
    bounds: Area

    @property
    def areas(self) -> Dict[int, Area]:
        return self.labeling.areas


class PanelSegmenter:
    """
    Fachada do motor: flood fill -> rotulagem -> extração.

    Args:
        tolerance: Tolerância de cor do flood fill
        max_pending: Limite da fila do flood fill
        label_capacity: Limite de ids brutos (None = dinâmico)
        min_pixels: Tamanho mínimo (em pixels rotulados) de um painel
    """

    def __init__(
        self,
        tolerance: int = COLOR_TOLERANCE,
        max_pending: Optional[int] = FLOOD_FILL_MAX_PENDING,
        label_capacity: Optional[int] = LABEL_CAPACITY,
        min_pixels: int = MIN_PANEL_PIXELS,
    ):
        self.detector = FrameDetector(tolerance, max_pending=max_pending)
        self.labeler = RegionLabeler(capacity=label_capacity)
        self.extractor = PanelExtractor(min_pixels=min_pixels)

    def segment(
        self,
        source: PixelSource,
        zero_point: Tuple[int, int],
        bounds: Optional[Area] = None,
    ) -> SegmentationResult:
        """
        Segmenta uma página em painéis.

        Args:
            source: PixelBuffer, array numpy ou PIL Image
            zero_point: Semente (x, y) do flood fill
            bounds: Limites do recorte; None = página inteira

        Returns:
            SegmentationResult com a tabela final, áreas e painéis
        """
        buffer = as_pixel_buffer(source)
        if bounds is None:
            bounds = Area.from_size(buffer.width, buffer.height)

        table = self.detector.detect(buffer, zero_point)
        labeling = self.labeler.label(table, bounds)
        panels = self.extractor.extract(buffer, table, labeling.areas)

        return SegmentationResult(table=table, labeling=labeling, panels=panels, bounds=bounds)


def create_panel_segmenter(
    tolerance: int = COLOR_TOLERANCE,
    max_pending: Optional[int] = FLOOD_FILL_MAX_PENDING,
    label_capacity: Optional[int] = LABEL_CAPACITY,
    min_pixels: int = MIN_PANEL_PIXELS,
) -> PanelSegmenter:
    """Factory function para criar o motor com os padrões de config.settings."""
    return PanelSegmenter(
        tolerance=tolerance,
        max_pending=max_pending,
        label_capacity=label_capacity,
        min_pixels=min_pixels,
    )
