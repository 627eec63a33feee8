"""
MangaPanelCut - Extração de Painéis

Para cada (rótulo, área) aloca um raster RGBA do tamanho da área e copia
apenas os pixels cuja célula carrega aquele rótulo; o resto fica transparente.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from PIL import Image

from config.settings import MIN_PANEL_PIXELS
from core.segmentation.area import Area
from core.segmentation.buffer import PixelBuffer
from core.segmentation.labels import LabelTable

TRANSPARENT: Tuple[int, int, int, int] = (0, 0, 0, 0)


@dataclass
class Panel:
    """Painel recortado e a área de origem na página."""
    label: int
    area: Area
    pixels: np.ndarray  # (area.height, area.width, 4) uint8 RGBA
    mask: np.ndarray    # (area.height, area.width) bool: pixels do rótulo

    @property
    def pixel_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    @property
    def size(self) -> Tuple[int, int]:
        return self.area.width, self.area.height

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


class PanelExtractor:
    """
    Materializa um Panel por rótulo canônico.

    Args:
        min_pixels: Painéis com menos pixels rotulados são descartados
        fill_value: Cor RGBA das células fora do rótulo
    """

    def __init__(
        self,
        min_pixels: int = MIN_PANEL_PIXELS,
        fill_value: Tuple[int, int, int, int] = TRANSPARENT,
    ):
        self.min_pixels = max(0, int(min_pixels))
        self.fill_value = fill_value

    def extract(
        self,
        buffer: PixelBuffer,
        table: LabelTable,
        areas: Dict[int, Area],
    ) -> List[Panel]:
        """
        Args:
            buffer: Imagem de origem
            table: Tabela finalizada (ids canônicos)
            areas: id canônico -> Area

        Returns:
            Lista de Panel ordenada por id de rótulo
        """
        region_ids = table.region_ids()
        panels: List[Panel] = []

        for label in sorted(areas):
            panel = self.extract_one(buffer, region_ids, label, areas[label])
            if panel.pixel_count < self.min_pixels:
                continue
            panels.append(panel)

        return panels

    def extract_one(
        self,
        buffer: PixelBuffer,
        region_ids: np.ndarray,
        label: int,
        area: Area,
    ) -> Panel:
        rows, cols = area.to_slices()
        mask = region_ids[rows, cols] == label

        pixels = np.empty((area.height, area.width, 4), dtype=np.uint8)
        pixels[...] = self.fill_value
        pixels[mask] = buffer.pixels[rows, cols][mask]

        return Panel(label=label, area=area, pixels=pixels, mask=mask)
