"""
MangaPanelCut - Motor de Segmentação

Módulos:
- matcher: predicado de distância à cor de referência
- buffer: PixelBuffer RGBA somente-leitura
- labels: variante Label {Frame, Region(id)} e LabelTable
- flood_fill: FrameDetector (BFS da moldura)
- equivalence: union-find dos ids brutos
- area: Area e AreaTracker
- labeler: RegionLabeler (duas passadas)
- extractor: PanelExtractor e Panel
- reading_order: ordenação de leitura dos painéis
- engine: PanelSegmenter (fachada)
"""

from .matcher import judge, judge_array
from .buffer import PixelBuffer
from .labels import Label, LabelKind, LabelTable, FRAME
from .area import Area, AreaTracker
from .equivalence import EquivalenceTable
from .flood_fill import FrameDetector
from .labeler import RegionLabeler, LabelingResult
from .extractor import Panel, PanelExtractor
from .reading_order import sort_reading_order
from .engine import PanelSegmenter, SegmentationResult, create_panel_segmenter

__all__ = [
    'judge',
    'judge_array',
    'PixelBuffer',
    'Label',
    'LabelKind',
    'LabelTable',
    'FRAME',
    'Area',
    'AreaTracker',
    'EquivalenceTable',
    'FrameDetector',
    'RegionLabeler',
    'LabelingResult',
    'Panel',
    'PanelExtractor',
    'sort_reading_order',
    'PanelSegmenter',
    'SegmentationResult',
    'create_panel_segmenter',
]
