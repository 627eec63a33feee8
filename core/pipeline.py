"""
MangaPanelCut - Pipeline Principal
Orquestrador: carrega a página, recorta margens, segmenta e grava os painéis
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from config.settings import (
    COLOR_TOLERANCE, CROP_COLOR_TOLERANCE, CROP_MARGINS, DEBUG_OVERLAY_COLOR,
    DEBUG_OVERLAY_FILENAME, DEFAULT_ZERO_POINT, FLOOD_FILL_MAX_PENDING,
    LABEL_CAPACITY, MANIFEST_FILENAME, MIN_PANEL_PIXELS, OUTPUT_FORMAT,
    READING_RTL, SUPPORTED_FORMATS
)
from core.exceptions import PanelError
from core.logging.setup import get_logger
from core.segmentation.area import Area
from core.segmentation.buffer import PixelBuffer, PixelSource, as_pixel_buffer
from core.segmentation.engine import PanelSegmenter, SegmentationResult
from core.segmentation.extractor import Panel
from core.segmentation.reading_order import sort_reading_order
from core.utils.atomic_io import atomic_write_json
from core.utils.image_ops import (
    find_content_bounds, load_pixel_buffer, panel_filename,
    save_frame_overlay, save_panel
)

logger = get_logger("Pipeline")


@dataclass
class SegmentationOptions:
    """Opções de segmentação de uma página"""
    tolerance: int = COLOR_TOLERANCE
    zero_point: Tuple[int, int] = DEFAULT_ZERO_POINT
    # Recorte de margens
    crop_margins: bool = CROP_MARGINS
    crop_tolerance: int = CROP_COLOR_TOLERANCE
    crop_point: Optional[Tuple[int, int]] = None  # None = usa zero_point
    bounds: Optional[Area] = None                 # Limites explícitos (ignora crop_margins)
    # Saída
    reading_rtl: bool = READING_RTL
    min_panel_pixels: int = MIN_PANEL_PIXELS
    output_format: str = OUTPUT_FORMAT
    write_manifest: bool = False
    debug_overlay: bool = False
    # Limites
    max_pending: Optional[int] = FLOOD_FILL_MAX_PENDING
    label_capacity: Optional[int] = LABEL_CAPACITY

    def __post_init__(self):
        self.output_format = self.output_format.lower()
        if self.output_format not in SUPPORTED_FORMATS:
            raise ValueError(f"Formato de saída não suportado: {self.output_format}")
        if self.tolerance < 0 or self.crop_tolerance < 0:
            raise ValueError("Tolerâncias devem ser não-negativas")
        if self.label_capacity is not None and self.label_capacity <= 0:
            raise ValueError(f"label_capacity deve ser positivo, recebido {self.label_capacity}")
        if self.max_pending is not None and self.max_pending <= 0:
            raise ValueError(f"max_pending deve ser positivo, recebido {self.max_pending}")
        if self.min_panel_pixels < 0:
            raise ValueError(f"min_panel_pixels deve ser não-negativo, recebido {self.min_panel_pixels}")


@dataclass
class PageReport:
    """Resultado do processamento de uma página"""
    source: str
    output_dir: str
    bounds: Tuple[int, int, int, int]
    panels: List[Dict] = field(default_factory=list)
    raw_labels: int = 0
    merges: int = 0
    frame_pixels: int = 0
    duration_ms: int = 0
    manifest_path: Optional[str] = None
    overlay_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def num_panels(self) -> int:
        return len(self.panels)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict:
        return {
            'source': self.source,
            'output_dir': self.output_dir,
            'bounds': list(self.bounds),
            'panels': self.panels,
            'raw_labels': self.raw_labels,
            'merges': self.merges,
            'frame_pixels': self.frame_pixels,
            'duration_ms': self.duration_ms,
        }


class PanelSegmentationPipeline:
    """
    Pipeline principal do MangaPanelCut.

    Cada página é processada de forma independente: buffer e tabela de
    rótulos próprios, nenhum estado compartilhado entre páginas.
    """

    def __init__(self, options: Optional[SegmentationOptions] = None):
        self.options = options or SegmentationOptions()
        self.segmenter = PanelSegmenter(
            tolerance=self.options.tolerance,
            max_pending=self.options.max_pending,
            label_capacity=self.options.label_capacity,
            min_pixels=self.options.min_panel_pixels,
        )
        self._progress_callback: Optional[Callable[[int, str, float], None]] = None

        logger.debug(f"Pipeline inicializado (tolerance={self.options.tolerance}, "
                     f"zero_point={self.options.zero_point}, crop={self.options.crop_margins})")

    def set_progress_callback(self, callback: Callable[[int, str, float], None]):
        """
        Define callback de progresso.

        Args:
            callback: Função(page_index, stage, progress_percent)
        """
        self._progress_callback = callback

    def _notify_progress(self, page_index: int, stage: str, progress: float):
        if self._progress_callback:
            self._progress_callback(page_index, stage, progress)

    # --------------------------------------------------
    def resolve_bounds(self, buffer: PixelBuffer) -> Area:
        """Limites de rotulagem: explícitos, recorte de margens ou página inteira."""
        opts = self.options
        if opts.bounds is not None:
            return opts.bounds
        if not opts.crop_margins:
            return Area.from_size(buffer.width, buffer.height)

        crop_point = opts.crop_point if opts.crop_point is not None else opts.zero_point
        bounds = find_content_bounds(buffer, crop_point, opts.crop_tolerance)
        logger.debug(f"Recorte de margens: {bounds.to_bbox()}")
        return bounds

    def order_panels(self, panels: Sequence[Panel]) -> List[Panel]:
        order = sort_reading_order([p.area for p in panels], rtl=self.options.reading_rtl)
        return [panels[i] for i in order]

    def segment(self, source: PixelSource) -> Tuple[SegmentationResult, List[Panel]]:
        """
        Segmenta uma página em memória.

        Returns:
            (resultado do motor, painéis em ordem de leitura)
        """
        buffer = as_pixel_buffer(source)
        bounds = self.resolve_bounds(buffer)
        result = self.segmenter.segment(buffer, self.options.zero_point, bounds)
        return result, self.order_panels(result.panels)

    def process_page(
        self,
        image_path: Union[str, Path],
        output_dir: Union[str, Path],
        page_index: int = 0,
    ) -> PageReport:
        """
        Processa uma página do disco e grava os painéis em `output_dir`.

        Raises:
            PanelError: erro de entrada (imagem, coordenadas) ou de recursos
        """
        image_path = Path(image_path)
        output_dir = Path(output_dir)
        opts = self.options
        start = time.perf_counter()

        self._notify_progress(page_index, "load", 0.0)
        buffer = load_pixel_buffer(image_path)
        logger.debug(f"{image_path.name}: {buffer.width}x{buffer.height}")

        self._notify_progress(page_index, "segment", 20.0)
        result, panels = self.segment(buffer)

        self._notify_progress(page_index, "save", 80.0)
        output_dir.mkdir(parents=True, exist_ok=True)
        panel_entries = []
        for index, panel in enumerate(panels, start=1):
            filename = panel_filename(index, opts.output_format)
            save_panel(panel, output_dir / filename, opts.output_format)
            panel_entries.append({
                'file': filename,
                'label': panel.label,
                'bbox': list(panel.area.to_bbox()),
                'pixel_count': panel.pixel_count,
            })

        report = PageReport(
            source=str(image_path),
            output_dir=str(output_dir),
            bounds=result.bounds.to_bbox(),
            panels=panel_entries,
            raw_labels=result.labeling.raw_labels,
            merges=result.labeling.merges,
            frame_pixels=result.table.frame_count(),
        )

        if opts.debug_overlay:
            overlay_path = save_frame_overlay(
                buffer, result.table, output_dir / DEBUG_OVERLAY_FILENAME, DEBUG_OVERLAY_COLOR
            )
            report.overlay_path = str(overlay_path)

        report.duration_ms = int((time.perf_counter() - start) * 1000)

        if opts.write_manifest:
            manifest_path = atomic_write_json(output_dir / MANIFEST_FILENAME, report.to_dict())
            report.manifest_path = str(manifest_path)

        self._notify_progress(page_index, "done", 100.0)
        logger.info(f"[OK] {image_path.name}: {report.num_panels} painéis "
                    f"({report.raw_labels} rótulos brutos, {report.merges} fusões) "
                    f"em {report.duration_ms}ms")
        return report

    def process_batch(
        self,
        image_paths: Sequence[Union[str, Path]],
        output_dir: Union[str, Path],
        fail_fast: bool = False,
    ) -> List[PageReport]:
        """
        Processa várias páginas; cada uma grava em `output_dir/<nome da página>`.

        Args:
            image_paths: Páginas de entrada
            output_dir: Diretório raiz de saída
            fail_fast: Se True, o primeiro erro interrompe o lote

        Returns:
            Um PageReport por página (com `error` preenchido nas que falharam)
        """
        output_dir = Path(output_dir)
        reports: List[PageReport] = []
        used_names: Dict[str, int] = {}

        for page_index, image_path in enumerate(image_paths):
            image_path = Path(image_path)
            page_dir = output_dir / self._page_dir_name(image_path, used_names)

            try:
                reports.append(self.process_page(image_path, page_dir, page_index))
            except PanelError as e:
                if fail_fast:
                    raise
                logger.error(f"Falha em {image_path.name}: {e}")
                reports.append(PageReport(
                    source=str(image_path),
                    output_dir=str(page_dir),
                    bounds=(0, 0, 0, 0),
                    error=str(e),
                ))

        ok = sum(1 for r in reports if r.ok)
        logger.info(f"Lote concluído: {ok}/{len(reports)} páginas, "
                    f"{sum(r.num_panels for r in reports)} painéis")
        return reports

    @staticmethod
    def _page_dir_name(image_path: Path, used_names: Dict[str, int]) -> str:
        stem = image_path.stem
        count = used_names.get(stem, 0)
        used_names[stem] = count + 1
        return stem if count == 0 else f"{stem}_{count + 1}"
