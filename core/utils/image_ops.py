"""
MangaPanelCut - Image Operations Utilities
Funções comuns de I/O de imagem e geometria em volta do motor de segmentação.
"""

import io
from pathlib import Path
from typing import Tuple, Union

import cv2
import numpy as np
from PIL import Image

from config.settings import DEBUG_OVERLAY_COLOR, PANEL_FILENAME_TEMPLATE
from core.exceptions import ImageLoadError
from core.segmentation.area import Area
from core.segmentation.buffer import PixelBuffer
from core.segmentation.extractor import Panel
from core.segmentation.labels import LabelTable
from core.segmentation.matcher import judge_array
from core.utils.atomic_io import atomic_write_bytes

# Formatos sem canal alfa: o painel é achatado sobre branco
_OPAQUE_FORMATS = {"jpg", "jpeg", "bmp"}
_PIL_FORMAT_NAMES = {"jpg": "JPEG"}


def load_pixel_buffer(path: Union[str, Path]) -> PixelBuffer:
    """
    Decodifica uma imagem do disco para PixelBuffer RGBA.

    Raises:
        ImageLoadError: arquivo inexistente ou formato ilegível
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            return PixelBuffer.from_image(img)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(f"Não foi possível ler a imagem {path}: {exc}", path=str(path)) from exc


def find_content_bounds(
    buffer: PixelBuffer,
    zero_point: Tuple[int, int],
    tolerance: int,
) -> Area:
    """
    Bounding box mínima (semiaberta) de todos os pixels que NÃO casam com a
    cor em `zero_point`. Corresponde ao recorte das margens da página.

    Args:
        buffer: Página inteira
        zero_point: Coordenada da cor de referência das margens
        tolerance: Tolerância de cor

    Returns:
        Area do conteúdo; Area vazia se toda a página casa com a referência
    """
    reference = buffer.pixel(*zero_point)
    content = ~judge_array(buffer.pixels, reference, tolerance)

    points = cv2.findNonZero(content.astype(np.uint8))
    if points is None:
        return Area(0, 0, 0, 0)

    x, y, w, h = cv2.boundingRect(points)
    return Area(int(x), int(y), int(x + w), int(y + h))


def render_frame_overlay(
    buffer: PixelBuffer,
    table: LabelTable,
    color: Tuple[int, int, int, int] = DEBUG_OVERLAY_COLOR,
) -> Image.Image:
    """Cópia da página com todas as células Frame pintadas de `color`."""
    arr = np.array(buffer.pixels)
    arr[table.frame_mask()] = color
    return Image.fromarray(arr)


def save_frame_overlay(
    buffer: PixelBuffer,
    table: LabelTable,
    path: Union[str, Path],
    color: Tuple[int, int, int, int] = DEBUG_OVERLAY_COLOR,
) -> Path:
    """Grava a sobreposição de depuração (PNG) de forma atômica."""
    return save_image(render_frame_overlay(buffer, table, color), path, "png")


def panel_filename(index: int, fmt: str) -> str:
    """Nome do arquivo do n-ésimo painel (1-based, ordem de leitura)."""
    return PANEL_FILENAME_TEMPLATE.format(index=index, ext=fmt.lower())


def save_image(image: Image.Image, path: Union[str, Path], fmt: str = "png") -> Path:
    """
    Codifica a imagem em memória e grava via atomic_write_bytes.

    Formatos sem alfa recebem fundo branco. Um leitor concorrente nunca
    vê o arquivo pela metade.
    """
    fmt = fmt.lower()

    if fmt in _OPAQUE_FORMATS:
        background = Image.new("RGBA", image.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, image.convert("RGBA")).convert("RGB")

    encoded = io.BytesIO()
    image.save(encoded, format=_PIL_FORMAT_NAMES.get(fmt, fmt.upper()))
    return atomic_write_bytes(path, encoded.getvalue())


def save_panel(panel: Panel, path: Union[str, Path], fmt: str = "png") -> Path:
    """Salva o painel no formato pedido."""
    return save_image(panel.to_image(), path, fmt)
