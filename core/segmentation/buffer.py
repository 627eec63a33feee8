"""
MangaPanelCut - Buffer de Pixels

Grid RGBA somente-leitura consumido pelo motor de segmentação.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from PIL import Image

from core.exceptions import OutOfRangeError


@dataclass(frozen=True)
class PixelBuffer:
    """
    Grid width×height de cores RGBA (uint8), em ordem de linhas.

    Guarda uma view não-gravável do array recebido: o motor nunca altera a
    imagem de entrada e o array do chamador continua gravável.
    """
    pixels: np.ndarray  # Shape (H, W, 4), dtype uint8, RGBA

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"PixelBuffer espera (H, W, 4), recebido {self.pixels.shape}")
        frozen = self.pixels.view()
        frozen.flags.writeable = False
        object.__setattr__(self, "pixels", frozen)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Cria buffer a partir de array (H, W), (H, W, 3) ou (H, W, 4)."""
        arr = np.asarray(array)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)

        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim == 3 and arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=-1)

        return cls(np.ascontiguousarray(arr).copy())

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Cria buffer a partir de uma PIL Image (convertida para RGBA)."""
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), convenção PIL."""
        return self.width, self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def check_point(self, point: Tuple[int, int]) -> Tuple[int, int]:
        x, y = int(point[0]), int(point[1])
        if not self.contains(x, y):
            raise OutOfRangeError.for_point((x, y), self.size)
        return x, y

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Retorna a cor RGBA em (x, y); fora do grid lança OutOfRangeError."""
        x, y = self.check_point((x, y))
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.array(self.pixels))


PixelSource = Union[PixelBuffer, np.ndarray, Image.Image]


def as_pixel_buffer(source: PixelSource) -> PixelBuffer:
    """Normaliza qualquer fonte suportada para PixelBuffer."""
    if isinstance(source, PixelBuffer):
        return source
    if isinstance(source, Image.Image):
        return PixelBuffer.from_image(source)
    return PixelBuffer.from_array(source)
