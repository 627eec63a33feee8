"""
MangaPanelCut - Exceções do Domínio
Centraliza todas as exceções personalizadas do sistema.
"""

from typing import Optional, Tuple


class PanelError(Exception):
    """Exceção base para todo o domínio MangaPanelCut."""
    pass


class OutOfRangeError(PanelError):
    """Coordenada fora dos limites do buffer de pixels."""
    def __init__(
        self,
        message: str,
        coordinate: Optional[Tuple[int, int]] = None,
        dimensions: Optional[Tuple[int, int]] = None,
    ):
        super().__init__(message)
        self.coordinate = coordinate
        self.dimensions = dimensions

    @classmethod
    def for_point(cls, coordinate: Tuple[int, int], dimensions: Tuple[int, int]) -> "OutOfRangeError":
        width, height = dimensions
        x, y = coordinate
        return cls(
            f"image: [{width},{height}], zero_point: ({x},{y})",
            coordinate=coordinate,
            dimensions=dimensions,
        )


class CapacityExceededError(PanelError):
    """Número de rótulos brutos excedeu a capacidade da tabela de equivalência."""
    def __init__(self, message: str, capacity: int):
        super().__init__(message)
        self.capacity = capacity


class ResourceLimitError(PanelError):
    """Limite de recursos atingido (fila do flood fill)."""
    def __init__(self, message: str, limit: Optional[int] = None):
        super().__init__(message)
        self.limit = limit


class LabelTransitionError(PanelError):
    """Escrita ilegal na tabela de rótulos."""
    def __init__(self, message: str, coordinate: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.coordinate = coordinate


class ImageLoadError(PanelError):
    """Erro ao decodificar ou ler uma imagem."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
