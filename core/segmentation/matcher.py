"""
MangaPanelCut - Comparação com a Cor de Referência

Predicado de distância de cor usado pelo recorte de margens e pelo flood fill.

Fórmula:
    d² = Σ (ref_c - pixel_c)²   para c em (R, G, B, A)
    casa  <=>  d² < tolerância²

A desigualdade é estrita: tolerância 0 nunca casa, nem para pixels idênticos.
"""

from typing import Sequence

import numpy as np


def _check_tolerance(tolerance: int) -> int:
    tolerance = int(tolerance)
    if tolerance < 0:
        raise ValueError(f"Tolerância deve ser não-negativa, recebido {tolerance}")
    return tolerance


def judge(pixel: Sequence[int], reference: Sequence[int], tolerance: int) -> bool:
    """
    Retorna True se `pixel` está dentro da tolerância da cor de referência.

    Args:
        pixel: Cor RGBA (4 canais, 0-255)
        reference: Cor RGBA de referência
        tolerance: Norma máxima (exclusiva) do desvio de cor

    Returns:
        True sse a soma dos quadrados das diferenças < tolerance²
    """
    tolerance = _check_tolerance(tolerance)

    # int() evita overflow de uint8 quando os canais vêm de numpy
    dist2 = 0
    for channel, ref_channel in zip(pixel[:4], reference[:4]):
        delta = int(ref_channel) - int(channel)
        dist2 += delta * delta

    return dist2 < tolerance * tolerance


def judge_array(pixels: np.ndarray, reference: Sequence[int], tolerance: int) -> np.ndarray:
    """
    Versão vetorizada de `judge` para um grid inteiro.

    Args:
        pixels: Array (H, W, 4) uint8
        reference: Cor RGBA de referência
        tolerance: Norma máxima (exclusiva) do desvio de cor

    Returns:
        Máscara booleana (H, W)
    """
    tolerance = _check_tolerance(tolerance)

    ref = np.asarray(reference[:4], dtype=np.int64)
    delta = pixels[..., :4].astype(np.int64) - ref
    dist2 = np.einsum("...c,...c->...", delta, delta)

    return dist2 < tolerance * tolerance
