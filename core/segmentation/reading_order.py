"""
MangaPanelCut - Ordem de Leitura dos Painéis

Agrupa as áreas em linhas pelo centro vertical e ordena cada linha pelo
centro horizontal. Mangá lê da direita para a esquerda (rtl=True).
"""

from typing import List, Sequence

import numpy as np

from config.settings import ROW_CLUSTER_RATIO
from core.segmentation.area import Area


def sort_reading_order(
    areas: Sequence[Area],
    rtl: bool = False,
    row_ratio: float = ROW_CLUSTER_RATIO,
) -> List[int]:
    """
    Retorna os índices de `areas` na ordem de leitura, linha a linha.

    Args:
        areas: Áreas dos painéis
        rtl: Se True, cada linha é lida da direita para a esquerda
        row_ratio: Fração da altura mediana abaixo da qual dois centros
            verticais caem na mesma linha
    """
    if len(areas) == 0:
        return []

    boxes = np.array([a.to_bbox() for a in areas], dtype=np.float64)
    y_centers = (boxes[:, 1] + boxes[:, 3]) / 2
    x_centers = (boxes[:, 0] + boxes[:, 2]) / 2
    heights = boxes[:, 3] - boxes[:, 1]
    row_gap = np.median(heights) * row_ratio

    # Nova linha começa quando o centro se afasta do primeiro centro da linha atual
    rows: List[List[int]] = []
    row_anchor = None
    for idx in np.argsort(y_centers, kind="stable"):
        yc = y_centers[idx]
        if row_anchor is None or abs(yc - row_anchor) > row_gap:
            rows.append([])
            row_anchor = yc
        rows[-1].append(int(idx))

    indices: List[int] = []
    for row in rows:
        xs = x_centers[row]
        order = np.argsort(-xs if rtl else xs, kind="stable")
        indices.extend(row[i] for i in order)
    return indices
