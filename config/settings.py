"""
MangaPanelCut - Configurações do Sistema
Configurações centralizadas para o pipeline de segmentação de painéis

Etapas:
- Recorte de margens: bounding box dos pixels que diferem da cor de referência
- Flood fill: marca a moldura (fundo) alcançável a partir do ponto zero
- Rotulagem em duas passadas: componentes conexos 4-vizinhos
- Extração: um raster recortado por rótulo canônico
"""

import os
from typing import Optional, Tuple


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


# ============================================================================
# COR DE REFERÊNCIA E TOLERÂNCIA
# ============================================================================

# Ponto zero: coordenada (x, y) onde a cor de referência é amostrada
DEFAULT_ZERO_POINT: Tuple[int, int] = (0, 0)

# Norma do desvio de cor aceito (compara soma dos quadrados < tolerância²)
# 0 nunca casa, nem para pixels idênticos
COLOR_TOLERANCE = _env_int("MANGA_PANEL_TOLERANCE", 100)


# ============================================================================
# RECORTE DE MARGENS
# ============================================================================

CROP_MARGINS = _env_bool("MANGA_PANEL_CROP", True)
CROP_COLOR_TOLERANCE = _env_int("MANGA_PANEL_CROP_TOLERANCE", COLOR_TOLERANCE)


# ============================================================================
# LIMITES DE RECURSOS
# ============================================================================

# Máximo de coordenadas pendentes na fila do flood fill
# Com deduplicação a fila de uma página uniforme fica na ordem de (w + h)
FLOOD_FILL_MAX_PENDING = _env_int("MANGA_PANEL_MAX_PENDING", 1 << 22)

# Capacidade de rótulos brutos; None = cresce dinamicamente
LABEL_CAPACITY: Optional[int] = _env_optional_int("MANGA_PANEL_LABEL_CAPACITY")


# ============================================================================
# ORDEM DE LEITURA E FILTROS
# ============================================================================

READING_RTL = _env_bool("MANGA_PANEL_READING_RTL", True)   # Mangá: direita -> esquerda
ROW_CLUSTER_RATIO = 0.35           # Fração da altura mediana para agrupar linhas
MIN_PANEL_PIXELS = _env_int("MANGA_PANEL_MIN_PIXELS", 0)   # 0 = emite todos os rótulos


# ============================================================================
# SAÍDA
# ============================================================================

PANEL_FILENAME_TEMPLATE = "panel_{index}.{ext}"
OUTPUT_FORMAT = os.getenv("MANGA_PANEL_FORMAT", "png")
SUPPORTED_FORMATS = ("png", "webp", "jpg", "jpeg", "bmp", "tiff")
MANIFEST_FILENAME = "panels.json"

# Overlay de depuração (moldura pintada)
DEBUG_OVERLAY_COLOR: Tuple[int, int, int, int] = (255, 0, 0, 255)
DEBUG_OVERLAY_FILENAME = "panels-irrigated.png"


# ============================================================================
# CONSTANTES DE ERRO E LOGGING
# ============================================================================

VERBOSE = _env_bool("MANGA_PANEL_VERBOSE", False)
LOG_LEVEL = os.getenv("MANGA_PANEL_LOG_LEVEL", "INFO")


# ============================================================================
# VALIDAÇÃO DE CONFIGURAÇÃO
# ============================================================================

def validate_config() -> bool:
    """
    Valida se a configuração é consistente.

    Returns:
        True se configuração é válida

    Raises:
        ValueError se houver inconsistências
    """
    if COLOR_TOLERANCE < 0 or CROP_COLOR_TOLERANCE < 0:
        raise ValueError("Tolerâncias de cor devem ser não-negativas")

    if FLOOD_FILL_MAX_PENDING <= 0:
        raise ValueError("FLOOD_FILL_MAX_PENDING deve ser positivo")

    if LABEL_CAPACITY is not None and LABEL_CAPACITY <= 0:
        raise ValueError("LABEL_CAPACITY deve ser positivo ou vazio")

    if OUTPUT_FORMAT.lower() not in SUPPORTED_FORMATS:
        raise ValueError(f"Formato de saída não suportado: {OUTPUT_FORMAT}")

    if not 0 < ROW_CLUSTER_RATIO <= 1:
        raise ValueError("ROW_CLUSTER_RATIO deve estar entre 0 e 1")

    return True


# Executa validação no import
if __name__ != "__main__":
    try:
        validate_config()
    except ValueError as e:
        print(f"[Config Warning] {e}")
