"""
MangaPanelCut - Pytest Configuration and Fixtures

Fixtures compartilhadas para todos os testes.
"""

import sys
from pathlib import Path

import pytest

# Adiciona raiz do projeto ao path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.logging import setup as log_setup
from core.test_utils import (
    make_bordered_buffer,
    make_comic_page,
    make_mask_buffer,
    make_u_shape_mask,
)


def pytest_configure(config):
    """Configuração adicional do pytest."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: tests that touch the filesystem")


# =============================================================================
# FIXTURES BÁSICAS
# =============================================================================

@pytest.fixture
def diagonal_buffer():
    """5×5 branco com dois pixels pretos só diagonalmente vizinhos."""
    return make_bordered_buffer(5, dark_pixels=[(1, 1), (2, 2)])


@pytest.fixture
def adjacent_buffer():
    """5×5 branco com dois pixels pretos 4-vizinhos."""
    return make_bordered_buffer(5, dark_pixels=[(1, 1), (2, 1)])


@pytest.fixture
def u_shape_buffer():
    """"U" preto cujas pernas só se encontram na última linha."""
    return make_mask_buffer(make_u_shape_mask())


@pytest.fixture
def comic_page():
    """Retorna (PIL.Image 400×300 com 2×2 painéis, bboxes esperadas)."""
    return make_comic_page(size=(400, 300), grid=(2, 2), seed=42)


@pytest.fixture
def comic_page_file(tmp_path, comic_page):
    """Página sintética gravada em disco como PNG."""
    image, bboxes = comic_page
    path = tmp_path / "page_001.png"
    image.save(path)
    return path, bboxes


@pytest.fixture
def temp_dir(tmp_path):
    """Retorna diretório temporário para testes."""
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers instalados pela CLI (cada teste captura um stdout novo)."""
    yield
    log_setup.reset_logging()
