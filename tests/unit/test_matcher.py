"""
Testes unitários para o predicado de cor (matcher)
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.segmentation.matcher import judge, judge_array


class TestJudge:
    """Testes para judge (pixel único)."""

    def test_identical_pixel_matches(self):
        """Testa que pixel idêntico casa com tolerância positiva."""
        assert judge((10, 20, 30, 255), (10, 20, 30, 255), 1)

    def test_zero_tolerance_never_matches(self):
        """Testa que tolerância 0 não casa nem pixel idêntico (desigualdade estrita)."""
        assert not judge((255, 255, 255, 255), (255, 255, 255, 255), 0)

    def test_boundary_is_exclusive(self):
        """Testa que d² == tol² não casa."""
        # d² = 3² + 4² = 25
        assert not judge((3, 4, 0, 0), (0, 0, 0, 0), 5)
        assert judge((3, 4, 0, 0), (0, 0, 0, 0), 6)

    def test_alpha_channel_counts(self):
        """Testa que o canal alfa entra na distância."""
        assert not judge((0, 0, 0, 0), (0, 0, 0, 255), 100)

    def test_black_vs_white(self):
        """Testa que preto e branco estão longe na tolerância padrão."""
        assert not judge((0, 0, 0, 255), (255, 255, 255, 255), 100)

    def test_numpy_uint8_no_overflow(self):
        """Testa que canais uint8 não estouram na subtração."""
        pixel = np.array([0, 0, 0, 255], dtype=np.uint8)
        ref = np.array([255, 0, 0, 255], dtype=np.uint8)
        assert not judge(pixel, ref, 200)
        assert judge(pixel, ref, 256)

    def test_negative_tolerance_raises(self):
        with pytest.raises(ValueError):
            judge((0, 0, 0, 0), (0, 0, 0, 0), -1)


class TestJudgeArray:
    """Testes para a versão vetorizada."""

    def test_matches_scalar_version(self):
        """Testa que judge_array concorda com judge em todo o grid."""
        rng = np.random.RandomState(7)
        pixels = rng.randint(0, 256, size=(6, 8, 4)).astype(np.uint8)
        reference = (128, 64, 32, 255)

        mask = judge_array(pixels, reference, 150)

        assert mask.shape == (6, 8)
        for y in range(6):
            for x in range(8):
                assert mask[y, x] == judge(pixels[y, x], reference, 150)

    def test_zero_tolerance_all_false(self):
        pixels = np.full((3, 3, 4), 255, dtype=np.uint8)
        assert not judge_array(pixels, (255, 255, 255, 255), 0).any()

    def test_negative_tolerance_raises(self):
        with pytest.raises(ValueError):
            judge_array(np.zeros((1, 1, 4), dtype=np.uint8), (0, 0, 0, 0), -5)
