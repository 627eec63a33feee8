"""
Testes unitários para utilitários de imagem e escrita atômica
"""

import json
import pytest
import sys
from pathlib import Path
from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.exceptions import ImageLoadError, OutOfRangeError
from core.segmentation import Area, PanelSegmenter, PixelBuffer
from core.test_utils import make_bordered_buffer
from core.utils.atomic_io import atomic_write_bytes, atomic_write_json
from core.utils.image_ops import (
    find_content_bounds, load_pixel_buffer, panel_filename,
    render_frame_overlay, save_frame_overlay, save_image, save_panel
)


class TestContentBounds:
    """Testes do recorte de margens (caixa mínima do conteúdo)."""

    def test_tight_bounds(self, diagonal_buffer):
        assert find_content_bounds(diagonal_buffer, (0, 0), 10) == Area(1, 1, 3, 3)

    def test_uniform_page_is_empty(self):
        bounds = find_content_bounds(make_bordered_buffer(8), (0, 0), 10)
        assert bounds.is_empty

    def test_comic_page_bounds(self, comic_page):
        image, bboxes = comic_page
        bounds = find_content_bounds(PixelBuffer.from_image(image), (0, 0), 100)

        expected = Area.from_bbox(bboxes[0])
        for bbox in bboxes[1:]:
            expected = expected.union(Area.from_bbox(bbox))
        assert bounds == expected

    def test_reference_out_of_range(self, diagonal_buffer):
        with pytest.raises(OutOfRangeError):
            find_content_bounds(diagonal_buffer, (9, 9), 10)


class TestLoadAndSave:

    def test_load_rgb_png(self, tmp_path):
        path = tmp_path / "page.png"
        Image.new("RGB", (6, 4), (10, 20, 30)).save(path)

        buffer = load_pixel_buffer(path)

        assert buffer.size == (6, 4)
        assert buffer.pixel(5, 3) == (10, 20, 30, 255)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ImageLoadError) as exc:
            load_pixel_buffer(tmp_path / "missing.png")
        assert exc.value.path.endswith("missing.png")

    def test_load_garbage(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        with pytest.raises(ImageLoadError):
            load_pixel_buffer(path)

    def test_panel_filename(self):
        assert panel_filename(1, "png") == "panel_1.png"
        assert panel_filename(12, "WEBP") == "panel_12.webp"

    @pytest.mark.parametrize("fmt", ["png", "jpg", "webp"])
    def test_save_panel_formats(self, tmp_path, adjacent_buffer, fmt):
        panel = PanelSegmenter(tolerance=10).segment(adjacent_buffer, (0, 0)).panels[0]
        path = save_panel(panel, tmp_path / f"panel.{fmt}", fmt)

        assert path.exists()
        with Image.open(path) as img:
            assert img.size == (2, 1)

    def test_save_png_keeps_transparency(self, tmp_path):
        buffer = make_bordered_buffer(5, dark_pixels=[(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)])
        panel = PanelSegmenter(tolerance=10).segment(buffer, (0, 0)).panels[0]

        path = save_panel(panel, tmp_path / "l.png")

        with Image.open(path) as img:
            assert img.mode == "RGBA"
            assert img.getpixel((2, 0))[3] == 0
            assert img.getpixel((0, 0)) == (0, 0, 0, 255)

    def test_frame_overlay(self, diagonal_buffer):
        table = PanelSegmenter(tolerance=10).segment(diagonal_buffer, (0, 0)).table
        overlay = render_frame_overlay(diagonal_buffer, table, (255, 0, 0, 255))

        assert overlay.getpixel((0, 0)) == (255, 0, 0, 255)
        assert overlay.getpixel((1, 1)) == (0, 0, 0, 255)
        # Buffer original intacto
        assert diagonal_buffer.pixel(0, 0) == (255, 255, 255, 255)

    def test_save_frame_overlay_is_atomic(self, tmp_path, diagonal_buffer):
        """Testa que a sobreposição é gravada via arquivo temporário sem deixar resíduos."""
        table = PanelSegmenter(tolerance=10).segment(diagonal_buffer, (0, 0)).table
        target = tmp_path / "debug" / "panels-irrigated.png"

        path = save_frame_overlay(diagonal_buffer, table, target, (0, 255, 0, 255))

        assert path == target
        assert [p.name for p in target.parent.iterdir()] == ["panels-irrigated.png"]
        with Image.open(path) as img:
            assert img.convert("RGBA").getpixel((0, 0)) == (0, 255, 0, 255)

    def test_save_image_replaces_existing(self, tmp_path):
        target = tmp_path / "page.jpg"
        target.write_bytes(b"antigo")

        save_image(Image.new("RGBA", (3, 2), (0, 0, 0, 0)), target, "jpg")

        with Image.open(target) as img:
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 255, 255)
        assert [p.name for p in tmp_path.iterdir()] == ["page.jpg"]


class TestAtomicIO:

    def test_write_bytes_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.bin"
        assert atomic_write_bytes(target, b"abc") == target
        assert target.read_bytes() == b"abc"
        assert [p.name for p in target.parent.iterdir()] == ["out.bin"]

    def test_write_json(self, tmp_path):
        target = atomic_write_json(tmp_path / "data.json", {"painéis": 2})
        assert json.loads(target.read_text(encoding="utf-8")) == {"painéis": 2}
