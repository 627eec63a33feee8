"""
Unit tests for Custom Exceptions
"""
import sys
from pathlib import Path
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.exceptions import (
    PanelError,
    OutOfRangeError,
    CapacityExceededError,
    ResourceLimitError,
    LabelTransitionError,
    ImageLoadError
)

class TestExceptions:

    def test_panel_error_base(self):
        """Test base exception"""
        err = PanelError("Base error")
        assert str(err) == "Base error"
        assert isinstance(err, Exception)

    def test_out_of_range_error(self):
        """Test OutOfRangeError with coordinate info"""
        err = OutOfRangeError("Bad point", coordinate=(7, 1), dimensions=(5, 5))
        assert str(err) == "Bad point"
        assert err.coordinate == (7, 1)
        assert err.dimensions == (5, 5)
        assert isinstance(err, PanelError)

    def test_out_of_range_for_point_message(self):
        """Test message built from image size and seed"""
        err = OutOfRangeError.for_point((5, 0), (5, 5))
        assert str(err) == "image: [5,5], zero_point: (5,0)"
        assert err.coordinate == (5, 0)

    def test_capacity_exceeded_error(self):
        """Test CapacityExceededError with capacity"""
        err = CapacityExceededError("Too many labels", capacity=8)
        assert str(err) == "Too many labels"
        assert err.capacity == 8
        assert isinstance(err, PanelError)

    def test_resource_limit_error(self):
        """Test ResourceLimitError"""
        err = ResourceLimitError("Queue full", limit=100)
        assert str(err) == "Queue full"
        assert err.limit == 100
        assert isinstance(err, PanelError)

    def test_label_transition_error(self):
        """Test LabelTransitionError"""
        err = LabelTransitionError("Frame -> Region", coordinate=(1, 2))
        assert err.coordinate == (1, 2)
        assert isinstance(err, PanelError)

    def test_image_load_error(self):
        """Test ImageLoadError with path"""
        err = ImageLoadError("Cannot decode", path="page.png")
        assert str(err) == "Cannot decode"
        assert err.path == "page.png"
        assert isinstance(err, PanelError)

    def test_catch_by_base(self):
        """All domain errors can be caught as PanelError"""
        with pytest.raises(PanelError):
            raise ResourceLimitError("boom")
