"""Unit tests for polyline path sampling."""

import pytest

from src.framecam.geometry import Point, PolylinePath
from src.framecam.scene import PathSampler


class TestPolylinePath:
    """Tests for arc-length sampling."""

    def test_length_sums_segments(self):
        """Test that the length is the sum of segment lengths."""
        path = PolylinePath([(0.0, 0.0), (3.0, 0.0), (3.0, 4.0)])
        assert path.length() == 7.0

    def test_diagonal_segment_length(self):
        """Test a single 3-4-5 segment."""
        path = PolylinePath([(0.0, 0.0), (3.0, 4.0)])
        assert abs(path.length() - 5.0) < 1e-12

    def test_endpoints(self):
        """Test that length 0 and full length give the first and last vertices."""
        path = PolylinePath([(1.0, 2.0), (5.0, 2.0), (5.0, 8.0)])
        assert path.point_at_length(0.0) == Point(1.0, 2.0)
        assert path.point_at_length(path.length()) == Point(5.0, 8.0)

    def test_point_on_second_segment(self):
        """Test sampling inside the second segment."""
        path = PolylinePath([(0.0, 0.0), (3.0, 0.0), (3.0, 4.0)])
        assert path.point_at_length(5.0) == Point(3.0, 2.0)

    def test_out_of_range_is_clamped(self):
        """Test that distances outside [0, length] are clamped to the ends."""
        path = PolylinePath([(0.0, 0.0), (10.0, 0.0)])
        assert path.point_at_length(-5.0) == Point(0.0, 0.0)
        assert path.point_at_length(50.0) == Point(10.0, 0.0)

    def test_implements_path_sampler(self):
        """Test that PolylinePath satisfies the PathSampler protocol."""
        assert isinstance(PolylinePath([(0.0, 0.0), (1.0, 1.0)]), PathSampler)

    def test_rejects_single_vertex(self):
        """Test that a path needs at least two vertices."""
        with pytest.raises(ValueError, match="at least two"):
            PolylinePath([(0.0, 0.0)])

    def test_rejects_zero_length(self):
        """Test that a path of coincident vertices is rejected."""
        with pytest.raises(ValueError, match="non-zero length"):
            PolylinePath([(2.0, 2.0), (2.0, 2.0)])
