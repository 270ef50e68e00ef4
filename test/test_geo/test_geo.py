"""Tests for the fiducial volumes and the geometry factory."""

import numpy as np
import pytest

from trkmatch.geo import Box, MatchGeometry, geo_factory
from trkmatch.geo.factories import geo_dict


class TestBox:
    """Test the box-shaped fiducial volumes."""

    def test_properties(self):
        """Boundaries, center and dimensions are consistent."""
        box = Box([-1.0, -2.0, 0.0], [1.0, 2.0, 10.0])

        np.testing.assert_array_equal(box.lower, [-1.0, -2.0, 0.0])
        np.testing.assert_array_equal(box.upper, [1.0, 2.0, 10.0])
        np.testing.assert_array_equal(box.center, [0.0, 0.0, 5.0])
        np.testing.assert_array_equal(box.dimensions, [2.0, 4.0, 10.0])

    def test_contains(self):
        """Containment is strict."""
        box = Box([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])

        assert box.contains([0.5, 0.5, 0.5])
        assert not box.contains([0.0, 0.5, 0.5])
        assert not box.contains([0.5, 0.5, 1.0])
        assert not box.contains([np.nan, 0.5, 0.5])
        assert not box.contains([-np.inf, 0.5, 0.5])

    def test_contains_axes(self):
        """Containment can be restricted to a subset of axes."""
        box = Box([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])

        assert box.contains([0.5, 0.5], axes=(0, 1))
        assert box.contains([0.5, 0.5, 5.0], axes=(0, 1))
        assert not box.contains([0.5, 5.0], axes=(0, 1))

    def test_invalid(self):
        """Boxes must have three dimensions and positive extents."""
        with pytest.raises(ValueError):
            Box([0.0, 0.0], [1.0, 1.0])
        with pytest.raises(ValueError):
            Box([0.0, 0.0, 1.0], [1.0, 1.0, 1.0])


class TestMatchGeometry:
    """Test the pair of subsystem volumes."""

    def test_planes(self, geometry):
        """Boundary planes are the facing box faces."""
        assert geometry.up_exit_z == 100.0
        assert geometry.down_entrance_z == 200.0
        assert isinstance(geometry.upstream, Box)

    def test_boxes(self):
        """Volumes can be provided as boxes directly."""
        geo = MatchGeometry(Box([0, 0, 0], [1, 1, 1]), Box([0, 0, 2], [1, 1, 3]))

        assert geo.name == "custom"
        assert geo.down_entrance_z == 2.0

    def test_overlap(self):
        """The downstream volume cannot start before the upstream one ends."""
        with pytest.raises(ValueError):
            MatchGeometry(
                {"lower": [0, 0, 0], "upper": [1, 1, 5]},
                {"lower": [0, 0, 2], "upper": [1, 1, 8]},
            )


class TestGeoFactory:
    """Test the geometry factory."""

    def test_available(self):
        """The default geometry is packaged."""
        names = [cfg["name"] for cfg in geo_dict().values()]

        assert "ndlar_tms" in names

    @pytest.mark.parametrize(
        "kwargs",
        [{}, {"tag": "nominal"}, {"version": 1}, {"version": "1.0"}],
    )
    def test_default(self, kwargs):
        """The default geometry carries the ND-LAr and TMS volumes."""
        geo = geo_factory("ndlar_tms", **kwargs)

        assert geo.name == "ndlar_tms"
        assert geo.up_exit_z == pytest.approx(913.588)
        assert geo.down_entrance_z == pytest.approx(1136.2)
        np.testing.assert_allclose(geo.upstream.lower, [-347.848, -216.671, 417.924])
        np.testing.assert_allclose(geo.downstream.upper, [352.0, 115.9, 1831.4])

    def test_block(self, geometry_cfg):
        """An explicit configuration block can be used instead."""
        geo = geo_factory(geometry=geometry_cfg)

        assert geo.name == "test"
        assert geo.up_exit_z == 100.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"detector": "icarus"},
            {"detector": "ndlar_tms", "tag": "unknown"},
            {"detector": "ndlar_tms", "version": "3"},
        ],
    )
    def test_invalid(self, kwargs):
        """Unknown geometries are rejected."""
        with pytest.raises(ValueError):
            geo_factory(**kwargs)

    def test_ambiguous(self, geometry_cfg):
        """A detector name and a configuration block are mutually exclusive."""
        with pytest.raises(ValueError):
            geo_factory("ndlar_tms", geometry=geometry_cfg)
