"""Geometry kernel: transforms, inversion, containment."""

import math

import numpy as np
import pytest

from scopemap_zone import DegenerateTransformError, OrientedBox, Point3, Transform
from scopemap_zone.geometry import apply, contains, invert

from conftest import box


class TestAxisAlignedContainment:

    def test_interior_point_is_contained(self):
        assert contains(box((0, 0, 0), (10, 10, 10)), Point3(5, 5, 5))

    def test_face_point_is_contained(self):
        assert contains(box((0, 0, 0), (10, 10, 10)), Point3(10, 0, 0))

    def test_corner_point_is_contained(self):
        assert contains(box((0, 0, 0), (10, 10, 10)), Point3(0, 10, 10))

    def test_point_just_outside_is_not_contained(self):
        assert not contains(box((0, 0, 0), (10, 10, 10)), Point3(10.0001, 0, 0))

    def test_negative_side(self):
        assert not contains(box((0, 0, 0), (10, 10, 10)), Point3(5, -0.0001, 5))

    def test_flat_box_contains_points_on_its_plane(self):
        flat = box((0, 0, 2), (4, 4, 2))
        assert contains(flat, Point3(1, 1, 2))
        assert not contains(flat, Point3(1, 1, 2.001))


class TestOrientedContainment:

    @pytest.mark.parametrize("angle_deg", [0, 30, 90, 135, 180, 270, -45])
    def test_local_interior_point_is_contained_at_any_rotation(self, angle_deg):
        transform = Transform.rotation_z(math.radians(angle_deg), origin=Point3(3, 4, 0))
        volume = box((0, 0, 0), (2, 1, 1), transform)

        world = apply(transform, Point3(1, 0.5, 0.5))

        assert contains(volume, world)

    def test_rotated_box_uses_local_axes(self, rotated_transform):
        volume = box((0, 0, 0), (2, 1, 1), rotated_transform)

        # local x runs along world +Y, local y along world -X
        assert contains(volume, Point3(2.5, 5.5, 0.5))
        # inside the world AABB of an unrotated box at the same origin, but not this one
        assert not contains(volume, Point3(4.5, 4.5, 0.5))

    def test_scaled_transform(self):
        volume = box((0, 0, 0), (1, 1, 1), Transform.scaling(10, 10, 10))
        assert contains(volume, Point3(9.5, 9.5, 9.5))
        assert not contains(volume, Point3(10.5, 5, 5))

    def test_translated_transform(self):
        volume = box((0, 0, 0), (1, 1, 1), Transform.translation_by(Point3(100, 0, 0)))
        assert contains(volume, Point3(100.5, 0.5, 0.5))
        assert not contains(volume, Point3(0.5, 0.5, 0.5))


class TestInvert:

    def test_identity_inverse_is_identity(self):
        inverse = invert(Transform.identity())
        np.testing.assert_allclose(inverse.linear, np.eye(3))
        np.testing.assert_allclose(inverse.translation, np.zeros(3), atol=0)

    def test_inverse_round_trips_points(self, rotated_transform):
        transform = Transform(
            rotated_transform.linear @ np.diag([2.0, 3.0, 4.0]),
            rotated_transform.translation,
        )
        p = Point3(1.5, -2.0, 7.25)

        back = apply(invert(transform), apply(transform, p))

        np.testing.assert_allclose(back.as_array(), p.as_array(), atol=1e-12)

    def test_zero_matrix_is_degenerate(self, singular_transform):
        with pytest.raises(DegenerateTransformError) as excinfo:
            invert(singular_transform)
        assert excinfo.value.determinant == 0.0

    def test_rank_deficient_matrix_is_degenerate(self):
        flattened = Transform(np.diag([1.0, 1.0, 0.0]), np.zeros(3))
        with pytest.raises(DegenerateTransformError):
            invert(flattened)

    def test_parallel_axes_are_degenerate(self):
        transform = Transform.from_basis(
            Point3(0, 0, 0), Point3(1, 0, 0), Point3(2, 0, 0), Point3(0, 0, 1)
        )
        with pytest.raises(DegenerateTransformError):
            invert(transform)

    def test_small_uniform_scale_is_not_degenerate(self):
        # det = 1e-12 but the axes are orthogonal; relative test accepts it
        inverse = invert(Transform.scaling(1e-4, 1e-4, 1e-4))
        np.testing.assert_allclose(np.diag(inverse.linear), [1e4, 1e4, 1e4])

    def test_contains_propagates_degenerate_transform(self, singular_transform):
        volume = box((0, 0, 0), (1, 1, 1), singular_transform)
        with pytest.raises(DegenerateTransformError):
            contains(volume, Point3(0, 0, 0))


class TestValueTypes:

    def test_box_rejects_min_above_max(self):
        with pytest.raises(ValueError, match="min.y"):
            OrientedBox(Transform.identity(), Point3(0, 5, 0), Point3(1, 1, 1))

    def test_transform_arrays_are_read_only(self):
        transform = Transform.identity()
        with pytest.raises(ValueError):
            transform.linear[0, 0] = 2.0

    def test_transform_rejects_bad_shapes(self):
        with pytest.raises(ValueError, match="3x3"):
            Transform(np.eye(2), np.zeros(3))

    def test_world_bounds_of_rotated_box(self, rotated_transform):
        lo, hi = box((0, 0, 0), (2, 1, 1), rotated_transform).world_bounds()
        np.testing.assert_allclose(lo.as_array(), [2, 4, 0], atol=1e-12)
        np.testing.assert_allclose(hi.as_array(), [3, 6, 1], atol=1e-12)

    def test_transform_from_empty_dict_is_identity(self):
        transform = Transform.from_dict({})
        np.testing.assert_array_equal(transform.linear, np.eye(3))

    def test_transform_dict_round_trip_keeps_basis(self, rotated_transform):
        restored = Transform.from_dict(rotated_transform.to_dict())
        np.testing.assert_allclose(restored.linear, rotated_transform.linear)
        np.testing.assert_allclose(restored.translation, [3, 4, 0])

    def test_point_arithmetic(self):
        assert Point3(1, 2, 3) + Point3(1, 1, 1) == Point3(2, 3, 4)
        assert (Point3(2, 4, 6) - Point3(2, 2, 2)) * 0.5 == Point3(0, 1, 2)

    def test_point_from_sequence_and_mapping(self):
        assert Point3.from_dict([1, 2, 3]) == Point3.from_dict({"x": 1, "y": 2, "z": 3})
        with pytest.raises(ValueError):
            Point3.from_dict([1, 2])
