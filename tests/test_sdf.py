import numpy as np
import pytest

from stmeshkit.sdf import CylinderSDF, HyperCube, HyperSphere
from stmeshkit.utility import AlignedBox


def test_sphere_center_distance_is_minus_radius():
    sphere = HyperSphere(2.0, [1.0, 1.0, 1.0, 1.0])
    assert sphere.signed_distance([1.0, 1.0, 1.0, 1.0]) == pytest.approx(-2.0)


def test_sphere_surface_point_has_zero_distance():
    sphere = HyperSphere(1.5, [0.0, 0.0, 0.0, 0.0])
    assert sphere.signed_distance([0.0, 1.5, 0.0, 0.0]) == pytest.approx(0.0)


def test_sphere_scale_changes_radius():
    sphere = HyperSphere(2.0, [0.0, 0.0, 0.0])
    sphere.scale(0.5)
    assert sphere.radius == pytest.approx(1.0)


def test_sphere_normal_points_outward():
    sphere = HyperSphere(1.0, [0.0, 0.0, 0.0, 0.0])
    n = sphere.normal([0.0, 0.0, 3.0, 0.0])
    assert np.allclose(n, [0.0, 0.0, 1.0, 0.0])


def test_sphere_normal_at_center_is_first_axis():
    sphere = HyperSphere(1.0, [2.0, 2.0, 2.0, 2.0])
    assert np.array_equal(sphere.normal([2.0, 2.0, 2.0, 2.0]), [1.0, 0.0, 0.0, 0.0])


def test_sphere_bounding_box():
    sphere = HyperSphere(1.0, [0.0, 0.0, 0.0, 0.0])
    assert sphere.bounding_box() == AlignedBox([-1.0] * 4, [1.0] * 4)


def test_sphere_equality():
    assert HyperSphere(1.0, [0.0, 1.0]) == HyperSphere(1.0, [0.0, 1.0])
    assert not HyperSphere(1.0, [0.0, 1.0]) == HyperSphere(2.0, [0.0, 1.0])


def test_sphere_distance_is_absolute_signed_distance():
    sphere = HyperSphere(1.0, [0.0, 0.0, 0.0, 0.0])
    assert sphere.distance([0.2, 0.0, 0.0, 0.0]) == pytest.approx(-sphere.signed_distance([0.2, 0.0, 0.0, 0.0]))


def test_cube_center_distance():
    cube = HyperCube([0.0, 0.0, 0.0, 0.0], [2.0, 4.0, 4.0, 4.0])
    assert cube.signed_distance([1.0, 2.0, 2.0, 2.0]) == pytest.approx(-1.0)


def test_cube_face_point_is_on_surface():
    cube = HyperCube([0.0, 0.0, 0.0, 0.0], [2.0, 2.0, 2.0, 2.0])
    assert cube.signed_distance([2.0, 1.0, 1.0, 1.0]) == pytest.approx(0.0)


def test_cube_outside_distance_along_axis():
    cube = HyperCube([0.0, 0.0, 0.0, 0.0], [1.0, 1.0, 1.0, 1.0])
    assert cube.signed_distance([3.0, 0.5, 0.5, 0.5]) == pytest.approx(2.0)


def test_cube_bounding_box_is_cube():
    cube = HyperCube([0.0, -1.0, 0.0, 0.0], [1.0, 1.0, 2.0, 3.0])
    assert cube.bounding_box() == AlignedBox([0.0, -1.0, 0.0, 0.0], [1.0, 1.0, 2.0, 3.0])


def test_cube_rejects_mismatched_corners():
    with pytest.raises(ValueError):
        HyperCube([0.0, 0.0], [1.0, 1.0, 1.0])


def test_cylinder_surface_points():
    cylinder = CylinderSDF(1.0, [0.0, 0.0, 0.0], [0.0, 0.0, 2.0])
    assert cylinder.signed_distance([1.0, 0.0, 1.0]) == pytest.approx(0.0, abs=1e-12)
    assert cylinder.signed_distance([0.0, 0.0, 2.0]) == pytest.approx(0.0, abs=1e-12)


def test_cylinder_inside_and_outside_signs():
    cylinder = CylinderSDF(1.0, [0.0, 0.0, 0.0], [0.0, 0.0, 2.0])
    assert cylinder.signed_distance([0.0, 0.0, 1.0]) < 0
    assert cylinder.signed_distance([0.0, 3.0, 1.0]) > 0
    assert cylinder.signed_distance([0.0, 0.0, -1.0]) > 0


def test_cylinder_side_normal():
    cylinder = CylinderSDF(1.0, [0.0, 0.0, 0.0], [0.0, 0.0, 2.0])
    assert np.allclose(cylinder.normal([2.0, 0.0, 1.0]), [1.0, 0.0, 0.0])


def test_cylinder_cap_normals():
    cylinder = CylinderSDF(1.0, [0.0, 0.0, 0.0], [0.0, 0.0, 2.0])
    assert np.allclose(cylinder.normal([0.0, 0.0, 5.0]), [0.0, 0.0, 1.0])
    assert np.allclose(cylinder.normal([0.0, 0.0, -3.0]), [0.0, 0.0, -1.0])


def test_cylinder_bounding_box_axis_aligned():
    cylinder = CylinderSDF(1.0, [0.0, 0.0, 0.0], [0.0, 0.0, 2.0])
    box = cylinder.bounding_box()
    assert np.allclose(box.minimum, [-1.0, -1.0, 0.0])
    assert np.allclose(box.maximum, [1.0, 1.0, 2.0])


def test_cylinder_bounding_box_contains_sampled_points():
    cylinder = CylinderSDF(0.5, [1.0, -1.0, 0.0], [1.0, 2.0, 3.0])
    box = cylinder.bounding_box()
    rng = np.random.default_rng(3)
    for _ in range(20):
        assert box.contains(cylinder.sample(rng))