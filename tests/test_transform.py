import numpy as np
import pytest

from deferredengine.transform import Transform


def test_default_is_identity():
    assert np.allclose(Transform().transformation_matrix(), np.eye(4))


def test_position_only_constructor():
    transform = Transform((5.0, 0.0, 0.0))
    assert np.allclose(transform.rotation, [0, 0, 0])
    assert np.allclose(transform.scale, [1, 1, 1])
    assert np.allclose(transform.transformation_matrix()[:3, 3], [5.0, 0.0, 0.0])


def test_scale_appears_on_diagonal():
    transform = Transform(scale=(10.0, 2.0, 0.01))
    matrix = transform.transformation_matrix()
    assert np.allclose(np.diag(matrix), [10.0, 2.0, 0.01, 1.0])


def test_rotation_is_orthonormal():
    transform = Transform(rotation=(-90.0, 170.0, 33.0))
    rotation = transform.transformation_matrix()[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.eye(3))
    assert np.isclose(np.linalg.det(rotation), 1.0)


def test_quarter_turn_about_y():
    transform = Transform(rotation=(0.0, 90.0, 0.0))
    rotated = transform.transformation_matrix() @ np.array([1.0, 0.0, 0.0, 0.0])
    assert np.allclose(rotated[:3], [0.0, 0.0, -1.0])


def test_full_turn_is_identity():
    transform = Transform(rotation=(360.0, 0.0, 0.0))
    assert np.allclose(transform.transformation_matrix(), np.eye(4))


def test_combined_transform_invariants():
    transform = Transform((1.0, -3.5, 2.0), (-90.0, 0.0, 0.0), (10.0, 10.0, 10.0))
    matrix = transform.transformation_matrix()
    origin = matrix @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin[:3], [1.0, -3.5, 2.0])
    assert np.allclose(np.linalg.norm(matrix[:3, :3], axis=0), [10.0, 10.0, 10.0])
    assert np.isclose(np.linalg.det(matrix), 1000.0)


def test_axis_matches_matrix_column():
    transform = Transform(rotation=(0.0, 180.0, 0.0))
    assert np.allclose(transform.axis(2), transform.transformation_matrix()[:3, 2])
    with pytest.raises(IndexError):
        transform.axis(3)


def test_assignment_is_coerced_to_array():
    transform = Transform()
    transform.position = [0.0, 2.0, -1.0]
    assert transform.position.dtype == np.float64
    assert np.allclose(transform.position, [0.0, 2.0, -1.0])


def test_bad_vector_shape_rejected():
    with pytest.raises(ValueError):
        Transform((1.0, 2.0))
    transform = Transform()
    with pytest.raises(ValueError):
        transform.scale = (1.0, 2.0, 3.0, 4.0)