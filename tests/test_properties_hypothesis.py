import numpy as np
import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a dev optional dependency")
from hypothesis import given, settings, strategies as st  # type: ignore

from quadtess.engine.core.corner_mask import CornerMask
from quadtess.engine.core.params import QuadParams
from quadtess.shapes.quad import generate_quad_arrays
from quadtess.shapes.quad_indices import build_quad_indices


@st.composite
def _rounded_params(draw):
    size_x = draw(st.floats(0.1, 10.0))
    size_y = draw(st.floats(0.1, 10.0))
    nx = draw(st.integers(4, 12))
    ny = draw(st.integers(4, 12))
    cv = draw(st.integers(1, 12))
    radius = draw(st.floats(0.0, 5.0))
    mask = CornerMask(draw(st.integers(0, 15)))
    return QuadParams(size_x, size_y, nx, ny, radius, cv, mask)


@settings(max_examples=60, deadline=None)
@given(params=_rounded_params())
def test_generated_mesh_is_bounded_and_indexed(params):
    positions, tex_coords = generate_quad_arrays(params)
    assert positions.shape[0] == params.vertex_count()
    hx, hy = params.size_x / 2.0, params.size_y / 2.0
    assert np.all(np.abs(positions[:, 0]) <= hx + 1e-9)
    assert np.all(np.abs(positions[:, 1]) <= hy + 1e-9)
    assert np.all((tex_coords >= -1e-9) & (tex_coords <= 1.0 + 1e-9))

    indices = build_quad_indices(params.num_verts_x, params.num_verts_y, params.corner_verts)
    assert indices.shape == (3 * params.triangle_count(),)
    np.testing.assert_array_equal(np.unique(indices), np.arange(positions.shape[0]))


@settings(max_examples=40, deadline=None)
@given(params=_rounded_params())
def test_unrounded_corners_lie_on_corner_square(params):
    positions, _ = generate_quad_arrays(params)
    r = params.effective_corner_radius
    hix = params.size_x / 2.0 - r
    hiy = params.size_y / 2.0 - r
    anchors = np.array([[-hix, -hiy], [-hix, hiy], [hix, -hiy], [hix, hiy]])
    fans = positions[-4 * params.corner_verts :, :2].reshape(params.corner_verts, 4, 2)
    corners = (CornerMask.BOTTOM_LEFT, CornerMask.TOP_LEFT, CornerMask.BOTTOM_RIGHT, CornerMask.TOP_RIGHT)
    for slot, corner in enumerate(corners):
        delta = fans[:, slot] - anchors[slot]
        if params.corner_mask.intersects(corner):
            np.testing.assert_allclose(np.linalg.norm(delta, axis=1), r, atol=1e-9)
        else:
            np.testing.assert_allclose(np.max(np.abs(delta), axis=1), r, atol=1e-9)
