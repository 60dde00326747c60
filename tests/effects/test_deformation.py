"""
どこで: tests（effects/deformation）。
何を: ストライド単位での位置書き換え、位置以外の保持、バッファ種別、入力検証、非推奨警告を確認。
"""

from __future__ import annotations

import numpy as np
import pytest

from quadtess.common import settings
from quadtess.effects.deformation import apply_deformation
from quadtess.engine.core.mesh import INTERLEAVED_STRIDE
from quadtess.shapes.quad import quad_mesh


@pytest.fixture()
def quiet(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QTS_WARN_DEFORMATION", "0")
    settings.reload_from_env({})


def _lift(pos):
    x, y, z = pos
    return (x, y, z + x * x + y * y)


def test_emits_deprecation_warning() -> None:
    buf = np.zeros(6, dtype=np.float32)
    with pytest.warns(DeprecationWarning):
        apply_deformation(buf, 12, lambda p: p)


def test_deforms_positions_and_keeps_tex_coords(quiet) -> None:
    mesh = quad_mesh(2.0, 2.0, 5, 5, 0.3, 4)
    buf = mesh.interleaved()
    before = buf.copy()
    n = apply_deformation(buf, INTERLEAVED_STRIDE, _lift)
    assert n == mesh.vertex_count
    np.testing.assert_array_equal(buf[:, :2], before[:, :2])
    np.testing.assert_allclose(buf[:, 2], before[:, 0] ** 2 + before[:, 1] ** 2, rtol=1e-6)
    np.testing.assert_array_equal(buf[:, 3:], before[:, 3:])


def test_vectorized_matches_per_vertex(quiet) -> None:
    mesh = quad_mesh(1.0, 3.0, 6, 4, 0.25, 3)
    a = mesh.interleaved()
    b = mesh.interleaved()
    apply_deformation(a, INTERLEAVED_STRIDE, _lift)

    def lift_all(pos: np.ndarray) -> np.ndarray:
        out = pos.copy()
        out[:, 2] += pos[:, 0] ** 2 + pos[:, 1] ** 2
        return out

    apply_deformation(b, INTERLEAVED_STRIDE, lift_all, vectorized=True)
    np.testing.assert_allclose(a, b, rtol=1e-6)


def test_length_limits_affected_vertices(quiet) -> None:
    buf = np.arange(20, dtype=np.float32)  # 4 頂点 × 5 float
    n = apply_deformation(buf, 20, lambda p: (0.0, 0.0, 0.0), length=10)
    assert n == 2
    np.testing.assert_array_equal(buf[:3], 0.0)
    np.testing.assert_array_equal(buf[5:8], 0.0)
    np.testing.assert_array_equal(buf[10:], np.arange(10, 20, dtype=np.float32))


def test_accepts_writable_raw_buffer(quiet) -> None:
    raw = bytearray(np.array([1, 2, 3, 4, 5, 6], dtype=np.float32).tobytes())
    apply_deformation(raw, 12, lambda p: (p[0] * 2, p[1] * 2, p[2] * 2))
    np.testing.assert_array_equal(np.frombuffer(raw, dtype=np.float32), [2, 4, 6, 8, 10, 12])


def test_empty_length_is_noop(quiet) -> None:
    buf = np.ones(10, dtype=np.float32)
    assert apply_deformation(buf, 20, _lift, length=0) == 0
    np.testing.assert_array_equal(buf, 1.0)


@pytest.mark.parametrize(
    "buf, stride, kwargs",
    [
        (np.zeros(10, dtype=np.float64), 20, {}),  # dtype
        (np.zeros(10, dtype=np.float32), 8, {}),  # 位置 3 float に満たない
        (np.zeros(10, dtype=np.float32), 14, {}),  # 4 の倍数でない
        (np.zeros(10, dtype=np.float32), 20, {"length": 11}),  # 範囲外
        (np.zeros(7, dtype=np.float32), 20, {}),  # 最後の位置がはみ出す
        (np.zeros((4, 5), dtype=np.float32)[:, :3], 12, {}),  # 非連続
        (bytes(24), 12, {}),  # 読み取り専用
    ],
)
def test_invalid_inputs_raise(quiet, buf, stride, kwargs) -> None:
    with pytest.raises(ValueError):
        apply_deformation(buf, stride, _lift, **kwargs)


def test_bad_deform_result_raises(quiet) -> None:
    buf = np.zeros(6, dtype=np.float32)
    with pytest.raises(ValueError):
        apply_deformation(buf, 12, lambda p: (1.0, 2.0))
    with pytest.raises(ValueError):
        apply_deformation(buf, 12, lambda p: p[:, :2], vectorized=True)
