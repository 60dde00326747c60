"""
deformation（移行用・非推奨）

- 生成済みのフラットな頂点バッファに対し、各頂点の位置 (x, y, z) を `deform` で置き換える。
- 位置は各ストライドの先頭 3 float にあるものとし、それ以外（UV 等）は変更しない。
- メッシュ系へ変形を統合するまでの暫定 API。生成コア（`shapes.quad` / `shapes.quad_indices`）は
  本モジュールに依存しないため、単独で削除できる。

主なパラメータ:
- vertices: 書き込み可能な float32 バッファ（ndarray または bytearray 等のバッファ）。
- stride: 連続する頂点位置の間隔 [byte]。4 の倍数かつ 12 以上。
- length: 対象とする float 数（省略時はバッファ全体）。
- vectorized: True なら `deform` を `(N, 3)` 配列で 1 回だけ呼ぶ。
"""

from __future__ import annotations

import warnings
from typing import Any, Callable

import numpy as np

from quadtess.common.settings import get as _get_settings

_FLOAT_SIZE = np.dtype(np.float32).itemsize


def _as_float_view(vertices: Any) -> np.ndarray:
    """入力バッファを共有メモリの 1 次元 float32 ビューへ変換する。"""
    if isinstance(vertices, np.ndarray):
        if vertices.dtype != np.float32:
            raise ValueError(f"vertices は float32 である必要があります: {vertices.dtype}")
        if not vertices.flags.c_contiguous:
            raise ValueError("vertices は C 連続である必要があります。")
        arr = vertices.reshape(-1)
    else:
        arr = np.frombuffer(memoryview(vertices), dtype=np.float32)
    if not arr.flags.writeable:
        raise ValueError("vertices は書き込み可能である必要があります。")
    return arr


def apply_deformation(
    vertices: Any,
    stride: int,
    deform: Callable[[np.ndarray], Any],
    *,
    length: int | None = None,
    vectorized: bool = False,
) -> int:
    """頂点位置へ `deform` を就地で適用し、変形した頂点数を返す。

    Parameters
    ----------
    vertices : ndarray | buffer
        書き込み可能な float32 バッファ。
    stride : int
        連続する頂点位置の間隔 [byte]。
    deform : Callable
        `vectorized=False` では `(3,)` 配列 → 3 要素、`True` では `(N, 3)` → `(N, 3)`。
    length : int, optional
        対象とする float 数。省略時はバッファ全体。
    vectorized : bool, default False
        `deform` をまとめて 1 回だけ呼ぶ。

    Raises
    ------
    ValueError
        dtype/ストライド/長さが不正、または `deform` の戻り値の形状が不正な場合。
    """
    if _get_settings().WARN_DEFORMATION:
        warnings.warn(
            "apply_deformation is transitional and will be removed once deformation "
            "moves into the mesh pipeline",
            DeprecationWarning,
            stacklevel=2,
        )

    arr = _as_float_view(vertices)
    if stride < 3 * _FLOAT_SIZE or stride % _FLOAT_SIZE != 0:
        raise ValueError(f"stride は 4 の倍数かつ 12 以上である必要があります: {stride}")
    n_floats = arr.size if length is None else int(length)
    if n_floats < 0 or n_floats > arr.size:
        raise ValueError(f"length がバッファ範囲外です: {length} (size={arr.size})")

    stride_in_floats = stride // _FLOAT_SIZE
    starts = np.arange(0, n_floats, stride_in_floats, dtype=np.int64)
    if starts.size and starts[-1] + 3 > n_floats:
        raise ValueError("最後の頂点の位置がバッファ長に収まりません。")
    if starts.size == 0:
        return 0

    gather = starts[:, np.newaxis] + np.arange(3, dtype=np.int64)
    positions = arr[gather]

    if vectorized:
        out = np.asarray(deform(positions.copy()), dtype=np.float32)
        if out.shape != positions.shape:
            raise ValueError(f"deform の戻り値は形状 {positions.shape} である必要があります: {out.shape}")
    else:
        out = np.empty_like(positions)
        for i, pos in enumerate(positions):
            moved = np.asarray(deform(pos.copy()), dtype=np.float32).reshape(-1)
            if moved.shape != (3,):
                raise ValueError(f"deform の戻り値は 3 要素である必要があります: {moved.shape}")
            out[i] = moved

    arr[gather] = out
    return int(starts.size)


__all__ = ["apply_deformation"]
