"""
三角形メッシュ型 `QuadMesh`

テッセレーション矩形の生成結果（頂点配列 + 三角形インデックス）を numpy 配列で保持する。
GPU 転送やメッシュ系への受け渡しは本モジュールの外側の責務とし、ここでは
データモデルの正規化と読み取り専用ビューの提供に留める。

データモデル（不変条件）:
- `positions: float32 ndarray (N, 3)`: 頂点位置（行は XYZ）。
- `tex_coords: float32 ndarray (N, 2)`: 頂点 UV（行は UV、原点は左上）。
- `indices: uint32 ndarray (3T,)`: 三角形リスト。すべて `< N`。
- dtype/形状は常に上記に正規化される。

インターリーブ配置（`interleaved()`）:

    # 1 頂点 = 5 float = 20 byte
    #   [x, y, z, u, v] [x, y, z, u, v] ...
    #   stride = 20 byte、位置は各ストライドの先頭

補足:
- 空メッシュは `positions.shape==(0,3)`, `tex_coords.shape==(0,2)`, `indices.shape==(0,)`。
"""

from __future__ import annotations

import numpy as np

INTERLEAVED_FLOATS = 5
INTERLEAVED_STRIDE = INTERLEAVED_FLOATS * np.dtype(np.float32).itemsize


def _normalize_mesh_input(
    positions: np.ndarray,
    tex_coords: np.ndarray,
    indices: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """`QuadMesh` 生成時の内部正規化ヘルパ。"""

    pos_arr = np.ascontiguousarray(positions, dtype=np.float32)
    if pos_arr.ndim != 2 or pos_arr.shape[1] != 3:
        raise ValueError("positions は形状 (N, 3) の配列である必要があります。")

    uv_arr = np.ascontiguousarray(tex_coords, dtype=np.float32)
    if uv_arr.ndim != 2 or uv_arr.shape[1] != 2:
        raise ValueError("tex_coords は形状 (N, 2) の配列である必要があります。")
    if uv_arr.shape[0] != pos_arr.shape[0]:
        raise ValueError("positions と tex_coords の行数が一致しません。")

    idx_in = np.asarray(indices)
    if idx_in.ndim != 1:
        raise ValueError("indices は 1 次元配列である必要があります。")
    if idx_in.size % 3 != 0:
        raise ValueError("indices の長さは 3 の倍数である必要があります。")
    if idx_in.size and (idx_in.min() < 0 or idx_in.max() >= pos_arr.shape[0]):
        raise ValueError("indices が頂点範囲外を参照しています。")
    idx_arr = np.ascontiguousarray(idx_in, dtype=np.uint32)

    return pos_arr, uv_arr, idx_arr


class QuadMesh:
    """三角形メッシュ（位置 + UV + インデックス）。

    フィールド:
    - `positions (N,3) float32`
    - `tex_coords (N,2) float32`
    - `indices (3T,) uint32`

    生成時に dtype/形状/インデックス範囲を検証し、正規化済み状態だけを許容する。
    """

    __slots__ = ("positions", "tex_coords", "indices")

    positions: np.ndarray
    tex_coords: np.ndarray
    indices: np.ndarray

    def __init__(self, positions: np.ndarray, tex_coords: np.ndarray, indices: np.ndarray) -> None:
        self.positions, self.tex_coords, self.indices = _normalize_mesh_input(
            positions, tex_coords, indices
        )

    @classmethod
    def empty(cls) -> "QuadMesh":
        return cls(
            np.empty((0, 3), dtype=np.float32),
            np.empty((0, 2), dtype=np.float32),
            np.empty((0,), dtype=np.uint32),
        )

    # ── 基本操作 ────────
    def as_arrays(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """内部配列を返す。

        Parameters
        ----------
        copy : bool, default False
            True の場合はディープコピーを返す。False の場合は読み取り専用ビューを返す。

        Returns
        -------
        tuple[np.ndarray, np.ndarray, np.ndarray]
            `(positions, tex_coords, indices)` のタプル。
        """
        if copy:
            return self.positions.copy(), self.tex_coords.copy(), self.indices.copy()
        views = (self.positions.view(), self.tex_coords.view(), self.indices.view())
        for view in views:
            view.setflags(write=False)
        return views

    @property
    def is_empty(self) -> bool:
        return self.positions.shape[0] == 0

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0] // 3)

    def triangles(self) -> np.ndarray:
        """`(T, 3)` の読み取り専用ビュー。"""
        tri = self.indices.reshape(-1, 3).view()
        tri.setflags(write=False)
        return tri

    def interleaved(self) -> np.ndarray:
        """`[x, y, z, u, v]` を 1 頂点とする `(N, 5) float32` の新しい配列を返す。

        ストライドは `INTERLEAVED_STRIDE`（20 byte）。`effects.deformation` にそのまま渡せる。
        """
        out = np.empty((self.vertex_count, INTERLEAVED_FLOATS), dtype=np.float32)
        out[:, :3] = self.positions
        out[:, 3:] = self.tex_coords
        return out

    def __len__(self) -> int:
        return self.vertex_count

    def __repr__(self) -> str:
        return f"QuadMesh(vertices={self.vertex_count}, triangles={self.triangle_count})"


__all__ = ["QuadMesh", "INTERLEAVED_FLOATS", "INTERLEAVED_STRIDE"]
