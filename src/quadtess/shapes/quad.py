"""
テッセレーション矩形（角丸対応）の頂点生成

概要:
- 原点中心・Z=0 の `size_x × size_y` 矩形を `num_verts_x × num_verts_y` の格子で分割する。
- `corner_verts > 0` なら四隅を半径 `corner_radius` の 1/4 円弧（三角形ファン）で丸める。
- `corner_mask` から外れた角は円弧を外接正方形へ射影して直角に戻す（頂点数/順序は不変）。

頂点は列優先（x 外側・y 内側）で次の順に並ぶ。インデックス生成
（`shapes.quad_indices`）はこの並びに依存する:

    2---5---8
    |   |   |
    1---4---7
    |   |   |
    0---3---6

角丸ありの場合は内部矩形の周囲にタブを置く:

         D       F
         +-------+        ^                  ^
         |       |        | corner_radius    |
    B +--+-------+--+ H   v                  |
      |  |       |  |                        | size_y
    A +--+-------+--+ G  ^                   |
         |       |       | corner_radius     |
         +-------+       v                   v
         C       E

    1) 左タブ列 A..B（x = -size_x/2）
    2) 各内部列: 下タブ（C..E 側, y = -size_y/2）→ 内部行 → 上タブ（D..F 側, y = +size_y/2）
    3) 右タブ列 G..H（x = +size_x/2）
    4) 円弧: 角度ステップごとに 左下 → 左上 → 右下 → 右上

UV は左上原点（v は上下反転）。タブの UV は辺に張り付く（左 u=0, 右 u=1, 下 v=1, 上 v=0）。
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from quadtess.engine.core.corner_mask import CornerMask
from quadtess.engine.core.mesh import QuadMesh
from quadtess.engine.core.params import QuadParams, QuadParamsError
from quadtess.engine.core.vertex import V, Vertex

from .quad_indices import build_quad_indices

logger = logging.getLogger(__name__)

# 円弧の出力順（角度ステップごとにこの順で 4 頂点）
FAN_ORDER: tuple[CornerMask, ...] = (
    CornerMask.BOTTOM_LEFT,
    CornerMask.TOP_LEFT,
    CornerMask.BOTTOM_RIGHT,
    CornerMask.TOP_RIGHT,
)


def _unround(offsets: np.ndarray, radius: float) -> np.ndarray:
    """円弧上のオフセットを半径 `radius` の外接正方形へ射影する。

    `max(|x|, |y|) == radius` となるよう等方スケールする。ゼロベクトルはそのまま。
    """
    extent = np.max(np.abs(offsets), axis=1, keepdims=True)
    scale = np.divide(radius, extent, out=np.ones_like(extent), where=extent > 0.0)
    return offsets * scale


def corner_fan_offsets(radius: float, corner_verts: int, corner_mask: CornerMask) -> np.ndarray:
    """四隅の円弧オフセットを `(corner_verts, 4, 2)` で返す（角の並びは `FAN_ORDER`）。

    1 つの角度から `r·sinθ` と `r·cosθ` を一度だけ計算し、符号/軸の入れ替えで
    四隅を同時に導出する。これにより正方形・全角丸では四隅が互いに厳密な 90° 回転になる。
    """
    corner_mask = CornerMask(corner_mask)
    theta = (np.arange(1, corner_verts + 1, dtype=np.float64) / corner_verts) * (np.pi / 2.0)
    r_sin = radius * np.sin(theta)
    r_cos = radius * np.cos(theta)

    offsets = np.empty((corner_verts, 4, 2), dtype=np.float64)
    offsets[:, 0, 0], offsets[:, 0, 1] = -r_sin, -r_cos  # bottom-left
    offsets[:, 1, 0], offsets[:, 1, 1] = -r_cos, r_sin  # top-left
    offsets[:, 2, 0], offsets[:, 2, 1] = r_cos, -r_sin  # bottom-right
    offsets[:, 3, 0], offsets[:, 3, 1] = r_sin, r_cos  # top-right

    for slot, corner in enumerate(FAN_ORDER):
        if not corner_mask.intersects(corner):
            offsets[:, slot] = _unround(offsets[:, slot], radius)
    return offsets


def generate_quad_arrays(params: QuadParams) -> tuple[np.ndarray, np.ndarray]:
    """頂点位置と UV を `(N, 3)` / `(N, 2)` の float64 配列で生成する。

    Parameters
    ----------
    params : QuadParams
        生成パラメータ。

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        `(positions, tex_coords)`。`N == params.vertex_count()`。

    Raises
    ------
    QuadParamsError
        パラメータが不変条件に違反する場合（出力は一切生成しない）。
    """
    params.validate()

    rounded = params.rounded
    radius = params.effective_corner_radius
    size_x = float(params.size_x)
    size_y = float(params.size_y)
    half_size_x = size_x / 2.0
    half_size_y = size_y / 2.0
    interior_size_x = size_x - 2.0 * radius
    interior_size_y = size_y - 2.0 * radius
    half_interior_size_x = interior_size_x / 2.0
    half_interior_size_y = interior_size_y / 2.0
    # サイズ 0 の軸では半径も 0 に丸められるため、インセット 0 で扱う
    u_inset = radius / size_x if size_x > 0.0 else 0.0
    v_inset = radius / size_y if size_y > 0.0 else 0.0
    u_range = 1.0 - 2.0 * u_inset
    v_range = 1.0 - 2.0 * v_inset

    num_x = params.num_interior_x
    num_y = params.num_interior_y
    x_fraction = np.linspace(0.0, 1.0, num_x)
    y_fraction = np.linspace(0.0, 1.0, num_y)
    x_vals = x_fraction * interior_size_x - half_interior_size_x
    y_vals = y_fraction * interior_size_y - half_interior_size_y
    u_vals = u_inset + x_fraction * u_range
    # Flip v: texture origin is top-left, geometry y grows upward
    v_vals = v_inset + (1.0 - y_fraction) * v_range

    num_verts = params.vertex_count()
    positions = np.zeros((num_verts, 3), dtype=np.float64)
    tex_coords = np.empty((num_verts, 2), dtype=np.float64)
    index = 0

    if rounded:
        # 左タブ A..B
        positions[index : index + num_y, 0] = -half_size_x
        positions[index : index + num_y, 1] = y_vals
        tex_coords[index : index + num_y, 0] = 0.0
        tex_coords[index : index + num_y, 1] = v_vals
        index += num_y

    # 内部格子 + 上下タブ（CDFE）: 列ごとに [下タブ] 内部行 [上タブ]
    column = num_y + 2 if rounded else num_y
    grid_xy = np.empty((num_x, column, 2), dtype=np.float64)
    grid_uv = np.empty((num_x, column, 2), dtype=np.float64)
    grid_xy[:, :, 0] = x_vals[:, np.newaxis]
    grid_uv[:, :, 0] = u_vals[:, np.newaxis]
    if rounded:
        grid_xy[:, 0, 1] = -half_size_y
        grid_xy[:, 1:-1, 1] = y_vals[np.newaxis, :]
        grid_xy[:, -1, 1] = half_size_y
        grid_uv[:, 0, 1] = 1.0
        grid_uv[:, 1:-1, 1] = v_vals[np.newaxis, :]
        grid_uv[:, -1, 1] = 0.0
    else:
        grid_xy[:, :, 1] = y_vals[np.newaxis, :]
        grid_uv[:, :, 1] = v_vals[np.newaxis, :]
    count = num_x * column
    positions[index : index + count, :2] = grid_xy.reshape(-1, 2)
    tex_coords[index : index + count] = grid_uv.reshape(-1, 2)
    index += count

    if rounded:
        # 右タブ G..H
        positions[index : index + num_y, 0] = half_size_x
        positions[index : index + num_y, 1] = y_vals
        tex_coords[index : index + num_y, 0] = 1.0
        tex_coords[index : index + num_y, 1] = v_vals
        index += num_y

        # 四隅のファン
        anchors_xy = np.array(
            [
                [-half_interior_size_x, -half_interior_size_y],
                [-half_interior_size_x, half_interior_size_y],
                [half_interior_size_x, -half_interior_size_y],
                [half_interior_size_x, half_interior_size_y],
            ],
            dtype=np.float64,
        )
        u_far = 1.0 - u_inset
        v_far = 1.0 - v_inset
        anchors_uv = np.array(
            [[u_inset, v_far], [u_inset, v_inset], [u_far, v_far], [u_far, v_inset]],
            dtype=np.float64,
        )
        uv_divisor = np.array(
            [size_x if size_x > 0.0 else 1.0, -(size_y if size_y > 0.0 else 1.0)],
            dtype=np.float64,
        )
        offsets = corner_fan_offsets(radius, params.corner_verts, params.corner_mask)
        count = offsets.shape[0] * offsets.shape[1]
        positions[index : index + count, :2] = (anchors_xy + offsets).reshape(-1, 2)
        tex_coords[index : index + count] = (anchors_uv + offsets / uv_divisor).reshape(-1, 2)
        index += count

    assert index == num_verts, f"Failed to fill vertices array: wrote {index} of {num_verts}"
    return positions, tex_coords


def write_vertices(
    vertex_factory: Callable[[], V],
    positions: np.ndarray,
    tex_coords: np.ndarray,
) -> list[V]:
    """配列の各行を `vertex_factory()` で作った頂点へ書き込む。"""
    vertices: list[V] = []
    for (x, y, z), (u, v) in zip(positions.tolist(), tex_coords.tolist()):
        vertex = vertex_factory()
        vertex.set_position(x, y, z)
        vertex.set_tex_coord(u, v)
        vertices.append(vertex)
    return vertices


def calculate_tesselated_quad_vertices(
    size_x: float,
    size_y: float,
    num_verts_x: int,
    num_verts_y: int,
    corner_radius: float = 0.0,
    corner_verts: int = 0,
    corner_mask: CornerMask = CornerMask.ALL,
    *,
    vertex_factory: Callable[[], Any] = Vertex,
) -> list[Any]:
    """テッセレーション矩形の頂点列を生成する。

    `vertex_factory` は引数なしで `VertexLike`（`set_position` / `set_tex_coord`）を返す呼び出し可能。
    パラメータが不正な場合は CRITICAL でログを出し、空リストを返す（部分出力はしない）。

    例:
        verts = calculate_tesselated_quad_vertices(2.0, 2.0, 4, 4, 0.3, 4)
        assert len(verts) == quad_vertex_count(4, 4, 4)
    """
    params = QuadParams(
        size_x=size_x,
        size_y=size_y,
        num_verts_x=num_verts_x,
        num_verts_y=num_verts_y,
        corner_radius=corner_radius,
        corner_verts=corner_verts,
        corner_mask=corner_mask,
    )
    try:
        positions, tex_coords = generate_quad_arrays(params)
    except QuadParamsError as e:
        logger.critical("Failed to tessellate quad: %s", e)
        return []
    return write_vertices(vertex_factory, positions, tex_coords)


def quad_mesh(
    size_x: float,
    size_y: float,
    num_verts_x: int,
    num_verts_y: int,
    corner_radius: float = 0.0,
    corner_verts: int = 0,
    corner_mask: CornerMask = CornerMask.ALL,
) -> QuadMesh:
    """頂点とインデックスをまとめた `QuadMesh` を生成する（不正時は空メッシュ）。"""
    params = QuadParams(
        size_x=size_x,
        size_y=size_y,
        num_verts_x=num_verts_x,
        num_verts_y=num_verts_y,
        corner_radius=corner_radius,
        corner_verts=corner_verts,
        corner_mask=corner_mask,
    )
    try:
        positions, tex_coords = generate_quad_arrays(params)
        indices = build_quad_indices(num_verts_x, num_verts_y, corner_verts)
    except QuadParamsError as e:
        logger.critical("Failed to tessellate quad: %s", e)
        return QuadMesh.empty()
    return QuadMesh(positions, tex_coords, indices)


__all__ = [
    "FAN_ORDER",
    "corner_fan_offsets",
    "generate_quad_arrays",
    "write_vertices",
    "calculate_tesselated_quad_vertices",
    "quad_mesh",
]
