"""
どこで: `quadtess` 入口（公開 API）。
何を: 矩形テッセレーション（頂点/インデックス/メッシュ）と値型を再輸出。
なぜ: 利用者が単一名前空間から生成→描画用インデックス取得まで完結できるようにするため。

Usage:
    from quadtess import CornerMask, calculate_tesselated_quad_indices, quad_mesh

    mesh = quad_mesh(2.0, 1.0, 6, 4, corner_radius=0.2, corner_verts=8,
                     corner_mask=CornerMask.TOP_LEFT | CornerMask.TOP_RIGHT)
    verts = mesh.interleaved()          # (N, 5) float32, stride 20 byte
    tris = mesh.triangles()             # (T, 3) uint32
"""

from .common.logging import setup_default_logging
from .effects.deformation import apply_deformation
from .engine.core.corner_mask import CornerMask
from .engine.core.mesh import INTERLEAVED_STRIDE, QuadMesh
from .engine.core.params import (
    QuadParams,
    QuadParamsError,
    quad_triangle_count,
    quad_vertex_count,
)
from .engine.core.vertex import Vertex, VertexLike
from .shapes.quad import calculate_tesselated_quad_vertices, generate_quad_arrays, quad_mesh
from .shapes.quad_indices import calculate_tesselated_quad_indices

__all__ = [
    # 生成
    "calculate_tesselated_quad_vertices",
    "calculate_tesselated_quad_indices",
    "generate_quad_arrays",
    "quad_mesh",
    # 値型
    "CornerMask",
    "QuadParams",
    "QuadParamsError",
    "QuadMesh",
    "Vertex",
    "VertexLike",
    "INTERLEAVED_STRIDE",
    "quad_vertex_count",
    "quad_triangle_count",
    # 移行用（非推奨）
    "apply_deformation",
    # ロギング
    "setup_default_logging",
]

__version__ = "2026.10"
