"""
どこで: `quadtess.shapes` パッケージ。
何を: テッセレーション矩形の頂点生成（`quad`）とインデックス生成（`quad_indices`）。
"""

from .quad import calculate_tesselated_quad_vertices, generate_quad_arrays, quad_mesh
from .quad_indices import (
    build_quad_indices,
    calculate_tesselated_quad_indices,
    clear_indices_cache,
    get_indices_cache_counters,
)

__all__ = [
    "calculate_tesselated_quad_vertices",
    "generate_quad_arrays",
    "quad_mesh",
    "build_quad_indices",
    "calculate_tesselated_quad_indices",
    "clear_indices_cache",
    "get_indices_cache_counters",
]
