"""
どこで: `quadtess.engine.core`
何を: 生成コアの値型（CornerMask/QuadParams/頂点契約/QuadMesh）。
"""

from .corner_mask import CornerMask
from .mesh import INTERLEAVED_STRIDE, QuadMesh
from .params import QuadParams, QuadParamsError, quad_triangle_count, quad_vertex_count
from .vertex import Vertex, VertexLike

__all__ = [
    "CornerMask",
    "QuadMesh",
    "INTERLEAVED_STRIDE",
    "QuadParams",
    "QuadParamsError",
    "quad_vertex_count",
    "quad_triangle_count",
    "Vertex",
    "VertexLike",
]
