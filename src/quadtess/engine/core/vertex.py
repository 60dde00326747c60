"""
どこで: `quadtess.engine.core` の頂点契約。
何を: 生成コアが要求する書き込み専用の頂点プロトコル `VertexLike` と、既定実装 `Vertex`。
なぜ: 頂点の残りのレイアウト（法線/色など）に依存せず、位置と UV だけを書き込むため。

生成コアは頂点フィールドを読まない。`set_position` と `set_tex_coord` を持つ
任意の型（ctypes 構造体、numpy 行ラッパ等）をそのまま使える。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, TypeVar, runtime_checkable

from quadtess.common.types import Vec2, Vec3


@runtime_checkable
class VertexLike(Protocol):
    """位置（3D）と UV（2D）を書き込める頂点。"""

    def set_position(self, x: float, y: float, z: float) -> None: ...

    def set_tex_coord(self, u: float, v: float) -> None: ...


V = TypeVar("V", bound=VertexLike)
VertexFactory = Callable[[], V]


@dataclass(slots=True)
class Vertex:
    """位置と UV だけを持つ既定の頂点レコード。"""

    position: Vec3 = (0.0, 0.0, 0.0)
    tex_coord: Vec2 = (0.0, 0.0)

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = (float(x), float(y), float(z))

    def set_tex_coord(self, u: float, v: float) -> None:
        self.tex_coord = (float(u), float(v))


__all__ = ["VertexLike", "VertexFactory", "Vertex", "V"]
