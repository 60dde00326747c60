"""
どこで: `quadtess.engine.core` の値型。
何を: テッセレーション矩形のパラメータ `QuadParams` と、頂点数/三角形数の閉形式。
なぜ: 呼び出し側と生成側が同じ式で出力長を計算し、事前確保できるようにするため。

不変条件（違反時は `QuadParamsError`）:
- `size_x, size_y >= 0`
- `corner_radius >= 0`（実際に使う半径は `min(size_x, size_y) / 2` で頭打ち）
- `corner_verts >= 0`
- `corner_verts > 0` なら `num_verts_x, num_verts_y >= 4`（各軸 2 本をタブ列に予約）
- `corner_verts == 0` なら `num_verts_x, num_verts_y >= 2`、かつ `corner_radius == 0`
- `corner_mask` は 4 ビット（`0..15`）。整数で渡された場合は `CornerMask` へ正規化する
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

from .corner_mask import CornerMask


class QuadParamsError(ValueError):
    """テッセレーション矩形のパラメータが不正。"""


def quad_vertex_count(num_verts_x: int, num_verts_y: int, corner_verts: int) -> int:
    """生成される頂点数（閉形式）。

    角丸ありの場合は内部格子に加えて、四隅の円弧 `corner_verts` 個ずつと、
    四辺のタブ列（内部格子の行/列数ぶん）が加わる。
    """
    if corner_verts > 0:
        ix = num_verts_x - 2
        iy = num_verts_y - 2
        return ix * iy + 4 * corner_verts + 2 * ix + 2 * iy
    return num_verts_x * num_verts_y


def quad_triangle_count(num_verts_x: int, num_verts_y: int, corner_verts: int) -> int:
    """インデックス列が表す三角形数（閉形式）。"""
    if corner_verts > 0:
        ix = num_verts_x - 2
        iy = num_verts_y - 2
        # 列間ストリップ（タブ行込み）+ 左右タブ列 + 四隅のファン
        return 2 * (ix - 1) * (iy + 1) + 4 * (iy - 1) + 4 * corner_verts
    return 2 * (num_verts_x - 1) * (num_verts_y - 1)


def validate_counts(num_verts_x: int, num_verts_y: int, corner_verts: int) -> None:
    """頂点数まわりの不変条件を検証する（サイズ非依存、インデックス生成と共有）。"""
    if corner_verts > 0:
        if num_verts_x < 4 or num_verts_y < 4:
            raise QuadParamsError(
                "角丸にはタブ列用に各軸 4 頂点以上が必要です: "
                f"num_verts_x={num_verts_x}, num_verts_y={num_verts_y}"
            )
    elif corner_verts == 0:
        if num_verts_x < 2 or num_verts_y < 2:
            raise QuadParamsError(
                "各軸 2 頂点以上が必要です: "
                f"num_verts_x={num_verts_x}, num_verts_y={num_verts_y}"
            )
    else:
        raise QuadParamsError(f"corner_verts は 0 以上である必要があります: {corner_verts}")


@dataclass(frozen=True)
class QuadParams:
    """テッセレーション矩形の生成パラメータ。

    Attributes
    ----------
    size_x, size_y : float
        矩形の幅/高さ。原点中心に `-size/2 .. size/2` へ配置される。
    num_verts_x, num_verts_y : int
        各軸の頂点数。角丸ありの場合は 2 本ずつタブ列に使われる。
    corner_radius : float
        角丸半径。
    corner_verts : int
        1 つの角の円弧に置く頂点数。0 で角丸なし。
    corner_mask : CornerMask
        丸める角の集合。外れた角は直角に戻るが、頂点数/順序は変わらない。
    """

    size_x: float
    size_y: float
    num_verts_x: int
    num_verts_y: int
    corner_radius: float = 0.0
    corner_verts: int = 0
    corner_mask: CornerMask = CornerMask.ALL

    def __post_init__(self) -> None:
        mask = self.corner_mask
        if isinstance(mask, CornerMask) or not isinstance(mask, Integral):
            return
        # 範囲外は validate() で拒否する
        if 0 <= int(mask) <= int(CornerMask.ALL):
            object.__setattr__(self, "corner_mask", CornerMask(int(mask)))

    @property
    def rounded(self) -> bool:
        return self.corner_verts > 0

    @property
    def effective_corner_radius(self) -> float:
        """実際の計算に使う半径（`min(size_x, size_y) / 2` で頭打ち）。"""
        return min(float(self.corner_radius), min(float(self.size_x), float(self.size_y)) / 2.0)

    @property
    def num_interior_x(self) -> int:
        return self.num_verts_x - 2 if self.rounded else self.num_verts_x

    @property
    def num_interior_y(self) -> int:
        return self.num_verts_y - 2 if self.rounded else self.num_verts_y

    def vertex_count(self) -> int:
        return quad_vertex_count(self.num_verts_x, self.num_verts_y, self.corner_verts)

    def triangle_count(self) -> int:
        return quad_triangle_count(self.num_verts_x, self.num_verts_y, self.corner_verts)

    def validate(self) -> None:
        """不変条件を検証する。

        Raises
        ------
        QuadParamsError
            いずれかの不変条件に違反した場合。
        """
        if self.size_x < 0.0 or self.size_y < 0.0:
            raise QuadParamsError(
                f"矩形サイズは 0 以上である必要があります: size=({self.size_x}, {self.size_y})"
            )
        if self.corner_radius < 0.0:
            raise QuadParamsError(
                f"corner_radius は 0 以上である必要があります: {self.corner_radius}"
            )
        mask = self.corner_mask
        if not isinstance(mask, CornerMask) or not 0 <= int(mask) <= int(CornerMask.ALL):
            raise QuadParamsError(
                f"corner_mask は 0..{int(CornerMask.ALL)} の範囲である必要があります: {self.corner_mask!r}"
            )
        validate_counts(self.num_verts_x, self.num_verts_y, self.corner_verts)
        if self.corner_verts == 0 and self.corner_radius > 0.0:
            # 角ジオメトリ無しで内部格子だけが縮み、余白が空くため呼び出し側の誤りとして扱う
            raise QuadParamsError(
                "corner_verts == 0 のとき corner_radius は 0 である必要があります: "
                f"{self.corner_radius}"
            )


__all__ = [
    "QuadParams",
    "QuadParamsError",
    "quad_vertex_count",
    "quad_triangle_count",
    "validate_counts",
]
