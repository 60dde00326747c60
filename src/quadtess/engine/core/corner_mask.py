"""
どこで: `quadtess.engine.core` の値型。
何を: 四隅の集合を表すビットマスク `CornerMask`。
なぜ: 1 回の生成で角丸/直角を混在させる指定を、頂点数や並びを変えずに表現するため。

名前は -Z 方向を見下ろした向き（+X = 右, +Y = 上）に従う。
"""

from __future__ import annotations

from enum import IntFlag


class CornerMask(IntFlag):
    """四隅の集合（4 ビット）。

    `|`/`&` に加えて、読みやすさのために名前付きの集合演算も提供する。
    """

    NONE = 0
    TOP_RIGHT = 1 << 0
    BOTTOM_RIGHT = 1 << 1
    BOTTOM_LEFT = 1 << 2
    TOP_LEFT = 1 << 3
    ALL = TOP_RIGHT | BOTTOM_RIGHT | BOTTOM_LEFT | TOP_LEFT

    def union(self, other: CornerMask) -> CornerMask:
        """和集合。"""
        return CornerMask(int(self) | int(other))

    def intersection(self, other: CornerMask) -> CornerMask:
        """積集合。"""
        return CornerMask(int(self) & int(other))

    def intersects(self, other: CornerMask) -> bool:
        """共通する角が 1 つでもあれば True。"""
        return (int(self) & int(other)) != 0

    def contains(self, other: CornerMask) -> bool:
        """`other` のすべての角を含むなら True（`NONE` は常に含まれる）。"""
        return (int(self) & int(other)) == int(other)

    @classmethod
    def from_names(cls, *names: str) -> CornerMask:
        """`"top_left"` / `"TopLeft"` / `"top-left"` などの名前から生成する。

        Raises
        ------
        ValueError
            未知の角名が含まれる場合。
        """
        mask = cls.NONE
        for name in names:
            key = name.replace("-", "_")
            # キャメルケースのみスネークへ（"ALL"/"top_left" はそのまま）
            if "_" not in key and not key.isupper() and not key.islower():
                key = "".join("_" + c if c.isupper() else c for c in key).lstrip("_")
            try:
                mask = mask.union(cls[key.upper()])
            except KeyError:
                raise ValueError(f"未知の角名です: {name!r}") from None
        return mask


__all__ = ["CornerMask"]
