"""
どこで: `quadtess.common` の型定義。
何を: Vec2/Vec3 などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


__all__ = ["Vec2", "Vec3"]
