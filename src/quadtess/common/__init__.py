"""
どこで: `quadtess.common` パッケージ。
何を: 設定/環境変数/ロギング/型エイリアスなどの軽量な共通基盤。
なぜ: 生成コア（engine/shapes/effects）から再利用する基盤を分離し、依存の向きを単純化するため。
"""

from .logging import setup_default_logging
from .types import Vec2, Vec3

__all__ = [
    "setup_default_logging",
    "Vec2",
    "Vec3",
]
