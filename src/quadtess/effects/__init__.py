"""
どこで: `quadtess.effects` パッケージ。
何を: 生成済み頂点バッファへの後処理（現状は移行用の `apply_deformation` のみ）。
"""

from .deformation import apply_deformation

__all__ = ["apply_deformation"]
