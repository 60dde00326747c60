"""
どこで: `quadtess.engine` パッケージ。
何を: 生成コアが共有する値型（`engine.core`）を収める。
"""
