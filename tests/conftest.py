"""共通フィクスチャ。

- 設定/インデックスキャッシュの初期化
- 代表的なパラメータ（Scenario A/B）
"""

from __future__ import annotations

from typing import Iterator

import pytest

from quadtess.common import settings
from quadtess.engine.core.params import QuadParams
from quadtess.shapes.quad_indices import clear_indices_cache


@pytest.fixture(autouse=True)
def fresh_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """`QTS_*` を外し、設定とインデックスキャッシュを既定に戻す。"""
    for name in (
        "QTS_CONFIG",
        "QTS_INDICES_CACHE_ENABLED",
        "QTS_INDICES_CACHE_MAXSIZE",
        "QTS_INDICES_DEBUG",
        "QTS_LOG_LEVEL",
        "QTS_WARN_DEFORMATION",
    ):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env({})
    clear_indices_cache()
    yield
    settings.reload_from_env({})
    clear_indices_cache()


@pytest.fixture()
def params_grid() -> QuadParams:
    # Scenario A
    return QuadParams(size_x=2.0, size_y=2.0, num_verts_x=4, num_verts_y=4)


@pytest.fixture()
def params_rounded() -> QuadParams:
    # Scenario B
    return QuadParams(
        size_x=2.0, size_y=2.0, num_verts_x=4, num_verts_y=4, corner_radius=0.3, corner_verts=4
    )
