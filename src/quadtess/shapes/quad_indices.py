"""
どこで: `quadtess.shapes` のインデックス生成。
何を: `shapes.quad` の頂点並びに対応する三角形リスト（uint32）を生成する。
なぜ: 位置に依存せず頂点数/トポロジだけから描画用インデックスを決め、LRU で再利用するため。

トポロジ（+Z 側から見てすべて反時計回り）:
- 隣接する列どうし（上下タブ行を含む）を 1 セル 2 三角形のストリップで結ぶ。
- 角丸ありでは、左右タブ列と最初/最後の内部列もストリップで結ぶ。
- 各角は内部矩形の角頂点を中心とするファン `[隣接タブ, 円弧0, ..., 円弧n-1]`。
  最後の円弧頂点はもう一方の隣接タブと同じ位置/UV にあるため隙間は生じない。
- `corner_verts == 0` ではファンは作らず、格子ストリップだけで矩形全体を覆う。

列優先の番地（角丸あり, iy = 内部行数, column = iy + 2）:

    左タブ L(y)      = y
    下タブ B(x)      = iy + x * column
    内部   I(x, y)   = iy + x * column + 1 + y
    上タブ T(x)      = iy + x * column + column - 1
    右タブ R(y)      = iy + ix * column + y
    円弧   F(i, s)   = 2 * iy + ix * column + 4 * i + s   （s: 左下, 左上, 右下, 右上）
"""

from __future__ import annotations

import logging
from collections import OrderedDict

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from quadtess.common.settings import get as _get_settings
from quadtess.engine.core.params import QuadParamsError, quad_triangle_count, validate_counts

logger = logging.getLogger(__name__)


@njit(cache=True)
def _fill_strip(a0: int, b0: int, cells: int, out: np.ndarray, cursor: int) -> int:
    """2 本の連続した頂点列 `a0..`（左）と `b0..`（右）の間を三角形で埋める。"""
    for k in range(cells):
        a = a0 + k
        b = b0 + k
        c = b + 1
        d = a + 1
        out[cursor] = a
        out[cursor + 1] = b
        out[cursor + 2] = c
        out[cursor + 3] = a
        out[cursor + 4] = c
        out[cursor + 5] = d
        cursor += 6
    return cursor


@njit(cache=True)
def _fill_grid(num_columns: int, column: int, first: int, out: np.ndarray, cursor: int) -> int:
    for x in range(num_columns - 1):
        base = first + x * column
        cursor = _fill_strip(base, base + column, column - 1, out, cursor)
    return cursor


@njit(cache=True)
def _fill_fan(
    anchor: int, tab: int, first_arc: int, step: int, count: int, out: np.ndarray, cursor: int
) -> int:
    """円弧は時計回りに進むため (anchor, 次, 前) の順で反時計回りにする。"""
    prev = tab
    for i in range(count):
        cur = first_arc + i * step
        out[cursor] = anchor
        out[cursor + 1] = cur
        out[cursor + 2] = prev
        cursor += 3
        prev = cur
    return cursor


def _compute_indices(num_verts_x: int, num_verts_y: int, corner_verts: int) -> np.ndarray:
    total = 3 * quad_triangle_count(num_verts_x, num_verts_y, corner_verts)
    out = np.empty(total, dtype=np.uint32)
    if corner_verts <= 0:
        cursor = _fill_grid(num_verts_x, num_verts_y, 0, out, 0)
    else:
        ix = num_verts_x - 2
        iy = num_verts_y - 2
        column = iy + 2
        first = iy  # 左タブ列の直後が最初の内部列
        last = first + (ix - 1) * column  # 最後の内部列の下タブ
        right = first + ix * column
        fans = right + iy

        cursor = _fill_grid(ix, column, first, out, 0)
        # 左タブ列 | 最初の内部列
        cursor = _fill_strip(0, first + 1, iy - 1, out, cursor)
        # 最後の内部列 | 右タブ列
        cursor = _fill_strip(last + 1, right, iy - 1, out, cursor)

        # (anchor, 開始側タブ) を FAN_ORDER（左下, 左上, 右下, 右上）の順で
        corners = (
            (first + 1, first),
            (first + iy, iy - 1),
            (last + 1, right),
            (last + iy, last + column - 1),
        )
        for slot, (anchor, tab) in enumerate(corners):
            cursor = _fill_fan(anchor, tab, fans + slot, 4, corner_verts, out, cursor)

    assert cursor == total, f"Failed to fill indices array: wrote {cursor} of {total}"
    return out


# ---- Indices LRU（頂点数キー） ----
_INDICES_CACHE: "OrderedDict[tuple[int, int, int], np.ndarray]" = OrderedDict()
_IND_COUNTERS: dict[str, int] = {"hits": 0, "misses": 0, "stores": 0, "evicts": 0}


def build_quad_indices(num_verts_x: int, num_verts_y: int, corner_verts: int) -> np.ndarray:
    """三角形インデックス（`(3T,) uint32`、読み取り専用）を返す。

    Raises
    ------
    QuadParamsError
        頂点数が不変条件に違反する場合。
    """
    validate_counts(num_verts_x, num_verts_y, corner_verts)
    settings = _get_settings()
    key = (int(num_verts_x), int(num_verts_y), int(corner_verts))

    if settings.INDICES_CACHE_ENABLED:
        cached = _INDICES_CACHE.get(key)
        if cached is not None:
            _INDICES_CACHE.move_to_end(key)
            _IND_COUNTERS["hits"] += 1
            return cached
        _IND_COUNTERS["misses"] += 1
        if settings.INDICES_DEBUG:
            logger.debug("Indices cache miss: %s", key)

    indices = _compute_indices(*key)
    indices.setflags(write=False)

    if settings.INDICES_CACHE_ENABLED:
        maxsize = settings.INDICES_CACHE_MAXSIZE
        if maxsize is None or maxsize > 0:
            _INDICES_CACHE[key] = indices
            _IND_COUNTERS["stores"] += 1
            while maxsize is not None and len(_INDICES_CACHE) > maxsize:
                _INDICES_CACHE.popitem(last=False)
                _IND_COUNTERS["evicts"] += 1
    return indices


def calculate_tesselated_quad_indices(
    num_verts_x: int, num_verts_y: int, corner_verts: int
) -> np.ndarray:
    """`calculate_tesselated_quad_vertices` の頂点列を三角形で描くためのインデックス列。

    不正な頂点数では CRITICAL でログを出し、空配列を返す。
    """
    try:
        return build_quad_indices(num_verts_x, num_verts_y, corner_verts)
    except QuadParamsError as e:
        logger.critical("Failed to build quad indices: %s", e)
        return np.empty((0,), dtype=np.uint32)


def get_indices_cache_counters() -> dict[str, int | bool]:
    """キャッシュ統計のスナップショット。"""
    settings = _get_settings()
    return {
        **_IND_COUNTERS,
        "size": len(_INDICES_CACHE),
        "enabled": bool(settings.INDICES_CACHE_ENABLED),
    }


def clear_indices_cache() -> None:
    """キャッシュと統計をクリア（テスト用）。"""
    _INDICES_CACHE.clear()
    for name in _IND_COUNTERS:
        _IND_COUNTERS[name] = 0


__all__ = [
    "build_quad_indices",
    "calculate_tesselated_quad_indices",
    "get_indices_cache_counters",
    "clear_indices_cache",
]
