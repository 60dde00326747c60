"""
どこで: `quadtess.common.config`
何を: YAML 構成の読み込み。同梱既定値 → 明示ルート（引数 or `QTS_CONFIG`）の順に重ねる。
なぜ: ライブラリとして組み込まれた先のプロジェクト構成を暗黙に拾わないため。

探索はしない。参照するのは次の 3 か所だけ:
1) 同梱 `quadtess/configs/default.yaml`
2) `root`（省略時は `QTS_CONFIG`）がディレクトリなら `root/configs/default.yaml` → `root/config.yaml`
3) `QTS_CONFIG` が YAML ファイルならそのファイル
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator

import yaml

from .env import env_str

BUNDLED_DEFAULTS = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


def _read_mapping(path: Path) -> Dict[str, Any]:
    """YAML を読み、トップレベルがマッピングならそれを返す（欠落/不正は空辞書）。"""
    if not path.is_file():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _override_paths(root: Path | str | None) -> Iterator[Path]:
    if root is None:
        root = env_str("QTS_CONFIG")
        if root is None:
            return
    target = Path(root).expanduser()
    if target.is_dir():
        yield target / "configs" / "default.yaml"
        yield target / "config.yaml"
    else:
        yield target


def load_config(root: Path | str | None = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す（フェイルソフト）。

    - `root` を省略し `QTS_CONFIG` も未設定なら、同梱既定値だけを返す。
    - 上書きはトップレベル単位（ネストのディープマージはしない）。
    """
    merged = _read_mapping(BUNDLED_DEFAULTS)
    for path in _override_paths(root):
        merged.update(_read_mapping(path))
    return merged


__all__ = ["BUNDLED_DEFAULTS", "load_config"]
