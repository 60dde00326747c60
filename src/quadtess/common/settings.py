"""
どこで: `quadtess.common.settings`
何を: 設定値を型付きで一元管理する。import 時は環境変数（`QTS_*`）だけを適用する。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

YAML 構成は `reload(root)`（または `reload_from_env(load_config(...))`）を呼んだときだけ反映する。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .config import load_config
from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Index builder LRU
    INDICES_CACHE_ENABLED: bool = True
    INDICES_CACHE_MAXSIZE: int | None = 64
    INDICES_DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Deformation（移行用 API の警告）
    WARN_DEFORMATION: bool = True


_settings = _Settings()


def _apply_mapping(values: Mapping[str, Any]) -> None:
    """YAML の `settings:` セクションを適用する（未知キー/型不一致は無視）。"""
    defaults = _Settings()
    for key, raw in values.items():
        name = str(key).upper()
        if not hasattr(defaults, name):
            continue
        current = getattr(defaults, name)
        if isinstance(current, bool):
            if isinstance(raw, bool):
                setattr(_settings, name, raw)
        elif isinstance(current, int) or current is None:
            if raw is None or (isinstance(raw, int) and not isinstance(raw, bool)):
                setattr(_settings, name, raw)
        elif isinstance(current, str):
            if isinstance(raw, str):
                setattr(_settings, name, raw)


def reload_from_env(config: Mapping[str, Any] | None = None) -> None:
    """設定を再読込。

    - まず既定値に戻し、`config` が与えられればその `settings:` を適用（省略時は YAML を読まない）。
    - その後 `QTS_*` 環境変数で上書きする。bool は `env_bool`、int は `env_int`。
    - キャッシュ上限は下限 0 に丸める。
    """
    defaults = _Settings()
    for name in defaults.__dataclass_fields__:
        setattr(_settings, name, getattr(defaults, name))

    cfg = config if config is not None else {}
    section = cfg.get("settings") if isinstance(cfg, Mapping) else None
    if isinstance(section, Mapping):
        _apply_mapping(section)

    _settings.INDICES_CACHE_ENABLED = env_bool(
        "QTS_INDICES_CACHE_ENABLED", _settings.INDICES_CACHE_ENABLED
    )
    _settings.INDICES_CACHE_MAXSIZE = env_int(
        "QTS_INDICES_CACHE_MAXSIZE", _settings.INDICES_CACHE_MAXSIZE
    )
    if _settings.INDICES_CACHE_MAXSIZE is not None and _settings.INDICES_CACHE_MAXSIZE < 0:
        _settings.INDICES_CACHE_MAXSIZE = 0
    _settings.INDICES_DEBUG = env_bool("QTS_INDICES_DEBUG", _settings.INDICES_DEBUG)

    level = env_str("QTS_LOG_LEVEL", _settings.LOG_LEVEL)
    _settings.LOG_LEVEL = (level or "INFO").upper()

    _settings.WARN_DEFORMATION = env_bool("QTS_WARN_DEFORMATION", _settings.WARN_DEFORMATION)


def reload(root: Path | str | None = None) -> None:
    """`load_config(root)` の YAML を適用してから環境変数で上書きする。"""
    reload_from_env(load_config(root))


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード（環境変数のみ）
reload_from_env()


__all__ = ["get", "reload", "reload_from_env", "_Settings"]
