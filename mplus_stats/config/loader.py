# -*- coding: utf-8 -*-
"""Settings resolution: explicit argument > environment > conf/settings.ini > default."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "conf" / "settings.ini"

DEFAULT_VARIABLE = "MythicPlusStatsDB"
DEFAULT_OUTER_KEY = "runsById"
DEFAULT_RUN_ID_FIELD = "runId"
DEFAULT_FLAVOR = "_retail_"
SAVED_VARIABLES_FILE = "MythicPlusStats.lua"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class StatsConfig:
    wow_root: Optional[Path] = None
    flavor: str = DEFAULT_FLAVOR
    account: Optional[str] = None
    saved_variables: Optional[Path] = None
    variable: str = DEFAULT_VARIABLE
    outer_key: str = DEFAULT_OUTER_KEY
    run_id_field: str = DEFAULT_RUN_ID_FIELD
    strict: bool = False
    config_path: Optional[Path] = None

    @property
    def saved_variables_path(self) -> Optional[Path]:
        """Explicit file, else <WOW_ROOT>/<FLAVOR>/WTF/Account/<ACCOUNT>/SavedVariables/MythicPlusStats.lua."""
        if self.saved_variables:
            return self.saved_variables
        if not self.wow_root or not self.account:
            return None
        return self.wow_root / self.flavor / "WTF" / "Account" / self.account / "SavedVariables" / SAVED_VARIABLES_FILE

    def with_overrides(self, **kwargs) -> "StatsConfig":
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def _expand(val: Optional[str]) -> Optional[str]:
    if not val:
        return None
    return os.path.expanduser(val.strip())


def _cfg_get(cfg: configparser.ConfigParser, section: str, key: str) -> Optional[str]:
    val = cfg.get(section, key, fallback="").strip()
    return val or None


def _parse_bool(raw: Optional[str], name: str) -> Optional[bool]:
    if raw is None:
        return None
    r = raw.strip().lower()
    if r in _TRUE:
        return True
    if r in _FALSE:
        return False
    raise ValueError(f"{name}: not a boolean: {raw!r}")


def load_ini(path: Path) -> configparser.ConfigParser:
    """Read settings.ini; a missing file yields an empty parser (defaults apply)."""
    cfg = configparser.ConfigParser()
    if path.exists():
        cfg.read(path, encoding="utf-8")
    return cfg


def resolve_config(
    *,
    config_path: Path = DEFAULT_CONFIG_PATH,
    wow_root: Optional[str] = None,
    flavor: Optional[str] = None,
    account: Optional[str] = None,
    saved_variables: Optional[str] = None,
    variable: Optional[str] = None,
    outer_key: Optional[str] = None,
    run_id_field: Optional[str] = None,
    strict: Optional[bool] = None,
) -> StatsConfig:
    cfg = load_ini(config_path)
    env = os.environ

    wow_root = wow_root or env.get("MPLUS_WOW_ROOT") or _cfg_get(cfg, "PATHS", "WOW_ROOT")
    flavor = flavor or env.get("MPLUS_FLAVOR") or _cfg_get(cfg, "PATHS", "FLAVOR") or DEFAULT_FLAVOR
    account = account or env.get("MPLUS_ACCOUNT") or _cfg_get(cfg, "PATHS", "ACCOUNT")
    saved_variables = (
        saved_variables or env.get("MPLUS_SAVED_VARIABLES") or _cfg_get(cfg, "PATHS", "SAVED_VARIABLES")
    )
    variable = variable or env.get("MPLUS_VARIABLE") or _cfg_get(cfg, "PARSER", "VARIABLE") or DEFAULT_VARIABLE
    outer_key = outer_key or env.get("MPLUS_OUTER_KEY") or _cfg_get(cfg, "PARSER", "OUTER_KEY") or DEFAULT_OUTER_KEY
    run_id_field = (
        run_id_field or env.get("MPLUS_RUN_ID_FIELD") or _cfg_get(cfg, "PARSER", "RUN_ID_FIELD") or DEFAULT_RUN_ID_FIELD
    )
    if strict is None:
        strict = _parse_bool(env.get("MPLUS_STRICT"), "MPLUS_STRICT")
    if strict is None:
        strict = _parse_bool(_cfg_get(cfg, "PARSER", "STRICT"), "PARSER/STRICT")

    wow_root = _expand(wow_root)
    saved_variables = _expand(saved_variables)

    return StatsConfig(
        wow_root=Path(wow_root) if wow_root else None,
        flavor=str(flavor),
        account=str(account) if account else None,
        saved_variables=Path(saved_variables) if saved_variables else None,
        variable=str(variable),
        outer_key=str(outer_key),
        run_id_field=str(run_id_field),
        strict=bool(strict),
        config_path=config_path if config_path.exists() else None,
    )
