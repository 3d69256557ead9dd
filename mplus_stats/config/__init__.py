# -*- coding: utf-8 -*-
from mplus_stats.config.loader import DEFAULT_CONFIG_PATH, StatsConfig, load_ini, resolve_config

__all__ = ["DEFAULT_CONFIG_PATH", "StatsConfig", "load_ini", "resolve_config"]
