# -*- coding: utf-8 -*-
"""Output renderers for projected runs."""

from mplus_stats.render.runs_json import dumps_runs, render_runs_json

__all__ = ["dumps_runs", "render_runs_json"]
