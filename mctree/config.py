"""YAML configuration for search and session settings."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from mctree.mcts import SearchConfig
from mctree.selfplay import SessionConfig


def load_yaml_config(path: Union[str, Path, None]) -> Dict[str, Any]:
    """Load a YAML mapping; a missing path yields an empty config."""
    if path is None:
        return {}
    path = Path(path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level.")
    return data


def _known_keys(cls: type, values: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(values) - names
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return dict(values)


def search_config_from_dict(values: Optional[Mapping[str, Any]]) -> SearchConfig:
    config = SearchConfig(**_known_keys(SearchConfig, values or {}))
    if config.num_playouts < 1:
        raise ValueError("num_playouts must be at least 1.")
    if config.search_steps < 0:
        raise ValueError("search_steps must not be negative.")
    return config


def session_config_from_dict(values: Optional[Mapping[str, Any]]) -> SessionConfig:
    values = _known_keys(SessionConfig, values or {})
    if "playing_for" in values:
        values["playing_for"] = set(values["playing_for"] or ())
    return SessionConfig(**values)
