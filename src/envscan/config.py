# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

""".envscan.toml configuration loading.

Searches upward from cwd for ``.envscan.toml``.  Values from the file are
overridden by ``ENVSCAN_*`` environment variables, which are in turn
overridden by explicit arguments (CLI flags or SDK parameters).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from envscan.substitutions import DEFAULT_SUBSTITUTIONS

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = ".envscan.toml"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class EnvscanConfig:
    """Resolved configuration for the current invocation."""

    files: list[str] = field(default_factory=lambda: [".env"])
    override: bool = False
    substitutions: list[str] = field(default_factory=lambda: list(DEFAULT_SUBSTITUTIONS))
    encoding: str = "utf-8"
    config_path: Path | None = None

    def resolve_files(self) -> list[Path]:
        """Files as paths; relative entries are relative to the config file's directory."""
        base = self.config_path.parent if self.config_path else None
        paths: list[Path] = []
        for name in self.files:
            p = Path(name)
            if base is not None and not p.is_absolute():
                p = base / p
            paths.append(p)
        return paths


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.envscan.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _apply_environ(cfg: EnvscanConfig, environ: Mapping[str, str]) -> EnvscanConfig:
    files = environ.get("ENVSCAN_FILES")
    if files:
        cfg.files = _split_list(files)
        cfg.config_path = None
    override = environ.get("ENVSCAN_OVERRIDE")
    if override is not None:
        cfg.override = override.strip().lower() in _TRUTHY
    subs = environ.get("ENVSCAN_SUBSTITUTIONS")
    if subs is not None:
        cfg.substitutions = _split_list(subs)
    encoding = environ.get("ENVSCAN_ENCODING")
    if encoding:
        cfg.encoding = encoding
    return cfg


def load_config(path: Path | None = None, use_environ: bool = True) -> EnvscanConfig:
    """Load and return config.  Returns defaults if no file found.

    Invalid TOML raises ``ValueError`` (``TOMLDecodeError`` subclasses it).
    """
    if path is None:
        path = find_config_file()
    if path is None:
        cfg = EnvscanConfig()
    else:
        raw: dict[str, Any] = tomllib.loads(path.read_text())
        section = raw.get("envscan", {})
        files = section.get("files", [".env"])
        if isinstance(files, str):
            files = [files]
        subs = section.get("substitutions", list(DEFAULT_SUBSTITUTIONS))
        if not isinstance(subs, list):
            raise ValueError(f"{path}: envscan.substitutions must be a list of names")
        cfg = EnvscanConfig(
            files=[str(f) for f in files],
            override=bool(section.get("override", False)),
            substitutions=[str(s) for s in subs],
            encoding=section.get("encoding", "utf-8"),
            config_path=path,
        )
    if use_environ:
        _apply_environ(cfg, os.environ)
    return cfg
