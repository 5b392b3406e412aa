# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SDK for loading .env files into the environment (python-dotenv style)."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from envscan.config import EnvscanConfig, load_config
from envscan.env_file import parse_env_file
from envscan.substitutions import Substitution, SubstitutionSpec, build_substitutions

logger = logging.getLogger(__name__)


def _resolve_paths(paths: str | Path | Iterable[str | Path] | None, cfg: EnvscanConfig) -> list[Path]:
    if paths is None:
        return cfg.resolve_files()
    if isinstance(paths, (str, Path)):
        return [Path(paths)]
    return [Path(p) for p in paths]


def _resolve_substitutions(
    substitutions: Sequence[SubstitutionSpec] | None,
    cfg: EnvscanConfig,
) -> list[Substitution]:
    if substitutions is None:
        return build_substitutions(cfg.substitutions)
    return build_substitutions(substitutions)


def dotenv_values(
    paths: str | Path | Iterable[str | Path] | None = None,
    substitutions: Sequence[SubstitutionSpec] | None = None,
    missing_ok: bool = True,
    encoding: str | None = None,
    config: EnvscanConfig | None = None,
) -> dict[str, str]:
    """Parse one or more .env files and return the merged values.

    Each file is parsed on its own; when several files set the same key the
    earliest file wins.  Nothing is written to ``os.environ``.

    Parameters
    ----------
    paths : str, Path or iterable of them, optional
        Files to read, in precedence order. Defaults from ENVSCAN_FILES or
        ``.envscan.toml``, else ``.env``.
    substitutions : sequence of str or Substitution, optional
        Handler names (e.g. ``"variable"``) or instances, applied in order.
        Defaults from ENVSCAN_SUBSTITUTIONS or config, else variable then
        command. Pass ``[]`` to get raw values.
    missing_ok : bool, default True
        Skip files that do not exist. If False, raise ``FileNotFoundError``.
    encoding : str, optional
        File encoding. Defaults from config, else utf-8.

    Raises
    ------
    FormatError
        A file is not valid .env syntax.
    """
    cfg = config or load_config()
    handlers = _resolve_substitutions(substitutions, cfg)
    merged: dict[str, str] = {}
    for path in _resolve_paths(paths, cfg):
        if not path.is_file():
            if not missing_ok:
                raise FileNotFoundError(f"Env file not found: {path}")
            logger.debug("skipping missing env file %s", path)
            continue
        values = parse_env_file(path, handlers, encoding=encoding or cfg.encoding)
        for key, value in values.items():
            merged.setdefault(key, value)
    return merged


def load_dotenv(
    paths: str | Path | Iterable[str | Path] | None = None,
    override: bool | None = None,
    substitutions: Sequence[SubstitutionSpec] | None = None,
    missing_ok: bool = True,
    encoding: str | None = None,
    config: EnvscanConfig | None = None,
) -> bool:
    """Load .env values into os.environ.

    With ``override`` False (the default unless ENVSCAN_OVERRIDE or config say
    otherwise) variables already present in the environment are kept.

    Returns
    -------
    bool
        True if at least one variable was set, False otherwise.

    Examples
    --------
    >>> from envscan import load_dotenv
    >>> load_dotenv()  # .env, or whatever .envscan.toml lists
    True
    >>> load_dotenv([".env.local", ".env"], override=True)
    True
    """
    cfg = config or load_config()
    if override is None:
        override = cfg.override
    values = dotenv_values(
        paths, substitutions=substitutions, missing_ok=missing_ok,
        encoding=encoding, config=cfg,
    )
    count = 0
    for key, value in values.items():
        if key in os.environ and not override:
            logger.debug("%s already set, not overriding", key)
            continue
        os.environ[key] = value
        count += 1
    logger.debug("set %d of %d variable(s)", count, len(values))
    return count > 0
