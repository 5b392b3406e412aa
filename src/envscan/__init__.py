# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envscan -- parse .env files with an explicit grammar state machine."""

from envscan.parser import FormatError, Parser, State, parse
from envscan.sdk import dotenv_values, load_dotenv

__all__ = [
    "__version__",
    "FormatError",
    "Parser",
    "State",
    "dotenv_values",
    "load_dotenv",
    "parse",
]
__version__ = "0.1.0"
