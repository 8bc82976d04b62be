"""
Argot CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .argot import Argot
from .command import Command
from .context import RunContext
from .hook_manager import HookManager, HookType
from .param_types import ParamType
from .parameter import Flag, Option, Parameter
from .settings import Settings
from .version import __version__

logger = logging.getLogger("argot")


__all__ = [
    "Argot",
    "Command",
    "Flag",
    "HookManager",
    "HookType",
    "Option",
    "ParamType",
    "Parameter",
    "RunContext",
    "Settings",
    "__version__",
]
