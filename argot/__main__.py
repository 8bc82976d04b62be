"""
Argot CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Runs the application declared in the nearest `argot.yaml` / `argot.toml`:

    python -m argot greet Ada
"""

import os
import sys
from pathlib import Path
from typing import Any

from rich.markup import escape

from argot.config import loader
from argot.console import console
from argot.exceptions import ConfigError
from argot.utils import setup_logging

CONFIG_NAMES = ("argot.yaml", "argot.toml", ".argot.yaml", ".argot.toml")


def find_argot_config() -> Path | None:
    candidates = [Path.cwd() / name for name in CONFIG_NAMES]
    if os.environ.get("ARGOT_CONFIG"):
        candidates.append(Path(os.environ["ARGOT_CONFIG"]))
    candidates += [
        Path.home() / ".config" / "argot" / "argot.yaml",
        Path.home() / ".config" / "argot" / "argot.toml",
        Path.home() / ".argot.yaml",
        Path.home() / ".argot.toml",
    ]
    return next((path for path in candidates if path.is_file()), None)


def bootstrap() -> Path | None:
    config_path = find_argot_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(argv: list[str] | None = None) -> Any:
    setup_logging()
    config_path = bootstrap()
    if not config_path:
        console.print(
            "[error]No argot.yaml or argot.toml found.[/] "
            "Create one in the current directory or set ARGOT_CONFIG."
        )
        sys.exit(1)
    try:
        app = loader(config_path)
    except ConfigError as error:
        console.print(f"[error]Error:[/]\n    {escape(str(error))}")
        sys.exit(1)
    if not app.settings.autorun:
        return None
    return app.main(argv)


if __name__ == "__main__":
    main()
