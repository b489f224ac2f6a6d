"""Application configuration.

``AppConfig`` gathers every tunable of the interactive session in one frozen
dataclass. :func:`default_config` fills it with per-user paths:
``$XDG_CONFIG_HOME/inventory_tui`` when that variable is set, otherwise
``~/.config/inventory_tui``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from inventory_tui.commands import HISTORY_TEMPLATES
from inventory_tui.events import DEFAULT_TICK_RATE

APP_DIR_NAME = "inventory_tui"
INVENTORY_FILE_NAME = "inventory.json"
LOG_FILE_NAME = "inventory_tui.log"


@dataclass(frozen=True)
class AppConfig:
    """Session configuration.

    Attributes:
        inventory_path: JSON file holding the inventory.
        log_path: Log file (the terminal itself is owned by the UI).
        tick_rate: Seconds between ticker events.
        history_templates: Lines the recall history starts with.
    """

    inventory_path: Path
    log_path: Path
    tick_rate: float = DEFAULT_TICK_RATE
    history_templates: Tuple[str, ...] = field(
        default_factory=lambda: tuple(HISTORY_TEMPLATES)
    )


def config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the per-user configuration directory for the application."""
    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_DIR_NAME


def default_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    directory = config_dir(environ)
    return AppConfig(
        inventory_path=directory / INVENTORY_FILE_NAME,
        log_path=directory / LOG_FILE_NAME,
    )
