from pathlib import Path

from inventory_tui.commands import HISTORY_TEMPLATES
from inventory_tui.config import config_dir, default_config


def test_xdg_config_home_is_respected(tmp_path: Path) -> None:
    env = {"XDG_CONFIG_HOME": str(tmp_path)}
    assert config_dir(env) == tmp_path / "inventory_tui"
    config = default_config(env)
    assert config.inventory_path == tmp_path / "inventory_tui" / "inventory.json"
    assert config.log_path.parent == tmp_path / "inventory_tui"


def test_falls_back_to_home_config() -> None:
    assert config_dir({}) == Path.home() / ".config" / "inventory_tui"


def test_defaults() -> None:
    config = default_config({})
    assert config.tick_rate == 0.1
    assert list(config.history_templates) == HISTORY_TEMPLATES
