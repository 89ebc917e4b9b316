"""Test configuration and fixtures."""
import os
import tempfile
from pathlib import Path

import pytest
import yaml

from termkit.core.keys import ScriptedKeySource
from termkit.core.line_editor import LineEditor
from termkit.core.markup import MarkupRenderer
from termkit.core.palette import Palette
from termkit.core.screen import MemoryScreen
from termkit.menu.core import MenuNavigator
from termkit.menu.dialogs import Dialogs


@pytest.fixture
def screen():
    """An 80 column in-memory screen."""
    return MemoryScreen(width=80)


@pytest.fixture
def renderer(screen):
    return MarkupRenderer(screen)


@pytest.fixture
def keys():
    """Scripted key source; tests feed it before prompting."""
    return ScriptedKeySource()


@pytest.fixture
def editor(renderer, keys):
    return LineEditor(renderer, keys, poll_interval=0.001)


@pytest.fixture
def make_navigator(renderer, editor):
    """Factory for navigators with a chosen elevation and settings."""

    def factory(elevated=True, settings=None):
        return MenuNavigator(renderer, editor, Palette(), settings, elevated=lambda: elevated)

    return factory


@pytest.fixture
def navigator(make_navigator):
    return make_navigator()


@pytest.fixture
def dialogs(navigator):
    return Dialogs(navigator)


@pytest.fixture
def temp_config_dir():
    """Create a temporary directory for config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        old_dir = os.getcwd()
        os.chdir(tmpdir)
        yield Path(tmpdir)
        os.chdir(old_dir)


@pytest.fixture
def mock_termkit_yaml(temp_config_dir):
    """Create a termkit.yaml with non-default values."""
    config = {
        "menu": {"indent": "  ", "start_index": 0, "max_item_count": 50},
        "input": {"poll_interval_ms": 20},
        "colors": {"menu_select": "Cyan", "error": "DarkRed"},
    }

    config_file = temp_config_dir / "termkit.yaml"
    with config_file.open("w") as f:
        yaml.safe_dump(config, f)

    return config_file


@pytest.fixture
def mock_menu_yaml(temp_config_dir):
    """Create a small menu definition with an escape item."""
    menu = {
        "title": "Deploy",
        "prompt": "Target",
        "default": "s",
        "items": [
            {"key": "p", "text": "[Red]Production[/]", "tag": "prod"},
            {"key": "s", "text": "Staging", "tag": "staging"},
            {"text": "Development"},
            {"separator": True, "text": "----"},
            {"key": "Esc", "text": "Cancel"},
        ],
    }

    menu_file = temp_config_dir / "menu.yaml"
    with menu_file.open("w") as f:
        yaml.safe_dump(menu, f)

    return menu_file
