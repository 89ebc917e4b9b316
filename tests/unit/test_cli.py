import json
import time
from pathlib import Path

import pytest
import yaml

from termctl import cli
from termkit.core import config as config_module
from termkit.core.keys import Key, ScriptedKeySource
from termkit.core.screen import MemoryScreen
from termkit.toolkit import Toolkit

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def run(monkeypatch):
    """Run the CLI against a memory screen and scripted keys."""
    state = {}
    monkeypatch.delenv(config_module.ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "USER_CONFIG", Path("/nonexistent/termkit.yaml"))

    def fake_logging(verbose=False, log_file=None):
        state["logging"] = (verbose, log_file)

    monkeypatch.setattr(cli, "configure_logging", fake_logging)

    def runner(*argv, script=(), on_exhausted=None):
        keys = ScriptedKeySource(script, on_exhausted=on_exhausted)
        screen = MemoryScreen()

        def build_toolkit(config, stderr=True):
            state["stderr"] = stderr
            state["toolkit"] = Toolkit(config, screen=screen, keys=keys)
            return state["toolkit"]

        monkeypatch.setattr(cli, "build_toolkit", build_toolkit)
        state["screen"] = screen
        return cli.main(list(argv))

    runner.state = state
    return runner


def test_menu_prints_tag(run, mock_menu_yaml, capsys):
    assert run("menu", str(mock_menu_yaml), script=[Key.ENTER]) == 0
    assert capsys.readouterr().out == "staging\n"
    assert run.state["stderr"] is True
    assert "Deploy" in run.state["screen"].text()


def test_menu_prints_text_without_tag_or_key(run, mock_menu_yaml, capsys):
    assert run("menu", str(mock_menu_yaml), script=["1", Key.ENTER]) == 0
    assert capsys.readouterr().out == "Development\n"


def test_menu_escape_item_exits_1(run, mock_menu_yaml, capsys):
    assert run("menu", str(mock_menu_yaml), script=[Key.ESCAPE]) == 1
    assert capsys.readouterr().out == ""


def test_shipped_example_menu_selects_production(run, capsys):
    assert run("menu", str(REPO_ROOT / "configs" / "example_menu.yaml"), script=["p", Key.ENTER]) == 0
    assert capsys.readouterr().out == "prod\n"
    assert "requires administrative privileges" not in run.state["screen"].text()


def test_menu_without_escape_item(run, temp_config_dir):
    path = temp_config_dir / "plain.yaml"
    path.write_text(yaml.safe_dump({"items": [{"text": "Only"}]}))
    assert run("menu", str(path), script=[Key.ESCAPE]) == 1


def test_menu_invalid_definition(run, temp_config_dir, capsys):
    path = temp_config_dir / "bad.yaml"
    path.write_text(yaml.safe_dump({"items": [{"key": "a"}]}))
    assert run("menu", str(path)) == 2
    assert "Invalid menu definition" in capsys.readouterr().err


def test_menu_missing_file(run, temp_config_dir):
    assert run("menu", str(temp_config_dir / "nope.yaml")) == 2


def test_menu_timeout(run, mock_menu_yaml):
    code = run("menu", str(mock_menu_yaml), "--timeout", "0.05", on_exhausted=lambda: time.sleep(0.01))
    assert code == 124


@pytest.mark.parametrize(
    "script, code",
    [
        (["y", Key.ENTER], 0),
        (["n", Key.ENTER], 1),
        ([Key.ESCAPE], 3),
    ],
)
def test_ask(run, script, code):
    assert run("ask", "Proceed?", script=script) == code


def test_ask_default(run):
    assert run("ask", "Proceed?", "--default", "y", script=[Key.ENTER]) == 0
    assert "Proceed? [y|n|Esc] y" in run.state["screen"].text()


def test_ask_timeout(run):
    assert run("ask", "Proceed?", "--timeout", "0.05", on_exhausted=lambda: time.sleep(0.01)) == 124


def test_input(run, capsys):
    assert run("input", "Name", "--default", "anon", script=[Key.END, "ymous", Key.ENTER]) == 0
    assert capsys.readouterr().out == "anonymous\n"


def test_input_cancelled(run, capsys):
    assert run("input", "Name", script=["bob", Key.ESCAPE]) == 1
    assert capsys.readouterr().out == ""


def test_input_password(run, capsys):
    assert run("input", "Password", "--password", script=["hunter2", Key.ENTER]) == 0
    assert capsys.readouterr().out == "hunter2\n"
    assert "hunter2" not in run.state["screen"].text()


def test_check_config(run, mock_termkit_yaml, capsys):
    assert run("--config", str(mock_termkit_yaml), "check-config") == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["menu"]["max_item_count"] == 50
    assert summary["colors"]["menu_select"] == "Cyan"


def test_bad_config_exits_2(run, temp_config_dir, capsys):
    path = temp_config_dir / "bad.yaml"
    path.write_text(yaml.safe_dump({"colors": {"title": "Purple"}}))
    assert run("--config", str(path), "ask", "x") == 2
    assert "Purple" in capsys.readouterr().err


def test_ask_escape_and_config_error_exit_differently(run, temp_config_dir, capsys):
    assert run("ask", "Proceed?", script=[Key.ESCAPE]) == cli.EXIT_ESCAPE
    assert capsys.readouterr().err == ""

    path = temp_config_dir / "bad.yaml"
    path.write_text(yaml.safe_dump({"colors": {"title": "Purple"}}))
    assert run("--config", str(path), "ask", "x") == cli.EXIT_ERROR


def test_logging_options(run, temp_config_dir):
    log_file = str(temp_config_dir / "termctl.log")
    run("-v", "--log-file", log_file, "ask", "x", script=["y", Key.ENTER])
    assert run.state["logging"] == (True, log_file)


def test_no_command_prints_help(run, capsys):
    assert run() == 2
    assert "usage" in capsys.readouterr().out


def test_keyboard_interrupt(run, monkeypatch):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "cmd_ask", interrupted)
    assert run("ask", "x") == 130


def test_demo_quits_on_escape(run):
    assert run("demo", script=[Key.ESCAPE]) == 0
    assert run.state["stderr"] is False
    assert "termkit demo" in run.state["screen"].text()
