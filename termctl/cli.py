"""termctl - drive termkit prompts from shell scripts.

The prompt UI is drawn on stderr so that stdout only carries the answer::

    target=$(termctl menu deploy.yaml) || exit
    termctl ask "Restart now?" --default n && systemctl restart app
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Optional

from termkit import __version__
from termkit.core.config import TermkitConfig
from termkit.core.errors import ConfigError, InputCancelled, MenuCancelled
from termkit.menu.loader import load_menu
from termkit.toolkit import Toolkit
from termkit.utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO = 1
EXIT_ERROR = 2
EXIT_ESCAPE = 3
EXIT_TIMEOUT = 124
EXIT_INTERRUPTED = 130

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        filename=log_file,
        force=True,
    )


def build_toolkit(config: TermkitConfig, stderr: bool = True) -> Toolkit:
    """Create the toolkit used by the commands (tests replace this)."""

    return Toolkit(config, stderr=stderr)


def _timeout_token(timeout: Optional[float]) -> Optional[CancellationToken]:
    if not timeout:
        return None
    return CancellationToken().cancel_after(timeout)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
def cmd_menu(toolkit: Toolkit, path: str, timeout: Optional[float] = None) -> int:
    definition = load_menu(path, toolkit.navigator.settings)
    if definition.title:
        toolkit.dialogs.write_title(definition.title)

    token = _timeout_token(timeout)
    try:
        selected = toolkit.show_menu(
            definition.prompt,
            definition.items,
            definition.default_index,
            definition.settings,
            cancel_token=token,
        )
    except MenuCancelled:
        return EXIT_NO
    finally:
        if token is not None:
            token.dispose()

    if selected.is_escape():
        return EXIT_NO
    for value in (selected.tag, selected.key, selected.text):
        if value is not None:
            print(value)
            break
    return EXIT_OK


def cmd_ask(toolkit: Toolkit, text: str, default: Optional[str] = None, timeout: Optional[float] = None) -> int:
    token = _timeout_token(timeout)
    try:
        answer = toolkit.dialogs.boolean_question(
            text,
            default=None if default is None else default == "y",
            cancel_token=token,
        )
    finally:
        if token is not None:
            token.dispose()

    if answer is None:
        return EXIT_ESCAPE
    return EXIT_OK if answer else EXIT_NO


def cmd_input(
    toolkit: Toolkit,
    hint: str,
    default: Optional[str] = None,
    password: bool = False,
    timeout: Optional[float] = None,
) -> int:
    token = _timeout_token(timeout)
    try:
        if password:
            text, cancelled = toolkit.dialogs.input_password(hint, cancel_token=token)
        else:
            result = toolkit.dialogs.input_query2(hint, default, cancel_token=token)
            text, cancelled = result.text, result.cancelled
    finally:
        if token is not None:
            token.dispose()

    if cancelled:
        return EXIT_NO
    print(text)
    return EXIT_OK


def cmd_demo(toolkit: Toolkit) -> int:
    from termctl.demo import DemoApp

    DemoApp(toolkit).run()
    return EXIT_OK


def cmd_check_config(config: TermkitConfig) -> int:
    print(json.dumps(config.summary(), indent=2))
    return EXIT_OK


# ---------------------------------------------------------------------------
# CLI entrypoint
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termctl", description="Terminal menus and prompts for shell scripts")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to termkit.yaml (default: $TERMKIT_CONFIG or ~/.config/termkit/termkit.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Write log records to this file instead of stderr")
    sub = parser.add_subparsers(dest="command")

    p_menu = sub.add_parser("menu", help="Show a menu defined in a YAML file and print the chosen tag")
    p_menu.add_argument("file", help="Menu definition YAML")
    p_menu.add_argument("--timeout", type=float, help="Give up after SECONDS (exit 124)")

    p_ask = sub.add_parser("ask", help="Ask a yes/no question (exit 0 yes, 1 no, 3 Esc)")
    p_ask.add_argument("text", help="Question text")
    p_ask.add_argument("--default", choices=("y", "n"), help="Pre-filled answer")
    p_ask.add_argument("--timeout", type=float, help="Give up after SECONDS (exit 124)")

    p_input = sub.add_parser("input", help="Read a line of text and print it")
    p_input.add_argument("hint", help="Prompt text")
    p_input.add_argument("--default", help="Pre-filled text")
    p_input.add_argument("--password", action="store_true", help="Mask the typed characters")
    p_input.add_argument("--timeout", type=float, help="Give up after SECONDS (exit 124)")

    sub.add_parser("demo", help="Interactive demonstration of menus and dialogs")
    sub.add_parser("check-config", help="Print the effective configuration")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    configure_logging(args.verbose, args.log_file)

    try:
        config = TermkitConfig.load(args.config)
        if args.command == "check-config":
            return cmd_check_config(config)
        if args.command == "demo":
            return cmd_demo(build_toolkit(config, stderr=False))

        toolkit = build_toolkit(config)
        if args.command == "menu":
            return cmd_menu(toolkit, args.file, args.timeout)
        if args.command == "ask":
            return cmd_ask(toolkit, args.text, args.default, args.timeout)
        if args.command == "input":
            return cmd_input(toolkit, args.hint, args.default, args.password, args.timeout)
    except ConfigError as exc:
        logger.debug("Configuration failure", exc_info=True)
        print(f"termctl: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        print(f"termctl: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except InputCancelled:
        logger.info("Prompt timed out")
        return EXIT_TIMEOUT
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return EXIT_INTERRUPTED

    parser.error(f"unknown command {args.command!r}")
    return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
