"""Menu definitions read from YAML documents.

Example::

    title: Deploy
    prompt: "Target"
    default: staging
    items:
      - {key: p, text: "[Red]Production[/]", tag: prod}
      - {key: staging, text: Staging}
      - {separator: true, text: "----"}
      - {key: Esc, text: Cancel}
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jsonschema
import yaml

from termkit.core.errors import MenuDefinitionError
from termkit.menu.types import MenuItem, MenuSeparator, MenuSettings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("menu.schema.json")


def _load_schema() -> Dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text())


@dataclass
class MenuDefinition:
    """A parsed menu document, ready for ``MenuNavigator.show_menu``."""

    items: List[MenuItem]
    title: Optional[str] = None
    prompt: Optional[str] = None
    default_index: int = -1
    settings: MenuSettings = field(default_factory=MenuSettings)


def _disabled() -> bool:
    return False


def _build_item(entry: Mapping[str, Any]) -> MenuItem:
    text = entry["text"]
    if entry.get("separator"):
        return MenuSeparator(text)
    return MenuItem(
        text,
        key=entry.get("key"),
        tag=entry.get("tag"),
        can_execute=_disabled if entry.get("disabled") else None,
        admin_required=bool(entry.get("admin", False)),
        hidden_but_active=bool(entry.get("hidden", False)),
    )


def parse_menu(data: Any, base_settings: Optional[MenuSettings] = None) -> MenuDefinition:
    """Validate a decoded document and build its menu items."""

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise MenuDefinitionError(f"Invalid menu definition at {location}: {exc.message}") from exc

    items = [_build_item(entry) for entry in data["items"]]
    settings = MenuSettings.from_mapping({**asdict(base_settings or MenuSettings()), **data.get("settings", {})})

    default = data.get("default")
    if isinstance(default, str):
        wanted = default.casefold()
        default_index = next(
            (i for i, item in enumerate(items) if item.key and item.key.casefold() == wanted),
            -1,
        )
        if default_index < 0:
            raise MenuDefinitionError(f"Default key {default!r} matches no item")
    elif isinstance(default, int):
        default_index = default
    else:
        default_index = -1

    logger.debug("Parsed menu definition with %d items", len(items))
    return MenuDefinition(
        items=items,
        title=data.get("title"),
        prompt=data.get("prompt"),
        default_index=default_index,
        settings=settings,
    )


def load_menu(path: str | Path, base_settings: Optional[MenuSettings] = None) -> MenuDefinition:
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise MenuDefinitionError(f"Cannot parse {path}: {exc}") from exc
    return parse_menu(data, base_settings)
