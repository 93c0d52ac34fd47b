"""Command-line front end for trimming whitespace around cursors in a file."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import re
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, TextIO, get_type_hints

from .commands import command_for_direction, default_registry
from .core.direction import Direction
from .core.ranges import Position
from .editor.buffer import CursorTrimError, InMemoryBuffer, Selection, StaticEditorHost
from .services.settings import Settings, SettingsStore
from .utils import file_io
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_LOGGER = logging.getLogger(__name__)
_CURSOR_RE = re.compile(r"^(?P<line>\d+):(?P<column>\d+)(?:-(?P<end_line>\d+):(?P<end_column>\d+))?$")


def configure_logging(debug: bool = False) -> None:
    """Log warnings to stderr; debug runs also write the rotating log file."""

    level = logging.DEBUG if debug else logging.WARNING
    log_path = logging_utils.setup_logging(level, log_file=debug, force=True)
    _LOGGER.debug("Logging configured (level=%s, file=%s)", logging.getLevelName(level), log_path)


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        settings = active_store.load(overrides=overrides)
    except OSError as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        settings = Settings()
    return settings


def parse_cursor(value: str) -> Selection:
    """Parse ``LINE:COL`` or ``LINE:COL-LINE:COL`` (1-based) into a selection."""

    match = _CURSOR_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Cursor '{value}' must look like LINE:COL or LINE:COL-LINE:COL.")
    anchor = _one_based(match.group("line"), match.group("column"), value)
    if match.group("end_line") is None:
        return Selection(anchor, anchor)
    active = _one_based(match.group("end_line"), match.group("end_column"), value)
    return Selection(anchor, active)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point invoked by the `cursortrim` console script."""

    args = _parse_cli_args(argv)

    debug = args.debug or _env_flag("CURSORTRIM_DEBUG", default=False)
    configure_logging(debug)

    settings_path = args.settings_path or os.environ.get("CURSORTRIM_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    settings_store = SettingsStore(resolved_path)
    try:
        cli_overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2

    settings = load_settings(resolved_path, store=settings_store, overrides=cli_overrides or None)

    if args.dump_settings:
        _dump_settings(settings, settings_store, overrides=cli_overrides)
        return 0

    if settings.debug_logging and not debug:
        configure_logging(True)

    if args.path is None:
        print("A file path is required unless --dump-settings is given.", file=sys.stderr)
        return 2
    if not args.cursors:
        print("At least one --cursor is required.", file=sys.stderr)
        return 2

    try:
        direction = Direction.from_name(args.direction) if args.direction else settings.direction
        source = file_io.read_text_file(args.path, default_newline=settings.newline)
        buffer = InMemoryBuffer.from_text(source.text)
        buffer.set_selections(_resolve_cursors(buffer, args.cursors))
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 2

    registry = default_registry(settings)
    host = StaticEditorHost(buffer)
    try:
        deleted = asyncio.run(registry.execute(command_for_direction(direction), host))
    except CursorTrimError as exc:
        print(f"Trim failed: {exc}", file=sys.stderr)
        return 1
    _LOGGER.info("Removed %d whitespace span(s) from %s", len(deleted), args.path)

    if args.in_place:
        file_io.write_text(args.path, buffer.text, encoding=source.encoding, newline=source.newline)
    elif args.output:
        file_io.write_text(args.output, buffer.text, encoding=source.encoding, newline=source.newline)
    else:
        sys.stdout.write(buffer.text)
    if args.print_cursors:
        for selection in buffer.selections:
            print(_format_selection(selection), file=sys.stderr)
    return 0


def _resolve_cursors(buffer: InMemoryBuffer, values: Sequence[str]) -> list[Selection]:
    selections = [parse_cursor(value) for value in values]
    for selection in selections:
        for position in (selection.anchor, selection.active):
            if position.line >= buffer.line_count:
                raise ValueError(
                    f"Cursor line {position.line + 1} is past the end of the file ({buffer.line_count} lines)."
                )
            if position.column > len(buffer.line_text(position.line)):
                raise ValueError(
                    f"Cursor column {position.column + 1} is past the end of line {position.line + 1}."
                )
    return selections


def _one_based(line: str, column: str, raw: str) -> Position:
    line_number = int(line, 10)
    column_number = int(column, 10)
    if line_number < 1 or column_number < 1:
        raise ValueError(f"Cursor '{raw}' uses 1-based lines and columns.")
    return Position(line_number - 1, column_number - 1)


def _format_selection(selection: Selection) -> str:
    anchor = f"{selection.anchor.line + 1}:{selection.anchor.column + 1}"
    if selection.is_caret:
        return anchor
    return f"{anchor}-{selection.active.line + 1}:{selection.active.column + 1}"


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cursortrim",
        description="Remove the spaces and tabs around one or more cursors in a text file.",
    )
    parser.add_argument("path", nargs="?", type=Path, help="File to trim.")
    parser.add_argument(
        "-c",
        "--cursor",
        dest="cursors",
        metavar="LINE:COL[-LINE:COL]",
        action="append",
        default=[],
        help="1-based cursor or selection to trim around (repeatable).",
    )
    parser.add_argument(
        "-d",
        "--direction",
        choices=("both", "left", "right"),
        help="Side of each cursor to trim (defaults to the default_direction setting).",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("-i", "--in-place", action="store_true", help="Rewrite the file in place.")
    target.add_argument("-o", "--output", type=Path, metavar="PATH", help="Write the result to PATH.")
    parser.add_argument(
        "--print-cursors",
        action="store_true",
        help="Print the cursor positions after trimming to stderr.",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.cursortrim/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    fields = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in fields:
            raise ValueError(f"Unknown setting '{key}'.")
        annotation = type_hints.get(key, fields[key].type)
        overrides[key] = _coerce_value(annotation, raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    normalized = raw_value.strip()
    if annotation is bool:
        return _parse_bool(normalized)
    return normalized


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


def _dump_settings(
    settings: Settings,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
    stream: TextIO | None = None,
) -> None:
    destination = stream or sys.stdout
    metadata = {
        "path": str(store.path),
        "cli_overrides": sorted(overrides.keys()),
        "environment_variables": _active_env_overrides(),
    }
    output = {"settings": asdict(settings), "meta": metadata}
    json.dump(output, destination, indent=2)
    destination.write("\n")


def _active_env_overrides() -> list[str]:
    return sorted(name for name in os.environ if name.startswith("CURSORTRIM_"))
