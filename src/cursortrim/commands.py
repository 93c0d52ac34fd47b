"""Editor command surface for the trim operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .core.direction import Direction
from .core.ranges import Span
from .editor.buffer import EditorHost
from .editor.trim import trim_cursors
from .services.settings import Settings

LOGGER = logging.getLogger(__name__)

TRIM_BOTH = "cursortrim.trim"
TRIM_LEFT = "cursortrim.ltrim"
TRIM_RIGHT = "cursortrim.rtrim"


@dataclass(slots=True, frozen=True)
class TrimCommand:
    """Descriptor binding a command id to a fixed trim direction."""

    command_id: str
    label: str
    direction: Direction
    shortcut: str | None = None

    def matches(self, query: str) -> bool:
        if not query:
            return True
        haystack = " ".join(part for part in (self.command_id, self.label, self.shortcut or "") if part).casefold()
        return all(token in haystack for token in query.casefold().split())


DEFAULT_COMMANDS: tuple[TrimCommand, ...] = (
    TrimCommand(TRIM_BOTH, "Trim Whitespace Around Cursors", Direction.BOTH, "Ctrl+Alt+Space"),
    TrimCommand(TRIM_LEFT, "Trim Whitespace Before Cursors", Direction.LEFT, "Ctrl+Alt+Left"),
    TrimCommand(TRIM_RIGHT, "Trim Whitespace After Cursors", Direction.RIGHT, "Ctrl+Alt+Right"),
)


class CommandRegistry:
    """Registry of trim commands dispatched against an :class:`EditorHost`."""

    def __init__(
        self,
        commands: Iterable[TrimCommand] = (),
        *,
        settings: Settings | None = None,
    ) -> None:
        self._commands: dict[str, TrimCommand] = {}
        self._settings = settings or Settings()
        for command in commands:
            self.register(command)

    def register(self, command: TrimCommand) -> None:
        if command.command_id in self._commands:
            raise ValueError(f"Command already registered: {command.command_id}")
        self._commands[command.command_id] = command

    def get(self, command_id: str) -> TrimCommand:
        try:
            return self._commands[command_id]
        except KeyError:
            raise KeyError(f"Unknown command: {command_id}") from None

    def commands(self) -> list[TrimCommand]:
        """Return registered commands sorted by label."""

        return sorted(self._commands.values(), key=lambda command: command.label.casefold())

    def search(self, query: str) -> list[TrimCommand]:
        return [command for command in self.commands() if command.matches(query)]

    async def execute(self, command_id: str, host: EditorHost) -> tuple[Span, ...]:
        """Run ``command_id`` against the host's active buffer."""

        command = self.get(command_id)
        buffer = host.active_buffer()
        if buffer is None:
            LOGGER.debug("No active buffer; %s skipped", command_id)
            return ()
        # each command is its own user action; never join the previous command's undo group
        checkpoint = getattr(buffer, "checkpoint", None)
        if callable(checkpoint):
            checkpoint()
        return await trim_cursors(
            buffer,
            direction=command.direction,
            follow_up_edit=self._settings.follow_up_edit,
        )


def default_registry(settings: Settings | None = None) -> CommandRegistry:
    """Return a registry holding the trim-both, trim-left and trim-right commands."""

    return CommandRegistry(DEFAULT_COMMANDS, settings=settings)


def command_for_direction(direction: Direction) -> str:
    for command in DEFAULT_COMMANDS:
        if command.direction is direction:
            return command.command_id
    raise ValueError(f"No command for direction {direction!r}")


__all__ = [
    "CommandRegistry",
    "DEFAULT_COMMANDS",
    "TRIM_BOTH",
    "TRIM_LEFT",
    "TRIM_RIGHT",
    "TrimCommand",
    "command_for_direction",
    "default_registry",
]
