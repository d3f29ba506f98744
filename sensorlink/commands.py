"""Text commands accepted on the serial link and their byte-wise parser."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

COMMAND_TERMINATOR = ord("\n")
BUFFER_SIZE = 16

_READ_PREAMBLE = "read"
_TOGGLE_PREAMBLE = "toggle"
_QUANTITY_PREAMBLE = "quantity "
_PERIOD_PREAMBLE = "period "

_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")
_UINT16_MASK = 0xFFFF


class CommandType(enum.Enum):
    """Kinds of command understood by the sensor service."""

    UNDEF = 0
    READ = 1       # "read"
    TOGGLE = 2     # "toggle"
    QUANTITY = 3   # "quantity <q>"
    PERIOD = 4     # "period <n> <p>"


@dataclass(frozen=True)
class SensorCommand:
    """A parsed command: ``index`` holds the quantity or the sensor number."""

    kind: CommandType = CommandType.UNDEF
    index: int = 0
    period: int = 0


class CommandError(ValueError):
    """Raised when a line is not a recognised command."""


def _parse_integer(text: str) -> tuple[int, str]:
    """Parse a leading decimal integer; return it and the unparsed rest.

    With no digits the value is 0 and the rest is the whole text.
    """
    match = _INTEGER.match(text)
    if match is None:
        return 0, text
    value = int(match.group(2))
    if match.group(1) == "-":
        value = -value
    return value & _UINT16_MASK, text[match.end():]


def parse_command(line: str | bytes) -> SensorCommand:
    """Parse one command line, without its terminating newline."""
    if isinstance(line, (bytes, bytearray)):
        line = bytes(line).decode("latin-1")
    line = line.split("\0", 1)[0]

    if line.startswith(_READ_PREAMBLE):
        return SensorCommand(CommandType.READ)
    if line.startswith(_TOGGLE_PREAMBLE):
        return SensorCommand(CommandType.TOGGLE)
    if line.startswith(_QUANTITY_PREAMBLE):
        quantity, _ = _parse_integer(line[len(_QUANTITY_PREAMBLE):])
        return SensorCommand(CommandType.QUANTITY, index=quantity)
    if line.startswith(_PERIOD_PREAMBLE):
        index, rest = _parse_integer(line[len(_PERIOD_PREAMBLE):])
        period = 0
        if rest.startswith(" "):
            period, _ = _parse_integer(rest[1:])
        else:
            logger.warning("Invalid period!")
        return SensorCommand(CommandType.PERIOD, index=index, period=period)
    raise CommandError(f"wrong command: {line!r}")


class CommandParser:
    """Accumulates received bytes into newline-terminated commands.

    Lines longer than the command buffer are discarded.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def reset(self) -> None:
        """Discard any partially received command."""
        self._buffer.clear()

    def feed(self, byte: int) -> SensorCommand | None:
        """Consume one byte; return a command when a line is completed.

        Raises :class:`CommandError` when a completed line is not a command.
        """
        if not isinstance(byte, int) or not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte value: {byte!r}")
        if byte == COMMAND_TERMINATOR:
            line = bytes(self._buffer)
            self.reset()
            try:
                return parse_command(line)
            except CommandError:
                logger.warning("Wrong cmd!")
                raise
        if len(self._buffer) < BUFFER_SIZE - 1:
            self._buffer.append(byte)
        else:
            logger.warning("Command buffer overflow!")
            self.reset()
        return None