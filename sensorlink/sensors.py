"""Sensor array that samples values periodically and serves them as packets."""

from __future__ import annotations

import enum
import logging
import queue
import struct
import time
from dataclasses import dataclass
from typing import Callable

from sensorlink.commands import CommandType, SensorCommand
from sensorlink.temperature import TemperatureSensor

logger = logging.getLogger(__name__)

MAX_QUANTITY = 256
MIN_PERIOD_MS = 100
MAX_PERIOD_MS = 2000
DEFAULT_PERIOD_MS = 2000

PACKET_PREAMBLE = "SENS"

ReadValue = Callable[[], int]
Clock = Callable[[], int]


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _as_int16(value: int) -> int:
    return ((int(value) + 0x8000) & 0xFFFF) - 0x8000


class DataFormat(enum.Enum):
    """Encoding used for data packets."""

    STRING = 0
    BINARY = 1

    def next(self) -> DataFormat:
        members = list(DataFormat)
        return members[(members.index(self) + 1) % len(members)]


@dataclass
class Sensor:
    """One sampled channel and its most recent reading."""

    read_value: ReadValue
    period_ms: int = DEFAULT_PERIOD_MS
    last_read_ms: int = 0
    last_value: int = 0


class SensorArray:
    """A resizable set of sensors sharing one value source and one clock."""

    def __init__(
        self,
        quantity: int,
        read_value: ReadValue | None = None,
        clock: Clock | None = None,
    ) -> None:
        if read_value is None:
            read_value = TemperatureSensor().read
        self._read_value = read_value
        self._clock = clock if clock is not None else _monotonic_ms
        self.data_format = DataFormat.STRING
        self.min_period_ms = MAX_PERIOD_MS
        now = self._clock()
        self.sensors: list[Sensor] = [
            Sensor(read_value, DEFAULT_PERIOD_MS, now) for _ in range(quantity)
        ]

    @property
    def quantity(self) -> int:
        return len(self.sensors)

    def change_period(self, index: int, period: int) -> int:
        """Set a sensor's sampling period, clamped to the allowed range.

        Returns the period actually applied. Raises IndexError for an
        unknown sensor.
        """
        if not 0 <= index < self.quantity:
            raise IndexError(f"There is no sensor {index}!")
        period = min(max(period, MIN_PERIOD_MS), MAX_PERIOD_MS)
        self.sensors[index].period_ms = period
        self.min_period_ms = min(
            [MAX_PERIOD_MS, *(sensor.period_ms for sensor in self.sensors)]
        )
        logger.info("Changed sensor %d period to %d ms", index, period)
        return period

    def change_quantity(self, quantity: int) -> bool:
        """Resize the array, keeping existing sensors; return whether it changed.

        Quantities above the maximum are clamped. Raises ValueError for zero.
        """
        quantity = min(quantity, MAX_QUANTITY)
        if quantity == self.quantity:
            logger.warning("It's actual quantity!")
            return False
        if quantity <= 0:
            raise ValueError("Invalid quantity!")
        if quantity > self.quantity:
            now = self._clock()
            self.sensors.extend(
                Sensor(self._read_value, DEFAULT_PERIOD_MS, now)
                for _ in range(quantity - self.quantity)
            )
        else:
            del self.sensors[quantity:]
        logger.info("Changed sensor qty to %d", quantity)
        return True

    def toggle_format(self) -> DataFormat:
        """Switch to the next data format and return it."""
        self.data_format = self.data_format.next()
        if self.data_format is DataFormat.STRING:
            logger.info("Format toggled to string!")
        else:
            logger.info("Format toggled to bin!")
        return self.data_format

    def string_packet(self) -> bytes:
        """Encode all readings as ``SENS<n>:<value>\\r\\n`` lines."""
        return "".join(
            f"{PACKET_PREAMBLE}{index}:{sensor.last_value}\r\n"
            for index, sensor in enumerate(self.sensors)
        ).encode("ascii")

    def binary_packet(self) -> bytes:
        """Encode all readings as little-endian signed 16-bit integers."""
        return b"".join(struct.pack("<h", sensor.last_value) for sensor in self.sensors)

    def packet(self) -> bytes:
        """Encode all readings in the current data format."""
        if self.data_format is DataFormat.BINARY:
            return self.binary_packet()
        return self.string_packet()

    def update(self) -> list[int]:
        """Sample every sensor whose period has elapsed; return their indices."""
        now = self._clock()
        updated = []
        for index, sensor in enumerate(self.sensors):
            if now - sensor.last_read_ms >= sensor.period_ms:
                sensor.last_value = _as_int16(sensor.read_value())
                sensor.last_read_ms = now
                logger.info("Sensor %d data updated: %d", index, sensor.last_value)
                updated.append(index)
        return updated

    def handle_command(self, command: SensorCommand) -> bytes:
        """Apply a command; return the bytes it produces for transmission."""
        if command.kind is CommandType.PERIOD:
            self.change_period(command.index, command.period)
        elif command.kind is CommandType.QUANTITY:
            self.change_quantity(command.index)
        elif command.kind is CommandType.READ:
            return self.packet()
        elif command.kind is CommandType.TOGGLE:
            self.toggle_format()
        return b""


class SensorService:
    """Connects a sensor array to its command and outgoing data queues."""

    def __init__(
        self,
        sensors: SensorArray,
        command_queue: queue.Queue,
        data_queue: queue.Queue,
    ) -> None:
        self.sensors = sensors
        self._commands = command_queue
        self._data = data_queue

    def update_task(self) -> int:
        """Sample due sensors; return the suggested idle time in milliseconds."""
        self.sensors.update()
        return self.sensors.min_period_ms // 2

    def handle_command_task(self) -> bool:
        """Handle at most one queued command; return whether one was taken."""
        try:
            command = self._commands.get_nowait()
        except queue.Empty:
            return False
        try:
            output = self.sensors.handle_command(command)
        except (IndexError, ValueError) as exc:
            logger.warning("%s", exc)
            return True
        for byte in output:
            self._data.put(byte)
        return True