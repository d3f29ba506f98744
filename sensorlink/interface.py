"""Bridge between the serial port and the sensor service queues."""

from __future__ import annotations

import logging
import queue

from sensorlink.commands import CommandError, CommandParser
from sensorlink.uart import Uart

logger = logging.getLogger(__name__)


class Interface:
    """Parses commands from the serial port and sends data bytes back out."""

    def __init__(self, uart: Uart, command_queue: queue.Queue, data_queue: queue.Queue) -> None:
        self.uart = uart
        self._commands = command_queue
        self._data = data_queue
        self._parser = CommandParser()

    def parse_task(self) -> int:
        """Parse received bytes into queued commands; return how many were queued.

        Parsing stops at the first unrecognised command; the bytes after it
        are left for the next call.
        """
        queued = 0
        while self.uart.has_rx_data():
            try:
                command = self._parser.feed(self.uart.get_byte())
            except CommandError:
                return queued
            if command is None:
                continue
            try:
                self._commands.put_nowait(command)
            except queue.Full:
                logger.error("Failed to put cmd in queue!")
            else:
                queued += 1
        return queued

    def transmit_task(self) -> int:
        """Move every pending data byte to the serial port; return the count."""
        sent = 0
        while True:
            try:
                byte = self._data.get_nowait()
            except queue.Empty:
                return sent
            self.uart.send_byte(byte)
            sent += 1