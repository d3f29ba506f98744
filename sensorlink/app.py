"""Application wiring: serial interface plus sensor service, and its command."""

from __future__ import annotations

import argparse
import logging
import queue
import sys
import threading
from typing import BinaryIO, Iterable

from sensorlink.interface import Interface
from sensorlink.sensors import MAX_QUANTITY, Clock, SensorArray, SensorService
from sensorlink.temperature import TemperatureSensor
from sensorlink.uart import Uart

logger = logging.getLogger(__name__)

DEFAULT_SENSORS_QTY = 10
CMD_QUEUE_SIZE = 16

_POLL_SECONDS = 0.01


class Application:
    """The complete device: a serial port driving a sensor array.

    Each :meth:`step` runs one pass of the interface and sensor tasks.
    """

    def __init__(
        self,
        quantity: int = DEFAULT_SENSORS_QTY,
        clock: Clock | None = None,
        seed: int | None = 0,
    ) -> None:
        self.uart = Uart()
        self._command_queue: queue.Queue = queue.Queue(maxsize=CMD_QUEUE_SIZE)
        # Unbounded: a single-threaded step must never block on a full queue.
        self._data_queue: queue.Queue = queue.Queue()
        self.temperature = TemperatureSensor(seed)
        self.sensors = SensorArray(quantity, self.temperature.read, clock)
        self.service = SensorService(self.sensors, self._command_queue, self._data_queue)
        self.interface = Interface(self.uart, self._command_queue, self._data_queue)

    def step(self) -> int:
        """Run one pass of all tasks; return the suggested idle time in ms."""
        self.interface.parse_task()
        idle_ms = self.service.update_task()
        self.service.handle_command_task()
        self.interface.transmit_task()
        return idle_ms

    def send(self, data: Iterable[int]) -> int:
        """Deliver bytes to the serial port; return how many were accepted."""
        return self.uart.receive(data)

    def output(self) -> bytes:
        """Return and clear everything written to the serial port."""
        return self.uart.transmit()

    def _busy(self) -> bool:
        return self.uart.has_rx_data() or not self._command_queue.empty()


def _read_input(stream: BinaryIO, incoming: queue.Queue) -> None:
    for line in stream:
        incoming.put(line)
    incoming.put(None)


def main(argv: list[str] | None = None) -> int:
    """Run the device over standard input and output."""
    parser = argparse.ArgumentParser(
        prog="sensorlink",
        description="Serve sensor readings over a line-based command interface.",
    )
    parser.add_argument("--quantity", type=int, default=DEFAULT_SENSORS_QTY,
                        help="number of sensors at start-up")
    parser.add_argument("--seed", type=int, default=0,
                        help="seed for the simulated temperature readings")
    args = parser.parse_args(argv)
    if not 1 <= args.quantity <= MAX_QUANTITY:
        parser.error(f"--quantity must be between 1 and {MAX_QUANTITY}")

    logging.basicConfig(level=logging.INFO, stream=sys.stderr,
                        format="%(levelname)s: %(message)s")
    app = Application(args.quantity, seed=args.seed)
    logger.info("Program started!")

    incoming: queue.Queue = queue.Queue()
    reader = threading.Thread(target=_read_input, args=(sys.stdin.buffer, incoming), daemon=True)
    reader.start()
    out = sys.stdout.buffer
    eof = False
    try:
        while True:
            if not app._busy():
                if eof:
                    break
                try:
                    chunk = incoming.get(timeout=_POLL_SECONDS)
                except queue.Empty:
                    chunk = b""
                if chunk is None:
                    eof = True
                elif chunk:
                    app.send(chunk)
            app.step()
            data = app.output()
            if data:
                out.write(data)
                out.flush()
    except KeyboardInterrupt:
        return 130
    return 0