"""Buffered serial port with bounded receive and transmit queues."""

from __future__ import annotations

import threading
from collections import deque
from typing import Iterable

RX_BUFFER_SIZE = 512
TX_BUFFER_SIZE = 1024


def _check_byte(byte: int) -> int:
    if not isinstance(byte, int) or not 0 <= byte <= 0xFF:
        raise ValueError(f"not a byte value: {byte!r}")
    return byte


class Uart:
    """Serial port model.

    Incoming bytes are placed in a bounded receive buffer by :meth:`receive`
    and consumed with :meth:`get_byte`. Outgoing bytes are queued by
    :meth:`send_byte` and drained onto the line by :meth:`transmit`.
    Bytes that do not fit in a full buffer are dropped.
    """

    def __init__(self, rx_size: int = RX_BUFFER_SIZE, tx_size: int = TX_BUFFER_SIZE) -> None:
        if rx_size <= 0 or tx_size <= 0:
            raise ValueError("buffer sizes must be positive")
        self._rx: deque[int] = deque()
        self._tx: deque[int] = deque()
        self._rx_size = rx_size
        self._tx_size = tx_size
        self._lock = threading.Lock()

    def receive(self, data: Iterable[int]) -> int:
        """Accept bytes arriving on the line; return how many were stored."""
        stored = 0
        with self._lock:
            for byte in data:
                _check_byte(byte)
                if len(self._rx) < self._rx_size:
                    self._rx.append(byte)
                    stored += 1
        return stored

    def has_rx_data(self) -> bool:
        """Return whether received bytes are waiting to be read."""
        with self._lock:
            return bool(self._rx)

    def get_byte(self) -> int:
        """Remove and return the oldest received byte."""
        with self._lock:
            if not self._rx:
                raise IndexError("no received data")
            return self._rx.popleft()

    def send_byte(self, byte: int) -> bool:
        """Queue a byte for transmission; return False if the buffer was full."""
        _check_byte(byte)
        with self._lock:
            if len(self._tx) >= self._tx_size:
                return False
            self._tx.append(byte)
            return True

    def transmit(self) -> bytes:
        """Drain and return every byte queued for transmission."""
        with self._lock:
            sent = bytes(self._tx)
            self._tx.clear()
        return sent