# sensorlink

A small model of a sensor node that talks over a serial line. A
configurable array of simulated temperature sensors is sampled on
per-sensor periods, and a byte-oriented command protocol lets a host read
the values, switch the output format, resize the array and tune sampling
periods.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Command protocol

Commands are ASCII lines terminated by `\n`. A command is recognised by
its prefix, so `readings` is taken as `read`.

| Command            | Effect                                                           |
|--------------------|------------------------------------------------------------------|
| `read`             | Emit the latest value of every sensor                            |
| `toggle`           | Switch the output between the text and binary formats           |
| `quantity <q>`     | Resize the array to `q` sensors (capped at 256; `0` is rejected) |
| `period <n> <p>`   | Set sensor `n`'s period to `p` ms (clamped to 100–2000 ms)       |

Numbers are read as unsigned 16-bit values; missing digits count as `0`.
For `period`, if the sensor number is not followed by a space the period
is taken as `0` (and so clamped to 100 ms). A `period` for a sensor that
does not exist, or a `quantity 0`, is logged as a warning and ignored.

The receive buffer holds up to 15 characters. If a 16th character arrives
before the newline, the partial line is dropped and collection starts
over with the following character. A completed line that matches no
command is logged and dropped, and parsing stops until the next pass.

New sensors start with a 2000 ms period and a value of 0; existing
sensors keep their settings and values when the array is resized.

### Output formats

* **Text** (the default): one line per sensor, `SENS<index>:<value>\r\n`.
* **Binary**: each sensor's value as a signed 16-bit little-endian integer,
  in sensor order, with no separators.

## Running the node

The `sensorlink` command runs a simulated node over standard input and
output:

```
sensorlink --quantity 10 --seed 0
```

* `--quantity` — number of sensors at start-up, 1 to 256 (default 10).
* `--seed` — seed for the simulated temperature readings (default 0).

Commands are read from standard input; replies are written to standard
output as raw bytes (binary format included); log messages go to
standard error. The program exits at end of input once pending commands
have been handled.

## Using it from Python

`sensorlink.app.Application` wires the pieces together: a `Uart` carrying
bytes, an `Interface` that turns received lines into `SensorCommand`
objects, and a `SensorService` that keeps a `SensorArray` up to date and
answers commands.

```python
from sensorlink.app import Application

node = Application(quantity=3, clock=None, seed=0)
node.send(b"read\n")
node.step()
print(node.output())   # b"SENS0:0\r\nSENS1:0\r\nSENS2:0\r\n"
```

`step()` runs one pass of all tasks and returns a suggested idle time in
milliseconds (half the shortest sensor period). A `clock` is any
zero-argument callable returning milliseconds; by default a monotonic
clock is used.

The building blocks can be used on their own as well:

```python
from sensorlink.commands import CommandType, parse_command

command = parse_command("period 2 500")
assert command.kind is CommandType.PERIOD
assert (command.index, command.period) == (2, 500)
```

* `sensorlink.commands.parse_command(line)` accepts `str` or `bytes` and
  raises `CommandError` (a `ValueError`) for a line that matches no
  command. `CommandParser.feed(byte)` takes one byte at a time and returns
  a `SensorCommand` when a line is complete, otherwise `None`.
* `sensorlink.sensors.SensorArray(quantity, read_value, clock)` can be
  driven directly: `update()`, `change_period()`, `change_quantity()`,
  `toggle_format()`, `packet()`, `string_packet()`, `binary_packet()` and
  `handle_command()`. `change_period` raises `IndexError` for an unknown
  sensor and `change_quantity` raises `ValueError` for zero.
* `sensorlink.temperature.TemperatureSensor(seed)` supplies reproducible
  simulated readings from 0 to 34.
* `sensorlink.uart.Uart(rx_size, tx_size)` is an in-memory port with
  bounded receive (512) and transmit (1024) buffers; bytes that do not fit
  are dropped.

## What it does not do

The package does not open a real serial device and does not read a real
temperature sensor: the port is an in-memory buffer and all readings are
simulated pseudo-random values.