import io
import sys

from sensorlink.app import Application, main
from sensorlink.sensors import DEFAULT_PERIOD_MS, DataFormat


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def run(app, data, steps=5):
    app.send(data)
    for _ in range(steps):
        app.step()
    return app.output()


def parse_lines(output):
    lines = output.decode("ascii").split("\r\n")
    assert lines[-1] == ""
    result = []
    for line in lines[:-1]:
        name, value = line.split(":")
        assert name.startswith("SENS")
        result.append((int(name[4:]), int(value)))
    return result


def test_read_returns_string_packet():
    app = Application(2, clock=FakeClock())
    assert run(app, b"read\n") == b"SENS0:0\r\nSENS1:0\r\n"


def test_toggle_then_read_binary():
    app = Application(3, clock=FakeClock())
    output = run(app, b"toggle\nread\n")
    assert app.sensors.data_format is DataFormat.BINARY
    assert output == bytes(6)


def test_quantity_change_reflected_in_read():
    app = Application(2, clock=FakeClock())
    output = run(app, b"quantity 4\nread\n")
    assert [index for index, _ in parse_lines(output)] == [0, 1, 2, 3]


def test_period_command_applied():
    app = Application(2, clock=FakeClock())
    run(app, b"period 1 500\n")
    assert app.sensors.sensors[1].period_ms == 500
    assert app.sensors.min_period_ms == 500


def test_values_in_range_after_update():
    clock = FakeClock()
    app = Application(5, clock=clock)
    clock.now += DEFAULT_PERIOD_MS
    values = [value for _, value in parse_lines(run(app, b"read\n"))]
    assert len(values) == 5
    assert all(0 <= value < 35 for value in values)


def test_same_seed_is_reproducible():
    outputs = []
    for _ in range(2):
        clock = FakeClock()
        app = Application(4, clock=clock, seed=7)
        clock.now += DEFAULT_PERIOD_MS
        outputs.append(run(app, b"read\n"))
    assert outputs[0] == outputs[1]


def test_wrong_command_produces_nothing():
    app = Application(2, clock=FakeClock())
    assert run(app, b"hello\n") == b""


def test_step_returns_idle_time():
    app = Application(2, clock=FakeClock())
    assert app.step() == app.sensors.min_period_ms // 2


def test_main_serves_stdin(monkeypatch, capsysbinary):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"read\n")))
    assert main(["--quantity", "2"]) == 0
    captured = capsysbinary.readouterr()
    assert [index for index, _ in parse_lines(captured.out)] == [0, 1]