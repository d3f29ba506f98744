import pytest

from sensorlink.temperature import TemperatureSensor


def test_readings_stay_within_range():
    sensor = TemperatureSensor()
    readings = [sensor.read() for _ in range(500)]
    assert all(0 <= value < 35 for value in readings)


def test_same_seed_gives_same_sequence():
    first = TemperatureSensor(seed=7)
    second = TemperatureSensor(seed=7)
    assert [first.read() for _ in range(50)] == [second.read() for _ in range(50)]


def test_default_seed_is_reproducible():
    first = TemperatureSensor()
    second = TemperatureSensor()
    assert [first.read() for _ in range(20)] == [second.read() for _ in range(20)]


@pytest.mark.parametrize("seed", [0, 1, 42])
def test_readings_are_integers(seed):
    sensor = TemperatureSensor(seed=seed)
    assert all(isinstance(sensor.read(), int) and sensor.read() >= 0 for _ in range(10))


def test_readings_vary():
    sensor = TemperatureSensor(seed=3)
    assert len({sensor.read() for _ in range(200)}) > 1