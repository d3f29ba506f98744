[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensorlink"
version = "0.1.0"
description = "Simulated sensor array driven by a line-based serial command protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["sensors", "serial", "uart", "protocol", "simulation", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sensorlink = "sensorlink.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sensorlink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
