[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "halmock"
version = "0.11.1"
description = "Mocked peripheral devices (pins, SPI, I2C, serial, ADC, delays, timers) for testing hardware drivers on the host"
requires-python = ">=3.10"
dependencies = []
keywords = ["hal", "mock", "spi", "i2c", "serial", "gpio", "adc", "delay", "timer", "testing", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing :: Mocking",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["halmock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
