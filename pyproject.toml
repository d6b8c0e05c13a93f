[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inputsense"
version = "0.1.0"
description = "Models of digital inputs, debouncing, frequency measurement and STM32 peripherals for testing firmware logic without hardware."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "embedded",
    "gpio",
    "debounce",
    "frequency",
    "flash",
    "i2c",
    "usb",
    "cdc",
    "systick",
    "stm32",
]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["inputsense"]

[tool.pytest.ini_options]
addopts = "-ra"
