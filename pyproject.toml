[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blekit"
version = "0.1.0"
description = "Bluetooth Low Energy data helpers: addresses, attribute values, advertisement parsing, HID tables and presentation formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["bluetooth", "ble", "advertising", "gatt", "hid"]
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
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
