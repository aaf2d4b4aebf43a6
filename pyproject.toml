[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dckit"
version = "0.1.0"
description = "Byte-oriented UTF-8 strings, code point helpers, MAC formatting, timing utilities and a threaded logger."
requires-python = ">=3.10"
dependencies = []
keywords = ["utf-8", "string", "logging", "stopwatch", "mac-address"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dckit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
