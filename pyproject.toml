[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sonicnode"
version = "0.1.0"
description = "A mutable JSON document tree with byte-vector scanning helpers, fast float bits and JSON string quoting"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "dom", "node", "quote", "simd", "bitmask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["sonicnode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
