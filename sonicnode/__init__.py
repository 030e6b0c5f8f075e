"""A mutable JSON document tree with byte scanning, fast float and quoting helpers."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "node",
    "number_fast",
    "quote",
    "string_block",
    "stringview",
    "types",
    "utils",
    "vector",
]