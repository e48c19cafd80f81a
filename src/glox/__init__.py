"""glox: scanner, parser and tree-walking interpreter for a small Lox subset."""

__version__ = "0.1.0"
