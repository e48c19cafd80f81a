r"""Diagnostics shared by every stage of the pipeline.

Each error renders as::

    Error: <message>

    \t<line> | <where>

which is the format editors and other tools are expected to consume.
"""

from __future__ import annotations


class LoxError(Exception):
    def __init__(self, message: str, line: int, where: str):
        super().__init__(message)
        self.message = message
        self.line = line
        self.where = where

    def __str__(self) -> str:
        return f"Error: {self.message}\n\n\t{self.line} | {self.where}"
