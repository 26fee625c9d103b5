"""
CLI Input Helpers

Turn command-line items into the byte blobs the tree is built from.
Items are either literal strings (encoded with the configured encoding)
or paths to files whose raw contents form one blob each.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Sequence

from hashtree_cli.config import CLIConfig


def read_blob(item: str, from_file: bool, encoding: str) -> bytes:
    """Read one blob from a literal string or a file path."""
    if from_file:
        path = Path(item)
        if not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")
        return path.read_bytes()
    return item.encode(encoding)


def read_blobs(items: Sequence[str], from_files: bool, encoding: str) -> list[bytes]:
    """Read blobs in command-line order."""
    return [read_blob(item, from_files, encoding) for item in items]


def wants_json(args: Namespace, config: CLIConfig) -> bool:
    """--json on the command line wins; otherwise use the configured format."""
    return bool(getattr(args, "json", False)) or config.default_output_format == "json"
