"""
CLI command modules.
"""

from hashtree_cli.commands import root, prove, verify, demo

__all__ = ["root", "prove", "verify", "demo"]
