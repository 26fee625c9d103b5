"""
hashtree CLI

Command-line interface for building hash trees and checking proofs.

Usage:
    python -m hashtree_cli root hello world this
    python -m hashtree_cli prove hello world this --index 2 --out proof.json
    python -m hashtree_cli verify proof.json this
    python -m hashtree_cli demo
"""

__version__ = "0.1.0"
