"""
Main entry point for running userapi as a module.

Usage:
    python -m userapi init
    python -m userapi serve
    python -m userapi user add "Ada Lovelace" ada@example.com
"""

from .cli import cli

if __name__ == "__main__":
    cli()
