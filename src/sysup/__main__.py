"""sysup CLI bootstrap."""

from __future__ import annotations

from sysup.cli import app

if __name__ == "__main__":
    app()
