"""CLI entry point.

Allows running the CLI as a module: python -m discuss_digest.cli
"""

from discuss_digest.cli import app

if __name__ == "__main__":
    app()
