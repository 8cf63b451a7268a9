"""discuss-digest CLI Package.

Provides the command-line interface for the incremental LeetCode Discuss
digest.

Usage:
    python -m discuss_digest.cli run --config config/digest.yaml
    python -m discuss_digest.cli run --since 2024-01-15T00:00:00Z --no-checkpoint
    python -m discuss_digest.cli checkpoint show
    python -m discuss_digest.cli validate config/digest.yaml
"""

import typer

from discuss_digest.cli.run import run_command
from discuss_digest.cli.validate import validate_command
from discuss_digest.cli.checkpoint import checkpoint_app

# Create main app
app = typer.Typer(help="Incremental digest of new LeetCode Discuss articles")

# Register individual commands
app.command(name="run")(run_command)
app.command(name="validate")(validate_command)

# Register sub-applications
app.add_typer(checkpoint_app, name="checkpoint")

__all__ = [
    "app",
    "run_command",
    "validate_command",
    "checkpoint_app",
]
