"""Entry point for running kitsync as a module.

This allows running the application with:
    python -m kitsync [OPTIONS] COMMAND [ARGS]
"""

from kitsync.cli import app

if __name__ == "__main__":
    app()
