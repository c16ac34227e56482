"""KITSYNC - Shared component and block scaffolding for front-end projects.

This package provides a Python CLI application that installs shared UI
components, utilities and page blocks from central git repositories into
a consumer project and keeps linked projects in sync.
"""

__version__ = "1.0.0"
SCRIPT_NAME = "KITSYNC"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
]
