"""A small interactive shell with quoting, escaping and output redirection."""

from __future__ import annotations

__version__ = "0.1.0"
