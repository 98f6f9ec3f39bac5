"""
Module entry point for ``python -m stepsnippets``.
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
