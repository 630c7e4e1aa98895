# File: typegen/__main__.py
"""
NexaFlow TypeGen - Module entry point.

    python -m typegen --schema schemas.yaml --output ./web/src

Delegates to ``typegen.cli``.
"""

from __future__ import annotations


def main() -> None:
    from typegen.cli import cli_main

    cli_main()


if __name__ == "__main__":
    main()
