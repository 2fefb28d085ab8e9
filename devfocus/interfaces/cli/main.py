"""Entry point for the DevFocus CLI.

Usage:
    python -m devfocus.interfaces.cli.main

Or via installed entry point:
    devfocus <command>
"""

from devfocus.interfaces.cli import app


def main() -> None:
    """Run the DevFocus CLI application."""
    app()


if __name__ == "__main__":
    main()
