"""issuelens CLI module entry point.

Enables running the CLI via: python -m issuelens.cli
"""

from issuelens.cli.main import cli

if __name__ == "__main__":
    cli()
