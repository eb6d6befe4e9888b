"""Entry point for ``python -m splice``."""

from splice.cli.main import cli

if __name__ == "__main__":
    cli()
