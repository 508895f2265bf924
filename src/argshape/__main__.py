"""Allow ``python -m argshape``."""

from argshape.cli import cli

if __name__ == "__main__":
    cli()
