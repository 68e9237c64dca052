"""Allow ``python -m Friend_Links`` to run the CLI."""

from Friend_Links.cli import app

if __name__ == "__main__":
    app()
