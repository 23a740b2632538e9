"""Speech Test CI entry point - delegates to app.main."""

from app.main import cli_entry, main

__all__ = ["main", "cli_entry"]


if __name__ == "__main__":
    cli_entry()
