"""Module entrypoint so `python -m epoch_api` works."""

from __future__ import annotations

from epoch_api.cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
