"""Module entrypoint for `python -m flashdeck`."""

from __future__ import annotations

from .main import main_entry

if __name__ == "__main__":
    main_entry()
