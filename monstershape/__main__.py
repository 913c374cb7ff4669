"""Module entrypoint for running monstershape as ``python -m monstershape``."""

from __future__ import annotations

from monstershape.cli import main


if __name__ == "__main__":
    main()
