"""Module entrypoint for running radiotag as ``python -m radiotag``."""

from __future__ import annotations

from radiotag.cli import main


if __name__ == "__main__":
    main()
