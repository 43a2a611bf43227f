"""Module entrypoint for ``python -m goalpilot``."""

from goalpilot.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
