"""Module entrypoint for ``python -m goalpilot.cli``."""

import goalpilot.cli as cli

if __name__ == "__main__":
    raise SystemExit(cli.main())
