"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from goalpilot import AuthenticationError, ConfigError, NotFoundError, RepositoryError, StoreLoadError


def main(argv: list[str] | None = None) -> int:
    import goalpilot.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        cli.asyncio.run(cli._COMMANDS[args.command](args))
        return 0
    except (ConfigError, StoreLoadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, RepositoryError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except NotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
