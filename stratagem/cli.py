"""
Stratagem CLI - Command-line interface for game definitions.

Usage:
    stratagem list                          List games and whether they load
    stratagem validate [game_id ...]        Load and validate games (all by default)
    stratagem phases <game_id>              Print the phase graph of a game
    stratagem dump <game_id> <component>    Print a loaded component as YAML
    stratagem serve                         Run the catalog API

Global options --data-dir and --verbose override STRATAGEM_DATA_DIR and
STRATAGEM_LOG_LEVEL.
"""

import argparse
import sys

from .config import configure_logging, get_settings
from .definitions.errors import CatalogError, DefinitionValidationError, GameLoadError
from .loader import COMPONENTS, GameCatalog, encode


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Stratagem - Declarative strategy game definitions",
        prog="stratagem",
    )
    parser.add_argument("--data-dir", help="Directory holding definition files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # List command
    subparsers.add_parser("list", help="List games and their load status")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Load and validate games")
    validate_parser.add_argument("game_ids", nargs="*", help="Games to validate (default: all)")

    # Phases command
    phases_parser = subparsers.add_parser("phases", help="Print the phase graph of a game")
    phases_parser.add_argument("game_id")

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Print a loaded component as YAML")
    dump_parser.add_argument("game_id")
    dump_parser.add_argument(
        "component",
        choices=["game"] + [c.field for c in COMPONENTS],
        help="Component to print",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the catalog API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else None)
    settings = get_settings()
    catalog = GameCatalog(args.data_dir or settings.data_dir)

    if args.command == "list":
        return cmd_list(catalog)
    elif args.command == "validate":
        return cmd_validate(catalog, args.game_ids)
    elif args.command == "phases":
        return cmd_phases(catalog, args.game_id)
    elif args.command == "dump":
        return cmd_dump(catalog, args.game_id, args.component)
    elif args.command == "serve":
        return cmd_serve(catalog, args.host, args.port, settings.env)
    else:
        parser.print_help()
        return 1


def _print_load_error(error: GameLoadError) -> None:
    print(f"  {error}", file=sys.stderr)
    if isinstance(error.error, DefinitionValidationError):
        for failure in error.error.failures:
            print(f"    - {failure}", file=sys.stderr)


def cmd_list(catalog: GameCatalog) -> int:
    """List every game and whether it loads."""
    try:
        report = catalog.load_all()
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not report.games and not report.errors:
        print("No games found")
        return 0

    for game_id in sorted(set(report.games) | set(report.errors)):
        if game_id in report.games:
            game = report.games[game_id]
            params = game.definition.parameters
            print(f"{game_id:<16} ok      {game.name} ({params.min_players}-{params.max_players} players)")
        else:
            print(f"{game_id:<16} FAILED  {report.errors[game_id].component}")
    return 0 if report.ok else 1


def cmd_validate(catalog: GameCatalog, game_ids: list) -> int:
    """Load and validate games."""
    try:
        game_ids = game_ids or catalog.game_ids()
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    failed = 0
    for game_id in game_ids:
        try:
            game = catalog.load(game_id)
        except CatalogError as e:
            failed += 1
            print(f"{game_id}: invalid")
            print(f"  {e}", file=sys.stderr)
        except GameLoadError as e:
            failed += 1
            print(f"{game_id}: invalid")
            _print_load_error(e)
        else:
            files = ", ".join(f for f in game.component_files.values() if f)
            print(f"{game_id}: valid ({files})")

    return 1 if failed else 0


def cmd_phases(catalog: GameCatalog, game_id: str) -> int:
    """Print the phase graph."""
    try:
        game = catalog.load(game_id)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except GameLoadError as e:
        print(f"{game_id}: cannot load", file=sys.stderr)
        _print_load_error(e)
        return 1

    rule = game.rule
    print(f"Default phase: {rule.default_phase}")
    for phase in rule.phase_ids:
        if rule.is_absorbing(phase):
            print(f"{phase}: (absorbing)")
            continue
        print(f"{phase}:")
        for name, spec in rule.actions(phase).items():
            for token, next_phase in spec.result.items():
                print(f"  {name} --{token}--> {next_phase}")
    return 0


def cmd_dump(catalog: GameCatalog, game_id: str, component: str) -> int:
    """Print a component as normalized YAML."""
    try:
        game = catalog.load(game_id)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except GameLoadError as e:
        print(f"{game_id}: cannot load", file=sys.stderr)
        _print_load_error(e)
        return 1

    value = game.definition if component == "game" else getattr(game, component)
    if value is None:
        print(f"{game_id} has no {component} component", file=sys.stderr)
        return 1
    sys.stdout.write(encode(value))
    return 0


def cmd_serve(catalog: GameCatalog, host: str, port: int, env: str) -> int:
    """Run the catalog API with uvicorn."""
    import uvicorn

    from .api import CatalogService, create_app

    app = create_app(CatalogService(catalog=catalog, env=env))
    uvicorn.run(app, host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
