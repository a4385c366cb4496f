"""CLI entrypoints for obdlint commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import find_workspace_root
from .coverage import REMOVE_FILTER, format_years_as_ranges
from .document import DocumentParseError, line_column
from .logging import configure_logging
from .models import Filter
from .workspace import CommandOutcome, Workspace


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_workspace_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "workspace",
        nargs="?",
        default=".",
        help="Path to the signalset repository (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obdlint",
        description="Lint OBD-II signal sets and keep debug filters in line with model-year coverage.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    optimize_parser = subparsers.add_parser(
        "optimize",
        help="Tighten debug filters using test case coverage.",
    )
    _add_verbose_option(optimize_parser, suppress_default=True)
    _add_workspace_argument(optimize_parser)
    optimize_parser.add_argument(
        "--signalset",
        default=None,
        help="Signalset file relative to the workspace (defaults to the configured path).",
    )
    optimize_parser.add_argument(
        "--commit",
        action="store_true",
        help="Write the optimized filters back to the signalset.",
    )

    lint_parser = subparsers.add_parser(
        "lint",
        help="Run the lint rules against a signalset file.",
    )
    _add_verbose_option(lint_parser, suppress_default=True)
    lint_parser.add_argument("file", help="Signalset JSON file to lint.")
    lint_parser.add_argument(
        "--workspace",
        default=None,
        help="Workspace holding .obdlint.yml (defaults to the nearest one above FILE).",
    )
    lint_parser.add_argument(
        "--fix",
        action="store_true",
        help="Apply every non-conflicting suggested fix and rewrite the file.",
    )

    years_parser = subparsers.add_parser(
        "years",
        help="Show supported and unsupported model years for a command.",
    )
    _add_verbose_option(years_parser, suppress_default=True)
    years_parser.add_argument(
        "identifier", help="Command identifier such as 7E0.221100, or a signal ID with --signal."
    )
    _add_workspace_argument(years_parser)
    years_parser.add_argument(
        "--signal",
        action="store_true",
        help="Treat the identifier as a signal ID and search test cases for it.",
    )

    rules_parser = subparsers.add_parser(
        "rules",
        help="List the available lint rules.",
    )
    _add_verbose_option(rules_parser, suppress_default=True)
    _add_workspace_argument(rules_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for obdlint commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "optimize":
        _run_optimize(parser, args)
    elif args.command == "lint":
        _run_lint(parser, args)
    elif args.command == "years":
        _run_years(args)
    elif args.command == "rules":
        _run_rules(args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_optimize(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    workspace = Workspace(Path(args.workspace))
    signalset = Path(args.signalset) if args.signalset else None
    try:
        outcome = workspace.run_optimize(signalset, commit=bool(args.commit))
    except FileNotFoundError as exc:
        parser.exit(1, f"Error: {exc}\n")
    except DocumentParseError as exc:
        parser.exit(1, f"Error: Failed to parse signalset JSON: {exc}\n")

    print(f"Total commands: {len(outcome.commands)}")
    print("Command IDs with Supported Model Years:")
    print("----------------------------------------")
    for command in outcome.commands:
        _print_command(command)

    changed = outcome.changed_commands
    if not changed:
        print("\nNo debug filter changes needed")
        return
    if outcome.committed:
        print(f"\nUpdated {len(changed)} command(s) in {_relativize(outcome.path)}")
    else:
        print(f"\n{len(changed)} command(s) can be optimized (preview, use --commit to apply):")
        print(outcome.diff or "(no diff)")


def _print_command(command: CommandOutcome) -> None:
    years = ", ".join(str(year) for year in command.supported) or "No test cases found"
    print(f"  {command.index}. {command.command_id}")
    print(f"     Years: {years}")
    if command.unsupported:
        print(f"     Unsupported: {format_years_as_ranges(command.unsupported)}")
    if command.proposed is None:
        if command.current is not None:
            print(f"     Current dbgfilter: {_render_filter(command.current)} (already optimal)")
        return
    if command.current is not None:
        print(f"     Current dbgfilter: {_render_filter(command.current)}")
    if command.proposed is REMOVE_FILTER:
        print("     Recommendation: Remove dbgfilter (all filtered years are supported)")
    elif isinstance(command.proposed, Filter):
        label = "Optimized" if command.current is not None else "Proposed"
        print(f"     {label} dbgfilter: {_render_filter(command.proposed)}")


def _render_filter(debug_filter: Filter) -> str:
    parts = [f"{key}: {value}" for key, value in debug_filter.to_dict().items()]
    return "{" + ", ".join(parts) + "}"


def _run_lint(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    path = Path(args.file)
    if args.workspace is not None:
        root = Path(args.workspace)
    else:
        root = find_workspace_root(path) or path.parent
    workspace = Workspace(root)
    try:
        outcome = workspace.lint_file(path, fix=bool(args.fix))
    except FileNotFoundError as exc:
        parser.exit(1, f"Error: {exc}\n")

    text = path.read_text(encoding="utf-8")
    display = _relativize(path)
    for result in outcome.report.results:
        line, column = line_column(text, result.offset)
        print(f"{display}:{line}:{column}: {result.severity.value} [{result.rule_id}] {result.message}")
    if outcome.fixed:
        print(f"Applied {outcome.fixed} fix(es) to {display}")
    if outcome.skipped:
        print(f"Skipped {len(outcome.skipped)} conflicting fix(es); run again to apply them")
    if outcome.report.has_errors:
        parser.exit(1, f"{len(outcome.report.errors)} error(s) found\n")


def _run_years(args: argparse.Namespace) -> None:
    workspace = Workspace(Path(args.workspace))
    if args.signal:
        outcome = workspace.signal_years(args.identifier)
    else:
        outcome = workspace.years(args.identifier)
    print(outcome.identifier)
    _print_year_groups("Supported", outcome.supported)
    _print_year_groups("Unsupported", outcome.unsupported)


def _print_year_groups(label: str, groups: dict[str, list[str]]) -> None:
    non_empty = {name: years for name, years in groups.items() if years}
    if not non_empty:
        print(f"  {label}: none")
        return
    print(f"  {label}:")
    for name, years in non_empty.items():
        print(f"    {name}: {format_years_as_ranges(years)}")


def _run_rules(args: argparse.Namespace) -> None:
    workspace = Workspace(Path(args.workspace))
    for config in workspace.registry.rule_configs():
        state = "enabled" if config.enabled else "disabled"
        print(f"{config.id:<34} {config.severity.value:<12} {state}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
