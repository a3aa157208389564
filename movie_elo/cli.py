from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Movie ELO (no subcommand runs the web UI)")
    subparsers = parser.add_subparsers(dest="command", required=False)

    web_parser = subparsers.add_parser("web", help="Run the browser comparison UI")
    web_parser.add_argument("--host", default=None)
    web_parser.add_argument("--port", type=int, default=None)
    web_parser.add_argument("--no-open", action="store_true")

    rank_parser = subparsers.add_parser("rank", help="Compare movies from a CSV in the terminal")
    rank_parser.add_argument("csv_path", help="CSV file with a title column and optional ratings")
    rank_parser.add_argument("--title-column", default=None)
    rank_parser.add_argument("--rating-column", default=None)
    rank_parser.add_argument("--k-factor", type=float, default=None)
    rank_parser.add_argument(
        "--output",
        default=None,
        help="Where to write the exported CSV (default: exports dir, dated file name)",
    )

    test_parser = subparsers.add_parser("test", help="Run all tests with pytest")
    test_parser.add_argument(
        "pytest_args",
        nargs=argparse.REMAINDER,
        help="Optional extra pytest args; use `--` before args (e.g. movie-elo test -- -k store)",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def run_tests(args: argparse.Namespace) -> int:
    cmd = [sys.executable, "-m", "pytest"]
    if args.pytest_args:
        cmd.extend(arg for arg in args.pytest_args if arg != "--")
    print("Running:", " ".join(cmd))
    return subprocess.call(cmd)


def run_rank(args: argparse.Namespace, console: Console | None = None) -> int:
    from movie_elo.core.config import get_settings
    from movie_elo.core.csv_io import CsvImportError, export_filename, export_movies_csv, parse_movies_csv
    from movie_elo.runtime.rating_store import RatingStore
    from movie_elo.runtime.terminal import run_terminal_session

    console = console or Console()
    settings = get_settings()
    title_column = args.title_column or settings.title_column
    rating_column = args.rating_column or settings.rating_column

    csv_path = Path(args.csv_path).expanduser()
    try:
        text = csv_path.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Failed to read {csv_path}: {exc}[/red]")
        return 1

    try:
        records = parse_movies_csv(text, title_column=title_column, rating_column=rating_column)
    except CsvImportError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    store = RatingStore()
    store.load(records)
    k_factor = args.k_factor if args.k_factor is not None else settings.default_k_factor
    run_terminal_session(store, k_factor=k_factor, console=console)

    if not store.items:
        return 0

    if args.output:
        output_path = Path(args.output).expanduser()
        output_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        settings.ensure_runtime_dirs()
        output_path = settings.exports_path / export_filename()
    output_path.write_text(export_movies_csv(store.export_rows(), rating_column=rating_column), encoding="utf-8")
    console.print(f"Saved rankings to {output_path}")
    return 0


def main() -> None:
    from movie_elo.core.config import get_settings

    parser = build_parser()
    args = parser.parse_args()
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command in {None, "web"}:
        from movie_elo.web_server import run_web_server

        host = getattr(args, "host", None) or settings.web_host
        port = getattr(args, "port", None) or settings.web_port
        run_web_server(host=host, port=port, no_open=bool(getattr(args, "no_open", False)), log_level=settings.log_level)
        return

    if args.command == "rank":
        raise SystemExit(run_rank(args))

    if args.command == "test":
        raise SystemExit(run_tests(args))

    parser.print_help()


if __name__ == "__main__":
    main()
