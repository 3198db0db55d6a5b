"""Perch CLI — serve the form apps and inspect stored submissions.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys

from perch.apps import APP_NAMES


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — server-rendered form applications.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve one of the form apps")
    run_parser.add_argument("app", choices=APP_NAMES, help="Which app to serve")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--store", default=None, help="Path of the submissions JSON file")
    run_parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Single worker with auto-reload",
    )
    run_parser.add_argument("--log-level", default=None, help="debug, info, warning, error")

    # -- perch submissions ------------------------------------------------
    list_parser = subparsers.add_parser("submissions", help="Print stored submissions")
    list_parser.add_argument("--store", default=None, help="Path of the submissions JSON file")
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the same JSON document /api/submissions returns",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from perch.cli._run import run_app

        run_app(args)
    elif args.command == "submissions":
        from perch.cli._submissions import print_submissions

        print_submissions(args)
