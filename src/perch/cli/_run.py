"""``perch run`` — build one of the bundled apps and serve it with pounce."""

import argparse
import sys

from perch.apps import load_app
from perch.config import AppConfig
from perch.errors import ConfigurationError
from perch.logs import configure_logging


def run_app(args: argparse.Namespace) -> None:
    """Start the app named by ``args.app``.

    Command-line flags win over environment variables, which win over
    the ``AppConfig`` defaults.
    """
    try:
        config = AppConfig.from_env(
            host=args.host,
            port=args.port,
            store_path=args.store,
            debug=args.debug,
            log_level=args.log_level,
        )
        configure_logging(config.log_level)
    except (ConfigurationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app = load_app(args.app, config)
    app.run()
