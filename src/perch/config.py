"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. ``AppConfig.from_env()`` layers environment
overrides on top of the defaults.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from perch.errors import ConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, store_path="data/submissions.json")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    workers: int = 1

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Static files (None disables static serving)
    static_dir: str | Path | None = None
    static_url: str = "/static"

    # Submission store backing file
    store_path: str | Path = "submissions.json"

    # Logging
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides: Any) -> AppConfig:
        """Build a config from environment variables.

        Recognized variables::

            PORT             listening port (default 3000)
            PERCH_HOST       bind address
            PERCH_DEBUG      1/true/yes/on enables debug mode
            PERCH_STORE      path of the submissions JSON file
            PERCH_LOG_LEVEL  debug, info, warning, ...

        Keyword *overrides* take precedence over the environment.

        Raises:
            ConfigurationError: If ``PORT`` is not a valid port number, or an
                override names an unknown field.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        port = env.get("PORT")
        if port:
            try:
                values["port"] = int(port)
            except ValueError:
                msg = f"PORT must be an integer, got {port!r}"
                raise ConfigurationError(msg) from None
            if not 0 < values["port"] < 65536:
                msg = f"PORT out of range: {values['port']}"
                raise ConfigurationError(msg)

        if host := env.get("PERCH_HOST"):
            values["host"] = host
        if debug := env.get("PERCH_DEBUG"):
            values["debug"] = debug.strip().lower() in _TRUTHY
        if store := env.get("PERCH_STORE"):
            values["store_path"] = store
        if level := env.get("PERCH_LOG_LEVEL"):
            values["log_level"] = level.lower()

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            msg = f"Unknown config field(s): {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        values.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**values)
