"""Check that the updater's environment file is complete and unchanged.

Two checks are available:

1. Settings validation: ``AppSettings`` is built from the env file and the
   Pike13 subdomain is required, so a broken deployment is caught before the
   first OAuth redirect fails.
2. Drift detection: a SHA-256 checksum of the env file can be recorded and
   later compared, flagging edits nobody meant to make.

Example usages::

    python -m scripts.check_env check --env-file .env.local
    python -m scripts.check_env record --env-file .env.local --hash-file .env.local.sha256
    python -m scripts.check_env verify --env-file .env.local --hash-file .env.local.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from app.core.config import AppSettings
from app.core.errors import ConfigurationError

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _validate_settings(env_file: Path) -> AppSettings:
    """Load settings from ``env_file`` and insist on a tenant subdomain."""
    settings = AppSettings(_env_file=str(env_file))  # type: ignore[call-arg]
    settings.require_subdomain()
    return settings


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Checksum baseline {hash_file} is missing; run 'record' first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate Pike13 updater settings and detect env file drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text, needs_hash in (
        ("check", "Validate settings only.", False),
        ("record", "Validate settings and store the checksum baseline.", True),
        ("verify", "Validate settings and compare against the baseline.", True),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "--env-file",
            default=".env.local",
            type=Path,
            help="Path to the env file (default: .env.local).",
        )
        if needs_hash:
            subparser.add_argument(
                "--hash-file",
                required=True,
                type=Path,
                help="Checksum baseline location.",
            )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        _validate_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except ConfigurationError as exc:
        print(f"Settings validation failed: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: EXIT_OK,
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
