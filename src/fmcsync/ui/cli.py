# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from fmcsync.adapters.fmc import FmcAPIError, ReferenceKind
from fmcsync.adapters.state_file import StateFileError
from fmcsync.app import (
    create_access_policy,
    delete_access_policy,
    find_reference,
    read_access_policy,
)
from fmcsync.config import ConfigurationError, configure_logging
from fmcsync.domain.diagnostics import Severity, has_errors
from fmcsync.resources.access_policy import AccessPolicyConfig

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from fmcsync.domain.diagnostics import Diagnostics

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile FMC access control policies")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create an access policy from a TOML file")
    create.add_argument("config", type=Path, help="Path to the access policy declaration")

    read = subparsers.add_parser("read", help="Refresh and print an access policy's state")
    read.add_argument("name", help="Name of a previously created access policy")

    delete = subparsers.add_parser("delete", help="Delete an access policy")
    delete.add_argument("name", help="Name of a previously created access policy")

    lookup = subparsers.add_parser("lookup", help="Print the identity of a referenced object")
    lookup.add_argument("kind", choices=[kind.value for kind in ReferenceKind])
    lookup.add_argument("name", help="Object name as shown in FMC")

    return parser.parse_args(list(argv))


def _load_declaration(path: Path) -> AccessPolicyConfig:
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    try:
        return AccessPolicyConfig.model_validate(document)
    except ValidationError as exc:
        raise ValueError(f"Invalid access policy declaration in {path}:\n{exc}") from exc


def _report(diagnostics: Diagnostics) -> int:
    for diagnostic in diagnostics:
        level = logging.ERROR if diagnostic.severity is Severity.ERROR else logging.WARNING
        log.log(level, "%s", diagnostic)
    return 1 if has_errors(diagnostics) else 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        declaration = (
            _load_declaration(parsed_args.config) if parsed_args.command == "create" else None
        )
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if declaration is not None:
            exit_code = _report(create_access_policy(declaration))
        elif parsed_args.command == "read":
            handle, diagnostics = read_access_policy(parsed_args.name)
            exit_code = _report(diagnostics)
            if handle is not None:
                document = {"id": handle.identity, "attributes": dict(handle.attributes())}
                print(json.dumps(document, indent=2, sort_keys=True))
        elif parsed_args.command == "delete":
            exit_code = _report(delete_access_policy(parsed_args.name))
        else:
            print(find_reference(ReferenceKind(parsed_args.kind), parsed_args.name))
            exit_code = 0
    except (ConfigurationError, StateFileError):
        log.exception("Configuration error")
        sys.exit(2)
    except FmcAPIError:
        log.exception("FMC request failed")
        sys.exit(1)

    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
