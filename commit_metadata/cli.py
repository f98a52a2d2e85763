"""Command-line entrypoint for extracting commit metadata."""

from __future__ import annotations

import argparse
import dataclasses as dc
from pathlib import Path

from .action import run_action
from .config import ActionConfig
from .logging import configure_logging, get_logger, log_warning

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commit-metadata",
        description=(
            "Extract YAML metadata blocks from pull request and push event "
            "messages and publish them as the 'metadata' step output."
        ),
    )
    parser.add_argument(
        "--event-name",
        default=None,
        help="Event kind (pull_request or push); defaults to GITHUB_EVENT_NAME",
    )
    parser.add_argument(
        "--event-path",
        type=Path,
        default=None,
        help="Event payload JSON; defaults to GITHUB_EVENT_PATH",
    )
    parser.add_argument(
        "--output-path",
        type=Path,
        default=None,
        help="Step output file; defaults to GITHUB_OUTPUT",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level; defaults to COMMIT_METADATA_LOG_LEVEL or INFO",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the action with environment settings overridden by ``argv``.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the step failed.

    """
    args = _build_parser().parse_args(argv)

    overrides = {
        field: value
        for field, value in (
            ("event_name", args.event_name),
            ("event_path", args.event_path),
            ("output_path", args.output_path),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    config = dc.replace(ActionConfig.from_env(), **overrides)

    normalized_level, invalid_level = configure_logging(config.log_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            config.log_level,
            normalized_level,
        )

    return run_action(config)


if __name__ == "__main__":
    raise SystemExit(main())
