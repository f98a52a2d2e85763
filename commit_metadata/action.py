"""Run the metadata extraction step and report the result to the runner.

:func:`run_action` is the only place failures are caught. Every error raised
while loading the event, parsing metadata or writing the output becomes a
single failed step with the error's message as the annotation.
"""

from __future__ import annotations

import typing as typ

from .commands import set_failed, set_output
from .context import load_context
from .extractor import extract_metadata
from .logging import get_logger, log_exception, log_info

if typ.TYPE_CHECKING:
    from .config import ActionConfig

logger = get_logger(__name__)

METADATA_OUTPUT = "metadata"
NO_METADATA_MESSAGE = "No metadata block found in commit messages."


def run_action(config: ActionConfig, *, stream: typ.TextIO | None = None) -> int:
    """Extract metadata for the configured event and publish it.

    Parameters
    ----------
    config : ActionConfig
        Event location, output destination and log level for this run.
    stream : TextIO | None, optional
        Destination for workflow commands; defaults to stdout.

    Returns
    -------
    int
        Exit code: 0 when the output was published, 1 when the step failed.

    """
    try:
        context = load_context(config)
        metadata = extract_metadata(context.event_name, context.payload)
        if not metadata:
            log_info(logger, NO_METADATA_MESSAGE)
        set_output(
            METADATA_OUTPUT,
            metadata,
            output_path=config.output_path,
            stream=stream,
        )
    except Exception as exc:
        log_exception(logger, f"Metadata extraction failed: {exc}", exc)
        set_failed(str(exc), stream=stream)
        return 1
    return 0


__all__ = ["METADATA_OUTPUT", "NO_METADATA_MESSAGE", "run_action"]
