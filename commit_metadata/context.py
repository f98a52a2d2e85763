"""Load the event the runner injected into the step environment."""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

from .errors import ActionConfigError, EventPayloadError
from .logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import ActionConfig

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class ActionContext:
    """Event name and raw payload for one run."""

    event_name: str
    payload: typ.Any


def load_context(config: ActionConfig) -> ActionContext:
    """Read the event named in ``config`` from its payload file.

    A missing event file yields an empty payload object, matching what the
    runner exposes to actions when ``GITHUB_EVENT_PATH`` is absent.

    Raises
    ------
    ActionConfigError
        If no event name is configured.
    EventPayloadError
        If the payload file exists but cannot be read or is not JSON.

    """
    if config.event_name is None:
        raise ActionConfigError.missing_event_name()

    return ActionContext(
        event_name=config.event_name,
        payload=_read_payload(config.event_name, config.event_path),
    )


def _read_payload(event_name: str, path: Path | None) -> typ.Any:  # noqa: ANN401
    if path is None:
        return {}

    if not path.exists():
        log_warning(logger, "GITHUB_EVENT_PATH %s does not exist", path)
        return {}

    try:
        return msgspec.json.decode(path.read_bytes())
    except (OSError, msgspec.DecodeError) as exc:
        raise EventPayloadError.unreadable(event_name, exc) from exc


__all__ = ["ActionContext", "load_context"]
