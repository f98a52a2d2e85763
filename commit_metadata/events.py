"""Decode raw GitHub event payloads into typed events.

The runner hands the action an event name and an untyped JSON payload. This
module is the single place where the payload's shape is checked: callers
receive a :class:`~commit_metadata.models.PullRequestEvent`, a
:class:`~commit_metadata.models.PushEvent`, or ``None`` when there is no
payload at all.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import msgspec

from .errors import EventPayloadError, UnsupportedEventError
from .models import PullRequest, PullRequestEvent, PushCommit, PushEvent

if typ.TYPE_CHECKING:
    from .models import Event

PULL_REQUEST_EVENT = "pull_request"
PUSH_EVENT = "push"
SUPPORTED_EVENTS = frozenset({PULL_REQUEST_EVENT, PUSH_EVENT})


def decode_event(event_name: str, payload: object) -> Event | None:
    """Return the typed event for ``event_name``.

    A missing payload short-circuits before the event name is checked, so an
    empty run never fails.

    Raises
    ------
    UnsupportedEventError
        If ``event_name`` is neither ``pull_request`` nor ``push``.
    EventPayloadError
        If the payload does not have the shape of the named event.

    """
    if payload is None:
        return None

    if event_name not in SUPPORTED_EVENTS:
        raise UnsupportedEventError.for_event(event_name)

    if not isinstance(payload, cabc.Mapping):
        raise EventPayloadError.invalid_shape(
            event_name, f"expected an object, got {type(payload).__name__}"
        )

    try:
        if event_name == PULL_REQUEST_EVENT:
            return _decode_pull_request(payload)
        return _decode_push(payload)
    except msgspec.ValidationError as exc:
        raise EventPayloadError.invalid_shape(event_name, exc) from exc


def _decode_pull_request(payload: cabc.Mapping[str, typ.Any]) -> PullRequestEvent:
    raw = payload.get("pull_request")
    if raw is None:
        return PullRequestEvent()

    pull_request = msgspec.convert(raw, type=PullRequest)
    return PullRequestEvent(pull_request=pull_request, fields=dict(raw))


def _decode_push(payload: cabc.Mapping[str, typ.Any]) -> PushEvent:
    raw = payload.get("commits")
    if raw is None:
        return PushEvent()

    return PushEvent(commits=msgspec.convert(raw, type=list[PushCommit]))


__all__ = [
    "PULL_REQUEST_EVENT",
    "PUSH_EVENT",
    "SUPPORTED_EVENTS",
    "decode_event",
]
