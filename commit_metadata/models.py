"""Typed event and commit structures used during metadata extraction."""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class PullRequest(msgspec.Struct, kw_only=True):
    """Fields of a ``pull_request`` object that extraction reads.

    Attributes
    ----------
    title : str
        Pull request title; always the start of the effective message.
    body : str, optional
        Pull request description appended after a blank line when non-empty.
    message : str, optional
        Present only when the payload carries its own ``message`` field, which
        then replaces the title and body composition.
    id, url, author : Any, optional
        Provenance copied onto every metadata record.

    """

    title: str
    body: str | None = None
    message: str | msgspec.UnsetType = msgspec.UNSET
    id: typ.Any = None
    url: typ.Any = None
    author: typ.Any = None


class PushCommit(msgspec.Struct, kw_only=True):
    """A single entry of a push event's ``commits`` array."""

    message: str | None = None
    url: typ.Any = None
    id: typ.Any = None
    author: typ.Any = None


class PullRequestEvent(msgspec.Struct, frozen=True, kw_only=True):
    """Decoded ``pull_request`` event.

    ``fields`` keeps the raw pull request object so every field travels with
    the commit record, not just the typed subset above.
    """

    pull_request: PullRequest | None = None
    fields: dict[str, typ.Any] = msgspec.field(default_factory=dict)


class PushEvent(msgspec.Struct, frozen=True, kw_only=True):
    """Decoded ``push`` event."""

    commits: list[PushCommit] | None = None


type Event = PullRequestEvent | PushEvent


@dataclasses.dataclass(frozen=True, slots=True)
class CommitRecord:
    """Normalized message plus provenance for one commit or pull request.

    Attributes
    ----------
    message
        Text searched for a metadata block.
    author, id, url
        Provenance attached to the parsed metadata.
    fields
        Additional source fields. Pull request records carry the whole pull
        request object here; push records leave it empty.

    """

    message: str
    author: typ.Any = None
    id: typ.Any = None
    url: typ.Any = None
    fields: cabc.Mapping[str, typ.Any] = dataclasses.field(default_factory=dict)

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the record as a flat mapping, source fields last."""
        if self.fields:
            return {"message": self.message, **self.fields}
        return {
            "message": self.message,
            "url": self.url,
            "id": self.id,
            "author": self.author,
        }


__all__ = [
    "CommitRecord",
    "Event",
    "PullRequest",
    "PullRequestEvent",
    "PushCommit",
    "PushEvent",
]
