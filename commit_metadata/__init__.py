"""Extract YAML metadata blocks from GitHub commit and pull request messages.

The package reads the event that triggered a workflow step, finds the first
``---`` delimited YAML block in each pull request or commit message, and
publishes the parsed blocks as the ``metadata`` step output.

Quick examples
--------------

Extract metadata from a push payload::

    >>> from commit_metadata import extract_metadata
    >>> extract_metadata("push", {"commits": [{"message": "no block"}]})
    []

Run the step against the runner environment::

    >>> from commit_metadata import ActionConfig, run_action
    >>> exit_code = run_action(ActionConfig.from_env())
"""

from __future__ import annotations

from .action import run_action
from .config import ActionConfig
from .context import ActionContext, load_context
from .errors import (
    ActionConfigError,
    ActionOutputError,
    EventPayloadError,
    MetadataActionError,
    MetadataParseError,
    UnsupportedEventError,
)
from .events import decode_event
from .extractor import extract_commit_messages, extract_metadata, parse_metadata_block
from .models import CommitRecord, PullRequest, PullRequestEvent, PushCommit, PushEvent

__all__ = [
    "ActionConfig",
    "ActionConfigError",
    "ActionContext",
    "ActionOutputError",
    "CommitRecord",
    "EventPayloadError",
    "MetadataActionError",
    "MetadataParseError",
    "PullRequest",
    "PullRequestEvent",
    "PushCommit",
    "PushEvent",
    "UnsupportedEventError",
    "decode_event",
    "extract_commit_messages",
    "extract_metadata",
    "load_context",
    "parse_metadata_block",
    "run_action",
]
