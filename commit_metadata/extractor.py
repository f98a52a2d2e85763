"""Extract YAML metadata blocks from commit and pull request messages.

A message carries metadata by embedding a YAML mapping between two ``---``
markers::

    Fix bug in parser

    ---
    type: fix
    breaking: false
    ---

Only the first block in a message is read. Each parsed mapping is stamped
with the ``author``, ``id`` and ``url`` of the commit or pull request it came
from; other YAML values are published unchanged.

Example:
>>> extract_metadata(
...     "push",
...     {"commits": [{"message": "chore\\n\\n---\\nlabel: chore\\n---", "id": "a1"}]},
... )
[{'label': 'chore', 'author': None, 'id': 'a1', 'url': None}]

"""

from __future__ import annotations

import math
import re
import typing as typ

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import MetadataParseError
from .events import decode_event
from .logging import get_logger, log_debug, log_info
from .models import CommitRecord, PullRequestEvent, PushEvent

if typ.TYPE_CHECKING:
    from .models import PullRequest

logger = get_logger(__name__)

YAML_VERSION = (1, 2)
METADATA_BLOCK_PATTERN = re.compile(r"---([\s\S]*?)---")
PROVENANCE_FIELDS = ("author", "id", "url")


def extract_commit_messages(event_name: str, payload: object) -> list[CommitRecord]:
    """Normalize the event payload into commit records.

    Parameters
    ----------
    event_name : str
        Name of the triggering event (``pull_request`` or ``push``).
    payload : object
        Decoded event payload, or ``None`` when the runner supplied none.

    Returns
    -------
    list[CommitRecord]
        One record per pull request or per push commit with a non-empty
        message, in payload order.

    Raises
    ------
    UnsupportedEventError
        If the event is not supported.

    """
    match decode_event(event_name, payload):
        case None | PullRequestEvent(pull_request=None):
            return []
        case PullRequestEvent(pull_request=pull_request, fields=fields):
            return [_pull_request_record(pull_request, fields)]
        case PushEvent(commits=commits):
            return [
                CommitRecord(
                    message=commit.message,
                    url=commit.url,
                    id=commit.id,
                    author=commit.author,
                )
                for commit in commits or ()
                if commit.message
            ]


def _pull_request_record(
    pull_request: PullRequest, fields: dict[str, typ.Any]
) -> CommitRecord:
    message = pull_request.title
    if pull_request.body:
        message = f"{message}\n\n{pull_request.body}"

    # Raw pull request fields are merged after the composed message, so a
    # ``message`` field on the pull request replaces it.
    if isinstance(pull_request.message, str):
        message = pull_request.message

    return CommitRecord(
        message=message,
        author=pull_request.author,
        id=pull_request.id,
        url=pull_request.url,
        fields=fields,
    )


def parse_metadata_block(message: str) -> typ.Any:  # noqa: ANN401
    """Parse the first ``---`` delimited block in ``message``.

    Returns ``None`` when the message has no block. Any other YAML document
    is returned as loaded, with mapping keys converted to strings; markdown
    tables and horizontal rules therefore yield plain scalars.

    Raises
    ------
    MetadataParseError
        If the block is not valid YAML or is empty.

    """
    match = METADATA_BLOCK_PATTERN.search(message)
    if match is None:
        return None

    block = match.group(1)
    try:
        loaded = _yaml().load(block)
    except YAMLError as exc:
        raise MetadataParseError.invalid_yaml(block, exc) from exc

    if loaded is None:
        raise MetadataParseError.empty_block(block)
    return _string_keys(loaded)


def extract_metadata(event_name: str, payload: object) -> list[typ.Any]:
    """Return the parsed metadata of every message in the event, in order.

    A single malformed block aborts the whole extraction; nothing is returned
    for messages processed before it.
    """
    records = extract_commit_messages(event_name, payload)
    log_debug(
        logger,
        "Commit messages: %s",
        "\n".join(record.message for record in records),
    )

    metadata: list[typ.Any] = []
    for record in records:
        log_info(logger, "Processing commit: %s", _describe(record))
        parsed = parse_metadata_block(record.message)
        if parsed is None:
            continue
        if isinstance(parsed, dict):
            for name in PROVENANCE_FIELDS:
                parsed[name] = getattr(record, name)
        metadata.append(parsed)
    return metadata


def _key_text(key: object) -> str:
    match key:
        case str():
            return key
        case bool():
            return "true" if key else "false"
        case None:
            return "null"
        case float() if key.is_integer():
            return str(int(key))
        case float() if math.isnan(key):
            return "NaN"
        case float() if math.isinf(key):
            return "Infinity" if key > 0 else "-Infinity"
        case _:
            return str(key)


def _string_keys(value: typ.Any) -> typ.Any:  # noqa: ANN401
    """Return ``value`` with every mapping key rendered as a JSON object key."""
    match value:
        case dict():
            return {_key_text(key): _string_keys(item) for key, item in value.items()}
        case list():
            return [_string_keys(item) for item in value]
        case _:
            return value


def _describe(record: CommitRecord) -> str:
    return msgspec.json.encode(record.as_dict()).decode()


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml


__all__ = [
    "METADATA_BLOCK_PATTERN",
    "extract_commit_messages",
    "extract_metadata",
    "parse_metadata_block",
]
