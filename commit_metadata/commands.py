"""GitHub Actions workflow commands and step outputs.

Outputs go to the file named by ``GITHUB_OUTPUT`` using the runner's
heredoc syntax. Runners that predate the output file receive the legacy
``::set-output`` workflow command on stdout instead.
"""

from __future__ import annotations

import sys
import typing as typ
import uuid

import msgspec

from .errors import ActionOutputError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

_DELIMITER_PREFIX = "ghadelimiter_"


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def to_command_value(value: object) -> str:
    """Render ``value`` the way the runner expects command payloads.

    Strings pass through unchanged, ``None`` becomes an empty string and
    everything else is JSON encoded.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return msgspec.json.encode(value).decode()


def format_command(
    command: str,
    message: object = "",
    properties: cabc.Mapping[str, object] | None = None,
) -> str:
    """Return ``::command key=value::message`` with escaping applied."""
    rendered = [
        f"{key}={escape_property(to_command_value(value))}"
        for key, value in (properties or {}).items()
        if value is not None
    ]
    head = f"::{command}"
    if rendered:
        head = f"{head} {','.join(rendered)}"
    return f"{head}::{escape_data(to_command_value(message))}"


def issue_command(
    command: str,
    message: object = "",
    properties: cabc.Mapping[str, object] | None = None,
    *,
    stream: typ.TextIO | None = None,
) -> None:
    """Write a workflow command line to ``stream`` (stdout by default)."""
    out = stream if stream is not None else sys.stdout
    out.write(f"{format_command(command, message, properties)}\n")


def prepare_key_value_message(name: str, value: object) -> str:
    """Return an output file entry using a random heredoc delimiter.

    Raises
    ------
    ActionOutputError
        If the delimiter occurs in ``name`` or the rendered value.

    """
    delimiter = f"{_DELIMITER_PREFIX}{uuid.uuid4()}"
    rendered = to_command_value(value)
    if delimiter in name:
        raise ActionOutputError.delimiter_in_name(delimiter)
    if delimiter in rendered:
        raise ActionOutputError.delimiter_in_value(delimiter)
    return f"{name}<<{delimiter}\n{rendered}\n{delimiter}\n"


def set_output(
    name: str,
    value: object,
    *,
    output_path: Path | None = None,
    stream: typ.TextIO | None = None,
) -> None:
    """Publish a step output.

    Parameters
    ----------
    name : str
        Output name declared in ``action.yml``.
    value : object
        Output value; non-string values are JSON encoded.
    output_path : Path | None, optional
        Runner output file. ``None`` selects the legacy stdout command.
    stream : TextIO | None, optional
        Stream for the legacy command; defaults to stdout.

    Raises
    ------
    ActionOutputError
        If the output file cannot be written.

    """
    if output_path is None:
        out = stream if stream is not None else sys.stdout
        out.write("\n")
        issue_command("set-output", value, {"name": name}, stream=out)
        return

    entry = prepare_key_value_message(name, value)
    try:
        with output_path.open("a", encoding="utf-8") as handle:
            handle.write(entry)
    except OSError as exc:
        raise ActionOutputError.unwritable(output_path, exc) from exc


def set_failed(message: str, *, stream: typ.TextIO | None = None) -> None:
    """Report a step failure to the runner as an error annotation."""
    issue_command("error", message, stream=stream)


__all__ = [
    "escape_data",
    "escape_property",
    "format_command",
    "issue_command",
    "prepare_key_value_message",
    "set_failed",
    "set_output",
    "to_command_value",
]
