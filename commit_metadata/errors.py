"""Errors raised while extracting commit metadata."""

from __future__ import annotations

# Length of the block excerpt quoted in parse errors
_BLOCK_PREVIEW_LIMIT = 80


class MetadataActionError(Exception):
    """Base class for every failure the action reports to the runner.

    The action boundary catches this type to mark the step as failed.
    """


class ActionConfigError(MetadataActionError):
    """Raised when the action environment is missing required settings."""

    @classmethod
    def missing_event_name(cls) -> ActionConfigError:
        """Return an error for a run without an event name."""
        return cls("GITHUB_EVENT_NAME is required to extract commit metadata")


class UnsupportedEventError(MetadataActionError):
    """Raised when the triggering event is not a pull request or a push.

    Attributes
    ----------
    event_name
        Name of the event the action was asked to handle.

    """

    def __init__(self, message: str, *, event_name: str) -> None:
        """Initialise with a message and the offending event name."""
        self.event_name = event_name
        super().__init__(message)

    @classmethod
    def for_event(cls, event_name: str) -> UnsupportedEventError:
        """Return an error naming the unsupported event."""
        return cls(f"Unsupported event type: {event_name}", event_name=event_name)


class EventPayloadError(UnsupportedEventError):
    """Raised when a payload cannot be read as the named event kind."""

    @classmethod
    def invalid_shape(cls, event_name: str, detail: object) -> EventPayloadError:
        """Return an error for a payload that contradicts its event kind."""
        return cls(
            f"Invalid {event_name} event payload: {detail}", event_name=event_name
        )

    @classmethod
    def unreadable(cls, event_name: str, detail: object) -> EventPayloadError:
        """Return an error for an event file that cannot be loaded."""
        return cls(
            f"Unable to read {event_name} event payload: {detail}",
            event_name=event_name,
        )


class MetadataParseError(MetadataActionError):
    """Raised when a metadata block is not valid YAML or holds no document.

    Attributes
    ----------
    block
        Raw text captured between the ``---`` markers.

    """

    def __init__(self, message: str, *, block: str) -> None:
        """Initialise with a message and the captured block text."""
        self.block = block
        super().__init__(message)

    @staticmethod
    def _preview(block: str) -> str:
        text = block.strip()
        if len(text) <= _BLOCK_PREVIEW_LIMIT:
            return text
        return f"{text[:_BLOCK_PREVIEW_LIMIT]}..."

    @classmethod
    def invalid_yaml(cls, block: str, detail: object) -> MetadataParseError:
        """Return an error for a block the YAML loader rejects."""
        return cls(f"Invalid metadata block: {detail}", block=block)

    @classmethod
    def empty_block(cls, block: str) -> MetadataParseError:
        """Return an error for a block that holds no YAML document."""
        return cls(f"Metadata block is empty: {cls._preview(block)!r}", block=block)


class ActionOutputError(MetadataActionError):
    """Raised when a step output cannot be handed to the runner."""

    @classmethod
    def delimiter_in_name(cls, delimiter: str) -> ActionOutputError:
        """Return an error for an output name containing the heredoc delimiter."""
        return cls(
            f"Unexpected input: name should not contain the delimiter {delimiter}"
        )

    @classmethod
    def delimiter_in_value(cls, delimiter: str) -> ActionOutputError:
        """Return an error for an output value containing the heredoc delimiter."""
        return cls(
            f"Unexpected input: value should not contain the delimiter {delimiter}"
        )

    @classmethod
    def unwritable(cls, path: object, detail: object) -> ActionOutputError:
        """Return an error for an output file that cannot be appended to."""
        return cls(f"Unable to write step output to {path}: {detail}")


__all__ = [
    "ActionConfigError",
    "ActionOutputError",
    "EventPayloadError",
    "MetadataActionError",
    "MetadataParseError",
    "UnsupportedEventError",
]
