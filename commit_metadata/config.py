"""Runtime configuration for the metadata action.

Settings come from the environment GitHub Actions prepares for every step:

>>> import os
>>> os.environ["GITHUB_EVENT_NAME"] = "push"
>>> ActionConfig.from_env().event_name
'push'

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path

_DEFAULT_LOG_LEVEL = "INFO"


def _read_env(name: str) -> str | None:
    """Return the stripped value of ``name``, treating blanks as unset."""
    raw = os.environ.get(name, "")
    value = raw.strip()
    return value or None


def _read_path(name: str) -> Path | None:
    value = _read_env(name)
    return Path(value) if value is not None else None


@dc.dataclass(frozen=True, slots=True)
class ActionConfig:
    """Configuration for a single metadata extraction run.

    Attributes
    ----------
    event_name
        Name of the triggering event. ``None`` when the runner did not set
        ``GITHUB_EVENT_NAME``; the run then fails when the context is loaded.
    event_path
        JSON file holding the event payload.
    output_path
        File that receives step outputs. When ``None`` outputs are written to
        stdout as workflow commands.
    log_level
        femtologging level name. Default is ``INFO``.

    """

    event_name: str | None = None
    event_path: Path | None = None
    output_path: Path | None = None
    log_level: str = _DEFAULT_LOG_LEVEL

    @staticmethod
    def _resolve_log_level() -> str:
        """Pick the log level, honouring the runner's debug switch."""
        if _read_env("RUNNER_DEBUG") == "1":
            return "DEBUG"
        return (
            _read_env("COMMIT_METADATA_LOG_LEVEL")
            or _read_env("INPUT_LOG_LEVEL")
            or _DEFAULT_LOG_LEVEL
        )

    @classmethod
    def from_env(cls) -> ActionConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``GITHUB_EVENT_NAME``: Name of the triggering event.
        - ``GITHUB_EVENT_PATH``: Path to the event payload JSON file.
        - ``GITHUB_OUTPUT``: Path to the step output file.
        - ``COMMIT_METADATA_LOG_LEVEL`` or ``INPUT_LOG_LEVEL``: Log level.
          ``RUNNER_DEBUG=1`` forces ``DEBUG``.

        Returns
        -------
        ActionConfig
            Configuration instance with values from environment or defaults.

        """
        return cls(
            event_name=_read_env("GITHUB_EVENT_NAME"),
            event_path=_read_path("GITHUB_EVENT_PATH"),
            output_path=_read_path("GITHUB_OUTPUT"),
            log_level=cls._resolve_log_level(),
        )
