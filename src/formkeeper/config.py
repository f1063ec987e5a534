"""Runtime settings for the FormKeeper command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from formkeeper.messages import DEFAULT_ACTION_NAME


@dataclass
class Settings:
    """FormKeeper settings.

    Attributes:
        messages_path: Default message catalog file, or None
        action: Action name used for message lookup
        log_level: Logging level name
    """

    messages_path: Path | None = None
    action: str = DEFAULT_ACTION_NAME
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        Reads:
        1. FORMKEEPER_MESSAGES - message catalog path
        2. FORMKEEPER_ACTION - action name (default: DEFAULT)
        3. FORMKEEPER_LOG_LEVEL - logging level (default: WARNING)
        """
        messages = os.environ.get("FORMKEEPER_MESSAGES")
        return cls(
            messages_path=Path(messages) if messages else None,
            action=os.environ.get("FORMKEEPER_ACTION") or DEFAULT_ACTION_NAME,
            log_level=(os.environ.get("FORMKEEPER_LOG_LEVEL") or "WARNING").upper(),
        )
