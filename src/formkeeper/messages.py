"""Message catalog for failed constraints.

Messages are looked up by (action, field, constraint):

    signup:
      email:
        present: "Please enter your email address."
        DEFAULT: "That email address doesn't look right."
    DEFAULT:
      email:
        DEFAULT: "Email is invalid."

"DEFAULT" is a wildcard at the action and constraint levels. When no
template matches, the built-in "<field> is invalid." is returned.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from formkeeper.types import LoaderError

DEFAULT_ACTION_NAME = "DEFAULT"
DEFAULT_CONSTRAINT_NAME = "DEFAULT"


class MessageCatalog:
    """Layered lookup of human-readable failure messages."""

    def __init__(self, data: Mapping[str, Any] | None = None):
        """Wrap a nested catalog mapping.

        Raises:
            LoaderError: If data is not an action -> field -> constraint mapping
        """
        self._data: Mapping[str, Any] = check_catalog(data or {})

    @classmethod
    def from_file(cls, path: Path | str) -> "MessageCatalog":
        """Load a catalog from a YAML file."""
        from formkeeper.loader import load_messages

        return load_messages(Path(path))

    def get(self, action_name: str, field_name: str, constraint_name: str) -> str:
        action = self._data.get(str(action_name))
        if action is None:
            action = self._data.get(DEFAULT_ACTION_NAME)
        if action is None:
            return self.build_default_message(field_name)

        field = action.get(str(field_name))
        if field is None:
            return self.build_default_message(field_name)

        message = field.get(str(constraint_name))
        if message is None:
            message = field.get(DEFAULT_CONSTRAINT_NAME)
        if message is None:
            return self.build_default_message(field_name)
        return str(message)

    @staticmethod
    def build_default_message(field_name: str) -> str:
        return f"{field_name} is invalid."


def check_catalog(data: Any, source: str = "<catalog>") -> Mapping[str, Any]:
    """Check that data has the action -> field -> constraint shape.

    Raises:
        LoaderError: If any level is not a mapping
    """
    if not isinstance(data, Mapping):
        raise LoaderError(f"{source}: message catalog must be a mapping")
    for action_name, action in data.items():
        if not isinstance(action, Mapping):
            raise LoaderError(f"{source}: action '{action_name}' must be a mapping")
        for field_name, field in action.items():
            if not isinstance(field, Mapping):
                raise LoaderError(
                    f"{source}: field '{action_name}.{field_name}' must be a mapping"
                )
    return data
