"""Load rules and message catalogs from YAML files.

Rule files mirror Rule.from_dict:

    filters: [strip]
    fields:
      email:
        present: true
        uri: [http, https]
      nickname:
        length: [3, 16]
    checkboxes:
      colors:
        count: {min: 1, max: 3}
    combinations:
      password_check:
        fields: [password, confirm]
        same: true

Message files are nested action -> field -> constraint -> template mappings
(see formkeeper.messages).
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from formkeeper.messages import MessageCatalog, check_catalog
from formkeeper.rule import Rule
from formkeeper.types import LoaderError

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except OSError as e:
        raise LoaderError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise LoaderError(f"invalid YAML in {path}: {e}") from e


def load_rule(path: Path) -> Rule:
    """Load a Rule from a YAML file.

    Raises:
        LoaderError: If the file is unreadable or not a mapping
        ConfigurationError: If the rule itself is malformed
    """
    data = _load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LoaderError(f"{path}: rule file must contain a mapping")
    rule = Rule.from_dict(data)
    logger.debug(
        "Loaded rule from %s: %d field(s), %d checkbox(es), %d combination(s)",
        path,
        len(rule.fields),
        len(rule.checkboxes),
        len(rule.combinations),
    )
    return rule


def load_messages(path: Path) -> MessageCatalog:
    """Load a MessageCatalog from a YAML file.

    Raises:
        LoaderError: If the file is unreadable or has the wrong shape
    """
    data = _load_yaml(path)
    if data is None:
        data = {}
    return MessageCatalog(check_catalog(data, source=str(path)))


def load_params(path: Path) -> dict[str, Any]:
    """Load a flat name -> value(s) input document (JSON is valid YAML).

    Scalars are converted to strings, lists to lists of strings.
    """
    data = _load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise LoaderError(f"{path}: input must be a flat mapping of name -> value(s)")

    params: dict[str, Any] = {}
    for name, value in data.items():
        if isinstance(value, list):
            params[str(name)] = ["" if v is None else str(v) for v in value]
        elif isinstance(value, dict):
            raise LoaderError(f"{path}: input '{name}' must be a string or a list")
        else:
            params[str(name)] = "" if value is None else str(value)
    return params
