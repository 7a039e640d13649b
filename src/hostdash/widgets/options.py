"""
Resolution of widget options against per-widget defaults.

Recognized keys are ``title``, ``unit``, ``metrics``, ``headers`` and
``command``. Any other key stays in the options mapping for the
rendering sink.
"""

from typing import List, Mapping, Optional, Tuple

OPTION_TITLE = "title"
OPTION_UNIT = "unit"
OPTION_METRICS = "metrics"
OPTION_HEADERS = "headers"
OPTION_COMMAND = "command"

RECOGNIZED_OPTIONS = (OPTION_TITLE, OPTION_UNIT, OPTION_METRICS, OPTION_HEADERS, OPTION_COMMAND)


def resolve_title(options: Mapping[str, str], default: str) -> str:
    """Return the caller's title when given, even an empty one."""
    if OPTION_TITLE in options:
        return options[OPTION_TITLE]
    return default


def resolve_unit(options: Mapping[str, str], default: str) -> str:
    """Return the caller's unit when given, else the widget default."""
    if OPTION_UNIT in options:
        return options[OPTION_UNIT]
    return default


def split_list(value: str) -> List[str]:
    """Split a comma separated option into trimmed tokens, keeping order."""
    return [token.strip() for token in value.strip().split(",")]


def resolve_list(options: Mapping[str, str], key: str, default: List[str]) -> List[str]:
    """
    Resolve a list-valued option.

    The option overrides the default only if it is present and not blank.

    Args:
        options: Widget options
        key: Option key (``metrics`` or ``headers``)
        default: Value used when the option is absent or blank

    Returns:
        Ordered list of tokens
    """
    value: Optional[str] = options.get(key)
    if value is not None and value.strip():
        return split_list(value)
    return list(default)


def resolve_command(options: Mapping[str, str], default: str) -> Tuple[str, bool]:
    """
    Resolve the shell command of a table widget.

    Returns:
        Tuple of (command, custom) where custom is True when the caller
        supplied the command
    """
    if OPTION_COMMAND in options:
        return options[OPTION_COMMAND], True
    return default, False
