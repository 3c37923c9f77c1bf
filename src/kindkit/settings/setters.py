"""Setter and validator functions for settings.

Every function here can be registered on a Setting. Store-writing setters take
the store as their first argument and are bound with functools.partial when the
registry is built; validators only look at the raw value.
"""

import logging
import re
from collections.abc import Callable, Collection

from kindkit.settings.values import BoolValue, ConfigStore, IntValue, StringValue
from kindkit.utils.errors import InvalidSettingValueError
from kindkit.utils.validation import (
    parse_bool,
    parse_int,
    validate_cluster_name,
    validate_k8s_version,
)

logger = logging.getLogger(__name__)

SetterFn = Callable[[str, str], None]

_DISK_SIZE_PATTERN = re.compile(r"[0-9]+[bkmgtBKMGT]?")

LOG_LEVELS = ("debug", "info", "warning", "error")


# Set Functions


def set_string(store: ConfigStore, name: str, value: str) -> None:
    """Store value verbatim."""
    store.put(name, StringValue(value))


def set_int(store: ConfigStore, name: str, value: str) -> None:
    """Store value as an integer.

    Raises:
        InvalidIntegerFormatError: If value is not a base-10 integer
    """
    store.put(name, IntValue(parse_int(value)))


def set_bool(store: ConfigStore, name: str, value: str) -> None:
    """Store value as a boolean.

    Raises:
        InvalidBooleanFormatError: If value is not a boolean token
    """
    store.put(name, BoolValue(parse_bool(value)))


# Validation Functions


def is_positive(name: str, value: str) -> None:
    if parse_int(value) <= 0:
        raise InvalidSettingValueError(f"{name}:{value} must be a positive integer")


def is_valid_disk_size(name: str, value: str) -> None:
    if not _DISK_SIZE_PATTERN.fullmatch(value):
        raise InvalidSettingValueError(
            f"{name}:{value} is not a valid disk size, use a number with an optional "
            "unit suffix (e.g. 20g)"
        )


def is_valid_cluster_name(name: str, value: str) -> None:
    try:
        validate_cluster_name(value)
    except ValueError as e:
        raise InvalidSettingValueError(f"{name}:{value} {e}") from e


def is_valid_k8s_version(name: str, value: str) -> None:
    try:
        validate_k8s_version(value)
    except ValueError as e:
        raise InvalidSettingValueError(f"{name}:{value} {e}") from e


def is_valid_log_level(name: str, value: str) -> None:
    if value.lower() not in LOG_LEVELS:
        raise InvalidSettingValueError(
            f"{name}:{value} is not a valid log level. Must be one of: {', '.join(LOG_LEVELS)}"
        )


def one_of(choices: Collection[str]) -> SetterFn:
    """Build a validator accepting only the given values."""

    def validate(name: str, value: str) -> None:
        if value not in choices:
            raise InvalidSettingValueError(
                f"{name}:{value} is not one of: {', '.join(sorted(choices))}"
            )

    return validate


def requires_restart(name: str, value: str) -> None:
    """Warn that the cluster must be recreated for the value to take effect."""
    logger.warning(
        f"Setting '{name}' takes effect the next time the cluster is created. "
        "Delete and recreate the cluster to apply it."
    )
