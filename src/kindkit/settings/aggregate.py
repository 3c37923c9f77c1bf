"""Run all setters of a setting and collect their failures."""

import logging
from collections.abc import Iterable

from kindkit.settings.setters import SetterFn
from kindkit.utils.errors import AggregatedValidationError

logger = logging.getLogger(__name__)


def apply_setting(name: str, value: str, setters: Iterable[SetterFn]) -> None:
    """Run every setter with the same name and value.

    A failing setter does not stop the ones after it. Setters are not
    transactional: values stored by setters that succeeded stay in the store
    even when another setter in the batch fails.

    Args:
        name: Setting name
        value: Raw textual value
        setters: Setters in registration order

    Raises:
        AggregatedValidationError: If any setter raised, with one entry per
            failing setter in registration order
    """
    errors: list[Exception] = []
    for setter in setters:
        try:
            setter(name, value)
        except Exception as e:
            logger.debug(f"Setter for '{name}' rejected {value!r}: {e}")
            errors.append(e)

    if errors:
        raise AggregatedValidationError(name, errors)
