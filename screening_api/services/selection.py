"""Selection helpers shared by the validator and the pricing engine."""

from typing import Any

from screening_api.core.exceptions import InvalidInputError


def coerce_selection(value: Any) -> list[str]:
    """Check a caller-supplied selection shape and return it as a list of ids."""
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidInputError("Service ids must be a list of strings")
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise InvalidInputError(f"Service id at position {index} is not a string")
    return list(value)


def distinct(service_ids: list[str]) -> list[str]:
    """De-duplicate, keeping first-seen order."""
    return list(dict.fromkeys(service_ids))
