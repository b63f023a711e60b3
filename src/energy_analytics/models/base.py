"""Shared base model for immutable engine records."""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ValidationError

from energy_analytics.exceptions.errors import InvalidInputError


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line.

    Parameters
    ----------
    error : ValidationError
        Error raised by pydantic

    Returns
    -------
    str
        Semicolon separated ``field: message`` pairs
    """
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "value"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class FrozenModel(BaseModel):
    """Immutable pydantic model with a single validation entry point."""

    model_config = {"frozen": True, "str_strip_whitespace": True, "populate_by_name": True}

    @classmethod
    def parse(cls, raw: Mapping[str, Any] | Self) -> Self:
        """Validate raw (possibly text-valued) input into a typed record.

        Parameters
        ----------
        raw : Mapping[str, Any] | Self
            Field values, e.g. straight from a form, or an existing instance

        Returns
        -------
        Self
            Validated, immutable record

        Raises
        ------
        InvalidInputError
            If a field is missing or outside its allowed range
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            raise InvalidInputError(
                f"{cls.__name__} expects a mapping of fields, got {type(raw).__name__}"
            )
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid {cls.__name__}: {describe_validation_error(e)}"
            ) from e
