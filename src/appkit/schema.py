r"""Response schemas used to validate and type HTTP response bodies.

A ``ResponseSchema[T]`` wraps a pydantic ``TypeAdapter`` so any type
pydantic understands (models, dataclasses, ``TypedDict``, ``list[int]``,
...) can describe the expected body. ``RAW`` is the pass-through schema
used when the caller does not ask for any guarantee.

Example:
    ```pycon
    >>> from pydantic import BaseModel
    >>> from appkit.schema import RAW, ResponseSchema
    >>> class Item(BaseModel):
    ...     id: int
    ...
    >>> ResponseSchema(Item).validate({"id": 1})
    Item(id=1)
    >>> RAW.validate({"id": "abc"})
    {'id': 'abc'}

    ```
"""

from __future__ import annotations

__all__ = ["RAW", "ResponseSchema", "as_schema"]

from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from appkit.exceptions import ResponseValidationError

T = TypeVar("T")


class ResponseSchema(Generic[T]):
    """Validator bound to a target type ``T``.

    Args:
        target: The type the response body must satisfy. ``None``
            builds a pass-through schema that returns its input untouched.
    """

    def __init__(self, target: type[T] | Any = None) -> None:
        self.target = target
        self._adapter: TypeAdapter[T] | None = None if target is None else TypeAdapter(target)

    def __repr__(self) -> str:
        name = "raw" if self.target is None else getattr(self.target, "__name__", repr(self.target))
        return f"{self.__class__.__qualname__}({name})"

    @property
    def is_raw(self) -> bool:
        r"""``True`` if the schema performs no validation."""
        return self._adapter is None

    def validate(self, value: Any) -> T:
        """Validate a decoded body.

        Args:
            value: The decoded response body.

        Returns:
            The validated value, typed as ``T``.

        Raises:
            ResponseValidationError: If the value does not satisfy the
                schema. The pydantic error is chained as ``__cause__``.
        """
        if self._adapter is None:
            return value
        try:
            return self._adapter.validate_python(value)
        except ValidationError as exc:
            raise ResponseValidationError(
                f"response body does not match {self!r}: {exc}",
                errors=exc.errors(),
                body=value,
            ) from exc


RAW: ResponseSchema[Any] = ResponseSchema()


def as_schema(schema: ResponseSchema[T] | type[T]) -> ResponseSchema[T]:
    """Return ``schema`` as a ``ResponseSchema``, wrapping bare types.

    Example:
        ```pycon
        >>> from appkit.schema import as_schema
        >>> as_schema(int).validate("3")
        3

        ```
    """
    if isinstance(schema, ResponseSchema):
        return schema
    return ResponseSchema(schema)
