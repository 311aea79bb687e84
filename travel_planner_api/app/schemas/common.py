"""
Shared schema building blocks.

* ``ApiModel``: base for every payload.  Python attributes are
  snake_case; the JSON representation is camelCase.
* ``PatchModel``: base for partial updates.  Which fields the client
  actually sent is tracked by pydantic (``model_fields_set``), so an
  explicitly supplied empty string is distinguishable from an omitted
  field.
* ``Envelope``: the response wrapper returned by every endpoint.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Dict, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, model_serializer, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC so that comparisons with
    # stored (aware) values never mix naive and aware datetimes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(ApiModel):
    """Base class for partial update payloads.

    Every field of a subclass is optional.  Fields listed in
    ``nullable_fields`` may be sent as ``null`` to clear the stored
    value; sending ``null`` for any other field is rejected.
    """

    nullable_fields: ClassVar[frozenset] = frozenset()
    # Parent references are equality checks, never written.
    reference_fields: ClassVar[frozenset] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                alias = type(self).model_fields[name].alias or to_camel(name)
                raise ValueError(f"{alias} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Return the supplied fields, excluding parent references."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name not in self.reference_fields
        }


class FieldError(BaseModel):
    field: str
    message: str


class Envelope(BaseModel, Generic[T]):
    """Standard response body: ``{success, message, data?, errors?}``."""

    success: bool = True
    message: str
    data: Optional[T] = None
    errors: Optional[List[FieldError]] = None

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        # ``data`` and ``errors`` are left out instead of being sent as null.
        body = handler(self)
        for key in ("data", "errors"):
            if body.get(key) is None:
                body.pop(key, None)
        return body
