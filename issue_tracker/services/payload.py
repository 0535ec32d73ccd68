"""Payload parsing shared by the issue and project services."""

from typing import Any, Mapping, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_payload(schema: Type[SchemaT], payload: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
    """
    Validate a payload against a schema.

    Already-validated schema instances pass through untouched. Mappings are
    validated (camelCase or snake_case keys) and every failing field is
    reported in a single ``ValidationError``.
    """
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
