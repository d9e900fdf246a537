"""
https://docs.pydantic.dev/latest/concepts/types/#customizing-validation-with-__get_pydantic_core_schema__

Pydantic integration for uuid_utils.UUID, so booking ids (UUID7) can be used
directly as FastAPI path parameters and response fields.

```python
class BookingResponse(BaseModel):
    id: UtilsUUID7   # '019a3fa5-...' in JSON, uuid_utils.UUID in Python
```
"""

from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


class UtilsUUID7(UUID):
    """uuid_utils.UUID with Pydantic v2 validation, serialization and OpenAPI schema"""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def _to_uuid(value: Any) -> UUID:
            if isinstance(value, UUID):
                return value
            try:
                return UUID(str(value))
            except (TypeError, ValueError) as e:
                raise ValueError(f'Invalid UUID: {value}') from e

        # JSON has no UUID type: strings only. Python mode also accepts
        # uuid_utils / stdlib UUID objects (repos hand back stdlib ones).
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(_to_uuid),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(_to_uuid),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used='always',
                return_schema=core_schema.str_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        # Bypass handler(schema): the validator chain is irrelevant to OpenAPI
        return {'type': 'string', 'format': 'uuid'}
