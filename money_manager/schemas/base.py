"""
Shared schema base.

The API speaks camelCase JSON (paymentMethod, isTransfer,
startDate) while Python code uses snake_case. The alias
generator bridges the two; populate_by_name lets services
build schemas with the Python names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )
