# menucraft/catalog/schemas/base.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base schema: snake_case attributes, camelCase wire names"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_wire(self) -> dict:
        """Dump with the camelCase names the UI collaborator uses"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
