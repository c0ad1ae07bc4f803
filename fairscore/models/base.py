"""
Model Base - Science Fair Evaluation Platform
fairscore/models/base.py

Shared pydantic configuration. Entities use snake_case attributes in Python
and camelCase on the wire (remote store, JSON dump, API).
"""

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        # Spreadsheet rows carry null for empty cells; treat them as unset
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_wire(self) -> dict:
        """Dump with camelCase keys, JSON-safe."""
        return self.model_dump(mode="json", by_alias=True)
