"""
Base Pydantic model for records scanned from database rows.
"""
from typing import Dict, Type

from pydantic import BaseModel, ConfigDict

from db.lib.kinds import FieldDescriptor, type_of
from db.lib.naming import to_initialism_name


def to_field_alias(name: str) -> str:
    """snake_case or lower-case names get the initialism form; camel-case names are kept."""
    if "_" in name or name.islower():
        return to_initialism_name(name)
    return name


class RecordModel(BaseModel):
    """
    Base model whose field aliases are the camel-case names columns resolve to.

    Usage:
        class User(RecordModel):
            user_id: int
            home_url: Optional[str] = None

        # Aliases: {"user_id": "UserID", "home_url": "HomeURL"}
        # A "user_id" column resolves to UserID, "HOME_URL" to HomeURL.
    """
    model_config = ConfigDict(
        alias_generator=to_field_alias,
        populate_by_name=True,  # Allow both snake_case and camel-case input
        from_attributes=True,
    )


def record_fields(model: Type[BaseModel]) -> Dict[str, FieldDescriptor]:
    """Map each field's alias (or attribute name) to its descriptor."""
    fields = {}
    for name, info in model.model_fields.items():
        fields[info.alias or name] = FieldDescriptor(name=name, type=type_of(info.annotation))
    return fields
