"""Base Pydantic model with strict defaults for oifits models.

All oifits configuration schemas and extension-layout models inherit from
this base to ensure consistent validation behavior.
"""

from pydantic import BaseModel, ConfigDict


class OIBaseModel(BaseModel):
    """Base model for all oifits pydantic models.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Stores enum values rather than enum members
    - Strips whitespace from strings
    """

    model_config = ConfigDict(
        extra='forbid',           # Reject unknown fields
        validate_assignment=True, # Validate on field mutation
        use_enum_values=True,     # Convert enums to values
        str_strip_whitespace=True,# Strip whitespace from strings
    )
