"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., LOG_LEVEL → log_level, MISSING_ARRAY → missing_array) and ignores
unknown legacy keys. Users only specify what they want to override from the
expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from oifits.settings.base import OIBaseModel


class UserResolutionConfig(OIBaseModel):
    """User-facing link-resolution config."""
    missing_array: Optional[str] = None
    missing_correlation: Optional[str] = None

    @field_validator("missing_array", "missing_correlation", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserConfig(OIBaseModel):
    """User-facing configuration schema.

    Usage
    -----
        user_cfg = UserConfig(
            LOG_LEVEL="debug",
            MISSING_ARRAY="error",
        )

        internal = resolve_config(param_cfg, user_cfg)
    """

    # Logging (flat aliases)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, alias="LOG_FILE")

    # Registry (flat aliases)
    builtin_formats: Optional[bool] = Field(None, alias="BUILTIN_FORMATS")
    freeze_registry: Optional[bool] = Field(None, alias="FREEZE_REGISTRY")

    # Link resolution (flat aliases)
    missing_array: Optional[str] = Field(None, alias="MISSING_ARRAY")
    missing_correlation: Optional[str] = Field(None, alias="MISSING_CORRELATION")

    # Nested overrides (advanced users)
    resolution: Optional[UserResolutionConfig] = None

    model_config = OIBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("missing_array", "missing_correlation", mode="before")
    @classmethod
    def normalize_policy_names(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        registry = {}
        if self.builtin_formats is not None:
            registry["builtin_formats"] = self.builtin_formats
        if self.freeze_registry is not None:
            registry["freeze"] = self.freeze_registry
        if registry:
            overrides["registry"] = registry

        resolution = {}
        if self.missing_array is not None:
            resolution["missing_array"] = self.missing_array
        if self.missing_correlation is not None:
            resolution["missing_correlation"] = self.missing_correlation

        # Merge with explicit resolution config
        if self.resolution is not None:
            resolution.update(self.resolution.model_dump(exclude_none=True))

        if resolution:
            overrides["resolution"] = resolution

        return overrides
