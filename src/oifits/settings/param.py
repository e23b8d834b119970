"""ParamConfig: Expert defaults for oifits.

This module defines the complete default configuration. Every tunable
parameter has its default here; runtime code never defines fallback values
and only receives an InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from oifits.contracts import LinkPolicy
from oifits.settings.base import OIBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class RegistryConfig(OIBaseModel):
    """Extension-layout registry configuration."""
    builtin_formats: bool = Field(True, description="Install the OI-FITS standard layouts")
    freeze: bool = Field(True, description="Reject registration once populated")


class ResolutionConfig(OIBaseModel):
    """Cross-reference resolution of optional links.

    The instrument link of measurement blocks is always mandatory; only the
    array and correlation links may be relaxed or tightened.
    """
    missing_array: LinkPolicy = LinkPolicy.WARN
    missing_correlation: LinkPolicy = LinkPolicy.WARN

    @field_validator("missing_array", "missing_correlation", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Accept policy names in any case."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class LoggingConfig(OIBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(OIBaseModel):
    """Complete expert configuration with all defaults.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg)
    """

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
