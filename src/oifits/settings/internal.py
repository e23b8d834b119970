"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully
validated, normalized and frozen.
"""

from typing import Literal, Optional
from pydantic import ConfigDict
from oifits.contracts import LinkPolicy
from oifits.settings.base import OIBaseModel


class InternalRegistryConfig(OIBaseModel):
    """Runtime registry configuration."""
    builtin_formats: bool
    freeze: bool


class InternalResolutionConfig(OIBaseModel):
    """Runtime link-resolution policies."""
    missing_array: LinkPolicy
    missing_correlation: LinkPolicy


class InternalLoggingConfig(OIBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    file: Optional[str]


class InternalConfig(OIBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        policy = config.resolution.missing_array  # NOT .get()
    """

    registry: InternalRegistryConfig
    resolution: InternalResolutionConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
