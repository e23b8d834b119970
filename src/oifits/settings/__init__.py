"""Pydantic configuration schemas for oifits.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
init_config : function
    Resolve configuration and configure logging
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
"""

from oifits.settings.resolve import resolve_config
from oifits.settings.internal import InternalConfig
from oifits.settings.param import ParamConfig
from oifits.settings.user import UserConfig
from oifits.settings.initialization import init_config, load_user_config

__all__ = [
    'resolve_config',
    'init_config',
    'load_user_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
]
