"""Runtime initialization for oifits.

Handles:
- Loading a user config dict from a Python file
- Configuration resolution (User > Param)
- Logging setup
"""

import importlib.util
from pathlib import Path
from typing import Optional

from oifits.settings.param import ParamConfig
from oifits.settings.user import UserConfig
from oifits.settings.internal import InternalConfig
from oifits.settings.resolve import deep_merge, resolve_config
from oifits.setup_logging import configure_logging


def load_user_config(config_path: str) -> dict:
    """Load user config dict from a Python file.

    The first module attribute whose name starts with ``CONFIG`` and whose
    value is a dict is returned.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("oifits_user_config", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def init_config(config_path: Optional[str] = None, **overrides) -> InternalConfig:
    """Resolve the runtime configuration and configure logging.

    Parameters
    ----------
    config_path : str, optional
        Python file defining a ``CONFIG`` dict of user settings.
    **overrides
        UserConfig-compatible keys taking precedence over the file.

    Returns
    -------
    InternalConfig
        Fully validated runtime configuration.

    Examples
    --------
    >>> config = init_config(LOG_LEVEL="DEBUG")
    >>> master = OIMaster(config=config)
    """
    user_dict = load_user_config(config_path) if config_path else {}
    if overrides:
        user_dict = deep_merge(user_dict, overrides)

    config = resolve_config(ParamConfig(), UserConfig.model_validate(user_dict))
    configure_logging(config)
    return config


__all__ = ['load_user_config', 'init_config']
