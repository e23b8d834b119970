"""Root-level pytest fixtures for the oifits test suite.

Provides fresh layout registries (never the process-wide one), sample
data-blocks and masters, and configuration fixtures following the
Pydantic-based settings.
"""

import pytest

from oifits.model import OIMaster, build_datablock
from oifits.registry import SchemaRegistry, create_registry
from oifits.settings import ParamConfig, UserConfig, resolve_config

from tests.helpers.fake_blocks import (
    array_values,
    target_values,
    vis2_values,
    wavelength_values,
)


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Examples
    --------
    >>> def test_strict_links(make_config):
    ...     config = make_config(MISSING_ARRAY="error")
    ...     master = OIMaster(config=config)
    """
    def _make(**user_overrides):
        if user_overrides:
            return resolve_config(param_config, UserConfig(**user_overrides))
        return resolve_config(param_config, None)

    return _make


# =============================================================================
# Registry Fixtures
# =============================================================================

@pytest.fixture
def registry():
    """Fresh frozen registry with the built-in OI-FITS formats."""
    return create_registry()


@pytest.fixture
def toy_registry():
    """Unfrozen registry with two small hand-written layouts."""
    reg = SchemaRegistry()
    reg.register("OI_ARRAY", 1, [
        "ARRNAME    A      array name",
        "-------------------------------",
        "STA_INDEX  I(1)   station index",
        "STA_NAME   A(1)   station name",
    ])
    reg.register("OI_WAVELENGTH", 1, [
        "INSNAME    A      instrument name",
        "-------------------------------",
        "EFF_WAVE   D(1)   effective wavelength [m]",
    ])
    return reg


# =============================================================================
# Data-block Fixtures
# =============================================================================

@pytest.fixture
def make_block(registry):
    """Factory building a data-block with the built-in formats."""
    def _make(extname, values, revision=None):
        return build_datablock(extname, revision, values, registry=registry)

    return _make


@pytest.fixture
def sample_master(make_block):
    """Resolved master: 2 targets, 1 array, 1 instrument, 1 OI_VIS2.

    Targets are 10 "Star1" and 20 "Star2"; the instrument "SPEC" has
    channels at 1.0, 1.5 and 2.0 microns; the OI_VIS2 rows observe targets
    [10, 10, 20].
    """
    master = OIMaster()
    master.attach(make_block("OI_TARGET", target_values()))
    master.attach(make_block("OI_ARRAY", array_values()))
    master.attach(make_block("OI_WAVELENGTH", wavelength_values()))
    master.attach(make_block("OI_VIS2", vis2_values()))
    return master.resolve()
