"""Test config resolution and validation with Pydantic."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

pytestmark = pytest.mark.unit

from oifits.settings import (
    InternalConfig,
    ParamConfig,
    UserConfig,
    init_config,
    load_user_config,
    resolve_config,
)
from oifits.settings.resolve import deep_merge


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None)

        assert isinstance(config, InternalConfig)
        assert config.registry.builtin_formats is True
        assert config.registry.freeze is True
        assert config.resolution.missing_array == "warn"
        assert config.resolution.missing_correlation == "warn"
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_param_config_defaults_to_fresh_instance(self):
        assert resolve_config() == resolve_config(ParamConfig(), None)

    def test_user_config_overrides_param_config(self):
        """UserConfig values override ParamConfig defaults."""
        config = resolve_config(ParamConfig(), UserConfig(MISSING_ARRAY="error"))

        assert config.resolution.missing_array == "error"
        assert config.resolution.missing_correlation == "warn"

    def test_dict_inputs_are_validated(self):
        config = resolve_config({"logging": {"level": "DEBUG"}}, {"LOG_FILE": "/tmp/oifits.log"})

        assert config.logging.level == "DEBUG"
        assert config.logging.file == "/tmp/oifits.log"

    def test_nested_resolution_overrides_flat_alias(self):
        user = UserConfig(MISSING_ARRAY="error", resolution={"missing_array": "ignore"})
        config = resolve_config(ParamConfig(), user)

        assert config.resolution.missing_array == "ignore"

    def test_empty_user_config_uses_all_param_defaults(self):
        config = resolve_config(ParamConfig(), UserConfig())

        assert config == resolve_config(ParamConfig(), None)

    def test_internal_config_is_frozen(self, internal_config):
        with pytest.raises(PydanticValidationError):
            internal_config.logging = None

    def test_invalid_policy_rejected(self):
        with pytest.raises(PydanticValidationError):
            resolve_config(ParamConfig(), UserConfig(MISSING_ARRAY="explode"))

    def test_param_config_rejects_unknown_keys(self):
        with pytest.raises(PydanticValidationError):
            ParamConfig.model_validate({"registry": {"autoload": True}})


class TestDeepMerge:

    def test_nested_dicts_merge(self):
        base = {"a": 1, "b": {"c": 2, "d": 3}}
        assert deep_merge(base, {"b": {"d": 4, "e": 5}, "f": 6}) == {
            "a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}

    def test_base_not_modified(self):
        base = {"b": {"c": 2}}
        deep_merge(base, {"b": {"c": 3}})
        assert base == {"b": {"c": 2}}


class TestUserConfigFile:
    """Test load_user_config() and init_config()."""

    def test_load_user_config(self, tmp_path):
        path = tmp_path / "config.py"
        path.write_text('CONFIG = {"LOG_LEVEL": "debug", "MISSING_CORRELATION": "error"}\n')

        assert load_user_config(str(path)) == {"LOG_LEVEL": "debug", "MISSING_CORRELATION": "error"}

    def test_sample_user_config_resolves_to_defaults(self):
        path = Path(__file__).resolve().parents[2] / "scripts" / "user_config.py"

        config = resolve_config(ParamConfig(), load_user_config(str(path)))

        assert config == resolve_config(ParamConfig(), None)

    def test_load_user_config_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config not found"):
            load_user_config(str(tmp_path / "absent.py"))

    def test_load_user_config_without_dict(self, tmp_path):
        path = tmp_path / "config.py"
        path.write_text("SETTINGS = 1\n")

        with pytest.raises(ValueError, match="No CONFIG dict"):
            load_user_config(str(path))

    def test_init_config_from_file_and_overrides(self, tmp_path):
        path = tmp_path / "config.py"
        path.write_text('CONFIG = {"LOG_LEVEL": "debug", "MISSING_ARRAY": "ignore"}\n')

        config = init_config(str(path), MISSING_ARRAY="error")

        assert config.logging.level == "DEBUG"
        assert config.resolution.missing_array == "error"
        assert logging.getLogger("oifits").level == logging.DEBUG

    def test_init_config_writes_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "oifits.log"

        config = init_config(LOG_FILE=str(log_file), LOG_LEVEL="INFO")

        assert config.logging.file == str(log_file)
        assert log_file.parent.is_dir()
        pkg = logging.getLogger("oifits")
        assert any(isinstance(h, logging.FileHandler) for h in pkg.handlers)
        for handler in pkg.handlers[:]:
            pkg.removeHandler(handler)
            handler.close()
