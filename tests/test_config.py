# =============================================================================
# test_config.py - Assembler Configuration Tests
# =============================================================================
# Tests for AssemblerConfig defaults, validation and environment overrides.
# =============================================================================

import logging

import pytest

from cpu8_asm.config import AssemblerConfig, LOGISIM_HEADER, MAX_MEMORY_SIZE


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any CPU8ASM_* variables from the environment."""
    for var in AssemblerConfig.ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestDefaults:
    """Test the default bounds."""

    def test_defaults(self):
        config = AssemblerConfig()
        assert config.memory_size == MAX_MEMORY_SIZE == 256
        assert config.max_labels == 32
        assert config.max_jumps == 64
        assert config.max_label_length == 32
        assert config.bytes_per_line == 16
        assert config.header == LOGISIM_HEADER == "v2.0 raw"

    def test_defaults_validate(self):
        AssemblerConfig().validate()


class TestValidate:
    """Test bound validation."""

    @pytest.mark.parametrize("field", [
        "memory_size", "max_labels", "max_jumps", "max_label_length",
        "bytes_per_line",
    ])
    def test_non_positive(self, field):
        config = AssemblerConfig(**{field: 0})
        with pytest.raises(ValueError, match=field):
            config.validate()

    def test_memory_larger_than_page(self):
        with pytest.raises(ValueError, match="memory_size"):
            AssemblerConfig(memory_size=512).validate()

    def test_smaller_memory_allowed(self):
        AssemblerConfig(memory_size=16).validate()


class TestFromEnv:
    """Test environment overrides."""

    def test_no_overrides(self, clean_env):
        assert AssemblerConfig.from_env() == AssemblerConfig()

    def test_overrides(self, clean_env):
        clean_env.setenv("CPU8ASM_MAX_LABELS", "8")
        clean_env.setenv("CPU8ASM_MAX_JUMPS", "0x10")
        config = AssemblerConfig.from_env()
        assert config.max_labels == 8
        assert config.max_jumps == 16

    def test_malformed_value_ignored(self, clean_env, caplog):
        clean_env.setenv("CPU8ASM_MAX_LABELS", "many")
        with caplog.at_level(logging.WARNING):
            config = AssemblerConfig.from_env()
        assert config.max_labels == 32
        assert "CPU8ASM_MAX_LABELS" in caplog.text

    def test_invalid_result_falls_back(self, clean_env, caplog):
        clean_env.setenv("CPU8ASM_MEMORY_SIZE", "1024")
        clean_env.setenv("CPU8ASM_MAX_LABELS", "8")
        with caplog.at_level(logging.WARNING):
            config = AssemblerConfig.from_env()
        assert config == AssemblerConfig()
        assert "memory_size" in caplog.text
