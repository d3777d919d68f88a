# =============================================================================
# test_config.py - Configuration Tests
# =============================================================================

from pathlib import Path

import pytest

from octasm.config import AssemblerConfig


ENV_VARS = [
    "OCTASM_MAX_DEPTH",
    "OCTASM_STRICT",
    "OCTASM_MAX_ERRORS",
    "OCTASM_DEFINITIONS",
    "OCTASM_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAssemblerConfig:
    """Test configuration defaults and environment overrides."""

    def test_defaults(self, clean_env):
        config = AssemblerConfig.from_env()
        assert config == AssemblerConfig()
        assert config.max_depth == 8
        assert config.strict is False
        assert config.definitions_path is None
        assert config.output_format == "hex"

    def test_environment(self, clean_env):
        clean_env.setenv("OCTASM_MAX_DEPTH", "3")
        clean_env.setenv("OCTASM_STRICT", "yes")
        clean_env.setenv("OCTASM_MAX_ERRORS", "5")
        clean_env.setenv("OCTASM_DEFINITIONS", "/tmp/cpu.def")
        clean_env.setenv("OCTASM_FORMAT", "BITS")

        config = AssemblerConfig.from_env()
        assert config.max_depth == 3
        assert config.strict is True
        assert config.max_errors == 5
        assert config.definitions_path == Path("/tmp/cpu.def")
        assert config.output_format == "bits"

    def test_invalid_values_ignored(self, clean_env):
        clean_env.setenv("OCTASM_MAX_DEPTH", "deep")
        clean_env.setenv("OCTASM_MAX_ERRORS", "")
        clean_env.setenv("OCTASM_FORMAT", "octal")

        config = AssemblerConfig.from_env()
        assert config.max_depth == 8
        assert config.max_errors == 100
        assert config.output_format == "hex"

    def test_strict_false(self, clean_env):
        clean_env.setenv("OCTASM_STRICT", "0")
        assert AssemblerConfig.from_env().strict is False
