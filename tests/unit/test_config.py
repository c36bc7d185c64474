"""Unit tests for configuration models."""

import pytest
from pathlib import Path

from mdseq.models.config import Config, ConversionConfig, LogseqConfig


class TestLogseqConfig:
    """Test Logseq configuration model."""

    def test_valid_logseq_config(self, tmp_path):
        """Test creating valid Logseq config with existing directory."""
        graph_dir = tmp_path / "logseq-graph"
        graph_dir.mkdir()

        config = LogseqConfig(graph_path=str(graph_dir))

        assert Path(config.graph_path) == graph_dir
        assert config.default_page is None

    def test_logseq_config_nonexistent_path(self):
        """Test Logseq config fails with nonexistent path."""
        with pytest.raises(ValueError, match="Graph path does not exist"):
            LogseqConfig(graph_path="/nonexistent/path/to/graph")

    def test_logseq_config_file_not_directory(self, tmp_path):
        """Test Logseq config fails when path is a file, not directory."""
        file_path = tmp_path / "not-a-dir.txt"
        file_path.touch()

        with pytest.raises(ValueError, match="not a directory"):
            LogseqConfig(graph_path=str(file_path))

    def test_logseq_config_immutable(self, tmp_path):
        """Test that Logseq config is frozen (immutable)."""
        config = LogseqConfig(graph_path=str(tmp_path))

        with pytest.raises(Exception):  # Pydantic ValidationError
            config.default_page = "Inbox"


class TestConversionConfig:
    """Test conversion configuration model."""

    def test_default_max_depth(self):
        assert ConversionConfig().max_depth == 10

    @pytest.mark.parametrize("max_depth", [0, 101])
    def test_max_depth_bounds(self, max_depth):
        with pytest.raises(ValueError):
            ConversionConfig(max_depth=max_depth)


class TestConfigLoad:
    """Test loading Config from YAML."""

    def test_load_full_config(self, tmp_path):
        graph_dir = tmp_path / "graph"
        graph_dir.mkdir()
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"logseq:\n"
            f"  graph_path: {graph_dir}\n"
            f"  default_page: Inbox\n"
            f"conversion:\n"
            f"  max_depth: 4\n"
        )

        config = Config.load(config_file)

        assert config.logseq.graph_path == str(graph_dir)
        assert config.logseq.default_page == "Inbox"
        assert config.conversion.max_depth == 4

    def test_conversion_section_optional(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"logseq:\n  graph_path: {tmp_path}\n")

        config = Config.load(config_file)

        assert config.conversion.max_depth == 10

    def test_missing_file_shows_example(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="graph_path: ~/Documents/logseq-graph"):
            Config.load(tmp_path / "missing.yaml")

    def test_empty_file_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="empty or not a mapping"):
            Config.load(config_file)

    def test_missing_logseq_section(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("conversion:\n  max_depth: 3\n")

        with pytest.raises(ValueError):
            Config.load(config_file)
