"""Unit tests for CLI module."""

import click
import pytest

from mdseq.cli import build_service, cli, load_config


def make_context(**obj):
    ctx = click.Context(cli)
    ctx.obj = {"config_path": None, "graph_path": None, **obj}
    return ctx


class TestLoadConfig:
    """Test configuration loading errors surface as click errors."""

    def test_missing_config_raises_click_exception(self, tmp_path):
        with pytest.raises(click.ClickException, match="Configuration file not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_config_raises_click_exception(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logseq:\n  graph_path: /nonexistent/graph\n")

        with pytest.raises(click.ClickException, match="Configuration validation failed"):
            load_config(config_file)


class TestBuildService:
    """Test wiring of the conversion service."""

    def test_graph_option_bypasses_config(self, graph_dir):
        service = build_service(make_context(graph_path=graph_dir), "Notes")

        assert service.store.graph_paths.graph_path == graph_dir
        assert service.store.current_page == "Notes"
        assert service.max_depth == 10

    def test_config_supplies_default_page_and_depth(self, tmp_path, graph_dir):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"logseq:\n"
            f"  graph_path: {graph_dir}\n"
            f"  default_page: Inbox\n"
            f"conversion:\n"
            f"  max_depth: 3\n"
        )

        service = build_service(make_context(config_path=config_file), None)

        assert service.store.current_page == "Inbox"
        assert service.max_depth == 3

    def test_page_argument_overrides_default_page(self, tmp_path, graph_dir):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"logseq:\n  graph_path: {graph_dir}\n  default_page: Inbox\n")

        service = build_service(make_context(config_path=config_file), "Other")

        assert service.store.current_page == "Other"

    def test_missing_graph_directory(self, tmp_path):
        with pytest.raises(click.ClickException, match="Graph path does not exist"):
            build_service(make_context(graph_path=tmp_path / "missing"), "Notes")

    def test_raw_presenter(self, graph_dir):
        service = build_service(make_context(graph_path=graph_dir), "Notes", raw=True)
        assert service.presenter.raw is True
