"""Configuration models for mdseq."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mdseq" / "config.yaml"


class LogseqConfig(BaseModel):
    """Configuration for Logseq graph location."""

    graph_path: str = Field(
        ...,
        description="Path to Logseq graph directory"
    )

    default_page: Optional[str] = Field(
        default=None,
        description="Page converted when no page name is given"
    )

    @field_validator('graph_path')
    @classmethod
    def validate_graph_path(cls, v: str) -> str:
        """Validate graph path exists and is a directory."""
        path = Path(v).expanduser()
        if not path.exists():
            raise ValueError(
                f"Graph path does not exist: {path}\n"
                f"Please create the directory or update config.yaml"
            )
        if not path.is_dir():
            raise ValueError(
                f"Graph path is not a directory: {path}\n"
                f"Please provide a valid directory path"
            )
        return str(path)

    model_config = {"frozen": True}


class ConversionConfig(BaseModel):
    """Configuration for block tree traversal."""

    max_depth: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Deepest block nesting read from a page (roots are depth 0)"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for mdseq."""

    logseq: LogseqConfig = Field(..., description="Logseq graph settings")
    conversion: ConversionConfig = Field(
        default_factory=ConversionConfig,
        description="Conversion settings"
    )

    @classmethod
    def load(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at {path}\n\n"
                f"Please create the file with the following format:\n\n"
                f"logseq:\n"
                f"  graph_path: ~/Documents/logseq-graph\n"
                f"  default_page: Inbox\n\n"
                f"conversion:\n"
                f"  max_depth: 10\n"
            )

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file is empty or not a mapping: {path}")

        return cls(**data)

    model_config = {"frozen": True}
