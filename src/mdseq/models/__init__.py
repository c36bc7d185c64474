"""Data models for mdseq."""

from mdseq.models.config import Config, ConversionConfig, LogseqConfig
from mdseq.models.document import Document

__all__ = ["Config", "ConversionConfig", "LogseqConfig", "Document"]
