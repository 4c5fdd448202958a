"""Exporters that write composed documents to files."""

from .base import BaseExporter, ExportConfig, ExportResult, section_outline
from .pptx_exporter import PPTXConfig, PPTXExporter

__all__ = [
    # Base
    "BaseExporter",
    "ExportConfig",
    "ExportResult",
    "section_outline",
    # PPTX
    "PPTXConfig",
    "PPTXExporter",
]
