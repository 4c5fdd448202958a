"""Base classes for document exporters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pitchkit.models.document import ComposedDocument, RenderedSection, SectionId

# Text keys summarized as leading bullets, in order
LEAD_TEXT_KEYS = ("subtitle", "intro", "headline", "summary", "message", "stated_problem")

# Keys that never become bullets
SKIPPED_KEYS = {"title", "primary_color", "accent_color", "logo_url", "cta", "footer_text", "powered_by"}

TITLE_SECTIONS = {SectionId.TITLE, SectionId.BRIEF_HEADER, SectionId.OUTREACH_HEADER}
CTA_SECTIONS = {SectionId.CLOSING, SectionId.CALL_TO_ACTION}

FALLBACK_COLOR = "#333333"


def build_palette(document: ComposedDocument) -> dict[str, str]:
    """Color palette from the seller's branding."""
    return {
        "primary": document.seller.primary_color,
        "accent": document.seller.accent_color,
        "background": "#FFFFFF",
        "text": "#333333",
        "text_light": "#666666",
    }


def _summarize_item(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        head = item.get("name") or item.get("label") or item.get("step") or item.get("title")
        if "items" in item:
            tail = "; ".join(str(entry) for entry in item["items"])
        else:
            tail = item.get("description") or item.get("detail") or item.get("value") or item.get("subject")
        parts = [str(part) for part in (head, tail) if part not in (None, "")]
        return ": ".join(parts) if parts else None
    if item is None:
        return None
    return str(item)


def section_outline(section: RenderedSection) -> dict[str, Any]:
    """Flatten a section's data slice into a slide outline: title, bullets and label."""
    data = section.data
    bullets: list[str] = []

    for key in LEAD_TEXT_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            bullets.append(value)

    for key, value in data.items():
        if key in SKIPPED_KEYS or key in LEAD_TEXT_KEYS:
            continue
        if isinstance(value, list):
            bullets.extend(text for text in map(_summarize_item, value) if text)

    if section.id in TITLE_SECTIONS:
        slide_type = "title"
    elif section.id in CTA_SECTIONS:
        slide_type = "cta"
    else:
        slide_type = "content"

    return {
        "slide_type": slide_type,
        "section_id": section.id.value,
        "title": data.get("title", section.id.value.replace("_", " ").title()),
        "subtitle": data.get("subtitle"),
        "bullets": bullets,
        "cta": data.get("cta"),
        "label": section.label,
    }


@dataclass
class ExportConfig:
    """Base configuration for exporters."""

    output_path: Optional[Path] = None
    footer_text: Optional[str] = None
    include_speaker_notes: bool = True


@dataclass
class ExportResult:
    """Result of an export operation."""

    success: bool
    output_path: Optional[Path] = None
    file_size_bytes: int = 0
    page_count: int = 0
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


class BaseExporter(ABC):
    """Abstract base class for document exporters."""

    def __init__(self, config: ExportConfig):
        self.config = config

    @abstractmethod
    def export(self, document: ComposedDocument, output_path: Optional[Path] = None) -> ExportResult:
        """
        Export a composed document.

        Args:
            document: The document to export
            output_path: Override output path (uses config.output_path if not provided)

        Returns:
            ExportResult with status and output information
        """

    def _resolve_output_path(self, output_path: Optional[Path], extension: str) -> Path:
        """Resolve the output path, creating directories if needed."""
        if output_path:
            path = Path(output_path)
        elif self.config.output_path:
            path = Path(self.config.output_path)
        else:
            path = Path(f"pitch_output{extension}")

        if path.suffix.lower() != extension.lower():
            path = path.with_suffix(extension)

        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def _hex_to_rgb(self, hex_color: str) -> tuple[int, int, int]:
        """Convert a hex color ("#3A6746" or "#3A6") to an RGB tuple."""
        value = (hex_color or FALLBACK_COLOR).lstrip("#")
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value)
        try:
            return tuple(int(value[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore
        except ValueError:
            return self._hex_to_rgb(FALLBACK_COLOR)
