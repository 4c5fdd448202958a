"""PowerPoint (PPTX) exporter for composed documents."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import PP_ALIGN
from pptx.util import Inches, Pt

from .base import BaseExporter, ExportConfig, ExportResult, build_palette, section_outline
from ..models.document import ComposedDocument

logger = logging.getLogger(__name__)


@dataclass
class PPTXConfig(ExportConfig):
    """Configuration for the PPTX exporter."""

    # Slide dimensions (default: widescreen 16:9)
    slide_width: float = 13.333  # inches
    slide_height: float = 7.5  # inches

    # Font settings
    title_font_name: str = "Calibri"
    title_font_size: int = 40
    subtitle_font_size: int = 22
    body_font_name: str = "Calibri"
    bullet_font_size: int = 16

    # Layout settings
    margin_left: float = 0.5  # inches
    margin_right: float = 0.5
    margin_top: float = 0.75

    max_bullets_per_slide: int = 7
    add_slide_numbers: bool = True


class PPTXExporter(BaseExporter):
    """
    Writes one slide per rendered section.

    Slide numbers print the section's own "position / total" label, so the
    exported deck numbers slides exactly as the composed document does.
    """

    def __init__(self, config: Optional[PPTXConfig] = None):
        super().__init__(config or PPTXConfig())
        self.config: PPTXConfig = self.config  # type: ignore
        self._prs: Optional[Presentation] = None
        self._footer: Optional[str] = None

    def export(self, document: ComposedDocument, output_path: Optional[Path] = None) -> ExportResult:
        """Generate a PowerPoint presentation from a composed document."""
        warnings: list[str] = []
        errors: list[str] = []

        try:
            self._prs = Presentation()
            self._prs.slide_width = Inches(self.config.slide_width)
            self._prs.slide_height = Inches(self.config.slide_height)

            palette = build_palette(document)
            self._footer = self.config.footer_text or document.seller.footer_text

            for section in document.sections:
                outline = section_outline(section)
                slide_type = outline["slide_type"]

                if slide_type == "title":
                    slide = self._create_title_slide(outline, palette)
                elif slide_type == "cta":
                    slide = self._create_cta_slide(outline, palette)
                else:
                    slide = self._create_content_slide(outline, palette, warnings)

                if self.config.add_slide_numbers:
                    self._add_slide_number(slide, outline["label"], palette)

            path = self._resolve_output_path(output_path, ".pptx")
            self._prs.save(str(path))
            logger.info(f"Exported {len(document.sections)} slides to {path}")

            return ExportResult(
                success=True,
                output_path=path,
                file_size_bytes=path.stat().st_size,
                page_count=len(document.sections),
                warnings=warnings,
                metadata={
                    "format": "pptx",
                    "level": document.level.value,
                    "slide_dimensions": f"{self.config.slide_width}x{self.config.slide_height}",
                },
            )

        except Exception as e:
            logger.error(f"PPTX export failed: {e}")
            errors.append(f"Failed to generate PPTX: {str(e)}")
            return ExportResult(success=False, errors=errors, warnings=warnings)

    def _blank_slide(self):
        return self._prs.slides.add_slide(self._prs.slide_layouts[6])  # Blank layout

    @property
    def _content_width(self) -> float:
        return self.config.slide_width - self.config.margin_left - self.config.margin_right

    def _create_title_slide(self, outline: dict[str, Any], palette: dict[str, str]):
        slide = self._blank_slide()
        self._add_top_bar(slide, palette["primary"], 0.15)

        self._add_text(
            slide,
            outline["title"],
            top=2.5,
            height=1.5,
            size=self.config.title_font_size + 4,
            color=palette["text"],
            bold=True,
            align=PP_ALIGN.CENTER,
        )
        if outline.get("subtitle"):
            self._add_text(
                slide,
                outline["subtitle"],
                top=4.2,
                height=1,
                size=self.config.subtitle_font_size,
                color=palette["text_light"],
                align=PP_ALIGN.CENTER,
            )
        return slide

    def _create_content_slide(
        self, outline: dict[str, Any], palette: dict[str, str], warnings: list[str]
    ):
        slide = self._blank_slide()

        # Accent line under the title
        shape = slide.shapes.add_shape(
            MSO_SHAPE.RECTANGLE, Inches(self.config.margin_left), Inches(1.5), Inches(2), Inches(0.05)
        )
        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor(*self._hex_to_rgb(palette["accent"]))
        shape.line.fill.background()

        self._add_text(
            slide,
            outline["title"],
            top=self.config.margin_top,
            height=0.8,
            size=32,
            color=palette["primary"],
            bold=True,
        )

        bullets = outline["bullets"]
        if len(bullets) > self.config.max_bullets_per_slide:
            warnings.append(
                f"Slide '{outline['title']}' has {len(bullets)} bullets, "
                f"truncated to {self.config.max_bullets_per_slide}"
            )
            if self.config.include_speaker_notes:
                notes = bullets[self.config.max_bullets_per_slide:]
                slide.notes_slide.notes_text_frame.text = "\n".join(f"• {note}" for note in notes)
            bullets = bullets[: self.config.max_bullets_per_slide]

        if bullets:
            box = slide.shapes.add_textbox(
                Inches(self.config.margin_left), Inches(1.8), Inches(self._content_width), Inches(5.0)
            )
            frame = box.text_frame
            frame.word_wrap = True
            for index, bullet in enumerate(bullets):
                para = frame.paragraphs[0] if index == 0 else frame.add_paragraph()
                para.text = f"• {bullet}"
                para.font.size = Pt(self.config.bullet_font_size)
                para.font.color.rgb = RGBColor(*self._hex_to_rgb(palette["text"]))
                para.font.name = self.config.body_font_name
                para.space_after = Pt(10)
        return slide

    def _create_cta_slide(self, outline: dict[str, Any], palette: dict[str, str]):
        slide = self._blank_slide()
        self._add_top_bar(slide, palette["accent"], 0.25)

        self._add_text(
            slide,
            outline["title"],
            top=1.5,
            height=1,
            size=self.config.title_font_size,
            color=palette["primary"],
            bold=True,
            align=PP_ALIGN.CENTER,
        )

        cta = outline.get("cta") or {}
        if cta.get("text"):
            self._add_text(
                slide,
                f"{cta['text']}: {cta.get('url', '')}",
                top=3.0,
                height=1.2,
                size=22,
                color=palette["accent"],
                bold=True,
                align=PP_ALIGN.CENTER,
            )

        details = list(outline["bullets"][:4])
        if self._footer:
            details.append(self._footer)
        if details:
            self._add_text(
                slide,
                "\n".join(details),
                top=4.5,
                height=2.0,
                size=16,
                color=palette["text"],
                align=PP_ALIGN.CENTER,
            )
        return slide

    def _add_text(
        self,
        slide,
        text: str,
        top: float,
        height: float,
        size: int,
        color: str,
        bold: bool = False,
        align=PP_ALIGN.LEFT,
    ) -> None:
        box = slide.shapes.add_textbox(
            Inches(self.config.margin_left), Inches(top), Inches(self._content_width), Inches(height)
        )
        frame = box.text_frame
        frame.word_wrap = True
        para = frame.paragraphs[0]
        para.text = text
        para.font.size = Pt(size)
        para.font.bold = bold
        para.font.color.rgb = RGBColor(*self._hex_to_rgb(color))
        para.font.name = self.config.title_font_name if bold else self.config.body_font_name
        para.alignment = align

    def _add_top_bar(self, slide, color: str, height: float) -> None:
        shape = slide.shapes.add_shape(
            MSO_SHAPE.RECTANGLE, Inches(0), Inches(0), Inches(self.config.slide_width), Inches(height)
        )
        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor(*self._hex_to_rgb(color))
        shape.line.fill.background()

    def _add_slide_number(self, slide, label: str, palette: dict[str, str]) -> None:
        """Add the "position / total" label to the bottom right."""
        box = slide.shapes.add_textbox(
            Inches(self.config.slide_width - 1.5),
            Inches(self.config.slide_height - 0.5),
            Inches(1.0),
            Inches(0.3),
        )
        para = box.text_frame.paragraphs[0]
        para.text = label
        para.font.size = Pt(10)
        para.font.color.rgb = RGBColor(*self._hex_to_rgb(palette["text_light"]))
        para.font.name = self.config.body_font_name
        para.alignment = PP_ALIGN.RIGHT
