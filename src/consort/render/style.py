"""Visual tuning constants for the reference diagram.

Offsets are expressed as multiples of the grid spacing so they scale
with the grid.  None of them affect which cells are drawn.
"""

from pydantic import BaseModel, ConfigDict, Field


class RenderStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Geometry of arrows and text, in multiples of column spacing
    split_offset: float = Field(1.2, ge=0, description="Start offset of arrows leaving a parent sideways")
    exclusion_text_gap: float = Field(0.4, ge=0, description="Gap between the flow arrow and exclusion text")

    # Text
    label_format: str = "{label}\n(n = {count})"
    exclusion_line_format: str = "{reason} (n = {count})"
    font_size: float = Field(6.0, gt=0)
    exclusion_font_size: float = Field(5.0, gt=0)

    # Strokes
    line_width: float = Field(0.8, gt=0)
    box_rounding: float = Field(0.8, ge=0, description="Corner radius in grid units")
    box_face_color: str = "white"
    box_edge_color: str = "black"
    arrow_style: str = "-|>"
    arrow_color: str = "black"


DEFAULT_STYLE = RenderStyle()
