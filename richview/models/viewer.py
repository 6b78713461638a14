"""
Viewer option models and validation for RichView.
"""

from typing import Dict, Literal, Optional, Union
from pydantic import BaseModel, Field, validator

from ..utils.styles import OVERFLOW_VALUES, css_property_name

StyleScalar = Union[str, int, float]
Overflow = Literal[OVERFLOW_VALUES]


class ViewerOptions(BaseModel):
    """Caller-facing configuration for a rich text viewer."""

    html: Optional[str] = None
    class_name: Optional[str] = None
    style: Dict[str, Optional[StyleScalar]] = Field(default_factory=dict)

    # Typography
    font_size: Optional[StyleScalar] = None
    line_height: Optional[StyleScalar] = None
    font_family: Optional[str] = None
    color: Optional[str] = None

    # Container styling
    border: Optional[str] = None
    border_radius: Optional[StyleScalar] = None
    padding: Optional[StyleScalar] = None
    max_height: Optional[StyleScalar] = None
    overflow: Optional[Overflow] = None
    background_color: Optional[str] = None

    @validator("class_name")
    def validate_class_name(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None

    @validator("style")
    def validate_style_keys(cls, v):
        for key in v:
            if not css_property_name(key):
                raise ValueError("Style property names must not be blank")
        return v


class RenderResult(BaseModel):
    """Rendered surface returned by the preview API."""

    html: str
    state: str
