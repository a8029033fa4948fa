"""texmark - render author markup with LaTeX-style macros and math to HTML.

Main entry points:
- render_latex: full pipeline, raises on typesetting faults
- try_render_latex: same, but returns the input unchanged on failure
- missing_images: IMAGE resources never referenced by the markup
"""

__version__ = "0.1.0"

from .images import missing_images
from .math_mode import Latex2MathMLEngine, MathEngine
from .pipeline import render_latex, try_render_latex
from .resources import (
    CodeResourceData,
    CodingLanguage,
    QuestionType,
    Resource,
    ResourceType,
    URLResourceData,
)

__all__ = [
    "render_latex",
    "try_render_latex",
    "missing_images",
    "MathEngine",
    "Latex2MathMLEngine",
    "Resource",
    "ResourceType",
    "URLResourceData",
    "CodeResourceData",
    "CodingLanguage",
    "QuestionType",
]
