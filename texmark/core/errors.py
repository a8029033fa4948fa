"""
Renderer exceptions.

Typesetting faults and stage faults propagate out of ``render_latex``;
``PicDataError`` never leaves the macro expander.
"""

from typing import Any, Dict, Optional


class TexmarkError(Exception):
    """Base exception for rendering errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MathRenderError(TexmarkError):
    """Raised when the math engine rejects a math span"""

    def __init__(self, content: str, display_mode: bool, error: str):
        mode = "display" if display_mode else "inline"
        super().__init__(
            message=f"Failed to typeset {mode} math '{content}': {error}",
            details={"content": content, "display_mode": display_mode, "error": error}
        )


class PicDataError(TexmarkError):
    """Raised when a \\pic argument is not a valid picture object"""

    def __init__(self, fragment: str, error: str):
        super().__init__(
            message=f"Invalid \\pic data '{fragment}': {error}",
            details={"fragment": fragment, "error": error}
        )


class StageError(TexmarkError):
    """Raised when a pipeline stage fails unexpectedly"""

    def __init__(self, stage: str, error: str):
        super().__init__(
            message=f"Stage '{stage}' failed: {error}",
            details={"stage": stage, "error": error}
        )
