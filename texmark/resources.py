"""
Resource and question records supplied by the caller.

Resources are owned by the caller and handed to the renderer wholesale on
every call. The renderer only reads ``id``, ``type`` and, for picture
resources, the URL payload. Records arrive either as model instances or as
plain mappings using the camelCase keys of the upstream API.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.logging import get_logger

logger = get_logger(__name__)


class ResourceType(str, Enum):
    """Kinds of caller-owned assets"""
    LOGO = "LOGO"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    LONG_VIDEO = "LONG_VIDEO"
    CODE = "CODE"
    PDF = "PDF"


class CodingLanguage(str, Enum):
    """Languages a code resource may be written in"""
    JAVA = "JAVA"
    C = "C"
    PYTHON = "PYTHON"
    TEXT = "TEXT"


class QuestionType(str, Enum):
    """Rendering mode flag; only FILL_IN_BLANK changes the output"""
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    FREE_RESPONSE = "FREE_RESPONSE"
    SHORT_ANSWER = "SHORT_ANSWER"
    FILL_IN_BLANK = "FILL_IN_BLANK"
    PARENT = "PARENT"


class URLResourceData(BaseModel):
    """Payload of URL-backed resources (images, logos, videos, PDFs)"""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    key: Optional[str] = None
    index: Optional[int] = None
    alt_text: Optional[str] = Field(None, alias="altText")


class CodeResourceData(BaseModel):
    """Payload of source-code resources"""

    language: CodingLanguage
    content: str
    index: Optional[int] = None


class Resource(BaseModel):
    """
    A caller-owned asset referenceable from markup by its id.

    Ids are expected to be unique within a list; this is not checked.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    type: ResourceType
    # Payloads the renderer never reads stay as plain dicts
    data: Union[URLResourceData, CodeResourceData, dict[str, Any]] = Field(union_mode="left_to_right")

    application_id: Optional[str] = Field(None, alias="applicationId")
    question_id: Optional[str] = Field(None, alias="questionId")
    explanation_id: Optional[str] = Field(None, alias="explanationId")
    answer_choice_id: Optional[str] = Field(None, alias="answerChoiceId")
    exam_id: Optional[str] = Field(None, alias="examId")

    @property
    def is_image(self) -> bool:
        return self.type == ResourceType.IMAGE

    @property
    def url_data(self) -> Optional[URLResourceData]:
        """The URL payload, or None when the record carries none."""
        return self.data if isinstance(self.data, URLResourceData) else None


def coerce_resources(resources: Optional[Iterable[Any]]) -> list[Resource]:
    """
    Normalise caller input to a list of Resource models.

    Accepts None, Resource instances or mappings. Records that do not
    describe a resource at all (unknown type, no payload) are skipped.
    """
    coerced: list[Resource] = []
    for position, record in enumerate(resources or []):
        if isinstance(record, Resource):
            coerced.append(record)
            continue
        try:
            coerced.append(Resource.model_validate(record))
        except ValidationError as e:
            logger.info(
                "Skipping unusable resource record",
                extra={"extra_data": {"position": position, "errors": e.error_count()}},
            )
    return coerced
