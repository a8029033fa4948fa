"""
Resolution of ``\\includegraphics{id}`` against the caller's resources.

A missing resource is never an error: the reference renders as a fixed
"not found" picture instead.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Optional

from .core.config import get_settings
from .core.logging import get_logger
from .resources import Resource, coerce_resources
from .stages import Stage, stage

logger = get_logger(__name__)

INCLUDEGRAPHICS_PATTERN = r"\\includegraphics\{([a-zA-Z0-9\-_]+)\}"


def image_block(url: str, alt: str) -> str:
    return (
        f"<div class='mx-2 my-8'><img class='mx-auto max-h-[300px] dark:invert-[0.9]' "
        f"src='{url}' alt='{alt}'/></div>"
    )


def find_image(resources: Optional[list[Resource]], resource_id: str) -> Optional[Resource]:
    """First IMAGE resource with the given id, if any."""
    if resources is None:
        return None
    return next(
        (r for r in resources if r.is_image and r.id == resource_id),
        None,
    )


def includegraphics_stage(resources: Optional[list[Resource]]) -> Stage:
    settings = get_settings()

    def _resolve(match: re.Match) -> str:
        resource_id = match.group(1)
        resource = find_image(resources, resource_id)
        data = resource.url_data if resource is not None else None
        if data is None:
            logger.info(
                "Image resource not found",
                extra={"extra_data": {"resource_id": resource_id}},
            )
            return image_block(settings.NOT_FOUND_IMAGE_URL, settings.NOT_FOUND_IMAGE_ALT)
        return image_block(data.url, data.alt_text or "")

    return stage("includegraphics", INCLUDEGRAPHICS_PATTERN, _resolve)


def missing_images(markup: str = "", resources: Optional[Iterable[Any]] = None) -> list[Resource]:
    """
    IMAGE resources whose id never appears in ``markup``.

    Plain substring containment, not macro-aware: an id mentioned anywhere
    counts as referenced. A resource without an id is never reported.
    """
    return [
        resource
        for resource in coerce_resources(resources)
        if resource.is_image and (resource.id or "") not in markup
    ]


def resource_texts(resources: Optional[list[Resource]]) -> list[str]:
    """Caller text the resolver may splice into the output."""
    texts = []
    for resource in resources or []:
        data = resource.url_data
        if data is not None:
            texts.append(data.url)
            texts.append(data.alt_text or "")
    return texts
