"""
Media classification and thumbnail selection.

Media kinds are decided by MIME type first and file extension second:
- video: ``video/*`` or .mp4/.webm/.mov/.m4v
- image: ``image/*`` or .png/.jpg/.jpeg/.webp/.gif/.avif/.svg
- pdf:   ``application/pdf`` or .pdf
- file:  anything else
"""

import re
from functools import lru_cache
from typing import Any, Iterable, Literal

from practice_catalog.configs.config import Config
from practice_catalog.normalization.strapi import unwrap, unwrap_media, unwrap_single_media
from practice_catalog.schemas.practice import Thumb

MediaKind = Literal["video", "image", "pdf", "file"]

_PDF_PATTERN = re.compile(r"\.pdf(\?|$)", re.IGNORECASE)


@lru_cache
def _extension_pattern(kind: str) -> re.Pattern:
    extensions = Config.get_media_extensions()[kind]
    alternation = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(rf"\.({alternation})(\?|$)", re.IGNORECASE)


def _url_and_mime(media: Any) -> tuple[str, str]:
    if not isinstance(media, dict):
        return "", ""
    return str(media.get("url") or ""), str(media.get("mime") or "")


def is_video(media: Any) -> bool:
    url, mime = _url_and_mime(media)
    return mime.startswith("video/") or bool(_extension_pattern("video").search(url))


def is_image(media: Any) -> bool:
    url, mime = _url_and_mime(media)
    return mime.startswith("image/") or bool(_extension_pattern("image").search(url))


def is_pdf(media: Any) -> bool:
    url, mime = _url_and_mime(media)
    return mime == "application/pdf" or bool(_PDF_PATTERN.search(url))


def media_kind(media: Any) -> MediaKind:
    """Classify one media mapping; video wins over image when both match."""
    if not media:
        return "file"
    if is_video(media):
        return "video"
    if is_image(media):
        return "image"
    if is_pdf(media):
        return "pdf"
    return "file"


def has_video(media_items: Iterable[Any]) -> bool:
    return any(is_video(m) for m in media_items)


def extract_thumb(practice: Any) -> Thumb:
    """
    Pick the card thumbnail for a practice.

    Order: ``video_poster`` (if it is an image), then the first image in
    ``media``, else no thumbnail. A video URL is never returned.

    Args:
        practice: Raw or unwrapped practice record

    Returns:
        Thumb with kind "image" or "none"
    """
    p = unwrap(practice)
    if not isinstance(p, dict):
        return Thumb()

    poster = unwrap_single_media(p.get("video_poster"))
    if poster and is_image(poster) and not is_video(poster):
        return Thumb(kind="image", url=str(poster["url"]))

    for m in unwrap_media(p.get("media")):
        if m.get("url") and is_image(m) and not is_video(m):
            return Thumb(kind="image", url=str(m["url"]))

    return Thumb()
