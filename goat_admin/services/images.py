"""
Image references of a goat listing.

A listing stores its first image in `image_url`. When more than one image is
attached, the rest are kept in `description` as
`{"description": <text>, "additionalImages": [<locator>, ...]}` so existing
consumers that only read `imageUrl` keep working.
"""

import json
from typing import Any, Iterable

from goat_admin.config import UPLOAD_URL_PREFIX


def is_upload_locator(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(UPLOAD_URL_PREFIX)


def _parse_description(description: str | None) -> dict | None:
    if not description:
        return None
    try:
        parsed = json.loads(description)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def decode_description(description: str | None) -> tuple[str | None, list[str]]:
    """Split a stored description into its text and the additional images."""
    parsed = _parse_description(description)
    if parsed is None or not isinstance(parsed.get("additionalImages"), list):
        return description, []

    text = parsed.get("description")
    additional = [url for url in parsed["additionalImages"] if is_upload_locator(url)]
    return (text if isinstance(text, str) else None), additional


def extract_image_urls(record: Any) -> list[str]:
    """
    Return every upload locator a goat references, primary image first.

    `record` only needs `image_url` and `description` attributes. A
    description that is not the JSON structure counts as plain text and
    contributes no images. Duplicates are kept.
    """
    image_urls = []

    image_url = getattr(record, "image_url", None)
    if is_upload_locator(image_url):
        image_urls.append(image_url)

    _, additional = decode_description(getattr(record, "description", None))
    image_urls.extend(additional)

    return image_urls


def clean_image_urls(
    image_url: str | None, image_urls: Iterable[str | None] | None
) -> list[str]:
    """The submitted locator list with blank entries dropped.

    The list form wins; a lone `imageUrl` is used only when the list is empty.
    """
    cleaned = [url.strip() for url in image_urls or [] if url and url.strip()]
    if not cleaned and image_url and image_url.strip():
        cleaned = [image_url.strip()]
    return cleaned


def encode_images(
    description: str | None, image_urls: list[str]
) -> tuple[str | None, str | None]:
    """Return the `(image_url, description)` pair to store for a goat.

    A description that already holds the stored structure, as returned by a
    read, is reduced to its text first so the image list only ever comes from
    `image_urls`.
    """
    text, _ = decode_description(description)

    if not image_urls:
        return None, text or None

    if len(image_urls) == 1:
        return image_urls[0], text or None

    image_data = {
        "description": text or "",
        "additionalImages": image_urls[1:],
    }
    return image_urls[0], json.dumps(image_data)
