"""Data models for the store module."""

import json
from dataclasses import dataclass
from typing import Any, Optional

from cryptmarks.exceptions import CorruptDataError

__all__ = [
    "Bookmark",
    "normalize_description",
    "bookmarks_to_json",
    "bookmarks_from_json",
]


def normalize_description(value: Optional[str]) -> Optional[str]:
    """Map an empty description to None; the document never stores ""."""
    if value is None or value == "":
        return None
    return value


@dataclass(frozen=True)
class Bookmark:
    """
    One bookmark entry.

    Fields
    ──────
    url          — unique key, compared case-sensitively
    description  — free text, or None when absent (never "")
    """
    url:         str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Bookmark url must not be empty")
        object.__setattr__(self, "description", normalize_description(self.description))

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"url": self.url}
        if self.description is not None:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, d: Any) -> "Bookmark":
        """Build a Bookmark from one decoded JSON object; raises CorruptDataError."""
        if not isinstance(d, dict):
            raise CorruptDataError(f"expected an object per bookmark, got {type(d).__name__}")
        url = d.get("url")
        if not isinstance(url, str) or not url:
            raise CorruptDataError(f"bookmark has missing or invalid url: {url!r}")
        description = d.get("description")
        if description is not None and not isinstance(description, str):
            raise CorruptDataError(f"bookmark {url!r} has a non-string description")
        return cls(url=url, description=description)

    def __str__(self) -> str:
        if self.description is None:
            return self.url
        return f"{self.url}  {self.description}"


def bookmarks_to_json(bookmarks: list[Bookmark]) -> bytes:
    """Serialize a collection to the on-disk document (a JSON array), UTF-8 encoded."""
    doc = [b.to_dict() for b in bookmarks]
    return (json.dumps(doc, indent=2, ensure_ascii=False) + "\n").encode("utf-8")


def bookmarks_from_json(data: bytes) -> list[Bookmark]:
    """
    Parse decrypted plaintext into a collection, preserving order.

    Raises:
        CorruptDataError: the bytes are not a JSON array of bookmark objects.
    """
    try:
        doc = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptDataError(f"bookmark file is not valid JSON: {exc}") from exc
    if not isinstance(doc, list):
        raise CorruptDataError(f"expected a JSON array at top level, got {type(doc).__name__}")
    return [Bookmark.from_dict(item) for item in doc]
