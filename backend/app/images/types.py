"""app/images/types.py

Lightweight dataclasses for the hero image upload pipeline.
Design goals:
- one request owns one UploadCandidate; nothing here is shared across requests
- verdicts are immutable once produced
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from app.core import AppError, ErrorCode


@dataclass(frozen=True)
class UploadCandidate:
    data: bytes
    content_type: str
    filename: str | None = None  # informational only; never used for the storage key

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int
    format: str  # Pillow format name: "JPEG" | "PNG" | "WEBP" | ...


@dataclass(frozen=True)
class Accepted:
    width: int
    height: int


@dataclass(frozen=True)
class Rejected:
    kind: ErrorCode
    detail: dict[str, Any] = field(default_factory=dict)

    def to_error(self) -> AppError:
        return AppError(code=self.kind, reason=self.kind.value, details=dict(self.detail))


ValidationVerdict = Union[Accepted, Rejected]


@dataclass(frozen=True)
class StoredObjectRef:
    bucket: str
    key: str
    url: str
    width: int
    height: int
