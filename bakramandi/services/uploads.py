from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol, Sequence

from bakramandi.core.config import Settings
from bakramandi.core.errors import ValidationError
from bakramandi.services.storage import LocalObjectStore


class UploadedFile(Protocol):
    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


@dataclass(frozen=True)
class UploadPolicy:
    max_files: int
    max_bytes: int
    allowed_extensions: frozenset[str]
    allowed_media_types: frozenset[str]

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadPolicy":
        return cls(
            max_files=settings.max_upload_files,
            max_bytes=settings.max_upload_bytes,
            allowed_extensions=frozenset(e.lower() for e in settings.allowed_image_extensions),
            allowed_media_types=frozenset(m.lower() for m in settings.allowed_image_media_types),
        )


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


def safe_filename(name: str) -> str:
    # keep the basename only; clients may send "C:\\pics\\goat.jpg" or "../x.png"
    base = PurePosixPath(name.replace("\\", "/")).name
    return base or "image"


def check_image_type(filename: str, content_type: str | None, policy: UploadPolicy) -> None:
    ext = PurePosixPath(filename).suffix.lower()
    media_type = (content_type or "").split(";")[0].strip().lower()
    if ext not in policy.allowed_extensions or media_type not in policy.allowed_media_types:
        raise ValidationError(
            "Only JPEG/PNG images are allowed",
            details=[{"file": filename, "content_type": content_type}],
        )


async def read_images(files: Sequence[UploadedFile], policy: UploadPolicy) -> list[ImageUpload]:
    """
    Validate every attachment before anything is written.
    Raises ValidationError on too many files, a disallowed type, or an oversize file.
    """
    if len(files) > policy.max_files:
        raise ValidationError(f"At most {policy.max_files} images are allowed")

    images: list[ImageUpload] = []
    for f in files:
        filename = f.filename or ""
        check_image_type(filename, f.content_type, policy)

        # one byte past the limit is enough to know it is too big
        data = await f.read(policy.max_bytes + 1)
        if len(data) > policy.max_bytes:
            raise ValidationError(
                f"Image exceeds the {policy.max_bytes // (1024 * 1024)}MB limit",
                details=[{"file": filename}],
            )
        images.append(ImageUpload(filename=filename, content_type=f.content_type or "", data=data))
    return images


def stored_key(filename: str, *, now_ms: int) -> str:
    return f"{now_ms}-{safe_filename(filename)}"


def store_images(images: Sequence[ImageUpload], object_store: LocalObjectStore) -> list[str]:
    urls: list[str] = []
    for image in images:
        now_ms = time.time_ns() // 1_000_000
        key = stored_key(image.filename, now_ms=now_ms)
        # same name twice within one millisecond
        while object_store.exists(key):
            now_ms += 1
            key = stored_key(image.filename, now_ms=now_ms)
        urls.append(object_store.put_bytes(key=key, data=image.data))
    return urls
