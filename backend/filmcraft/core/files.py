"""
Local object storage.

Objects live under ``MEDIA_ROOT/<bucket>/<key>`` and are served by the app at
``STORAGE_PUBLIC_URL/<bucket>/<key>``. Shot reference images go to the
``shot-images`` bucket under ``shots/<shot id or timestamp>.<ext>``; uploading
the same key again replaces the object.
"""

import io
import os
import time
from typing import Optional

from PIL import Image, UnidentifiedImageError

from filmcraft.core.config import settings

SHOT_IMAGES_BUCKET = "shot-images"


class InvalidImageError(ValueError):
    pass


def ensure_bucket(bucket: str) -> str:
    path = os.path.join(settings.MEDIA_ROOT, bucket)
    os.makedirs(path, exist_ok=True)
    return path


def object_path(bucket: str, key: str) -> str:
    return os.path.join(settings.MEDIA_ROOT, bucket, *key.split("/"))


def public_url(bucket: str, key: str) -> str:
    return f"{settings.STORAGE_PUBLIC_URL.rstrip('/')}/{bucket}/{key}"


def key_from_public_url(url: str) -> str:
    # "<base>/shot-images/shots/12.png" -> "shots/12.png"
    return "/".join(url.split("/")[-2:])


def validate_image(content_type: Optional[str], data: bytes) -> None:
    if not (content_type or "").startswith("image/"):
        raise InvalidImageError("Please select an image file (JPEG, PNG, etc.)")
    if len(data) > settings.MAX_IMAGE_BYTES:
        raise InvalidImageError(
            f"Image size must be less than {settings.MAX_IMAGE_BYTES // (1024 * 1024)}MB"
        )
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise InvalidImageError("File is not a readable image")


def shot_image_key(filename: Optional[str], shot_id: Optional[int] = None) -> str:
    ext = os.path.splitext(filename or "")[1].lstrip(".") or "jpg"
    name = shot_id if shot_id is not None else int(time.time() * 1000)
    return f"shots/{name}.{ext}"


def upload_object(bucket: str, key: str, data: bytes) -> str:
    """Write (or overwrite) an object and return its public URL."""
    ensure_bucket(bucket)
    path = object_path(bucket, key)
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "wb") as f:
        f.write(data)

    return public_url(bucket, key)


def remove_object(bucket: str, key: str) -> bool:
    path = object_path(bucket, key)
    if not os.path.exists(path):
        return False
    os.remove(path)
    return True


def save_shot_image(shot_id: Optional[int], filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
    validate_image(content_type, data)
    return upload_object(SHOT_IMAGES_BUCKET, shot_image_key(filename, shot_id), data)
