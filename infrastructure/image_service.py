"""Image encoding for note attachments and decoding for display.

Attachments are stored as `data:` URLs so a note is self-contained. Encoding
verifies the file with Pillow; decoding prefers Qt and falls back to Pillow,
with a small in-memory LRU cache of scaled images.
"""

from __future__ import annotations

import base64
import binascii
from collections import OrderedDict
from dataclasses import dataclass
import hashlib
import io
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps, UnidentifiedImageError
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage
from loguru import logger

from core.errors import ImageEncodeError

DEFAULT_MAX_BYTES = 10 * 1024 * 1024

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp)"


def _compute_cache_key(data_url: str, size_key: int) -> str:
    """Compute a stable cache key from the encoded image and requested side."""
    sig = f"{len(data_url)}|{int(size_key)}|".encode("ascii") + data_url.encode(
        "utf-8", errors="ignore"
    )
    return hashlib.sha1(sig).hexdigest()


def split_data_url(data_url: str) -> tuple[str, bytes]:
    """Return (mime type, raw bytes) of a base64 `data:` URL.

    Raises:
        ValueError: If `data_url` is not a base64 data URL.
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("not a data URL")
    header, payload = data_url[5:].split(",", 1)
    parts = header.split(";")
    if "base64" not in parts[1:]:
        raise ValueError("data URL is not base64 encoded")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as ex:
        raise ValueError(f"bad base64 payload: {ex}") from ex
    return parts[0] or "application/octet-stream", raw


@dataclass
class _MemCacheItem:
    key: str
    image: QImage


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        item = self._data.get(key)
        if not item:
            return None
        self._data.move_to_end(key)
        return item.image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        self._data[key] = _MemCacheItem(key, image)
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)


class ImageService:
    """Encode attachment files and decode stored attachments for the UI."""

    def __init__(self, settings: object | None = None) -> None:
        """Initialize limits and the decode cache from settings."""
        self._mem_cap = 128
        self._max_bytes = DEFAULT_MAX_BYTES
        if settings is not None:
            try:
                self._mem_cap = int(settings.get("notes.image_cache_size", 128) or 128)
            except (ValueError, TypeError):
                self._mem_cap = 128
            try:
                self._max_bytes = int(
                    settings.get("notes.max_image_bytes", DEFAULT_MAX_BYTES) or DEFAULT_MAX_BYTES
                )
            except (ValueError, TypeError):
                self._max_bytes = DEFAULT_MAX_BYTES
        self._mem_cache = _LRUCache(self._mem_cap)

    # Public API
    def encode_file(self, path: str) -> str:
        """Return a base64 `data:` URL for the image at `path`.

        Raises:
            ImageEncodeError: If the file is missing, too large, unreadable or
                not an image Pillow recognizes.
        """
        file_path = Path(path)
        try:
            size = file_path.stat().st_size
        except OSError as ex:
            raise ImageEncodeError(path, f"cannot access file ({ex})") from ex
        if size > self._max_bytes:
            raise ImageEncodeError(path, f"file is {size} bytes, limit is {self._max_bytes}")
        try:
            raw = file_path.read_bytes()
        except OSError as ex:
            raise ImageEncodeError(path, f"cannot read file ({ex})") from ex

        mime = self._detect_mime(path, raw)
        encoded = base64.b64encode(raw).decode("ascii")
        logger.info("Encoded image {} ({} bytes, {})", path, size, mime)
        return f"data:{mime};base64,{encoded}"

    def to_qimage(self, data_url: str, max_side: int = 0) -> QImage | None:
        """Decode a stored `data:` URL, scaled to fit `max_side` when > 0."""
        if not data_url:
            return None
        key = _compute_cache_key(data_url, max_side)
        cached = self._mem_cache.get(key)
        if cached is not None and not cached.isNull():
            return cached

        try:
            _mime, raw = split_data_url(data_url)
        except ValueError as ex:
            logger.warning("Stored image is not decodable: {}", ex)
            return None

        img = QImage()
        if not img.loadFromData(raw) or img.isNull():
            img = self._load_via_pillow(raw)
        if img is None or img.isNull():
            logger.warning("Stored image could not be decoded ({} bytes)", len(raw))
            return None
        if max_side and max_side > 0 and max(img.width(), img.height()) > max_side:
            img = img.scaled(max_side, max_side, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        self._mem_cache.put(key, img)
        return img

    # Internal helpers
    def _detect_mime(self, path: str, raw: bytes) -> str:
        try:
            with Image.open(io.BytesIO(raw)) as im:
                fmt = im.format
                im.verify()
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as ex:
            raise ImageEncodeError(path, f"not a readable image ({ex})") from ex
        mime = Image.MIME.get(fmt or "", "")
        if not mime:
            raise ImageEncodeError(path, f"unsupported image format {fmt!r}")
        return mime

    def _load_via_pillow(self, raw: bytes) -> QImage | None:
        """Decode with Pillow for formats the Qt plugins do not cover."""
        try:
            with Image.open(io.BytesIO(raw)) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                return self._pil_to_qimage(im)
        except (UnidentifiedImageError, OSError, ValueError) as ex:
            logger.debug("Pillow decode failed: {}", ex)
            return None

    def _pil_to_qimage(self, pil_img: Any) -> QImage | None:
        """Convert a Pillow image to `QImage` and detach from the source buffer."""
        try:
            mode = pil_img.mode
            if mode not in ("RGBA", "RGB"):
                pil_img = pil_img.convert("RGBA")
                mode = pil_img.mode
            if mode == "RGB":
                data = pil_img.tobytes("raw", "RGB")
                qimg = QImage(
                    data, pil_img.width, pil_img.height, pil_img.width * 3, QImage.Format_RGB888
                )
            else:
                data = pil_img.tobytes("raw", "RGBA")
                qimg = QImage(
                    data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format_RGBA8888
                )
            if qimg is None or qimg.isNull():
                return None
            return qimg.copy()
        except (ValueError, TypeError) as ex:
            logger.debug("PIL->QImage convert failed: {}", ex)
            return None
