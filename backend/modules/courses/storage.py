"""
Local file storage for course images and lecture videos.

Lecture videos are uploaded to a private pending directory and moved to
the public directory when an admin approves the lecture. Course images are
written straight to the image directory under a random name that keeps
the original extension.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Optional, Union

from .exceptions import ContentStorageError, InvalidFilenameError

logger = logging.getLogger(__name__)


def _extension(filename: Optional[str]) -> str:
    """Lower-cased extension with its dot, filtered to alphanumerics."""
    if not filename:
        return ""
    _, ext = os.path.splitext(os.path.basename(filename))
    ext = "".join(ch for ch in ext.lower() if ch.isalnum())
    return f".{ext}" if ext else ""


def _safe_name(filename: str) -> str:
    """Reject names that are empty or would leave their directory."""
    if not filename or filename in {".", ".."} or os.path.basename(filename) != filename:
        raise InvalidFilenameError(filename)
    if "/" in filename or "\\" in filename:
        raise InvalidFilenameError(filename)
    return filename


class ContentStorage:
    """Filesystem storage rooted at three directories."""

    def __init__(
        self,
        image_dir: Union[str, Path],
        pending_video_dir: Union[str, Path],
        public_video_dir: Union[str, Path],
    ):
        self._image_dir = Path(image_dir)
        self._pending_dir = Path(pending_video_dir)
        self._public_dir = Path(public_video_dir)

    def save_course_image(self, data: bytes, original_filename: Optional[str]) -> str:
        """
        Write an uploaded course image.

        Returns:
            The generated file name (uuid + original extension).

        Raises:
            ContentStorageError: If the file cannot be written
        """
        name = f"{uuid.uuid4()}{_extension(original_filename)}"
        try:
            self._image_dir.mkdir(parents=True, exist_ok=True)
            (self._image_dir / name).write_bytes(data)
        except OSError as e:
            logger.error("Failed to save course image %s: %s", name, e)
            raise ContentStorageError("save image", name, str(e)) from e
        return name

    def publish_lecture_video(self, filename: str) -> Path:
        """
        Move a lecture video from the pending to the public directory.

        An existing public file with the same name is replaced.

        Returns:
            Path of the published file.

        Raises:
            InvalidFilenameError: If the name contains a path
            ContentStorageError: If the source is missing or the move fails
        """
        name = _safe_name(filename)
        source = self._pending_dir / name
        target = self._public_dir / name
        try:
            self._public_dir.mkdir(parents=True, exist_ok=True)
            if not source.is_file():
                raise FileNotFoundError(f"no pending video at {source}")
            shutil.move(str(source), str(target))
        except OSError as e:
            logger.error("Failed to move lecture video %s: %s", name, e)
            raise ContentStorageError("move video", name, str(e)) from e
        logger.info("Published lecture video %s", name)
        return target

    def unpublish_lecture_video(self, filename: str) -> Path:
        """
        Move a published lecture video back to the pending directory.

        Raises:
            InvalidFilenameError: If the name contains a path
            ContentStorageError: If the public file is missing or the move fails
        """
        name = _safe_name(filename)
        source = self._public_dir / name
        target = self._pending_dir / name
        try:
            self._pending_dir.mkdir(parents=True, exist_ok=True)
            if not source.is_file():
                raise FileNotFoundError(f"no public video at {source}")
            shutil.move(str(source), str(target))
        except OSError as e:
            logger.error("Failed to move lecture video %s back: %s", name, e)
            raise ContentStorageError("unpublish video", name, str(e)) from e
        logger.info("Returned lecture video %s to pending", name)
        return target
