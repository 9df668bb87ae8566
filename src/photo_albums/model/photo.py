"""Photo model: a file on disk with a caption and a set of tags."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Iterable

from photo_albums.model.tag import Tag

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def normalize_path(path: str | os.PathLike) -> str:
    """Return the absolute, normalized form of a photo path.

    Raises ValueError for a missing or blank path. Symlinks are not resolved.
    """
    if path is None:
        raise ValueError("Photo path cannot be empty")
    text = os.fspath(path)
    if not text.strip():
        raise ValueError("Photo path cannot be empty")
    return os.path.abspath(text)


def read_modified_time(path: str) -> datetime:
    """Return a file's last-modified time as a local naive datetime."""
    return datetime.fromtimestamp(os.stat(path).st_mtime)


class Photo:
    """A photo identified by its normalized absolute file path.

    Two Photo objects with the same path compare equal regardless of their
    captions or tags. The same instance is meant to be shared by every album
    that holds it, so caption and tag edits show up everywhere.
    """

    def __init__(self, path: str | os.PathLike):
        self._path = normalize_path(path)
        if not os.path.exists(self._path):
            raise FileNotFoundError(f"Photo file does not exist: {self._path}")
        self._caption = ""
        self._captured_at: datetime | None = None
        self._tags: list[Tag] = []
        self.refresh_captured_at()

    @classmethod
    def restore(
        cls,
        path: str,
        caption: str | None = "",
        captured_at: datetime | None = None,
        tags: Iterable[Tag] = (),
    ) -> Photo:
        """Rebuild a photo from stored fields without touching the filesystem."""
        photo = cls.__new__(cls)
        photo._path = normalize_path(path)
        photo._caption = ""
        photo._captured_at = captured_at
        photo._tags = []
        photo.set_caption(caption)
        for tag in tags:
            photo.add_tag(tag)
        return photo

    @property
    def path(self) -> str:
        return self._path

    @property
    def filename(self) -> str:
        return os.path.basename(self._path)

    @property
    def caption(self) -> str:
        return self._caption

    @property
    def display_name(self) -> str:
        """Caption if set, otherwise the file name."""
        return self._caption or self.filename

    @property
    def captured_at(self) -> datetime | None:
        return self._captured_at

    @property
    def tags(self) -> tuple[Tag, ...]:
        return tuple(self._tags)

    def set_caption(self, text: str | None) -> None:
        self._caption = text.strip() if text else ""

    def refresh_captured_at(self) -> None:
        """Re-read the capture time from the file's last-modified timestamp.

        Raises OSError if the file attributes cannot be read.
        """
        self._captured_at = read_modified_time(self._path)

    def formatted_captured_at(self) -> str:
        if self._captured_at is None:
            return ""
        return self._captured_at.strftime(DATETIME_FORMAT)

    def has_tag(self, tag: Tag | None) -> bool:
        return tag is not None and tag in self._tags

    def add_tag(self, tag: Tag | None) -> bool:
        """Attach a tag. Returns False if it is None or already present."""
        if tag is None or tag in self._tags:
            return False
        self._tags.append(tag)
        return True

    def remove_tag(self, tag: Tag | None) -> bool:
        if tag is None or tag not in self._tags:
            return False
        self._tags.remove(tag)
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Photo):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return (
            f"<Photo(path='{self._path}', caption='{self._caption}', "
            f"captured_at='{self.formatted_captured_at()}')>"
        )
