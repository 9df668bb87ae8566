"""Canonical store of Photo objects keyed by normalized path."""

from __future__ import annotations

import os
from typing import Iterable, Iterator

from photo_albums.model.photo import Photo, normalize_path


class PhotoLibrary:
    """Holds exactly one Photo instance per file path.

    Albums keep references to the instances handed out here, so adding the
    same file to two albums yields one shared object.
    """

    def __init__(self) -> None:
        self._photos: dict[str, Photo] = {}

    def get(self, path: str | os.PathLike) -> Photo | None:
        return self._photos.get(normalize_path(path))

    def add(self, photo: Photo) -> Photo:
        """Register a photo and return the canonical instance for its path.

        If a photo with the same path is already known, that one is kept and
        returned.
        """
        return self._photos.setdefault(photo.path, photo)

    def open(self, path: str | os.PathLike) -> Photo:
        """Return the photo for a path, reading it from disk on first use.

        Raises ValueError for a blank path and OSError if the file is missing
        or unreadable.
        """
        existing = self.get(path)
        if existing is not None:
            return existing
        return self.add(Photo(path))

    def prune(self, referenced: Iterable[Photo]) -> int:
        """Drop photos not in ``referenced``. Returns the number removed."""
        keep = {p.path for p in referenced}
        stale = [path for path in self._photos if path not in keep]
        for path in stale:
            del self._photos[path]
        return len(stale)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Photo):
            return item.path in self._photos
        if isinstance(item, (str, os.PathLike)):
            try:
                return normalize_path(item) in self._photos
            except ValueError:
                return False
        return False

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[Photo]:
        return iter(list(self._photos.values()))
