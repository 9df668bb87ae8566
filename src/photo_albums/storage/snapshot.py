"""Snapshot format for the whole user/album/photo tree.

A snapshot is a single YAML document. Photos are stored once, keyed by
path, and albums refer to them by path so shared photos stay shared after a
reload.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

import yaml

from photo_albums.model.library import PhotoLibrary
from photo_albums.model.photo import Photo
from photo_albums.model.tag import Tag
from photo_albums.model.user import User

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1
DEFAULT_SNAPSHOT_PATH = "data/users.dat"


class SnapshotError(ValueError):
    """Raised when a snapshot document is structurally or semantically invalid."""


# --- Encoding ---

def _encode_photo(photo: Photo) -> dict[str, Any]:
    return {
        "path": photo.path,
        "caption": photo.caption,
        "captured_at": (
            photo.captured_at.isoformat() if photo.captured_at else None
        ),
        "tags": [{"name": t.name, "value": t.value} for t in photo.tags],
    }


def encode(users: Iterable[User]) -> dict[str, Any]:
    """Convert users and everything below them into plain YAML-safe data."""
    photos: dict[str, Photo] = {}
    user_records = []
    for user in users:
        album_records = []
        for album in user.albums:
            paths = []
            for photo in album.photos:
                known = photos.setdefault(photo.path, photo)
                if known is not photo:
                    logger.debug(
                        f"Separate instances share path {photo.path}; "
                        f"keeping the first one seen"
                    )
                paths.append(photo.path)
            album_records.append({"name": album.name, "photos": paths})
        user_records.append({"username": user.username, "albums": album_records})
    return {
        "version": SNAPSHOT_VERSION,
        "photos": [_encode_photo(p) for p in photos.values()],
        "users": user_records,
    }


# --- Decoding ---

def _require_mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise SnapshotError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _require_str(record: dict, key: str, what: str, optional: bool = False) -> str | None:
    value = record.get(key)
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise SnapshotError(f"{what}: '{key}' must be a string")
    return value


def _decode_photo(record: Any) -> Photo:
    record = _require_mapping(record, "Photo record")
    path = _require_str(record, "path", "Photo record")
    caption = _require_str(record, "caption", f"Photo {path}", optional=True)
    stamp = record.get("captured_at")
    if not isinstance(stamp, datetime):
        # unquoted YAML timestamps load as datetime
        stamp = _require_str(record, "captured_at", f"Photo {path}", optional=True)
    try:
        if isinstance(stamp, str):
            captured_at = datetime.fromisoformat(stamp) if stamp else None
        else:
            captured_at = stamp
        if captured_at is not None and captured_at.tzinfo is not None:
            captured_at = captured_at.astimezone().replace(tzinfo=None)
        tags = []
        for tag_record in _require_list(record.get("tags"), f"Tags of {path}"):
            tag_record = _require_mapping(tag_record, f"Tag of {path}")
            tags.append(Tag(
                _require_str(tag_record, "name", f"Tag of {path}"),
                _require_str(tag_record, "value", f"Tag of {path}"),
            ))
        return Photo.restore(path, caption, captured_at, tags)
    except SnapshotError:
        raise
    except ValueError as e:
        raise SnapshotError(f"Invalid photo record {path!r}: {e}") from e


def _decode_user(record: Any, library: PhotoLibrary) -> User:
    record = _require_mapping(record, "User record")
    username = _require_str(record, "username", "User record")
    try:
        user = User(username)
    except ValueError as e:
        raise SnapshotError(f"Invalid username {username!r}") from e

    for album_record in _require_list(record.get("albums"), f"Albums of {username}"):
        album_record = _require_mapping(album_record, f"Album of {username}")
        name = _require_str(album_record, "name", f"Album of {username}")
        album = user.create_album(name)
        if album is None:
            raise SnapshotError(
                f"Blank or duplicate album name {name!r} for user {username}"
            )
        for path in _require_list(album_record.get("photos"), f"Photos of {name}"):
            if not isinstance(path, str):
                raise SnapshotError(f"Album {name}: photo reference must be a path")
            photo = library.get(path) if path.strip() else None
            if photo is None:
                raise SnapshotError(f"Album {name} refers to unknown photo {path!r}")
            album.add_photo(photo)
    return user


def decode(data: Any) -> tuple[list[User], PhotoLibrary]:
    """Rebuild users and their shared photo library from snapshot data.

    Raises SnapshotError if the data is not a valid snapshot.
    """
    data = _require_mapping(data, "Snapshot")
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version!r}")

    library = PhotoLibrary()
    for record in _require_list(data.get("photos"), "Snapshot photos"):
        photo = _decode_photo(record)
        if library.add(photo) is not photo:
            logger.debug(f"Duplicate photo record for {photo.path} ignored")

    users: list[User] = []
    seen: set[str] = set()
    for record in _require_list(data.get("users"), "Snapshot users"):
        user = _decode_user(record, library)
        key = user.username.casefold()
        if key in seen:
            raise SnapshotError(f"Duplicate username {user.username!r}")
        seen.add(key)
        users.append(user)
    return users, library


# --- File I/O ---

def read_snapshot(path: str | Path) -> Any:
    """Parse a snapshot file. Raises OSError or yaml.YAMLError."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_snapshot(path: str | Path, data: dict[str, Any]) -> None:
    """Write snapshot data atomically.

    The document goes to a temporary file next to ``path`` which then
    replaces ``path``. On failure the previous file is left untouched.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                data, f,
                default_flow_style=False, sort_keys=False, allow_unicode=True,
            )
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except Exception:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
