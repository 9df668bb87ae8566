"""UserManager: the root of the user/album/photo tree and its persistence."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from photo_albums.model.library import PhotoLibrary
from photo_albums.model.photo import Photo
from photo_albums.model.user import User
from photo_albums.storage import snapshot

logger = logging.getLogger(__name__)

BUILT_IN_USERNAMES = ("admin", "stock")


class UserManager:
    """Owns every User and the shared PhotoLibrary.

    This is the only object that reads or writes the snapshot file; the
    whole tree is loaded once and written back in full after changes.
    """

    def __init__(self, library: PhotoLibrary | None = None):
        self._users: list[User] = []
        self._photos = library if library is not None else PhotoLibrary()

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users)

    @property
    def photos(self) -> PhotoLibrary:
        return self._photos

    # --- Users ---

    def get_user(self, username: str | None) -> User | None:
        """Find a user by name, ignoring case and surrounding whitespace."""
        if username is None:
            return None
        target = username.strip().casefold()
        for user in self._users:
            if user.username.casefold() == target:
                return user
        return None

    def add_user(self, username: str | None) -> User | None:
        """Create a user. Returns None if the name is blank or already taken."""
        if username is None or not username.strip():
            return None
        if self.get_user(username) is not None:
            return None
        user = User(username)
        self._users.append(user)
        return user

    def delete_user(self, username: str | None) -> bool:
        user = self.get_user(username)
        if user is None:
            return False
        self._users.remove(user)
        return True

    def ensure_built_in_users(self) -> None:
        """Add the ``admin`` and ``stock`` users if they are missing."""
        for username in BUILT_IN_USERNAMES:
            if self.get_user(username) is None:
                self.add_user(username)
                logger.debug(f"Created built-in user '{username}'")

    # --- Photos ---

    def open_photo(self, path: str | os.PathLike) -> Photo:
        """Return the shared Photo for a file, reading it on first use.

        Raises ValueError for a blank path and OSError if the file is
        missing or unreadable.
        """
        return self._photos.open(path)

    def referenced_photos(self) -> list[Photo]:
        """Every photo referenced by some album, in first-seen order."""
        seen: dict[str, Photo] = {}
        for user in self._users:
            for album in user.albums:
                for photo in album.photos:
                    seen.setdefault(photo.path, photo)
        return list(seen.values())

    def prune_photos(self) -> int:
        """Forget library photos that no album references any more."""
        return self._photos.prune(self.referenced_photos())

    # --- Persistence ---

    @classmethod
    def load_from_file(cls, path: str | Path) -> UserManager:
        """Load a manager from a snapshot file.

        A missing file yields an empty manager. So does an unreadable or
        invalid one; the cause is logged and startup carries on.
        """
        path = Path(path)
        if not path.exists():
            logger.info(f"No saved data at {path}; starting empty")
            return cls()
        try:
            users, library = snapshot.decode(snapshot.read_snapshot(path))
        except (OSError, yaml.YAMLError, ValueError, RecursionError) as e:
            logger.warning(
                f"Could not load saved data from {path}: {e}; starting empty",
                exc_info=True,
            )
            return cls()
        manager = cls(library)
        manager._users.extend(users)
        logger.info(f"Loaded {len(users)} users and {len(library)} photos from {path}")
        return manager

    def save_to_file(self, path: str | Path) -> None:
        """Write the whole tree to ``path``, replacing any previous snapshot.

        Missing parent directories are created. Raises OSError if the file
        cannot be written; the previous snapshot is then left intact.
        """
        snapshot.write_snapshot(path, snapshot.encode(self._users))
        logger.debug(f"Saved {len(self._users)} users to {path}")

    def __repr__(self) -> str:
        return f"<UserManager(num_users={len(self._users)}, num_photos={len(self._photos)})>"
