"""User model: a login name and the albums that belong to it."""

from __future__ import annotations

from photo_albums.model.album import Album, validate_name
from photo_albums.model.photo import Photo


class User:
    """A user of the application and their albums.

    Album names are unique per user, ignoring case. Validation failures and
    name clashes come back as None/False so callers can branch on them.
    """

    def __init__(self, username: str):
        self._username = validate_name(username, "Username")
        self._albums: list[Album] = []

    @property
    def username(self) -> str:
        return self._username

    @property
    def albums(self) -> tuple[Album, ...]:
        return tuple(self._albums)

    def get_album(self, name: str | None) -> Album | None:
        """Find an album by name, ignoring case and surrounding whitespace."""
        if name is None:
            return None
        target = name.strip().casefold()
        for album in self._albums:
            if album.name.casefold() == target:
                return album
        return None

    def create_album(self, name: str | None) -> Album | None:
        """Create and append a new album. Returns None on a blank or taken name."""
        if name is None or not name.strip():
            return None
        if self.get_album(name) is not None:
            return None
        album = Album(name)
        self._albums.append(album)
        return album

    def delete_album(self, name: str | None) -> bool:
        album = self.get_album(name)
        if album is None:
            return False
        self._albums.remove(album)
        return True

    def rename_album(self, old_name: str | None, new_name: str | None) -> bool:
        """Rename an album in place.

        Fails if the new name is blank, the old name is unknown, or another
        album already uses the new name. Changing only the case of an album's
        own name is allowed.
        """
        if new_name is None or not new_name.strip():
            return False
        album = self.get_album(old_name)
        if album is None:
            return False
        conflict = self.get_album(new_name)
        if conflict is not None and conflict is not album:
            return False
        album.rename(new_name)
        return True

    def albums_containing(self, photo: Photo | None) -> list[Album]:
        """Albums of this user that reference the given photo."""
        if photo is None:
            return []
        return [a for a in self._albums if a.contains_photo(photo)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._username.casefold() == other._username.casefold()

    def __hash__(self) -> int:
        return hash(self._username.casefold())

    def __repr__(self) -> str:
        return f"<User(username='{self._username}', num_albums={len(self._albums)})>"
