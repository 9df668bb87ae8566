"""Album model: a named, ordered collection of shared photo references."""

from __future__ import annotations

from datetime import datetime

from photo_albums.model.photo import Photo

DATE_FORMAT = "%Y-%m-%d"


def validate_name(name: str | None, what: str = "Name") -> str:
    """Trim a required name, raising ValueError if it is missing or blank."""
    if name is None or not name.strip():
        raise ValueError(f"{what} cannot be empty")
    return name.strip()


class Album:
    """A named, ordered list of photos without duplicates.

    Albums do not own their photos. Removing a photo or dropping the album
    never touches the file on disk, and the same Photo object may sit in
    many albums at once.
    """

    def __init__(self, name: str):
        self._name = validate_name(name, "Album name")
        self._photos: list[Photo] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def photos(self) -> tuple[Photo, ...]:
        return tuple(self._photos)

    @property
    def num_photos(self) -> int:
        return len(self._photos)

    def rename(self, new_name: str) -> None:
        """Rename the album. Uniqueness among a user's albums is checked by User."""
        self._name = validate_name(new_name, "Album name")

    def add_photo(self, photo: Photo | None) -> bool:
        if photo is None or photo in self._photos:
            return False
        self._photos.append(photo)
        return True

    def remove_photo(self, photo: Photo | None) -> bool:
        if photo is None or photo not in self._photos:
            return False
        self._photos.remove(photo)
        return True

    def contains_photo(self, photo: Photo | None) -> bool:
        return photo is not None and photo in self._photos

    def _dates(self) -> list[datetime]:
        return [p.captured_at for p in self._photos if p.captured_at is not None]

    def earliest_date(self) -> datetime | None:
        dates = self._dates()
        return min(dates) if dates else None

    def latest_date(self) -> datetime | None:
        dates = self._dates()
        return max(dates) if dates else None

    def formatted_date_range(self) -> str:
        """Return ``"earliest - latest"`` as dates, or "" if no photo is dated."""
        earliest = self.earliest_date()
        latest = self.latest_date()
        if earliest is None or latest is None:
            return ""
        return f"{earliest.strftime(DATE_FORMAT)} - {latest.strftime(DATE_FORMAT)}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Album):
            return NotImplemented
        return self._name.casefold() == other._name.casefold()

    def __hash__(self) -> int:
        return hash(self._name.casefold())

    def __repr__(self) -> str:
        return (
            f"<Album(name='{self._name}', num_photos={self.num_photos}, "
            f"date_range='{self.formatted_date_range()}')>"
        )
