"""Photo Albums - users, albums, photos and tags with snapshot persistence."""

__version__ = "0.1.0"

from photo_albums.model.album import Album
from photo_albums.model.photo import Photo
from photo_albums.model.tag import Tag
from photo_albums.model.user import User
from photo_albums.model.user_manager import UserManager

__all__ = [
    "Album",
    "Photo",
    "Tag",
    "User",
    "UserManager",
]
