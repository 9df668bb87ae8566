"""Application session: load, save, login and stock photos.

This is the glue a front end calls into. It owns the UserManager for the
lifetime of the app, loads it from the configured data file, and writes it
back after changes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from photo_albums.config.config import ConfigManager
from photo_albums.importer import ImportResult, PhotoImporter, ProgressCallback
from photo_albums.model.user import User
from photo_albums.model.user_manager import UserManager

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"
STOCK_USERNAME = "stock"


class PhotoSession:
    """Holds the loaded UserManager and persists it to the data file."""

    def __init__(self, config: ConfigManager | None = None):
        self._config = config or ConfigManager()
        self._manager: UserManager | None = None

    @property
    def config(self) -> ConfigManager:
        return self._config

    @property
    def data_path(self) -> Path:
        return Path(self._config.get("storage.data_file", "data/users.dat"))

    @property
    def manager(self) -> UserManager:
        if self._manager is None:
            raise RuntimeError("Session not loaded; call load() first")
        return self._manager

    @property
    def is_loaded(self) -> bool:
        return self._manager is not None

    def load(self) -> UserManager:
        """Load saved data (or start empty) and make sure built-in users exist."""
        self._manager = UserManager.load_from_file(self.data_path)
        self._manager.ensure_built_in_users()
        return self._manager

    def save(self) -> bool:
        """Write all data to disk. Returns False and logs if the write fails."""
        if self._manager is None:
            return False
        try:
            self._manager.save_to_file(self.data_path)
        except OSError as e:
            logger.error(f"Failed to save data to {self.data_path}: {e}")
            return False
        return True

    def autosave(self) -> bool:
        """Save if ``storage.autosave`` is enabled."""
        if not self._config.get("storage.autosave", True):
            return False
        return self.save()

    # --- Users ---

    def login(self, username: str | None) -> User | None:
        """Return the user for a login name, or None if there is none."""
        if username is None or not username.strip():
            return None
        user = self.manager.get_user(username)
        if user is None:
            logger.info(f"Login failed for unknown user '{username.strip()}'")
        return user

    @staticmethod
    def is_admin(user: User | str | None) -> bool:
        if user is None:
            return False
        name = user.username if isinstance(user, User) else user
        return name.strip().casefold() == ADMIN_USERNAME

    def delete_user(self, username: str | None) -> bool:
        """Delete a user. The admin account can never be deleted."""
        if self.is_admin(username):
            return False
        return self.manager.delete_user(username)

    # --- Stock photos ---

    def import_stock_photos(
        self,
        directory: str | Path | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> ImportResult:
        """Add the images in a directory to the stock user's stock album.

        ``directory`` defaults to ``stock.photo_dir`` from the config. The
        stock user and album are created if needed.
        """
        directory = directory or self._config.get("stock.photo_dir")
        if not directory:
            raise ValueError("No stock photo directory configured")

        manager = self.manager
        manager.ensure_built_in_users()
        stock_user = manager.get_user(STOCK_USERNAME)
        album_name = self._config.get("stock.album_name", STOCK_USERNAME)
        album = stock_user.get_album(album_name) or stock_user.create_album(album_name)

        importer = PhotoImporter(manager.photos, self._config)
        return importer.import_directory(album, directory, progress_callback)
