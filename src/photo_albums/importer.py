"""Directory import: add every image file in a folder to an album."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from PIL import Image

from photo_albums.config.config import ConfigManager
from photo_albums.model.album import Album
from photo_albums.model.library import PhotoLibrary

logger = logging.getLogger(__name__)

# Callback signature: (current_count, total_count, filepath)
ProgressCallback = Callable[[int, int, str], None]


@dataclass
class ImportResult:
    """Result of a directory import."""

    total_found: int = 0
    added: int = 0
    skipped: int = 0
    errors: int = 0
    error_files: list[str] = field(default_factory=list)


class PhotoImporter:
    """Scan a directory for images and add them to an album."""

    def __init__(self, library: PhotoLibrary, config: ConfigManager | None = None):
        self._library = library
        self._config = config
        self._supported_formats = self._get_supported_formats()
        self._ignore_hidden = True
        if config:
            self._ignore_hidden = config.get(
                "file_scanning.ignore_hidden_files", True
            )

    def import_directory(
        self,
        album: Album,
        directory: str | Path,
        progress_callback: ProgressCallback | None = None,
    ) -> ImportResult:
        """Add the images found directly inside ``directory`` to ``album``.

        Photos go through the shared library, so a file already known
        elsewhere is reused rather than duplicated. Files already in the
        album are counted as skipped; unreadable or undecodable files are
        logged and counted as errors.
        """
        directory = Path(os.path.abspath(directory))
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        image_files = self._find_image_files(directory)
        result = ImportResult(total_found=len(image_files))

        for i, filepath in enumerate(image_files):
            if progress_callback:
                progress_callback(i + 1, len(image_files), str(filepath))
            try:
                self._verify_image(filepath)
                photo = self._library.open(filepath)
            except Exception as e:
                logger.error(f"Error importing {filepath}: {e}")
                result.errors += 1
                result.error_files.append(str(filepath))
                continue

            if album.add_photo(photo):
                result.added += 1
            else:
                result.skipped += 1

        logger.info(
            f"Imported {result.added} of {result.total_found} photos from "
            f"{directory} into '{album.name}'"
        )
        return result

    def _find_image_files(self, directory: Path) -> list[Path]:
        """Find the image files directly inside a directory."""
        image_files: list[Path] = []
        for filename in sorted(os.listdir(directory)):
            if self._ignore_hidden and filename.startswith("."):
                continue
            ext = Path(filename).suffix.lower().lstrip(".")
            if ext not in self._supported_formats:
                continue
            filepath = directory / filename
            if filepath.is_file():
                image_files.append(filepath)
        return image_files

    @staticmethod
    def _verify_image(filepath: Path) -> None:
        with Image.open(filepath) as img:
            img.verify()

    def _get_supported_formats(self) -> set[str]:
        if self._config:
            formats = self._config.get("file_scanning.supported_formats", [])
            if formats:
                return set(f.lower() for f in formats)
        return {"bmp", "gif", "jpg", "jpeg", "png"}
