"""File management for pages rendered by the preview UI.

Each browser session gets its own temporary directory. Pages are written
under fixed names (``page_1.png``, ``page_2.png``, ...) so that re-rendering
overwrites them instead of piling up new files.
"""

import logging
import os
import tempfile
from pathlib import Path

import cv2
import numpy as np

from score_paginator.exceptions import ImageWriteError

logger = logging.getLogger(__name__)


class SessionFileManager:
    """Manages the temporary page files of one preview session.

    Attributes:
        session_dir: Path to the session's temporary directory.
        current_files: Currently written files keyed by file type.
    """

    def __init__(self, session_id: str | None = None):
        """Initialize the file manager with an optional session ID.

        Args:
            session_id: Optional unique session identifier. If None, a fresh
                unique directory is created.
        """
        # Use Gradio's temp directory if available, otherwise system temp
        base_dir = os.environ.get("GRADIO_TEMP_DIR", tempfile.gettempdir())

        if session_id:
            self.session_dir = Path(base_dir) / f"score-paginator-{session_id}"
        else:
            self.session_dir = Path(
                tempfile.mkdtemp(prefix="score-paginator-", dir=base_dir)
            )

        self.session_dir.mkdir(parents=True, exist_ok=True)
        self.current_files: dict[str, Path] = {}

    def get_temp_path(self, file_type: str, extension: str = "") -> str:
        """Return the fixed path for a file type and start tracking it.

        Args:
            file_type: Type of file (e.g. "page_1").
            extension: File extension including dot (e.g. ".png").

        Returns:
            Absolute path to the file as a string.
        """
        file_path = self.session_dir / f"{file_type}{extension}"
        self.current_files[file_type] = file_path
        return str(file_path)

    def write_file(self, file_type: str, content: bytes, extension: str = "") -> str:
        """Write content to a tracked file, replacing it atomically.

        Args:
            file_type: Type of file.
            content: Binary content to write.
            extension: File extension including dot.

        Returns:
            Path to the written file as a string.
        """
        file_path = self.get_temp_path(file_type, extension)

        temp_path = file_path + ".tmp"
        with open(temp_path, "wb") as f:
            f.write(content)
        os.replace(temp_path, file_path)

        return file_path

    def write_pages(self, page_images: list[np.ndarray]) -> list[str]:
        """Encode pages as PNG and write them as ``page_<N>.png``.

        Page files left over from an earlier render with more pages are
        removed.

        Args:
            page_images: BGRA pages in page order.

        Returns:
            Paths of the written pages, in page order.

        Raises:
            ImageWriteError: If a page cannot be encoded.
        """
        self.cleanup_pages()
        paths = []
        for number, image in enumerate(page_images, start=1):
            encoded, buffer = cv2.imencode(".png", image)
            if not encoded:
                raise ImageWriteError(f"Cannot encode page {number}")
            paths.append(self.write_file(f"page_{number}", buffer.tobytes(), ".png"))
        return paths

    def cleanup_file(self, file_type: str) -> None:
        """Remove a tracked file if it exists.

        Args:
            file_type: Type of file to remove.
        """
        file_path = self.current_files.pop(file_type, None)
        if file_path is not None and file_path.exists():
            try:
                file_path.unlink()
            except OSError as e:
                logger.debug(f"Could not remove {file_path}: {e}")

    def cleanup_pages(self) -> None:
        """Remove every tracked page file."""
        for file_type in [t for t in self.current_files if t.startswith("page_")]:
            self.cleanup_file(file_type)

    def cleanup_all(self) -> None:
        """Remove all tracked files and the session directory.

        Safe to call multiple times.
        """
        for file_type in list(self.current_files):
            self.cleanup_file(file_type)

        if self.session_dir.exists():
            try:
                self.session_dir.rmdir()
            except OSError as e:
                logger.debug(f"Could not remove {self.session_dir}: {e}")

    def __del__(self):
        """Cleanup when the file manager is garbage collected."""
        self.cleanup_all()
