"""
Persistence for glyph datasets.

Handles writing the ledger file and the glyph images. This is the only
part of the annotation core that touches the filesystem.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List

import cv2
import numpy as np

from .errors import ParseError, PersistenceError
from .ledger import EntryLedger
from .utils import rgba_to_bgra, validate_snapshot

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """
    Synchronizes a ledger and its images with a dataset directory.

    Layout:
    - ``<root>/<ledger_name>``: JSON array of entries
    - ``<root>/<image_dir>/*.png``: one image per entry

    Entry paths are stored relative to the dataset root.
    """

    def __init__(
        self,
        root: Path,
        ledger_name: str = "data.json",
        image_dir: str = "images",
    ):
        """
        Initialize gateway.

        Args:
            root: Dataset directory
            ledger_name: Ledger filename inside ``root``
            image_dir: Image directory name inside ``root``
        """
        self.root = Path(root)
        self.ledger_name = ledger_name
        self.image_dir = image_dir

    @property
    def ledger_path(self) -> Path:
        return self.root / self.ledger_name

    @property
    def image_dir_path(self) -> Path:
        return self.root / self.image_dir

    def image_relpath(self, filename: str) -> str:
        """Relative entry path for an image filename."""
        return f"{self.image_dir}/{filename}"

    def resolve(self, path: str) -> Path:
        return self.root / path

    def image_exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def list_images(self) -> List[str]:
        """Relative paths of every PNG in the image directory."""
        if not self.image_dir_path.is_dir():
            return []
        return sorted(
            self.image_relpath(p.name)
            for p in self.image_dir_path.glob("*.png")
            if p.is_file()
        )

    def ensure_storage_ready(self):
        """Create the image directory if it is missing."""
        try:
            self.image_dir_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(
                f"Cannot create image directory {self.image_dir_path}: {e}"
            ) from e

    def read_ledger(self) -> EntryLedger:
        """
        Load the ledger from disk.

        Returns:
            Stored ledger, or an empty one if the file does not exist

        Raises:
            ParseError: If the file is malformed
            PersistenceError: If the file cannot be read
        """
        if not self.ledger_path.exists():
            logger.debug(f"No ledger at {self.ledger_path}, starting empty")
            return EntryLedger()

        try:
            text = self.ledger_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Ledger is not UTF-8 text: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Cannot read {self.ledger_path}: {e}") from e

        ledger = EntryLedger.load(text)
        logger.info(f"Loaded {len(ledger)} entries from {self.ledger_path}")
        return ledger

    def write_ledger(self, ledger: EntryLedger):
        """
        Replace the ledger file with the serialized ``ledger``.

        The text goes to a temporary sibling first, so readers see either
        the old or the new file, never a partial one.
        """
        self._write_atomic(self.ledger_path, (ledger.dump() + "\n").encode("utf-8"))
        logger.debug(f"Wrote {len(ledger)} entries to {self.ledger_path}")

    def write_image(self, path: str, snapshot: np.ndarray):
        """
        Encode ``snapshot`` as PNG and store it at ``path``.

        Args:
            path: Entry path relative to the dataset root
            snapshot: (H, W, 4) RGBA pixels
        """
        validate_snapshot(snapshot)
        try:
            ok, encoded = cv2.imencode(".png", rgba_to_bgra(snapshot))
        except cv2.error as e:
            raise PersistenceError(f"Cannot encode image {path}: {e}") from e
        if not ok:
            raise PersistenceError(f"Cannot encode image {path}")

        target = self.resolve(path)
        self._write_atomic(target, encoded.tobytes())
        logger.info(f"Saved image to {target}")

    def delete_image(self, path: str) -> bool:
        """
        Remove an image, ignoring a file that is already gone.

        Returns:
            True if a file was removed
        """
        target = self.resolve(path)
        try:
            target.unlink()
        except FileNotFoundError:
            logger.debug(f"Image {target} already absent")
            return False
        except OSError as e:
            logger.warning(f"Could not delete image {target}: {e}")
            return False
        logger.info(f"Deleted image {target}")
        return True

    def preserve_unparsable_ledger(self) -> Path:
        """
        Copy the current ledger file aside before it gets overwritten.

        Returns:
            Path of the copy (``data.json.unparsable``, numbered if taken)
        """
        backup = self.ledger_path.with_name(f"{self.ledger_name}.unparsable")
        counter = 1
        while backup.exists():
            backup = self.ledger_path.with_name(
                f"{self.ledger_name}.unparsable.{counter}"
            )
            counter += 1
        try:
            shutil.copy2(self.ledger_path, backup)
        except OSError as e:
            raise PersistenceError(
                f"Cannot preserve {self.ledger_path} as {backup}: {e}"
            ) from e
        logger.warning(f"Kept unparsable ledger as {backup}")
        return backup

    def _write_atomic(self, target: Path, data: bytes):
        # Keep the suffix so tools that sniff by extension are not confused.
        tmp_path = target.with_name(f".{target.stem}.tmp{target.suffix}")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, target)
        except OSError as e:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove {tmp_path}: {cleanup_error}")
            raise PersistenceError(f"Cannot write {target}: {e}") from e
