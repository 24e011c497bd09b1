"""Low-level JSON file I/O and the durable roster cache."""
import json
import logging
import os
import sys
import tempfile
import time
from typing import Any, List, Optional

from src.models.registrant import Registrant
from src.utils.exceptions import FileWriteError

logger = logging.getLogger(__name__)


def load_json(file_path: str, retry_count: int = 3, retry_delay: float = 0.1) -> Any:
    """
    Load and parse JSON file with UTF-8 encoding.

    Args:
        file_path: Path to JSON file
        retry_count: Number of retry attempts for permission errors (default: 3)
        retry_delay: Delay in seconds between retries (default: 0.1)

    Returns:
        Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        PermissionError: If file not readable after retries
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    for attempt in range(retry_count):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except PermissionError:
            if attempt < retry_count - 1:
                time.sleep(retry_delay)
                continue
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Malformed JSON in {file_path}: {e.msg}",
                e.doc,
                e.pos
            )

    raise PermissionError(f"Cannot read file after {retry_count} attempts: {file_path}")


def save_json(file_path: str, data: Any) -> None:
    """
    Save data to JSON file atomically with UTF-8 encoding.

    The content is written to a temporary file in the same directory, flushed
    to disk and renamed over the target, so readers see either the previous
    file or the new one.

    Args:
        file_path: Path to JSON file
        data: JSON-serializable value to save

    Raises:
        FileWriteError: If write operation fails
    """
    dir_path = os.path.dirname(file_path)
    if dir_path and not os.path.exists(dir_path):
        os.makedirs(dir_path, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(
        dir=dir_path if dir_path else ".",
        prefix=".tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        # Windows requires more careful file replacement
        if sys.platform == "win32":
            retry_count = 3
            for attempt in range(retry_count):
                try:
                    os.replace(temp_path, file_path)
                    break
                except PermissionError:
                    if attempt < retry_count - 1:
                        time.sleep(0.1)
                        continue
                    raise
        else:
            os.replace(temp_path, file_path)

    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                logger.warning(f"Could not remove temporary file {temp_path}")
        raise FileWriteError(f"Failed to write file {file_path}: {e}") from e


class RosterCache:
    """Single named slot holding the serialized roster on disk."""

    def __init__(self, directory: str, slot: str = "users"):
        self.directory = directory
        self.slot = slot

    @property
    def file_path(self) -> str:
        return os.path.join(self.directory, f"{self.slot}.json")

    def read(self) -> Optional[List[Registrant]]:
        """
        Read the cached roster.

        Returns:
            Registrants in insertion order, or None when the slot is absent
            or its content cannot be rebuilt into registrants
        """
        try:
            data = load_json(self.file_path)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable roster cache {self.file_path}: {e}")
            return None

        if not isinstance(data, list):
            logger.warning(f"Ignoring roster cache {self.file_path}: expected a list")
            return None

        try:
            return [Registrant.from_dict(row) for row in data]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring roster cache {self.file_path}: invalid entry ({e})")
            return None

    def write(self, registrants: List[Registrant]) -> None:
        """
        Overwrite the slot with the full roster.

        Raises:
            FileWriteError: If the snapshot could not be written
        """
        save_json(self.file_path, [registrant.to_dict() for registrant in registrants])
