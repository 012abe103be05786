"""
PasteCleaner Core: File Operations.

Reading inputs, listing batch candidates, and the atomic commit protocol:
the new content is written to a uniquely named temporary file first; only
once it is fully written and flushed is the previous output deleted and the
temporary file moved into place.
"""
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, TextIO, Union

from pastecleaner.core.constants import DOCUMENT_SUFFIX, ErrorCode
from pastecleaner.core.errors import CommitError, InputError
from pastecleaner.core.logging import get_logger

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file.

    Raises:
        InputError: If the file is missing or unreadable
    """
    path = Path(path)
    if not path.is_file():
        raise InputError(f"Input file can not be found: '{path}'", ErrorCode.NOT_FOUND)
    try:
        # utf-8-sig tolerates a BOM written by some editors
        return path.read_text(encoding="utf-8-sig")
    except PermissionError as e:
        raise InputError(f"Permission denied: '{path}'", ErrorCode.PERMISSION_DENIED) from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read '{path}': {e}") from e


def list_json_files(directory: PathLike) -> List[Path]:
    """List *.json files directly inside a directory, sorted by path."""
    directory = Path(directory)
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(DOCUMENT_SUFFIX)
    )


def write_atomic(
    path: PathLike,
    writer: Callable[[TextIO], None],
    temp_dir: Optional[PathLike] = None,
) -> Path:
    """Write a file through a temporary file, then move it into place.

    Args:
        path: Final output path
        writer: Callable serializing the content into the given text stream
        temp_dir: Directory for the temporary file (default: platform temp)

    Returns:
        The final output path

    Raises:
        CommitError: If the output path is a directory, or if writing,
            deleting the old output or moving fails. When writing fails
            the existing output is untouched.
    """
    logger = get_logger()
    path = Path(path)
    if path.is_dir():
        raise CommitError(f"Output path is an existing directory: '{path}'", ErrorCode.CONFLICT)

    try:
        fd, temp_name = tempfile.mkstemp(
            prefix="pastecleaner-", suffix=".tmp", dir=str(temp_dir) if temp_dir else None
        )
    except OSError as e:
        raise CommitError(f"Failed to create temporary file: {e}") from e

    logger.info(f"Start writing to temporary file '{temp_name}'")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            writer(f)
            f.flush()
            os.fsync(f.fileno())
    except Exception as e:
        _discard(temp_name)
        raise CommitError(f"Failed to write temporary file '{temp_name}': {e}") from e

    if path.is_file():
        logger.info(f"Start deleting old output file '{path}'")
        try:
            path.unlink()
        except PermissionError as e:
            raise CommitError(
                f"Permission denied deleting '{path}': {e}",
                ErrorCode.PERMISSION_DENIED,
                temp_path=temp_name,
            ) from e
        except OSError as e:
            raise CommitError(
                f"Failed to delete old output file '{path}': {e}", temp_path=temp_name
            ) from e

    logger.info(f"Start moving temporary file to '{path}'")
    try:
        shutil.move(temp_name, str(path))
    except (OSError, shutil.Error) as e:
        raise CommitError(
            f"Failed to move temporary file to '{path}': {e}", temp_path=temp_name
        ) from e

    return path


def _discard(temp_name: str) -> None:
    try:
        os.unlink(temp_name)
    except FileNotFoundError:
        pass
    except OSError as e:
        get_logger().warning(f"Could not remove temporary file '{temp_name}': {e}")
