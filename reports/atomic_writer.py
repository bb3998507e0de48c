"""
Atomic file writer - ensures no partial writes or corrupted files.
Implements temp-write → fsync → rename pattern for portfolio result exports.
"""

import os
import json
import time
import logging
import tempfile
from pathlib import Path
from typing import Dict, Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)


class AtomicWriteError(Exception):
    """Raised when atomic write operations fail."""
    pass


def write_text_atomic(content: str, output_path: Path) -> Dict[str, Any]:
    """
    Write text content atomically to prevent partial files.

    Uses temp-write → fsync → rename pattern for atomicity.

    Args:
        content: Text to write
        output_path: Final path for the file

    Returns:
        Dictionary with write results ('status' is 'completed' or 'failed')
    """
    start_time = time.time()
    output_path = Path(output_path)
    temp_path = None

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory so the rename stays on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            suffix='.tmp',
            prefix=f'{output_path.stem}_',
            dir=output_path.parent
        )
        temp_path = Path(temp_path_str)

        with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, output_path)
        temp_path = None

        bytes_written = len(content.encode('utf-8'))
        logger.debug(f"Wrote {bytes_written} bytes to {output_path}")
        return {
            'status': 'completed',
            'output_path': str(output_path),
            'bytes_written': bytes_written,
            'duration_seconds': time.time() - start_time
        }

    except OSError as e:
        logger.error(f"Atomic write to {output_path} failed: {e}")
        return {
            'status': 'failed',
            'error': str(e),
            'output_path': str(output_path),
            'bytes_written': 0,
            'duration_seconds': time.time() - start_time
        }

    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()


def write_result_json(result: Dict[str, Any], output_path: Path) -> Dict[str, Any]:
    """
    Write a serialized PortfolioResult as JSON atomically.

    Args:
        result: PortfolioResult.to_dict() output
        output_path: Path for the JSON file

    Returns:
        Dictionary with write results
    """
    try:
        # Serialize first so a bad payload never touches the disk
        json_content = json.dumps(result, indent=2)
    except (TypeError, ValueError) as e:
        return {
            'status': 'failed',
            'error': f'JSON serialization failed: {e}',
            'output_path': str(output_path),
            'bytes_written': 0
        }

    return write_text_atomic(json_content, output_path)


def write_series_csv(frame: pd.DataFrame, output_path: Path) -> Dict[str, Any]:
    """
    Write a value-series DataFrame as CSV atomically.

    Args:
        frame: PortfolioResult.to_frame() output
        output_path: Path for the CSV file

    Returns:
        Dictionary with write results
    """
    if not isinstance(frame, pd.DataFrame):
        raise AtomicWriteError(f"Expected DataFrame, got {type(frame)}")

    return write_text_atomic(frame.to_csv(), output_path)


def verify_file_integrity(file_path: Path, expected_size: Optional[int] = None) -> bool:
    """
    Verify file integrity after atomic write.

    Args:
        file_path: Path to file to verify
        expected_size: Expected file size in bytes (optional)

    Returns:
        True if file appears intact, False otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return False

    try:
        if expected_size is not None and file_path.stat().st_size != expected_size:
            return False

        with open(file_path, 'r', encoding='utf-8') as f:
            f.read()

        return True

    except (OSError, UnicodeDecodeError):
        return False
