from pathlib import Path
from typing import List, Optional

from .errors import DiscoveryError

PDF_PATTERN = "*.pdf"


def find_pdfs(source_dir: Path, pattern: str = PDF_PATTERN) -> List[Path]:
    """
    Find files directly inside source_dir whose name matches a shell-style pattern.

    Subdirectories are not searched. Results are sorted so runs are repeatable.
    A source_dir that does not exist matches nothing.

    Args:
        source_dir: Directory to search
        pattern: Glob pattern for file names (default: "*.pdf")

    Returns:
        Sorted list of matching paths

    Raises:
        DiscoveryError: if the pattern is malformed
    """
    try:
        return sorted(source_dir.glob(pattern))
    except (ValueError, NotImplementedError) as e:
        raise DiscoveryError(f"Invalid file pattern {pattern!r}: {e}") from e


def discover(
    explicit_file: Optional[Path], source_dir: Path, pattern: str = PDF_PATTERN
) -> List[Path]:
    """
    List the files to process.

    An explicit file is used as-is without checking that it exists; a missing
    file shows up later as a failed record.
    """
    if explicit_file is not None:
        return [explicit_file]
    return find_pdfs(source_dir, pattern)
