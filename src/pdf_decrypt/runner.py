import subprocess
import time
from pathlib import Path
from typing import Optional


class FileTask:
    """One input file and where its decrypted copy goes."""

    def __init__(self, input_path: Path, output_dir: Path):
        self.input_path = input_path
        self.output_path = output_path_for(input_path, output_dir)

    def __repr__(self):
        return f"FileTask(input_path={self.input_path}, output_path={self.output_path})"


class RunRecord:
    """Outcome of decrypting one file."""

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        success: bool,
        error_detail: Optional[str] = None,
        duration: float = 0.0,
    ):
        self.input_path = input_path
        self.output_path = output_path
        self.success = success
        self.error_detail = error_detail
        self.duration = duration  # seconds

    def __repr__(self):
        return (
            f"RunRecord(input_path={self.input_path}, output_path={self.output_path}, "
            f"success={self.success}, error_detail={self.error_detail}, "
            f"duration={self.duration:.3f})"
        )


def output_path_for(input_path: Path, output_dir: Path) -> Path:
    """Return output_dir/<basename of input_path>."""
    return Path(output_dir) / Path(input_path).name


def build_command(binary_path: Path, password: str, input_path: Path, output_path: Path) -> list:
    """Build the qpdf argument list for decrypting input_path into output_path."""
    return [
        str(binary_path),
        f"--password={password}",
        "--decrypt",
        str(input_path),
        str(output_path),
    ]


def decrypt_file(binary_path: Path, password: str, input_file: Path, output_dir: Path) -> RunRecord:
    """
    Decrypt one PDF by running the qpdf executable.

    Failures never raise: they are returned as a failed RunRecord so the batch
    can continue with the next file.

    Args:
        binary_path: Path to the qpdf executable
        password: PDF password
        input_file: Encrypted PDF to read
        output_dir: Directory receiving the decrypted copy

    Returns:
        RunRecord with the outcome and wall-clock duration
    """
    task = FileTask(Path(input_file), Path(output_dir))
    cmd = build_command(binary_path, password, task.input_path, task.output_path)

    start = time.perf_counter()
    try:
        # No timeout: a hung qpdf blocks the run
        subprocess.run(cmd, capture_output=True, text=True, errors="replace", check=True)
    except subprocess.CalledProcessError as e:
        # str(e) would include the command line and therefore the password
        detail = f"exit status {e.returncode}"
        stderr = (e.stderr or "").strip()
        if stderr:
            # last line carries the reason
            detail = f"{detail}: {stderr.splitlines()[-1]}"
        return RunRecord(
            task.input_path,
            task.output_path,
            success=False,
            error_detail=detail,
            duration=time.perf_counter() - start,
        )
    except OSError as e:
        return RunRecord(
            task.input_path,
            task.output_path,
            success=False,
            error_detail=f"Failed to launch {binary_path}: {e.strerror or e}",
            duration=time.perf_counter() - start,
        )

    return RunRecord(
        task.input_path,
        task.output_path,
        success=True,
        duration=time.perf_counter() - start,
    )
