import platform
import tempfile
from importlib import resources
from pathlib import Path
from typing import Callable, Optional

from .errors import ProvisionError, UnsupportedPlatformError

BINARIES_DIR = "binaries"

# (os, arch) -> (packaged resource name, file name written to the temp dir)
PLATFORMS = {
    ("darwin", "arm64"): ("qpdf-darwin-arm64", "qpdf"),
    ("linux", "amd64"): ("qpdf-linux-amd64", "qpdf"),
    ("windows", "amd64"): ("qpdf-windows-amd64.exe", "qpdf.exe"),
}

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


class ProvisionedBinary:
    """An extracted qpdf executable ready to be run."""

    def __init__(self, path: Path, platform: tuple[str, str]):
        self.path = path
        self.platform = platform

    def __repr__(self):
        return f"ProvisionedBinary(path={self.path}, platform={self.platform[0]}/{self.platform[1]})"


def current_platform() -> tuple[str, str]:
    """Return the normalized (os, arch) pair of the running interpreter."""
    return normalize_platform(platform.system(), platform.machine())


def normalize_platform(system: str, machine: str) -> tuple[str, str]:
    """
    Normalize platform names to the keys used in PLATFORMS.

    Example: ("Linux", "x86_64") -> ("linux", "amd64")
    """
    machine = machine.lower()
    return system.lower(), _ARCH_ALIASES.get(machine, machine)


def read_payload(resource_name: str) -> bytes:
    """
    Read a bundled executable from the package's binaries directory.

    Raises:
        ProvisionError: if the payload is not shipped with this installation
    """
    resource = resources.files(__package__) / BINARIES_DIR / resource_name
    try:
        return resource.read_bytes()
    except OSError as e:
        raise ProvisionError(f"Bundled binary {resource_name} is missing: {e}") from e


def provision(
    system: Optional[str] = None,
    machine: Optional[str] = None,
    tmp_dir: Optional[Path] = None,
    loader: Callable[[str], bytes] = read_payload,
) -> ProvisionedBinary:
    """
    Extract the qpdf executable matching the platform into the temp directory.

    The target file has a fixed name and is overwritten if it already exists.

    Args:
        system: OS name (defaults to the running OS)
        machine: Processor architecture (defaults to the running architecture)
        tmp_dir: Directory to extract into (defaults to the system temp dir)
        loader: Callable returning the payload bytes for a resource name

    Returns:
        ProvisionedBinary pointing at the executable

    Raises:
        UnsupportedPlatformError: if no payload exists for the platform
        ProvisionError: if the payload cannot be read or written
    """
    if system is None or machine is None:
        detected = current_platform()
        key = normalize_platform(system or detected[0], machine or detected[1])
    else:
        key = normalize_platform(system, machine)

    if key not in PLATFORMS:
        raise UnsupportedPlatformError(f"Unsupported platform: {key[0]}/{key[1]}")

    resource_name, file_name = PLATFORMS[key]
    data = loader(resource_name)

    target = Path(tmp_dir or tempfile.gettempdir()) / file_name
    try:
        target.write_bytes(data)
        target.chmod(0o755)
    except OSError as e:
        raise ProvisionError(f"Cannot write qpdf binary to {target}: {e}") from e

    return ProvisionedBinary(path=target, platform=key)
