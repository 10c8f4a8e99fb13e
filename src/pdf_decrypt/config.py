import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .logging_utils import mask

ENV_FILE = ".env"
PASSWORD_ENV = "PDF_PASSWORD"
SRC_DIR_ENV = "PDF_SRC_DIR"
OUT_DIR_ENV = "PDF_OUT_DIR"

DEFAULT_SRC_DIR = "."
DEFAULT_OUT_DIR = "dercipts"


class EffectiveConfig:
    """Settings for one run, merged from flags, the .env file and the environment."""

    def __init__(
        self,
        password: str,
        source_dir: Path,
        output_dir: Path,
        explicit_file: Optional[Path] = None,
        dry_run: bool = False,
    ):
        self.password = password
        self.source_dir = source_dir
        self.output_dir = output_dir
        self.explicit_file = explicit_file
        self.dry_run = dry_run

    def __repr__(self):
        return (
            f"EffectiveConfig(password={mask(self.password)}, source_dir={self.source_dir}, "
            f"output_dir={self.output_dir}, explicit_file={self.explicit_file}, "
            f"dry_run={self.dry_run})"
        )


def load_env_file(path: Path = Path(ENV_FILE), logger: Optional[logging.Logger] = None) -> bool:
    """
    Load KEY=VALUE pairs from a local env file into the process environment.

    Variables that are already set keep their value. A missing file is not an error.

    Args:
        path: Env file to read (default: ".env" in the working directory)
        logger: Logger for the informational notice about a missing file

    Returns:
        True if the file was found and loaded, False otherwise
    """
    if not path.is_file():
        if logger:
            logger.info(f"No {path} file found, using flags, environment and defaults")
        return False

    load_dotenv(path, override=False)
    if logger:
        logger.debug(f"Loaded environment from {path}")
    return True


def resolve_password(flag: Optional[str], env: Mapping[str, str]) -> str:
    """
    Pick the decryption password: a non-empty flag wins over PDF_PASSWORD.

    Raises:
        ConfigError: if neither source provides a password
    """
    if flag:
        return flag

    env_password = env.get(PASSWORD_ENV)
    if env_password:
        return env_password

    raise ConfigError(f"Password not provided (use --password or set {PASSWORD_ENV})")


def ensure_output_dir(output_dir: Path) -> Path:
    """Create the output directory and its parents if needed."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Cannot create output directory {output_dir}: {e}") from e
    return output_dir


def resolve_config(
    password: Optional[str] = None,
    explicit_file: Optional[Path] = None,
    dry_run: bool = False,
    env: Optional[Mapping[str, str]] = None,
) -> EffectiveConfig:
    """
    Merge command-line flags and environment variables into an EffectiveConfig.

    Directories only come from the environment. The output directory is created
    unless this is a dry run.

    Args:
        password: Value of --password, if given
        explicit_file: Value of --file, if given
        dry_run: Value of --dry-run
        env: Environment mapping (defaults to os.environ)

    Returns:
        The effective configuration

    Raises:
        ConfigError: if the password is missing or the output directory cannot be created
    """
    if env is None:
        env = os.environ

    resolved_password = resolve_password(password, env)
    source_dir = Path(env.get(SRC_DIR_ENV) or DEFAULT_SRC_DIR)
    output_dir = Path(env.get(OUT_DIR_ENV) or DEFAULT_OUT_DIR)

    if not dry_run:
        ensure_output_dir(output_dir)

    return EffectiveConfig(
        password=resolved_password,
        source_dir=source_dir,
        output_dir=output_dir,
        explicit_file=explicit_file,
        dry_run=dry_run,
    )
