import os
import platform
from pathlib import Path

from appdirs import AppDirs

import solcbind

# Environment variables
SOLCBIND_ENVVAR_RELEASES_URL = "SOLCBIND_RELEASES_URL"
SOLCBIND_ENVVAR_BINARIES_URL = "SOLCBIND_BINARIES_URL"
SOLCBIND_ENVVAR_CACHE_DIR = "SOLCBIND_CACHE_DIR"
SOLCBIND_ENVVAR_USER_LOG_DIR = "SOLCBIND_USER_LOG_DIR"

# Base Filepaths
# User Application Filepaths
APP_DIR = AppDirs(solcbind.__title__, solcbind.__author__)
DEFAULT_CACHE_ROOT = Path(os.getenv(SOLCBIND_ENVVAR_CACHE_DIR, default=APP_DIR.user_cache_dir))
DEFAULT_COMPILER_DIR = DEFAULT_CACHE_ROOT / "compilers"
USER_LOG_DIR = Path(os.getenv(SOLCBIND_ENVVAR_USER_LOG_DIR, default=APP_DIR.user_log_dir))
DEFAULT_LOG_FILENAME = "solcbind.log"
DEFAULT_JSON_LOG_FILENAME = "solcbind.json"


def _host_platform() -> str:
    """Release channel name for the host, as published on binaries.soliditylang.org"""
    system = platform.system()
    if system == "Darwin":
        return "macosx-amd64"
    if system == "Windows":
        return "windows-amd64"
    return "linux-amd64"


# Solidity Releases
SOLC_PLATFORM = _host_platform()
SOLC_BINARIES_URL = os.getenv(
    SOLCBIND_ENVVAR_BINARIES_URL,
    default=f"https://binaries.soliditylang.org/{SOLC_PLATFORM}"
)
SOLC_RELEASES_URL = os.getenv(SOLCBIND_ENVVAR_RELEASES_URL, default=f"{SOLC_BINARIES_URL}/list.json")
LATEST_RELEASE = "latest"

# Network
HTTP_TIMEOUT = 30  # seconds


def default_compiler_path(version: str) -> Path:
    return DEFAULT_COMPILER_DIR / f"solc-{version}"
