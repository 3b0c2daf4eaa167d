"""
This file is part of solcbind.

solcbind is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

solcbind is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with solcbind.  If not, see <https://www.gnu.org/licenses/>.
"""

import hashlib
import stat
from http import HTTPStatus
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Tuple, Union

import requests
from marshmallow import ValidationError, fields, post_load
from requests.exceptions import HTTPError, RequestException

from solcbind.compile.decode import BaseSchema
from solcbind.compile.types import VersionString
from solcbind.config.constants import (
    HTTP_TIMEOUT,
    LATEST_RELEASE,
    SOLC_BINARIES_URL,
    SOLC_RELEASES_URL,
)
from solcbind.exceptions import DownloadError, VersionNotFound
from solcbind.utilities.logging import Logger

RELEASES_LOGGER = Logger("solc-releases")

RequestErrors = (
    # https://requests.readthedocs.io/en/latest/user/quickstart/#errors-and-exceptions
    ConnectionError,
    TimeoutError,
    RequestException,
    HTTPError,
)


class ReleaseIndex(NamedTuple):
    releases: Dict[str, str]    # version -> artifact filename
    latest_release: str
    builds: Tuple[Any, ...] = tuple()

    def checksum(self, filename: str) -> Optional[str]:
        """Published sha256 of `filename`, if the index carries build details for it."""
        for build in self.builds:
            if isinstance(build, dict) and build.get('path') == filename and build.get('sha256'):
                digest = build['sha256'].lower()
                return digest[2:] if digest.startswith('0x') else digest
        return None


class ReleaseIndexSchema(BaseSchema):
    releases = fields.Dict(keys=fields.String(), values=fields.String(), required=True)
    latest_release = fields.String(data_key='latestRelease', required=True)
    builds = fields.List(fields.Raw(), load_default=tuple)   # filenames or build objects, kept opaque

    @post_load
    def make(self, data, **kwargs):
        return ReleaseIndex(releases=data['releases'],
                            latest_release=data['latest_release'],
                            builds=tuple(data['builds']))


def _get(url: str) -> requests.Response:
    try:
        response = requests.get(url, timeout=HTTP_TIMEOUT)
        response.raise_for_status()
    except RequestErrors as request_error:
        raise DownloadError(f"Failed to fetch {url}: {request_error}") from request_error
    if response.status_code != HTTPStatus.OK:
        raise DownloadError(f"Failed to fetch {url}: HTTP {response.status_code}")
    return response


def fetch_releases(url: Optional[str] = None) -> ReleaseIndex:
    """
    Fetches the compiler release index. Network I/O; never retried here,
    any transport or decoding failure is terminal for the call.
    """
    url = url or SOLC_RELEASES_URL
    RELEASES_LOGGER.debug(f"Fetching solidity release index from {url}")
    response = _get(url)
    try:
        index = ReleaseIndexSchema().load(response.json())
    except ValueError as e:     # includes requests' JSONDecodeError
        raise DownloadError(f"Release index at {url} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise DownloadError(f"Unexpected release index shape at {url}: {e.messages}") from e
    RELEASES_LOGGER.info(f"Found {len(index.releases)} solidity releases, latest is {index.latest_release}")
    return index


def normalize_version(version: str) -> VersionString:
    version = version.strip()
    return VersionString(version[1:] if version.startswith('v') else version)


def resolve_version(index: ReleaseIndex, requested_version: Optional[str] = None) -> VersionString:
    """The concrete version to use: `requested_version`, or the latest release when absent."""
    if requested_version is None:
        return VersionString(index.latest_release)
    version = normalize_version(requested_version)
    if version == LATEST_RELEASE:
        return VersionString(index.latest_release)
    return version


def resolve(index: ReleaseIndex, requested_version: Optional[str] = None) -> str:
    """Artifact filename of `requested_version` (or the latest release)."""
    version = resolve_version(index, requested_version)
    try:
        return index.releases[version]
    except KeyError:
        raise VersionNotFound(f"Solidity compiler version {version} is not in the release index.")


def artifact_url(filename: str, base_url: Optional[str] = None) -> str:
    base_url = (base_url or SOLC_BINARIES_URL).rstrip('/')
    return f"{base_url}/{filename}"


def download_release(filename: str,
                     path: Union[str, Path],
                     base_url: Optional[str] = None,
                     index: Optional[ReleaseIndex] = None
                     ) -> Path:
    """
    Downloads a compiler artifact verbatim to `path` and marks it executable.
    When `index` publishes a sha256 for `filename` the payload is verified first.
    """
    path = Path(path)
    url = artifact_url(filename, base_url=base_url)
    RELEASES_LOGGER.info(f"Downloading solidity compiler {filename} from {url}")
    payload = _get(url).content

    expected_checksum = index.checksum(filename) if index else None
    if expected_checksum:
        checksum = hashlib.sha256(payload).hexdigest()
        if checksum != expected_checksum:
            raise DownloadError(f"Checksum mismatch for {filename}: expected {expected_checksum}, got {checksum}")

    partial = path.with_name(path.name + '.part')
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        partial.write_bytes(payload)
        partial.chmod(partial.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        partial.replace(path)
    except OSError as e:
        if partial.exists():
            partial.unlink()
        raise DownloadError(f"Failed to write solidity compiler to {path}: {e}") from e

    RELEASES_LOGGER.info(f"Saved solidity compiler {filename} ({len(payload)} bytes) to {path}")
    return path
