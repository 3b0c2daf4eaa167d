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

from pathlib import Path
from typing import Mapping, Optional, Union

from solcbind.compile.config import default_settings
from solcbind.compile.constants import SOLC_LOGGER, SOURCE_SUFFIX
from solcbind.compile.decode import decode
from solcbind.compile.encode import encode
from solcbind.compile.exceptions import DecodeError, EncodeError
from solcbind.compile.types import (
    CompilationInput,
    CompilationOutput,
    CompilationSettings,
    SourceText
)
from solcbind.config.constants import LATEST_RELEASE
from solcbind.exceptions import CompilationFailed, FFIError, InvalidInput
from solcbind.ffi import CompilerAdapter, load_module
from solcbind.releases import download_release, fetch_releases, normalize_version, resolve, resolve_version


def version_matches(compiler_version: str, requested_version: str) -> bool:
    """
    Whether a full compiler version ("0.8.19+commit.7dd6d404.Linux.g++")
    satisfies a requested release version ("0.8.19", "v0.8.19" or "latest").
    """
    requested_version = normalize_version(requested_version)
    if requested_version == LATEST_RELEASE:
        return True
    return compiler_version.split('+', 1)[0] == requested_version


def load(path: Union[str, Path],
         version: Optional[str] = None,
         releases_url: Optional[str] = None,
         base_url: Optional[str] = None
         ) -> CompilerAdapter:
    """
    Loads the compiler at `path`, first downloading `version` (or the latest release)
    there when nothing exists at `path` yet.
    """
    path = Path(path)
    if not path.exists():
        index = fetch_releases(url=releases_url)
        filename = resolve(index, version)
        SOLC_LOGGER.info(f"No solidity compiler at {path}; installing {resolve_version(index, version)}")
        download_release(filename, path, base_url=base_url, index=index)

    handle = CompilerAdapter(load_module(path))
    if version is not None and not version_matches(handle.version(), version):
        SOLC_LOGGER.warn(f"Requested solidity {version} but the compiler at {path} is {handle.version()}")
    return handle


def run_compiler(handle: CompilerAdapter, compilation_input: CompilationInput) -> str:
    """Encodes `compilation_input` and runs the compiler, returning its raw output document."""
    try:
        input_json = encode(compilation_input)
    except EncodeError as e:
        raise InvalidInput(str(e)) from e

    try:
        output_json = handle.compile(input_json)
    except FFIError as e:
        raise CompilationFailed(f"Solidity compiler call failed: {e}") from e

    return output_json


def parse_output(output_json: str) -> CompilationOutput:
    try:
        output = decode(output_json)
    except DecodeError as e:
        raise CompilationFailed(f"Failed to decode solidity compiler output: {e}") from e

    errors = [error for error in output.errors or () if error.is_error]
    diagnostics = [error for error in output.errors or () if not error.is_error]
    if errors:
        formatted = '\n'.join(error.formatted_message or error.message for error in errors)
        SOLC_LOGGER.warn(f"Errors during compilation: \n{formatted}")
    if diagnostics:
        formatted = '\n'.join(error.formatted_message or error.message for error in diagnostics)
        SOLC_LOGGER.info(f"Compiler diagnostics: \n{formatted}")

    return output


def compile_standard(handle: CompilerAdapter, compilation_input: CompilationInput) -> CompilationOutput:
    """Encodes `compilation_input`, runs the compiler and decodes its output."""
    output = parse_output(run_compiler(handle, compilation_input))
    compiled = sum(len(contracts) for contracts in (output.contracts or dict()).values())
    SOLC_LOGGER.info(f"Compiled {compiled} contracts from {len(compilation_input.sources)} sources")
    return output


def compile_multiple(handle: CompilerAdapter,
                     sources: Mapping[str, str],
                     settings: Optional[CompilationSettings] = None
                     ) -> CompilationOutput:
    """Compiles several sources together, keyed by filename."""
    compilation_input = CompilationInput(
        sources={filename: SourceText(content=content) for filename, content in sources.items()},
        settings=settings or default_settings()
    )
    return compile_standard(handle, compilation_input)


def compile_simple(handle: CompilerAdapter,
                   contract_name: str,
                   source_code: str,
                   settings: Optional[CompilationSettings] = None
                   ) -> CompilationOutput:
    """Compiles a single source, filed as `<contract_name>.sol`."""
    return compile_multiple(handle, {f"{contract_name}{SOURCE_SUFFIX}": source_code}, settings=settings)
