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

import ctypes
import re
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from solcbind.exceptions import FFIError
from solcbind.utilities.logging import Logger

FFI_LOGGER = Logger("solc-ffi")

SHARED_LIBRARY_SUFFIXES = ('.so', '.dylib', '.dll')

# "Version: 0.8.19+commit.7dd6d404.Linux.g++"
VERSION_LINE_PATTERN = re.compile(r"^Version:\s*(?P<version>\S+)\s*$", re.MULTILINE)


class CompilerModule(ABC):
    """
    A loaded Solidity compiler. Implementations raise `FFIError`
    whenever a foreign call cannot be completed.

    Nothing is known about the concurrency guarantees of the underlying
    compiler; do not call the same module from several threads at once.
    """

    def __init__(self, path: Path):
        self.path = path

    def __repr__(self):
        return f"{self.__class__.__name__}({self.path})"

    @abstractmethod
    def version(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def license(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def compile(self, input_json: str) -> str:
        """Standard JSON input document in, Standard JSON output document out."""
        raise NotImplementedError


class SharedLibraryModule(CompilerModule):
    """libsolc loaded in-process through its C interface."""

    # const char* solidity_compile(const char* input, CStyleReadFileCallback callback, void* context)
    ReadFileCallback = ctypes.CFUNCTYPE(None, ctypes.c_void_p, ctypes.c_char_p, ctypes.c_char_p,
                                        ctypes.POINTER(ctypes.c_char_p), ctypes.POINTER(ctypes.c_char_p))

    def __init__(self, path: Path):
        super().__init__(path=path)
        try:
            self._library = ctypes.CDLL(str(path))
            self._library.solidity_version.restype = ctypes.c_char_p
            self._library.solidity_version.argtypes = []
            self._library.solidity_license.restype = ctypes.c_char_p
            self._library.solidity_license.argtypes = []
            self._library.solidity_compile.restype = ctypes.c_void_p
            self._library.solidity_compile.argtypes = [ctypes.c_char_p, self.ReadFileCallback, ctypes.c_void_p]
        except (OSError, AttributeError) as e:
            raise FFIError(f"Failed to load solidity compiler library at {path}: {e}") from e

    def _call_string(self, name: str) -> str:
        try:
            return getattr(self._library, name)().decode()
        except (AttributeError, UnicodeDecodeError) as e:
            raise FFIError(f"{name} failed for {self.path}: {e}") from e

    def version(self) -> str:
        return self._call_string('solidity_version')

    def license(self) -> str:
        return self._call_string('solidity_license')

    def compile(self, input_json: str) -> str:
        # Sources are always inlined; no import callback is installed.
        pointer = self._library.solidity_compile(input_json.encode(), self.ReadFileCallback(), None)
        if not pointer:
            raise FFIError(f"solidity_compile returned no output ({self.path})")
        try:
            return ctypes.string_at(pointer).decode()
        except UnicodeDecodeError as e:
            raise FFIError(f"solidity_compile returned undecodable output: {e}") from e
        finally:
            # Since 0.6.0 the caller owns the returned buffer.
            solidity_free = getattr(self._library, 'solidity_free', None)
            if solidity_free is not None:
                solidity_free.argtypes = [ctypes.c_void_p]
                solidity_free(pointer)


class ExecutableModule(CompilerModule):
    """A native solc binary driven through its --standard-json interface."""

    def _execute(self, args: List[str], stdin: str = None) -> str:
        command = [str(self.path), *args]
        try:
            result = subprocess.run(command, input=stdin, text=True, encoding='utf-8', capture_output=True)
        except FileNotFoundError as e:
            raise FFIError("The solidity compiler is not at the specified path. "
                           "Check that the file exists and is executable.") from e
        except PermissionError as e:
            raise FFIError(f"The solidity compiler binary at {self.path} is not executable. "
                           "Check the file's permissions.") from e
        except OSError as e:
            raise FFIError(f"Failed to execute the solidity compiler at {self.path}: {e}") from e
        if result.returncode != 0:
            raise FFIError(f"{' '.join(command)} exited with code {result.returncode}: {result.stderr.strip()}")
        return result.stdout

    def version(self) -> str:
        output = self._execute(['--version'])
        match = VERSION_LINE_PATTERN.search(output)
        if not match:
            raise FFIError(f"Unrecognized version output from {self.path}: {output.strip()!r}")
        return match.group('version')

    def license(self) -> str:
        return self._execute(['--license'])

    def compile(self, input_json: str) -> str:
        return self._execute(['--standard-json'], stdin=input_json)


def load_module(path: Union[str, Path]) -> CompilerModule:
    """
    Loads the compiler artifact at `path`. Every call loads anew, so replacing the file
    on disk is observed by the next load (shared libraries are subject to the platform loader's own cache).
    """
    path = Path(path)
    if not path.is_file():
        raise FFIError(f"No solidity compiler found at {path}")
    if path.suffix in SHARED_LIBRARY_SUFFIXES:
        module = SharedLibraryModule(path)
    else:
        module = ExecutableModule(path)
    FFI_LOGGER.debug(f"Loaded {module!r}")
    return module


class CompilerAdapter:
    """
    Uniform handle over a loaded compiler module.

    The module is probed once for its version on construction. Compile results are never
    cached; every call goes to the foreign compiler, and no locking is performed.
    """

    def __init__(self, module: CompilerModule):
        self.module = module
        try:
            self._version = module.version()
        except FFIError:
            raise
        except Exception as e:
            raise FFIError(f"{module!r} failed the version probe: {e}") from e
        if not self._version:
            raise FFIError(f"{module!r} reported an empty version")
        self.log = Logger(self.__class__.__name__)
        self.log.info(f"Using solidity compiler {self._version} ({module.path})")

    def __repr__(self):
        return f"{self.__class__.__name__}(version={self._version}, module={self.module!r})"

    def version(self) -> str:
        return self._version

    def license(self) -> str:
        return self.module.license()

    def compile(self, input_json: str) -> str:
        return self.module.compile(input_json)
