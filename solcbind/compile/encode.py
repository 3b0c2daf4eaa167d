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


import json
from typing import Dict, List, Mapping, Sequence

from cytoolz.dicttoolz import merge, merge_with

from solcbind.compile.constants import LANGUAGE
from solcbind.compile.exceptions import EncodeError
from solcbind.compile.types import (
    CompilationInput,
    CompilationSettings,
    OptimizerSettings,
    OutputSelection,
    SourceText
)

CompilerSources = Dict[str, Dict[str, str]]


def encode_sources(sources: Mapping[str, SourceText]) -> CompilerSources:
    if not sources:
        raise EncodeError("At least one source is required to build a compilation request.")
    if not isinstance(sources, Mapping):
        raise EncodeError(f"Sources must map filenames to SourceText, got {type(sources).__name__}.")
    input_sources = dict()
    for filename, source in sources.items():
        content = getattr(source, 'content', None)
        if not isinstance(content, str):
            raise EncodeError(f"Source '{filename}' has no text content ({type(source).__name__} given).")
        input_sources[str(filename)] = dict(content=content)
    return input_sources


def encode_output_selection(selection: OutputSelection) -> Dict[str, Dict[str, List[str]]]:
    if not isinstance(selection, Mapping):
        raise EncodeError(f"Output selection must map file globs to contracts, got {type(selection).__name__}.")
    output_selection = dict()
    for file_glob, contracts in selection.items():
        if not isinstance(contracts, Mapping):
            raise EncodeError(f"Output selection for '{file_glob}' must map contract globs to outputs, "
                              f"got {type(contracts).__name__}.")
        output_selection[str(file_glob)] = dict()
        for contract_glob, outputs in contracts.items():
            if not isinstance(outputs, (list, tuple)) or not all(isinstance(output, str) for output in outputs):
                raise EncodeError(f"Outputs selected for '{file_glob}:{contract_glob}' must be a sequence of names.")
            output_selection[str(file_glob)][str(contract_glob)] = list(outputs)
    return output_selection


def encode_optimizer(optimizer: OptimizerSettings) -> Dict:
    if not isinstance(optimizer, OptimizerSettings):
        raise EncodeError(f"Optimizer settings must be OptimizerSettings, got {type(optimizer).__name__}.")
    runs = optimizer.runs
    if isinstance(runs, bool) or not isinstance(runs, int) or runs < 0:
        raise EncodeError(f"Optimizer runs must be a non-negative integer, got {runs!r}.")
    return dict(enabled=bool(optimizer.enabled), runs=runs)


def encode_libraries(libraries: Mapping[str, str]) -> Dict[str, Dict[str, str]]:
    """
    Nests "path/File.sol:LibName" -> address entries into the {file: {library: address}} shape
    of the compiler input. Unqualified names are placed under the empty file name.
    """
    if not isinstance(libraries, Mapping):
        raise EncodeError(f"Libraries must map qualified names to addresses, got {type(libraries).__name__}.")
    qualified = list()
    for name, address in libraries.items():
        if not isinstance(name, str) or not isinstance(address, str):
            raise EncodeError(f"Library names and addresses must be strings, got {name!r}: {address!r}.")
        source_file, _, library = name.rpartition(':')
        qualified.append({source_file: {library: address}})
    return merge_with(merge, *qualified)


def encode_remappings(remappings: Sequence[str]) -> List[str]:
    if not isinstance(remappings, (list, tuple)) or not all(isinstance(remapping, str) for remapping in remappings):
        raise EncodeError(f"Remappings must be a sequence of \"prefix=path\" strings, got {remappings!r}.")
    return list(remappings)


def encode_settings(settings: CompilationSettings) -> Dict:
    if not isinstance(settings, CompilationSettings):
        raise EncodeError(f"Compilation settings must be CompilationSettings, got {type(settings).__name__}.")
    solc_settings = dict(outputSelection=encode_output_selection(settings.output_selection))

    # Each optional setting is omitted when unset rather than emitted as null.
    if settings.optimizer is not None:
        solc_settings['optimizer'] = encode_optimizer(settings.optimizer)
    if settings.evm_version is not None:
        solc_settings['evmVersion'] = settings.evm_version
    if settings.libraries is not None:
        solc_settings['libraries'] = encode_libraries(settings.libraries)
    if settings.remappings is not None:
        solc_settings['remappings'] = encode_remappings(settings.remappings)

    return solc_settings


def encode_input(compilation_input: CompilationInput) -> Dict:
    """Standard JSON input document for `compilation_input`, as a JSON-compatible dict."""
    if compilation_input.language != LANGUAGE:
        raise EncodeError(f"Unsupported source language '{compilation_input.language}'; expected '{LANGUAGE}'.")
    return dict(
        language=LANGUAGE,
        sources=encode_sources(compilation_input.sources),
        settings=encode_settings(compilation_input.settings),
    )


def encode(compilation_input: CompilationInput) -> str:
    document = encode_input(compilation_input)
    try:
        return json.dumps(document)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Compilation input is not JSON serializable: {e}") from e
