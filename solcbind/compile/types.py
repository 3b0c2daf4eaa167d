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

"""
Standard "JSON I/O" data model.

Input: https://docs.soliditylang.org/en/latest/using-the-compiler.html#input-description
Output: https://docs.soliditylang.org/en/latest/using-the-compiler.html#output-description
"""

from typing import Any, Dict, NamedTuple, NewType, Optional, Tuple, Union

from solcbind.compile.constants import (
    ABI_CONSTRUCTOR,
    ABI_ERROR,
    ABI_EVENT,
    ABI_FALLBACK,
    ABI_FUNCTION,
    ABI_RECEIVE,
    LANGUAGE,
    SEVERITY_ERROR,
)

VersionString = NewType('VersionString', str)

# file glob -> contract glob -> requested outputs
OutputSelection = NewType('OutputSelection', Dict[str, Dict[str, Tuple[str, ...]]])


#
# Input
#

class SourceText(NamedTuple):
    content: str


class OptimizerSettings(NamedTuple):
    enabled: bool
    runs: int


class CompilationSettings(NamedTuple):
    output_selection: OutputSelection
    optimizer: Optional[OptimizerSettings] = None
    evm_version: Optional[str] = None
    libraries: Optional[Dict[str, str]] = None    # "path/File.sol:LibName" -> address
    remappings: Optional[Tuple[str, ...]] = None


class CompilationInput(NamedTuple):
    sources: Dict[str, SourceText]
    settings: CompilationSettings
    language: str = LANGUAGE


#
# ABI
#

class ABIParameter(NamedTuple):
    name: str
    type: str
    internal_type: str
    indexed: Optional[bool] = None
    components: Optional[Tuple['ABIParameter', ...]] = None


class Function(NamedTuple):
    name: str
    inputs: Tuple[ABIParameter, ...]
    outputs: Tuple[ABIParameter, ...]
    state_mutability: str

    KIND = ABI_FUNCTION

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(p.type for p in self.inputs)})"


class Event(NamedTuple):
    name: str
    inputs: Tuple[ABIParameter, ...]
    anonymous: bool

    KIND = ABI_EVENT


class Error(NamedTuple):
    name: str
    inputs: Tuple[ABIParameter, ...]

    KIND = ABI_ERROR


class Constructor(NamedTuple):
    inputs: Tuple[ABIParameter, ...]
    state_mutability: str

    KIND = ABI_CONSTRUCTOR


class Fallback(NamedTuple):
    state_mutability: str

    KIND = ABI_FALLBACK


class Receive(NamedTuple):
    state_mutability: str

    KIND = ABI_RECEIVE


ABIEntry = Union[Function, Event, Error, Constructor, Fallback, Receive]


#
# EVM
#

class LinkReference(NamedTuple):
    start: int
    length: int


class Bytecode(NamedTuple):
    object: str
    link_references: Dict[str, Dict[str, Tuple[LinkReference, ...]]]
    source_map: Optional[str] = None
    opcodes: Optional[str] = None

    @property
    def is_linked(self) -> bool:
        return not self.link_references


EMPTY_BYTECODE = Bytecode(object='', link_references=dict())


class CreationGas(NamedTuple):
    # Decimal strings, never parsed: costs may exceed any fixed width integer, or read "infinite".
    code_deposit_cost: str
    execution_cost: str
    total_cost: str


class GasEstimates(NamedTuple):
    creation: Optional[CreationGas]
    external: Dict[str, str]
    internal: Dict[str, str]


class EVM(NamedTuple):
    bytecode: Bytecode
    deployed_bytecode: Optional[Bytecode]
    gas_estimates: Optional[GasEstimates]
    method_identifiers: Dict[str, str]


EMPTY_EVM = EVM(bytecode=EMPTY_BYTECODE, deployed_bytecode=None, gas_estimates=None, method_identifiers=dict())


class Contract(NamedTuple):
    abi: Tuple[ABIEntry, ...]
    evm: EVM
    metadata: str
    devdoc: Optional[Dict[str, Any]] = None
    userdoc: Optional[Dict[str, Any]] = None
    storage_layout: Optional[Dict[str, Any]] = None

    @property
    def functions(self) -> Tuple[Function, ...]:
        return tuple(entry for entry in self.abi if isinstance(entry, Function))

    @property
    def events(self) -> Tuple[Event, ...]:
        return tuple(entry for entry in self.abi if isinstance(entry, Event))

    @property
    def constructor(self) -> Optional[Constructor]:
        return next((entry for entry in self.abi if isinstance(entry, Constructor)), None)


#
# Diagnostics
#

class SourceLocation(NamedTuple):
    file: str
    start: int
    end: int


class CompilationError(NamedTuple):
    severity: str   # "error", "warning", "info" - open ended
    message: str
    formatted_message: Optional[str] = None
    source_location: Optional[SourceLocation] = None
    error_code: Optional[str] = None
    type: Optional[str] = None
    component: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR


#
# Output
#

class SourceInfo(NamedTuple):
    id: int
    ast: Optional[Any] = None


ContractsByFile = Dict[str, Dict[str, Contract]]


class CompilationOutput(NamedTuple):
    # None means the key was absent from the compiler output; it is not the same as empty.
    sources: Optional[Dict[str, SourceInfo]] = None
    contracts: Optional[ContractsByFile] = None
    errors: Optional[Tuple[CompilationError, ...]] = None

    @property
    def has_errors(self) -> bool:
        return any(error.is_error for error in self.errors or ())

    def contract(self, filename: str, name: str) -> Optional[Contract]:
        if self.contracts is None:
            return None
        return self.contracts.get(filename, dict()).get(name)

