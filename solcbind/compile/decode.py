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
from typing import Any, Union

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load

from solcbind.compile.constants import (
    ABI_CONSTRUCTOR,
    ABI_ERROR,
    ABI_EVENT,
    ABI_FALLBACK,
    ABI_FUNCTION,
    ABI_RECEIVE,
    NONPAYABLE,
    PAYABLE,
)
from solcbind.compile.exceptions import MalformedOutput, SchemaMismatch
from solcbind.compile.fields import ABIEntryField, DecimalString, state_mutability_of
from solcbind.compile.types import (
    EMPTY_BYTECODE,
    EMPTY_EVM,
    EVM,
    ABIParameter,
    Bytecode,
    CompilationError,
    CompilationOutput,
    Constructor,
    Contract,
    CreationGas,
    Error,
    Event,
    Fallback,
    Function,
    GasEstimates,
    LinkReference,
    Receive,
    SourceInfo,
    SourceLocation
)


class BaseSchema(Schema):

    class Meta:

        unknown = EXCLUDE   # compilers add outputs faster than they are modelled here


#
# ABI
#

class ABIParameterSchema(BaseSchema):
    name = fields.String(load_default='')    # unnamed return values
    type = fields.String(required=True)
    internal_type = fields.String(data_key='internalType', load_default=None)
    indexed = fields.Boolean(load_default=None)
    components = fields.List(fields.Nested(lambda: ABIParameterSchema()), load_default=None)

    @post_load
    def make(self, data, **kwargs):
        components = data['components']
        return ABIParameter(
            name=data['name'],
            type=data['type'],
            internal_type=data['internal_type'] or data['type'],
            indexed=data['indexed'],
            components=tuple(components) if components is not None else None
        )


def _parameters(**kwargs):
    return fields.List(fields.Nested(ABIParameterSchema), load_default=tuple, **kwargs)


class StateMutabilitySchema(BaseSchema):
    DEFAULT_STATE_MUTABILITY = NONPAYABLE

    state_mutability = fields.String(data_key='stateMutability', load_default=None)

    # legacy flags, superseded by stateMutability in solidity 0.4.16
    payable = fields.Boolean(load_default=None)
    constant = fields.Boolean(load_default=None)

    def resolve_state_mutability(self, data) -> str:
        return state_mutability_of(data['state_mutability'],
                                   data['payable'],
                                   data['constant'],
                                   default=self.DEFAULT_STATE_MUTABILITY)


class FunctionSchema(StateMutabilitySchema):
    name = fields.String(required=True)
    inputs = _parameters()
    outputs = _parameters()

    @post_load
    def make(self, data, **kwargs):
        return Function(name=data['name'],
                        inputs=tuple(data['inputs']),
                        outputs=tuple(data['outputs']),
                        state_mutability=self.resolve_state_mutability(data))


class ConstructorSchema(StateMutabilitySchema):
    inputs = _parameters()

    @post_load
    def make(self, data, **kwargs):
        return Constructor(inputs=tuple(data['inputs']),
                           state_mutability=self.resolve_state_mutability(data))


class FallbackSchema(StateMutabilitySchema):

    @post_load
    def make(self, data, **kwargs):
        return Fallback(state_mutability=self.resolve_state_mutability(data))


class ReceiveSchema(StateMutabilitySchema):
    DEFAULT_STATE_MUTABILITY = PAYABLE

    @post_load
    def make(self, data, **kwargs):
        return Receive(state_mutability=self.resolve_state_mutability(data))


class EventSchema(BaseSchema):
    name = fields.String(required=True)
    inputs = _parameters()
    anonymous = fields.Boolean(load_default=False)

    @post_load
    def make(self, data, **kwargs):
        return Event(name=data['name'], inputs=tuple(data['inputs']), anonymous=data['anonymous'])


class ErrorSchema(BaseSchema):
    name = fields.String(required=True)
    inputs = _parameters()

    @post_load
    def make(self, data, **kwargs):
        return Error(name=data['name'], inputs=tuple(data['inputs']))


ABI_ENTRY_SCHEMAS = {
    ABI_FUNCTION: FunctionSchema,
    ABI_EVENT: EventSchema,
    ABI_ERROR: ErrorSchema,
    ABI_CONSTRUCTOR: ConstructorSchema,
    ABI_FALLBACK: FallbackSchema,
    ABI_RECEIVE: ReceiveSchema,
}


#
# EVM
#

class LinkReferenceSchema(BaseSchema):
    start = fields.Integer(required=True)
    length = fields.Integer(required=True)

    @post_load
    def make(self, data, **kwargs):
        return LinkReference(**data)


class BytecodeSchema(BaseSchema):
    object = fields.String(load_default='')
    link_references = fields.Dict(
        keys=fields.String(),    # source file
        values=fields.Dict(keys=fields.String(), values=fields.List(fields.Nested(LinkReferenceSchema))),
        data_key='linkReferences',
        load_default=dict
    )
    source_map = fields.String(data_key='sourceMap', load_default=None)
    opcodes = fields.String(load_default=None)

    @post_load
    def make(self, data, **kwargs):
        link_references = {source_file: {library: tuple(references) for library, references in libraries.items()}
                           for source_file, libraries in data['link_references'].items()}
        return Bytecode(object=data['object'],
                        link_references=link_references,
                        source_map=data['source_map'],
                        opcodes=data['opcodes'])


class CreationGasSchema(BaseSchema):
    code_deposit_cost = DecimalString(data_key='codeDepositCost', required=True)
    execution_cost = DecimalString(data_key='executionCost', required=True)
    total_cost = DecimalString(data_key='totalCost', required=True)

    @post_load
    def make(self, data, **kwargs):
        return CreationGas(**data)


class GasEstimatesSchema(BaseSchema):
    creation = fields.Nested(CreationGasSchema, load_default=None)
    external = fields.Dict(keys=fields.String(), values=DecimalString(), load_default=dict)
    internal = fields.Dict(keys=fields.String(), values=DecimalString(), load_default=dict)

    @post_load
    def make(self, data, **kwargs):
        return GasEstimates(**data)


class EVMSchema(BaseSchema):
    bytecode = fields.Nested(BytecodeSchema, load_default=EMPTY_BYTECODE)
    deployed_bytecode = fields.Nested(BytecodeSchema, data_key='deployedBytecode', load_default=None)
    gas_estimates = fields.Nested(GasEstimatesSchema, data_key='gasEstimates', load_default=None)
    method_identifiers = fields.Dict(keys=fields.String(), values=fields.String(),
                                     data_key='methodIdentifiers', load_default=dict)

    @post_load
    def make(self, data, **kwargs):
        return EVM(**data)


class ContractSchema(BaseSchema):
    abi = fields.List(ABIEntryField(schemas=ABI_ENTRY_SCHEMAS), load_default=tuple)
    evm = fields.Nested(EVMSchema, load_default=EMPTY_EVM)
    metadata = fields.String(load_default='')   # JSON in a string, passed through untouched
    devdoc = fields.Dict(load_default=None)
    userdoc = fields.Dict(load_default=None)
    storage_layout = fields.Dict(data_key='storageLayout', load_default=None)

    @post_load
    def make(self, data, **kwargs):
        data['abi'] = tuple(data['abi'])
        return Contract(**data)


#
# Diagnostics & Sources
#

class SourceLocationSchema(BaseSchema):
    file = fields.String(required=True)
    start = fields.Integer(required=True)
    end = fields.Integer(required=True)

    @post_load
    def make(self, data, **kwargs):
        return SourceLocation(**data)


class CompilationErrorSchema(BaseSchema):
    severity = fields.String(required=True)
    message = fields.String(required=True)
    formatted_message = fields.String(data_key='formattedMessage', load_default=None)
    source_location = fields.Nested(SourceLocationSchema, data_key='sourceLocation', load_default=None)
    error_code = fields.String(data_key='errorCode', load_default=None)
    type = fields.String(load_default=None)
    component = fields.String(load_default=None)

    @post_load
    def make(self, data, **kwargs):
        return CompilationError(**data)


class SourceInfoSchema(BaseSchema):
    id = fields.Integer(required=True)
    ast = fields.Raw(load_default=None)     # not modelled

    @post_load
    def make(self, data, **kwargs):
        return SourceInfo(**data)


class CompilationOutputSchema(BaseSchema):
    sources = fields.Dict(keys=fields.String(), values=fields.Nested(SourceInfoSchema), load_default=None)
    contracts = fields.Dict(
        keys=fields.String(),
        values=fields.Dict(keys=fields.String(), values=fields.Nested(ContractSchema)),
        load_default=None
    )
    errors = fields.List(fields.Nested(CompilationErrorSchema), load_default=None)

    @post_load
    def make(self, data, **kwargs):
        errors = data['errors']
        return CompilationOutput(sources=data['sources'],
                                 contracts=data['contracts'],
                                 errors=tuple(errors) if errors is not None else None)


#
# Entry Points
#

def check_abi_entry_types(document: dict) -> None:
    """Rejects any ABI entry whose type discriminator is not modelled."""
    contracts = document.get('contracts') or dict()
    if not isinstance(contracts, dict):
        return  # reported by the schema
    for filename, file_contracts in contracts.items():
        if not isinstance(file_contracts, dict):
            continue
        for name, contract in file_contracts.items():
            abi = contract.get('abi') if isinstance(contract, dict) else None
            for index, entry in enumerate(abi if isinstance(abi, list) else ()):
                kind = entry.get('type') if isinstance(entry, dict) else None
                if not isinstance(kind, str) or kind not in ABI_ENTRY_SCHEMAS:
                    raise SchemaMismatch(f"Unrecognized ABI entry type {kind!r} "
                                         f"in {filename}:{name} (abi[{index}]).")


def decode_output(document: Any, strict_abi: bool = False) -> CompilationOutput:
    """Decodes an already parsed Standard JSON output document."""
    if not isinstance(document, dict):
        raise SchemaMismatch(f"Compiler output must be a JSON object, got {type(document).__name__}.")
    if strict_abi:
        check_abi_entry_types(document)
    try:
        return CompilationOutputSchema().load(document)
    except ValidationError as e:
        raise SchemaMismatch(f"Unexpected compiler output shape: {e.messages}", messages=e.messages) from e


def decode(output_json: Union[str, bytes], strict_abi: bool = False) -> CompilationOutput:
    """
    Decodes the Standard JSON output document produced by the compiler.

    Raises `MalformedOutput` when `output_json` is not JSON at all and `SchemaMismatch`
    when it is JSON but not shaped like compiler output, so that transport corruption
    can be told apart from compiler version skew.
    """
    try:
        document = json.loads(output_json)
    except (TypeError, ValueError) as e:
        raise MalformedOutput(f"Compiler output is not valid JSON: {e}") from e
    return decode_output(document, strict_abi=strict_abi)
