import json

import pytest

from solcbind.compile.decode import decode, decode_output
from solcbind.compile.exceptions import DecodeError, MalformedOutput, SchemaMismatch
from solcbind.compile.types import (
    EMPTY_EVM,
    CompilationError,
    LinkReference,
    SourceLocation
)
from tests.constants import (
    FAILED_COMPILER_OUTPUT,
    HUGE_GAS_COST,
    PARSER_ERROR_DIAGNOSTIC,
    SIMPLE_COMPILER_OUTPUT,
    SIMPLE_CONTRACT_NAME,
    SIMPLE_SOURCE_FILENAME,
    TOKEN_CONTRACT_OUTPUT,
    TRANSFER_SELECTOR,
)


def token_output(**contract_overrides) -> dict:
    contract = dict(TOKEN_CONTRACT_OUTPUT, **contract_overrides)
    return {"contracts": {"Token.sol": {"Token": contract}}}


def test_decode_simple_output():
    output = decode(json.dumps(SIMPLE_COMPILER_OUTPUT))

    assert list(output.contracts) == [SIMPLE_SOURCE_FILENAME]
    assert list(output.contracts[SIMPLE_SOURCE_FILENAME]) == [SIMPLE_CONTRACT_NAME]
    contract = output.contract(SIMPLE_SOURCE_FILENAME, SIMPLE_CONTRACT_NAME)
    assert contract.abi == ()
    assert contract.metadata == "{}"
    assert contract.evm.bytecode.object == "6080604052348015600f57600080fd5b50"
    assert contract.evm.deployed_bytecode.object == "6080604052600080fd"
    assert contract.evm.bytecode.is_linked

    assert output.sources[SIMPLE_SOURCE_FILENAME].id == 0
    assert output.sources[SIMPLE_SOURCE_FILENAME].ast is None

    assert len(output.errors) == 1
    assert not output.has_errors


def test_absent_top_level_fields_decode_as_absent():
    output = decode(json.dumps(FAILED_COMPILER_OUTPUT))
    assert output.contracts is None
    assert output.sources is None
    assert output.contract(SIMPLE_SOURCE_FILENAME, SIMPLE_CONTRACT_NAME) is None
    assert output.has_errors

    output = decode("{}")
    assert output.errors is None
    assert output.contracts is None
    assert output.sources is None
    assert not output.has_errors


def test_absent_errors_are_distinct_from_no_errors():
    assert decode('{"errors": []}').errors == ()
    assert decode('{}').errors is None


def test_diagnostics_keep_their_source_location():
    output = decode(json.dumps(FAILED_COMPILER_OUTPUT))
    error, = output.errors
    assert error == CompilationError(
        severity="error",
        message=PARSER_ERROR_DIAGNOSTIC["message"],
        formatted_message=PARSER_ERROR_DIAGNOSTIC["formattedMessage"],
        source_location=SourceLocation(file="A.sol", start=11, end=12),
        error_code="2314",
        type="ParserError",
        component="general"
    )
    assert error.is_error


def test_unknown_severities_are_kept():
    document = {"errors": [{"severity": "remark", "message": "Something new"}]}
    error, = decode(json.dumps(document)).errors
    assert error.severity == "remark"
    assert error.formatted_message is None
    assert error.source_location is None
    assert not error.is_error


def test_evm_outputs():
    output = decode(json.dumps(token_output()))
    evm = output.contract("Token.sol", "Token").evm

    assert evm.method_identifiers == {"transfer(address,uint256)": TRANSFER_SELECTOR}
    assert evm.bytecode.source_map == "58:195:0:-:0;;;;;;"
    assert evm.bytecode.opcodes == "PUSH1 0x80 PUSH1 0x40 MSTORE"
    assert evm.bytecode.link_references == {"lib/Math.sol": {"Math": (LinkReference(start=6, length=20),)}}
    assert not evm.bytecode.is_linked
    assert evm.deployed_bytecode.link_references == {}


def test_gas_costs_are_decoded_as_literal_strings():
    output = decode(json.dumps(token_output()))
    gas = output.contract("Token.sol", "Token").evm.gas_estimates

    assert gas.creation.total_cost == HUGE_GAS_COST
    assert gas.creation.code_deposit_cost == "123200"
    assert gas.creation.execution_cost == "infinite"
    assert gas.external == {"transfer(address,uint256)": "24633"}
    assert gas.internal == {}


def test_integer_gas_costs_are_rendered_without_loss():
    evm = dict(TOKEN_CONTRACT_OUTPUT["evm"])
    evm["gasEstimates"] = {
        "creation": {"codeDepositCost": 123200, "executionCost": 99999999999999999999, "totalCost": "1"},
        "external": {"transfer(address,uint256)": 24633}
    }
    output = decode(json.dumps(token_output(evm=evm)))
    gas = output.contract("Token.sol", "Token").evm.gas_estimates
    assert gas.creation.execution_cost == HUGE_GAS_COST
    assert gas.creation.code_deposit_cost == "123200"
    assert gas.external == {"transfer(address,uint256)": "24633"}


def test_unselected_contract_outputs_have_defaults():
    document = {"contracts": {"A.sol": {"A": {}}}}
    contract = decode(json.dumps(document)).contract("A.sol", "A")
    assert contract.abi == ()
    assert contract.metadata == ""
    assert contract.evm == EMPTY_EVM
    assert contract.devdoc is None


def test_opaque_outputs_are_passed_through():
    ast = {"nodeType": "SourceUnit", "nodes": [], "src": "0:13:0"}
    devdoc = {"kind": "dev", "methods": {}, "version": 1}
    document = {
        "sources": {"A.sol": {"id": 3, "ast": ast}},
        "contracts": {"A.sol": {"A": {"devdoc": devdoc, "storageLayout": {"storage": [], "types": None}}}}
    }
    output = decode(json.dumps(document))
    assert output.sources["A.sol"].ast == ast
    assert output.contract("A.sol", "A").devdoc == devdoc
    assert output.contract("A.sol", "A").storage_layout == {"storage": [], "types": None}


def test_unmodelled_outputs_are_ignored():
    document = token_output(ir="object \"Token\" {}", irOptimized="")
    document["ephemeral"] = True
    output = decode(json.dumps(document))
    assert output.contract("Token.sol", "Token") is not None


@pytest.mark.parametrize("garbage", ["", "not json", "{\"contracts\": ", b"\x00\xff", None])
def test_malformed_output(garbage):
    with pytest.raises(MalformedOutput):
        decode(garbage)


@pytest.mark.parametrize("document", [
    [],
    "just a string",
    {"contracts": []},
    {"errors": [{"message": "missing severity"}]},
    {"sources": {"A.sol": {"id": "zero"}}},
    {"contracts": {"A.sol": {"A": {"evm": {"bytecode": {"linkReferences": {"Math.sol": {"Math": [{}]}}}}}}}},
])
def test_schema_mismatch(document):
    with pytest.raises(SchemaMismatch) as error:
        decode(json.dumps(document))
    assert isinstance(error.value, DecodeError)
    assert not isinstance(error.value, MalformedOutput)


def test_schema_mismatch_reports_the_offending_path():
    document = {"errors": [{"message": "missing severity"}]}
    with pytest.raises(SchemaMismatch) as error:
        decode_output(document)
    assert "severity" in str(error.value)
    assert error.value.messages
