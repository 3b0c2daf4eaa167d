import json

#
# Sources
#

SIMPLE_CONTRACT_NAME = "A"
SIMPLE_SOURCE_FILENAME = "A.sol"
SIMPLE_SOURCE = "contract A {}"

TOKEN_SOURCE = """
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.0;

contract Token {
    event Transfer(address indexed from, address indexed to, uint256 value);
    error InsufficientBalance(uint256 available, uint256 required);
    function transfer(address to, uint256 value) external returns (bool) {}
}
"""

#
# Compiler
#

MOCK_SOLC_VERSION = "0.8.19+commit.7dd6d404.Linux.g++"
MOCK_SOLC_LICENSE = "Most of the code is licensed under GPLv3 (see below), the license for individual parts are..."

# Too large for a 64 bit integer; must survive decoding untouched.
HUGE_GAS_COST = "99999999999999999999"

TRANSFER_SELECTOR = "a9059cbb"

TOKEN_ABI = [
    {
        "type": "constructor",
        "inputs": [{"name": "supply", "type": "uint256", "internalType": "uint256"}],
        "stateMutability": "nonpayable"
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [
            {"name": "to", "type": "address", "internalType": "address"},
            {"name": "value", "type": "uint256", "internalType": "uint256"}
        ],
        "outputs": [{"name": "", "type": "bool", "internalType": "bool"}],
        "stateMutability": "nonpayable"
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "internalType": "address", "indexed": True},
            {"name": "to", "type": "address", "internalType": "address", "indexed": True},
            {"name": "value", "type": "uint256", "internalType": "uint256", "indexed": False}
        ]
    },
    {
        "type": "error",
        "name": "InsufficientBalance",
        "inputs": [
            {"name": "available", "type": "uint256", "internalType": "uint256"},
            {"name": "required", "type": "uint256", "internalType": "uint256"}
        ]
    },
    {"type": "receive", "stateMutability": "payable"},
    {"type": "fallback", "stateMutability": "nonpayable"}
]

TOKEN_CONTRACT_OUTPUT = {
    "abi": TOKEN_ABI,
    "metadata": json.dumps({"compiler": {"version": MOCK_SOLC_VERSION}, "language": "Solidity"}),
    "evm": {
        "bytecode": {
            "object": "6080604052__$b6e2d7d7c4d2c81dcbf4c6e3a1e2b0a4ac$__600a",
            "opcodes": "PUSH1 0x80 PUSH1 0x40 MSTORE",
            "sourceMap": "58:195:0:-:0;;;;;;",
            "linkReferences": {
                "lib/Math.sol": {
                    "Math": [{"start": 6, "length": 20}]
                }
            }
        },
        "deployedBytecode": {
            "object": "6080604052",
            "linkReferences": {}
        },
        "gasEstimates": {
            "creation": {
                "codeDepositCost": "123200",
                "executionCost": "infinite",
                "totalCost": HUGE_GAS_COST
            },
            "external": {"transfer(address,uint256)": "24633"},
            "internal": {}
        },
        "methodIdentifiers": {"transfer(address,uint256)": TRANSFER_SELECTOR}
    }
}

WARNING_DIAGNOSTIC = {
    "component": "general",
    "errorCode": "1878",
    "formattedMessage": "Warning: SPDX license identifier not provided in source file.\n--> A.sol\n",
    "message": "SPDX license identifier not provided in source file.",
    "severity": "warning",
    "sourceLocation": {"file": "A.sol", "start": -1, "end": -1},
    "type": "Warning"
}

PARSER_ERROR_DIAGNOSTIC = {
    "component": "general",
    "errorCode": "2314",
    "formattedMessage": "ParserError: Expected '{' but got end of source\n --> A.sol:1:12:\n",
    "message": "Expected '{' but got end of source",
    "severity": "error",
    "sourceLocation": {"file": "A.sol", "start": 11, "end": 12},
    "type": "ParserError"
}

SIMPLE_COMPILER_OUTPUT = {
    "contracts": {
        SIMPLE_SOURCE_FILENAME: {
            SIMPLE_CONTRACT_NAME: {
                "abi": [],
                "metadata": "{}",
                "evm": {
                    "bytecode": {"object": "6080604052348015600f57600080fd5b50", "linkReferences": {}},
                    "deployedBytecode": {"object": "6080604052600080fd", "linkReferences": {}}
                }
            }
        }
    },
    "errors": [WARNING_DIAGNOSTIC],
    "sources": {SIMPLE_SOURCE_FILENAME: {"id": 0}}
}

FAILED_COMPILER_OUTPUT = {
    "errors": [PARSER_ERROR_DIAGNOSTIC]
}

#
# Releases
#

MOCK_RELEASES_URL = "https://binaries.example.org/linux-amd64/list.json"
MOCK_BINARIES_URL = "https://binaries.example.org/linux-amd64"

LATEST_VERSION = "0.8.19"
LATEST_FILENAME = "solc-linux-amd64-v0.8.19+commit.7dd6d404"
PREVIOUS_VERSION = "0.8.18"
PREVIOUS_FILENAME = "solc-linux-amd64-v0.8.18+commit.87f61d96"

MOCK_COMPILER_PAYLOAD = b"\x7fELF not really a compiler"

MOCK_RELEASE_INDEX = {
    "builds": [
        {
            "path": PREVIOUS_FILENAME,
            "version": PREVIOUS_VERSION,
            "sha256": "0x" + "00" * 32
        }
    ],
    "releases": {
        LATEST_VERSION: LATEST_FILENAME,
        PREVIOUS_VERSION: PREVIOUS_FILENAME
    },
    "latestRelease": LATEST_VERSION
}
