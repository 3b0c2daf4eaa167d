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


from typing import Tuple

from solcbind.compile.types import CompilationSettings, OptimizerSettings, OutputSelection

"""
Standard "JSON I/O" Compiler Config Reference:

Input: https://docs.soliditylang.org/en/latest/using-the-compiler.html#input-description
Output: https://docs.soliditylang.org/en/latest/using-the-compiler.html#output-description

WARNING: Do not change these values unless you know what you are doing.
"""

# Contract level (needs the contract name or "*")
CONTRACT_OUTPUTS: Tuple[str, ...] = (

    'abi',                            # ABI
    'evm.bytecode',                   # Bytecode object, opcodes, source map and link references
    'evm.deployedBytecode',           # Deployed bytecode (has all the options that evm.bytecode has)
    'metadata',                       # Metadata

    # 'devdoc',                       # Developer documentation (natspec)
    # 'userdoc',                      # User documentation (natspec)
    # 'storageLayout',                # Slots, offsets and types of the contract's state variables.
    # 'evm.methodIdentifiers',        # The list of function hashes
    # 'evm.gasEstimates',             # Function gas estimates
)

# Optimize for how many times you intend to run the code.
# Lower values will optimize more for initial deployment cost, higher
# values will optimize more for high-frequency usage.
OPTIMIZER_RUNS = 200

OPTIMIZER_SETTINGS = OptimizerSettings(enabled=True, runs=OPTIMIZER_RUNS)

# all files(*), all contracts(*)
OUTPUT_SELECTION = OutputSelection({"*": {"*": CONTRACT_OUTPUTS}})


def default_settings() -> CompilationSettings:
    """Optimized build requesting ABI, both bytecodes and metadata for every contract."""
    return CompilationSettings(
        output_selection=OUTPUT_SELECTION,
        optimizer=OPTIMIZER_SETTINGS,
        # evmVersion, libraries and remappings are left to the compiler's defaults
    )
