

# Logging
from solcbind.utilities.logging import Logger

SOLC_LOGGER = Logger("solidity-compilation")

# Source code language. This binding only speaks Solidity.
LANGUAGE: str = 'Solidity'

# ABI entry discriminators ("type" on the wire)
ABI_FUNCTION = 'function'
ABI_EVENT = 'event'
ABI_ERROR = 'error'
ABI_CONSTRUCTOR = 'constructor'
ABI_FALLBACK = 'fallback'
ABI_RECEIVE = 'receive'

# State mutability
NONPAYABLE = 'nonpayable'
PAYABLE = 'payable'
VIEW = 'view'

# Diagnostic severities emitted by current compilers; the set is not closed.
SEVERITY_ERROR = 'error'
SEVERITY_WARNING = 'warning'
SEVERITY_INFO = 'info'

SOURCE_SUFFIX = '.sol'
