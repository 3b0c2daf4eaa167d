from typing import Any, Dict, Optional

from marshmallow import ValidationError, fields

from solcbind.compile.constants import (
    NONPAYABLE,
    PAYABLE,
    SOLC_LOGGER,
    VIEW,
)
from solcbind.compile.types import Fallback


class DecimalString(fields.Field):
    """
    Gas costs are kept as the literal decimal strings the compiler emits ("21000", "infinite", ...).
    Integers are tolerated and rendered without loss; nothing is ever parsed into a number.
    """

    def _deserialize(self, value, attr, data, **kwargs) -> str:
        if isinstance(value, bool):
            raise ValidationError("Not a valid decimal string.")
        if isinstance(value, str):
            return value
        if isinstance(value, int):
            return str(value)
        raise ValidationError("Not a valid decimal string.")


def state_mutability_of(state_mutability: Any = None,
                        payable: Any = None,
                        constant: Any = None,
                        default: str = NONPAYABLE) -> str:
    """
    Prefers `stateMutability`, falling back to the legacy `payable` and `constant`
    flags emitted by compilers older than 0.4.16.
    """
    if isinstance(state_mutability, str):
        return state_mutability
    if payable is True:
        return PAYABLE
    if constant is True:
        return VIEW
    return default


class ABIEntryField(fields.Field):
    """
    Tagged ABI entry: reads the `type` discriminator, then loads the entry with the matching schema.

    Unknown (or missing) discriminators degrade to a Fallback entry. This is lossy;
    use `decode(..., strict_abi=True)` to reject them instead.
    """

    def __init__(self, schemas: Optional[Dict[str, type]] = None, *args, **kwargs):
        self.schemas = schemas or dict()
        super().__init__(*args, **kwargs)

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, dict):
            raise ValidationError("ABI entry must be an object.")

        kind = value.get('type')
        try:
            schema_class = self.schemas[kind]
        except (KeyError, TypeError):
            SOLC_LOGGER.warn(f"Unrecognized ABI entry type {kind!r}; treating it as a fallback function.")
            return Fallback(state_mutability=state_mutability_of(value.get('stateMutability'),
                                                                 value.get('payable'),
                                                                 value.get('constant')))
        return schema_class().load(value)
