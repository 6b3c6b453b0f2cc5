"""Contract public key derivation."""

from ..exceptions import ContractIndexError

MAX_CONTRACT_INDEX = 0xFFFF_FFFF
PUBLIC_KEY_SIZE = 32


def contract_public_key_hex(contract_index: int) -> str:
    """Derive the 32-byte public key of a contract as lowercase hex.

    The key is the index as a little-endian u64 followed by 24 zero bytes.

    Args:
        contract_index: Index from contract_def.h

    Returns:
        64 hex characters

    Raises:
        ContractIndexError: If the index is not an integer in ``[0, 2**32)``
    """
    if (
        isinstance(contract_index, bool)
        or not isinstance(contract_index, int)
        or not 0 <= contract_index <= MAX_CONTRACT_INDEX
    ):
        raise ContractIndexError(f"contractIndex must fit in uint32, got {contract_index!r}")

    key = contract_index.to_bytes(8, "little") + bytes(PUBLIC_KEY_SIZE - 8)
    return key.hex()
