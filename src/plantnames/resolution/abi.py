"""ABI encoding for getPlantName and Multicall3 aggregate3."""

from __future__ import annotations

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

from plantnames.core.exceptions import AbiDecodeError

GET_PLANT_NAME_SIGNATURE = "getPlantName(uint256)"
AGGREGATE3_SIGNATURE = "aggregate3((address,bool,bytes)[])"

GET_PLANT_NAME_SELECTOR = function_signature_to_4byte_selector(GET_PLANT_NAME_SIGNATURE)
AGGREGATE3_SELECTOR = function_signature_to_4byte_selector(AGGREGATE3_SIGNATURE)


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    value = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise AbiDecodeError(f"Invalid hex payload: {value[:32]!r}") from e


def encode_get_plant_name(entity_id: int) -> bytes:
    """Calldata for ``getPlantName(entity_id)``."""
    return GET_PLANT_NAME_SELECTOR + encode(["uint256"], [entity_id])


def decode_plant_name(data: bytes) -> str:
    """
    Decode a ``getPlantName`` return value.

    Empty return data decodes to an empty string.
    """
    if not data:
        return ""
    try:
        (name,) = decode(["string"], data)
    except (DecodingError, ValueError, OverflowError) as e:
        raise AbiDecodeError(f"Cannot decode plant name from {len(data)} bytes") from e
    return name


def encode_aggregate3(target: str, calls: list[bytes]) -> bytes:
    """Calldata for ``aggregate3`` with every sub-call allowed to fail."""
    return AGGREGATE3_SELECTOR + encode(
        ["(address,bool,bytes)[]"],
        [[(target, True, call) for call in calls]],
    )


def decode_aggregate3(data: bytes) -> list[tuple[bool, bytes]]:
    """Decode the ``(bool success, bytes returnData)[]`` of ``aggregate3``."""
    try:
        (results,) = decode(["(bool,bytes)[]"], data)
    except (DecodingError, ValueError, OverflowError) as e:
        raise AbiDecodeError(f"Cannot decode aggregate3 result from {len(data)} bytes") from e
    return [(bool(success), bytes(return_data)) for success, return_data in results]
