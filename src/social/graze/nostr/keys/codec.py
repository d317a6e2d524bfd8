"""Hex and bech32 conversion for nostr keys and note ids.

Wraps the reference bech32 implementation with the validation rules used by
NIP-19: strict even-length hex on the way in, the standard bech32 checksum,
and the 90 character length bound.
"""

import logging
import re
from typing import Callable, Iterable, Iterator

from bech32 import bech32_decode, bech32_encode, convertbits

from social.graze.nostr.errors import InvalidKeyDecode, InvalidKeyEncode
from social.graze.nostr.keys.prefix import Prefix

logger = logging.getLogger(__name__)

BECH32_MAX_LENGTH = 90

HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")


def decode_to_hex(value: str) -> str:
    """Decode a bech32 string into the lowercase hex of its payload.

    The human-readable part is not checked against any expected prefix.

    Args:
        value: bech32 string such as an npub, nsec or note

    Returns:
        Lowercase hex of the payload bytes

    Raises:
        InvalidKeyDecode: If the checksum, charset, separator or padding is invalid
    """
    hrp, data = bech32_decode(value)
    if hrp is None or data is None:
        raise InvalidKeyDecode(value)

    decoded = convertbits(data, 5, 8, False)
    if decoded is None:
        raise InvalidKeyDecode(value)

    return bytes(decoded).hex()


def encode_from_hex(prefix: Prefix, value: str) -> str:
    """Encode a hex string as bech32 using the label for the given prefix.

    Args:
        prefix: Kind of entity being encoded
        value: Hex string with an even number of digits and no 0x prefix

    Returns:
        bech32 string of the form ``<label>1<data><checksum>``

    Raises:
        InvalidKeyDecode: If the value is not valid hex
        InvalidKeyEncode: If the payload does not fit in a bech32 string
    """
    if HEX_PATTERN.fullmatch(value) is None:
        raise InvalidKeyDecode(value)

    data = convertbits(bytes.fromhex(value), 8, 5, True)
    if data is None:
        raise InvalidKeyEncode(value)

    encoded = bech32_encode(prefix.label, data)
    if len(encoded) > BECH32_MAX_LENGTH:
        logger.debug(
            "Encoded %s is %d characters, over the bech32 limit",
            prefix.label,
            len(encoded),
        )
        raise InvalidKeyEncode(value)

    return encoded


def convert_batch(
    values: Iterable[str], convert: Callable[[str], str]
) -> Iterator[str]:
    """Convert each value in order, stopping at the first failure.

    Values converted before the failing one have already been yielded when the
    error is raised, so callers that render as they go keep those lines.
    """
    for value in values:
        yield convert(value)
