"""Fresh nostr keypair generation.

The secret key is 32 bytes from the operating system's CSPRNG. The public key
is the x-coordinate of the corresponding secp256k1 point, as used by BIP-340
schnorr signatures.
"""

import secrets
from typing import List

from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel

from social.graze.nostr.errors import KeyFormatError, KeyGenerationError
from social.graze.nostr.keys.codec import encode_from_hex
from social.graze.nostr.keys.prefix import Prefix

SECRET_KEY_LENGTH = 32


class Keypair(BaseModel):
    """A secret key and its x-only public key, both as lowercase hex."""

    secret_key: str
    public_key: str


def derive_public_key(secret_key: bytes) -> bytes:
    """Derive the 32 byte x-only public key for a secret key.

    Raises:
        KeyGenerationError: If the secret key is not a valid secp256k1 scalar
    """
    try:
        private_key = ec.derive_private_key(
            int.from_bytes(secret_key, "big"), ec.SECP256K1()
        )
    except ValueError as e:
        raise KeyGenerationError(f"secret key rejected by secp256k1: {e}") from e
    x = private_key.public_key().public_numbers().x
    return x.to_bytes(SECRET_KEY_LENGTH, "big")


def generate_keypair() -> Keypair:
    secret_key = secrets.token_bytes(SECRET_KEY_LENGTH)
    public_key = derive_public_key(secret_key)
    return Keypair(secret_key=secret_key.hex(), public_key=public_key.hex())


def render_keypair(keypair: Keypair) -> List[str]:
    """Render a keypair as hex pubkey, hex seckey, npub and nsec lines.

    Raises:
        KeyGenerationError: If either key cannot be bech32-encoded
    """
    try:
        npub = encode_from_hex(Prefix.public_key, keypair.public_key)
        nsec = encode_from_hex(Prefix.secret_key, keypair.secret_key)
    except KeyFormatError as e:
        raise KeyGenerationError(f"generated key could not be encoded: {e}") from e
    return [keypair.public_key, keypair.secret_key, npub, nsec]
