"""
Key Encoding

Conversion between raw hex and NIP-19 bech32 strings for keys and note ids.

Key Components:
- prefix.py: The closed set of human-readable prefixes (npub, nsec, note)
- codec.py: Stateless hex <-> bech32 conversion and batch conversion
- generate.py: Fresh secp256k1 keypair generation

Decoding is label-agnostic: any well-formed bech32 string decodes to the hex
of its payload. Encoding always uses the label of the requested prefix.
"""
