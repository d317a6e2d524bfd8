"""
Nostr Key Tools

This package converts nostr keys and event ids between raw hex and the
bech32 (NIP-19) encodings, resolves NIP-05 identity documents published by
domains, and generates fresh keypairs.

Key Components:
- keys: Hex <-> bech32 codec, the prefix enumeration, and key generation
- resolve: Domain validation and concurrent NIP-05 resolution
- app: Command line interface and configuration
- errors: Exception hierarchy shared by all of the above

Conversion is pure and synchronous. Only NIP-05 resolution touches the
network, issuing one request per domain concurrently and keeping each
domain's outcome isolated from the others.
"""
