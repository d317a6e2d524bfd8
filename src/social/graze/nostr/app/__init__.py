"""
Application Layer

Command line front end for the key tools.

Key Components:
- cli.py: Argument parsing, mode dispatch and line-by-line output
- config.py: Configuration management using Pydantic settings

Exactly one mode runs per invocation: decode to hex, encode to bech32,
resolve NIP-05 identities, or generate a keypair.
"""
