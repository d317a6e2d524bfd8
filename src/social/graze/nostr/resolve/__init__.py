"""
Identity Resolution

This package resolves NIP-05 identities: a domain publishes
``https://<domain>/.well-known/nostr.json`` mapping display names to hex public
keys, and each entry is converted into an npub.

Key Components:
- domain.py: Domain name validation, applied before any network access
- nip05.py: Fetching, parsing and converting nostr.json documents

The resolution flow follows these steps:
1. Validate every supplied domain, rejecting the whole set on the first bad one
2. Start one fetch task per domain on a shared HTTP session
3. Convert each document's names to npubs, rendering failures inline
4. Join the tasks in the order the domains were supplied

A failed fetch only affects the domain it belongs to.
"""
