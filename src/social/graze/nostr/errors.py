"""Exception hierarchy for key conversion, domain validation and NIP-05 resolution."""


class NostrKeyError(Exception):
    """Base class for all errors raised by this package."""


class DomainError(NostrKeyError):
    """A domain set was rejected before any resolution was attempted."""


class NoDomains(DomainError):
    def __init__(self) -> None:
        super().__init__("no domains were provided")


class InvalidDomain(DomainError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid domain: {value!r}")
        self.value = value


class KeyFormatError(NostrKeyError):
    """A key or note id could not be converted."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class InvalidKeyDecode(KeyFormatError):
    """The input is not valid hex or not a valid bech32 string."""

    def __init__(self, value: str) -> None:
        super().__init__(f"could not decode provided key/note: {value!r}", value)


class InvalidKeyEncode(KeyFormatError):
    """The decoded bytes cannot be represented as bech32."""

    def __init__(self, value: str) -> None:
        super().__init__(f"could not bech32-encode data: {value!r}", value)


class FetchError(NostrKeyError):
    """Fetching or parsing a domain's nostr.json failed."""

    def __init__(self, domain: str, reason: str) -> None:
        super().__init__(f"{domain}: {reason}")
        self.domain = domain
        self.reason = reason


class KeyGenerationError(NostrKeyError):
    """The crypto backend produced or rejected key material it should not have."""
