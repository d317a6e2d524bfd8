"""Human-readable prefixes of NIP-19 bech32 strings."""

from enum import IntEnum
from typing import Dict


class Prefix(IntEnum):
    """NIP-19 entity kind, identifying what a bech32 string encodes."""

    public_key = 1
    secret_key = 2
    note = 3

    @property
    def label(self) -> str:
        return prefix_label(self)

    @classmethod
    def from_label(cls, label: str) -> "Prefix":
        """Look up a prefix by its human-readable label.

        Raises:
            ValueError: If the label is not npub, nsec or note
        """
        for prefix, prefix_text in PREFIX_LABELS.items():
            if prefix_text == label:
                return prefix
        raise ValueError(f"unknown prefix label: {label!r}")


PREFIX_LABELS: Dict[Prefix, str] = {
    Prefix.public_key: "npub",
    Prefix.secret_key: "nsec",
    Prefix.note: "note",
}


def prefix_label(prefix: Prefix) -> str:
    return PREFIX_LABELS[prefix]
