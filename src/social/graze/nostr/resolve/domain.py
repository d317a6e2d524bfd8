"""Domain name validation for NIP-05 resolution."""

import re
from typing import List, Optional, Pattern, Sequence

from social.graze.nostr.errors import InvalidDomain, NoDomains

DOMAIN_PATTERN = r"(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-zA-Z]{2,}"
"""
One or more dot-terminated labels of lowercase letters and digits, with hyphens
only between other characters, followed by an alphabetic top-level label.
"""


class DomainValidator:
    """Checks candidate domains against a permissive DNS label grammar.

    The pattern is compiled once on construction and the validator is passed to
    whatever needs it.
    """

    def __init__(self, pattern: str = DOMAIN_PATTERN) -> None:
        self._pattern: Pattern[str] = re.compile(pattern)

    def validate(self, domain: Optional[str]) -> bool:
        return domain is not None and self._pattern.fullmatch(domain) is not None

    def validate_all(self, domains: Optional[Sequence[str]]) -> List[str]:
        """Validate a domain set as a whole.

        Args:
            domains: Domains in the order they were supplied

        Returns:
            The same domains, order preserved

        Raises:
            NoDomains: If no domains were supplied
            InvalidDomain: For the first domain that fails validation
        """
        if not domains:
            raise NoDomains()
        for domain in domains:
            if not self.validate(domain):
                raise InvalidDomain(domain)
        return list(domains)
