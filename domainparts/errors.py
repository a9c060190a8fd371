from __future__ import annotations


class DomainPartsError(Exception):
    """Base class for errors raised by domainparts."""


class SuffixListError(DomainPartsError):
    """The public suffix list could not be loaded."""


class SuffixListDownloadError(SuffixListError):
    """None of the suffix list URLs returned a usable list."""


class SuffixListConfigError(DomainPartsError):
    """Invalid configuration, or a suffix list source that does not allow the requested operation."""
