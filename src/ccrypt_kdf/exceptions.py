"""Central exception hierarchy"""
from __future__ import annotations


class CCryptError(Exception):
    """Base exception for all failures"""


class CipherConfigurationError(CCryptError):
    """Raised when the block cipher does not operate on 256-bit keys and blocks"""


class InvalidKeySpecError(CCryptError):
    """Raised when a key specification is not a recognized kind"""


class InvalidKeyError(CCryptError):
    """Raised when a key object is not a recognized kind or is malformed"""


class PassphraseEncodingError(CCryptError):
    """Raised when a passphrase cannot be represented under the active policy"""


class ConfigError(CCryptError, ValueError):
    """Raised when a configuration file cannot be validated"""


__all__ = [
    "CCryptError",
    "CipherConfigurationError",
    "ConfigError",
    "InvalidKeyError",
    "InvalidKeySpecError",
    "PassphraseEncodingError",
]
