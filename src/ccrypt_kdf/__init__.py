"""ccrypt-compatible passphrase key derivation."""
from __future__ import annotations

from .cipher import BLOCK_SIZE, KEY_SIZE, BlockCipher256, RijndaelBlockCipher
from .encoding import PassphrasePolicy, encode_passphrase
from .exceptions import (
    CCryptError,
    CipherConfigurationError,
    ConfigError,
    InvalidKeyError,
    InvalidKeySpecError,
    PassphraseEncodingError,
)
from .factory import CCryptKeyFactory
from .kdf import DERIVED_KEY_SIZE, DerivationRound, KeyDeriver, derive_key
from .keys import CCryptKey, CCryptKeySpec
from .version import __version__

__all__ = [
    "BLOCK_SIZE",
    "DERIVED_KEY_SIZE",
    "KEY_SIZE",
    "BlockCipher256",
    "CCryptError",
    "CCryptKey",
    "CCryptKeyFactory",
    "CCryptKeySpec",
    "CipherConfigurationError",
    "ConfigError",
    "DerivationRound",
    "InvalidKeyError",
    "InvalidKeySpecError",
    "KeyDeriver",
    "PassphraseEncodingError",
    "PassphrasePolicy",
    "RijndaelBlockCipher",
    "__version__",
    "derive_key",
    "encode_passphrase",
]
