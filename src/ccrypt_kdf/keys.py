"""Key specification and derived key value objects."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union

from cryptography.hazmat.primitives import constant_time

from .exceptions import InvalidKeyError
from .kdf import DERIVED_KEY_SIZE

ALGORITHM = "Rijndael"
KEY_FORMAT = "RAW"


@dataclass(frozen=True, eq=False)
class CCryptKeySpec:
    """Passphrase plus optional metadata describing a ccrypt key"""
    passphrase: Union[str, bytes]
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.passphrase, (str, bytes)):
            raise TypeError("Passphrase must be str or bytes")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __repr__(self) -> str:
        return f"CCryptKeySpec(passphrase=<redacted>, metadata={dict(self.metadata)!r})"


@dataclass(frozen=True, eq=False)
class CCryptKey:
    """A derived 256-bit ccrypt key together with the spec it came from"""
    spec: CCryptKeySpec
    encoded: bytes

    def __post_init__(self) -> None:
        if len(self.encoded) != DERIVED_KEY_SIZE:
            raise InvalidKeyError(
                f"ccrypt keys are {DERIVED_KEY_SIZE} bytes, got {len(self.encoded)}"
            )
        object.__setattr__(self, "encoded", bytes(self.encoded))

    @property
    def algorithm(self) -> str:
        return ALGORITHM

    @property
    def format(self) -> str:
        return KEY_FORMAT

    def get_encoded(self) -> bytes:
        return bytes(self.encoded)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CCryptKey):
            return NotImplemented
        return constant_time.bytes_eq(self.encoded, other.encoded)

    def __hash__(self) -> int:
        return hash((ALGORITHM, self.encoded))

    def __repr__(self) -> str:
        return f"CCryptKey(algorithm={ALGORITHM!r}, format={KEY_FORMAT!r}, encoded=<redacted>)"


__all__ = ["ALGORITHM", "KEY_FORMAT", "CCryptKey", "CCryptKeySpec"]
