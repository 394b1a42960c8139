"""Block cipher capability used by the key deriver."""
from __future__ import annotations

from typing import Final, Protocol, runtime_checkable

from py3rijndael import Rijndael

BLOCK_SIZE: Final[int] = 32  #* 256-bit
KEY_SIZE: Final[int] = 32


@runtime_checkable
class BlockCipher256(Protocol):
    """Keyed, deterministic, invertible transform on 32-byte blocks."""

    block_size: int
    key_size: int

    def encrypt(self, key: bytes, block: bytes) -> bytes:
        ...


class RijndaelBlockCipher:
    """Rijndael with a 256-bit key and a 256-bit block, as ccrypt uses it.

    A fresh ``Rijndael`` instance is built for every call so the adapter keeps
    no per-key state between invocations.
    """

    name = "Rijndael-256"

    def __init__(self, block_size: int = BLOCK_SIZE) -> None:
        self.block_size = block_size
        self.key_size = KEY_SIZE

    def encrypt(self, key: bytes, block: bytes) -> bytes:
        if len(key) != self.key_size:
            raise ValueError(f"Rijndael key must be {self.key_size} bytes, got {len(key)}")
        if len(block) != self.block_size:
            raise ValueError(f"Rijndael block must be {self.block_size} bytes, got {len(block)}")
        return bytes(Rijndael(bytes(key), block_size=self.block_size).encrypt(bytes(block)))

    def __repr__(self) -> str:
        return f"RijndaelBlockCipher(block_size={self.block_size})"


def cipher_name(cipher: BlockCipher256) -> str:
    return getattr(cipher, "name", type(cipher).__name__)


__all__ = ["BLOCK_SIZE", "KEY_SIZE", "BlockCipher256", "RijndaelBlockCipher", "cipher_name"]
