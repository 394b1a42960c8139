"""ccrypt passphrase-to-key derivation.

The passphrase is consumed in 32-byte chunks. Each chunk is XORed into an
accumulating key which is never reset between rounds, and that key encrypts
the previous round's output into the other half of a double buffer::

    round 0:  key ^= p[0:32]   buf[1] = E(key, buf[0])
    round 1:  key ^= p[32:64]  buf[0] = E(key, buf[1])
    round 2:  key ^= p[64:96]  buf[1] = E(key, buf[0])
    ...

The derived key is the buffer written by the last round. At least one round
always runs, so the empty passphrase yields ``E(0^32, 0^32)``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator, Optional, Union

import structlog

from .cipher import BLOCK_SIZE, KEY_SIZE, BlockCipher256, RijndaelBlockCipher, cipher_name
from .exceptions import CipherConfigurationError

DERIVED_KEY_SIZE: Final[int] = 32

PassphraseBytes = Union[bytes, bytearray, memoryview, Iterable[int]]

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DerivationRound:
    """Snapshot of one completed round of the feedback chain"""
    index: int
    read: int
    write: int
    consumed: int
    output: bytes


class KeyDeriver:
    """Derive ccrypt keys from passphrase bytes.

    The deriver only holds the cipher. Key state and feedback buffers are
    allocated fresh for every call, so one instance may serve any number of
    threads as long as the cipher itself is stateless.
    """

    def __init__(self, cipher: Optional[BlockCipher256] = None) -> None:
        cipher = cipher if cipher is not None else RijndaelBlockCipher()
        block_size = getattr(cipher, "block_size", None)
        key_size = getattr(cipher, "key_size", KEY_SIZE)
        if block_size != BLOCK_SIZE:
            raise CipherConfigurationError(
                f"ccrypt requires a 256-bit block cipher but {cipher_name(cipher)} "
                f"operates on {_bits(block_size)} blocks"
            )
        if key_size != KEY_SIZE:
            raise CipherConfigurationError(
                f"ccrypt requires a 256-bit cipher key but {cipher_name(cipher)} "
                f"uses {_bits(key_size)} keys"
            )
        self._cipher = cipher

    @property
    def cipher(self) -> BlockCipher256:
        return self._cipher

    def derive(self, passphrase: PassphraseBytes) -> bytes:
        """Return the 32-byte key for ``passphrase``"""
        chain = self.rounds(passphrase)
        last = next(chain)
        for last in chain:
            pass
        logger.debug("kdf.derived", rounds=last.index + 1, cipher=cipher_name(self._cipher))
        return last.output

    def rounds(self, passphrase: PassphraseBytes) -> Iterator[DerivationRound]:
        """Run the derivation one round at a time.

        Yields a :class:`DerivationRound` after each cipher call; the
        ``output`` of the final round is the derived key.
        """
        data = _as_bytes(passphrase)
        key = bytearray(KEY_SIZE)
        buffers = [bytes(BLOCK_SIZE), bytes(BLOCK_SIZE)]
        r = 0
        j = 0
        while True:
            start = j
            for i in range(KEY_SIZE):
                if j >= len(data):
                    break
                key[i] ^= data[j]
                j += 1

            a = r % 2
            r += 1
            b = r % 2

            out = self._cipher.encrypt(bytes(key), buffers[a])
            if len(out) != BLOCK_SIZE:
                raise CipherConfigurationError(
                    f"{cipher_name(self._cipher)} returned a {len(out)}-byte block"
                )
            buffers[b] = bytes(out)
            yield DerivationRound(index=r - 1, read=a, write=b, consumed=j - start, output=buffers[b])

            if j >= len(data):
                break


def derive_key(passphrase: PassphraseBytes, cipher: Optional[BlockCipher256] = None) -> bytes:
    """Functional helper around :meth:`KeyDeriver.derive`"""
    return KeyDeriver(cipher).derive(passphrase)


def round_count(length: int) -> int:
    """Number of rounds the chain runs for a passphrase of ``length`` bytes"""
    if length < 0:
        raise ValueError("Passphrase length must be non-negative")
    return max(1, -(-length // KEY_SIZE))


def _as_bytes(passphrase: PassphraseBytes) -> bytes:
    if isinstance(passphrase, str):
        raise TypeError("Passphrase text must be encoded to bytes first (see encode_passphrase)")
    if isinstance(passphrase, (bytes, bytearray, memoryview)):
        return bytes(passphrase)
    return bytes(list(passphrase))


def _bits(size: object) -> str:
    if isinstance(size, int):
        return f"{size * 8}-bit"
    return "unknown-size"


__all__ = [
    "DERIVED_KEY_SIZE",
    "DerivationRound",
    "KeyDeriver",
    "PassphraseBytes",
    "derive_key",
    "round_count",
]
