"""Passphrase text to byte conversion.

ccrypt keys are derived from bytes, but passphrases usually arrive as text.
How characters above U+00FF are handled changes the derived key, so the choice
is an explicit policy rather than an implicit narrowing:

``strict``
    One byte per character. Characters above U+00FF are rejected.
``truncate``
    Keep the low 8 bits of every UTF-16 code unit, which is what the legacy
    Java port of ccrypt did when it narrowed ``char`` to ``byte``.
``utf8``
    UTF-8 encode the text, matching the C tool running in a UTF-8 locale.
"""
from __future__ import annotations

from enum import Enum
from typing import Union

from .exceptions import PassphraseEncodingError

_MAX_BYTE = 0xFF


class PassphrasePolicy(str, Enum):
    STRICT = "strict"
    TRUNCATE = "truncate"
    UTF8 = "utf8"

    @classmethod
    def parse(cls, value: Union[str, "PassphrasePolicy"]) -> "PassphrasePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("-", ""))
        except ValueError:
            options = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown passphrase policy '{value}' (expected one of: {options})") from None


def encode_passphrase(
    passphrase: Union[str, bytes, bytearray, memoryview],
    policy: Union[str, PassphrasePolicy] = PassphrasePolicy.STRICT,
) -> bytes:
    """Convert ``passphrase`` to the bytes fed into the key deriver.

    Bytes-like input is returned unchanged under every policy.

    Raises
    ------
    PassphraseEncodingError
        If ``policy`` is ``strict`` and a character lies above U+00FF.
    """

    if isinstance(passphrase, (bytes, bytearray, memoryview)):
        return bytes(passphrase)
    if not isinstance(passphrase, str):
        raise TypeError(f"Passphrase must be str or bytes, not {type(passphrase).__name__}")

    policy = PassphrasePolicy.parse(policy)
    if policy is PassphrasePolicy.UTF8:
        return passphrase.encode("utf-8")
    if policy is PassphrasePolicy.TRUNCATE:
        units = passphrase.encode("utf-16-le", errors="surrogatepass")
        return bytes(units[i] for i in range(0, len(units), 2))

    for position, char in enumerate(passphrase):
        if ord(char) > _MAX_BYTE:
            raise PassphraseEncodingError(
                f"Character U+{ord(char):04X} at position {position} does not fit in one byte; "
                "use the 'utf8' or 'truncate' passphrase policy"
            )
    return passphrase.encode("latin-1")


__all__ = ["PassphrasePolicy", "encode_passphrase"]
