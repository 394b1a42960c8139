"""Factory turning passphrase specs into ccrypt keys and back."""
from __future__ import annotations

from typing import Any, Optional, Union

import structlog

from .encoding import PassphrasePolicy, encode_passphrase
from .exceptions import InvalidKeyError, InvalidKeySpecError, PassphraseEncodingError
from .kdf import KeyDeriver, round_count
from .keys import CCryptKey, CCryptKeySpec

logger = structlog.get_logger(__name__)


class CCryptKeyFactory:
    """Create :class:`CCryptKey` instances from :class:`CCryptKeySpec` instances.

    The factory keeps no per-derivation state, so concurrent calls are safe.
    """

    def __init__(
        self,
        deriver: Optional[KeyDeriver] = None,
        policy: Union[str, PassphrasePolicy, None] = None,
    ) -> None:
        self._deriver = deriver if deriver is not None else KeyDeriver()
        self._policy = PassphrasePolicy.parse(policy) if policy is not None else PassphrasePolicy.STRICT

    @classmethod
    def from_config(cls, config: Any, deriver: Optional[KeyDeriver] = None) -> "CCryptKeyFactory":
        return cls(deriver=deriver, policy=config.kdf.passphrase_policy)

    @property
    def policy(self) -> PassphrasePolicy:
        return self._policy

    @property
    def deriver(self) -> KeyDeriver:
        return self._deriver

    def generate_secret(self, spec: Any) -> CCryptKey:
        _assert_key_spec(spec)
        try:
            data = encode_passphrase(spec.passphrase, self._policy)
        except PassphraseEncodingError as exc:
            raise InvalidKeySpecError(str(exc)) from exc
        encoded = self._deriver.derive(data)
        logger.debug(
            "factory.secret_generated",
            rounds=round_count(len(data)),
            policy=self._policy.value,
        )
        return CCryptKey(spec=spec, encoded=encoded)

    def get_key_spec(self, key: Any, spec_type: type = CCryptKeySpec) -> CCryptKeySpec:
        try:
            _assert_key(key)
        except InvalidKeyError as exc:
            raise InvalidKeySpecError(str(exc)) from exc

        if spec_type is not CCryptKeySpec:
            raise InvalidKeySpecError(
                f"Cannot export {type(key).__name__} as {getattr(spec_type, '__name__', spec_type)}"
            )
        return key.spec

    def translate_key(self, key: Any) -> CCryptKey:
        _assert_key(key)
        return key


def _assert_key_spec(spec: Any) -> None:
    if not isinstance(spec, CCryptKeySpec):
        raise InvalidKeySpecError(
            f"Only instances of {CCryptKeySpec.__name__} supported, got {type(spec).__name__}"
        )


def _assert_key(key: Any) -> None:
    if not isinstance(key, CCryptKey):
        raise InvalidKeyError(
            f"Only instances of {CCryptKey.__name__} supported, got {type(key).__name__}"
        )


__all__ = ["CCryptKeyFactory"]
