from __future__ import annotations

import pytest

from ccrypt_kdf.config import AppConfig
from ccrypt_kdf.encoding import PassphrasePolicy
from ccrypt_kdf.exceptions import InvalidKeyError, InvalidKeySpecError
from ccrypt_kdf.factory import CCryptKeyFactory
from ccrypt_kdf.kdf import KeyDeriver
from ccrypt_kdf.keys import CCryptKey, CCryptKeySpec
from fakes import RecordingCipher, XorCipher


@pytest.fixture
def factory(xor_cipher: XorCipher) -> CCryptKeyFactory:
    return CCryptKeyFactory(KeyDeriver(xor_cipher))


def test_generate_secret_boxes_derived_key(factory: CCryptKeyFactory) -> None:
    spec = CCryptKeySpec("\x01\x02\x03", metadata={"file": "notes.cpt"})
    key = factory.generate_secret(spec)
    assert isinstance(key, CCryptKey)
    assert key.get_encoded() == b"\x01\x02\x03" + bytes(29)
    assert key.algorithm == "Rijndael"
    assert key.format == "RAW"
    assert key.spec is spec


def test_generate_secret_derives_exactly_once(recording_cipher: RecordingCipher) -> None:
    factory = CCryptKeyFactory(KeyDeriver(recording_cipher))
    factory.generate_secret(CCryptKeySpec(b"short"))
    assert len(recording_cipher.calls) == 1


def test_generate_secret_rejects_other_specs(factory: CCryptKeyFactory) -> None:
    with pytest.raises(InvalidKeySpecError, match="CCryptKeySpec"):
        factory.generate_secret(b"not a spec")


def test_strict_policy_rejects_wide_passphrase(factory: CCryptKeyFactory) -> None:
    with pytest.raises(InvalidKeySpecError) as info:
        factory.generate_secret(CCryptKeySpec("€"))
    assert "U+20AC" in str(info.value)


def test_policy_changes_derived_key(xor_cipher: XorCipher) -> None:
    spec = CCryptKeySpec("é")
    strict = CCryptKeyFactory(KeyDeriver(xor_cipher), policy="strict").generate_secret(spec)
    utf8 = CCryptKeyFactory(KeyDeriver(xor_cipher), policy="utf8").generate_secret(spec)
    assert strict.get_encoded()[:2] == b"\xe9\x00"
    assert utf8.get_encoded()[:2] == b"\xc3\xa9"
    assert strict != utf8


def test_from_config_uses_configured_policy(xor_cipher: XorCipher) -> None:
    config = AppConfig.model_validate({"kdf": {"passphrase_policy": "truncate"}})
    factory = CCryptKeyFactory.from_config(config, KeyDeriver(xor_cipher))
    assert factory.policy is PassphrasePolicy.TRUNCATE
    key = factory.generate_secret(CCryptKeySpec("€"))
    assert key.get_encoded()[0] == 0xAC


def test_get_key_spec_returns_original(factory: CCryptKeyFactory) -> None:
    spec = CCryptKeySpec("hunter2", metadata={"origin": "test"})
    key = factory.generate_secret(spec)
    assert factory.get_key_spec(key) is spec
    assert factory.get_key_spec(key, CCryptKeySpec) is spec


def test_get_key_spec_rejects_foreign_key(factory: CCryptKeyFactory) -> None:
    with pytest.raises(InvalidKeySpecError, match="CCryptKey"):
        factory.get_key_spec(bytes(32))


def test_get_key_spec_rejects_other_spec_types(factory: CCryptKeyFactory) -> None:
    key = factory.generate_secret(CCryptKeySpec("hunter2"))
    with pytest.raises(InvalidKeySpecError):
        factory.get_key_spec(key, dict)


def test_translate_key_is_identity(factory: CCryptKeyFactory) -> None:
    key = factory.generate_secret(CCryptKeySpec("hunter2"))
    assert factory.translate_key(key) is key


def test_translate_key_rejects_foreign_key(factory: CCryptKeyFactory) -> None:
    with pytest.raises(InvalidKeyError):
        factory.translate_key("hunter2")


def test_default_factory_is_strict() -> None:
    assert CCryptKeyFactory(KeyDeriver(XorCipher())).policy is PassphrasePolicy.STRICT
