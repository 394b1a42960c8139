from __future__ import annotations

import pytest

from fakes import RecordingCipher, XorCipher


@pytest.fixture
def xor_cipher() -> XorCipher:
    return XorCipher()


@pytest.fixture
def recording_cipher() -> RecordingCipher:
    return RecordingCipher()
