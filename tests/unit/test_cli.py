from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("typer")

from ccrypt_kdf.cipher import RijndaelBlockCipher


def _run_cli(*args: str, check: bool = True) -> subprocess.CompletedProcess[bytes]:
    command = [sys.executable, "-m", "ccrypt_kdf.cli", *args]
    env = os.environ.copy()
    env.pop("CCRYPT_KDF_CONFIG", None)
    module_root = Path(__file__).resolve().parents[2] / "src"
    env["PYTHONPATH"] = (
        f"{module_root}{os.pathsep}{env['PYTHONPATH']}"
        if env.get("PYTHONPATH")
        else str(module_root)
    )
    return subprocess.run(
        command,
        check=check,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )


def test_cli_reports_version() -> None:
    result = _run_cli("--version")
    assert result.stdout.decode("utf-8").strip().startswith("ccrypt-kdf")


def test_cli_derive_hex_matches_cipher() -> None:
    result = _run_cli("derive", "--hex", "010203")
    expected = RijndaelBlockCipher().encrypt(b"\x01\x02\x03" + bytes(29), bytes(32))
    assert result.stdout.decode("ascii").strip() == expected.hex()


def test_cli_derive_text_and_hex_agree() -> None:
    text = _run_cli("derive", "--passphrase", "abc").stdout
    raw = _run_cli("derive", "--hex", b"abc".hex()).stdout
    assert text == raw


def test_cli_strict_policy_rejects_wide_passphrase() -> None:
    result = _run_cli("derive", "--passphrase", "€uro", check=False)
    assert result.returncode == 1
    assert b"U+20AC" in result.stderr


def test_cli_requires_one_passphrase_source() -> None:
    result = _run_cli("derive", check=False)
    assert result.returncode == 2


def test_cli_rounds_trace() -> None:
    result = _run_cli("rounds", "--hex", "00" * 100)
    lines = [json.loads(line) for line in result.stdout.decode("utf-8").splitlines()]
    assert [(line["read"], line["write"]) for line in lines] == [(0, 1), (1, 0), (0, 1), (1, 0)]


def test_cli_selftest() -> None:
    result = _run_cli("selftest")
    assert b"Selftest OK" in result.stdout


def test_cli_derive_text_uses_default_policy() -> None:
    result = _run_cli("derive", "--passphrase", "abc")
    assert result.stdout.decode("ascii").strip() == (
        "f8d1e75b93faa0a8727c4bbf15369b6e8fd7f2d0471f21dcea5a7164cb2aca7f"
    )


def test_cli_rounds_text_uses_default_policy() -> None:
    result = _run_cli("rounds", "--passphrase", "The quick brown fox jumps over the lazy dog")
    lines = [json.loads(line) for line in result.stdout.decode("utf-8").splitlines()]
    assert [line["consumed"] for line in lines] == [32, 11]


def test_cli_policy_comes_from_config(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("kdf:\n  passphrase_policy: utf8\n", encoding="utf-8")
    from_config = _run_cli("--config", str(config), "derive", "--passphrase", "€uro").stdout
    assert from_config.decode("ascii").strip() == (
        "70d494b31e20a90cfb4926ebd109e4665550b96e13da6c6e1500f98315280cf4"
    )
