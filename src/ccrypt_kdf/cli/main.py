"""Typer-based command line interface for ccrypt-kdf."""
from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path
from typing import Optional

import typer

from ..cipher import BLOCK_SIZE, KEY_SIZE
from ..config import AppConfig, load_config
from ..encoding import PassphrasePolicy, encode_passphrase
from ..exceptions import CCryptError
from ..kdf import KeyDeriver
from ..logging import configure_logging
from ..version import __version__

app = typer.Typer(help="ccrypt key derivation command line interface")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ccrypt-kdf {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    try:
        ctx.obj = load_config(config)
    except CCryptError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    configure_logging(ctx.obj.logging.normalized_level())


def _passphrase_bytes(
    config: AppConfig, passphrase: Optional[str], hex_input: Optional[str], policy: Optional[str]
) -> bytes:
    if (passphrase is None) == (hex_input is None):
        typer.echo("error: supply exactly one of --passphrase or --hex", err=True)
        raise typer.Exit(code=2)
    if hex_input is not None:
        try:
            return binascii.unhexlify(hex_input.strip())
        except (binascii.Error, ValueError) as exc:
            typer.echo(f"error: invalid hex passphrase: {exc}", err=True)
            raise typer.Exit(code=2)
    chosen = policy if policy is not None else config.kdf.passphrase_policy
    try:
        return encode_passphrase(passphrase, PassphrasePolicy.parse(chosen))
    except (CCryptError, ValueError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command()
def derive(
    ctx: typer.Context,
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Passphrase text"),
    hex_input: Optional[str] = typer.Option(None, "--hex", help="Passphrase given as hex bytes"),
    policy: Optional[str] = typer.Option(None, "--policy", help="Passphrase policy: strict|truncate|utf8"),
    output_format: str = typer.Option("hex", "--format", help="Output encoding: hex|base64"),
) -> None:
    """Print the ccrypt key derived from a passphrase"""
    data = _passphrase_bytes(ctx.obj, passphrase, hex_input, policy)
    try:
        key = KeyDeriver().derive(data)
    except CCryptError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)

    fmt = output_format.lower()
    if fmt == "hex":
        typer.echo(key.hex())
    elif fmt == "base64":
        typer.echo(base64.b64encode(key).decode("ascii"))
    else:
        typer.echo(f"error: unknown output format '{output_format}'", err=True)
        raise typer.Exit(code=2)


@app.command()
def rounds(
    ctx: typer.Context,
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Passphrase text"),
    hex_input: Optional[str] = typer.Option(None, "--hex", help="Passphrase given as hex bytes"),
    policy: Optional[str] = typer.Option(None, "--policy", help="Passphrase policy: strict|truncate|utf8"),
) -> None:
    """Trace the feedback chain one round per line"""
    data = _passphrase_bytes(ctx.obj, passphrase, hex_input, policy)
    for rnd in KeyDeriver().rounds(data):
        typer.echo(
            json.dumps(
                {"index": rnd.index, "read": rnd.read, "write": rnd.write, "consumed": rnd.consumed}
            )
        )


@app.command()
def selftest() -> None:
    """Check the derivation against direct cipher calls"""
    deriver = KeyDeriver()
    cipher = deriver.cipher
    zero_block = bytes(BLOCK_SIZE)
    one_chunk = bytes(range(1, KEY_SIZE + 1))
    checks = {
        "empty": deriver.derive(b"") == cipher.encrypt(bytes(KEY_SIZE), zero_block),
        "single-chunk": deriver.derive(one_chunk) == cipher.encrypt(one_chunk, zero_block),
        "deterministic": deriver.derive(b"ccrypt" * 11) == deriver.derive(b"ccrypt" * 11),
    }
    failed = [name for name, ok in checks.items() if not ok]
    if failed:
        typer.echo(f"Selftest FAILED: {', '.join(failed)}")
        raise typer.Exit(code=2)
    typer.echo("Selftest OK")


def run() -> None:
    app()
