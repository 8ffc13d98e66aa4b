import pytest

from filecrypt import cli
from filecrypt.errors import KeyDerivationError


@pytest.fixture
def password(monkeypatch):
    monkeypatch.setattr(cli, "ask_password", lambda direction: "correct horse")


def test_encrypt_then_decrypt(tmp_path, password, capsys):
    src = tmp_path / "note.txt"
    src.write_bytes(b"hello world")

    assert cli.main(["encrypt", str(src)]) == 0
    assert "File encrypted successfully" in capsys.readouterr().out
    enc = tmp_path / "note.txt.encrypted"
    assert enc.stat().st_size == 32

    out = tmp_path / "plain.txt"
    assert cli.main(["decrypt", str(enc), "-o", str(out), "--no-atomic"]) == 0
    assert out.read_bytes() == b"hello world"


def test_error_exit_code(tmp_path, password, capsys):
    bad = tmp_path / "bad"
    bad.write_bytes(b"tiny")

    assert cli.main(["decrypt", str(bad)]) == 1
    assert "Invalid encrypted file" in capsys.readouterr().err


def test_interactive_flow(tmp_path, password, monkeypatch, capsys):
    src = tmp_path / "data.bin"
    src.write_bytes(b"\x00\x01\x02")
    monkeypatch.setattr(cli, "ask_direction", lambda: cli.Direction.ENCRYPT)
    monkeypatch.setattr(cli.FileSelector, "run", lambda self: src)

    assert cli.main([]) == 0
    assert (tmp_path / "data.bin.encrypted").exists()
    assert f"Output file: {tmp_path / 'data.bin.encrypted'}" in capsys.readouterr().out


def test_self_test_command():
    assert cli.main(["self-test"]) == 0


@pytest.mark.parametrize("value", ["abc", "0", "-4"])
def test_invalid_chunk_size_setting(monkeypatch, capsys, value):
    monkeypatch.setenv("FILECRYPT_CHUNK_SIZE", value)
    assert cli.main(["self-test"]) == 2
    assert "FILECRYPT_CHUNK_SIZE" in capsys.readouterr().err


def test_chunk_size_setting_is_used(tmp_path, password, monkeypatch):
    seen = {}
    monkeypatch.setenv("FILECRYPT_CHUNK_SIZE", "32")
    monkeypatch.setattr(
        cli, "run_file_crypto", lambda *args, **kwargs: seen.update(kwargs)
    )
    src = tmp_path / "note.txt"
    src.write_bytes(b"x")
    assert cli.main(["encrypt", str(src)]) == 0
    assert seen["chunk_size"] == 32


def test_invalid_log_level(capsys):
    assert cli.main(["--log-level", "chatty", "self-test"]) == 2
    assert "Unknown log level 'CHATTY'" in capsys.readouterr().err


def test_key_derivation_failure_exit_code(tmp_path, password, monkeypatch, capsys):
    def failing_derive(password):
        raise KeyDerivationError("Key derivation failed: no scrypt")

    monkeypatch.setattr("filecrypt.service.derive_key", failing_derive)
    src = tmp_path / "note.txt"
    src.write_bytes(b"x")
    assert cli.main(["encrypt", str(src)]) == 1
    assert "Key derivation failed" in capsys.readouterr().err
