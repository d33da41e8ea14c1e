# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import os

import pytest

import bytersa
from bytersa.__main__ import main


def test_main_roundtrip(capsys):
    main(["--seed", "42", "Hello, RSA!"])
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert [line.split(" = ")[0] for line in lines[:6]] == ["p", "q", "n", "phi", "e", "d"]
    fields = {k: int(v) for k, v in (line.split(" = ") for line in lines[:6])}
    assert fields["n"] == fields["p"] * fields["q"]
    assert fields["phi"] == (fields["p"] - 1) * (fields["q"] - 1)
    ciph_line = lines[lines.index("Ciphertext (numbers):") + 1]
    assert len(ciph_line.split(" ")) == len("Hello, RSA!")
    assert all(0 <= int(value) < fields["n"] for value in ciph_line.split(" "))
    assert "Decrypted message:\nHello, RSA!\n" in out


def test_main_seed_reproducible(capsys):
    main(["--seed", "1234"])
    first = capsys.readouterr().out
    main(["--seed", "1234"])
    assert capsys.readouterr().out == first


def test_main_usage(capsys):
    main(["--seed", "7"])
    out = capsys.readouterr().out
    assert out.startswith("p = ")
    assert 'Use: bytersa "message to encrypt"' in out
    assert "Decrypted message:" not in out


def test_main_many_messages(capsys):
    main(["--seed", "9", "first", "second"])
    out = capsys.readouterr().out
    assert out.count("Decrypted message:") == 2
    assert "Decrypted message:\nfirst\n" in out
    assert "Decrypted message:\nsecond\n" in out


def test_main_custom_range(capsys):
    main(["--seed", "5", "--low", "300", "--high", "400", "hi"])
    out = capsys.readouterr().out
    fields = dict(line.split(" = ") for line in out.splitlines()[:6])
    assert 300 <= int(fields["p"]) < 400
    assert "Decrypted message:\nhi\n" in out


def test_main_no_inverse(mocker, capsys):
    mocker.patch("bytersa.arith.mod_inverse", return_value=None)
    with pytest.raises(SystemExit) as exc:
        main(["--seed", "3", "Hello"])
    assert exc.value.code == 1
    assert "Error: Impossible to calculate the modular inverse." in capsys.readouterr().err


def test_main_invalid_range(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--low", "1", "Hello"])
    assert exc.value.code == 1
    assert "invalid prime range" in capsys.readouterr().err


def test_main_raw_bytes_argument(capsysbinary):
    main(["--seed", "11", os.fsdecode(b"caf\xe9")])
    out = capsysbinary.readouterr().out
    assert b"Decrypted message:\ncaf\xe9\n" in out
    ciph_line = out.split(b"Ciphertext (numbers):\n")[1].split(b"\n")[0]
    assert len(ciph_line.split(b" ")) == 4


def test_main_utf8_argument(capsys):
    main(["--seed", "11", "Grüße ✓"])
    assert "Decrypted message:\nGrüße ✓\n" in capsys.readouterr().out


@pytest.mark.parametrize("low,high", [("14", "16"), ("2", "4")])
def test_main_sparse_range(capsys, low, high):
    with pytest.raises(SystemExit) as exc:
        main(["--seed", "1", "--low", low, "--high", high, "hi"])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error: Run ")


def test_main_out_of_memory(mocker, capsys):
    mocker.patch("bytersa.cipher.encrypt_message", side_effect=MemoryError)
    with pytest.raises(SystemExit) as exc:
        main(["--seed", "3", "Hello"])
    assert exc.value.code == 1
    assert "out of memory" in capsys.readouterr().err


def test_main_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert f"bytersa {bytersa.__version__}" in capsys.readouterr().out
