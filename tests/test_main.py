# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

import rsalab
from rsalab import __main__ as cli
from rsalab import bench
from rsalab.errors import DecryptionMismatch


def parse_status(text: str) -> dict[str, int]:
    fields = {}
    for line in text.splitlines():
        if " = " in line:
            name, value = line.split(" = ")
            fields[name.strip()] = int(value)
    return fields


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert rsalab.__version__ in capsys.readouterr().out


def test_keygen_encrypt_decrypt(capsys):
    assert cli.main(["keygen", "--bits", "128", "--seed", "7"]) == 0
    key = parse_status(capsys.readouterr().out)
    assert key["n"] == key["p"] * key["q"]

    assert cli.main(["encrypt", "-n", str(key["n"]), "-e", str(key["e"]), "-m", "65", "-b", "gmp"]) == 0
    cipher = int(capsys.readouterr().out)
    assert cipher == pow(65, key["e"], key["n"])
    assert cli.main(["decrypt", "-p", str(key["p"]), "-q", str(key["q"]), "-e", str(key["e"]),
                     "-m", str(cipher)]) == 0
    assert int(capsys.readouterr().out) == 65


def test_textbook_cli(capsys):
    assert cli.main(["encrypt", "--modulus", "3233", "--exponent", "17", "--message", "65"]) == 0
    assert capsys.readouterr().out.strip() == "2790"
    assert cli.main(["decrypt", "-p", "61", "-q", "53", "-e", "17", "--message", "2790", "-b", "gmp"]) == 0
    assert capsys.readouterr().out.strip() == "65"


def test_keygen_too_small_fails():
    assert cli.main(["keygen", "--bits", "8"]) == 1


@pytest.mark.parametrize("p,q,e", [(4, 9, 5), (61, 53, 4), (61, 61, 7)])
def test_decrypt_bad_key_fails(p, q, e):
    assert cli.main(["decrypt", "-p", str(p), "-q", str(q), "-e", str(e), "-m", "1"]) == 1


def test_exhausted_exponent_search_fails(mocker):
    mocker.patch("rsalab.keygen.KeyGenerator.search_public_exponent",
                 side_effect=RuntimeError("No public exponent found"))
    assert cli.main(["keygen", "--bits", "32", "--seed", "1"]) == 1


def test_bench(capsys):
    assert cli.main(["bench", "--bits", "16", "32", "--keypairs", "1", "--messages", "10"]) == 0
    report = capsys.readouterr().out
    assert "crosscheck" in report
    assert "FAILED" not in report


def test_bench_certainty(mocker):
    run = mocker.spy(bench.BenchmarkHarness, "run")
    assert cli.main(["bench", "--bits", "16", "--keypairs", "1", "--messages", "5", "--certainty", "8"]) == 0
    assert run.call_args.args[0].config.certainty == 8


def test_bench_mismatch_exits_nonzero(mocker, capsys):
    mocker.patch("rsalab.bench.BenchmarkHarness._cycle_phase", side_effect=DecryptionMismatch("native", 16, 3))
    assert cli.main(["bench", "--bits", "16", "--backend", "native"]) == 1
    assert "keygen" in capsys.readouterr().out
