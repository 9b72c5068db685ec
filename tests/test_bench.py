# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

from rsalab import bench
from rsalab.backends import get_backend
from rsalab.errors import DecryptionMismatch
from rsalab.rsa import RSAEngine

SMALL = bench.BenchmarkConfig(bit_lengths=(16, 64, 128), keypairs=2, messages=50)


def test_default_config():
    config = bench.BenchmarkConfig()
    assert config.backends == ("native", "gmp")
    assert config.seed == 42
    assert config.bit_lengths[0] == 16


def test_run_records_every_phase():
    records = bench.BenchmarkHarness(SMALL).run()
    assert all(rec.outcome == "pass" for rec in records)
    assert all(rec.elapsed >= 0 for rec in records)
    seen = {(rec.bit_length, rec.backend_id, rec.phase) for rec in records}
    expected = {(bits, backend_id, phase)
                for bits in SMALL.bit_lengths
                for backend_id in SMALL.backends
                for phase in bench.PHASES}
    assert seen == expected
    assert len(records) == len(expected)


def test_single_backend_skips_crosscheck():
    config = bench.BenchmarkConfig(bit_lengths=(32,), keypairs=1, messages=10, backends=("gmp",))
    records = bench.BenchmarkHarness(config).run()
    assert [rec.phase for rec in records] == ["keygen", "cycle"]


def test_cycle_mismatch_aborts(mocker):
    mocker.patch.object(RSAEngine, "decrypt", return_value=-1)
    harness = bench.BenchmarkHarness(SMALL)
    with pytest.raises(DecryptionMismatch) as exc:
        harness.run()
    assert exc.value.backend_id == "native"
    assert exc.value.bit_length == 16
    assert exc.value.trial == 0
    assert harness.records[-1].outcome == "fail"
    assert harness.records[-1].phase == "cycle"
    assert len(harness.records) == 2


def test_crosscheck_divergence_aborts(mocker):
    original = RSAEngine.encrypt

    def skewed(self, message):
        cipher = original(self, message)
        return cipher + 1 if self.backend.name == "gmp" else cipher

    mocker.patch.object(RSAEngine, "encrypt", skewed)
    harness = bench.BenchmarkHarness(bench.BenchmarkConfig(bit_lengths=(32,), keypairs=1, messages=5))
    mocker.patch.object(harness, "_cycle_phase")
    with pytest.raises(DecryptionMismatch, match="ciphertext differs") as exc:
        harness.run()
    assert exc.value.backend_id == "gmp"
    assert exc.value.trial == 0



def test_crosscheck_key_divergence_aborts(mocker):
    gmp = get_backend("gmp")
    original = gmp.mod_inverse
    mocker.patch.object(gmp, "mod_inverse", side_effect=lambda a, m: original(a, m) + m)
    harness = bench.BenchmarkHarness(bench.BenchmarkConfig(bit_lengths=(32,), keypairs=1, messages=5))
    mocker.patch.object(harness, "_cycle_phase")
    with pytest.raises(DecryptionMismatch, match="key pair differs") as exc:
        harness.run()
    assert exc.value.backend_id == "gmp"
    assert exc.value.bit_length == 32
    assert exc.value.trial == 0
    assert (harness.records[-1].phase, harness.records[-1].outcome) == ("crosscheck", "fail")


def test_format_report():
    records = [
        bench.BenchmarkRecord(64, "native", "keygen", 0.5, "pass"),
        bench.BenchmarkRecord(64, "gmp", "keygen", 0.25, "pass"),
        bench.BenchmarkRecord(16, "native", "cycle", 0.001, "pass"),
        bench.BenchmarkRecord(16, "gmp", "cycle", 0.002, "fail"),
    ]
    lines = bench.format_report(records).splitlines()
    assert "native" in lines[0] and "gmp" in lines[0]
    assert lines[2].split("|")[0].strip() == "16"
    assert "FAILED" in lines[2]
    assert "500.000ms" in lines[3]
    assert "250.000ms" in lines[3]


def test_format_report_missing_cell():
    lines = bench.format_report([bench.BenchmarkRecord(32, "native", "crosscheck", 0.1, "pass"),
                                 bench.BenchmarkRecord(32, "gmp", "keygen", 0.1, "pass")]).splitlines()
    assert len(lines) == 4
    assert lines[2].split("|")[1].strip() == "keygen"
    assert lines[2].split("|")[2].strip() == "-"
