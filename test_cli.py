#!/usr/bin/env python3
"""Test the smbios-tables command line."""

import json

from click.testing import CliRunner

from smbios_tables.cli import cli

TABLE = (
    bytes([0x00, 0x08, 0x00, 0x00, 0x01, 0x02, 0x03, 0x04]) + b"Vendor\x00\x00"
    + bytes([0x7F, 0x04, 0x01, 0x00, 0x00, 0x00])
)


def write_table(tmp_path, data=TABLE, name="DMI"):
    path = tmp_path / name
    path.write_bytes(data)
    return str(path)


def run(tmp_path, *args):
    """Invoke the CLI with an empty config so user settings do not leak in."""
    config = tmp_path / "smbios_tables.ini"
    if not config.exists():
        config.write_text("")
    return CliRunner().invoke(cli, [*args, "--config", str(config)])


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_dump_json(tmp_path):
    result = run(tmp_path, "dump", "--input", write_table(tmp_path), "--format", "json")
    assert result.exit_code == 0, result.output

    rows = json.loads(result.stdout)
    assert [r["number"] for r in rows] == [0, 1]
    assert [r["description"] for r in rows] == ["BIOS Information", "End-of-Table"]
    assert [r["size"] for r in rows] == [16, 6]
    assert rows[1]["handle"] == 1


def test_dump_table(tmp_path):
    result = run(tmp_path, "dump", "-i", write_table(tmp_path))
    assert result.exit_code == 0, result.output
    assert "SMBIOS structures (2)" in result.stdout


def test_dump_unavailable_table(tmp_path):
    result = run(tmp_path, "dump", "--input", str(tmp_path / "missing"), "--format", "json")
    assert result.exit_code == 0
    assert json.loads(result.stdout) == []

    result = run(tmp_path, "dump", "--input", str(tmp_path / "missing"))
    assert result.exit_code == 0
    assert "No SMBIOS structures available" in result.stdout


def test_dump_format_from_config(tmp_path):
    config = tmp_path / "smbios_tables.ini"
    config.write_text(f"[source]\ntable_path = {write_table(tmp_path)}\n\n[output]\nformat = json\n")

    result = run(tmp_path, "dump")
    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)) == 2


def test_dump_saves_snapshot(tmp_path):
    snapshot = tmp_path / "snapshot.json"
    result = run(tmp_path, "dump", "-i", write_table(tmp_path), "-o", str(snapshot))
    assert result.exit_code == 0, result.output

    data = json.loads(snapshot.read_text())
    assert len(data["entries"]) == 2


def test_compare_unchanged(tmp_path):
    table = write_table(tmp_path)
    snapshot = str(tmp_path / "snapshot.json")
    run(tmp_path, "dump", "-i", table, "-o", snapshot)

    result = run(tmp_path, "compare", snapshot, "-i", table)
    assert result.exit_code == 0, result.output
    assert "No differences" in result.stdout


def test_compare_changed(tmp_path):
    snapshot = str(tmp_path / "snapshot.json")
    run(tmp_path, "dump", "-i", write_table(tmp_path), "-o", snapshot)

    changed = bytearray(TABLE)
    changed[4] = 0xFF
    result = run(tmp_path, "compare", snapshot, "-i", write_table(tmp_path, bytes(changed), "DMI2"))
    assert result.exit_code == 1
    assert "~ handle 0x0000" in result.stdout
    assert "1 difference(s)" in result.stdout


def test_compare_invalid_snapshot(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[]")
    result = run(tmp_path, "compare", str(bad), "-i", write_table(tmp_path))
    assert result.exit_code == 1
    assert "not an SMBIOS table snapshot" in result.output


def test_dump_bad_format_in_config(tmp_path):
    config = tmp_path / "smbios_tables.ini"
    config.write_text("[output]\nformat = xml\n")

    result = run(tmp_path, "dump", "-i", write_table(tmp_path))
    assert result.exit_code == 2
    assert "unsupported output format" in result.output
