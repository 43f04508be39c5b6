import json
from pathlib import Path

from assetlib.cli import EXIT_ERROR, EXIT_ISSUES, EXIT_OK, main
from assetlib.container import AssetContainer, save_asset_file
from assetlib.versions import ITEX_VERSION


def _spec(tmp_path: Path) -> Path:
    p = tmp_path / "tex.json"
    p.write_text(
        json.dumps(
            {"type": "texture", "width": 2, "height": 2, "data_hex": "7f" * 16}
        ),
        encoding="utf-8",
    )
    return p


def test_build_inspect_verify(tmp_path: Path, capsys):
    out = tmp_path / "tex.itex"
    assert main(["-r", "silent", "build", str(_spec(tmp_path)), str(out)]) == EXIT_OK
    assert out.exists()

    assert main(["-r", "silent", "inspect", "--json", str(out)]) == EXIT_OK
    info = json.loads(capsys.readouterr().out)
    assert info["type_tag"] == "ITEX"
    assert info["info"]["width"] == 2

    assert main(["-r", "silent", "verify", str(out)]) == EXIT_OK


def test_verify_failure_exit_code(tmp_path: Path):
    bad = tmp_path / "bad.itex"
    bad.write_bytes(b"ITEX")
    assert main(["-r", "silent", "verify", str(bad)]) == EXIT_ISSUES


def test_inspect_error_exit_code(tmp_path: Path):
    bad = tmp_path / "bad.itex"
    bad.write_bytes(b"nope")
    assert main(["-r", "silent", "inspect", str(bad)]) == EXIT_ERROR


def test_build_ratio_threshold_flag(tmp_path: Path):
    out = tmp_path / "tex.itex"
    code = main(
        [
            "-r",
            "silent",
            "build",
            "--ratio-threshold",
            "0.01",
            str(_spec(tmp_path)),
            str(out),
        ]
    )
    assert code == EXIT_OK
    assert main(["-r", "silent", "inspect", "--json", str(out)]) == EXIT_OK


def test_json_reporter_emits_build_summary(tmp_path: Path, capsys):
    out = tmp_path / "tex.itex"
    assert main(["-r", "json", "build", str(_spec(tmp_path)), str(out)]) == EXIT_OK
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    summaries = [e for e in events if e["event"] == "summary"]
    assert summaries and summaries[0]["summary_type"] == "build"
    assert summaries[0]["type"] == "ITEX"


def test_plain_inspect_prints_summary(tmp_path: Path, capsys):
    out = tmp_path / "tex.itex"
    assert main(["-r", "silent", "build", str(_spec(tmp_path)), str(out)]) == EXIT_OK
    assert main(["inspect", str(out)]) == EXIT_OK
    err = capsys.readouterr().err
    assert "[tex.itex]" in err
    assert "Inspect summary: type=ITEX version=1.0.0" in err
    assert "width: 2" in err


def test_verify_oversized_metadata_is_reported(tmp_path: Path):
    bad = tmp_path / "huge.itex"
    doc = '{"byte_size":70368744177664,"compression_mode":"None","format":"RGBA8"}'
    save_asset_file(bad, AssetContainer(b"ITEX", ITEX_VERSION, doc, b"\0" * 4))
    assert main(["-r", "silent", "verify", str(bad)]) == EXIT_ISSUES
