import hashlib
import json
from pathlib import Path

import pytest

from generate_fixture import make_broken, make_dicom
from medmeta import run


def make_scan(directory: Path, name: str = "scan1.dcm", **extra) -> Path:
    elements = {"PatientID": "12345", "Modality": "CT"}
    elements.update(extra)
    return make_dicom(directory / name, **elements)


BASE_ARGS = ["--no-banner", "--no-progress", "--no-color"]


def test_scenario_a_csv_to_stdout(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    code = run([str(path), "--fields", "PatientID,Modality", *BASE_ARGS])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == "FileName,PatientID,Modality\nscan1.dcm,12345,CT\n"
    assert "Processed 1 file(s), 0 failed" in captured.err


def test_scenario_b_anonymized(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    code = run([str(path), "--fields", "PatientID,Modality", "--anonymize", *BASE_ARGS])
    assert code == 0
    digest = hashlib.sha256(b"12345").hexdigest()
    assert capsys.readouterr().out == f"FileName,PatientID,Modality\nscan1.dcm,HASH_{digest},CT\n"


def test_scenario_c_comma_is_quoted(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd, InstitutionName="New York, NY")
    assert run([str(path), "--fields", "InstitutionName", *BASE_ARGS]) == 0
    assert capsys.readouterr().out.splitlines()[1] == 'scan1.dcm,"New York, NY"'


def test_scenario_d_json(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    assert run([str(path), "--fields", "PatientID", "--format", "json", *BASE_ARGS]) == 0
    assert json.loads(capsys.readouterr().out) == [{"FileName": "scan1.dcm", "PatientID": "12345"}]


def test_scenario_e_no_usable_files(in_tmp_cwd: Path, capsys):
    scans = in_tmp_cwd / "scans"
    make_broken(scans / "one.dcm")
    make_broken(scans / "two.dcm")
    out = in_tmp_cwd / "out.csv"
    code = run([str(scans), "--fields", "PatientID", "-o", str(out), *BASE_ARGS])
    captured = capsys.readouterr()
    assert code == 1
    assert not out.exists()
    assert captured.out == ""
    assert "No files were processed successfully" in captured.err


def test_scenario_e_existing_output_untouched(in_tmp_cwd: Path):
    make_broken(in_tmp_cwd / "bad.dcm")
    out = in_tmp_cwd / "out.csv"
    out.write_text("previous run\n", encoding="utf-8")
    assert run([str(in_tmp_cwd / "bad.dcm"), "-o", str(out), *BASE_ARGS]) == 1
    assert out.read_text(encoding="utf-8") == "previous run\n"


def test_config_file_drives_run(in_tmp_cwd: Path, capsys):
    scans = in_tmp_cwd / "scans"
    make_scan(scans, "b.dcm", PatientID="B", StudyDate="20240102")
    make_scan(scans, "a.dcm", PatientID="A", StudyDate="20240101")
    make_broken(scans / "c.dcm")
    out = in_tmp_cwd / "results" / "out.json"
    (in_tmp_cwd / "config.json").write_text(json.dumps({
        "output_format": "json",
        "fields": ["StudyDate", "PatientID", "Bogus"],
        "anonymize": False,
        "output_file": str(out),
    }), encoding="utf-8")

    code = run([str(scans), *BASE_ARGS])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == ""
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == [
        {"FileName": "a.dcm", "StudyDate": "20240101", "PatientID": "A", "Bogus": "N/A"},
        {"FileName": "b.dcm", "StudyDate": "20240102", "PatientID": "B", "Bogus": "N/A"},
    ]
    assert [list(obj) for obj in data] == [["FileName", "StudyDate", "PatientID", "Bogus"]] * 2
    assert "Unknown field(s)" in captured.err
    assert "Processed 2 file(s), 1 failed" in captured.err


def test_cli_flags_override_config(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    config = in_tmp_cwd / "settings.json"
    config.write_text(json.dumps({"output_format": "json", "fields": ["PatientID"]}), encoding="utf-8")
    assert run([str(path), "-c", str(config), "-f", "csv", "--fields", "Modality", *BASE_ARGS]) == 0
    assert capsys.readouterr().out == "FileName,Modality\nscan1.dcm,CT\n"


def test_bad_config_is_not_fatal(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    config = in_tmp_cwd / "broken.json"
    config.write_text("{not json", encoding="utf-8")
    assert run([str(path), "-c", str(config), *BASE_ARGS]) == 0
    captured = capsys.readouterr()
    assert captured.out == "FileName\nscan1.dcm\n"
    assert "JSON parsing error" in captured.err


def test_output_file_overwritten(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    out = in_tmp_cwd / "out.csv"
    out.write_text("stale,data\nmore\nlines\n", encoding="utf-8")
    assert run([str(path), "--fields", "Modality", "-o", str(out), *BASE_ARGS]) == 0
    assert out.read_bytes() == b"FileName,Modality\nscan1.dcm,CT\n"
    assert capsys.readouterr().out == ""


def test_missing_input_path_is_fatal(in_tmp_cwd: Path, capsys):
    assert run([str(in_tmp_cwd / "missing"), *BASE_ARGS]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_no_input_path_is_fatal(in_tmp_cwd: Path, capsys):
    assert run(BASE_ARGS) == 1
    assert "No input path" in capsys.readouterr().err


def test_empty_directory_is_fatal(in_tmp_cwd: Path, capsys):
    (in_tmp_cwd / "empty").mkdir()
    assert run([str(in_tmp_cwd / "empty"), *BASE_ARGS]) == 1
    assert "No DICOM files found" in capsys.readouterr().err


def test_unwritable_output_is_fatal(in_tmp_cwd: Path, capsys):
    path = make_scan(in_tmp_cwd)
    target = in_tmp_cwd / "a_directory"
    target.mkdir()
    assert run([str(path), "-o", str(target), *BASE_ARGS]) == 1
    assert "Failed to write output" in capsys.readouterr().err


def test_threads_keep_discovery_order(in_tmp_cwd: Path, capsys):
    scans = in_tmp_cwd / "scans"
    for i in range(8):
        make_scan(scans, f"s{i}.dcm", PatientID=f"P{i}")
    assert run([str(scans), "--fields", "PatientID", "-t", "4", *BASE_ARGS]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1:] == [f"s{i}.dcm,P{i}" for i in range(8)]


def test_list_fields(capsys):
    assert run(["--list-fields"]) == 0
    out = capsys.readouterr().out
    assert "PatientID\t(0010,0020)" in out
    assert "SeriesDescription\t(0008,103E)" in out


def test_version(capsys):
    assert run(["--version"]) == 0
    assert capsys.readouterr().out.startswith("medmeta ")


@pytest.mark.parametrize("value", ["0", "-2", "two"])
def test_threads_must_be_positive(value: str, capsys):
    with pytest.raises(SystemExit) as exc:
        run(["x.dcm", "-t", value])
    assert exc.value.code == 2
