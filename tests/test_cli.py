# tests/test_cli.py
import json

import pytest

from dating_dna.__main__ import main
from dating_dna.definitions import SNAPSHOT_QUESTION_BANK
from dating_dna.errors import ValidationError


@pytest.fixture(autouse=True)
def _logging(restore_root_logging):
    yield


def write_answers(tmp_path, name, answers):
    path = tmp_path / name
    path.write_text(json.dumps(answers), encoding='utf-8')
    return str(path)


def test_single_assessment(tmp_path, capsys, make_answers):
    path = write_answers(tmp_path, "a.json", make_answers("FPHS"))
    assert main([path]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["assessmentType"] == "singles"
    assert output["typeCode"] == "FPHS"
    assert output["typeName"] == "Focuser–Present Heart–Structured"


def test_couple_assessment(tmp_path, capsys, make_answers):
    path_a = write_answers(tmp_path, "a.json", make_answers("CPLS"))
    path_b = write_answers(tmp_path, "b.json", make_answers("CPLO"))
    assert main([path_a, "--partner", path_b]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["assessmentType"] == "couples"
    assert output["jointProfile"]["compatibility"]["mismatches"] == 1


def test_snapshot_bank(tmp_path, capsys, make_answers):
    path = write_answers(tmp_path, "a.json", make_answers("FTLO", SNAPSHOT_QUESTION_BANK))
    assert main([path, "--bank", "snapshot"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["questionBank"] == "snapshot"
    assert output["typeCode"] == "FTLO"


def test_invalid_answer_exits_2(tmp_path, capsys):
    path = write_answers(tmp_path, "a.json", {"SE-FC-1": "maybe"})
    assert main([path]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Input error" in captured.err


def test_lenient_flag(tmp_path, capsys):
    path = write_answers(tmp_path, "a.json", {"SE-FC-1": "maybe", "SE-FC-2": "B"})
    assert main([path, "--lenient"]) == 0
    assert json.loads(capsys.readouterr().out)["scores"]["socialEnergy"] == 46.88


def test_missing_file_exits_2(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 2
    assert "not found" in capsys.readouterr().err


def test_malformed_json_exits_2(tmp_path, capsys):
    path = tmp_path / "a.json"
    path.write_text("{not json", encoding='utf-8')
    assert main([str(path)]) == 2
    assert "not valid JSON" in capsys.readouterr().err


def test_validation_failure_exits_1(tmp_path, capsys, monkeypatch, make_answers):
    def failing_validate(result):
        raise ValidationError("Too few words", "relationshipApproach", "100-260 words", "3 words")

    monkeypatch.setattr("dating_dna.engine.validate", failing_validate)
    path = write_answers(tmp_path, "a.json", make_answers("CPLS"))
    assert main([path]) == 1
    assert "relationshipApproach" in capsys.readouterr().err
