import json
from pathlib import Path

import cli


def _write(path: Path, document: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_validate_reports_each_file(tmp_path: Path, course_document, capsys) -> None:
    good = _write(tmp_path / "good.json", course_document)
    bad_document = dict(course_document)
    del bad_document["title"]
    bad = _write(tmp_path / "bad.json", bad_document)

    assert cli.main(["validate", str(good)]) == 0
    assert cli.main(["validate", str(good), str(bad)]) == 1

    output = capsys.readouterr().out
    assert f"{good}: ok" in output
    assert f"{bad}: invalid" in output
    assert "title: Field required" in output


def test_import_dir_derives_course_and_language(tmp_path: Path, course_document, monkeypatch) -> None:
    _write(tmp_path / "cs" / "en.json", course_document)
    _write(tmp_path / "cs" / "de.json", course_document)
    imported = []

    def fake_import(entries, icon=None):
        imported.extend((course, language) for _, course, language in entries)
        return 0

    monkeypatch.setattr(cli, "import_files", fake_import)
    assert cli.main(["import-dir", str(tmp_path)]) == 0
    assert imported == [("cs", "de"), ("cs", "en")]


def test_validate_reports_unreadable_json(tmp_path: Path, capsys) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")

    assert cli.main(["validate", str(broken)]) == 1
    assert "not valid JSON" in capsys.readouterr().out


def test_import_stores_config(tmp_path: Path, course_document) -> None:
    from selfassessment.database import session_scope
    from selfassessment.services import course_service

    path = _write(tmp_path / "en.json", course_document)
    assert cli.main(["import", str(path), "--course", "cli-course", "--language", "en"]) == 0

    with session_scope() as db:
        assert course_service.get_course_config(db, "cli-course", "en").title == "Computer Science"
