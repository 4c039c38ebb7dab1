"""
CLI tests: `check` and `suggest` against the shipped rules file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from src.app_shell.cli import main

VALID_SUBMISSION = {
    "physician": "Dr. John Smith",
    "referring_provider": "Self Referral",
    "first_name": "Ada",
    "last_name": "Lovelace",
    "mobile_number": "5551234567",
    "email": "ada@example.com",
    "preferred_contact_method": "Mobile Number",
    "birth_sex": "Female",
    "date_of_birth": "12-10-1985",
    "address_line_1": "12 Analytical Way",
    "city": "Austin",
    "state": "Texas",
    "postal_code": "73301",
    "primary_insurance_company": "Cigna",
    "primary_insurance_member_id": "CIG-00042",
}


def _submission(tmp_path: Path, data: object) -> str:
    path = tmp_path / "submission.json"
    path.write_text(json.dumps(data))
    return str(path)


class TestCheck:
    def test_valid_submission(
        self, tmp_path: Path, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _submission(tmp_path, VALID_SUBMISSION)
        main(["--rules", str(rules_path), "check", path, "--today", "2024-06-15"])
        assert "Submission is valid." in capsys.readouterr().out

    def test_invalid_submission_exits_1(
        self, tmp_path: Path, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        data = dict(VALID_SUBMISSION, postal_code="1234", date_of_birth="02-29-2001")
        path = _submission(tmp_path, data)

        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(rules_path), "check", path, "--today", "2024-06-15"])

        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert "postal_code: Enter a valid US postal code" in out
        assert "date_of_birth: Invalid date of birth" in out

    def test_today_controls_birth_date_window(
        self, tmp_path: Path, rules_path: Path
    ) -> None:
        path = _submission(tmp_path, VALID_SUBMISSION)
        with pytest.raises(SystemExit):
            main(["--rules", str(rules_path), "check", path, "--today", "1985-12-09"])

    def test_bad_today(self, tmp_path: Path, rules_path: Path) -> None:
        path = _submission(tmp_path, VALID_SUBMISSION)
        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(rules_path), "check", path, "--today", "06-15-2024"])
        assert exc.value.code == 1

    def test_submission_must_be_object(self, tmp_path: Path, rules_path: Path) -> None:
        path = _submission(tmp_path, ["not", "an", "object"])
        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(rules_path), "check", path])
        assert exc.value.code == 1

    def test_missing_submission(self, tmp_path: Path, rules_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(rules_path), "check", str(tmp_path / "none.json")])
        assert exc.value.code == 1


class TestSuggest:
    def test_single_match_auto_selects(
        self, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["--rules", str(rules_path), "suggest", "physicians", "jo", "sm"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["Dr. John Smith", "auto-select: Dr. John Smith"]

    def test_several_matches(
        self, rules_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["--rules", str(rules_path), "suggest", "us_states", "north"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["North Carolina", "North Dakota"]

    def test_unknown_list_exits_1(
        self, rules_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="cli"):
            with pytest.raises(SystemExit) as exc:
                main(["--rules", str(rules_path), "suggest", "pharmacies", "cvs"])
        assert exc.value.code == 1
        assert "Available lists: birth_sex_options, contact_methods" in caplog.text
        assert "us_states" in caplog.text

    def test_missing_rules_exits_1(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(tmp_path / "missing.yaml"), "suggest", "physicians"])
        assert exc.value.code == 1
