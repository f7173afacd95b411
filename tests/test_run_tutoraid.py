"""
Tests for the command-line entry point.
"""

import pandas as pd
import pytest

import run_tutoraid
from tutoraid.models import PAID
from tutoraid.store import ModelManager
from tutoraid.utils.config import config
from tutoraid.utils.logger import reset_logger
from tutoraid.utils.preferences import load_preferences


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop the handlers main() installs on the package logger."""
    yield
    reset_logger()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run from an empty directory so no preferences file is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def data_args(workdir):
    return [
        "--student-file", str(workdir / "students.json"),
        "--lesson-file", str(workdir / "lessons.json"),
        "--log-level", "ERROR",
    ]


def feed_input(monkeypatch, lines):
    answers = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


class TestRendering:
    """Test cases for card rendering."""

    def test_render_student(self, amy, math):
        model = ModelManager([amy.with_payment_status(PAID)], [math.with_student(amy.name)])

        text = run_tutoraid.render_student(1, model.get_student("Amy Tan"), model)

        assert " 1. Amy Tan  [Paid]" in text
        assert "Lessons: Math" in text

    def test_render_lesson(self, amy, art):
        model = ModelManager([amy], [art.with_student(amy.name)])

        text = run_tutoraid.render_lesson(2, model.get_lesson("Art"), model)

        assert " 2. Art  (1/1 students)" in text
        assert "Price: $45.5" in text
        assert "Timing: -" in text

    def test_render_lesson_in_student_order(self, amy, ben, math):
        """Test enrolled students are listed in student store order."""
        model = ModelManager([ben, amy], [math.with_student(amy.name).with_student(ben.name)])

        text = run_tutoraid.render_lesson(1, model.get_lesson("Math"), model)

        assert " 1. Math  (2/10 students)" in text
        assert "Students: Ben Lim, Amy Tan" in text


class TestMain:
    """Test cases for main()."""

    def test_session_saves_data(self, workdir, monkeypatch, capsys):
        """Test commands typed at the prompt are saved to disk."""
        feed_input(monkeypatch, [
            "add -s sn/Amy Tan sp/91234567 pn/Bob Tan pp/98765432",
            "add -l n/Math c/2",
            "add -sl s/1 l/1",
            "bogus",
            "exit",
        ])

        assert run_tutoraid.main(data_args(workdir)) == 0

        output = capsys.readouterr().out
        assert "✓ Enrolled Amy Tan in Math" in output
        assert "✗ Unknown command: bogus" in output
        assert (workdir / "students.json").exists()
        assert (workdir / "lessons.json").exists()

    def test_end_of_input_exits(self, workdir, monkeypatch):
        feed_input(monkeypatch, [])

        assert run_tutoraid.main(data_args(workdir)) == 0

    def test_export_csv(self, workdir, monkeypatch):
        """Test --export-csv writes the roster without starting the prompt."""
        feed_input(monkeypatch, [
            "add -s sn/Amy Tan sp/91234567 pn/Bob Tan pp/98765432",
            "exit",
        ])
        run_tutoraid.main(data_args(workdir))

        roster = workdir / "roster.csv"
        assert run_tutoraid.main(data_args(workdir) + ["--export-csv", str(roster)]) == 0
        assert pd.read_csv(roster)["Name"].tolist() == ["Amy Tan"]

    def test_same_data_file_rejected(self, workdir):
        args = [
            "--student-file", str(workdir / "data.json"),
            "--lesson-file", str(workdir / "data.json"),
            "--log-level", "ERROR",
        ]

        assert run_tutoraid.main(args) == 1

    def test_data_files_remembered(self, workdir, monkeypatch, capsys):
        """Test the next session reopens the files used by the last one."""
        feed_input(monkeypatch, [
            "add -s sn/Amy Tan sp/91234567 pn/Bob Tan pp/98765432",
            "exit",
        ])
        run_tutoraid.main(data_args(workdir))

        prefs = load_preferences(workdir / config.prefs_file)
        assert prefs.student_file == str(workdir / "students.json")

        feed_input(monkeypatch, ["exit"])
        capsys.readouterr()
        assert run_tutoraid.main(["--log-level", "ERROR"]) == 0
        assert "Amy Tan" in capsys.readouterr().out
