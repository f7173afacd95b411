"""
Unit tests for LogicManager.
"""

from unittest.mock import Mock

import pytest

from tutoraid.exceptions import EntityNotFoundError, ParseError, StorageIOError, ValidationError
from tutoraid.logic import LogicManager
from tutoraid.storage import StorageManager
from tutoraid.store import ModelManager


class TestLogicManager:
    """Test cases for executing user input end to end."""

    @pytest.fixture
    def storage(self, tmp_path):
        return StorageManager(tmp_path / "students.json", tmp_path / "lessons.json")

    @pytest.fixture
    def logic(self, storage):
        return LogicManager(ModelManager(), storage)

    def test_scenario_with_persistence(self, logic, storage):
        """Test adding, enrolling and viewing, then reloading from disk."""
        assert logic.execute("add -s sn/Amy Tan sp/91234567 pn/Bob Tan pp/98765432").is_success
        assert logic.execute("add -l n/Math c/10 p/80").is_success
        assert logic.execute("add -sl s/1 l/1").is_success
        assert logic.execute("view -s 1").is_success

        assert [lesson.key for lesson in logic.model.filtered_lessons] == ["Math"]

        reloaded = storage.load_model()
        assert reloaded.get_student("Amy Tan").is_enrolled_in(
            reloaded.get_lesson("Math").name
        )

    def test_parse_error_becomes_failure(self, logic):
        """Test unknown commands fail without raising."""
        result = logic.execute("dance")

        assert result.is_failure
        assert isinstance(result.error, ParseError)

    def test_validation_error_becomes_failure(self, logic):
        result = logic.execute("add -l n/Math p/8.5")

        assert result.is_failure
        assert isinstance(result.error, ValidationError)

    def test_bad_index_becomes_failure(self, logic):
        result = logic.execute("del -s 1")

        assert result.is_failure
        assert isinstance(result.error, EntityNotFoundError)

    def test_saves_only_after_mutation(self):
        """Test read-only commands do not touch storage."""
        storage = Mock(spec=StorageManager)
        logic = LogicManager(ModelManager(), storage)

        logic.execute("list")
        logic.execute("help")
        storage.save.assert_not_called()

        logic.execute("add -l n/Math")
        storage.save.assert_called_once_with(logic.model)

    def test_failed_command_does_not_save(self):
        storage = Mock(spec=StorageManager)
        logic = LogicManager(ModelManager(), storage)

        logic.execute("del -l 1")

        storage.save.assert_not_called()

    def test_save_failure_is_reported(self):
        """Test a storage error after a change is returned as a failure."""
        storage = Mock(spec=StorageManager)
        storage.save.side_effect = StorageIOError("disk full")
        logic = LogicManager(ModelManager(), storage)

        result = logic.execute("add -l n/Math")

        assert result.is_failure
        assert "New lesson added: Math" in result.feedback
        assert "disk full" in result.feedback
        assert len(logic.model.lessons()) == 1

    def test_without_storage(self):
        """Test the manager works purely in memory."""
        logic = LogicManager(ModelManager())

        assert logic.execute("add -l n/Math").is_success
        assert logic.execute("exit").should_exit
