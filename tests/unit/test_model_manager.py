"""
Unit tests for ModelManager.
"""

import pytest

from tutoraid.exceptions import (
    CapacityExceededError,
    DuplicateEntityError,
    EntityNotFoundError,
    NoProgressError,
)
from tutoraid.models import PAID, UNPAID, LessonName, Progress, StudentName
from tutoraid.store import ModelManager


def keys(view):
    return [item.key for item in view]


class TestModelManager:
    """Test cases for model operations and filtered views."""

    @pytest.fixture
    def model(self, amy, ben, math, art):
        model = ModelManager()
        model.add_student(amy)
        model.add_student(ben)
        model.add_lesson(math)
        model.add_lesson(art)
        return model

    def test_enroll_and_view_student(self, model, amy, math):
        """Test viewing a student shows only their lessons."""
        model.enroll(amy, math)
        model.view_student(amy)

        assert keys(model.filtered_students) == ["Amy Tan"]
        assert keys(model.filtered_lessons) == ["Math"]

        model.view_all()
        assert keys(model.filtered_students) == ["Amy Tan", "Ben Lim"]
        assert keys(model.filtered_lessons) == ["Math", "Art"]

    def test_view_lesson(self, model, amy, ben, math):
        """Test viewing a lesson shows only its students."""
        model.enroll(ben, math)
        model.view_lesson(math)

        assert keys(model.filtered_lessons) == ["Math"]
        assert keys(model.filtered_students) == ["Ben Lim"]

    def test_delete_lesson_clears_students_outside_view(self, model, amy, ben, math):
        """Test cascades reach students hidden by the current filter."""
        model.enroll(amy, math)
        model.enroll(ben, math)
        model.view_student(ben)

        model.delete_lesson(math)

        assert model.get_student("Amy Tan").lessons == frozenset()
        assert model.get_student("Ben Lim").lessons == frozenset()
        assert not model.has_lesson(math)

    def test_delete_viewed_students_lesson_empties_lesson_view(self, model, amy, math):
        """Test the lesson view of a viewed student empties when their lesson goes."""
        model.enroll(amy, math)
        model.view_student(amy)
        assert keys(model.filtered_lessons) == ["Math"]

        model.delete_lesson(math)

        assert model.get_student("Amy Tan").lessons == frozenset()
        assert keys(model.filtered_students) == ["Amy Tan"]
        assert len(model.filtered_lessons) == 0

    def test_renaming_viewed_student_keeps_view(self, model, amy, math, make_student):
        """Test the student view follows the student through a rename."""
        model.enroll(amy, math)
        model.view_student(amy)

        model.set_student(amy, make_student("Amy Lee"))

        assert keys(model.filtered_students) == ["Amy Lee"]
        assert keys(model.filtered_lessons) == ["Math"]

    def test_renaming_viewed_lesson_keeps_view(self, model, ben, math, make_lesson):
        """Test the lesson view follows the lesson through a rename."""
        model.enroll(ben, math)
        model.view_lesson(math)

        model.set_lesson(math, make_lesson("Algebra", capacity="10"))

        assert keys(model.filtered_lessons) == ["Algebra"]
        assert keys(model.filtered_students) == ["Ben Lim"]

    def test_renaming_other_student_keeps_focus(self, model, amy, ben, make_student):
        """Test editing someone else leaves the current view alone."""
        model.view_student(amy)

        model.set_student(ben, make_student("Ben Ong", phone="81112222"))

        assert keys(model.filtered_students) == ["Amy Tan"]

    def test_delete_student_clears_lessons(self, model, amy, math, art):
        """Test deleting a student removes them from every lesson."""
        model.enroll(amy, math)
        model.enroll(amy, art)

        model.delete_student(amy)

        assert all(not lesson.has_student(amy.name) for lesson in model.lessons())

    def test_capacity_one_lesson(self, model, amy, ben, art):
        """Test the second enrollment into a one-place lesson fails."""
        model.enroll(amy, art)

        with pytest.raises(CapacityExceededError):
            model.enroll(ben, art)

        assert model.get_lesson("Art").students == frozenset({amy.name})
        assert model.get_student("Ben Lim").lessons == frozenset()

    def test_add_student_discards_enrollments(self, model, make_student):
        """Test new students start without lessons."""
        added = model.add_student(make_student("Cara Ng", lessons=[LessonName("Math")]))

        assert added.lessons == frozenset()
        assert not model.get_lesson("Math").has_student(added.name)

    def test_add_shows_full_list(self, model, amy, make_student):
        """Test adding a student resets the student filter."""
        model.view_student(amy)
        model.add_student(make_student("Cara Ng"))

        assert keys(model.filtered_students) == ["Amy Tan", "Ben Lim", "Cara Ng"]

    def test_add_duplicate_student(self, model, make_student):
        """Test a second student with the same name."""
        with pytest.raises(DuplicateEntityError):
            model.add_student(make_student(phone="12345678"))

    def test_set_student_renames_everywhere(self, model, amy, math, make_student):
        """Test editing a student's name updates their lessons."""
        model.enroll(amy, math)

        edited = model.set_student(amy, make_student("Amy Lee"))

        assert edited.lessons == frozenset({math.name})
        assert model.get_lesson("Math").students == frozenset({StudentName("Amy Lee")})
        assert keys(model.filtered_students) == ["Amy Lee", "Ben Lim"]

    def test_set_lesson_below_enrolled_count(self, model, amy, ben, math, make_lesson):
        """Test lowering capacity below the enrolled count fails."""
        model.enroll(amy, math)
        model.enroll(ben, math)

        with pytest.raises(CapacityExceededError):
            model.set_lesson(math, make_lesson("Math", capacity="1"))

        assert model.get_lesson("Math").capacity.limit == 10

    def test_set_lesson_renames_everywhere(self, model, amy, math, make_lesson):
        """Test editing a lesson's name updates its students."""
        model.enroll(amy, math)

        model.set_lesson(math, make_lesson("Algebra", capacity="2"))

        assert model.get_student("Amy Tan").lessons == frozenset({LessonName("Algebra")})
        assert model.get_lesson("Algebra").students == frozenset({amy.name})

    def test_progress(self, model, amy):
        """Test adding and deleting progress."""
        model.add_progress(amy, Progress("Chapter 1"))
        model.add_progress(amy, Progress("Chapter 2"))

        student, removed = model.delete_latest_progress(amy)

        assert removed == Progress("Chapter 2")
        assert student.current_progress == Progress("Chapter 1")

    def test_delete_progress_when_empty(self, model, ben):
        """Test deleting progress that does not exist."""
        with pytest.raises(NoProgressError):
            model.delete_latest_progress(ben)

    def test_payment(self, model, amy):
        """Test marking paid and unpaid."""
        assert model.mark_paid(amy).payment_status == PAID
        assert model.mark_unpaid(amy).payment_status == UNPAID

    def test_lessons_of_and_students_of(self, model, amy, ben, math, art):
        """Test relationship lookups follow store order."""
        model.enroll(amy, art)
        model.enroll(amy, math)
        model.enroll(ben, math)

        assert keys(model.lessons_of(amy)) == ["Math", "Art"]
        assert keys(model.students_of(math)) == ["Amy Tan", "Ben Lim"]

    def test_clear(self, model, amy):
        """Test clearing removes everything."""
        model.clear()

        assert model.students() == ()
        assert model.lessons() == ()
        assert len(model.filtered_students) == 0
        with pytest.raises(EntityNotFoundError):
            model.get_student(amy.key)

    def test_reset_data_repairs(self, amy, make_lesson):
        """Test constructing from inconsistent data reconciles it."""
        model = ModelManager([amy], [make_lesson("Math", students=[amy.name])])

        assert model.get_student("Amy Tan").lessons == frozenset({LessonName("Math")})

    def test_listeners_notified_on_mutation(self, model, amy):
        """Test view listeners are pushed after each change."""
        received = []
        model.filtered_students.subscribe(received.append)

        model.mark_paid(amy)

        assert received
        assert received[-1][0].payment_status == PAID
