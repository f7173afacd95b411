#!/usr/bin/env python3
"""
TutorAid command-line application.

Keeps track of students, lessons and enrollments for a small tutoring
business. Data is stored as JSON and saved after every change.

Usage:
    python run_tutoraid.py [--student-file PATH] [--lesson-file PATH] [--log-level LEVEL]
    python run_tutoraid.py --export-csv roster.csv

Examples:
    # Start the interactive prompt with the default data files
    python run_tutoraid.py

    # Use a separate set of data files
    python run_tutoraid.py --student-file demo/students.json --lesson-file demo/lessons.json

    # Export the student roster and exit
    python run_tutoraid.py --export-csv output/roster.csv
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from tutoraid.exceptions import StorageIOError
from tutoraid.logic import HELP_MESSAGE, LogicManager
from tutoraid.models import Lesson, Student
from tutoraid.storage import StorageManager
from tutoraid.store import ModelManager
from tutoraid.utils.config import config
from tutoraid.utils.logger import setup_logger
from tutoraid.utils.preferences import UserPreferences, load_preferences, save_preferences


PROMPT = "tutoraid> "


def parse_arguments(argv: Optional[Sequence[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Manage students and lessons for a tutoring business",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--student-file",
        help="Student data file (overrides preferences and TUTORAID_STUDENT_FILE)"
    )

    parser.add_argument(
        "--lesson-file",
        help="Lesson data file (overrides preferences and TUTORAID_LESSON_FILE)"
    )

    parser.add_argument(
        "--export-csv",
        metavar="PATH",
        help="Export the student roster to CSV and exit"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL, or INFO if unset)"
    )

    return parser.parse_args(argv)


def resolve_data_files(args, preferences: UserPreferences) -> tuple:
    """
    Pick the student and lesson files.

    Command-line flags win over preferences, which win over the
    environment defaults.

    Returns:
        Tuple of (student_file, lesson_file)
    """
    student_file = args.student_file or preferences.student_file or config.student_file
    lesson_file = args.lesson_file or preferences.lesson_file or config.lesson_file
    return Path(student_file), Path(lesson_file)


def render_student(index: int, student: Student, model: ModelManager) -> str:
    lessons = ", ".join(lesson.key for lesson in model.lessons_of(student)) or "-"
    return (
        f"{index:2d}. {student.name}  [{student.payment_status}]\n"
        f"      Phone: {student.phone}  Parent: {student.parent_name} ({student.parent_phone})\n"
        f"      Progress: {student.current_progress}\n"
        f"      Lessons: {lessons}"
    )


def render_lesson(index: int, lesson: Lesson, model: ModelManager) -> str:
    capacity = f"{lesson.enrolled_count}/{lesson.capacity}" if lesson.capacity else str(lesson.enrolled_count)
    price = lesson.price.display if lesson.price else "-"
    timing = lesson.timing or "-"
    students = ", ".join(student.key for student in model.students_of(lesson)) or "-"
    return (
        f"{index:2d}. {lesson.name}  ({capacity} students)\n"
        f"      Price: {price}  Timing: {timing}\n"
        f"      Students: {students}"
    )


def display_model(model: ModelManager):
    """
    Print the filtered student and lesson lists.

    Args:
        model: Model to display
    """
    print("\n" + "=" * 60)
    print("STUDENTS")
    print("-" * 60)
    if len(model.filtered_students) == 0:
        print("  (none)")
    for idx, student in enumerate(model.filtered_students, 1):
        print(render_student(idx, student, model))

    print("\nLESSONS")
    print("-" * 60)
    if len(model.filtered_lessons) == 0:
        print("  (none)")
    for idx, lesson in enumerate(model.filtered_lessons, 1):
        print(render_lesson(idx, lesson, model))
    print("=" * 60)


def run_repl(logic: LogicManager) -> int:
    """
    Read commands until ``exit`` or end of input.

    Returns:
        Exit code
    """
    display_model(logic.model)
    print("Type 'help' to see all commands.")

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line.strip():
            continue

        result = logic.execute(line)
        if result.is_failure:
            print(f"✗ {result.feedback}")
            continue

        if result.show_help:
            print(HELP_MESSAGE)
        else:
            print(f"✓ {result.feedback}")

        if result.should_exit:
            return 0

        display_model(logic.model)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)

    level = getattr(logging, args.log_level) if args.log_level else config.log_level_value
    logger = setup_logger(
        "tutoraid",
        level=level,
        log_file=config.log_file
    )

    try:
        config.validate()
    except ValueError as e:
        logger.error(str(e))
        print(f"ERROR: {e}")
        return 1

    preferences = load_preferences(config.prefs_file)
    student_file, lesson_file = resolve_data_files(args, preferences)
    if student_file == lesson_file:
        print("ERROR: Student and lesson data must be stored in different files")
        return 1

    storage = StorageManager(student_file, lesson_file)
    model = storage.load_model()

    if args.export_csv:
        try:
            count = storage.export_roster(model, args.export_csv)
        except StorageIOError as e:
            logger.error(f"Export failed: {e.message}")
            print(f"ERROR: Export failed - {e.message}")
            return 1
        print(f"Exported {count} students to: {args.export_csv}")
        return 0

    logger.info(f"Using data files {student_file} and {lesson_file}")
    exit_code = run_repl(LogicManager(model, storage))

    # Remember the files for the next session
    try:
        save_preferences(
            replace(preferences, student_file=str(student_file), lesson_file=str(lesson_file)),
            config.prefs_file
        )
    except StorageIOError as e:
        logger.warning(f"Could not save preferences: {e.message}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
