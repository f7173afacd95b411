"""
Parser that turns a line of user input into a Command.

Arguments are written as ``prefix/value`` pairs; a value runs until
the next known prefix, so names and timings may contain spaces.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from ..exceptions import ParseError
from ..models.fields import (
    Capacity,
    LessonName,
    ParentName,
    Phone,
    Price,
    Progress,
    StudentName,
    Timing,
)
from ..models.lesson import Lesson
from ..models.student import Student
from .commands import (
    AddLessonCommand,
    AddProgressCommand,
    AddStudentCommand,
    ClearCommand,
    Command,
    DeleteLessonCommand,
    DeleteProgressCommand,
    DeleteStudentCommand,
    EditLessonCommand,
    EditLessonDescriptor,
    EditStudentCommand,
    EditStudentDescriptor,
    EnrollCommand,
    ExitCommand,
    HelpCommand,
    ListCommand,
    PaidCommand,
    UnenrollCommand,
    UnpaidCommand,
    ViewLessonCommand,
    ViewStudentCommand,
)


PREFIX_STUDENT_NAME = "sn/"
PREFIX_STUDENT_PHONE = "sp/"
PREFIX_PARENT_NAME = "pn/"
PREFIX_PARENT_PHONE = "pp/"
PREFIX_LESSON_NAME = "n/"
PREFIX_CAPACITY = "c/"
PREFIX_PRICE = "p/"
PREFIX_TIMING = "t/"
PREFIX_STUDENT_INDEX = "s/"
PREFIX_LESSON_INDEX = "l/"

STUDENT_PREFIXES = (
    PREFIX_STUDENT_NAME, PREFIX_STUDENT_PHONE, PREFIX_PARENT_NAME, PREFIX_PARENT_PHONE,
)
LESSON_PREFIXES = (PREFIX_LESSON_NAME, PREFIX_CAPACITY, PREFIX_PRICE, PREFIX_TIMING)
ENROLL_PREFIXES = (PREFIX_STUDENT_INDEX, PREFIX_LESSON_INDEX)

MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."
MESSAGE_NOT_EDITED = "At least one field to edit must be provided."

USAGES = {
    "add -s": "add -s sn/NAME sp/PHONE pn/PARENT_NAME pp/PARENT_PHONE",
    "add -l": "add -l n/NAME [c/CAPACITY] [p/PRICE] [t/TIMING]",
    "add -sl": "add -sl s/STUDENT_INDEX l/LESSON_INDEX",
    "add -p": "add -p STUDENT_INDEX PROGRESS",
    "del -s": "del -s INDEX",
    "del -l": "del -l INDEX",
    "del -sl": "del -sl s/STUDENT_INDEX l/LESSON_INDEX",
    "del -p": "del -p STUDENT_INDEX",
    "edit -s": "edit -s INDEX [sn/NAME] [sp/PHONE] [pn/PARENT_NAME] [pp/PARENT_PHONE]",
    "edit -l": "edit -l INDEX [n/NAME] [c/CAPACITY] [p/PRICE] [t/TIMING]",
    "view -s": "view -s INDEX",
    "view -l": "view -l INDEX",
    "paid": "paid INDEX",
    "unpaid": "unpaid INDEX",
}


def tokenize(args: str, prefixes: Iterable[str]) -> Tuple[str, Dict[str, str]]:
    """
    Split an argument string into a preamble and prefixed values.

    A prefix only counts at the start of the string or after
    whitespace. When a prefix repeats, the last value wins.

    Args:
        args: Argument text after the command word
        prefixes: Prefixes recognised for this command

    Returns:
        Tuple of (preamble, {prefix: value})

    Examples:
        >>> tokenize("1 n/Math t/Mon 5pm", ("n/", "t/"))
        ('1', {'n/': 'Math', 't/': 'Mon 5pm'})
    """
    alternatives = "|".join(re.escape(prefix) for prefix in prefixes)
    pattern = re.compile(rf"(?:^|(?<=\s))({alternatives})")

    matches = list(pattern.finditer(args))
    end_of_preamble = matches[0].start() if matches else len(args)
    preamble = args[:end_of_preamble].strip()

    values: Dict[str, str] = {}
    for current, following in zip(matches, matches[1:] + [None]):
        end = following.start() if following else len(args)
        values[current.group(1)] = args[current.end():end].strip()
    return preamble, values


def parse_index(text: str) -> int:
    """
    Parse a 1-based index.

    Raises:
        ParseError: If ``text`` is not a positive integer
    """
    text = text.strip()
    if not (text.isascii() and text.isdecimal()) or int(text) == 0:
        raise ParseError(MESSAGE_INVALID_INDEX)
    return int(text)


class TutorAidParser:
    """
    Parses user input into commands.

    Examples:
        >>> parser = TutorAidParser()
        >>> parser.parse("del -s 2")
        DeleteStudentCommand(index=2)
    """

    FLAGGED_WORDS = ("add", "del", "edit", "view")
    INDEXED_WORDS = {"paid": PaidCommand, "unpaid": UnpaidCommand}
    PLAIN_WORDS = {
        "list": ListCommand,
        "clear": ClearCommand,
        "help": HelpCommand,
        "exit": ExitCommand,
    }

    def parse(self, user_input: str) -> Command:
        """
        Parse one line of input.

        Raises:
            ParseError: If the command is unknown or its arguments are malformed
            ValidationError: If a field value breaks its format rule
        """
        words = user_input.strip().split(maxsplit=1)
        if not words:
            raise ParseError("Please enter a command. Type 'help' to see all commands.")

        command_word = words[0].lower()
        rest = words[1] if len(words) > 1 else ""

        if command_word in self.PLAIN_WORDS:
            if rest.strip():
                raise ParseError(f"'{command_word}' does not take any arguments")
            return self.PLAIN_WORDS[command_word]()

        if command_word in self.INDEXED_WORDS:
            return self.INDEXED_WORDS[command_word](self._index_for(command_word, rest))

        if command_word in self.FLAGGED_WORDS:
            flag_words = rest.split(maxsplit=1)
            flag = flag_words[0] if flag_words else ""
            args = flag_words[1] if len(flag_words) > 1 else ""
            return self._parse_flagged(f"{command_word} {flag}", args)

        raise ParseError(f"Unknown command: {command_word}. Type 'help' to see all commands.")

    def _parse_flagged(self, key: str, args: str) -> Command:
        if key == "add -s":
            return self._parse_add_student(args)
        if key == "add -l":
            return self._parse_add_lesson(args)
        if key == "add -sl":
            return EnrollCommand(*self._enroll_indexes(key, args))
        if key == "add -p":
            return self._parse_add_progress(args)
        if key == "del -s":
            return DeleteStudentCommand(self._index_for(key, args))
        if key == "del -l":
            return DeleteLessonCommand(self._index_for(key, args))
        if key == "del -sl":
            return UnenrollCommand(*self._enroll_indexes(key, args))
        if key == "del -p":
            return DeleteProgressCommand(self._index_for(key, args))
        if key == "edit -s":
            return self._parse_edit_student(args)
        if key == "edit -l":
            return self._parse_edit_lesson(args)
        if key == "view -s":
            return ViewStudentCommand(self._index_for(key, args))
        if key == "view -l":
            return ViewLessonCommand(self._index_for(key, args))

        word = key.split()[0]
        flags = sorted(usage.split()[1] for usage in USAGES if usage.startswith(word + " "))
        raise ParseError(f"'{word}' needs one of the flags: {', '.join(flags)}")

    @staticmethod
    def _invalid_format(key: str) -> ParseError:
        return ParseError(f"Invalid command format!\nUsage: {USAGES[key]}")

    def _index_for(self, key: str, args: str) -> int:
        if not args.strip() or len(args.split()) != 1:
            raise self._invalid_format(key)
        return parse_index(args)

    def _require(self, key: str, values: Dict[str, str], prefixes: Iterable[str]) -> None:
        if any(prefix not in values for prefix in prefixes):
            raise self._invalid_format(key)

    def _parse_add_student(self, args: str) -> AddStudentCommand:
        preamble, values = tokenize(args, STUDENT_PREFIXES)
        if preamble:
            raise self._invalid_format("add -s")
        self._require("add -s", values, STUDENT_PREFIXES)

        return AddStudentCommand(Student(
            name=StudentName(values[PREFIX_STUDENT_NAME]),
            phone=Phone(values[PREFIX_STUDENT_PHONE]),
            parent_name=ParentName(values[PREFIX_PARENT_NAME]),
            parent_phone=Phone(values[PREFIX_PARENT_PHONE]),
        ))

    def _parse_add_lesson(self, args: str) -> AddLessonCommand:
        preamble, values = tokenize(args, LESSON_PREFIXES)
        if preamble:
            raise self._invalid_format("add -l")
        self._require("add -l", values, (PREFIX_LESSON_NAME,))

        return AddLessonCommand(Lesson(
            name=LessonName(values[PREFIX_LESSON_NAME]),
            capacity=_optional(Capacity, values.get(PREFIX_CAPACITY)),
            price=_optional(Price, values.get(PREFIX_PRICE)),
            timing=_optional(Timing, values.get(PREFIX_TIMING)),
        ))

    def _parse_add_progress(self, args: str) -> AddProgressCommand:
        parts = args.strip().split(maxsplit=1)
        if len(parts) != 2:
            raise self._invalid_format("add -p")
        return AddProgressCommand(parse_index(parts[0]), Progress(parts[1].strip()))

    def _enroll_indexes(self, key: str, args: str) -> List[int]:
        preamble, values = tokenize(args, ENROLL_PREFIXES)
        if preamble:
            raise self._invalid_format(key)
        self._require(key, values, ENROLL_PREFIXES)
        return [
            parse_index(values[PREFIX_STUDENT_INDEX]),
            parse_index(values[PREFIX_LESSON_INDEX]),
        ]

    def _parse_edit_student(self, args: str) -> EditStudentCommand:
        preamble, values = tokenize(args, STUDENT_PREFIXES)
        if not preamble or len(preamble.split()) != 1:
            raise self._invalid_format("edit -s")
        index = parse_index(preamble)

        phone = values.get(PREFIX_STUDENT_PHONE)
        parent_phone = values.get(PREFIX_PARENT_PHONE)
        descriptor = EditStudentDescriptor(
            name=_optional(StudentName, values.get(PREFIX_STUDENT_NAME)),
            phone=Phone(phone) if phone is not None else None,
            parent_name=_optional(ParentName, values.get(PREFIX_PARENT_NAME)),
            parent_phone=Phone(parent_phone) if parent_phone is not None else None,
        )
        if not descriptor.is_any_field_edited:
            raise ParseError(MESSAGE_NOT_EDITED)
        return EditStudentCommand(index, descriptor)

    def _parse_edit_lesson(self, args: str) -> EditLessonCommand:
        preamble, values = tokenize(args, LESSON_PREFIXES)
        if not preamble or len(preamble.split()) != 1:
            raise self._invalid_format("edit -l")
        index = parse_index(preamble)

        descriptor = EditLessonDescriptor(
            name=_optional(LessonName, values.get(PREFIX_LESSON_NAME)),
            capacity=_optional(Capacity, values.get(PREFIX_CAPACITY)),
            price=_optional(Price, values.get(PREFIX_PRICE)),
            timing=_optional(Timing, values.get(PREFIX_TIMING)),
        )
        if not descriptor.is_any_field_edited:
            raise ParseError(MESSAGE_NOT_EDITED)
        return EditLessonCommand(index, descriptor)


def _optional(value_type, text: Optional[str]):
    """Build ``value_type(text)``; a missing prefix gives None."""
    if text is None:
        return None
    return value_type(text)
