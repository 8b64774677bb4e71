"""Service for the roster of registered students."""

from __future__ import annotations

from uuid import uuid4

from cbt_app.core.models import Student


class StudentRoster:
    """Keeps registered students and groups them by class."""

    def __init__(self) -> None:
        self._students: dict[str, Student] = {}

    def register_student(self, name: str, class_name: str, student_id: str | None = None) -> Student:
        """Add a student to the roster and return the stored entry."""
        cleaned_name = name.strip()
        cleaned_class = class_name.strip()
        if not cleaned_name:
            raise ValueError("Student name must not be empty.")
        if not cleaned_class:
            raise ValueError("Student class must not be empty.")
        if student_id is not None and student_id in self._students:
            raise ValueError(f"Student id {student_id!r} already exists.")

        entry = Student(id=student_id or uuid4().hex, name=cleaned_name, class_name=cleaned_class)
        self._students[entry.id] = entry
        return entry

    def get_student(self, student_id: str) -> Student | None:
        return self._students.get(student_id)

    def get_students(self) -> list[Student]:
        return sorted(self._students.values(), key=lambda s: (s.class_name, s.name))

    def students_in_class(self, class_name: str) -> list[Student]:
        return [s for s in self.get_students() if s.class_name == class_name]

    def remove_student(self, student_id: str) -> None:
        self._students.pop(student_id, None)
