# core/entities.py
"""
Record shapes shared by the data-access layer and the screens.

Ids are opaque strings. Optional fields default to None so a model can be
built straight from a form and dumped with ``exclude_none=True`` as a
create payload.
"""
from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel

Gender = Literal["Male", "Female", "Other"]
GENDERS = ["Male", "Female", "Other"]


class Student(BaseModel):
    id: Optional[str] = None
    admission_no: str
    first_name: str
    last_name: str
    dob: Optional[str] = None
    gender: Gender = "Male"
    class_id: Optional[str] = None
    teacher_id: Optional[str] = None
    roll_no: Optional[str] = None
    photo_path: Optional[str] = None
    notes: Optional[str] = None


class Teacher(BaseModel):
    id: Optional[str] = None
    teacher_no: Optional[str] = None
    full_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    qualifications: Optional[str] = None
    hire_date: Optional[str] = None
    photo_path: Optional[str] = None


class ClassEntity(BaseModel):
    id: Optional[str] = None
    grade: str
    section: str
    academic_year: Optional[str] = None
    class_teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None  # joined at read time, never stored


class Subject(BaseModel):
    id: Optional[str] = None
    name: str
    code: Optional[str] = None


class Guardian(BaseModel):
    id: Optional[str] = None
    full_name: str
    relationship: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class AdminUser(BaseModel):
    id: Optional[str] = None
    username: str
    password_hash: Optional[str] = None


def to_payload(record: BaseModel) -> dict:
    """Dump a model as a write payload (no id, no joined fields, no Nones)."""
    return record.model_dump(exclude_none=True, exclude={"id", "teacher_name"})
