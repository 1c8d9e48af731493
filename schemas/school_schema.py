# schemas/school_schema.py
"""
Core school tables: students, teachers, classes, subjects, guardians.

Ids are opaque TEXT keys generated by the application, so the same rows
can move between SQLite, Postgres and the hosted backend unchanged.
"""
from __future__ import annotations
import logging
from sqlalchemy.engine import Engine
from sqlalchemy import text as sa_text
from core.schema_registry import register

logger = logging.getLogger(__name__)


@register("school")
def install_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS teachers (
                id TEXT PRIMARY KEY,
                teacher_no TEXT,
                full_name TEXT NOT NULL,
                phone TEXT,
                email TEXT,
                qualifications TEXT,
                hire_date TEXT,
                photo_path TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))

        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS classes (
                id TEXT PRIMARY KEY,
                grade TEXT NOT NULL,
                section TEXT NOT NULL,
                academic_year TEXT,
                class_teacher_id TEXT REFERENCES teachers(id) ON DELETE SET NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))

        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS students (
                id TEXT PRIMARY KEY,
                admission_no TEXT UNIQUE NOT NULL,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                dob TEXT,
                gender TEXT CHECK (gender IN ('Male', 'Female', 'Other')),
                class_id TEXT REFERENCES classes(id) ON DELETE SET NULL,
                teacher_id TEXT REFERENCES teachers(id) ON DELETE SET NULL,
                roll_no TEXT,
                photo_path TEXT,
                notes TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS idx_students_last_name ON students(last_name)"))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS idx_students_class_id ON students(class_id)"))

        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS subjects (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                code TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))

        # declared shape only; no screen writes guardians yet
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS guardians (
                id TEXT PRIMARY KEY,
                full_name TEXT NOT NULL,
                relationship TEXT,
                phone TEXT,
                email TEXT,
                address TEXT
            )
        """))
    logger.info("Installed school tables")
