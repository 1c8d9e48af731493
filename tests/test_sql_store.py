from pathlib import Path

import pytest
from sqlalchemy import text as sa_text
from sqlalchemy.exc import IntegrityError

from core.store import RecordNotFoundError, UnknownCollectionError


def _seed(store):
    t = store.create_entity("teachers", {"full_name": "Sarah Connor", "teacher_no": "T001"})
    c = store.create_entity("classes", {"grade": "5", "section": "A", "academic_year": "2024", "class_teacher_id": t["id"]})
    s = store.create_entity("students", {
        "admission_no": "ADM001", "first_name": "John", "last_name": "Doe",
        "gender": "Male", "class_id": c["id"],
    })
    return t, c, s


def test_create_returns_persisted_row_with_generated_id(sql_store):
    row = sql_store.create_entity("teachers", {"full_name": "Ada Byron", "email": "ada@school.edu"})
    assert row["id"]
    assert row["full_name"] == "Ada Byron"
    assert row["email"] == "ada@school.edu"


def test_joins_computed_on_read(sql_store):
    t, c, s = _seed(sql_store)
    students = sql_store.fetch_students()
    assert students[0]["classes"] == {"grade": "5", "section": "A"}
    classes = sql_store.fetch_classes()
    assert classes[0]["teacher_name"] == "Sarah Connor"


def test_class_without_teacher_has_no_teacher_name(sql_store):
    sql_store.create_entity("classes", {"grade": "9", "section": "Z"})
    assert sql_store.fetch_classes()[0]["teacher_name"] is None


def test_fetch_ordering(sql_store):
    for last in ("Smith", "Adams", "Miller"):
        sql_store.create_entity("students", {"admission_no": f"A-{last}", "first_name": "X", "last_name": last})
    assert [s["last_name"] for s in sql_store.fetch_students()] == ["Adams", "Miller", "Smith"]


@pytest.mark.parametrize("collection,payload,fetch", [
    ("students", {"admission_no": "ADM003", "first_name": "Ann", "last_name": "Lee"}, "fetch_students"),
    ("teachers", {"full_name": "Ada Byron"}, "fetch_teachers"),
    ("classes", {"grade": "7", "section": "C"}, "fetch_classes"),
    ("subjects", {"name": "Biology", "code": "BIO"}, "fetch_subjects"),
])
def test_create_then_fetch_includes_record_once(sql_store, collection, payload, fetch):
    created = sql_store.create_entity(collection, payload)
    rows = getattr(sql_store, fetch)()
    assert [r["id"] for r in rows].count(created["id"]) == 1


def test_admission_number_unique(sql_store):
    sql_store.create_entity("students", {"admission_no": "ADM001", "first_name": "A", "last_name": "B"})
    with pytest.raises(IntegrityError):
        sql_store.create_entity("students", {"admission_no": "ADM001", "first_name": "C", "last_name": "D"})


def test_update_and_missing_id(sql_store):
    _, _, s = _seed(sql_store)
    updated = sql_store.update_entity("students", s["id"], {"notes": "Great term", "classes": {"grade": "x"}})
    assert updated["notes"] == "Great term"
    with pytest.raises(RecordNotFoundError):
        sql_store.update_entity("students", "missing", {"notes": "x"})


def test_unknown_columns_are_ignored(sql_store):
    row = sql_store.create_entity("subjects", {"name": "Art", "colour": "red"})
    assert "colour" not in row


def test_delete_is_idempotent(sql_store):
    _, _, s = _seed(sql_store)
    sql_store.delete_entity("students", s["id"])
    sql_store.delete_entity("students", s["id"])
    assert sql_store.fetch_students() == []


def test_unknown_collection_rejected(sql_store):
    with pytest.raises(UnknownCollectionError):
        sql_store.create_entity("students; DROP TABLE students", {})


def test_upload_writes_under_media_dir(sql_store):
    ref = sql_store.upload_file(b"img-bytes", "students/1_photo.jpg")
    assert ref == "students/1_photo.jpg"
    url = sql_store.get_public_url(ref)
    assert Path(url).read_bytes() == b"img-bytes"


def test_upload_outside_media_dir_refused(sql_store):
    assert sql_store.upload_file(b"x", "../escape.jpg") is None


def test_admin_user_lookup(sql_store):
    with sql_store.engine.begin() as conn:
        conn.execute(sa_text("INSERT INTO admin_user (id, username, password_hash) VALUES ('a1', 'root', 'h')"))
    assert sql_store.get_admin_user("root")["password_hash"] == "h"
    assert sql_store.get_admin_user("ghost") is None


def test_deleting_teacher_unassigns_their_class(sql_store):
    t, c, _ = _seed(sql_store)
    sql_store.delete_entity("teachers", t["id"])
    cls = sql_store.fetch_classes()[0]
    assert cls["class_teacher_id"] is None
    assert cls["teacher_name"] is None
