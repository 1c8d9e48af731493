import pytest

from core.store import RecordNotFoundError, UnknownCollectionError
from core.supabase_store import SupabaseStore


@pytest.fixture
def store(fake_supabase):
    return SupabaseStore(fake_supabase)


def test_students_embed_class_and_default_when_missing(store):
    cls = store.create_entity("classes", {"grade": "5", "section": "A"})
    store.create_entity("students", {"admission_no": "ADM1", "first_name": "J", "last_name": "Doe", "class_id": cls["id"]})
    store.create_entity("students", {"admission_no": "ADM2", "first_name": "A", "last_name": "Abbot"})
    abbot, doe = store.fetch_students()
    assert abbot["classes"] == {"grade": "N/A", "section": ""}
    assert doe["classes"] == {"grade": "5", "section": "A"}


def test_classes_flatten_teacher_name(store):
    t = store.create_entity("teachers", {"full_name": "Sarah Connor"})
    store.create_entity("classes", {"grade": "5", "section": "A", "class_teacher_id": t["id"]})
    store.create_entity("classes", {"grade": "6", "section": "B"})
    five, six = store.fetch_classes()
    assert five["teacher_name"] == "Sarah Connor"
    assert "teachers" not in five
    assert six["teacher_name"] is None


def test_create_then_fetch_includes_record_once(store):
    created = store.create_entity("teachers", {"full_name": "Ada", "teacher_name": "ignored"})
    assert "teacher_name" not in created
    assert [t["id"] for t in store.fetch_teachers()].count(created["id"]) == 1


def test_update_and_delete(store, fake_supabase):
    s = store.create_entity("subjects", {"name": "Art"})
    assert store.update_entity("subjects", s["id"], {"code": "ART"})["code"] == "ART"
    with pytest.raises(RecordNotFoundError):
        store.update_entity("subjects", "missing", {"code": "X"})
    store.delete_entity("subjects", s["id"])
    store.delete_entity("subjects", s["id"])
    assert store.fetch_subjects() == []


def test_backend_errors_propagate_from_reads(store, fake_supabase):
    fake_supabase.db["_fail"] = True
    with pytest.raises(RuntimeError):
        store.fetch_students()


def test_unknown_collection_rejected_before_any_call(store):
    with pytest.raises(UnknownCollectionError):
        store.create_entity("guardians", {})


def test_upload_and_public_url(store, fake_supabase):
    path = store.upload_file(b"jpeg", "students/1.jpg")
    assert path == "students/1.jpg"
    assert fake_supabase.storage.objects["students/1.jpg"] == b"jpeg"
    assert store.get_public_url(path).endswith("/photos/students/1.jpg")
    data_ref = "data:image/jpeg;base64,AAAA"
    assert store.get_public_url(data_ref) == data_ref


def test_upload_failure_returns_none(store, fake_supabase):
    fake_supabase.storage.fail_uploads = True
    assert store.upload_file(b"jpeg", "students/1.jpg") is None


def test_admin_user_lookup(store, fake_supabase):
    fake_supabase.db["admin_user"].append({"id": "1", "username": "root", "password_hash": "h"})
    assert store.get_admin_user("root")["username"] == "root"
    assert store.get_admin_user("ghost") is None
