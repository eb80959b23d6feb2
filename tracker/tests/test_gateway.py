import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from tracker.core.errors import NotFound, StorageError
from tracker.models import AuditLogEntry, Subject
from tracker.services import gateway as gateway_module
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.resources import CLASSES, ENROLLMENTS, SUBJECTS


def test_delete_that_matches_no_rows_fails_closed(db_session, seed_data, monkeypatch):
    gateway = OwnedResourceGateway(db_session, seed_data["teacher"].id)
    monkeypatch.setattr(Query, "delete", lambda self, *args, **kwargs: 0)

    with pytest.raises(NotFound) as excinfo:
        gateway.delete(SUBJECTS, "s1")

    assert excinfo.value.message == "Subject not found"
    assert db_session.query(AuditLogEntry).count() == 0


def test_failed_audit_insert_rolls_back_delete(db_session, seed_data, monkeypatch):
    gateway = OwnedResourceGateway(db_session, seed_data["teacher"].id)

    def failing_record(*args, **kwargs):
        raise IntegrityError("INSERT INTO audit_log", {}, Exception("constraint failed"))

    monkeypatch.setattr(gateway_module.audit, "record", failing_record)

    with pytest.raises(StorageError) as excinfo:
        gateway.delete(SUBJECTS, "s1")

    assert excinfo.value.message == "Failed to delete subject"
    assert db_session.query(Subject).filter(Subject.id == "s1").count() == 1
    assert db_session.query(AuditLogEntry).count() == 0


def test_get_hides_rows_of_other_owners(db_session, seed_data):
    owner = OwnedResourceGateway(db_session, seed_data["teacher"].id)
    stranger = OwnedResourceGateway(db_session, seed_data["other"].id)

    assert owner.get(SUBJECTS, "s1").code == "MTH1"
    with pytest.raises(NotFound):
        stranger.get(SUBJECTS, "s1")
    assert stranger.list(CLASSES) == []


def test_composite_key_lookup(db_session, seed_data):
    gateway = OwnedResourceGateway(db_session, seed_data["teacher"].id)
    key = {"class_id": seed_data["class"].id, "student_id": seed_data["student"].id}

    enrollment = gateway.create(ENROLLMENTS, key)

    assert gateway.find(ENROLLMENTS, key) is enrollment
    entry = db_session.query(AuditLogEntry).one()
    assert entry.entity == "enrollment"
    assert entry.entity_id == key["class_id"]


def test_scalar_id_for_composite_resource_is_rejected():
    with pytest.raises(TypeError):
        ENROLLMENTS.key_values("abc")
