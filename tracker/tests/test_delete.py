from datetime import date

from fastapi import status
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from tracker.models import (
    Announcement,
    AnnouncementScope,
    Assessment,
    AssessmentKind,
    AuditLogEntry,
    Enrollment,
    SchoolClass,
    Score,
    Subject,
    SubjectPhoto,
)
from tracker.services.resources import ResourceConfig


def audit_rows(db_session, **filters):
    query = db_session.query(AuditLogEntry)
    for name, value in filters.items():
        query = query.filter(getattr(AuditLogEntry, name) == value)
    return query.all()


def test_owner_deletes_subject_and_audit_is_written(client, db_session, seed_data, owner_headers):
    teacher_id = seed_data["teacher"].id

    response = client.delete("/subjects/s1", headers=owner_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    assert db_session.query(Subject).filter(Subject.id == "s1").count() == 0

    entries = audit_rows(db_session, entity="subject", entity_id="s1")
    assert len(entries) == 1
    entry = entries[0]
    assert entry.action == "DELETE"
    assert entry.user_id == teacher_id
    assert entry.owner_id == teacher_id
    assert entry.meta == {"name": "Math", "code": "MTH1"}


def test_non_owner_gets_not_found_and_subject_survives(client, db_session, seed_data, other_headers):
    response = client.delete("/subjects/s1", headers=other_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Subject not found"}
    assert db_session.query(Subject).filter(Subject.id == "s1").count() == 1
    assert audit_rows(db_session) == []


def test_deleting_missing_id_twice_is_not_found_both_times(client, db_session, seed_data, owner_headers):
    for _ in range(2):
        response = client.delete("/subjects/does-not-exist", headers=owner_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Subject not found"}
    assert audit_rows(db_session) == []


def test_storage_failure_on_delete_writes_no_audit(client, db_session, seed_data, owner_headers, monkeypatch):
    def failing_delete(self, *args, **kwargs):
        raise OperationalError("DELETE FROM subjects", {}, Exception("database is locked"))

    monkeypatch.setattr(Query, "delete", failing_delete)

    response = client.delete("/subjects/s1", headers=owner_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Failed to delete subject"}
    monkeypatch.undo()
    assert db_session.query(Subject).filter(Subject.id == "s1").count() == 1
    assert audit_rows(db_session) == []


def test_unexpected_fault_is_reported_generically(client, db_session, seed_data, owner_headers, monkeypatch):
    def broken_snapshot(self, obj):
        raise RuntimeError("snapshot exploded")

    monkeypatch.setattr(ResourceConfig, "snapshot", broken_snapshot)

    response = client.delete("/subjects/s1", headers=owner_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
    assert "snapshot exploded" not in response.text
    assert db_session.query(Subject).filter(Subject.id == "s1").count() == 1
    assert audit_rows(db_session) == []


def test_subject_delete_cascades_to_dependants(client, db_session, seed_data, owner_headers):
    teacher_id = seed_data["teacher"].id
    class_id = seed_data["class"].id
    student_id = seed_data["student"].id

    second_class = SchoolClass(name="Grade 7 - Bonifacio", year_level=7, subject_id="s1", owner_id=teacher_id)
    assessment = Assessment(
        class_id=class_id,
        title="Fractions Quiz",
        type=AssessmentKind.QUIZ,
        date=date(2026, 9, 1),
        max_score=20,
        owner_id=teacher_id,
    )
    photo = SubjectPhoto(subject_id="s1", photo_url="https://img.example.com/math.png", owner_id=teacher_id)
    db_session.add_all([second_class, assessment, photo])
    db_session.flush()
    db_session.add_all([
        Enrollment(class_id=class_id, student_id=student_id, owner_id=teacher_id),
        Score(
            assessment_id=assessment.id,
            student_id=student_id,
            raw_score=18,
            last_updated_by=teacher_id,
            owner_id=teacher_id,
        ),
    ])
    db_session.commit()

    response = client.delete("/subjects/s1", headers=owner_headers)
    assert response.status_code == status.HTTP_200_OK

    assert db_session.query(SchoolClass).filter(SchoolClass.subject_id == "s1").count() == 0
    assert db_session.query(SubjectPhoto).filter(SubjectPhoto.subject_id == "s1").count() == 0
    assert db_session.query(Assessment).count() == 0
    assert db_session.query(Score).count() == 0
    assert db_session.query(Enrollment).count() == 0
    assert len(audit_rows(db_session, action="DELETE")) == 1


def test_class_delete_snapshots_parent_subject_name(client, db_session, seed_data, owner_headers):
    class_id = seed_data["class"].id

    response = client.delete(f"/classes/{class_id}", headers=owner_headers)

    assert response.status_code == status.HTTP_200_OK
    entry = audit_rows(db_session, entity="class")[0]
    assert entry.entity_id == class_id
    assert entry.meta == {"name": "Grade 7 - Rizal", "subject": "Math", "year_level": 7}
    assert db_session.query(Subject).filter(Subject.id == "s1").count() == 1


def test_student_delete_snapshots_display_name(client, db_session, seed_data, owner_headers):
    student_id = seed_data["student"].id

    response = client.delete(f"/students/{student_id}", headers=owner_headers)

    assert response.status_code == status.HTTP_200_OK
    entry = audit_rows(db_session, entity="student")[0]
    assert entry.meta == {"name": "Cruz, Ana", "year_level": 7, "external_id": "LRN-001"}


def test_each_entity_type_hides_foreign_rows(client, db_session, seed_data, other_headers):
    teacher_id = seed_data["teacher"].id
    class_id = seed_data["class"].id
    assessment = Assessment(
        class_id=class_id,
        title="Unit Test",
        type=AssessmentKind.EXAM,
        date=date(2026, 9, 15),
        max_score=50,
        owner_id=teacher_id,
    )
    announcement = Announcement(
        scope=AnnouncementScope.SCHOOL,
        title="Sports fest",
        body="No classes on Friday",
        owner_id=teacher_id,
    )
    photo = SubjectPhoto(subject_id="s1", photo_url="https://img.example.com/board.png", owner_id=teacher_id)
    db_session.add_all([assessment, announcement, photo])
    db_session.commit()

    targets = {
        f"/classes/{class_id}": "Class not found",
        f"/students/{seed_data['student'].id}": "Student not found",
        f"/assessments/{assessment.id}": "Assessment not found",
        f"/announcements/{announcement.id}": "Announcement not found",
        f"/subjects/photos/{photo.id}": "Photo not found",
    }
    for url, message in targets.items():
        response = client.delete(url, headers=other_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND, url
        assert response.json() == {"error": message}

    assert db_session.query(Assessment).count() == 1
    assert db_session.query(Announcement).count() == 1
    assert db_session.query(SubjectPhoto).count() == 1
    assert audit_rows(db_session) == []


def test_photo_delete_is_audited_with_subject_name(client, db_session, seed_data, owner_headers):
    photo = SubjectPhoto(
        subject_id="s1",
        photo_url="https://img.example.com/board.png",
        caption="Board work",
        owner_id=seed_data["teacher"].id,
    )
    db_session.add(photo)
    db_session.commit()
    photo_id = photo.id

    response = client.delete(f"/subjects/photos/{photo_id}", headers=owner_headers)

    assert response.status_code == status.HTTP_200_OK
    entry = audit_rows(db_session, entity="subject_photo")[0]
    assert entry.entity_id == photo_id
    assert entry.meta == {"subject_name": "Math", "caption": "Board work"}
    assert db_session.query(Subject).count() == 1
