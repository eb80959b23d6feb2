from collections import defaultdict
from datetime import date

import pytest
from fastapi import status

from tracker.models import AuditLogEntry, GradingPeriod
from tracker.services.grading_periods import next_school_year, school_year_for


@pytest.fixture()
def school_year(client, owner_headers):
    response = client.post("/grading-periods/create-school-year", headers=owner_headers)
    assert response.status_code == status.HTTP_200_OK
    return response.json()


def test_school_year_boundaries():
    assert school_year_for(date(2026, 7, 1)) == "2026-2027"
    assert school_year_for(date(2026, 6, 30)) == "2025-2026"
    assert school_year_for(date(2026, 3, 1), start_month=6) == "2025-2026"
    assert next_school_year(date(2026, 10, 19)) == "2027-2028"
    assert next_school_year(date(2027, 1, 5)) == "2027-2028"


def test_create_school_year(client, db_session, seed_data, owner_headers, school_year):
    expected = next_school_year(date.today())
    assert school_year["school_year"] == expected
    assert school_year["message"] == f"School year {expected} created successfully"
    assert [p["period_number"] for p in school_year["grading_periods"]] == [1, 2, 3, 4]
    assert school_year["grading_periods"][0]["name"] == "First Quarter"

    overview = client.get("/grading-periods", params={"school_year": expected}, headers=owner_headers).json()
    assert len(overview["grading_periods"]) == 4
    assert len(overview["assessment_types"]) == 12

    weights = defaultdict(float)
    for assessment_type in overview["assessment_types"]:
        weights[assessment_type["grading_period_id"]] += assessment_type["percentage_weight"]
    assert set(weights.values()) == {100.0}

    creates = db_session.query(AuditLogEntry).filter(AuditLogEntry.action == "CREATE").all()
    assert sorted({entry.entity for entry in creates}) == ["assessment_type", "grading_period"]
    assert len(creates) == 16


def test_school_year_cannot_be_created_twice(client, owner_headers, school_year):
    response = client.post("/grading-periods/create-school-year", headers=owner_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": f"School year {school_year['school_year']} already exists"}


def test_default_listing_uses_current_school_year(client, seed_data, owner_headers):
    response = client.get("/grading-periods", headers=owner_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "school_year": school_year_for(date.today()),
        "grading_periods": [],
        "assessment_types": [],
    }


def test_set_current_period(client, db_session, seed_data, owner_headers, school_year):
    second, third = school_year["grading_periods"][1], school_year["grading_periods"][2]

    client.post(f"/grading-periods/{second['id']}/set-current", headers=owner_headers)
    response = client.post(f"/grading-periods/{third['id']}/set-current", headers=owner_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Third Quarter set as current grading period"
    assert response.json()["period"]["is_current"] is True

    db_session.expire_all()
    current = db_session.query(GradingPeriod).filter(GradingPeriod.is_current.is_(True)).all()
    assert [period.id for period in current] == [third["id"]]

    entry = (
        db_session.query(AuditLogEntry)
        .filter(AuditLogEntry.action == "UPDATE", AuditLogEntry.entity_id == third["id"])
        .one()
    )
    assert entry.meta["action"] == "set_current"
    assert entry.meta["changes"] == {"is_current": True}


def test_set_current_on_foreign_period_is_not_found(client, seed_data, other_headers, school_year):
    period_id = school_year["grading_periods"][0]["id"]

    response = client.post(f"/grading-periods/{period_id}/set-current", headers=other_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Grading period not found"}


def test_weight_cap_is_per_grading_period(client, seed_data, owner_headers, school_year):
    period_id = school_year["grading_periods"][0]["id"]

    response = client.post(
        "/assessment-types",
        json={"name": "Recitation", "percentage_weight": 10, "grading_period_id": period_id},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Total percentage would be 110.0%. Maximum is 100%."}

    response = client.post(
        "/assessment-types",
        json={"name": "Recitation", "percentage_weight": 10},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_200_OK


def test_assessment_type_names_are_unique_per_period(client, seed_data, owner_headers, school_year):
    period_id = school_year["grading_periods"][0]["id"]

    response = client.post(
        "/assessment-types",
        json={"name": "Quiz", "percentage_weight": 1, "grading_period_id": period_id, "is_active": False},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "An assessment type with this name already exists"}

    response = client.post("/assessment-types", json={"name": "Quiz", "percentage_weight": 30}, headers=owner_headers)
    assert response.status_code == status.HTTP_200_OK


def test_assessment_type_under_foreign_period_is_not_found(client, seed_data, other_headers, school_year):
    period_id = school_year["grading_periods"][0]["id"]

    response = client.post(
        "/assessment-types",
        json={"name": "Project", "percentage_weight": 20, "grading_period_id": period_id},
        headers=other_headers,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Grading period not found"}
