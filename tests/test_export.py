from io import BytesIO

from openpyxl import load_workbook

from lms_grades.core.security import create_access_token
from lms_grades.services.export import HEADERS, slugify


def auth_header(user_id: int) -> dict:
    token = create_access_token({"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


def export(client, seed_data, **params):
    r = client.get(
        f"/teachers/classrooms/{seed_data['math']}/grades/export",
        headers=auth_header(seed_data["teacher"]),
        params=params,
    )
    assert r.status_code == 200, r.text
    sheet = load_workbook(BytesIO(r.content)).active
    rows = list(sheet.iter_rows(values_only=True))
    return r, rows[0], rows[1:]


def test_export_headers_and_filename(client, seed_data):
    r, header, _ = export(client, seed_data)

    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert 'filename="grades-math-7a-2024-01-15_12-00-00.xlsx"' in r.headers["content-disposition"]
    assert "no-store" in r.headers["cache-control"]
    assert list(header) == HEADERS


def test_export_contains_real_latest_rows_only(client, seed_data):
    _, _, rows = export(client, seed_data)

    # newest submission first; carol's missed essay is never exported
    assert [(row[0], row[2]) for row in rows] == [
        ("Bob Tran", "Essay 2"),
        ("Alice Nguyen", "Quiz 1"),
        ("Alice Nguyen", "Essay 1"),
        ("Bob Tran", "Essay 1"),
    ]
    alice_quiz = rows[1]
    assert alice_quiz[6] is None
    assert alice_quiz[7] == "Awaiting grading"
    assert alice_quiz[5] == "2024-01-13 00:00:00"
    assert rows[2][8] == "Good"


def test_export_sort_by_grade(client, seed_data):
    _, _, rows = export(client, seed_data, sort="grade")
    assert [row[6] for row in rows] == [10, 8, 6, None]


def test_export_status_filter(client, seed_data):
    _, _, rows = export(client, seed_data, status="ungraded")
    assert [(row[0], row[2]) for row in rows] == [("Alice Nguyen", "Quiz 1")]

    _, _, rows = export(client, seed_data, status="graded")
    assert all(row[7] == "Graded" for row in rows)
    assert len(rows) == 3


def test_export_one_assignment(client, seed_data):
    _, _, rows = export(client, seed_data, assignment_id=seed_data["essay1"])
    assert {row[2] for row in rows} == {"Essay 1"}
    assert len(rows) == 2


def test_export_limit_and_search(client, seed_data):
    _, _, rows = export(client, seed_data, limit=1)
    assert len(rows) == 1

    _, _, rows = export(client, seed_data, search="bob")
    assert {row[0] for row in rows} == {"Bob Tran"}


def test_other_teacher_cannot_export(client, seed_data):
    r = client.get(
        f"/teachers/classrooms/{seed_data['math']}/grades/export",
        headers=auth_header(seed_data["other_teacher"]),
    )
    assert r.status_code == 403


def test_slugify():
    assert slugify("Math 7A") == "math-7a"
    assert slugify("Toán Lớp 7") == "toan-lop-7"
    assert slugify("!!!") == "classroom"
