"""Tests for the task detail endpoint."""

import pytest

from api.tasks.item import handler
from tests.utils.factories import create_task_record
from tests.utils.helpers import auth_headers, call_handler


@pytest.fixture
def record(tasks_table):
    row = create_task_record("u1", title="Buy milk", status="pending", priority="low")
    tasks_table.rows.append(row)
    return row


@pytest.mark.unit
def test_get_task(record, signed_in):
    status, _, body = call_handler(handler, "GET", f"/api/tasks/item?id={record['id']}", headers=auth_headers())

    assert status == 200
    assert body["task"]["id"] == record["id"]
    assert body["task"]["status_label"] == "Pending"


@pytest.mark.unit
def test_get_missing_id(fake_supabase, signed_in):
    status, _, body = call_handler(handler, "GET", "/api/tasks/item", headers=auth_headers())

    assert status == 400
    assert body["error"] == "Missing task id"


@pytest.mark.unit
def test_get_unknown_task(fake_supabase, signed_in):
    status, _, body = call_handler(handler, "GET", "/api/tasks/item?id=nope", headers=auth_headers())

    assert status == 404
    assert body == {"error": "task not found"}


@pytest.mark.unit
def test_get_requires_sign_in(record, signed_out):
    status, _, body = call_handler(handler, "GET", f"/api/tasks/item?id={record['id']}")

    assert status == 401
    assert body["redirect"] == "/sign-in"


@pytest.mark.unit
def test_patch_status(record, tasks_table, signed_in):
    status, _, body = call_handler(
        handler, "PATCH", f"/api/tasks/item?id={record['id']}",
        body={"status": "completed"}, headers=auth_headers(),
    )

    assert status == 200
    assert body["task"]["status"] == "completed"
    assert tasks_table.rows[0]["status"] == "completed"
    assert tasks_table.rows[0]["title"] == "Buy milk"


@pytest.mark.unit
def test_patch_invalid_status(record, signed_in):
    status, _, _ = call_handler(
        handler, "PATCH", f"/api/tasks/item?id={record['id']}",
        body={"status": "archived"}, headers=auth_headers(),
    )

    assert status == 400


@pytest.mark.unit
def test_put_edits_task(record, signed_in):
    status, _, body = call_handler(
        handler, "PUT", f"/api/tasks/item?id={record['id']}",
        body={"title": "Buy oat milk", "description": "", "priority": "high", "due_date": "2024-12-24"},
        headers=auth_headers(),
    )

    assert status == 200
    assert body["task"]["title"] == "Buy oat milk"
    assert body["task"]["priority"] == "high"
    assert body["task"]["due_date"] == "2024-12-24"
    assert body["task"]["status"] == "pending"


@pytest.mark.unit
def test_put_store_failure(record, tasks_table, signed_in):
    tasks_table.fail = ConnectionError("network down")

    status, _, body = call_handler(
        handler, "PUT", f"/api/tasks/item?id={record['id']}",
        body={"title": "Buy oat milk"}, headers=auth_headers(),
    )

    assert status == 502


@pytest.mark.unit
def test_delete_task(record, tasks_table, signed_in):
    status, _, body = call_handler(
        handler, "DELETE", f"/api/tasks/item?id={record['id']}", headers=auth_headers()
    )

    assert status == 200
    assert body == {"ok": True, "redirect": "/"}
    assert tasks_table.rows == []


@pytest.mark.unit
def test_delete_is_idempotent(fake_supabase, signed_in):
    status, _, body = call_handler(handler, "DELETE", "/api/tasks/item?id=nope", headers=auth_headers())

    assert status == 200
    assert body["ok"] is True


@pytest.mark.unit
def test_put_wrong_title_type(record, tasks_table, signed_in):
    status, _, body = call_handler(
        handler, "PUT", f"/api/tasks/item?id={record['id']}",
        body={"title": 42}, headers=auth_headers(),
    )

    assert status == 400
    assert body["error"] == "Title must be a string"
    assert tasks_table.rows[0]["title"] == "Buy milk"


@pytest.mark.unit
def test_patch_wrong_status_type(record, signed_in):
    status, _, _ = call_handler(
        handler, "PATCH", f"/api/tasks/item?id={record['id']}",
        body={"status": ["completed"]}, headers=auth_headers(),
    )

    assert status == 400
