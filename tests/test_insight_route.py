"""Tests for POST /api/v1/generate-insight."""

from __future__ import annotations

from mindwell.shared.errors import OracleError

from tests.conftest import OWNER


def _post(client, headers, **body):
    return client.post("/api/v1/generate-insight", json=body, headers=headers)


def test_generates_and_stores_insight(client, workflow, journals, auth_headers) -> None:
    entry = workflow.submit_entry(OWNER, "Had a rough day")

    resp = _post(client, auth_headers, id=entry.id, content=entry.content)

    assert resp.status_code == 200
    assert resp.json() == {
        "message": "AI insight generated and updated successfully!",
        "aiInsight": "Consider a short walk to reset.",
    }
    assert journals.rows[entry.id].ai_insight == "Consider a short walk to reset."


def test_already_annotated_entry_skips_generation(client, workflow, journals, generator, auth_headers) -> None:
    entry = workflow.submit_entry(OWNER, "Had a rough day")
    _post(client, auth_headers, id=entry.id, content=entry.content)
    generator.reply = "Something else entirely."

    resp = _post(client, auth_headers, id=entry.id, content=entry.content)

    assert resp.status_code == 200
    assert resp.json()["aiInsight"] == "Consider a short walk to reset."
    assert len(generator.calls) == 1


def test_oracle_failure_is_bad_gateway(client, workflow, journals, generator, auth_headers) -> None:
    generator.error = OracleError("AI insight generation failed: overloaded")
    entry = workflow.submit_entry(OWNER, "Had a rough day")

    resp = _post(client, auth_headers, id=entry.id, content=entry.content)

    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"
    assert journals.rows[entry.id].ai_insight is None


def test_update_failure_is_database_error(client, workflow, journals, auth_headers) -> None:
    entry = workflow.submit_entry(OWNER, "Had a rough day")
    journals.fail_annotate = True

    resp = _post(client, auth_headers, id=entry.id, content=entry.content)

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "DATABASE_ERROR"
    assert journals.rows[entry.id].ai_insight is None


def test_unknown_entry_is_not_found(client, generator, auth_headers) -> None:
    resp = _post(client, auth_headers, id="missing", content="Had a rough day")

    assert resp.status_code == 404
    assert generator.calls == []


def test_other_owners_entry_is_not_found(client, workflow, generator, other_headers) -> None:
    entry = workflow.submit_entry(OWNER, "private")

    resp = _post(client, other_headers, id=entry.id, content="private")

    assert resp.status_code == 404
    assert generator.calls == []


def test_blank_fields_are_validation_errors(client, generator, auth_headers) -> None:
    assert _post(client, auth_headers, id="", content="text").status_code == 400
    assert _post(client, auth_headers, id="abc", content="  ").status_code == 400
    assert _post(client, auth_headers, id="abc").status_code == 400
    assert generator.calls == []


def test_malformed_body_is_parse_error(client, auth_headers) -> None:
    resp = client.post(
        "/api/v1/generate-insight",
        content=b"id=abc&content=hi",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "PARSE_ERROR"


def test_insight_is_generated_from_stored_text(client, workflow, journals, generator, auth_headers) -> None:
    entry = workflow.submit_entry(OWNER, "Had a rough day")

    resp = _post(client, auth_headers, id=entry.id, content="Something I never wrote")

    assert resp.status_code == 200
    assert generator.calls == ["Had a rough day"]
    assert journals.rows[entry.id].ai_insight == "Consider a short walk to reset."


def test_empty_stored_insight_counts_as_annotated(client, workflow, journals, generator, auth_headers) -> None:
    entry = workflow.submit_entry(OWNER, "Had a rough day")
    journals.rows[entry.id] = entry.model_copy(update={"ai_insight": ""})

    resp = _post(client, auth_headers, id=entry.id, content=entry.content)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Journal entry already has an AI insight.", "aiInsight": ""}
    assert generator.calls == []
    assert journals.annotate_calls == []
