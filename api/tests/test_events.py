from app.services.events import (
    UNKNOWN_PROJECT_ID,
    UNKNOWN_ROLE,
    SourcingRequest,
    extract_event_fields,
    normalize_event,
    parse_event_body,
)


def test_normalize_event_uses_nested_record_fields() -> None:
    request = normalize_event({"record": {"id": "proj_42", "role_title": "Backend Engineer"}})
    assert request == SourcingRequest(project_id="proj_42", role_title="Backend Engineer")


def test_normalize_event_uses_flattened_fields() -> None:
    request = normalize_event({"id": "proj_7", "role_title": "Data Analyst"})
    assert request == SourcingRequest(project_id="proj_7", role_title="Data Analyst")


def test_normalize_event_falls_back_to_sentinels() -> None:
    for payload in ({}, {"record": {}}, {"record": None, "other": 1}, None, [], "text"):
        request = normalize_event(payload)
        assert request.project_id == UNKNOWN_PROJECT_ID
        assert request.role_title == UNKNOWN_ROLE


def test_normalize_event_prefers_nested_over_flattened() -> None:
    request = normalize_event(
        {
            "id": "flat-id",
            "role_title": "Flat Role",
            "record": {"id": "nested-id", "role_title": "Nested Role"},
        }
    )
    assert request.project_id == "nested-id"
    assert request.role_title == "Nested Role"


def test_normalize_event_resolves_each_field_independently() -> None:
    request = normalize_event({"id": "flat-id", "role_title": "Flat Role", "record": {"id": "nested-id"}})
    assert request.project_id == "nested-id"
    assert request.role_title == "Flat Role"


def test_normalize_event_treats_blank_and_non_text_values_as_absent() -> None:
    request = normalize_event({"record": {"id": "  ", "role_title": ["x"]}, "id": 314, "role_title": True})
    assert request.project_id == "314"
    assert request.role_title == UNKNOWN_ROLE


def test_extract_event_fields_orders_record_before_flat() -> None:
    sources = extract_event_fields({"record": {"id": "a"}, "id": "b"})
    assert [source.shape for source in sources] == ["record", "flat"]
    assert extract_event_fields("not-an-object") == []


def test_parse_event_body_rejects_non_objects() -> None:
    assert parse_event_body(b'{"id": "p1"}') == {"id": "p1"}
    assert parse_event_body(b"") is None
    assert parse_event_body(b"{not json") is None
    assert parse_event_body(b"[1, 2]") is None
    assert parse_event_body(b"\xff\xfe") is None
