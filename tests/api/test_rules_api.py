"""Tests for automation rule endpoints."""

from httpx import AsyncClient

_RULE = {
    "name": "Welcome new members",
    "trigger": "members",
    "conditions": [{"field": "status", "operator": "equals", "value": "new"}],
    "actions": [{"type": "send_email", "to": "{{ email }}", "subject": "Welcome"}],
}


async def _create(client: AsyncClient, headers: dict[str, str], **overrides) -> dict:
    response = await client.post("/api/v1/rules", json={**_RULE, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_and_get_rule(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    rule = await _create(client, auth_headers, logicOperator="OR")
    assert rule["enabled"] is True
    assert rule["logic_operator"] == "OR"

    fetched = await client.get(f"/api/v1/rules/{rule['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["conditions"] == _RULE["conditions"]


async def test_create_defaults_logic_operator_to_and(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    rule = await _create(client, auth_headers)
    assert rule["logic_operator"] == "AND"


async def test_create_rejects_unknown_operator(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    body = {**_RULE, "conditions": [{"field": "x", "operator": "matches", "value": 1}]}
    response = await client.post("/api/v1/rules", json=body, headers=auth_headers)
    assert response.status_code == 422


async def test_create_rejects_invalid_action(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    body = {**_RULE, "actions": [{"type": "award_points", "memberId": "m1"}]}
    response = await client.post("/api/v1/rules", json=body, headers=auth_headers)
    assert response.status_code == 422
    assert "actions[0]" in response.text


async def test_update_disable_and_delete(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    rule = await _create(client, auth_headers)

    patched = await client.patch(f"/api/v1/rules/{rule['id']}", json={"enabled": False}, headers=auth_headers)
    assert patched.status_code == 200
    assert patched.json()["enabled"] is False
    assert patched.json()["name"] == _RULE["name"]

    deleted = await client.delete(f"/api/v1/rules/{rule['id']}", headers=auth_headers)
    assert deleted.status_code == 204
    missing = await client.get(f"/api/v1/rules/{rule['id']}", headers=auth_headers)
    assert missing.status_code == 404


async def test_update_and_delete_unknown_rule(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    assert (await client.patch("/api/v1/rules/nope", json={"enabled": False}, headers=auth_headers)).status_code == 404
    assert (await client.delete("/api/v1/rules/nope", headers=auth_headers)).status_code == 404


async def test_dry_run_reports_each_condition(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    rule = await _create(client, auth_headers)

    response = await client.post(
        f"/api/v1/rules/{rule['id']}/test",
        json={"document": {"status": "new"}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    result = response.json()
    assert result["matched"] is True
    assert result["conditions"][0]["result"] is True

    miss = await client.post(
        f"/api/v1/rules/{rule['id']}/test",
        json={"document": {"status": "old"}},
        headers=auth_headers,
    )
    assert miss.json()["matched"] is False


async def test_executions_empty_for_new_rule(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    rule = await _create(client, auth_headers)
    response = await client.get(f"/api/v1/rules/{rule['id']}/executions", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []
