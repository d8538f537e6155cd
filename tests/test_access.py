"""Tests for roles, permissions and user role assignments"""

import pytest
from httpx import AsyncClient

from sales_api.api.auth import create_access_token


async def create_role(client: AsyncClient, **overrides) -> dict:
    payload = {"businessId": 1, "title": "Host", "description": "Seats guests"}
    payload.update(overrides)
    response = await client.post("/roles", json=payload)
    assert response.status_code == 201
    return response.json()


async def create_permission(client: AsyncClient, code: str) -> dict:
    response = await client.post("/permissions", json={"code": code})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_role_lifecycle(admin_client: AsyncClient):
    role = await create_role(admin_client)
    assert role["status"] == "active"
    assert role["title"] == "Host"

    response = await admin_client.get(f"/roles/{role['id']}")
    assert response.status_code == 200
    assert response.json() == role

    response = await admin_client.patch(
        f"/roles/{role['id']}",
        json={"title": "Head host", "description": None, "status": "INACTIVE"},
    )
    assert response.status_code == 200
    patched = response.json()
    assert patched["title"] == "Head host"
    assert patched["description"] is None
    assert patched["status"] == "inactive"

    response = await admin_client.delete(f"/roles/{role['id']}")
    assert response.status_code == 200

    response = await admin_client.get(f"/roles/{role['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_role_patch_ignores_blank_title(admin_client: AsyncClient):
    role = await create_role(admin_client)

    response = await admin_client.patch(f"/roles/{role['id']}", json={"title": " ", "status": "retired"})
    assert response.json() == role


@pytest.mark.asyncio
async def test_list_roles(admin_client: AsyncClient):
    await create_role(admin_client, title="Server")
    await create_role(admin_client, title="Chef", status="inactive")
    await create_role(admin_client, title="Bartender", businessId=2)

    body = (await admin_client.get("/roles")).json()
    assert [r["title"] for r in body["data"]] == ["Bartender", "Chef", "Server"]

    body = (await admin_client.get("/roles", params={"filterByStatus": "inactive"})).json()
    assert [r["title"] for r in body["data"]] == ["Chef"]

    body = (await admin_client.get("/roles", params={"filterByBusinessId": 2})).json()
    assert [r["title"] for r in body["data"]] == ["Bartender"]

    body = (await admin_client.get("/roles", params={"filterByTitle": "er", "sortDirection": "desc"})).json()
    assert [r["title"] for r in body["data"]] == ["Server", "Bartender"]


@pytest.mark.asyncio
async def test_missing_role(admin_client: AsyncClient):
    assert (await admin_client.get("/roles/999")).status_code == 404
    assert (await admin_client.patch("/roles/999", json={"title": "x"})).status_code == 404
    assert (await admin_client.delete("/roles/999")).status_code == 404
    assert (await admin_client.get("/roles/999/permissions")).status_code == 404


@pytest.mark.asyncio
async def test_duplicate_permission_code(admin_client: AsyncClient):
    await create_permission(admin_client, "tables:write")

    response = await admin_client.post("/permissions", json={"code": "tables:write"})
    assert response.status_code == 409

    body = (await admin_client.get("/permissions", params={"filterByCode": "tables"})).json()
    assert [p["code"] for p in body["data"]] == ["tables:write"]


@pytest.mark.asyncio
async def test_blank_permission_code_is_rejected(admin_client: AsyncClient):
    for code in ("", "   "):
        response = await admin_client.post("/permissions", json={"code": code})
        assert response.status_code == 422

    body = (await admin_client.get("/permissions")).json()
    assert body["total"] == 0


@pytest.mark.asyncio
async def test_permission_code_is_stripped(admin_client: AsyncClient):
    created = await create_permission(admin_client, "  tables:read ")
    assert created["code"] == "tables:read"

    response = await admin_client.post("/permissions", json={"code": "tables:read"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_grant_and_revoke_permission(admin_client: AsyncClient):
    role = await create_role(admin_client)
    read = await create_permission(admin_client, "reservations:read")
    write = await create_permission(admin_client, "reservations:write")

    for permission in (write, read):
        response = await admin_client.post(
            f"/roles/{role['id']}/permissions", json={"permissionId": permission["id"]}
        )
        assert response.status_code == 201
        assert response.json()["roleId"] == role["id"]
        assert response.json()["permissionId"] == permission["id"]

    response = await admin_client.post(
        f"/roles/{role['id']}/permissions", json={"permissionId": read["id"]}
    )
    assert response.status_code == 409

    response = await admin_client.get(f"/roles/{role['id']}/permissions")
    assert [p["code"] for p in response.json()] == ["reservations:read", "reservations:write"]

    response = await admin_client.delete(f"/roles/{role['id']}/permissions/{read['id']}")
    assert response.status_code == 200

    response = await admin_client.delete(f"/roles/{role['id']}/permissions/{read['id']}")
    assert response.status_code == 404

    response = await admin_client.get(f"/roles/{role['id']}/permissions")
    assert [p["code"] for p in response.json()] == ["reservations:write"]


@pytest.mark.asyncio
async def test_grant_unknown_permission(admin_client: AsyncClient):
    role = await create_role(admin_client)

    response = await admin_client.post(f"/roles/{role['id']}/permissions", json={"permissionId": 999})
    assert response.status_code == 404

    response = await admin_client.post(f"/roles/{role['id']}/permissions")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_assign_and_unassign_role(admin_client: AsyncClient, test_user):
    role = await create_role(admin_client)

    response = await admin_client.post(f"/users/{test_user.id}/roles", json={"roleId": role["id"]})
    assert response.status_code == 201
    assert response.json()["userId"] == test_user.id
    assert response.json()["roleId"] == role["id"]

    response = await admin_client.post(f"/users/{test_user.id}/roles", json={"roleId": role["id"]})
    assert response.status_code == 409

    response = await admin_client.get(f"/users/{test_user.id}/roles")
    assert [r["id"] for r in response.json()] == [role["id"]]

    response = await admin_client.delete(f"/users/{test_user.id}/roles/{role['id']}")
    assert response.status_code == 200

    response = await admin_client.get(f"/users/{test_user.id}/roles")
    assert response.json() == []


@pytest.mark.asyncio
async def test_assign_to_unknown_user_or_role(admin_client: AsyncClient, test_user):
    role = await create_role(admin_client)

    response = await admin_client.post("/users/999/roles", json={"roleId": role["id"]})
    assert response.status_code == 404

    response = await admin_client.post(f"/users/{test_user.id}/roles", json={"roleId": 999})
    assert response.status_code == 404

    response = await admin_client.get("/users/999/roles")
    assert response.status_code == 404

    response = await admin_client.delete(f"/users/{test_user.id}/roles/{role['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_deleting_role_removes_its_links(admin_client: AsyncClient, test_user):
    role = await create_role(admin_client)
    permission = await create_permission(admin_client, "menu:edit")
    await admin_client.post(f"/roles/{role['id']}/permissions", json={"permissionId": permission["id"]})
    await admin_client.post(f"/users/{test_user.id}/roles", json={"roleId": role["id"]})

    response = await admin_client.delete(f"/roles/{role['id']}")
    assert response.status_code == 200

    response = await admin_client.get(f"/users/{test_user.id}/roles")
    assert response.json() == []

    # The permission itself survives
    body = (await admin_client.get("/permissions")).json()
    assert [p["code"] for p in body["data"]] == ["menu:edit"]


@pytest.mark.asyncio
async def test_manager_can_manage_roles(manager_client: AsyncClient):
    response = await manager_client.get("/roles")
    assert response.status_code == 200
    assert [r["title"] for r in response.json()["data"]] == ["Manager"]

    await create_role(manager_client, title="Runner")


@pytest.mark.asyncio
async def test_staff_without_permission_is_forbidden(authenticated_client: AsyncClient, test_user):
    assert (await authenticated_client.get("/roles")).status_code == 403
    assert (await authenticated_client.get("/permissions")).status_code == 403
    assert (await authenticated_client.get(f"/users/{test_user.id}/roles")).status_code == 403

    response = await authenticated_client.post("/roles", json={"businessId": 1, "title": "Owner"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_inactive_role_grants_nothing(client: AsyncClient, test_admin_user, test_manager_user):
    admin_token = create_access_token(test_admin_user)
    manager_token = create_access_token(test_manager_user)

    manager_headers = {"Authorization": f"Bearer {manager_token}"}
    admin_headers = {"Authorization": f"Bearer {admin_token}"}

    assert (await client.get("/roles", headers=manager_headers)).status_code == 200

    roles = (await client.get(f"/users/{test_manager_user.id}/roles", headers=admin_headers)).json()
    response = await client.patch(
        f"/roles/{roles[0]['id']}", json={"status": "inactive"}, headers=admin_headers
    )
    assert response.json()["status"] == "inactive"

    assert (await client.get("/roles", headers=manager_headers)).status_code == 403


@pytest.mark.asyncio
async def test_role_endpoints_require_authentication(client: AsyncClient):
    assert (await client.get("/roles")).status_code == 401
    assert (await client.get("/permissions")).status_code == 401
