"""PUT semantics — path id wins, absent fields stay, present lists replace."""


async def test_put_uses_path_id(client):
    await client.post("/api/v1/households", json={"name": "Hertsch"})
    await client.post("/api/v1/households", json={"name": "Schalsky"})

    res = await client.put("/api/v1/households/2", json={"id": 1, "name": "Schalsky II"})

    assert res.status_code == 200
    assert res.json()["id"] == 2
    assert (await client.get("/api/v1/households/1")).json()["name"] == "Hertsch"
    assert (await client.get("/api/v1/households/2")).json()["name"] == "Schalsky II"


async def test_put_partial_body_keeps_other_fields(client):
    await client.post("/api/v1/shoppinglists", json={"name": "Lischte"})
    await client.post(
        "/api/v1/items",
        json={"name": "Tomato", "quantity": 4, "shoppingListId": 1},
    )

    res = await client.put("/api/v1/items/1", json={"isChecked": True})

    assert res.status_code == 200
    body = res.json()
    assert body["isChecked"] is True
    assert body["quantity"] == 4
    assert body["shoppingListId"] == 1


async def test_put_user_list_replaces_membership(client):
    await client.post("/api/v1/households", json={"name": "Schalsky"})
    for username in ("lill", "tom", "sofi"):
        await client.post("/api/v1/users", json={"username": username, "householdId": 1})

    res = await client.put("/api/v1/households/1", json={"userIds": [3]})

    assert res.json()["userIds"] == [3]
    assert (await client.get("/api/v1/users/1")).json()["householdId"] is None
    assert (await client.get("/api/v1/users/3")).json()["householdName"] == "Schalsky"


async def test_password_never_in_user_responses(client):
    res = await client.post(
        "/api/v1/users", json={"username": "finn", "password": "test"},
    )
    assert "password" not in res.json()
    assert "passwordHash" not in res.json()
    listed = (await client.get("/api/v1/users")).json()[0]
    assert set(listed) == {
        "id", "username", "name", "enabled", "createdAt", "householdId", "householdName",
    }
