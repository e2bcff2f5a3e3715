from io import BytesIO

from openpyxl import load_workbook


async def _create_template(client, **fields):
    body = {"asset_code": "A1", "name": "Chair", **fields}
    response = await client.post("/item-templates/", json=body)
    assert response.status_code == 201
    return response.json()["data"]


async def _create_location(client, name="Warehouse"):
    response = await client.post("/locations/", json={"name": name})
    assert response.status_code == 201
    return response.json()["data"]


async def _list_positions(client):
    response = await client.get("/inventory/items/")
    assert response.status_code == 200
    return [i["position"] for i in response.json()["data"]["items"]]


async def test_health_check(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_positions_are_never_reused(client):
    template = await _create_template(client)
    location = await _create_location(client)

    response = await client.post(
        "/inventory/items/batch",
        json={
            "template_id": template["id"],
            "location_id": location["id"],
            "quantities": {"Good": 2, "Regular": 1, "Bad": 0},
        },
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["created"] == 3
    assert (data["first_position"], data["last_position"]) == (1, 3)

    items = data["items"]
    assert [i["position"] for i in items] == [1, 2, 3]
    assert [i["conservation_state"] for i in items] == ["Good", "Good", "Regular"]
    assert {i["template_id"] for i in items} == {template["id"]}
    assert {i["location_id"] for i in items} == {location["id"]}

    response = await client.delete(f"/inventory/items/{items[1]['id']}")
    assert response.status_code == 204
    assert await _list_positions(client) == [1, 3]

    response = await client.post(
        "/inventory/items/batch",
        json={"template_id": template["id"], "quantities": {"Good": 1}},
    )
    assert response.status_code == 201
    assert [i["position"] for i in response.json()["data"]["items"]] == [4]
    assert await _list_positions(client) == [1, 3, 4]


async def test_zero_quantity_batch_is_rejected(client):
    template = await _create_template(client)

    response = await client.post(
        "/inventory/items/batch",
        json={"template_id": template["id"], "quantities": {"Good": 0}},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "VALIDATION_ERROR"
    assert await _list_positions(client) == []


async def test_negative_quantity_fails_request_validation(client):
    response = await client.post(
        "/inventory/items/batch",
        json={"template_id": "T1", "quantities": {"Good": -1}},
    )
    assert response.status_code == 422


async def test_duplicate_location_name_conflict(client):
    await _create_location(client)

    response = await client.post("/locations/", json={"name": "Warehouse"})
    assert response.status_code == 409
    body = response.json()
    assert body == {
        "success": False,
        "message": "Location name must be unique.",
        "error_code": "LOCATION_NAME_EXISTS",
        "details": None,
    }

    listed = (await client.get("/locations/")).json()["data"]
    assert listed["total"] == 1


async def test_clearing_item_location(client):
    template = await _create_template(client)
    location = await _create_location(client)
    created = await client.post(
        "/inventory/items/batch",
        json={
            "template_id": template["id"],
            "location_id": location["id"],
            "quantities": {"Bad": 1},
        },
    )
    item_id = created.json()["data"]["items"][0]["id"]

    response = await client.patch(f"/inventory/items/{item_id}", json={"location_id": ""})
    assert response.status_code == 200
    assert response.json()["data"]["location_id"] is None

    fetched = await client.get(f"/inventory/items/{item_id}")
    assert fetched.json()["data"]["location_id"] is None


async def test_position_cannot_be_patched(client):
    template = await _create_template(client)
    created = await client.post(
        "/inventory/items/batch",
        json={"template_id": template["id"], "quantities": {"Good": 1}},
    )
    item_id = created.json()["data"]["items"][0]["id"]

    response = await client.patch(f"/inventory/items/{item_id}", json={"position": 7})
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"

    fetched = await client.get(f"/inventory/items/{item_id}")
    assert fetched.json()["data"]["position"] == 1


async def test_missing_records(client):
    response = await client.patch("/inventory/items/nope", json={"serial": "X"})
    assert response.status_code == 404
    assert response.json()["error_code"] == "INVENTORY_ITEM_NOT_FOUND"

    response = await client.get("/item-templates/nope")
    assert response.status_code == 404
    assert response.json()["error_code"] == "ITEM_TEMPLATE_NOT_FOUND"

    response = await client.delete("/locations/nope")
    assert response.status_code == 204


async def test_template_update_and_delete(client):
    template = await _create_template(client, brand="Thonet")

    response = await client.patch(f"/item-templates/{template['id']}", json={"model": "No. 14"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["model"] == "No. 14"
    assert data["brand"] == "Thonet"

    response = await client.delete(f"/item-templates/{template['id']}")
    assert response.status_code == 204
    assert (await client.get("/item-templates/")).json()["data"]["items"] == []


async def test_export_download(client):
    template = await _create_template(client)
    location = await _create_location(client)
    await client.post(
        "/inventory/items/batch",
        json={
            "template_id": template["id"],
            "location_id": location["id"],
            "quantities": {"Good": 1, "Bad": 1},
        },
    )
    await client.delete(f"/locations/{location['id']}")

    response = await client.get("/inventory/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "InventoryReport.xlsx" in response.headers["content-disposition"]

    ws = load_workbook(BytesIO(response.content)).active
    rows = list(ws.iter_rows(min_row=2, values_only=True))
    assert [r[0] for r in rows] == [1, 2]
    assert {r[5] for r in rows} == {"N/A"}
    assert [r[8] for r in rows] == ["Good", "Bad"]
