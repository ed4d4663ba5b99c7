# tests/test_models.py
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_then_get_returns_same_fields(client: AsyncClient):
    payload = {"name": "Widget", "price": 5, "availableQuantity": 10, "color": "red", "tags": ["a", "b"]}
    resp = await client.post("/models", json=payload)
    assert resp.status_code == 201, resp.text
    ack = resp.json()
    assert ack["acknowledged"] is True
    model_id = ack["insertedId"]
    assert len(model_id) == 24
    int(model_id, 16)

    resp = await client.get(f"/models/{model_id}")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["_id"] == model_id
    assert body["name"] == "Widget"
    assert body["price"] == 5
    assert body["availableQuantity"] == 10
    assert body["color"] == "red"
    assert body["tags"] == ["a", "b"]


@pytest.mark.asyncio
async def test_create_accepts_sparse_body(client: AsyncClient):
    resp = await client.post("/models", json={"sku": "X-1"})
    assert resp.status_code == 201, resp.text

    body = (await client.get(f"/models/{resp.json()['insertedId']}")).json()
    assert body["sku"] == "X-1"
    assert body["name"] is None
    assert body["availableQuantity"] == 0


@pytest.mark.asyncio
async def test_create_ignores_client_supplied_id(client: AsyncClient):
    resp = await client.post("/models", json={"_id": "not-mine", "name": "Gadget"})
    assert resp.status_code == 201, resp.text
    model_id = resp.json()["insertedId"]
    assert model_id != "not-mine"

    body = (await client.get(f"/models/{model_id}")).json()
    assert body["_id"] == model_id


@pytest.mark.asyncio
async def test_list_models_returns_all(client: AsyncClient):
    for name in ("A", "B", "C"):
        resp = await client.post("/models", json={"name": name, "availableQuantity": 1})
        assert resp.status_code == 201

    resp = await client.get("/models")
    assert resp.status_code == 200
    names = [item["name"] for item in resp.json()]
    assert sorted(names) == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_get_missing_or_malformed_id_is_404(client: AsyncClient):
    resp = await client.get("/models/" + "0" * 24)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Model not found"}

    resp = await client.get("/models/not-an-id")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_merges_partial_body(client: AsyncClient, widget: str):
    resp = await client.put(f"/models/{widget}", json={"price": 7.5, "color": "blue"})
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1}

    body = (await client.get(f"/models/{widget}")).json()
    assert body["name"] == "Widget"
    assert body["price"] == 7.5
    assert body["availableQuantity"] == 10
    assert body["color"] == "blue"


@pytest.mark.asyncio
async def test_update_without_changes_reports_zero_modified(client: AsyncClient, widget: str):
    resp = await client.put(f"/models/{widget}", json={"name": "Widget"})
    assert resp.status_code == 200
    assert resp.json()["modifiedCount"] == 0


@pytest.mark.asyncio
async def test_update_missing_model_is_404(client: AsyncClient):
    resp = await client.put("/models/" + "a" * 24, json={"name": "Nope"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Model not found"}


@pytest.mark.asyncio
async def test_delete_model_and_missing_afterwards(client: AsyncClient, widget: str):
    resp = await client.delete(f"/models/{widget}")
    assert resp.status_code == 200
    assert resp.json() == {"acknowledged": True, "deletedCount": 1}

    assert (await client.get(f"/models/{widget}")).status_code == 404

    resp = await client.delete(f"/models/{widget}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Model not found"}


@pytest.mark.asyncio
async def test_delete_keeps_ledger_records(client: AsyncClient, widget: str):
    resp = await client.post("/imports", json={"userId": "u-1", "productId": widget, "quantity": 2})
    assert resp.status_code == 201

    assert (await client.delete(f"/models/{widget}")).status_code == 200

    records = (await client.get("/imports", params={"userId": "u-1"})).json()
    assert len(records) == 1
    assert records[0]["productId"] == widget


@pytest.mark.asyncio
async def test_create_keeps_off_type_name_and_price_as_sent(client: AsyncClient):
    resp = await client.post("/models", json={"name": 123, "price": 5})
    assert resp.status_code == 201, resp.text
    body = (await client.get(f"/models/{resp.json()['insertedId']}")).json()
    assert body["name"] == 123
    assert body["price"] == 5

    resp = await client.post("/models", json={"name": "Bolt", "price": "cheap"})
    assert resp.status_code == 201, resp.text
    body = (await client.get(f"/models/{resp.json()['insertedId']}")).json()
    assert body["name"] == "Bolt"
    assert body["price"] == "cheap"

    resp = await client.post("/models", json={"price": "5"})
    assert resp.status_code == 201, resp.text
    body = (await client.get(f"/models/{resp.json()['insertedId']}")).json()
    assert body["price"] == "5"


@pytest.mark.asyncio
async def test_update_switches_between_typed_and_as_sent_values(client: AsyncClient, widget: str):
    resp = await client.put(f"/models/{widget}", json={"price": "cheap"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["modifiedCount"] == 1
    assert (await client.get(f"/models/{widget}")).json()["price"] == "cheap"

    resp = await client.put(f"/models/{widget}", json={"price": "cheap"})
    assert resp.json()["modifiedCount"] == 0

    resp = await client.put(f"/models/{widget}", json={"price": 8})
    assert resp.json()["modifiedCount"] == 1
    body = (await client.get(f"/models/{widget}")).json()
    assert body["price"] == 8
    assert body["name"] == "Widget"


@pytest.mark.asyncio
async def test_update_rejects_null_quantity(client: AsyncClient, widget: str):
    resp = await client.put(f"/models/{widget}", json={"availableQuantity": None})
    assert resp.status_code == 422

    resp = await client.put(f"/models/{widget}", json={"availableQuantity": 4})
    assert resp.status_code == 200
    assert (await client.get(f"/models/{widget}")).json()["availableQuantity"] == 4


@pytest.mark.asyncio
async def test_update_null_name_clears_it(client: AsyncClient, widget: str):
    resp = await client.put(f"/models/{widget}", json={"name": None})
    assert resp.status_code == 200
    assert resp.json()["modifiedCount"] == 1
    assert (await client.get(f"/models/{widget}")).json()["name"] is None
