import json
from datetime import datetime, timedelta, timezone

import pytest


@pytest.mark.integration
def test_create_goat_with_multiple_images(client, goat_payload, make_upload):
    """Scenario: three images go to imageUrl plus the JSON description."""
    urls = make_upload("goat-a.jpg", "goat-b.jpg", "goat-c.jpg")
    goat_payload["description"] = ""
    goat_payload["imageUrls"] = urls

    response = client.post("/products", json=goat_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["imageUrl"] == "/uploads/goat-a.jpg"
    assert json.loads(data["description"]) == {
        "description": "",
        "additionalImages": ["/uploads/goat-b.jpg", "/uploads/goat-c.jpg"],
    }
    assert data["imageUrls"] == urls
    assert data["isAvailable"] is True
    assert data["healthStatus"] == "Healthy"
    assert data["price"] == 350


@pytest.mark.integration
def test_create_goat_with_single_image_url(client, goat_payload, make_upload):
    (url,) = make_upload("goat-a.jpg")
    goat_payload["imageUrl"] = url

    response = client.post("/products", json=goat_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["imageUrl"] == url
    assert data["description"] == "Friendly doe, good milker"
    assert data["imageUrls"] == [url]


@pytest.mark.integration
def test_create_goat_accepts_numeric_age_and_string_price(client, goat_payload):
    goat_payload["age"] = 3
    goat_payload["price"] = "275.50"

    response = client.post("/products", json=goat_payload)

    assert response.status_code == 201
    assert response.json()["age"] == "3"
    assert response.json()["price"] == 275.5


@pytest.mark.integration
@pytest.mark.parametrize("field", ["name", "breed", "age", "weight", "price", "gender"])
def test_create_goat_requires_fields(client, goat_payload, field):
    del goat_payload[field]

    response = client.post("/products", json=goat_payload)

    assert response.status_code == 400
    assert field in response.json()["error"]


@pytest.mark.integration
def test_create_goat_rejects_blank_name_and_zero_price(client, goat_payload):
    goat_payload["name"] = "   "
    goat_payload["price"] = 0

    response = client.post("/products", json=goat_payload)

    assert response.status_code == 400
    assert "name" in response.json()["error"]
    assert "price" in response.json()["error"]


@pytest.mark.integration
def test_get_goats_newest_first(client, goat_payload):
    for name in ("First", "Second"):
        goat_payload["name"] = name
        client.post("/products", json=goat_payload)

    response = client.get("/products")

    assert response.status_code == 200
    assert [goat["name"] for goat in response.json()] == ["Second", "First"]


@pytest.mark.integration
def test_get_goat(client, goat_payload):
    goat_id = client.post("/products", json=goat_payload).json()["id"]

    response = client.get(f"/products/{goat_id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Daisy"


@pytest.mark.integration
def test_get_goat_not_found(client):
    response = client.get("/products/12345")

    assert response.status_code == 404
    assert response.json() == {"error": "Goat not found"}


@pytest.mark.integration
def test_get_goat_invalid_id(client):
    response = client.get("/products/not-a-number")

    assert response.status_code == 400
    assert "goat_id" in response.json()["error"]


@pytest.mark.integration
def test_update_goat_removes_dropped_images(client, goat_payload, make_upload, image_store):
    """Scenario: shrinking three images to one deletes the other two files."""
    urls = make_upload("goat-a.jpg", "goat-b.jpg", "goat-c.jpg")
    goat_payload["description"] = ""
    goat_payload["imageUrls"] = urls
    goat_id = client.post("/products", json=goat_payload).json()["id"]

    goat_payload["imageUrls"] = ["/uploads/goat-a.jpg"]
    response = client.put(f"/products/{goat_id}", json=goat_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["imageUrl"] == "/uploads/goat-a.jpg"
    assert data["description"] is None
    assert data["imageUrls"] == ["/uploads/goat-a.jpg"]
    assert image_store.exists("/uploads/goat-a.jpg")
    assert not image_store.exists("/uploads/goat-b.jpg")
    assert not image_store.exists("/uploads/goat-c.jpg")


@pytest.mark.integration
def test_update_goat_with_description_as_read(client, goat_payload, make_upload, image_store):
    """Sending back the stored description must not resurrect dropped images."""
    urls = make_upload("goat-a.jpg", "goat-b.jpg")
    goat_payload["imageUrls"] = urls
    created = client.post("/products", json=goat_payload).json()
    assert created["descriptionText"] == "Friendly doe, good milker"

    goat_payload["description"] = created["description"]
    goat_payload["imageUrls"] = ["/uploads/goat-a.jpg"]
    response = client.put(f"/products/{created['id']}", json=goat_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["description"] == "Friendly doe, good milker"
    assert data["descriptionText"] == "Friendly doe, good milker"
    assert data["imageUrls"] == ["/uploads/goat-a.jpg"]
    assert not image_store.exists("/uploads/goat-b.jpg")

    fetched = client.get(f"/products/{created['id']}").json()
    assert fetched["imageUrls"] == ["/uploads/goat-a.jpg"]


@pytest.mark.integration
def test_update_goat_not_found(client, goat_payload):
    response = client.put("/products/12345", json=goat_payload)

    assert response.status_code == 404
    assert response.json() == {"error": "Goat not found"}


@pytest.mark.integration
def test_update_goat_validation_keeps_images(client, goat_payload, make_upload, image_store):
    urls = make_upload("goat-a.jpg", "goat-b.jpg")
    goat_payload["imageUrls"] = urls
    goat_id = client.post("/products", json=goat_payload).json()["id"]

    response = client.put(f"/products/{goat_id}", json={"name": "Daisy", "imageUrls": []})

    assert response.status_code == 400
    assert all(image_store.exists(url) for url in urls)


@pytest.mark.integration
def test_delete_goat_removes_images(client, goat_payload, make_upload, image_store):
    urls = make_upload("goat-a.jpg", "goat-b.jpg", "goat-c.jpg")
    goat_payload["imageUrls"] = urls
    goat_id = client.post("/products", json=goat_payload).json()["id"]

    response = client.delete(f"/products/{goat_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Goat deleted successfully", "deletedFiles": 3}
    assert not any(image_store.exists(url) for url in urls)
    assert client.get(f"/products/{goat_id}").status_code == 404


@pytest.mark.integration
def test_delete_goat_twice(client, goat_payload, make_upload):
    goat_payload["imageUrls"] = make_upload("goat-a.jpg")
    goat_id = client.post("/products", json=goat_payload).json()["id"]
    client.delete(f"/products/{goat_id}")

    response = client.delete(f"/products/{goat_id}")

    assert response.status_code == 404
    assert response.json() == {"error": "Goat not found", "deletedFiles": 0}


@pytest.mark.integration
def test_created_goat_reports_utc_timestamps(client, goat_payload):
    before = datetime.now(timezone.utc) - timedelta(minutes=1)
    goat_id = client.post("/products", json=goat_payload).json()["id"]

    data = client.get(f"/products/{goat_id}").json()

    created_at = _parse_timestamp(data["createdAt"])
    updated_at = _parse_timestamp(data["updatedAt"])
    assert before <= created_at <= datetime.now(timezone.utc)
    assert created_at <= updated_at


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    # SQLite hands timestamps back without an offset; they are stored as UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
