"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from food_diary.api.app import create_app
from food_diary.domain.foods import RawFood
from food_diary.domain.vision import LabelPrediction
from tests.conftest import FakeClassifier, FakeExternalDatabase


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_search_returns_ranked_foods(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/foods/search", params={"q": "банан"})

    assert response.status_code == 200
    body = response.json()
    assert body["foods"][0]["name"] == "Банан"
    assert body["updated"] == []


def test_barcode_lookup(container, external_db: FakeExternalDatabase) -> None:
    external_db.barcodes["4601"] = RawFood(name="Kefir", calories=40, protein_g=3)
    client = TestClient(create_app(container))

    found = client.get("/foods/barcode/4601")
    missing = client.get("/foods/barcode/0000")

    assert found.status_code == 200
    assert found.json()["food"]["barcode"] == "4601"
    assert missing.status_code == 404


def test_custom_food_lifecycle(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/foods/custom",
        json={"owner_id": "u1", "name": "Сырники", "calories": 220, "protein_g": 15},
    )
    food_id = created.json()["food"]["id"]

    assert created.status_code == 201
    assert client.get(f"/foods/{food_id}", params={"owner_id": "u1"}).status_code == 200
    assert client.get(f"/foods/{food_id}", params={"owner_id": "u2"}).status_code == 404


def test_custom_food_validation(container) -> None:
    client = TestClient(create_app(container))

    negative = client.post(
        "/foods/custom", json={"owner_id": "u1", "name": "Bad", "calories": -1}
    )
    blank = client.post("/foods/custom", json={"owner_id": "u1", "name": " "})

    assert negative.status_code == 422
    assert blank.status_code == 422


def test_diary_entry_lifecycle(container) -> None:
    client = TestClient(create_app(container))
    base = "/diary/u1/2024-03-01"

    created = client.post(
        f"{base}/breakfast", json={"food_id": "core_0001", "amount": 1, "unit": "шт"}
    )
    entry = created.json()["entry"]

    assert created.status_code == 201
    assert entry["weight_g"] == 150
    assert entry["calories"] == 78

    day = client.get(base).json()
    assert day["totals"]["calories"] == 78
    assert day["meals"]["breakfast"][0]["id"] == entry["id"]

    updated = client.patch(f"{base}/breakfast/{entry['id']}", json={"amount": 2})
    assert updated.status_code == 200
    assert updated.json()["entry"]["calories"] == 156

    assert client.delete(f"{base}/breakfast/{entry['id']}").status_code == 200
    assert client.delete(f"{base}/breakfast/{entry['id']}").status_code == 404


def test_diary_rejects_unknown_slot_and_food(container) -> None:
    client = TestClient(create_app(container))
    base = "/diary/u1/2024-03-01"

    bad_slot = client.post(f"{base}/brunch", json={"food_id": "core_0001", "amount": 100})
    bad_food = client.post(f"{base}/lunch", json={"food_id": "nope", "amount": 100})

    assert bad_slot.status_code == 422
    assert bad_food.status_code == 404


def test_water(container) -> None:
    client = TestClient(create_app(container))

    response = client.put("/diary/u1/2024-03-01/water", json={"glasses": 5})

    assert response.status_code == 200
    assert response.json() == {"water": 5}


def test_goals_and_excess(container) -> None:
    client = TestClient(create_app(container))

    defaults = client.get("/goals/u1").json()["goals"]
    assert defaults["calories_target"] == 2000

    client.put(
        "/goals/u1",
        json={
            "calories_target": 500,
            "protein_target": 100,
            "fat_target": 70,
            "carbs_target": 250,
        },
    )
    client.post(
        "/diary/u1/2024-03-01/dinner", json={"food_id": "core_0019", "amount": 200}
    )

    response = client.get(
        "/goals/u1/excess", params={"start": "2024-03-01", "end": "2024-03-02"}
    )

    assert response.status_code == 200
    body = response.json()
    report = body["report"]
    assert report["excess"]["total_extra_calories"] == 570
    assert report["sweet_and_flour"]["total_sweet_calories"] == 1070
    assert len(report["excess"]["daily"]) == 2
    assert body["total_excess_text"] == "много"
    assert body["day_status_text"] == ["значительный перебор", "в норме"]


def test_excess_rejects_inverted_range(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/goals/u1/excess", params={"start": "2024-03-05", "end": "2024-03-01"}
    )

    assert response.status_code == 422


def test_photo_analyze(container, classifier: FakeClassifier) -> None:
    classifier.predictions = [LabelPrediction(label="banana", confidence=1.0)]
    client = TestClient(create_app(container))

    response = client.post("/photo/analyze", content=b"\xff\xd8\xffdata")
    empty = client.post("/photo/analyze", content=b"")

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["detected_label"] == "banana"
    assert analysis["food"]["name"] == "Банан"
    assert analysis["estimated_weight_g"] == 120
    assert empty.status_code == 422


def test_search_with_category_and_category_listing(container) -> None:
    client = TestClient(create_app(container))

    filtered = client.get("/foods/search", params={"q": "milk", "category": "dairy"})
    listing = client.get("/foods/category/fruits", params={"limit": 2})

    assert [food["name"] for food in filtered.json()["foods"]] == ["Молоко 3.2%"]
    assert [food["name"] for food in listing.json()["foods"]] == ["Апельсин", "Банан"]


def test_csv_import(container) -> None:
    client = TestClient(create_app(container))
    body = "name,calories,protein,fat,carbs\nТворог 5%,121,17,5,1.8\nПустой,0,0,0,0\n"

    response = client.post(
        "/foods/import",
        content=body.encode("utf-8"),
        headers={"Content-Type": "text/csv"},
    )
    invalid = client.post("/foods/import", content=b"\xff\xfe\xfa")

    assert response.status_code == 200
    payload = response.json()
    assert len(payload["imported"]) == 1
    assert len(payload["skipped"]) == 1
    assert client.get(f"/foods/{payload['imported'][0]}").json()["food"]["calories"] == 121
    assert invalid.status_code == 422


def test_recipe_analyze(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/recipes/analyze", json={"text": "1 шт банан, 100 г сыра твердого"}
    )

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert [item["parsed"]["name"] for item in analysis["ingredients"]] == [
        "банан",
        "сыра твердого",
    ]
    assert analysis["totals"]["weight_g"] == 220
