import pytest

from api.app import create_app
from iexpense.config import Settings
from iexpense.services import ExpenseStore
from iexpense.storage import MemoryKeyValueStore


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def client(kv, tmp_path):
    app = create_app(Settings(data_dir=tmp_path), kv_store=kv)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_categories(client):
    response = client.get("/categories")
    assert response.status_code == 200
    assert response.get_json() == {"items": ["Business", "Personal"]}


def test_create_and_list_expenses(client, kv):
    response = client.post("/expenses", json={"name": "Lunch", "amount": "12.50"})
    assert response.status_code == 201
    created = response.get_json()
    assert created["name"] == "Lunch"
    assert created["category"] == "Personal"
    assert created["amount"] == "12.50"

    client.post("/expenses", json={"name": "Taxi", "category": "Business", "amount": 30})

    listing = client.get("/expenses").get_json()
    assert [item["name"] for item in listing["items"]] == ["Lunch", "Taxi"]
    assert listing["total"] == "42.50"
    assert len(ExpenseStore(kv)) == 2


def test_create_rejects_blank_name(client):
    response = client.post("/expenses", json={"name": " "})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Validation error"


def test_create_requires_json(client):
    response = client.post("/expenses", data="name=Lunch")
    assert response.status_code == 400


def test_delete_by_offsets(client):
    for name in ("A", "B", "C", "D"):
        client.post("/expenses", json={"name": name})

    response = client.delete("/expenses", json={"offsets": [1, 3]})

    assert response.status_code == 204
    names = [item["name"] for item in client.get("/expenses").get_json()["items"]]
    assert names == ["A", "C"]


def test_delete_out_of_range(client):
    client.post("/expenses", json={"name": "A"})
    response = client.delete("/expenses", json={"offsets": [4]})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Offset out of range"


@pytest.mark.parametrize("payload", [{}, {"offsets": "1"}, {"offsets": [True]}, {"offsets": ["1"]}])
def test_delete_rejects_malformed_offsets(client, payload):
    assert client.delete("/expenses", json=payload).status_code == 400
