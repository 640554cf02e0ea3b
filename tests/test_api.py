import pytest

API = "/api/v1/blueprints"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_get_all(client):
    resp = client.get(API)
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["code"] == 200
    assert body["message"] == "execute ok"
    assert [(b["author"], b["name"]) for b in body["data"]] == [
        ("jane", "garden"),
        ("john", "garage"),
        ("john", "house"),
    ]


def test_get_by_author(client):
    body = client.get(f"{API}/john").get_json()
    assert body["code"] == 200
    assert {b["name"] for b in body["data"]} == {"house", "garage"}


def test_get_by_author_not_found(client):
    resp = client.get(f"{API}/nonexistent")
    body = resp.get_json()
    assert resp.status_code == 404
    assert body["code"] == 404
    assert body["message"] == "No blueprints for author: nonexistent"
    assert body["data"] is None


def test_get_blueprint(client):
    body = client.get(f"{API}/john/house").get_json()
    assert body["code"] == 200
    assert body["data"] == {
        "author": "john",
        "name": "house",
        "points": [{"x": 0, "y": 0}, {"x": 10, "y": 0}, {"x": 10, "y": 10}, {"x": 0, "y": 10}],
    }


def test_get_blueprint_not_found(client):
    resp = client.get(f"{API}/john/nonexistent")
    assert resp.status_code == 404
    assert resp.get_json()["code"] == 404


def test_create_blueprint(client):
    payload = {"author": "bob", "name": "sketch", "points": [{"x": 1, "y": 1}, {"x": 2, "y": 2}]}
    resp = client.post(API, json=payload)
    body = resp.get_json()
    assert resp.status_code == 201
    assert body["code"] == 201
    assert body["message"] == "blueprint created"
    assert body["data"] == payload

    got = client.get(f"{API}/bob/sketch").get_json()
    assert got["data"]["points"] == payload["points"]


def test_create_without_points(client):
    resp = client.post(API, json={"author": "bob", "name": "blank"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["points"] == []


def test_create_duplicate(client):
    resp = client.post(API, json={"author": "john", "name": "house", "points": []})
    assert resp.status_code == 403
    assert resp.get_json()["code"] == 403
    assert len(client.get(f"{API}/john/house").get_json()["data"]["points"]) == 4


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "test", "points": []},
        {"author": "bob", "points": []},
        {"author": "  ", "name": "test", "points": []},
        {"author": "bob", "name": "", "points": []},
        {"author": "bob", "name": "test", "points": [{"x": 1}]},
        {"author": "bob", "name": "test", "points": [{"x": "1", "y": 2}]},
        {"author": "bob", "name": "test", "points": [{"x": 1.5, "y": 2}]},
        {"author": "bob", "name": "test", "points": None},
    ],
)
def test_create_invalid(client, payload):
    resp = client.post(API, json=payload)
    body = resp.get_json()
    assert resp.status_code == 400
    assert body["code"] == 400
    assert body["message"].startswith("Invalid request")
    assert client.get(f"{API}/bob/test").status_code == 404


def test_create_without_body(client):
    resp = client.post(API, data="not json", content_type="text/plain")
    assert resp.status_code == 400


def test_add_point(client):
    resp = client.put(f"{API}/john/house/points", json={"x": 99, "y": 99})
    body = resp.get_json()
    assert resp.status_code == 202
    assert body == {"code": 202, "message": "point added", "data": None}

    pts = client.get(f"{API}/john/house").get_json()["data"]["points"]
    assert len(pts) == 5
    assert pts[-1] == {"x": 99, "y": 99}


def test_add_point_not_found(client):
    resp = client.put(f"{API}/nonexistent/blueprint/points", json={"x": 1, "y": 1})
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Blueprint not found: nonexistent/blueprint"


@pytest.mark.parametrize("payload", [{"x": 1}, {"x": "a", "y": 1}, {}])
def test_add_point_invalid(client, payload):
    resp = client.put(f"{API}/john/house/points", json=payload)
    assert resp.status_code == 400
    assert len(client.get(f"{API}/john/house").get_json()["data"]["points"]) == 4


def test_undersampling_filter_on_lookup(make_app):
    client = make_app(FILTER="undersampling").test_client()
    pts = client.get(f"{API}/john/house").get_json()["data"]["points"]
    assert pts == [{"x": 0, "y": 0}, {"x": 10, "y": 10}]
    # Listing is not filtered
    house = [b for b in client.get(API).get_json()["data"] if b["name"] == "house"][0]
    assert len(house["points"]) == 4


def test_redundancy_filter_on_lookup(make_app):
    client = make_app(FILTER="redundancy").test_client()
    pts = [{"x": 0, "y": 0}, {"x": 0, "y": 0}, {"x": 1, "y": 1}, {"x": 0, "y": 0}]
    client.post(API, json={"author": "bob", "name": "dups", "points": pts})
    got = client.get(f"{API}/bob/dups").get_json()["data"]["points"]
    assert got == [{"x": 0, "y": 0}, {"x": 1, "y": 1}, {"x": 0, "y": 0}]


def test_unseeded_app_lists_nothing(make_app):
    client = make_app(SEED_SAMPLE_DATA=False).test_client()
    body = client.get(API).get_json()
    assert body["data"] == []


def test_sql_backed_app(make_app):
    client = make_app(PERSISTENCE="sql", DATABASE_URL="sqlite://").test_client()
    assert client.post(API, json={"author": "bob", "name": "sketch", "points": [{"x": 1, "y": 2}]}).status_code == 201
    assert client.put(f"{API}/bob/sketch/points", json={"x": 3, "y": 4}).status_code == 202
    assert client.post(API, json={"author": "bob", "name": "sketch", "points": []}).status_code == 403
    pts = client.get(f"{API}/bob/sketch").get_json()["data"]["points"]
    assert pts == [{"x": 1, "y": 2}, {"x": 3, "y": 4}]


def test_custom_api_prefix(make_app):
    client = make_app(API_PREFIX="/v2/").test_client()
    assert client.get("/v2/blueprints").status_code == 200
    assert client.get(API).status_code == 404


def test_unknown_filter_fails_at_startup(make_app):
    with pytest.raises(ValueError):
        make_app(FILTER="smoothing")


@pytest.mark.parametrize("persistence", ["memory", "sql"])
@pytest.mark.parametrize(
    "point",
    [{"x": 2**31, "y": 1}, {"x": 1, "y": -(2**31) - 1}, {"x": 2**70, "y": 1}],
)
def test_out_of_range_coordinates_rejected(make_app, persistence, point):
    client = make_app(PERSISTENCE=persistence, DATABASE_URL="sqlite://").test_client()
    resp = client.put(f"{API}/john/house/points", json=point)
    assert resp.status_code == 400
    assert resp.get_json()["code"] == 400
    resp = client.post(API, json={"author": "bob", "name": "big", "points": [point]})
    assert resp.status_code == 400
    assert client.get(f"{API}/bob/big").status_code == 404
    assert len(client.get(f"{API}/john/house").get_json()["data"]["points"]) == 4


@pytest.mark.parametrize("persistence", ["memory", "sql"])
def test_coordinate_bounds_accepted(make_app, persistence):
    client = make_app(PERSISTENCE=persistence, DATABASE_URL="sqlite://").test_client()
    point = {"x": 2**31 - 1, "y": -(2**31)}
    assert client.put(f"{API}/john/house/points", json=point).status_code == 202
    assert client.get(f"{API}/john/house").get_json()["data"]["points"][-1] == point


def test_unknown_path_uses_envelope(client):
    resp = client.get(f"{API}/john/house/extra")
    body = resp.get_json()
    assert resp.status_code == 404
    assert body["code"] == 404
    assert body["data"] is None


def test_wrong_method_uses_envelope(client):
    resp = client.delete(f"{API}/john/house")
    body = resp.get_json()
    assert resp.status_code == 405
    assert body["code"] == 405
    assert body["message"]
