import pytest

from palette_master.app import create_app


@pytest.fixture
def client():
    app = create_app(default_seed=11)
    app.config["TESTING"] = True
    return app.test_client()


def test_index_lists_surface(client):
    body = client.get("/").get_json()
    assert "color_matching" in body["puzzle_types"]
    assert "tiered_matching" in body["puzzle_types"]
    assert body["mix_modes"] == ["subtractive", "additive"]
    assert body["spaces"] == ["rgb", "cmyk", "hsv"]


def test_mix_subtractive(client):
    rv = client.get("/mix?colors=ff0000,ffff00")
    assert rv.status_code == 200
    body = rv.get_json()
    assert body["mode"] == "subtractive"
    assert body["count"] == 2
    assert body["color"]["hex"] == "#ff8000"


def test_mix_additive_with_names(client):
    body = client.get("/mix?colors=red,blue&mode=additive").get_json()
    assert body["color"]["hex"] == "#800080"


def test_mix_empty_is_white(client):
    assert client.get("/mix").get_json()["color"]["hex"] == "#ffffff"


def test_mix_rejects_bad_input(client):
    rv = client.get("/mix?colors=ff0000,nothex")
    assert rv.status_code == 400
    assert "invalid color" in rv.get_json()["error"]
    rv = client.get("/mix?colors=ff0000&mode=glaze")
    assert rv.status_code == 400
    assert rv.get_json()["supported"] == ["subtractive", "additive"]


def test_convert(client):
    body = client.get("/convert?color=ff0000&space=cmyk").get_json()
    assert body["color"] == {"c": 0.0, "m": 1.0, "y": 1.0, "k": 0.0, "opacity": 1.0}
    assert client.get("/convert?color=ff0000&space=lab").status_code == 400


def test_harmony(client):
    body = client.get("/harmony?color=ff0000&scheme=triadic").get_json()
    assert body["colors"] == ["#ff0000", "#00ff00", "#0000ff"]
    body = client.get("/harmony?color=ff0000").get_json()
    assert body["colors"] == ["#ff0000", "#ff8000", "#ffff00"]
    body = client.get("/harmony?color=ff8000&scheme=complementary").get_json()
    assert body["colors"] == ["#ff8000", "#007fff"]
    assert client.get("/harmony?color=ff0000&scheme=tetradic").status_code == 400
    assert client.get("/harmony?color=ff0000&count=x").status_code == 400


def test_similarity(client):
    body = client.get("/similarity?a=ffffff&b=ffffff&threshold=0.9").get_json()
    assert body["similarity"] == 1.0
    assert body["match"] is True
    body = client.get("/similarity?a=ffffff&b=000000").get_json()
    assert body["similarity"] == pytest.approx(0.0, abs=1e-9)
    assert "match" not in body


def test_level(client):
    rv = client.get("/level/color_matching/1")
    assert rv.status_code == 200
    body = rv.get_json()
    assert body["target"] == "#ff7f00"
    assert body["max_attempts"] == 5


def test_level_seed_is_reproducible(client):
    a = client.get("/level/color_matching/13?seed=3").get_json()
    b = client.get("/level/color_matching/13?seed=3").get_json()
    assert a == b
    # app-wide default seed applies without a query parameter
    assert client.get("/level/color_matching/13").get_json() == client.get(
        "/level/color_matching/13"
    ).get_json()


def test_unknown_puzzle_type(client):
    rv = client.get("/level/nonexistent_type/1")
    assert rv.status_code == 400
    body = rv.get_json()
    assert "nonexistent_type" in body["error"]
    assert "color_matching" in body["supported"]


def test_bad_seed(client):
    assert client.get("/level/color_matching/12?seed=abc").status_code == 400


def test_harmony_count_zero_returns_input_only(client):
    body = client.get("/harmony?color=ff0000&count=0").get_json()
    assert body["colors"] == ["#ff0000"]


def test_harmony_infinite_interval(client):
    rv = client.get("/harmony?color=ff0000&interval=inf")
    assert rv.status_code == 200
    assert rv.get_json()["colors"] == ["#ff0000"] * 3


def test_tiered_level_route(client):
    body = client.get("/level/tiered_matching/16").get_json()
    assert body["time_limit"] == 60
    assert body["title"] == "Level 16: Match This Color"
