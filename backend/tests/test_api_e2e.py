# backend/tests/test_api_e2e.py
import httpx
import respx

VIACEP = "https://viacep.com.br/ws"
IBGE = "https://servicodados.ibge.gov.br/api/v1/localidades"


def _mock_cep(cep, locality, uf):
    return respx.get(f"{VIACEP}/{cep}/json/").mock(
        return_value=httpx.Response(200, json={"localidade": locality, "uf": uf})
    )


def _trip_payload(**kw):
    payload = {
        "destination_locality": "Vitória",
        "destination_region": "ES",
        "destination_country": "Brasil",
        "segments": [
            {"mode": "plane", "origin_locality": "Manaus", "origin_region": "AM"},
            {"mode": "car", "origin_postal_code": "29101-100", "passenger_count": 2},
        ],
    }
    payload.update(kw)
    return payload


@respx.mock
def test_estimate_trip(client):
    _mock_cep("29101100", "Vila Velha", "ES")
    r = client.post("/trips/estimate", json=_trip_payload())
    assert r.status_code == 200, r.text
    data = r.json()

    assert [s["resolved_distance_km"] for s in data["segments"]] == [800, 15]
    assert all(type(s["resolved_distance_km"]) is int for s in data["segments"])
    assert data["total_distance_km"] == 815
    # 0.255 * 800 + 0.192 * 15 / 2
    assert data["total_emission_kg"] == 205.44
    assert data["carbon_credits_tonnes"] == 0.205
    assert data["tree_equivalent"] == 10
    assert data["car_km_equivalent"] == 1070


@respx.mock
def test_estimate_round_trip(client):
    _mock_cep("29101200", "Vila Velha", "ES")
    payload = _trip_payload(round_trip=True)
    payload["segments"][1]["origin_postal_code"] = "29101200"
    r = client.post("/trips/estimate", json=payload)
    assert r.status_code == 200, r.text
    assert r.json()["total_distance_km"] == 1630


@respx.mock
def test_estimate_survives_geocoder_outage(client):
    respx.get(f"{VIACEP}/29101300/json/").mock(return_value=httpx.Response(503))
    payload = _trip_payload()
    payload["segments"][1]["origin_postal_code"] = "29101300"
    r = client.post("/trips/estimate", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()
    assert [s["distance_found"] for s in data["segments"]] == [True, False]
    assert data["total_distance_km"] == 800


def test_estimate_with_static_gateway_override(client):
    payload = _trip_payload(gateway="static")
    r = client.post("/trips/estimate", json=payload)
    assert r.status_code == 200, r.text
    # static gateway knows no postal codes
    assert [s["resolved_distance_km"] for s in r.json()["segments"]] == [800, 0]


def test_unknown_gateway_is_400(client):
    r = client.post("/trips/estimate", json=_trip_payload(gateway="nope"))
    assert r.status_code == 400


def test_invalid_trip_is_422(client):
    r = client.post("/trips/estimate", json=_trip_payload(segments=[{"mode": "car"}]))
    assert r.status_code == 422
    r = client.post("/trips/estimate", json=_trip_payload(segments=[]))
    assert r.status_code == 422


def test_unknown_mode_is_rejected(client):
    r = client.post("/trips/estimate", json=_trip_payload(segments=[{"mode": "rocket"}]))
    assert r.status_code == 422


def test_destination_comes_from_event(client):
    r = client.post("/trips/estimate", json=_trip_payload(destination_locality=None))
    assert r.status_code == 422

    r = client.put("/event", json={"locality": "Vitória", "region": "ES", "name": "Summit"})
    assert r.status_code == 200, r.text
    assert client.get("/event").json()["country"] == "Brasil"

    payload = _trip_payload(
        destination_locality=None,
        destination_region=None,
        destination_country=None,
        segments=[{"mode": "train", "origin_locality": "Colatina", "origin_region": "ES"}],
    )
    r = client.post("/trips/estimate", json=payload)
    assert r.status_code == 200, r.text
    assert r.json()["total_distance_km"] == 300

    assert client.delete("/event").json()["removed"] is True
    assert client.get("/event").status_code == 404


def test_event_fills_only_the_missing_destination_field(client):
    assert client.put("/event", json={"locality": "Vitória", "region": "ES"}).status_code == 200

    # locality kept, region from the event: Colatina/ES -> Colatina/ES
    payload = _trip_payload(
        destination_locality="Colatina",
        destination_region=None,
        segments=[{"mode": "train", "origin_locality": "Colatina", "origin_region": "ES"}],
    )
    r = client.post("/trips/estimate", json=payload)
    assert r.status_code == 200, r.text
    assert r.json()["total_distance_km"] == 500

    # region kept, locality from the event: Colatina/ES -> Vitória/RJ
    payload = _trip_payload(
        destination_locality=None,
        destination_region="RJ",
        segments=[{"mode": "train", "origin_locality": "Colatina", "origin_region": "ES"}],
    )
    r = client.post("/trips/estimate", json=payload)
    assert r.status_code == 200, r.text
    assert r.json()["total_distance_km"] == 800

    client.delete("/event")


def test_unreadable_event_is_500(client, data_dir):
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "event.json").write_text("{not json", encoding="utf-8")
    r = client.post("/trips/estimate", json=_trip_payload(destination_locality=None))
    assert r.status_code == 500
    assert client.get("/event").status_code == 500


def test_non_finite_distance_is_422(client):
    body = (
        '{"destination_locality": "Vitória", "destination_region": "ES", '
        '"segments": [{"mode": "bus", "explicit_distance_km": 1e400}]}'
    )
    r = client.post(
        "/trips/estimate",
        content=body.encode("utf-8"),
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 422


def test_store_and_export_flow(client):
    seg = {"mode": "bus", "explicit_distance_km": 100}
    for name in ("Ana", "Bia"):
        r = client.post(
            "/trips",
            json=_trip_payload(traveler_name=name, segments=[seg], gateway="static"),
        )
        assert r.status_code == 200, r.text
        assert r.json()["result"]["total_emission_kg"] == 8.9

    assert [t["trip"]["traveler_name"] for t in client.get("/trips").json()] == ["Ana", "Bia"]
    totals = client.get("/trips/totals").json()
    assert totals["total_emission_kg"] == 17.8
    assert totals["trip_count"] == 2

    r = client.get("/trips/export/csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]
    assert "TOTALS,17.80,0.018,2" in r.text

    r = client.get("/trips/export/json")
    assert r.status_code == 200
    assert len(r.json()["trips"]) == 2

    assert client.delete("/trips/0").status_code == 200
    assert client.delete("/trips/7").status_code == 404
    assert client.delete("/trips").json()["removed"] == 1
    assert client.get("/trips").json() == []


@respx.mock
def test_postal_code_lookup(client):
    _mock_cep("29050335", "Vitória", "ES")
    r = client.get("/geocoding/postal-codes/29050-335")
    assert r.status_code == 200, r.text
    assert r.json()["locality"] == "Vitória"


@respx.mock
def test_postal_code_not_found_and_outage(client):
    respx.get(f"{VIACEP}/11111111/json/").mock(
        return_value=httpx.Response(200, json={"erro": True})
    )
    respx.get(f"{VIACEP}/22222222/json/").mock(return_value=httpx.Response(500))
    assert client.get("/geocoding/postal-codes/11111111").status_code == 404
    assert client.get("/geocoding/postal-codes/22222222").status_code == 502


@respx.mock
def test_list_localities(client):
    respx.get(f"{IBGE}/estados/33/municipios").mock(
        return_value=httpx.Response(200, json=[{"id": 3304557, "nome": "Rio de Janeiro"}])
    )
    r = client.get("/geocoding/regions/RJ/localities")
    assert r.status_code == 200, r.text
    assert r.json() == [{"name": "Rio de Janeiro", "region": "RJ", "code": "3304557"}]


def test_status(client):
    gws = client.get("/status/gateways").json()
    assert gws["gateways"] == ["static", "viacep"]
    assert gws["default"] == "viacep"
    assert [(d["name"], d["kind"], d["default"]) for d in gws["details"]] == [
        ("static", "offline", False),
        ("viacep", "online", True),
    ]

    factors = client.get("/status/factors").json()
    assert factors["preset"] == "builtin"
    assert {"mode": "bus", "attribute": None, "factor_kg_per_pkm": 0.089} in factors["factors"]
