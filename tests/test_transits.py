from fastapi.testclient import TestClient

from api.app import app
from api.services import ephemeris_client
from api.services.transits import TRANSIT_ORBS, TransitAspect, detect_transit_aspects, top_transits

client = TestClient(app)


def pl(name, deg):
    return {"planet": {"en": name}, "fullDegree": deg}


def test_only_core_planets_transit():
    transiting = [pl("Jupiter", 100.0), pl("Chiron", 100.0), pl("True Node", 100.0)]
    natal = [pl("Sun", 100.0)]
    hits = detect_transit_aspects(transiting, natal)
    assert [h.transit_body for h in hits] == ["Jupiter"]


def test_natal_angles_can_be_hit():
    hits = detect_transit_aspects([pl("Saturn", 10.0)], [pl("Ascendant", 100.0), pl("MC", 10.5)])
    assert hits == [
        TransitAspect("Saturn", "Ascendant", "Square", 0.0, "Saturn", "Ascendant"),
        TransitAspect("Saturn", "MC", "Conjunction", 0.5, "Saturn", "MC"),
    ]


def test_tighter_orbs_and_major_only():
    # A 3° natal-style conjunction is out of the 2° transit orb.
    assert detect_transit_aspects([pl("Mars", 0.0)], [pl("Venus", 3.0)]) == []
    # Quincunx is not part of the transit set.
    assert detect_transit_aspects([pl("Mars", 0.0)], [pl("Venus", 150.0)]) == []
    hits = detect_transit_aspects([pl("Mars", 0.0)], [pl("Venus", 122.4)])
    assert hits[0].aspect_name == "Trine"
    assert TRANSIT_ORBS["Square"] == 2.5


def test_caller_orbs_merge_over_defaults():
    hits = detect_transit_aspects([pl("Mars", 0.0)], [pl("Venus", 3.0)], orbs={"Conjunction": 4.0})
    assert hits[0].aspect_name == "Conjunction"


def test_top_transits_targets_core_planets_tightest_first():
    natal = [pl("Sun", 0.0), pl("Moon", 90.0), pl("Ascendant", 180.0), pl("Venus", 240.0)]
    transiting = [pl("Mars", 1.5), pl("Saturn", 180.2), pl("Pluto", 241.0)]
    hits = detect_transit_aspects(transiting, natal)
    top = top_transits(hits)
    assert all(t.natal_body != "Ascendant" for t in top)
    assert [t.separation_error for t in top] == sorted(t.separation_error for t in top)
    assert len(top) <= 3


def test_transits_endpoint_with_supplied_transits():
    body = {
        "natal": [pl("Sun", 0.0), pl("Ascendant", 90.0)],
        "transiting": [pl("Jupiter", 180.0), pl("Ceres", 0.0)],
    }
    r = client.post("/v1/transits/natal", json=body)
    assert r.status_code == 200, r.text
    j = r.json()
    assert [(a["transit_body"], a["natal_body"], a["aspect"]) for a in j["aspects"]] == [
        ("Jupiter", "Sun", "Opposition"),
        ("Jupiter", "Ascendant", "Square"),
    ]
    assert [a["natal_body"] for a in j["top"]] == ["Sun"]


def test_transits_endpoint_fetches_current_sky(monkeypatch):
    seen = {}

    def fake_fetch(payload):
        seen.update(payload)
        return [pl("Moon", 60.0)]

    monkeypatch.setattr(ephemeris_client, "fetch_planets", fake_fetch)
    r = client.post(
        "/v1/transits/natal",
        json={"natal": [pl("Sun", 0.0)], "location": {"latitude": 51.5, "longitude": -0.1}},
    )
    assert r.status_code == 200, r.text
    assert seen["latitude"] == 51.5 and seen["timezone"] == 0.0
    assert r.json()["aspects"][0]["aspect"] == "Sextile"
    assert r.json()["meta"]["moment"]


def test_transits_endpoint_without_key(monkeypatch):
    monkeypatch.delenv("FREE_ASTROLOGY_API_KEY", raising=False)
    r = client.post("/v1/transits/natal", json={"natal": [pl("Sun", 0.0)]})
    assert r.status_code == 501
