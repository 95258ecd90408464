from api.services import aspects


def pl(name, deg, lang="en"):
    return {"planet": {lang: name}, "fullDegree": deg, "isRetro": "false"}


def test_angle_diff_scorpio_to_aries_is_quincunx_distance():
    # Scorpio begins at 210°; Aries at 0°. The shortest arc is 150°.
    assert aspects._angle_diff(210.0, 0.0) == 150.0
    assert aspects._angle_diff(350.0, 10.0) == 20.0


def test_catalog_order_and_defaults():
    names = [a.name for a in aspects.ASPECT_CATALOG]
    assert names == [
        "Conjunction", "Opposition", "Square", "Trine", "Sextile", "Quincunx",
        "Semi-Sextile", "Quintile", "Octile", "Sesquiquadrate", "Septile", "Novile",
    ]
    assert aspects.DEFAULT_ORBS["Conjunction"] == 3.0
    assert aspects.DEFAULT_ORBS["Square"] == 5.0
    assert aspects.aspect_angle("Septile") == 51.4286
    assert aspects.aspect_angle("Nonexistent") is None


def test_sun_square_moon_scenario():
    planets = [pl("Sun", 10.0), pl("Moon", 100.0), pl("Ascendant", 190.0)]
    found = aspects.detect_aspects(planets)
    # The Ascendant is paired like any other body unless excluded.
    assert found == [
        aspects.AspectMatch("Sun", "Moon", "Square", 0.0),
        aspects.AspectMatch("Sun", "Ascendant", "Opposition", 0.0),
        aspects.AspectMatch("Moon", "Ascendant", "Square", 0.0),
    ]
    only = aspects.detect_aspects(planets, aspects.AspectConfig(excluded_bodies=["Ascendant"]))
    assert only == [aspects.AspectMatch("Sun", "Moon", "Square", 0.0)]


def test_exact_square_matches_with_zero_error():
    found = aspects.detect_aspects([pl("Mars", 45.0), pl("Saturn", 135.0)])
    assert len(found) == 1
    assert found[0].aspect_name == "Square"
    assert found[0].separation_error == 0.0


def test_allowed_aspects_restricts_catalog():
    planets = [pl("Venus", 0.0), pl("Jupiter", 120.0)]
    found = aspects.detect_aspects(planets, aspects.AspectConfig(allowed_aspects=["Trine"]))
    assert [(m.aspect_name, m.separation_error) for m in found] == [("Trine", 0.0)]

    found = aspects.detect_aspects(planets, aspects.AspectConfig(allowed_aspects=["Square"]))
    assert found == []


def test_empty_allowed_list_allows_nothing():
    planets = [pl("Venus", 0.0), pl("Jupiter", 0.5)]
    assert aspects.detect_aspects(planets, aspects.AspectConfig(allowed_aspects=[])) == []


def test_catalog_order_breaks_overlapping_orbs():
    # 48° is within Octile (45 ± 5) and, with the widened orb, Septile
    # (51.4286 ± 4). Octile is declared first.
    planets = [pl("Mercury", 0.0), pl("Uranus", 48.0)]
    cfg = aspects.AspectConfig(orb_overrides={"Septile": 4.0})
    found = aspects.detect_aspects(planets, cfg)
    assert len(found) == 1
    assert found[0].aspect_name == "Octile"
    assert round(found[0].separation_error, 6) == 3.0


def test_orb_override_widens_and_narrows():
    planets = [pl("Sun", 0.0), pl("Moon", 4.0)]
    assert aspects.detect_aspects(planets) == []
    wide = aspects.detect_aspects(planets, aspects.AspectConfig(orb_overrides={"Conjunction": 4.0}))
    assert wide[0].aspect_name == "Conjunction"

    tight = aspects.detect_aspects(
        [pl("Sun", 0.0), pl("Moon", 93.0)], aspects.AspectConfig(orb_overrides={"Square": 2.0})
    )
    assert tight == []


def test_excluded_bodies_never_referenced():
    planets = [pl("Sun", 0.0), pl("Moon", 90.0), pl("Chiron", 180.0), pl("Mars", 120.0)]
    found = aspects.detect_aspects(planets, aspects.AspectConfig(excluded_bodies=["Chiron"]))
    assert found
    assert all("Chiron" not in (m.body_a, m.body_b) for m in found)


def test_symmetry_of_pair_order():
    a, b = pl("Venus", 359.0), pl("Mars", 61.5)
    ab = aspects.detect_aspects([a, b])
    ba = aspects.detect_aspects([b, a])
    assert len(ab) == len(ba) == 1
    assert ab[0].aspect_name == ba[0].aspect_name == "Sextile"
    assert ab[0].separation_error == ba[0].separation_error
    assert (ab[0].body_a, ab[0].body_b) == ("Venus", "Mars")
    assert (ba[0].body_a, ba[0].body_b) == ("Mars", "Venus")


def test_one_match_per_pair_and_pair_order():
    planets = [pl("Sun", 0.0), pl("Moon", 0.0), pl("Mars", 180.0), pl("Venus", 90.0)]
    found = aspects.detect_aspects(planets)
    pairs = [(m.body_a, m.body_b) for m in found]
    assert len(pairs) == len(set(pairs))
    assert pairs == [
        ("Sun", "Moon"), ("Sun", "Mars"), ("Sun", "Venus"),
        ("Moon", "Mars"), ("Moon", "Venus"), ("Mars", "Venus"),
    ]
    for m in found:
        assert m.separation_error <= aspects.DEFAULT_ORBS[m.aspect_name]


def test_blank_names_and_unusable_degrees():
    planets = [
        {"planet": {"en": "  "}, "fullDegree": 90.0},
        {"planet": {"en": "Pluto"}, "fullDegree": "not a number"},
        pl("Sun", 1.0),
    ]
    found = aspects.detect_aspects(planets)
    # Pluto falls back to 0° and conjoins the Sun; the blank entry is ignored.
    assert found == [aspects.AspectMatch("Pluto", "Sun", "Conjunction", 1.0)]


def test_language_key_with_english_fallback():
    planets = [
        {"planet": {"en": "Sun", "es": "Sol"}, "fullDegree": 0.0},
        {"planet": {"en": "Moon"}, "fullDegree": 180.0},
    ]
    found = aspects.detect_aspects(planets, aspects.AspectConfig(language="es"))
    assert (found[0].body_a, found[0].body_b, found[0].aspect_name) == ("Sol", "Moon", "Opposition")


def test_idempotent_and_sortable():
    planets = [pl("Sun", 0.0), pl("Moon", 92.0), pl("Mars", 119.0), pl("Venus", 240.5)]
    first = aspects.detect_aspects(planets)
    assert first == aspects.detect_aspects(planets)
    tight = aspects.sort_by_tightness(first)
    assert [m.separation_error for m in tight] == sorted(m.separation_error for m in first)
