"""Assemble narrative blocks from rulebook snippets."""
from typing import Dict, Any, List, Optional

from ..constants import (
    ANGLES,
    CORE_PLANETS,
    ELEMENT_BY_SIGN,
    MAJOR_ASPECTS,
    QUALITY_BY_SIGN,
    SIGN_NAMES,
)
from ..aspects import _angle_diff
from ..placements import CelestialPlacement
from ..transits import TransitAspect, detect_transit_aspects, top_transits
from .context import ChartContext
from .rulebook import (
    ASPECT_TONE,
    BLURB_ASC,
    BLURB_MOON,
    BLURB_SUN,
    INSIGHT_SNIPPETS,
    PLANET_VERBS,
)

ANGULAR_ORB = 10.0


def _sign(p: Optional[CelestialPlacement]) -> Optional[str]:
    if p is None or p.sign_index is None:
        return None
    return SIGN_NAMES[p.sign_index]


def _core(ctx: ChartContext) -> List[CelestialPlacement]:
    return [p for p in ctx.placements if p.canonical_name in CORE_PLANETS]


def snapshot_lines(ctx: ChartContext) -> List[str]:
    sun, moon, asc = _sign(ctx.find("Sun")), _sign(ctx.find("Moon")), _sign(ctx.find("Ascendant"))
    lines = []
    if sun:
        lines.append(f"• Sun in {sun}: {BLURB_SUN.get(sun, '')}")
    if moon:
        lines.append(f"• Moon in {moon}: {BLURB_MOON.get(moon, '')}")
    if asc:
        lines.append(f"• Rising {asc}: {BLURB_ASC.get(asc, '')}")
    return lines


def theme_lines(ctx: ChartContext) -> List[str]:
    core = _core(ctx)
    elements = {"Fire": 0, "Earth": 0, "Air": 0, "Water": 0}
    qualities = {"Cardinal": 0, "Fixed": 0, "Mutable": 0}
    sign_counts: Dict[str, int] = {}
    for p in core:
        s = _sign(p)
        if not s:
            continue
        elements[ELEMENT_BY_SIGN[s]] += 1
        qualities[QUALITY_BY_SIGN[s]] += 1
        sign_counts[s] = sign_counts.get(s, 0) + 1

    # max() keeps the first of equal counts, so ties resolve in table order.
    lines = [
        f"• Element emphasis: {max(elements, key=elements.get)}",
        f"• Mode emphasis: {max(qualities, key=qualities.get)}",
    ]

    stellium = next((s for s, c in sign_counts.items() if c >= 3), None)
    if stellium:
        lines.append(f"• Stellium in {stellium} (strong focus here)")

    angle_lons = [a.longitude for a in (ctx.find(n) for n in ANGLES) if a is not None]
    angular = [
        p.canonical_name for p in core
        if any(_angle_diff(p.longitude, lon) <= ANGULAR_ORB for lon in angle_lons)
    ]
    if angular:
        lines.append(f"• Angular emphasis: {', '.join(angular)}")

    retros = [p.canonical_name + "R" for p in core if p.is_retrograde]
    if retros:
        lines.append(f"• Natal retrogrades: {', '.join(retros)}")
    return lines


def natal_aspect_lines(ctx: ChartContext, limit: int = 5) -> List[str]:
    majors = [a for a in ctx.aspects if a.aspect_name in MAJOR_ASPECTS]
    majors = sorted(majors, key=lambda a: a.separation_error)[:limit]
    if not majors:
        return [f"• {INSIGHT_SNIPPETS['no_natal_aspects']}"]
    return [
        f"• {a.body_a} {a.aspect_name} {a.body_b}: {ASPECT_TONE[a.aspect_name]} how these two operate."
        for a in majors
    ]


def transit_hint(t: TransitAspect) -> str:
    target = t.natal_canonical
    if t.aspect_name == "Conjunction":
        return f"Spotlight on {target.lower()}. Lean into awareness and keep the volume at a mindful level."
    if t.aspect_name in ("Trine", "Sextile"):
        return f"Favorable window. Make small moves around {PLANET_VERBS.get(target, 'priorities')}."
    if t.aspect_name in ("Square", "Opposition"):
        return (
            "Tension exposes growth edges. Avoid extremes; choose one concrete action "
            f"to honor {PLANET_VERBS.get(target, 'this area')}."
        )
    return "Notice the nudge. Micro-adjustments go far today."


def transit_lines(ctx: ChartContext) -> List[str]:
    hits = detect_transit_aspects(ctx.transiting, ctx.placements, language=ctx.language)
    top = top_transits(hits)
    if not top:
        return [f"• {INSIGHT_SNIPPETS['no_transits']}"]
    out = []
    for t in top:
        tone = ASPECT_TONE.get(t.aspect_name, "interacts with")
        verb = PLANET_VERBS.get(t.natal_canonical, "life")
        out.append(
            f"• Transit {t.transit_body} {t.aspect_name} natal {t.natal_body}: "
            f"{tone} your {verb}. {transit_hint(t)}"
        )
    return out


def build_insights_text(ctx: ChartContext) -> str:
    """Rule-based reading: snapshot, themes, natal aspects and today's transits."""

    if not ctx.placements:
        return INSIGHT_SNIPPETS["empty"]

    blocks = [
        "\n".join(["Your snapshot:"] + snapshot_lines(ctx)),
        "\n".join(["Chart themes:"] + theme_lines(ctx)),
        "\n".join(["Key natal aspects:"] + natal_aspect_lines(ctx)),
    ]
    if ctx.transiting:
        blocks.append("\n".join(["Today's alignment for you:"] + transit_lines(ctx)))
    blocks.append(INSIGHT_SNIPPETS["wrap"])
    return "\n\n".join(blocks)


def build_briefs(ctx: ChartContext) -> Dict[str, Any]:
    """Short readable bullets used to prompt the AI writer."""

    sun, moon, asc = ctx.find("Sun"), ctx.find("Moon"), ctx.find("Ascendant")
    big3 = {
        "sun": f"Sun in {_sign(sun)}" if _sign(sun) else "",
        "moon": f"Moon in {_sign(moon)}" if _sign(moon) else "",
        "rising": f"Rising {_sign(asc)}" if _sign(asc) else "",
    }
    planets_brief = [f"{p.canonical_name} in {_sign(p)}" for p in _core(ctx) if _sign(p)]
    houses_brief = [f"{h.house_number}: {h.sign_name}" for h in ctx.houses]
    aspects_top = [
        f"{a.body_a} {a.aspect_name} {a.body_b}"
        for a in ctx.aspects
        if a.aspect_name in MAJOR_ASPECTS
    ]
    return {
        "big3": big3,
        "planets_brief": planets_brief,
        "houses_brief": houses_brief,
        "aspects_top": aspects_top,
    }


def _bullets(items: List[str], limit: int = 12) -> str:
    return "\n".join(f"- {s}" for s in items[:limit])


def build_ai_prompt(ctx: ChartContext) -> str:
    briefs = build_briefs(ctx)
    birth = ctx.birth or {}
    tz = birth.get("timezone")
    tz_label = "" if tz is None else f"UTC{'+' if tz >= 0 else ''}{tz}"
    location = birth.get("city_state") or (
        f"{birth.get('latitude')}, {birth.get('longitude')}"
        if birth.get("latitude") is not None else ""
    )
    big3 = briefs["big3"]
    return f"""You are an astrologer who writes warm, grounded, practical reflections.
Audience: curious newcomer. Keep it conversational, specific, and empowering. No fatalism.
Tone: friendly coach + 1 short poetic line max; then concrete advice.

Birth:
- Date/Time: {birth.get('date_iso') or ''} {birth.get('time_hm') or ''} ({tz_label})
- Location: {location}

Big 3:
- Sun: {big3['sun']}
- Moon: {big3['moon']}
- Rising: {big3['rising']}

Planets in signs (selected):
{_bullets(briefs['planets_brief'])}

Houses brief (selected):
{_bullets(briefs['houses_brief'])}

Major aspects (top themes):
{_bullets(briefs['aspects_top'])}

Write:
1) A 2-3 sentence snapshot tying Sun/Moon/Rising together.
2) 3 numbered themes you see (each 2-3 sentences, actionable).
3) A tiny "today's focus" (1 sentence) someone could try immediately.
Avoid jargon unless explained. Do not re-list placements; interpret them.""".strip()
