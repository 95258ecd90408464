"""Static rulebook snippets for narratives."""

BLURB_SUN = {
    "Aries": "direct, pioneering, energized",
    "Taurus": "grounded, steady, sensual",
    "Gemini": "curious, witty, adaptable",
    "Cancer": "protective, intuitive, nurturing",
    "Leo": "expressive, bold, warm",
    "Virgo": "precise, helpful, discerning",
    "Libra": "relational, balanced, aesthetic",
    "Scorpio": "intense, perceptive, transformative",
    "Sagittarius": "expansive, candid, adventurous",
    "Capricorn": "disciplined, strategic, patient",
    "Aquarius": "original, humanitarian, future-minded",
    "Pisces": "empathetic, imaginative, porous",
}

BLURB_MOON = {
    "Aries": "acts fast on feelings",
    "Taurus": "needs calm & comfort",
    "Gemini": "talks feelings out",
    "Cancer": "home-centered heart",
    "Leo": "needs to be seen",
    "Virgo": "seeks useful order",
    "Libra": "soothes through harmony",
    "Scorpio": "deep waters; all-or-nothing",
    "Sagittarius": "needs open space",
    "Capricorn": "stoic container",
    "Aquarius": "cool-headed reflector",
    "Pisces": "soaks moods, needs rest",
}

BLURB_ASC = {
    "Aries": "comes in hot; straight shooter",
    "Taurus": "unhurried, dependable presence",
    "Gemini": "quick, lively, chatty",
    "Cancer": "soft shell, warm center",
    "Leo": "sunny, generous aura",
    "Virgo": "neat, noticing everything",
    "Libra": "graceful diplomat",
    "Scorpio": "quiet magnetism",
    "Sagittarius": "big laugh, bigger horizon",
    "Capricorn": "calm, competent",
    "Aquarius": "quirky, friendly outsider",
    "Pisces": "gentle, dreamy vibe",
}

ASPECT_TONE = {
    "Conjunction": "amplifies",
    "Trine": "flows easily with",
    "Sextile": "supports and opens a door with",
    "Square": "challenges and sharpens",
    "Opposition": "asks for balance with",
}

PLANET_VERBS = {
    "Sun": "identity",
    "Moon": "mood",
    "Mercury": "mind & messages",
    "Venus": "love & aesthetics",
    "Mars": "drive & action",
    "Jupiter": "growth & opportunity",
    "Saturn": "discipline & boundaries",
    "Uranus": "surprise & freedom",
    "Neptune": "dreams & intuition",
    "Pluto": "power & transformation",
}

INSIGHT_SNIPPETS = {
    "no_natal_aspects": "None of the major aspects stood out tightly.",
    "no_transits": "Nothing major pinging the core today. Take it steady and follow your baseline rhythm.",
    "wrap": "Take what resonates, leave the rest. Use the easy flows; respect the edges. You've got this.",
    "empty": "Generate your chart first, then ask for insights.",
}

AI_SYSTEM_PROMPT = "You are a concise, kind, practical astrologer."
