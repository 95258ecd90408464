import json
import sys
from dataclasses import asdict
from pathlib import Path

from api.services.aspects import AspectConfig, detect_aspects
from api.services.houses import derive_houses


def main() -> None:
    in_path = Path(sys.argv[1])
    out_path = Path(sys.argv[2])
    lang = sys.argv[3] if len(sys.argv) > 3 else "en"
    data = json.loads(in_path.read_text(encoding="utf-8"))
    # Accept either the raw upstream reply or a bare list of placements.
    planets = data.get("output", []) if isinstance(data, dict) else data
    output = {
        "houses": [asdict(h) | {"sign": h.sign_name} for h in derive_houses(planets, lang)],
        "aspects": [asdict(a) for a in detect_aspects(planets, AspectConfig(language=lang))],
    }
    out_path.write_text(json.dumps(output, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Wrote chart → {out_path}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python cli.py planets.json chart.json [lang]")
        sys.exit(1)
    main()
