from __future__ import annotations

import logging
from typing import Any, List

from flask import Flask, current_app, jsonify, request

from .harmony import SCHEMES, get_analogous, get_complementary, get_triadic
from .levels import LevelGenerator, PuzzleType, UnknownPuzzleTypeError
from .mixing import MixMode, mix
from .models import SPACES, RGBColor, convert
from .palette import NAMED
from .similarity import similarity

log = logging.getLogger(__name__)

MAX_DROPS = 256


def parse_color(s: str | None) -> RGBColor:
    """A hex string ('#f80', 'ff8800') or one of the named swatches."""
    raw = (s or "").strip().lower()
    if raw in NAMED:
        return NAMED[raw]
    return RGBColor.from_hex(raw)


def parse_colors(val: str | None) -> List[RGBColor]:
    items = [p for p in (val or "").split(",") if p.strip()]
    if len(items) > MAX_DROPS:
        raise ValueError(f"at most {MAX_DROPS} colors per mix")
    return [parse_color(p) for p in items]


def parse_int(name: str, default: int | None) -> int | None:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None


def color_json(color: Any) -> dict[str, Any]:
    out = color.to_dict()
    out["hex"] = color.to_rgb().to_hex()
    return out


def bad_request(msg: str, supported: Any = None):
    body: dict[str, Any] = {"error": msg}
    if supported is not None:
        body["supported"] = list(supported)
    return jsonify(body), 400


# ----------------------------- Flask app ----------------------------------


def create_app(default_seed: int | None = None) -> Flask:
    app = Flask(__name__)
    app.config["LEVEL_SEED"] = default_seed
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    @app.route("/")
    def index():
        return jsonify(
            {
                "puzzle_types": [t.value for t in PuzzleType],
                "mix_modes": [m.value for m in MixMode],
                "spaces": list(SPACES),
                "schemes": list(SCHEMES),
            }
        )

    @app.route("/mix")
    def mix_route():
        try:
            colors = parse_colors(request.args.get("colors"))
        except ValueError as e:
            return bad_request(f"invalid color: {e}")
        try:
            mode = MixMode.parse(request.args.get("mode"))
        except ValueError as e:
            return bad_request(str(e), (m.value for m in MixMode))

        result = mix(colors, mode)
        return jsonify({"mode": mode.value, "count": len(colors), "color": color_json(result)})

    @app.route("/convert")
    def convert_route():
        try:
            color = parse_color(request.args.get("color"))
        except ValueError as e:
            return bad_request(f"invalid color: {e}")
        space = (request.args.get("space") or "hsv").lower()
        if space not in SPACES:
            return bad_request(f"unknown color space '{space}'", SPACES)
        return jsonify({"space": space, "color": convert(color, space).to_dict()})

    @app.route("/harmony")
    def harmony_route():
        try:
            color = parse_color(request.args.get("color"))
            count = parse_int("count", 3)
        except ValueError as e:
            return bad_request(str(e))
        scheme = (request.args.get("scheme") or "analogous").lower()
        if scheme not in SCHEMES:
            return bad_request(f"unknown scheme '{scheme}'", SCHEMES)

        if scheme == "complementary":
            colors = [color, get_complementary(color)]
        elif scheme == "triadic":
            colors = get_triadic(color)
        else:
            try:
                interval = float(request.args.get("interval", 30.0))
            except ValueError:
                return bad_request("interval must be a number")
            n = min(3 if count is None else count, 36)
            colors = get_analogous(color, count=n, interval=interval)
        return jsonify({"scheme": scheme, "colors": [c.to_hex() for c in colors]})

    @app.route("/similarity")
    def similarity_route():
        try:
            a = parse_color(request.args.get("a"))
            b = parse_color(request.args.get("b"))
        except ValueError as e:
            return bad_request(f"invalid color: {e}")
        score = similarity(a, b)
        body: dict[str, Any] = {"similarity": score}
        threshold = request.args.get("threshold")
        if threshold:
            try:
                body["match"] = score >= float(threshold)
            except ValueError:
                return bad_request("threshold must be a number")
        return jsonify(body)

    @app.route("/level/<puzzle_type>/<int:level>")
    def level_route(puzzle_type: str, level: int):
        try:
            seed = parse_int("seed", current_app.config["LEVEL_SEED"])
            puzzle = LevelGenerator.seeded(seed).generate(puzzle_type, level)
        except UnknownPuzzleTypeError as e:
            return bad_request(str(e), (t.value for t in PuzzleType))
        except ValueError as e:
            return bad_request(str(e))
        except Exception as exc:
            log.exception("Level generation failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(puzzle.to_dict())

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
