#!/usr/bin/env python3
"""
Flask campus route demo for the UniBH campus.

- Pick an origin and a destination among the known campus places; the server
  resolves both names (accent/case insensitive) and draws an arched line.
- Unknown names come back with "did you mean" suggestions for each side.
- Free-text search tries the gazetteer first, then OpenStreetMap Nominatim.
- Secret key pulled from env (CAMPUSROUTE_SECRET) or randomized at boot.
- JSON API under /campus/api/ for the map front-end or automation.
"""

import os
import logging
import secrets

from flask import (
    Flask, current_app, render_template_string, request, redirect, url_for, flash, jsonify
)

import geocode
from errors import InternalError, NotFoundError, ServiceUnavailableError
from places import PLACES_CSV, load_places
from route_map import make_map
from routing import compute_route

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Config
# --------------------------------------------------------------------
SECRET = os.environ.get("CAMPUSROUTE_SECRET") or secrets.token_hex(32)
LOG_LEVEL = os.environ.get("CAMPUSROUTE_LOG_LEVEL", "INFO")


def current_places():
    """Gazetteer for this app; reloaded only when the CSV changes."""
    return load_places(current_app.config["PLACES_CSV"])


def describe_not_found(err: NotFoundError) -> str:
    parts = []
    for side in ("origin", "destination"):
        names = err.suggestions.get(side) or []
        if names:
            parts.append(f"{side}: did you mean {', '.join(names)}?")
    return "Place not found. " + " ".join(parts) if parts else "Place not found."


# --------------------------------------------------------------------
# Flask app
# --------------------------------------------------------------------
app = Flask(__name__)
app.secret_key = SECRET
app.config.update(
    PLACES_CSV=PLACES_CSV,
    SESSION_COOKIE_HTTPONLY=True,
    SESSION_COOKIE_SAMESITE="Lax",
    SESSION_COOKIE_SECURE=False  # set True in production with HTTPS
)


@app.route("/campus/", methods=["GET", "POST"])
def index():
    places = current_places()

    if request.method == "POST":
        origin = (request.form.get("origin") or "").strip()
        destination = (request.form.get("destination") or "").strip()

        if not origin or not destination:
            flash("Please fill in both Origin and Destination.")
            return redirect(url_for("index"))

        try:
            route = compute_route(origin, destination, places)
        except NotFoundError as e:
            flash(describe_not_found(e))
            return redirect(url_for("index"))
        except InternalError as e:
            logger.error("Route page failed: %s", e)
            flash("Could not compute the route.")
            return redirect(url_for("index"))

        map_html = make_map(places, route=route)
        return render_template_string(
            TEMPLATE_RESULT, origin=origin, destination=destination, route=route, map_html=map_html
        )

    # GET
    return render_template_string(TEMPLATE_FORM, locations=places.names, map_html=make_map(places))


@app.route("/campus/search", methods=["GET", "POST"])
def search():
    places = current_places()
    place = (request.values.get("place") or "").strip()
    if not place:
        flash("Type a place to search for.")
        return redirect(url_for("index"))

    try:
        coord = geocode.locate_place(place, places)
    except ServiceUnavailableError:
        flash("The map search service is unavailable, try again later.")
        return redirect(url_for("index"))

    if coord is None:
        flash(f"No results for {place}.")
        return redirect(url_for("index"))

    map_html = make_map(places, marker=(place, coord))
    return render_template_string(TEMPLATE_SEARCH, place=place, coord=coord, map_html=map_html)


# --------------------------------------------------------------------
# JSON API
# --------------------------------------------------------------------
@app.route("/campus/api/places", methods=["GET"])
def api_places():
    return jsonify(current_places().to_dict())


@app.route("/campus/api/route", methods=["POST"])
def api_route():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InternalError("Request body must be a JSON object")
    origin = data.get("origin")
    destination = data.get("destination")
    if origin is None or destination is None:
        raise InternalError("origin and destination are required")

    route = compute_route(origin, destination, current_places())
    return jsonify(route.to_dict())


@app.route("/campus/api/search", methods=["GET"])
def api_search():
    place = (request.args.get("place") or "").strip()
    if not place:
        return jsonify({"error": "place required"}), 400
    coord = geocode.search_place(place)
    return jsonify(list(coord) if coord is not None else None)


@app.errorhandler(NotFoundError)
def handle_not_found(e):
    return jsonify(e.to_dict()), e.status_code


@app.errorhandler(ServiceUnavailableError)
def handle_service_unavailable(e):
    return jsonify({"error": "geocoding unavailable"}), e.status_code


@app.errorhandler(InternalError)
def handle_internal(e):
    logger.error("Internal error: %s", e)
    return jsonify({"error": "internal error", "details": str(e)}), e.status_code


@app.errorhandler(500)
def handle_server_error(e):
    cause = getattr(e, "original_exception", None) or e
    logger.error("Unhandled error: %s", cause)
    return jsonify({"error": "internal error", "details": str(cause)}), 500


# --------------------------------------------------------------------
# Templates
# --------------------------------------------------------------------
TEMPLATE_FORM = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>UniBH Campus Route</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <style>
    body{font-family:Arial,Helvetica,sans-serif;margin:1rem;background:#f7f9fc}
    form{max-width:28rem}
    input[type=text]{display:block;width:100%;padding:.5em;margin:.2em 0 .8em;box-sizing:border-box}
    .msg{color:#c00;margin:.5em 0}
    .places{columns:2;color:#333}
    #map{margin-top:1rem}
  </style>
</head>
<body>
  <div>
    <h1>Campus route</h1>

    {% with messages = get_flashed_messages() %}
      {% if messages %}
        {% for m in messages %}
          <div class="msg">{{m}}</div>
        {% endfor %}
      {% endif %}
    {% endwith %}

    <form method="post" action="{{ url_for('index') }}">
      <label for="origin">Origin:</label>
      <input type="text" name="origin" id="origin" list="locations" placeholder="Ex: Raizes 1">

      <label for="destination">Destination:</label>
      <input type="text" name="destination" id="destination" list="locations" placeholder="Ex: Bloco A">

      <datalist id="locations">
        {% for loc in locations %}
          <option value="{{loc}}">
        {% endfor %}
      </datalist>

      <button type="submit">Find route</button>
    </form>

    <form method="get" action="{{ url_for('search') }}">
      <label for="place">Search a place:</label>
      <input type="text" name="place" id="place" placeholder="Ex: Biblioteca">
      <button type="submit">Search</button>
    </form>

    <ul class="places">
      {% for loc in locations %}
        <li>{{loc}}</li>
      {% endfor %}
    </ul>
  </div>
  <div id="map">{{map_html|safe}}</div>
</body>
</html>
"""

TEMPLATE_RESULT = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Route: {{origin}} ➜ {{destination}}</title>
  <style>
    body{font-family:Arial,Helvetica,sans-serif;margin:1rem}
    code{background:#f2f2f2;padding:0 .2em}
    #map{margin-top:1rem}
    a{margin-top:1rem;display:inline-block}
  </style>
</head>
<body>
  <h2>Route: {{origin}} ➜ {{destination}}</h2>
  <div>Origin: <code>{{'%.6f'|format(route.origin.lat)}}, {{'%.6f'|format(route.origin.lng)}}</code></div>
  <div>Destination: <code>{{'%.6f'|format(route.destination.lat)}}, {{'%.6f'|format(route.destination.lng)}}</code></div>
  <div id="map">{{map_html|safe}}</div>
  <a href="{{ url_for('index') }}">⇠ New search</a>
</body>
</html>
"""

TEMPLATE_SEARCH = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{place}}</title>
  <style>
    body{font-family:Arial,Helvetica,sans-serif;margin:1rem}
    code{background:#f2f2f2;padding:0 .2em}
    #map{margin-top:1rem}
    a{margin-top:1rem;display:inline-block}
  </style>
</head>
<body>
  <h2>{{place}}</h2>
  <div><code>{{'%.6f'|format(coord.lat)}}, {{'%.6f'|format(coord.lng)}}</code></div>
  <div id="map">{{map_html|safe}}</div>
  <a href="{{ url_for('index') }}">⇠ Back</a>
</body>
</html>
"""

# --------------------------------------------------------------------
# Entrypoint
# --------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=False, host="127.0.0.1", port=5555)
