from dataclasses import asdict
from datetime import datetime, timezone
import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from mars_clock import configure_logging
from mars_time import (
    calculate_mars_time,
    earth_to_msd,
    get_ltst,
    get_mission_sol,
    parse_instant,
)
from rovers import ROVER_LOCATIONS, InvalidRoverError, validate_rover
from terminology import (
    MARS_TERMINOLOGY,
    get_term_definition,
    get_terms_by_category,
    search_terms,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)


class ApiError(ValueError):
    """A client error that becomes a JSON error response."""

    def __init__(self, message, code, status=400, **details):
        super().__init__(message)
        self.code = code
        self.status = status
        self.details = details


@app.errorhandler(ApiError)
def handle_api_error(err):
    return _error_response(str(err), err.code, err.status, err.details)


@app.errorhandler(InvalidRoverError)
def handle_invalid_rover(err):
    return _error_response(
        str(err), err.code, 400, {"validRovers": list(ROVER_LOCATIONS)}
    )


@app.errorhandler(Exception)
def handle_unexpected(err):
    if isinstance(err, HTTPException):
        code = err.name.upper().replace(" ", "_")
        return _error_response(err.description, code, err.code)
    logger.exception("Unhandled error serving %s", request.path)
    return _error_response("Internal server error", "INTERNAL_ERROR", 500)


def _error_response(message, code, status, details=None):
    body = {
        "error": message,
        "code": code,
        "details": details or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return jsonify(body), status


def _parse_time(value, field) -> datetime:
    """ISO-8601 string → aware UTC datetime."""
    if not isinstance(value, str):
        raise ApiError("Invalid time", "INVALID_TIME", field=field, value=value)
    try:
        return parse_instant(value)
    except ValueError:
        raise ApiError("Invalid time", "INVALID_TIME", field=field, value=value)


def _time_or_now(value, field="at") -> datetime:
    """Optional query time; absent means now."""
    if value is None:
        return datetime.now(timezone.utc)
    return _parse_time(value, field)


def _parse_longitude(value, field, required=False):
    if value is None:
        if required:
            raise ApiError(
                "Invalid longitude", "INVALID_LONGITUDE", field=field, value=None
            )
        return None
    try:
        longitude = float(value)
    except (TypeError, ValueError):
        raise ApiError("Invalid longitude", "INVALID_LONGITUDE", field=field, value=value)
    if not -360.0 <= longitude <= 360.0:
        raise ApiError(
            "Longitude must be between -360 and 360 degrees",
            "INVALID_LONGITUDE",
            field=field,
            value=longitude,
        )
    return longitude


@app.route("/api/mars-time", methods=["GET"])
def get_mars_time():
    earth_time = _time_or_now(request.args.get("at"))
    longitudes = {
        "curiosity": _parse_longitude(request.args.get("curiosity"), "curiosity"),
        "perseverance": _parse_longitude(
            request.args.get("perseverance"), "perseverance"
        ),
    }
    snapshot = calculate_mars_time(earth_time, longitudes)
    return jsonify(snapshot.as_dict())


@app.route("/api/mars_time", methods=["POST"])
def get_mars_time_for_station():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "earth_time" not in data or "lon" not in data:
        raise ApiError(
            "Body must be JSON with earth_time and lon", "INVALID_BODY"
        )
    earth_time = _parse_time(data["earth_time"], "earth_time")
    longitude = _parse_longitude(data["lon"], "lon", required=True)
    return jsonify(ltst=get_ltst(earth_time, longitude))


@app.route("/api/rovers/<rover>", methods=["GET"])
def get_rover(rover):
    name = validate_rover(rover)
    location = ROVER_LOCATIONS[name]
    earth_time = _time_or_now(request.args.get("at"))
    return jsonify(
        rover=name,
        name=location.name,
        longitude=location.longitude,
        latitude=location.latitude,
        landingDate=location.landing_date.isoformat(),
        msd=earth_to_msd(earth_time),
        sol=location.landing_sol + get_mission_sol(location.landing_date, earth_time),
        ltst=get_ltst(earth_time, location.longitude),
    )


@app.route("/api/terms", methods=["GET"])
def list_terms():
    query = request.args.get("q")
    category = request.args.get("category")
    if query is not None:
        terms = search_terms(query)
    elif category is not None:
        terms = get_terms_by_category(category)
    else:
        terms = list(MARS_TERMINOLOGY.values())
    return jsonify(terms=[asdict(t) for t in terms])


@app.route("/api/terms/<term>", methods=["GET"])
def get_term(term):
    definition = get_term_definition(term)
    if definition is None:
        raise ApiError("Unknown term", "TERM_NOT_FOUND", status=404, term=term)
    return jsonify(asdict(definition))


if __name__ == "__main__":
    configure_logging(os.environ.get("MARS_TIME_LOG_LEVEL", "INFO"))
    app.run(debug=True, port=8080)
