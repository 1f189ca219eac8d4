# gymlog/routes.py

import traceback
from datetime import datetime, timezone

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import HTTPException

from . import dal
from .errors import GymlogError, InternalError, ValidationError
from .logger import log_event
from .models import isoformat

bp = Blueprint("api", __name__)


def parse_id(raw: str, field: str = "id") -> int:
    # only plain decimal digits; int() alone would accept "+5", " 5" or "٥"
    if not (raw.isascii() and raw.isdigit()) or int(raw) <= 0:
        raise ValidationError("Invalid path parameter", {field: "must be a positive integer"})
    return int(raw)


def json_body(*required: str) -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Invalid request body", {"body": "must be a JSON object"})

    missing = {name: "is required" for name in required if name not in body}
    if missing:
        raise ValidationError("Invalid request body", missing)
    return body


@bp.get("/health")
def health():
    return jsonify(
        ok=True,
        service="api",
        timestamp=isoformat(datetime.now(timezone.utc)),
    )


@bp.get("/workouts")
def list_workouts():
    workouts = dal.list_workouts()
    return jsonify([w.to_dict() for w in workouts])


@bp.post("/workouts")
def create_workout():
    body = json_body("name")
    workout = dal.create_workout(body["name"])
    log_event(f"CREATE_WORKOUT success id={workout.id} name={workout.name!r}")
    return jsonify(workout.to_dict()), 201


@bp.delete("/workouts/<workout_id>")
def delete_workout(workout_id: str):
    workout_id = parse_id(workout_id)
    dal.delete_workout(workout_id)
    log_event(f"DELETE_WORKOUT success id={workout_id}")
    return "", 204


@bp.get("/workouts/<workout_id>/exercises")
def list_exercises(workout_id: str):
    workout_id = parse_id(workout_id)
    exercises = dal.list_exercises(workout_id)
    return jsonify([ex.to_dict() for ex in exercises])


@bp.post("/workouts/<workout_id>/exercises")
def create_exercise(workout_id: str):
    workout_id = parse_id(workout_id)
    body = json_body("name")
    exercise = dal.create_exercise(workout_id, body["name"])
    log_event(
        f"CREATE_EXERCISE success id={exercise.id} workout_id={workout_id} "
        f"name={exercise.name!r}"
    )
    return jsonify(exercise.to_dict()), 201


@bp.get("/exercises/<exercise_id>/sets")
def list_sets(exercise_id: str):
    exercise_id = parse_id(exercise_id)
    sets = dal.list_sets(exercise_id)
    return jsonify([ws.to_dict() for ws in sets])


@bp.post("/exercises/<exercise_id>/sets")
def create_set(exercise_id: str):
    exercise_id = parse_id(exercise_id)
    body = json_body("reps", "weight")
    ws = dal.create_set(exercise_id, body["reps"], body["weight"])
    log_event(
        f"ADD_SET success id={ws.id} ex_id={exercise_id} "
        f"weight={ws.weight} reps={ws.reps}"
    )
    return jsonify(ws.to_dict()), 201


def _request_tag() -> str:
    return f"{request.method} {request.path}"


def handle_gymlog_error(e: GymlogError):
    if e.status_code >= 500:
        log_event(
            f"{_request_tag()} {e.error_code} err={type(e).__name__}:{e}\n"
            + "".join(traceback.format_exception(e))
        )
    elif isinstance(e, ValidationError):
        log_event(f"{_request_tag()} {e.error_code} fields={e.fields}")
    else:
        log_event(f"{_request_tag()} {e.error_code} err={e}")
    return jsonify(e.to_dict()), e.status_code


def handle_http_error(e: HTTPException):
    log_event(f"{_request_tag()} http_error status={e.code}")
    code = (e.name or "error").lower().replace(" ", "_")
    return jsonify(error=code, message=e.description), e.code


def handle_unexpected_error(e: Exception):
    log_event(
        f"{_request_tag()} internal_error err={type(e).__name__}:{e}\n"
        + "".join(traceback.format_exception(e))
    )
    return jsonify(InternalError().to_dict()), 500


def register_error_handlers(app) -> None:
    app.register_error_handler(GymlogError, handle_gymlog_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected_error)
