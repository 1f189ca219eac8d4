"""Data access for workouts, their exercises and the sets under each exercise.

All functions expect an active application context. Writes commit before
returning and roll back on any failure, so a call either lands completely or
leaves the store untouched.

Ids and rep counts are stored as signed 64-bit integers. A positive id above
that range is well-formed but can never name a stored row, so reads treat it
as absent instead of handing it to the driver.
"""

import math

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from . import db
from .errors import ForeignKeyError, InternalError, NotFoundError, ValidationError
from .models import NAME_MAX_LENGTH, Exercise, Workout, WorkoutSet

MAX_INTEGER = 2**63 - 1


def _is_int(value) -> bool:
    # bool is a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


def _check_id(value, field: str, errors: dict) -> None:
    if not _is_int(value) or value <= 0:
        errors[field] = "must be a positive integer"


def _storable(row_id: int) -> bool:
    return row_id <= MAX_INTEGER


def _check_name(value, errors: dict):
    if not isinstance(value, str):
        errors["name"] = "must be a string"
        return None
    name = value.strip()
    if not name:
        errors["name"] = "must not be empty"
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = f"must be at most {NAME_MAX_LENGTH} characters"
    return name


def _check_reps(value, errors: dict) -> None:
    if not _is_int(value) or value <= 0:
        errors["reps"] = "must be a positive integer"
    elif value > MAX_INTEGER:
        errors["reps"] = f"must be at most {MAX_INTEGER}"


def _check_weight(value, errors: dict):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors["weight"] = "must be a non-negative number"
        return None
    try:
        weight = float(value)
    except OverflowError:
        errors["weight"] = "is too large"
        return None
    if not math.isfinite(weight) or weight < 0:
        errors["weight"] = "must be a non-negative number"
        return None
    return weight


def _raise_if(errors: dict) -> None:
    if errors:
        raise ValidationError("Invalid input", errors)


def _missing_parent(operation: str, resource: str, parent_id: int):
    return ForeignKeyError(f"{operation}: {resource} {parent_id} is out of range")


def _commit(operation: str) -> None:
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise ForeignKeyError(f"{operation}: {e.orig}") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        raise InternalError(f"{operation}: {e}") from e
    except Exception:
        db.session.rollback()
        raise


def _read(query):
    try:
        return query.all()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise InternalError(str(e)) from e
    except Exception:
        db.session.rollback()
        raise


def list_workouts() -> list[Workout]:
    return _read(Workout.query.order_by(Workout.created_at.desc(), Workout.id.desc()))


def create_workout(name) -> Workout:
    errors = {}
    name = _check_name(name, errors)
    _raise_if(errors)

    workout = Workout(name=name)
    db.session.add(workout)
    _commit("create_workout")
    return workout


def delete_workout(workout_id) -> None:
    """Delete a workout with its exercises and their sets in one transaction."""
    errors = {}
    _check_id(workout_id, "id", errors)
    _raise_if(errors)

    if not _storable(workout_id):
        raise NotFoundError("Workout", workout_id)

    try:
        workout = db.session.get(Workout, workout_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise InternalError(str(e)) from e
    if workout is None:
        raise NotFoundError("Workout", workout_id)

    # relationship cascades flush sets, then exercises, then the workout
    db.session.delete(workout)
    _commit("delete_workout")


def list_exercises(workout_id) -> list[Exercise]:
    """Exercises of a workout, newest first. An unknown workout yields ``[]``."""
    errors = {}
    _check_id(workout_id, "workoutId", errors)
    _raise_if(errors)

    if not _storable(workout_id):
        return []
    return _read(
        Exercise.query.filter_by(workout_id=workout_id)
        .order_by(Exercise.created_at.desc(), Exercise.id.desc())
    )


def create_exercise(workout_id, name) -> Exercise:
    errors = {}
    _check_id(workout_id, "workoutId", errors)
    name = _check_name(name, errors)
    _raise_if(errors)

    # no parent pre-check: a missing workout surfaces as ForeignKeyError
    if not _storable(workout_id):
        raise _missing_parent("create_exercise", "workout", workout_id)

    exercise = Exercise(workout_id=workout_id, name=name)
    db.session.add(exercise)
    _commit("create_exercise")
    return exercise


def list_sets(exercise_id) -> list[WorkoutSet]:
    errors = {}
    _check_id(exercise_id, "exerciseId", errors)
    _raise_if(errors)

    if not _storable(exercise_id):
        return []
    return _read(
        WorkoutSet.query.filter_by(exercise_id=exercise_id)
        .order_by(WorkoutSet.created_at.desc(), WorkoutSet.id.desc())
    )


def create_set(exercise_id, reps, weight) -> WorkoutSet:
    errors = {}
    _check_id(exercise_id, "exerciseId", errors)
    _check_reps(reps, errors)
    weight = _check_weight(weight, errors)
    _raise_if(errors)

    if not _storable(exercise_id):
        raise _missing_parent("create_set", "exercise", exercise_id)

    workout_set = WorkoutSet(exercise_id=exercise_id, reps=reps, weight=weight)
    db.session.add(workout_set)
    _commit("create_set")
    return workout_set
