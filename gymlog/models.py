from datetime import datetime, timezone

from . import db

NAME_MAX_LENGTH = 120


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(value: datetime) -> str:
    """ISO-8601 in UTC with a ``Z`` suffix; SQLite hands back naive datetimes."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class Workout(db.Model):
    __tablename__ = "workouts"
    # AUTOINCREMENT keeps SQLite from reusing the id of a deleted newest row
    __table_args__ = {"sqlite_autoincrement": True}
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    exercises = db.relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": isoformat(self.created_at),
        }


class Exercise(db.Model):
    __tablename__ = "exercises"
    # AUTOINCREMENT keeps SQLite from reusing the id of a deleted newest row
    __table_args__ = {"sqlite_autoincrement": True}
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    workout_id = db.Column(
        db.Integer,
        db.ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    workout = db.relationship("Workout", back_populates="exercises")
    sets = db.relationship(
        "WorkoutSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": isoformat(self.created_at),
            "workoutId": self.workout_id,
        }


class WorkoutSet(db.Model):
    __tablename__ = "sets"
    # AUTOINCREMENT keeps SQLite from reusing the id of a deleted newest row
    __table_args__ = {"sqlite_autoincrement": True}
    id = db.Column(db.Integer, primary_key=True)

    exercise_id = db.Column(
        db.Integer,
        db.ForeignKey("exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reps = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    exercise = db.relationship("Exercise", back_populates="sets")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "reps": self.reps,
            "weight": self.weight,
            "createdAt": isoformat(self.created_at),
            "exerciseId": self.exercise_id,
        }
