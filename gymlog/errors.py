"""Error taxonomy shared by the data access layer and the HTTP API.

Each error knows the HTTP status it maps to and the short code placed in
the JSON error body, so the API layer can translate them without a lookup
table.
"""


class GymlogError(Exception):
    status_code = 500
    error_code = "internal_error"
    public_message = "Internal server error"

    def to_dict(self) -> dict:
        return {"error": self.error_code, "message": self.public_message}


class ValidationError(GymlogError):
    """Malformed or missing input. ``fields`` maps field name to problem."""

    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str = "Invalid input", fields: dict | None = None):
        super().__init__(message)
        self.message = message
        self.fields = dict(fields or {})

    def to_dict(self) -> dict:
        return {"error": self.error_code, "message": self.message, "fields": self.fields}


class NotFoundError(GymlogError):
    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str, resource_id):
        super().__init__(f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id

    def to_dict(self) -> dict:
        return {"error": self.error_code, "message": str(self)}


class ForeignKeyError(GymlogError):
    """A child row referenced a parent the store does not have."""


class InternalError(GymlogError):
    """Unexpected store or runtime failure."""
