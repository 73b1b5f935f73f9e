"""
errors.py — Outward-facing error taxonomy
Every command either returns a value or raises exactly one of these.
Serialised as {"type": <kind>, "message": <text>}.
"""


class AppError(Exception):
    kind = "AppError"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"type": self.kind, "message": self.message}

    def __repr__(self):
        return f"{self.kind}({self.message!r})"


class DatabaseError(AppError):
    """Storage engine failure, including constraint violations."""
    kind = "DatabaseError"
    status_code = 500


class NotFound(AppError):
    """An expected single row was absent."""
    kind = "NotFound"
    status_code = 404


class ValidationError(AppError):
    """Input failed a domain rule (empty or oversized title, bad colour...)."""
    kind = "ValidationError"
    status_code = 422


class InvalidInput(AppError):
    """External input could not be coerced into the expected shape."""
    kind = "InvalidInput"
    status_code = 400
