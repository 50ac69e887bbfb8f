import math


class ValidationError(ValueError):
    """Raised when request input is missing or malformed. Rendered as HTTP 400."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


def parse_float(name: str, value) -> float:
    """
    Parse a user-supplied number. Booleans, non-numeric text and
    non-finite values raise ValidationError naming the field.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name}", f"{name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}", f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValidationError(f"Invalid {name}", f"{name} must be finite")
    return number
