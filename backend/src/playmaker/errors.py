"""Engine error types.

Both errors subclass ValueError so callers that already treat bad input as
ValueError keep working. Neither is ever raised after output has been
produced; the engine returns a complete result or nothing.
"""


class InvalidInputError(ValueError):
    """Malformed or out-of-bound input, raised before any computation starts."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}" if field else message)

    def to_dict(self) -> dict:
        return {"error": "invalid_input", "field": self.field, "message": self.message}


class AdaptationError(ValueError):
    """Role assignment is well-formed but cannot be satisfied by the roster."""

    def __init__(self, unfillable_roles: list[str], reason: str = ""):
        self.unfillable_roles = list(unfillable_roles)
        self.reason = reason or "No valid roster member for role(s)"
        super().__init__(f"{self.reason}: {', '.join(self.unfillable_roles)}")

    def to_dict(self) -> dict:
        return {
            "error": "adaptation_failed",
            "reason": self.reason,
            "unfillableRoles": self.unfillable_roles,
        }
