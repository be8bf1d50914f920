from dataclasses import dataclass
from django.core.exceptions import ValidationError


class InvalidScoreValue(ValidationError):
    """A criterion score that is not an integer in [0, 5] reached the scoring core."""

    def __init__(self, value, *, field=None):
        self.value = value
        self.field = field
        where = f" for {field}" if field else ""
        super().__init__(
            f"Invalid score {value!r}{where}: scores must be whole numbers between 1 and 5 (0 or empty = not rated)",
            code="invalid_score",
        )


# Conditions below are returned, never raised: they describe expected user states.

@dataclass(frozen=True)
class IncompleteStep:
    step: int
    message: str


@dataclass(frozen=True)
class MissingSignature:
    evaluation_id: object
    message: str = "Please add a signature before approving this evaluation"


@dataclass(frozen=True)
class AlreadyApproved:
    evaluation_id: object
    message: str = "This evaluation has already been approved"
