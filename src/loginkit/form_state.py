"""
Submission state for the login form.

These states coordinate the controller and the widgets showing the form.
"""

from dataclasses import dataclass
from enum import Enum, auto


class SubmissionState(Enum):
    """
    Enumeration of submission states.

    A submit moves IDLE to ATTEMPTED_VALID then SUBMITTED, or to
    ATTEMPTED_INVALID and back to IDLE once errors are shown.
    """

    IDLE = auto()  # Waiting for input or a submit
    ATTEMPTED_VALID = auto()  # Submit pressed, all fields passed
    ATTEMPTED_INVALID = auto()  # Submit pressed, at least one field failed
    SUBMITTED = auto()  # Credentials handed to the host


@dataclass
class FormState:
    """Per-form flags that live as long as the form itself."""

    # Errors stay hidden until the first submit
    submission_attempted: bool = False
