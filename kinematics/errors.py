"""Request validation errors raised by the motion session."""


class MotionInputError(ValueError):
    """A motion request was rejected before any physics was computed."""


class MissingGravityError(MotionInputError):
    """Gravity magnitude was absent or not a number."""

    def __init__(self, value=None):
        super().__init__(f"Gravity (g) is required and must be a number, got {value!r}")
        self.value = value


class WrongKnownCountError(MotionInputError):
    """The request did not supply exactly two of vi, vf, h and t."""

    def __init__(self, known: tuple[str, ...]):
        names = ", ".join(known) if known else "none"
        super().__init__(
            "Exactly two of initial velocity (vi), final velocity (vf), "
            f"displacement (h) and time (t) must be given besides gravity; got {names}"
        )
        self.known = known


class InvalidInputError(MotionInputError):
    """A supplied quantity is not usable (not numeric, or impossible for the scenario)."""
