class EvolverError(Exception):
    """Base for all vehicle-evolver exceptions."""

    pass


class PreconditionError(EvolverError, ValueError):
    """A caller broke an operation's precondition (programming error)."""

    pass


class MissingFitnessError(PreconditionError):
    """Fitness was required but at least one individual has none."""

    pass


class InvalidTransitionError(PreconditionError):
    """Illegal slot status transition."""

    pass
