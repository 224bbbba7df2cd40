"""Exception types raised by netlat."""


class ValidationError(ValueError):
    """Invalid input: bad vertex index, edge field, medium or topology text.

    Raised at construction or at the start of an analysis. Never coerced into a
    default value.
    """


class InternalInconsistencyError(AssertionError):
    """An analysis failed its own optimality or feasibility self-check.

    This indicates a defect in the algorithm, not a user error.
    """
