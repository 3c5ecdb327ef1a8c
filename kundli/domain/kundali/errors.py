class KundaliError(Exception):
    """
    Base exception for all kundali-related domain errors.
    """
    pass


class InvalidInputError(KundaliError):
    """
    Raised when birth inputs or calculation settings are missing,
    out of range, or inconsistent.
    """
    pass


class ProviderUnavailableError(KundaliError):
    """
    Raised when the ephemeris provider fails, or returns out-of-range
    data, for a requested instant.
    """
    pass


class IncompleteComputationError(KundaliError):
    """
    Raised when fewer than the nine required body positions were resolved.

    Chart assembly cannot continue from a partial set of positions.
    """
    pass


class DivisionalChartError(KundaliError):
    """
    Raised when a single divisional scheme cannot be computed.

    Isolated by the divisional builder and reported per scheme.
    """
    pass
