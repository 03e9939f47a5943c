class CalculationError(Exception):
    """Base class of the errors raised by the calculators."""
    pass


class InvalidOperatingPointError(CalculationError, ValueError):
    """Raised when the inputs describe an operating point for which a
    calculation is undefined, e.g. zero airflow, zero voltage, or a coil that
    does not remove any heat from the air.
    """
    pass
