"""Sizing and checking of the run capacitor of a PSC motor.

The capacitance needed follows from the current measured on the start
winding and the voltage measured across the capacitor (run to common)
while the motor is running.
"""
from dataclasses import dataclass, field
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import (
    Advisory,
    AdvisoryCode,
    InvalidOperatingPointError,
    parse_quantity,
    is_missing
)

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

CAPACITANCE_FACTOR = 2653.0  # µF.V/A, i.e. 1e6 / (2.pi.60 Hz)
TOLERANCE = 0.06             # of the rated value


class CapacitorAdvisory(AdvisoryCode):
    OUT_OF_TOLERANCE = (
        "Measured capacitance deviates {deviation:+.1f}% from the rated "
        "{rated:.1f} µF, outside the ±6% tolerance - replace the capacitor"
    )


@dataclass(frozen=True)
class CapacitorInputs:
    start_winding_current: Quantity | None = None
    voltage: Quantity | None = None
    rated_capacitance: Quantity | None = None

    @classmethod
    def from_text(
        cls,
        start_winding_current: str | None = None,
        voltage: str | None = None,
        rated_capacitance: str | None = None
    ) -> 'CapacitorInputs':
        """Creates the inputs from text fields: current in A, voltage in V,
        rated capacitance in µF.
        """
        return cls(
            start_winding_current=parse_quantity(start_winding_current, 'A'),
            voltage=parse_quantity(voltage, 'V'),
            rated_capacitance=parse_quantity(rated_capacitance, 'uF')
        )


@dataclass(frozen=True)
class RatedComparison:
    rated_capacitance: Quantity
    deviation: Quantity
    within_tolerance: bool


@dataclass(frozen=True)
class CapacitorResult:
    capacitance: Quantity
    min_capacitance: Quantity
    max_capacitance: Quantity
    rated_comparison: RatedComparison | None = None
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)


def run_capacitance(current: Quantity, voltage: Quantity) -> Quantity:
    """Returns the capacitance that passes `current` at `voltage` and
    60 Hz.

    Raises
    ------
    InvalidOperatingPointError
        If `voltage` is zero or negative.
    """
    I = current.to('A').m
    V = voltage.to('V').m
    if V <= 0.0:
        raise InvalidOperatingPointError("the voltage must be greater than zero")
    return Q_(CAPACITANCE_FACTOR * I / V, 'uF')


def compare_with_rated(C: Quantity, C_rated: Quantity) -> RatedComparison:
    """Returns the deviation of the calculated capacitance `C` from the
    rated capacitance `C_rated` printed on the capacitor.
    """
    c_rated = C_rated.to('uF').m
    if c_rated <= 0.0:
        raise InvalidOperatingPointError(
            "the rated capacitance must be greater than zero"
        )
    deviation = (C.to('uF').m - c_rated) / c_rated
    return RatedComparison(
        rated_capacitance=C_rated.to('uF'),
        deviation=Q_(deviation * 100, 'pct'),
        within_tolerance=abs(deviation) <= TOLERANCE
    )


def calculate_capacitor(inputs: CapacitorInputs) -> CapacitorResult | None:
    """Returns the required run capacitance with its tolerance range, and the
    comparison with the rated capacitance if one is given. Returns None if
    the current or the voltage is missing.
    """
    if is_missing(inputs.start_winding_current, inputs.voltage):
        logger.debug("Insufficient input: capacitor not calculated.")
        return None

    C = run_capacitance(inputs.start_winding_current, inputs.voltage)
    warnings = []
    comparison = None
    if inputs.rated_capacitance is not None:
        comparison = compare_with_rated(C, inputs.rated_capacitance)
        if not comparison.within_tolerance:
            warnings.append(CapacitorAdvisory.OUT_OF_TOLERANCE(
                deviation=comparison.deviation.m,
                rated=comparison.rated_capacitance.m
            ))
    logger.debug(f"C = {C:~P.2f}")

    return CapacitorResult(
        capacitance=C,
        min_capacitance=C * (1 - TOLERANCE),
        max_capacitance=C * (1 + TOLERANCE),
        rated_comparison=comparison,
        warnings=tuple(warnings)
    )
