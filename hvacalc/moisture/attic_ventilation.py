"""Assessment of the ventilation of an attic from pressure, temperature and
dew-point measurements.

The net free vent area of an attic should be at least 1/300 of the attic
floor area, and preferably 1/150, divided between intake (soffit) and
exhaust (ridge) vents in a ratio of 1.5 to 1. A large temperature or
dew-point difference between attic and outdoors, or a large pressure
difference, points to insufficient ventilation.
"""
import math
from enum import Enum
from dataclasses import dataclass, field
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import Advisory, AdvisoryCode, parse_quantity, is_missing

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

STACK_EFFECT_COEFFICIENT = 0.0188   # CFM/(ft².°F^0.5)
MIN_VENT_RATIO = 1 / 300
RECOMMENDED_VENT_RATIO = 1 / 150
INTAKE_TO_EXHAUST_RATIO = 1.5

HIGH_TEMPERATURE_DIFFERENCE = Q_(20.0, 'delta_degF')
CRITICAL_TEMPERATURE_DIFFERENCE = Q_(30.0, 'delta_degF')
HIGH_PRESSURE_DIFFERENCE = Q_(2.0, 'Pa')
HIGH_DEW_POINT_DIFFERENCE = Q_(5.0, 'delta_degF')


class VentilationStatus(Enum):
    ADEQUATE = 0
    INADEQUATE = 1
    CRITICAL = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def escalate(self, status: 'VentilationStatus') -> 'VentilationStatus':
        """Returns the more severe of this status and `status`."""
        return max(self, status, key=lambda s: s.value)


class AtticWarning(AdvisoryCode):
    HIGH_TEMPERATURE_DIFFERENCE = (
        "High temperature differential indicates insufficient ventilation"
    )
    CRITICAL_TEMPERATURE_DIFFERENCE = (
        "Critical temperature differential - immediate action recommended"
    )
    HIGH_PRESSURE_DIFFERENCE = (
        "High pressure differential may indicate blocked vents or "
        "insufficient ventilation"
    )
    HIGH_MOISTURE = (
        "High moisture levels in attic - increased ventilation recommended"
    )
    BELOW_MINIMUM_VENT_AREA = (
        "Existing ventilation area below minimum code requirements"
    )


class AtticRecommendation(AdvisoryCode):
    INCREASE_VENT_AREA = (
        "Consider increasing ventilation area to meet recommended guidelines"
    )
    ADD_INTAKE = "Add {area:.1f} sq ft of intake ventilation"
    ADD_EXHAUST = "Add {area:.1f} sq ft of exhaust ventilation"
    INSTALL_INTAKE = "Install {area:.1f} sq ft of intake ventilation"
    INSTALL_EXHAUST = "Install {area:.1f} sq ft of exhaust ventilation"
    BALANCE_WITH_EXHAUST = (
        "Consider adding more exhaust ventilation to balance pressure"
    )
    BALANCE_WITH_INTAKE = (
        "Consider adding more intake ventilation to balance pressure"
    )


@dataclass(frozen=True)
class AtticVentilationInputs:
    """Inputs of the attic ventilation assessment.

    Attributes
    ----------
    pressure_difference:
        Pressure of the attic with respect to outdoors. Positive values
        indicate a higher attic pressure.
    outdoor_temperature, outdoor_dew_point:
        Measured outdoor conditions.
    attic_temperature, attic_dew_point:
        Measured attic conditions.
    attic_area:
        Floor area of the attic.
    existing_intake_area, existing_exhaust_area:
        Net free area of the existing vents, if known.
    """
    pressure_difference: Quantity | None = None
    outdoor_temperature: Quantity | None = None
    outdoor_dew_point: Quantity | None = None
    attic_temperature: Quantity | None = None
    attic_dew_point: Quantity | None = None
    attic_area: Quantity | None = None
    existing_intake_area: Quantity | None = None
    existing_exhaust_area: Quantity | None = None

    @classmethod
    def from_text(
        cls,
        pressure_difference: str | None = None,
        outdoor_temperature: str | None = None,
        outdoor_dew_point: str | None = None,
        attic_temperature: str | None = None,
        attic_dew_point: str | None = None,
        attic_area: str | None = None,
        existing_intake_area: str | None = None,
        existing_exhaust_area: str | None = None
    ) -> 'AtticVentilationInputs':
        """Creates the inputs from text fields: pressure in Pa, temperatures
        in °F and areas in square feet.
        """
        return cls(
            pressure_difference=parse_quantity(pressure_difference, 'Pa'),
            outdoor_temperature=parse_quantity(outdoor_temperature, 'degF'),
            outdoor_dew_point=parse_quantity(outdoor_dew_point, 'degF'),
            attic_temperature=parse_quantity(attic_temperature, 'degF'),
            attic_dew_point=parse_quantity(attic_dew_point, 'degF'),
            attic_area=parse_quantity(attic_area, 'ft ** 2'),
            existing_intake_area=parse_quantity(existing_intake_area, 'ft ** 2'),
            existing_exhaust_area=parse_quantity(existing_exhaust_area, 'ft ** 2')
        )


@dataclass(frozen=True)
class AtticVentilationResult:
    pressure_difference: Quantity
    temperature_difference: Quantity
    dew_point_difference: Quantity
    stack_effect: Quantity
    minimum_vent_area: Quantity
    recommended_vent_area: Quantity
    required_intake_area: Quantity
    required_exhaust_area: Quantity
    status: VentilationStatus
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)
    recommendations: tuple[Advisory, ...] = field(default_factory=tuple)


def stack_effect(attic_area: Quantity, dT: Quantity) -> Quantity:
    """Returns the airflow through the attic driven by natural convection
    when the attic is `dT` warmer than outdoors. The airflow is negative
    when the attic is colder.
    """
    A = attic_area.to('ft ** 2').m
    dt = dT.to('delta_degF').m
    V_dot = STACK_EFFECT_COEFFICIENT * A * math.copysign(math.sqrt(abs(dt)), dt)
    return Q_(V_dot, 'cfm')


def required_vent_areas(attic_area: Quantity) -> tuple[Quantity, Quantity]:
    """Returns the intake and exhaust vent area that together make up the
    recommended vent area of the attic.
    """
    A_rec = (attic_area * RECOMMENDED_VENT_RATIO).to('ft ** 2')
    A_intake = A_rec * INTAKE_TO_EXHAUST_RATIO / (1 + INTAKE_TO_EXHAUST_RATIO)
    A_exhaust = A_rec - A_intake
    return A_intake, A_exhaust


def calculate_attic_ventilation(
    inputs: AtticVentilationInputs
) -> AtticVentilationResult | None:
    """Assesses the ventilation of the attic.

    Returns None if any of the measurements or the attic area is missing.
    The existing vent areas are optional: when both are given and non-zero,
    they are checked against the minimum and recommended vent area; else
    installation of the full recommended vent area is recommended.
    """
    if is_missing(
        inputs.pressure_difference, inputs.outdoor_temperature,
        inputs.outdoor_dew_point, inputs.attic_temperature,
        inputs.attic_dew_point, inputs.attic_area
    ):
        logger.debug("Insufficient input: attic ventilation not calculated.")
        return None

    p = inputs.pressure_difference.to('Pa')
    dT = (inputs.attic_temperature - inputs.outdoor_temperature).to('delta_degF')
    dT_dp = (inputs.attic_dew_point - inputs.outdoor_dew_point).to('delta_degF')
    A = inputs.attic_area.to('ft ** 2')
    V_stack = stack_effect(A, dT)
    A_min = A * MIN_VENT_RATIO
    A_rec = A * RECOMMENDED_VENT_RATIO
    A_intake, A_exhaust = required_vent_areas(A)
    logger.debug(
        f"dT = {dT:~P.1f}, dT_dp = {dT_dp:~P.1f}, stack effect = {V_stack:~P.0f}, "
        f"intake = {A_intake:~P.1f}, exhaust = {A_exhaust:~P.1f}"
    )

    status = VentilationStatus.ADEQUATE
    warnings = []
    recommendations = []

    if dT > HIGH_TEMPERATURE_DIFFERENCE:
        warnings.append(AtticWarning.HIGH_TEMPERATURE_DIFFERENCE())
        status = status.escalate(VentilationStatus.INADEQUATE)
    if dT > CRITICAL_TEMPERATURE_DIFFERENCE:
        warnings.append(AtticWarning.CRITICAL_TEMPERATURE_DIFFERENCE())
        status = status.escalate(VentilationStatus.CRITICAL)
    if abs(p) > HIGH_PRESSURE_DIFFERENCE:
        warnings.append(AtticWarning.HIGH_PRESSURE_DIFFERENCE())
        status = status.escalate(VentilationStatus.INADEQUATE)
    if dT_dp > HIGH_DEW_POINT_DIFFERENCE:
        warnings.append(AtticWarning.HIGH_MOISTURE())
        status = status.escalate(VentilationStatus.INADEQUATE)

    intake = inputs.existing_intake_area
    exhaust = inputs.existing_exhaust_area
    if intake is not None and exhaust is not None and intake.m and exhaust.m:
        intake = intake.to('ft ** 2')
        exhaust = exhaust.to('ft ** 2')
        A_existing = intake + exhaust
        if A_existing < A_min:
            warnings.append(AtticWarning.BELOW_MINIMUM_VENT_AREA())
            status = status.escalate(VentilationStatus.CRITICAL)
        elif A_existing < A_rec:
            recommendations.append(AtticRecommendation.INCREASE_VENT_AREA())
        if intake < A_intake:
            recommendations.append(AtticRecommendation.ADD_INTAKE(area=(A_intake - intake).m))
        if exhaust < A_exhaust:
            recommendations.append(AtticRecommendation.ADD_EXHAUST(area=(A_exhaust - exhaust).m))
    else:
        recommendations.append(AtticRecommendation.INSTALL_INTAKE(area=A_intake.m))
        recommendations.append(AtticRecommendation.INSTALL_EXHAUST(area=A_exhaust.m))

    if p.m > 0.0:
        recommendations.append(AtticRecommendation.BALANCE_WITH_EXHAUST())
    elif p.m < 0.0:
        recommendations.append(AtticRecommendation.BALANCE_WITH_INTAKE())

    return AtticVentilationResult(
        pressure_difference=p,
        temperature_difference=dT,
        dew_point_difference=dT_dp,
        stack_effect=V_stack,
        minimum_vent_area=A_min,
        recommended_vent_area=A_rec,
        required_intake_area=A_intake,
        required_exhaust_area=A_exhaust,
        status=status,
        warnings=tuple(warnings),
        recommendations=tuple(recommendations)
    )
