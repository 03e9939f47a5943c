"""Duct sizing with the friction rate method of ACCA Manual D.

The static pressure that the blower can spend on the duct runs (the available
static pressure) is what remains of the design external static pressure after
subtracting the pressure losses of the system components (grilles, filter,
dampers). The friction rate follows from the available static pressure and
the equivalent length of the duct run. The duct is sized for the middle of
the ACCA velocity range of the duct section.
"""
import math
from enum import Enum
from dataclasses import dataclass, field
from typing import Sequence
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import (
    Advisory,
    AdvisoryCode,
    InvalidOperatingPointError,
    parse_choice,
    parse_number,
    parse_quantity,
    is_missing
)
from .duct_schedule import round_up

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

STANDARD_AIR_VELOCITY_FACTOR = 4005.0  # FPM per sqrt(in. w.c.), standard air
FLEX_DUCT_SAFETY_FACTOR = 1.5
FLEX_DUCT_MAX_VELOCITY = Q_(900, 'fpm')
ROUND_SIZE_INCREMENT = Q_(1.0, 'inch')
RECTANGULAR_SIZE_INCREMENT = Q_(0.5, 'inch')


class DuctType(Enum):
    ROUND_METAL = 'Round Sheet Metal'
    RECT_METAL = 'Rectangular Sheet Metal'
    RECT_BOARD = 'Rectangular Duct Board'
    ROUND_FLEX = 'Round Flex Duct'

    @property
    def is_round(self) -> bool:
        return self in (DuctType.ROUND_METAL, DuctType.ROUND_FLEX)

    @property
    def is_flex(self) -> bool:
        return self is DuctType.ROUND_FLEX


class FittingType(Enum):
    """Duct fittings with their loss coefficient."""
    ELBOW_90 = ('90° Elbow', 0.3)
    ELBOW_45 = ('45° Elbow', 0.2)
    TEE = ('Tee Branch', 1.0)
    REDUCER = ('Reducer/Enlarger', 0.4)
    ENTRY = ('Entry Loss', 0.5)
    EXIT = ('Exit Loss', 1.0)

    @property
    def description(self) -> str:
        return self.value[0]

    @property
    def zeta(self) -> float:
        return self.value[1]


class DuctSection(Enum):
    """ACCA velocity guidelines (FPM) for the sections of a duct system."""
    SUPPLY_MAIN = (700, 900)
    SUPPLY_BRANCH = (600, 800)
    RETURN_MAIN = (600, 700)
    RETURN_BRANCH = (400, 600)

    @property
    def min_velocity(self) -> Quantity:
        return Q_(self.value[0], 'fpm')

    @property
    def max_velocity(self) -> Quantity:
        return Q_(self.value[1], 'fpm')

    @property
    def target_velocity(self) -> Quantity:
        return (self.min_velocity + self.max_velocity) / 2


@dataclass(frozen=True)
class Fitting:
    fitting_type: FittingType
    quantity: int = 1


@dataclass(frozen=True)
class SystemComponent:
    name: str
    pressure_loss: Quantity


DEFAULT_COMPONENTS = (
    SystemComponent('Return Air Grille', Q_(0.03, 'in_wc')),
    SystemComponent('Filter', Q_(0.10, 'in_wc')),
    SystemComponent('Supply Air Grilles', Q_(0.30, 'in_wc')),
    SystemComponent('Dampers', Q_(0.30, 'in_wc'))
)


class DuctAdvisory(AdvisoryCode):
    VELOCITY_ABOVE_LIMIT = (
        "Velocity of {velocity:.0f} FPM exceeds maximum limit of "
        "{max_velocity:.0f} FPM for {section}"
    )
    FLEX_VELOCITY_ABOVE_LIMIT = (
        "Velocity of {velocity:.0f} FPM exceeds recommended limit for flex "
        "duct (900 FPM)"
    )
    FLEX_SAFETY_FACTOR = "Flex duct pressure loss includes 50% safety factor"
    COMPONENT_LOSSES_EXCEED_DESIGN = (
        "System component losses exceed design static pressure!"
    )
    DUCT_LOSSES_EXCEED_AVAILABLE = (
        "Calculated duct losses ({static_pressure:.3f} in. w.c.) exceed "
        "available static pressure ({available:.3f} in. w.c.)!"
    )


@dataclass(frozen=True)
class DuctSize:
    """Recommended duct size: either a diameter, or a width and height."""
    diameter: Quantity | None = None
    width: Quantity | None = None
    height: Quantity | None = None

    @property
    def area(self) -> Quantity:
        if self.diameter is not None:
            return (math.pi * self.diameter ** 2 / 4).to('ft ** 2')
        return (self.width * self.height).to('ft ** 2')

    def __str__(self):
        if self.diameter is not None:
            return f'{self.diameter.to("inch").m:g}" diameter'
        return f'{self.width.to("inch").m:g}" × {self.height.to("inch").m:g}"'


@dataclass(frozen=True)
class DuctInputs:
    """Inputs of the duct sizing calculation.

    Attributes
    ----------
    duct_type:
        Shape and material of the duct.
    airflow:
        Airflow through the duct.
    design_static_pressure:
        External static pressure available from the blower at the design
        airflow. Default value is 0.5 in. w.c.
    straight_length:
        Length of the straight duct sections.
    fittings:
        The fittings in the duct run.
    duct_section:
        Section of the duct system, which determines the velocity limits.
    components:
        System components with their pressure loss. The default components
        are a return grille, the filter, the supply grilles and dampers.
    width:
        Width of a rectangular duct. Not used for round ducts.
    """
    duct_type: DuctType | None = None
    airflow: Quantity | None = None
    design_static_pressure: Quantity | None = Q_(0.5, 'in_wc')
    straight_length: Quantity = Q_(0.0, 'ft')
    fittings: tuple[Fitting, ...] = ()
    duct_section: DuctSection = DuctSection.SUPPLY_MAIN
    components: tuple[SystemComponent, ...] = DEFAULT_COMPONENTS
    width: Quantity | None = None

    @classmethod
    def from_text(
        cls,
        duct_type: str | None = None,
        airflow: str | None = None,
        design_static_pressure: str | None = '0.5',
        straight_length: str | None = None,
        duct_section: str | None = 'supply-main',
        width: str | None = None,
        fittings: Sequence[tuple[str, int | str]] = (),
        components: Sequence[tuple[str, str]] | None = None
    ) -> 'DuctInputs':
        """Creates the inputs from text fields: airflow in CFM, pressures in
        inch w.c., lengths in feet and width in inches.

        `fittings` is a sequence of (fitting type, quantity) pairs, e.g.
        `[('elbow-90', 2), ('tee', 1)]`. Fittings of unknown type are left
        out. `components` is a sequence of (name, pressure loss) pairs; a
        pressure loss that cannot be read counts as zero. If `components` is
        None, the default components are used.
        """
        fitting_list = []
        for fitting_type, quantity in fittings:
            fitting_type = parse_choice(fitting_type, FittingType)
            quantity = parse_number(quantity)
            if fitting_type is not None and quantity is not None:
                fitting_list.append(Fitting(fitting_type, int(quantity)))
        if components is None:
            component_list = DEFAULT_COMPONENTS
        else:
            component_list = tuple(
                SystemComponent(name, Q_(parse_number(loss) or 0.0, 'in_wc'))
                for name, loss in components
            )
        return cls(
            duct_type=parse_choice(duct_type, DuctType),
            airflow=parse_quantity(airflow, 'cfm'),
            design_static_pressure=parse_quantity(design_static_pressure, 'in_wc'),
            straight_length=parse_quantity(straight_length, 'ft') or Q_(0.0, 'ft'),
            fittings=tuple(fitting_list),
            duct_section=parse_choice(duct_section, DuctSection) or DuctSection.SUPPLY_MAIN,
            components=component_list,
            width=parse_quantity(width, 'inch')
        )


@dataclass(frozen=True)
class DuctResult:
    size: DuctSize
    velocity: Quantity
    equivalent_length: Quantity
    friction_rate: Quantity
    static_pressure: Quantity
    available_static_pressure: Quantity
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)


def total_component_losses(components: Sequence[SystemComponent]) -> Quantity:
    """Returns the sum of the pressure losses of the system components."""
    dp = Q_(0.0, 'in_wc')
    for component in components:
        dp += component.pressure_loss.to('in_wc')
    return dp


def equivalent_length(
    straight_length: Quantity,
    fittings: Sequence[Fitting]
) -> Quantity:
    """Returns the equivalent length of a duct run. Each fitting adds its
    loss coefficient, taken as a length in feet, times the number of
    fittings of that type.
    """
    L_fit = sum(f.fitting_type.zeta * f.quantity for f in fittings)
    return straight_length.to('ft') + Q_(L_fit, 'ft')


def velocity_pressure(velocity: Quantity) -> Quantity:
    """Returns the velocity pressure of standard air flowing at `velocity`."""
    v = velocity.to('fpm').m
    return Q_((v / STANDARD_AIR_VELOCITY_FACTOR) ** 2, 'in_wc')


def _size_round_duct(V_dot: Quantity, v_target: Quantity) -> DuctSize:
    A = (V_dot / v_target).to('inch ** 2')
    D = (4 * A / math.pi) ** 0.5
    return DuctSize(diameter=round_up(D, ROUND_SIZE_INCREMENT))


def _size_rectangular_duct(V_dot: Quantity, v_target: Quantity, width: Quantity) -> DuctSize:
    A = (V_dot / v_target).to('inch ** 2')
    H = round_up(A / width.to('inch'), RECTANGULAR_SIZE_INCREMENT)
    return DuctSize(width=width.to('inch'), height=H)


def calculate_duct(inputs: DuctInputs) -> DuctResult | None:
    """Sizes the duct and checks the pressure losses of the duct run against
    the available static pressure.

    Returns None if duct type, airflow or design static pressure is missing,
    or if the width of a rectangular duct is missing.

    Raises
    ------
    InvalidOperatingPointError
        If the equivalent length of the duct run is not greater than zero, so
        that no friction rate can be determined.
    """
    if is_missing(inputs.duct_type, inputs.airflow, inputs.design_static_pressure):
        logger.debug("Insufficient input: duct not calculated.")
        return None
    if not inputs.duct_type.is_round and inputs.width is None:
        logger.debug("Insufficient input: width of rectangular duct is missing.")
        return None

    V_dot = inputs.airflow.to('cfm')
    section = inputs.duct_section
    dp_asp = inputs.design_static_pressure.to('in_wc') - total_component_losses(inputs.components)
    L_eq = equivalent_length(inputs.straight_length, inputs.fittings)
    if L_eq.m <= 0.0:
        raise InvalidOperatingPointError(
            "the equivalent length of the duct run must be greater than zero"
        )
    friction_rate = (dp_asp / L_eq).to('in_wc / hundred_feet')

    if inputs.duct_type.is_round:
        size = _size_round_duct(V_dot, section.target_velocity)
    else:
        size = _size_rectangular_duct(V_dot, section.target_velocity, inputs.width)
    v = (V_dot / size.area).to('fpm')

    warnings = []
    if v > section.max_velocity:
        warnings.append(DuctAdvisory.VELOCITY_ABOVE_LIMIT(
            velocity=v.m,
            max_velocity=section.max_velocity.m,
            section=section.name.lower().replace('_', '-')
        ))
    if inputs.duct_type.is_flex and v > FLEX_DUCT_MAX_VELOCITY:
        warnings.append(DuctAdvisory.FLEX_VELOCITY_ABOVE_LIMIT(velocity=v.m))

    p_v = velocity_pressure(v)
    dp_friction = (friction_rate * L_eq).to('in_wc')
    dp_fittings = Q_(0.0, 'in_wc')
    for fitting in inputs.fittings:
        dp_fittings += fitting.fitting_type.zeta * fitting.quantity * p_v
    dp_duct = dp_friction + dp_fittings
    if inputs.duct_type.is_flex:
        dp_duct *= FLEX_DUCT_SAFETY_FACTOR
        warnings.append(DuctAdvisory.FLEX_SAFETY_FACTOR())

    if dp_asp.m < 0.0:
        warnings.append(DuctAdvisory.COMPONENT_LOSSES_EXCEED_DESIGN())
    if dp_duct > dp_asp:
        warnings.append(DuctAdvisory.DUCT_LOSSES_EXCEED_AVAILABLE(
            static_pressure=dp_duct.m, available=dp_asp.m
        ))

    logger.debug(
        f"size = {size}, v = {v:~P.0f}, L_eq = {L_eq:~P.1f}, "
        f"friction rate = {friction_rate.m:.3f} in. w.c./100 ft, "
        f"dp_duct = {dp_duct:~P.3f}, dp_asp = {dp_asp:~P.3f}"
    )
    return DuctResult(
        size=size,
        velocity=v,
        equivalent_length=L_eq,
        friction_rate=friction_rate,
        static_pressure=dp_duct,
        available_static_pressure=dp_asp,
        warnings=tuple(warnings)
    )
