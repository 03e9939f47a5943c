"""Pressure balancing of closed rooms with a transfer grille or jumper duct.

A room that is supplied with air but has no return of its own becomes
pressurized when its door is closed. The air must find its way back to the
return through the gaps around the door, or through a transfer grille or
jumper duct sized for a low velocity.

Two calculations are offered:

- `PressureMode.AIRFLOW`: the supply airflow of the room is known and the
  return path is sized for it; the pressure entered is the target room
  pressure.
- `PressureMode.PRESSURE`: the room pressure is measured with the door
  closed; the airflow leaking through the gaps around the door is estimated
  with the orifice equation and the return path is sized for that airflow.
"""
import math
from enum import Enum
from dataclasses import dataclass, field
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import (
    Advisory,
    AdvisoryCode,
    parse_choice,
    parse_quantity,
    is_missing
)
from .duct_schedule import DuctSchedule, round_duct_schedule
from .duct_sizing import STANDARD_AIR_VELOCITY_FACTOR

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

TARGET_VELOCITY = Q_(400, 'fpm')   # return and transfer paths
MAX_VELOCITY = Q_(600, 'fpm')
MIN_GRILLE_FREE_AREA = 0.7         # free area ratio of a grille
MAX_ROOM_PRESSURE = Q_(3.0, 'Pa')
DOOR_PERIMETER_GAP = Q_(0.125, 'inch')
DEFAULT_GRILLE_HEIGHT = Q_(4, 'inch')

# standard grille sizes, width x height in inches
STANDARD_GRILLE_SIZES = (
    (8, 4), (10, 4), (12, 4), (14, 4),
    (8, 6), (10, 6), (12, 6), (14, 6),
    (10, 8), (12, 8), (14, 8),
    (10, 10),
    (12, 12),
    (14, 14)
)


class PressureMode(Enum):
    AIRFLOW = 'size the return path for a known airflow'
    PRESSURE = 'size the return path for a measured room pressure'


class RoomPressureAdvisory(AdvisoryCode):
    TARGET_PRESSURE_TOO_HIGH = (
        "Target pressure of {pressure:.1f} Pa exceeds 3 Pascals - consider "
        "reducing pressure differential"
    )
    MEASURED_PRESSURE_TOO_HIGH = (
        "Measured pressure of {pressure:.1f} Pa exceeds 3 Pascals - consider "
        "reducing pressure differential"
    )
    SIGNIFICANT_DOOR_LEAKAGE = (
        "Door leakage area is significant - consider reducing gaps or "
        "increasing grille size"
    )
    HIGH_RETURN_VELOCITY = (
        "Return air velocity of {velocity:.0f} FPM exceeds maximum "
        "recommended - consider next size up duct"
    )


@dataclass(frozen=True)
class GrilleSize:
    width: Quantity
    height: Quantity

    def __str__(self):
        return f'{self.width.to("inch").m:g}" × {self.height.to("inch").m:g}"'


@dataclass(frozen=True)
class RoomPressureInputs:
    """Inputs of the room pressure calculation.

    Attributes
    ----------
    mode:
        Which calculation is made, see `PressureMode`.
    pressure:
        Target room pressure (mode AIRFLOW) or measured room pressure (mode
        PRESSURE) with respect to the main body of the house.
    door_width, door_height, door_undercut:
        Dimensions of the door and the gap under it.
    airflow:
        Supply airflow of the room. Only used in mode AIRFLOW.
    grille_height:
        Height of the transfer grille to select. Default value is 4 inch.
    """
    mode: PressureMode = PressureMode.AIRFLOW
    pressure: Quantity | None = None
    door_width: Quantity | None = None
    door_height: Quantity | None = None
    door_undercut: Quantity | None = None
    airflow: Quantity | None = None
    grille_height: Quantity = DEFAULT_GRILLE_HEIGHT

    @classmethod
    def from_text(
        cls,
        mode: str | None = 'airflow',
        pressure: str | None = None,
        door_width: str | None = None,
        door_height: str | None = None,
        door_undercut: str | None = None,
        airflow: str | None = None,
        grille_height: str | None = None
    ) -> 'RoomPressureInputs':
        """Creates the inputs from text fields: pressure in Pa, door
        dimensions and grille height in inches, airflow in CFM. `mode` is
        'airflow' or 'pressure'.
        """
        return cls(
            mode=parse_choice(mode, PressureMode) or PressureMode.AIRFLOW,
            pressure=parse_quantity(pressure, 'Pa'),
            door_width=parse_quantity(door_width, 'inch'),
            door_height=parse_quantity(door_height, 'inch'),
            door_undercut=parse_quantity(door_undercut, 'inch'),
            airflow=parse_quantity(airflow, 'cfm'),
            grille_height=parse_quantity(grille_height, 'inch') or DEFAULT_GRILLE_HEIGHT
        )


@dataclass(frozen=True)
class RoomPressureResult:
    grille_size: GrilleSize
    required_free_area: Quantity
    duct_diameter: Quantity
    duct_velocity: Quantity
    door_leakage_area: Quantity
    calculated_airflow: Quantity | None = None
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)


def door_leakage_area(width: Quantity, height: Quantity, undercut: Quantity) -> Quantity:
    """Returns the leakage area of a closed door: the gap under the door
    plus a 1/8 inch gap along both sides and the top of the door.
    """
    W = width.to('inch')
    H = height.to('inch')
    A_under = W * undercut.to('inch')
    A_perimeter = (2 * H + W) * DOOR_PERIMETER_GAP
    return (A_under + A_perimeter).to('ft ** 2')


def leakage_airflow(A_leak: Quantity, pressure: Quantity) -> Quantity:
    """Returns the airflow through leakage area `A_leak` driven by
    `pressure`, using the orifice equation for standard air.
    """
    dp = pressure.to('in_wc').m
    v = STANDARD_AIR_VELOCITY_FACTOR * math.sqrt(max(dp, 0.0))
    return (A_leak * Q_(v, 'fpm')).to('cfm')


def select_grille(
    required_free_area: Quantity,
    grille_height: Quantity,
    free_area_ratio: float = MIN_GRILLE_FREE_AREA
) -> GrilleSize:
    """Returns the first standard grille of height `grille_height` that
    provides `required_free_area`. Because the free area ratio of a grille
    is uncertain, the ratio is applied both to the grille and to the
    required area. If no grille of that height is large enough, the largest
    one is returned.
    """
    A_req = required_free_area.to('inch ** 2').m
    h = grille_height.to('inch').m
    sizes = [(w, hs) for w, hs in STANDARD_GRILLE_SIZES if hs == h]
    for w, hs in sizes:
        if w * hs * free_area_ratio >= A_req / free_area_ratio:
            return GrilleSize(Q_(w, 'inch'), Q_(hs, 'inch'))
    if sizes:
        w, hs = sizes[-1]
        return GrilleSize(Q_(w, 'inch'), Q_(hs, 'inch'))
    return GrilleSize(Q_(14, 'inch'), Q_(h, 'inch'))


def select_round_duct(
    V_dot: Quantity,
    schedule: DuctSchedule = round_duct_schedule,
    v_target: Quantity = TARGET_VELOCITY
) -> tuple[Quantity, Quantity]:
    """Returns the diameter of the standard round duct for airflow `V_dot`
    at the target velocity, and the actual velocity in that duct.
    """
    A = (V_dot / v_target).to('ft ** 2')
    D = (4 * A / math.pi) ** 0.5
    D_std = schedule.get_next_size(D)
    v = (V_dot / (math.pi * D_std ** 2 / 4)).to('fpm')
    return D_std, v


def calculate_room_pressure(inputs: RoomPressureInputs) -> RoomPressureResult | None:
    """Sizes the transfer grille and the jumper duct of the room.

    Returns None if any of the inputs that the selected mode needs is
    missing.
    """
    if is_missing(
        inputs.pressure, inputs.door_width, inputs.door_height,
        inputs.door_undercut
    ):
        logger.debug("Insufficient input: room pressure not calculated.")
        return None
    if inputs.mode is PressureMode.AIRFLOW and inputs.airflow is None:
        logger.debug("Insufficient input: airflow of the room is missing.")
        return None

    A_leak = door_leakage_area(inputs.door_width, inputs.door_height, inputs.door_undercut)
    if inputs.mode is PressureMode.PRESSURE:
        V_dot = leakage_airflow(A_leak, inputs.pressure)
        calculated_airflow = V_dot
    else:
        V_dot = inputs.airflow.to('cfm')
        calculated_airflow = None

    A_nfa = (V_dot / TARGET_VELOCITY).to('ft ** 2')
    grille = select_grille(A_nfa, inputs.grille_height)
    D, v = select_round_duct(V_dot)
    logger.debug(
        f"V_dot = {V_dot:~P.0f}, A_leak = {A_leak:~P.3f}, NFA = {A_nfa:~P.3f}, "
        f"grille = {grille}, duct = {D:~P.0f} at {v:~P.0f}"
    )

    warnings = []
    pressure = inputs.pressure.to('Pa')
    if pressure > MAX_ROOM_PRESSURE:
        if inputs.mode is PressureMode.PRESSURE:
            warnings.append(RoomPressureAdvisory.MEASURED_PRESSURE_TOO_HIGH(pressure=pressure.m))
        else:
            warnings.append(RoomPressureAdvisory.TARGET_PRESSURE_TOO_HIGH(pressure=pressure.m))
    if inputs.mode is PressureMode.AIRFLOW and A_leak > 0.5 * A_nfa:
        warnings.append(RoomPressureAdvisory.SIGNIFICANT_DOOR_LEAKAGE())
    if v > MAX_VELOCITY:
        warnings.append(RoomPressureAdvisory.HIGH_RETURN_VELOCITY(velocity=v.m))

    return RoomPressureResult(
        grille_size=grille,
        required_free_area=A_nfa,
        duct_diameter=D,
        duct_velocity=v,
        door_leakage_area=A_leak,
        calculated_airflow=calculated_airflow,
        warnings=tuple(warnings)
    )
