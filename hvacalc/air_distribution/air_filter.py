"""Sizing of the return-air filter of a residential system.

The airflow of the system follows from its nominal size and the airflow per
ton recommended for the climate zone. Dividing it by the face area of the
filter gives the face velocity, which determines the initial (clean) pressure
drop of the filter.
"""
from enum import Enum
from dataclasses import dataclass, field
import numpy as np
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import (
    Advisory,
    AdvisoryCode,
    ClimateZone,
    InvalidOperatingPointError,
    parse_choice,
    parse_quantity,
    is_missing
)

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

# Upper limits of the face-velocity buckets of the pressure drop tables; above
# the last limit the 400 FPM column applies.
FACE_VELOCITY_BUCKETS = np.array([300.0, 350.0])  # FPM
MAX_FACE_VELOCITY = Q_(350, 'fpm')
MAX_PRESSURE_DROP = Q_(0.15, 'in_wc')


class FilterType(Enum):
    """Filter media. The value of each member is the display label and the
    initial pressure drop in inch w.c. at a face velocity of 300, 350 and
    400 FPM.
    """
    FIBERGLASS = ('Fiberglass (MERV 1-4)', (0.05, 0.08, 0.12))
    PLEATED_BASIC = ('Basic Pleated (MERV 5-8)', (0.08, 0.12, 0.15))
    PLEATED_BETTER = ('Better Pleated (MERV 9-12)', (0.15, 0.18, 0.22))
    PLEATED_BEST = ('Best Pleated (MERV 13-16)', (0.20, 0.25, 0.30))

    @property
    def label(self) -> str:
        return self.value[0]

    def initial_pressure_drop(self, face_velocity: Quantity) -> Quantity:
        """Returns the initial pressure drop of the clean filter at
        `face_velocity`, taken from the smallest face-velocity bucket that
        contains `face_velocity`.
        """
        v = face_velocity.to('fpm').m
        i = int(np.searchsorted(FACE_VELOCITY_BUCKETS, v, side='left'))
        return Q_(self.value[1][i], 'in_wc')


class FilterAdvisory(AdvisoryCode):
    HIGH_FACE_VELOCITY = (
        "Face velocity of {face_velocity:.0f} FPM exceeds 350 FPM. Consider "
        "using a larger filter to reduce pressure drop and improve system "
        "efficiency."
    )
    HIGH_INITIAL_PRESSURE_DROP = (
        "Initial pressure drop of {pressure_drop:.3f} in. w.c. is more than "
        "50% of the maximum allowable {max_pressure_drop:.2f} in. w.c. "
        "Consider using a larger filter or a filter type with lower initial "
        "pressure drop."
    )


@dataclass(frozen=True)
class FilterInputs:
    system_size: Quantity | None = None
    climate_zone: ClimateZone | None = None
    filter_width: Quantity | None = None
    filter_height: Quantity | None = None
    filter_type: FilterType | None = None

    @classmethod
    def from_text(
        cls,
        system_size: str | None = None,
        climate_zone: str | None = None,
        filter_width: str | None = None,
        filter_height: str | None = None,
        filter_type: str | None = None
    ) -> 'FilterInputs':
        """Creates the inputs from text fields: system size in tons, filter
        dimensions in inches.
        """
        return cls(
            system_size=parse_quantity(system_size, 'cooling_ton'),
            climate_zone=parse_choice(climate_zone, ClimateZone),
            filter_width=parse_quantity(filter_width, 'inch'),
            filter_height=parse_quantity(filter_height, 'inch'),
            filter_type=parse_choice(filter_type, FilterType)
        )


@dataclass(frozen=True)
class FilterResult:
    airflow: Quantity
    face_area: Quantity
    face_velocity: Quantity
    initial_pressure_drop: Quantity
    max_pressure_drop: Quantity
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)


def calculate_filter(inputs: FilterInputs) -> FilterResult | None:
    """Returns airflow, face velocity and initial pressure drop of the
    filter, or None if any of the inputs is missing.

    Raises
    ------
    InvalidOperatingPointError
        If the face area of the filter is zero.
    """
    if is_missing(
        inputs.system_size, inputs.climate_zone, inputs.filter_width,
        inputs.filter_height, inputs.filter_type
    ):
        logger.debug("Insufficient input: filter not calculated.")
        return None

    V_dot = inputs.climate_zone.design_airflow(inputs.system_size)
    A_face = (inputs.filter_width * inputs.filter_height).to('ft ** 2')
    if A_face.m <= 0.0:
        raise InvalidOperatingPointError(
            "the face area of the filter must be greater than zero"
        )
    v_face = (V_dot / A_face).to('fpm')
    dp_ini = inputs.filter_type.initial_pressure_drop(v_face)
    logger.debug(
        f"V_dot = {V_dot:~P.0f}, A_face = {A_face:~P.2f}, "
        f"v_face = {v_face:~P.0f}, dp_ini = {dp_ini:~P.3f}"
    )

    warnings = []
    if v_face > MAX_FACE_VELOCITY:
        warnings.append(FilterAdvisory.HIGH_FACE_VELOCITY(face_velocity=v_face.m))
    if dp_ini > MAX_PRESSURE_DROP / 2:
        warnings.append(FilterAdvisory.HIGH_INITIAL_PRESSURE_DROP(
            pressure_drop=dp_ini.m,
            max_pressure_drop=MAX_PRESSURE_DROP.m
        ))

    return FilterResult(
        airflow=V_dot,
        face_area=A_face,
        face_velocity=v_face,
        initial_pressure_drop=dp_ini,
        max_pressure_drop=MAX_PRESSURE_DROP,
        warnings=tuple(warnings)
    )
