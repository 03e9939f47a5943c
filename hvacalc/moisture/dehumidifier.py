"""Sizing of a stand-alone dehumidifier from the latent load of the space.

The latent load is converted into the amount of water to remove per day. The
rated capacity of a dehumidifier applies at 80 °F and 60 % RH; in colder or
drier air it removes less water, so the required capacity is derated for the
indoor conditions and a safety margin for peak conditions is added.
"""
from dataclasses import dataclass, field
import numpy as np
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import (
    Advisory,
    AdvisoryCode,
    parse_quantity,
    is_missing
)
from hvacalc.psychrometrics import clamp_relative_humidity

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

MOISTURE_PER_LATENT_HEAT = 0.0833   # pints of water per 1000 Btu of latent heat
SAFETY_FACTOR = 1.2                 # peak conditions

# rated capacities of common dehumidifiers in pints per day
STANDARD_SIZES = np.array([20, 30, 35, 50, 70, 90, 120, 150, 180, 250])

LOW_TEMPERATURE_LIMIT = Q_(65.0, 'degF')
REDUCED_TEMPERATURE_LIMIT = Q_(70.0, 'degF')
LOW_TEMPERATURE_DERATING = 0.7
REDUCED_TEMPERATURE_DERATING = 0.85
LOW_RH_LIMIT = 60.0                 # %
LOW_RH_DERATING = 0.8
HIGH_RH_LIMIT = 65.0                # %


class DehumidifierAdvisory(AdvisoryCode):
    LOW_TEMPERATURE = "Low temperature will reduce dehumidifier efficiency"
    LOW_HUMIDITY = "Low relative humidity will reduce moisture removal rate"
    EXCEEDS_LARGEST_UNIT = (
        "Required capacity of {required:.1f} pints/day exceeds largest "
        "standard residential unit - consider multiple units or a commercial "
        "system"
    )
    HIGH_HUMIDITY = (
        "High relative humidity may require additional run time or larger unit"
    )


@dataclass(frozen=True)
class DehumidifierInputs:
    latent_load: Quantity | None = None
    indoor_temperature: Quantity | None = None
    indoor_rh: Quantity | None = None

    @classmethod
    def from_text(
        cls,
        latent_load: str | None = None,
        indoor_temperature: str | None = None,
        indoor_rh: str | None = None
    ) -> 'DehumidifierInputs':
        """Creates the inputs from text fields: latent load in Btu/hr,
        temperature in °F and relative humidity in percent.
        """
        return cls(
            latent_load=parse_quantity(latent_load, 'Btu / hr'),
            indoor_temperature=parse_quantity(indoor_temperature, 'degF'),
            indoor_rh=parse_quantity(indoor_rh, 'pct')
        )


@dataclass(frozen=True)
class DehumidifierResult:
    moisture_load: Quantity
    capacity_factor: float
    required_capacity: Quantity
    recommended_size: Quantity
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)

    @property
    def recommended_size_label(self) -> str:
        return f"{self.recommended_size.to('pint / day').m:g} PPD"


def moisture_load(latent_load: Quantity) -> Quantity:
    """Returns the amount of water to be removed per day to handle
    `latent_load`.
    """
    q_day = latent_load.to('Btu / day').m
    return Q_(q_day / 1000.0 * MOISTURE_PER_LATENT_HEAT, 'pint / day')


def capacity_factor(T: Quantity, RH: Quantity) -> float:
    """Returns the fraction of its rated capacity that a dehumidifier
    delivers in air at temperature `T` and relative humidity `RH`.
    """
    factor = 1.0
    if T < LOW_TEMPERATURE_LIMIT:
        factor *= LOW_TEMPERATURE_DERATING
    elif T < REDUCED_TEMPERATURE_LIMIT:
        factor *= REDUCED_TEMPERATURE_DERATING
    if RH.to('pct').m < LOW_RH_LIMIT:
        factor *= LOW_RH_DERATING
    return factor


def calculate_dehumidifier(inputs: DehumidifierInputs) -> DehumidifierResult | None:
    """Returns the required capacity and the recommended standard size of
    the dehumidifier, or None if any of the inputs is missing.
    """
    if is_missing(inputs.latent_load, inputs.indoor_temperature, inputs.indoor_rh):
        logger.debug("Insufficient input: dehumidifier not calculated.")
        return None

    T = inputs.indoor_temperature.to('degF')
    RH = Q_(clamp_relative_humidity(inputs.indoor_rh.to('pct').m), 'pct')
    m_w = moisture_load(inputs.latent_load)
    f = capacity_factor(T, RH)
    required = m_w / f * SAFETY_FACTOR

    i = int(np.searchsorted(STANDARD_SIZES, required.m, side='left'))
    exceeds_largest = i == len(STANDARD_SIZES)
    recommended = Q_(int(STANDARD_SIZES[min(i, len(STANDARD_SIZES) - 1)]), 'pint / day')
    logger.debug(
        f"moisture load = {m_w:~P.1f}, capacity factor = {f:.3f}, "
        f"required capacity = {required:~P.1f}, recommended = {recommended:~P.0f}"
    )

    warnings = []
    if T < LOW_TEMPERATURE_LIMIT:
        warnings.append(DehumidifierAdvisory.LOW_TEMPERATURE())
    if RH.m < LOW_RH_LIMIT:
        warnings.append(DehumidifierAdvisory.LOW_HUMIDITY())
    if exceeds_largest:
        warnings.append(DehumidifierAdvisory.EXCEEDS_LARGEST_UNIT(required=required.m))
    if RH.m > HIGH_RH_LIMIT:
        warnings.append(DehumidifierAdvisory.HIGH_HUMIDITY())

    return DehumidifierResult(
        moisture_load=m_w,
        capacity_factor=f,
        required_capacity=required,
        recommended_size=recommended,
        warnings=tuple(warnings)
    )
