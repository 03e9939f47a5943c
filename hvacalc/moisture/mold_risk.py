"""Assessment of the risk of mold growth from the indoor air conditions."""
from enum import Enum
from dataclasses import dataclass, field
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger
from hvacalc.core import Advisory, AdvisoryCode, parse_quantity, is_missing
from hvacalc.psychrometrics import (
    saturation_pressure,
    dew_point_temperature,
    clamp_relative_humidity
)

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

ABSOLUTE_HUMIDITY_FACTOR = 2.16679  # g.K/(m³.Pa)
CONDENSATION_MARGIN = Q_(4.0, 'delta_degF')
HUMIDITY_LIMIT = 60.0               # %
CONTINUOUS_DEHUMIDIFICATION_LIMIT = 70.0  # %


class MoldRiskLevel(Enum):
    """Risk level of mold growth. The value of each member is the upper RH
    limit (in percent, exclusive) of the level and the typical number of
    days before mold appears on susceptible surfaces.
    """
    LOW = (60.0, None)
    MODERATE = (70.0, 30)
    HIGH = (80.0, 14)
    SEVERE = (float('inf'), 7)

    @property
    def days_to_mold(self) -> Quantity | None:
        days = self.value[1]
        if days is None:
            return None
        return Q_(days, 'day')

    @classmethod
    def from_relative_humidity(cls, RH: Quantity) -> 'MoldRiskLevel':
        rh = RH.to('pct').m
        for level in cls:
            if rh < level.value[0]:
                return level
        return cls.SEVERE


class MoldRecommendation(AdvisoryCode):
    REDUCE_HUMIDITY = (
        "Reduce indoor relative humidity below 60% using dehumidification"
    )
    PREVENT_CONDENSATION = (
        "Increase air temperature or improve insulation to prevent condensation"
    )
    IMPROVE_VENTILATION = "Improve ventilation to reduce moisture accumulation"
    INSPECT_LEAKS = "Inspect for and repair any water leaks or intrusion"
    CONTINUOUS_DEHUMIDIFICATION = "Consider using continuous dehumidification"


@dataclass(frozen=True)
class MoldRiskInputs:
    temperature: Quantity | None = None
    relative_humidity: Quantity | None = None

    @classmethod
    def from_text(
        cls,
        temperature: str | None = None,
        relative_humidity: str | None = None
    ) -> 'MoldRiskInputs':
        return cls(
            temperature=parse_quantity(temperature, 'degF'),
            relative_humidity=parse_quantity(relative_humidity, 'pct')
        )


@dataclass(frozen=True)
class MoldRiskResult:
    dew_point: Quantity
    saturation_pressure: Quantity
    absolute_humidity: Quantity
    risk_level: MoldRiskLevel
    days_to_mold: Quantity | None
    recommendations: tuple[Advisory, ...] = field(default_factory=tuple)


def absolute_humidity(T: Quantity, RH: Quantity) -> Quantity:
    """Returns the mass of water vapor per unit volume of moist air at
    temperature `T` and relative humidity `RH`.
    """
    T_k = T.to('K').m
    p_w = RH.to('frac').m * saturation_pressure(T).to('Pa').m
    return Q_(ABSOLUTE_HUMIDITY_FACTOR * p_w / T_k, 'g / m ** 3')


def calculate_mold_risk(inputs: MoldRiskInputs) -> MoldRiskResult | None:
    """Returns the moisture properties of the indoor air, the risk level of
    mold growth and the recommended measures, or None if any of the inputs
    is missing.
    """
    if is_missing(inputs.temperature, inputs.relative_humidity):
        logger.debug("Insufficient input: mold risk not calculated.")
        return None

    T = inputs.temperature.to('degF')
    RH = Q_(clamp_relative_humidity(inputs.relative_humidity.to('pct').m), 'pct')
    T_dp = dew_point_temperature(T, RH)
    p_ws = saturation_pressure(T).to('kPa')
    rho_w = absolute_humidity(T, RH)
    level = MoldRiskLevel.from_relative_humidity(RH)
    logger.debug(
        f"T_dp = {T_dp:~P.1f}, p_ws = {p_ws:~P.3f}, "
        f"absolute humidity = {rho_w:~P.2f}, risk level = {level.name}"
    )

    recommendations = []
    if RH.m > HUMIDITY_LIMIT:
        recommendations.append(MoldRecommendation.REDUCE_HUMIDITY())
    if T.m - T_dp.m < CONDENSATION_MARGIN.m:
        recommendations.append(MoldRecommendation.PREVENT_CONDENSATION())
    if level is not MoldRiskLevel.LOW:
        recommendations.append(MoldRecommendation.IMPROVE_VENTILATION())
        recommendations.append(MoldRecommendation.INSPECT_LEAKS())
    if RH.m > CONTINUOUS_DEHUMIDIFICATION_LIMIT:
        recommendations.append(MoldRecommendation.CONTINUOUS_DEHUMIDIFICATION())

    return MoldRiskResult(
        dew_point=T_dp,
        saturation_pressure=p_ws,
        absolute_humidity=rho_w,
        risk_level=level,
        days_to_mold=level.days_to_mold,
        recommendations=tuple(recommendations)
    )
