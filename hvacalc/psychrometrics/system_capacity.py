"""Field check of the cooling capacity delivered by an air conditioning system.

From the airflow across the indoor coil and the states of the air entering
and leaving the coil, the sensible, latent and total capacity of the system
are determined with an energy balance on the air stream. The results are
compared with the nominal size of the equipment and with the airflow and
supply-air temperature that are recommended for the climate zone.
"""
from dataclasses import dataclass, field
import pandas as pd
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
from .humid_air import HumidAir, HumidityIndicator

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

AIR_DENSITY = Q_(0.075, 'lb / ft ** 3')       # standard air
CP_AIR = Q_(0.24, 'Btu / (lb * delta_degF)')
SENSIBLE_HEAT_FACTOR = Q_(1.08, 'Btu * min / (hr * ft ** 3 * delta_degF)')
DESIGN_SHR = 0.75
CONDENSATE_VOLUME = Q_(0.12, 'gallon / lb')

CAPACITY_DEVIATION_LIMIT = Q_(0.5, 'cooling_ton')
SHR_LOWER_LIMIT = 0.70
CFM_PER_TON_MIN = Q_(350, 'cfm / cooling_ton')
CFM_PER_TON_MAX = Q_(450, 'cfm / cooling_ton')
SPLIT_DEVIATION_LIMIT = Q_(3.0, 'delta_degF')


class SystemCapacityAdvisory(AdvisoryCode):
    CAPACITY_DEVIATION = (
        "Capacity differs from nominal {nominal:.1f} tons by {deviation:.1f} tons"
    )
    LOW_SHR = (
        "Low sensible heat ratio ({shr:.1%}) may indicate excessive "
        "dehumidification"
    )
    LOW_AIRFLOW = "Low airflow ({cfm_per_ton:.0f} CFM/ton) may reduce efficiency"
    HIGH_AIRFLOW = (
        "High airflow ({cfm_per_ton:.0f} CFM/ton) may reduce dehumidification"
    )
    SPLIT_DEVIATION = (
        "Temperature split of {measured:.1f} °F deviates from the design "
        "target of {target:.1f} °F"
    )


@dataclass(frozen=True)
class SystemCapacityInputs:
    """Inputs of the system capacity calculation.

    Attributes
    ----------
    airflow:
        Volume flow rate of air across the indoor coil.
    system_size:
        Nominal cooling capacity of the equipment (e.g. `Q_(3, 'cooling_ton')`).
    climate_zone:
        Climate zone group of the site.
    air_in:
        State of the air entering the coil (return air).
    air_out:
        State of the air leaving the coil (supply air).
    """
    airflow: Quantity | None = None
    system_size: Quantity | None = None
    climate_zone: ClimateZone | None = None
    air_in: HumidAir | None = None
    air_out: HumidAir | None = None

    @classmethod
    def from_text(
        cls,
        airflow: str | None = None,
        system_size: str | None = None,
        climate_zone: str | None = None,
        entering_dry_bulb: str | None = None,
        entering_humidity: str | None = None,
        entering_humidity_type: str = 'rh',
        leaving_dry_bulb: str | None = None,
        leaving_humidity: str | None = None,
        leaving_humidity_type: str = 'rh'
    ) -> 'SystemCapacityInputs':
        """Creates the inputs from text fields: airflow in CFM, system size in
        tons, temperatures in °F and relative humidity in percent. The
        humidity type of entering and leaving air is 'rh', 'wb' or 'dp'.
        """
        return cls(
            airflow=parse_quantity(airflow, 'cfm'),
            system_size=parse_quantity(system_size, 'cooling_ton'),
            climate_zone=parse_choice(climate_zone, ClimateZone),
            air_in=_air_state_from_text(
                entering_dry_bulb, entering_humidity, entering_humidity_type
            ),
            air_out=_air_state_from_text(
                leaving_dry_bulb, leaving_humidity, leaving_humidity_type
            )
        )


def _air_state_from_text(
    dry_bulb: str | None,
    humidity: str | None,
    humidity_type: str
) -> HumidAir | None:
    indicator = parse_choice(humidity_type, HumidityIndicator)
    T_db = parse_quantity(dry_bulb, 'degF')
    unit = 'pct' if indicator is HumidityIndicator.RH else 'degF'
    hum = parse_quantity(humidity, unit)
    if is_missing(indicator, T_db, hum):
        return None
    return HumidAir.from_reading(T_db, hum, indicator)


@dataclass(frozen=True)
class SystemCapacityResult:
    air_in: HumidAir
    air_out: HumidAir
    m_dot: Quantity
    Q_dot_sen: Quantity
    Q_dot_lat: Quantity
    Q_dot_tot: Quantity
    SHR: Quantity
    nominal_capacity: Quantity
    cfm_per_ton: Quantity
    recommended_airflow: Quantity
    condensation_rate: Quantity
    condensate_volume_rate: Quantity
    measured_split: Quantity
    target_split: Quantity
    T_supply_target: Quantity
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)

    def air_properties(self) -> pd.DataFrame:
        """Returns a table with the properties of the entering and the
        leaving air.
        """
        def _column(air: HumidAir) -> list[float]:
            return [
                air.Tdb.to('degF').m,
                air.Twb.to('degF').m,
                air.Tdp.to('degF').m,
                air.RH.to('pct').m,
                air.W.to('grain / lb').m,
                air.h.to('Btu / lb').m
            ]

        index = [
            'dry-bulb [°F]',
            'wet-bulb [°F]',
            'dew-point [°F]',
            'relative humidity [%]',
            'humidity ratio [gr/lb]',
            'enthalpy [Btu/lb]'
        ]
        return pd.DataFrame(
            {'entering': _column(self.air_in), 'leaving': _column(self.air_out)},
            index=index
        )


def target_supply_temperature(
    T_in: Quantity,
    system_size: Quantity,
    climate_zone: ClimateZone,
    design_shr: float = DESIGN_SHR
) -> Quantity:
    """Returns the supply-air temperature at which equipment of nominal size
    `system_size` delivers its nominal sensible capacity (nominal capacity
    times the design sensible heat ratio `design_shr`) when it moves the
    airflow recommended for `climate_zone` and the entering air has dry-bulb
    temperature `T_in`.
    """
    if system_size.to('cooling_ton').m <= 0.0:
        raise InvalidOperatingPointError(
            "the nominal system size must be greater than zero"
        )
    Q_dot_sen = design_shr * system_size.to('Btu / hr')
    V_dot = climate_zone.design_airflow(system_size)
    dT = (Q_dot_sen / (SENSIBLE_HEAT_FACTOR * V_dot)).to('delta_degF')
    return Q_(T_in.to('degF').m - dT.m, 'degF')


def calculate_system_capacity(inputs: SystemCapacityInputs) -> SystemCapacityResult | None:
    """Determines the cooling capacity delivered by the system.

    Returns None if any of the inputs is missing.

    Raises
    ------
    InvalidOperatingPointError
        If airflow or system size are not greater than zero, or if the coil
        does not remove heat from the air (total capacity not greater than
        zero), in which case the sensible heat ratio is undefined.
    """
    if is_missing(
        inputs.airflow, inputs.system_size, inputs.climate_zone,
        inputs.air_in, inputs.air_out
    ):
        logger.debug("Insufficient input: system capacity not calculated.")
        return None

    V_dot = inputs.airflow.to('cfm')
    size = inputs.system_size.to('cooling_ton')
    if V_dot.m <= 0.0:
        raise InvalidOperatingPointError("the airflow must be greater than zero")
    if size.m <= 0.0:
        raise InvalidOperatingPointError(
            "the nominal system size must be greater than zero"
        )
    air_in, air_out = inputs.air_in, inputs.air_out
    zone = inputs.climate_zone

    m_dot = (V_dot * AIR_DENSITY).to('lb / hr')
    dT = Q_(air_in.Tdb.to('degF').m - air_out.Tdb.to('degF').m, 'delta_degF')
    Q_dot_sen = (m_dot * CP_AIR * dT).to('Btu / hr')
    Q_dot_tot = (m_dot * (air_in.h - air_out.h)).to('Btu / hr')
    if Q_dot_tot.m <= 0.0:
        raise InvalidOperatingPointError(
            f"the total capacity is {Q_dot_tot:~P.0f}: the coil does not "
            f"cool the air and the sensible heat ratio is undefined"
        )
    Q_dot_lat = Q_dot_tot - Q_dot_sen
    SHR = Q_((Q_dot_sen / Q_dot_tot).to('frac').m, 'frac')
    cfm_per_ton = (V_dot / size).to('cfm / cooling_ton')
    m_dot_w = (m_dot * (air_in.W - air_out.W)).to('lb / hr')

    T_sup_target = target_supply_temperature(air_in.Tdb, size, zone)
    target_split = Q_(air_in.Tdb.to('degF').m - T_sup_target.m, 'delta_degF')

    logger.debug(
        f"m_dot = {m_dot:~P.1f}, Q_sen = {Q_dot_sen:~P.0f}, "
        f"Q_lat = {Q_dot_lat:~P.0f}, Q_tot = {Q_dot_tot:~P.0f}, "
        f"SHR = {SHR.to('pct'):~P.1f}"
    )

    warnings = []
    deviation = abs(Q_dot_tot.to('cooling_ton') - size)
    if deviation > CAPACITY_DEVIATION_LIMIT:
        warnings.append(SystemCapacityAdvisory.CAPACITY_DEVIATION(
            nominal=size.m, deviation=deviation.m
        ))
    if SHR.m < SHR_LOWER_LIMIT:
        warnings.append(SystemCapacityAdvisory.LOW_SHR(shr=SHR.m))
    if cfm_per_ton < CFM_PER_TON_MIN:
        warnings.append(SystemCapacityAdvisory.LOW_AIRFLOW(cfm_per_ton=cfm_per_ton.m))
    elif cfm_per_ton > CFM_PER_TON_MAX:
        warnings.append(SystemCapacityAdvisory.HIGH_AIRFLOW(cfm_per_ton=cfm_per_ton.m))
    if abs(dT - target_split) > SPLIT_DEVIATION_LIMIT:
        warnings.append(SystemCapacityAdvisory.SPLIT_DEVIATION(
            measured=dT.m, target=target_split.m
        ))

    return SystemCapacityResult(
        air_in=air_in,
        air_out=air_out,
        m_dot=m_dot,
        Q_dot_sen=Q_dot_sen,
        Q_dot_lat=Q_dot_lat,
        Q_dot_tot=Q_dot_tot,
        SHR=SHR,
        nominal_capacity=size.to('Btu / hr'),
        cfm_per_ton=cfm_per_ton,
        recommended_airflow=zone.design_airflow(size),
        condensation_rate=m_dot_w,
        condensate_volume_rate=(m_dot_w * CONDENSATE_VOLUME).to('gallon / hr'),
        measured_split=dT,
        target_split=target_split,
        T_supply_target=T_sup_target,
        warnings=tuple(warnings)
    )
