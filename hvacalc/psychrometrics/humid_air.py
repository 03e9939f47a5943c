"""Properties of moist air at standard atmospheric pressure.

The saturation pressure of water vapor is calculated with the Magnus-type
approximation of Alduchov and Eskridge (1996):

    p_ws = 6.11 hPa * exp(17.625 * T / (243.04 + T)),  T in °C

Humidity ratio, enthalpy and the wet-bulb relation use the customary
inch-pound formulas of the ASHRAE Handbook - Fundamentals (chapter
Psychrometrics). Dew point is the closed-form inverse of the Magnus
approximation, so that `saturation_pressure(dew point)` equals the partial
vapor pressure of the air.

All functions take and return `Quantity` objects. Relative humidity outside
the range 0..100 % is clamped to this range with a `RuntimeWarning`.
"""
import math
import warnings
from enum import Enum
from dataclasses import dataclass, field
from hvacalc import Quantity
from hvacalc.logging import ModuleLogger

Q_ = Quantity

logger = ModuleLogger.get_logger(__name__)

STANDARD_PRESSURE = Q_(14.696, 'psi')

# Magnus coefficients
MAGNUS_A = Q_(6.11, 'hPa')
MAGNUS_B = 17.625
MAGNUS_C = 243.04  # °C

MW_RATIO = 0.622     # molar mass water / molar mass dry air
CP_AIR = 0.24        # Btu/(lb.°F)
CP_VAPOR = 0.444     # Btu/(lb.°F)
H_FG_0 = 1061.0      # Btu/lb, enthalpy of vaporization at 0 °F
H_WB = 1093.0        # Btu/lb, used in the wet-bulb relation
CP_WATER_WB = 0.556  # Btu/(lb.°F), used in the wet-bulb relation

WET_BULB_TOLERANCE = 0.01    # °F, on the energy-balance residual
WET_BULB_RELAXATION = 1.0    # fraction of the Newton step taken per iteration
WET_BULB_MAX_ITERATIONS = 100
WET_BULB_SLOPE_STEP = 0.01   # °F, finite-difference step of the residual slope

_P_ATM = STANDARD_PRESSURE.to('hPa').m
_P_WS_A = MAGNUS_A.to('hPa').m


def _celsius(t_f: float) -> float:
    return (t_f - 32.0) * 5.0 / 9.0


def _fahrenheit(t_c: float) -> float:
    return t_c * 9.0 / 5.0 + 32.0


def _p_ws(t_f: float) -> float:
    # saturation pressure in hPa
    t_c = _celsius(t_f)
    if t_c <= -MAGNUS_C:
        # the Magnus relation tends to zero at its pole
        return 0.0
    return _P_WS_A * math.exp(MAGNUS_B * t_c / (MAGNUS_C + t_c))


def _humidity_ratio(t_f: float, rh: float) -> float:
    p_w = (rh / 100.0) * _p_ws(t_f)
    return MW_RATIO * p_w / (_P_ATM - p_w)


def _enthalpy(t_f: float, W: float) -> float:
    return CP_AIR * t_f + W * (H_FG_0 + CP_VAPOR * t_f)


def _dew_point(t_f: float, rh: float) -> float:
    t_c = _celsius(t_f)
    if rh <= 0.0 or t_c <= -MAGNUS_C:
        # limit of the Magnus inverse for vanishing vapor pressure
        return min(_fahrenheit(-MAGNUS_C), t_f)
    alpha = math.log(rh / 100.0) + MAGNUS_B * t_c / (MAGNUS_C + t_c)
    t_dp_c = MAGNUS_C * alpha / (MAGNUS_B - alpha)
    return min(_fahrenheit(t_dp_c), t_f)


def _humidity_ratio_from_wet_bulb(t_db: float, t_wb: float) -> float:
    W_s_wb = _humidity_ratio(t_wb, 100.0)
    num = (H_WB - CP_WATER_WB * t_wb) * W_s_wb - CP_AIR * (t_db - t_wb)
    den = H_WB + CP_VAPOR * t_db - t_wb
    return num / den


def _relative_humidity(t_f: float, W: float) -> float:
    p_w = W * _P_ATM / (MW_RATIO + W)
    p_ws = _p_ws(t_f)
    if p_ws <= 0.0:
        return 0.0 if p_w <= 0.0 else 100.0
    return 100.0 * p_w / p_ws


def _wet_bulb_residual(t_db: float, t_wb: float, W: float) -> float:
    # Energy balance of adiabatic saturation, expressed in °F. Positive when
    # the wet-bulb estimate is too low.
    W_s_wb = _humidity_ratio(t_wb, 100.0)
    q_lat = (H_WB - CP_WATER_WB * t_wb) * W_s_wb - (H_WB + CP_VAPOR * t_db - t_wb) * W
    return (t_db - t_wb) - q_lat / CP_AIR


def _wet_bulb(
    t_db: float,
    rh: float,
    tolerance: float = WET_BULB_TOLERANCE,
    relaxation: float = WET_BULB_RELAXATION,
    max_iterations: int = WET_BULB_MAX_ITERATIONS
) -> float:
    W = _humidity_ratio(t_db, rh)
    t_wb = t_db
    error = _wet_bulb_residual(t_db, t_wb, W)
    i = 0
    while abs(error) >= tolerance and i < max_iterations:
        # Newton step; the residual decreases with the wet-bulb estimate
        h = WET_BULB_SLOPE_STEP
        r_hi = _wet_bulb_residual(t_db, t_wb + h, W)
        r_lo = _wet_bulb_residual(t_db, t_wb - h, W)
        slope = (r_hi - r_lo) / (2 * h)
        if slope >= 0.0:
            break
        t_wb -= relaxation * error / slope
        error = _wet_bulb_residual(t_db, t_wb, W)
        i += 1
    if abs(error) >= tolerance:
        logger.warning(
            f"Wet-bulb temperature did not converge after {i} iterations "
            f"(T_db = {t_db:.2f} °F, RH = {rh:.1f} %, residual = {error:.4f} °F). "
            f"The last estimate {t_wb:.2f} °F is returned."
        )
    else:
        logger.debug(
            f"Wet-bulb temperature {t_wb:.3f} °F found after {i} iterations "
            f"(T_db = {t_db:.2f} °F, RH = {rh:.1f} %)."
        )
    # the wet bulb lies between dew point and dry bulb
    t_dp = _dew_point(t_db, rh)
    return min(max(t_wb, t_dp), t_db)


def clamp_relative_humidity(rh: float) -> float:
    """Returns relative humidity `rh` (in percent) limited to the range
    0..100 %. A `RuntimeWarning` is issued when `rh` had to be changed.
    """
    if rh < 0.0:
        warnings.warn(
            message=(
                f"Negative value for RH ({rh:.1f} %) detected. "
                "RH has been reset to 0 %."
            ),
            category=RuntimeWarning
        )
        return 0.0
    if rh > 100.0:
        warnings.warn(
            message=(
                f"Value for RH above 100 % ({rh:.1f} %) detected. "
                "RH has been reset to 100 %."
            ),
            category=RuntimeWarning
        )
        return 100.0
    return rh


def _t(T: Quantity) -> float:
    return T.to('degF').m


def _rh(RH: Quantity) -> float:
    return clamp_relative_humidity(RH.to('pct').m)


def saturation_pressure(T: Quantity) -> Quantity:
    """Returns the saturation pressure of water vapor at temperature `T`."""
    return Q_(_p_ws(_t(T)), 'hPa')


def humidity_ratio(T_db: Quantity, RH: Quantity) -> Quantity:
    """Returns the humidity ratio (mass of water vapor per unit mass of dry
    air) of air at dry-bulb temperature `T_db` and relative humidity `RH`.
    """
    return Q_(_humidity_ratio(_t(T_db), _rh(RH)), 'lb / lb')


def enthalpy(T_db: Quantity, W: Quantity) -> Quantity:
    """Returns the specific enthalpy of moist air per unit mass of dry air,
    taking 0 °F dry air and 32 °F liquid water as reference.
    """
    return Q_(_enthalpy(_t(T_db), W.to('lb / lb').m), 'Btu / lb')


def dew_point_temperature(T_db: Quantity, RH: Quantity) -> Quantity:
    """Returns the dew-point temperature of air at dry-bulb temperature `T_db`
    and relative humidity `RH`. For RH = 0 % the limit of the Magnus
    inverse, -243.04 °C, is returned.
    """
    return Q_(_dew_point(_t(T_db), _rh(RH)), 'degF')


def wet_bulb_temperature(T_db: Quantity, RH: Quantity, **kwargs) -> Quantity:
    """Returns the thermodynamic wet-bulb temperature of air at dry-bulb
    temperature `T_db` and relative humidity `RH`.

    The wet-bulb temperature is found with Newton's method on the energy
    balance of adiabatic saturation, starting from the dry-bulb temperature.
    The slope of the residual is taken by central finite differences.
    The number of iterations is always limited. If the residual is still
    larger than the tolerance when the limit is reached, the last estimate is
    returned and a warning is logged.

    Parameters
    ----------
    T_db:
        Dry-bulb temperature.
    RH:
        Relative humidity.
    kwargs:
        tolerance:
            Convergence tolerance on the residual in °F. Default value is
            0.01 °F.
        relaxation:
            Fraction of the Newton step that is taken in each iteration.
            Default value is 1.0.
        max_iterations:
            Maximum number of iterations. Default value is 100.
    """
    t_wb = _wet_bulb(
        _t(T_db), _rh(RH),
        tolerance=kwargs.get('tolerance', WET_BULB_TOLERANCE),
        relaxation=kwargs.get('relaxation', WET_BULB_RELAXATION),
        max_iterations=kwargs.get('max_iterations', WET_BULB_MAX_ITERATIONS)
    )
    return Q_(t_wb, 'degF')


def relative_humidity_from_wet_bulb(T_db: Quantity, T_wb: Quantity) -> Quantity:
    """Returns the relative humidity of air with dry-bulb temperature `T_db`
    and wet-bulb temperature `T_wb`.
    """
    t_db = _t(T_db)
    W = _humidity_ratio_from_wet_bulb(t_db, _t(T_wb))
    rh = _relative_humidity(t_db, max(W, 0.0))
    return Q_(clamp_relative_humidity(rh), 'pct')


def relative_humidity_from_dew_point(T_db: Quantity, T_dp: Quantity) -> Quantity:
    """Returns the relative humidity of air with dry-bulb temperature `T_db`
    and dew-point temperature `T_dp`.
    """
    p_ws_db = _p_ws(_t(T_db))
    if p_ws_db <= 0.0:
        return Q_(0.0, 'pct')
    rh = 100.0 * _p_ws(_t(T_dp)) / p_ws_db
    return Q_(clamp_relative_humidity(rh), 'pct')


class HumidityIndicator(Enum):
    """The humidity measurement that accompanies a dry-bulb reading."""
    RH = 'relative humidity'
    WB = 'wet-bulb temperature'
    DP = 'dew-point temperature'


@dataclass(frozen=True)
class HumidAir:
    """State of moist air at standard atmospheric pressure, fixed by its
    dry-bulb temperature `Tdb` and relative humidity `RH`. Use the class
    methods `from_wet_bulb`, `from_dew_point` or `from_reading` when the
    humidity was measured in another way.

    The other properties are derived when the object is created:

    Twb:
        wet-bulb temperature
    Tdp:
        dew-point temperature
    W:
        humidity ratio
    h:
        specific enthalpy per unit mass of dry air
    """
    Tdb: Quantity
    RH: Quantity
    Twb: Quantity = field(init=False, compare=False)
    Tdp: Quantity = field(init=False, compare=False)
    W: Quantity = field(init=False, compare=False)
    h: Quantity = field(init=False, compare=False)

    def __post_init__(self):
        t_db = _t(self.Tdb)
        rh = _rh(self.RH)
        W = _humidity_ratio(t_db, rh)
        object.__setattr__(self, 'Tdb', Q_(t_db, 'degF'))
        object.__setattr__(self, 'RH', Q_(rh, 'pct'))
        object.__setattr__(self, 'Twb', Q_(_wet_bulb(t_db, rh), 'degF'))
        object.__setattr__(self, 'Tdp', Q_(_dew_point(t_db, rh), 'degF'))
        object.__setattr__(self, 'W', Q_(W, 'lb / lb'))
        object.__setattr__(self, 'h', Q_(_enthalpy(t_db, W), 'Btu / lb'))

    @classmethod
    def from_wet_bulb(cls, Tdb: Quantity, Twb: Quantity) -> 'HumidAir':
        return cls(Tdb, relative_humidity_from_wet_bulb(Tdb, Twb))

    @classmethod
    def from_dew_point(cls, Tdb: Quantity, Tdp: Quantity) -> 'HumidAir':
        return cls(Tdb, relative_humidity_from_dew_point(Tdb, Tdp))

    @classmethod
    def from_reading(
        cls,
        Tdb: Quantity,
        humidity: Quantity,
        indicator: HumidityIndicator = HumidityIndicator.RH
    ) -> 'HumidAir':
        """Creates the air state from a dry-bulb reading and a humidity
        reading of the kind given by `indicator`.
        """
        if indicator is HumidityIndicator.WB:
            return cls.from_wet_bulb(Tdb, humidity)
        if indicator is HumidityIndicator.DP:
            return cls.from_dew_point(Tdb, humidity)
        return cls(Tdb, humidity)

    @property
    def Pw(self) -> Quantity:
        """Partial pressure of the water vapor."""
        return (self.RH.to('frac').m * saturation_pressure(self.Tdb)).to('hPa')

    def __str__(self):
        return (
            f"{self.Tdb.to('degF'):~P.1f} DB, "
            f"{self.Twb.to('degF'):~P.1f} WB, "
            f"{self.W.to('grain / lb'):~P.1f} "
            f"({self.RH.to('pct'):~P.0f} RH)"
        )
