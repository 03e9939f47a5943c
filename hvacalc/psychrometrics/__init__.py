from .humid_air import (
    STANDARD_PRESSURE,
    HumidAir,
    HumidityIndicator,
    saturation_pressure,
    humidity_ratio,
    enthalpy,
    dew_point_temperature,
    wet_bulb_temperature,
    relative_humidity_from_wet_bulb,
    relative_humidity_from_dew_point,
    clamp_relative_humidity
)

from .system_capacity import (
    SystemCapacityAdvisory,
    SystemCapacityInputs,
    SystemCapacityResult,
    target_supply_temperature,
    calculate_system_capacity
)
