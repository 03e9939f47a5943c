from .dehumidifier import (
    STANDARD_SIZES,
    DehumidifierAdvisory,
    DehumidifierInputs,
    DehumidifierResult,
    moisture_load,
    capacity_factor,
    calculate_dehumidifier
)

from .mold_risk import (
    MoldRiskLevel,
    MoldRecommendation,
    MoldRiskInputs,
    MoldRiskResult,
    absolute_humidity,
    calculate_mold_risk
)

from .attic_ventilation import (
    VentilationStatus,
    AtticWarning,
    AtticRecommendation,
    AtticVentilationInputs,
    AtticVentilationResult,
    stack_effect,
    required_vent_areas,
    calculate_attic_ventilation
)
