from .capacitor import (
    CapacitorAdvisory,
    CapacitorInputs,
    CapacitorResult,
    RatedComparison,
    run_capacitance,
    compare_with_rated,
    calculate_capacitor
)
