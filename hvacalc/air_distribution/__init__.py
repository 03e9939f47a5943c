from .duct_schedule import DuctSchedule, round_duct_schedule, round_up

from .air_filter import (
    FilterType,
    FilterAdvisory,
    FilterInputs,
    FilterResult,
    calculate_filter
)

from .duct_sizing import (
    DuctType,
    FittingType,
    DuctSection,
    Fitting,
    SystemComponent,
    DEFAULT_COMPONENTS,
    DuctAdvisory,
    DuctSize,
    DuctInputs,
    DuctResult,
    total_component_losses,
    equivalent_length,
    velocity_pressure,
    calculate_duct
)

from .room_pressure import (
    PressureMode,
    RoomPressureAdvisory,
    GrilleSize,
    RoomPressureInputs,
    RoomPressureResult,
    door_leakage_area,
    leakage_airflow,
    select_grille,
    select_round_duct,
    calculate_room_pressure
)
