"""Registry of the calculators offered by the package.

Each calculator is identified by a short id. `calculate` creates the inputs
of the calculator from raw text fields and runs the calculation, so that a
user interface only needs to know the id and the names of the fields.
"""
from typing import Any, Callable
from dataclasses import dataclass
from hvacalc.air_distribution import (
    FilterInputs, calculate_filter,
    DuctInputs, calculate_duct,
    RoomPressureInputs, calculate_room_pressure
)
from hvacalc.moisture import (
    DehumidifierInputs, calculate_dehumidifier,
    MoldRiskInputs, calculate_mold_risk,
    AtticVentilationInputs, calculate_attic_ventilation
)
from hvacalc.psychrometrics import SystemCapacityInputs, calculate_system_capacity
from hvacalc.electrical import CapacitorInputs, calculate_capacitor


@dataclass(frozen=True)
class Calculator:
    id: str
    name: str
    description: str
    inputs_type: type
    function: Callable[[Any], Any]

    def calculate(self, **fields: Any) -> Any:
        """Creates the inputs from the text `fields` and returns the result
        of the calculation, or None if the input is insufficient.
        """
        inputs = self.inputs_type.from_text(**fields)
        return self.function(inputs)


CALCULATORS: dict[str, Calculator] = {c.id: c for c in (
    Calculator(
        id='filter',
        name='Filter Sizing',
        description='Calculate filter pressure drop and sizing based on system requirements',
        inputs_type=FilterInputs,
        function=calculate_filter
    ),
    Calculator(
        id='duct',
        name='Duct Sizing',
        description='Size various duct types including sheet metal, duct liner, and flex',
        inputs_type=DuctInputs,
        function=calculate_duct
    ),
    Calculator(
        id='dehumidifier',
        name='Dehumidifier Sizing',
        description='Size dehumidifiers based on latent load and performance data',
        inputs_type=DehumidifierInputs,
        function=calculate_dehumidifier
    ),
    Calculator(
        id='pressure',
        name='Room Pressure',
        description='Calculate grille and duct sizing for room pressure balancing',
        inputs_type=RoomPressureInputs,
        function=calculate_room_pressure
    ),
    Calculator(
        id='mold',
        name='Mold Risk',
        description='Assess mold risk based on indoor conditions',
        inputs_type=MoldRiskInputs,
        function=calculate_mold_risk
    ),
    Calculator(
        id='psychrometric',
        name='Psychrometric',
        description='Complete psychrometric calculations and equipment capacity analysis',
        inputs_type=SystemCapacityInputs,
        function=calculate_system_capacity
    ),
    Calculator(
        id='capacitor',
        name='Capacitor',
        description='Calculate run capacitor values based on electrical measurements',
        inputs_type=CapacitorInputs,
        function=calculate_capacitor
    ),
    Calculator(
        id='attic',
        name='Attic Ventilation',
        description='Calculate attic ventilation requirements and assess current conditions',
        inputs_type=AtticVentilationInputs,
        function=calculate_attic_ventilation
    )
)}


def get_calculator(calculator_id: str) -> Calculator:
    """Returns the calculator with id `calculator_id`.

    Raises
    ------
    KeyError
        If no calculator has this id.
    """
    try:
        return CALCULATORS[calculator_id]
    except KeyError:
        raise KeyError(f"unknown calculator '{calculator_id}'") from None


def calculate(calculator_id: str, **fields: Any) -> Any:
    """Runs calculator `calculator_id` on the raw text `fields`.

    Raises
    ------
    KeyError
        If no calculator has this id.
    """
    return get_calculator(calculator_id).calculate(**fields)
