import pytest
from hvacalc import Quantity
from hvacalc.core import codes
from hvacalc.moisture import (
    AtticRecommendation,
    AtticVentilationInputs,
    AtticWarning,
    VentilationStatus,
    calculate_attic_ventilation,
    stack_effect
)

Q_ = Quantity


def _inputs(
    pressure: float = 0.0,
    outdoor: tuple[float, float] = (90.0, 60.0),
    attic: tuple[float, float] = (100.0, 62.0),
    intake: str | None = None,
    exhaust: str | None = None
) -> AtticVentilationInputs:
    return AtticVentilationInputs.from_text(
        pressure_difference=str(pressure),
        outdoor_temperature=str(outdoor[0]),
        outdoor_dew_point=str(outdoor[1]),
        attic_temperature=str(attic[0]),
        attic_dew_point=str(attic[1]),
        attic_area='1500',
        existing_intake_area=intake,
        existing_exhaust_area=exhaust
    )


def test_adequate_ventilation_without_existing_vents():
    result = calculate_attic_ventilation(_inputs())
    assert result.status is VentilationStatus.ADEQUATE
    assert result.temperature_difference.m == pytest.approx(10.0)
    assert result.dew_point_difference.m == pytest.approx(2.0)
    assert result.minimum_vent_area.to('ft ** 2').m == pytest.approx(5.0)
    assert result.recommended_vent_area.to('ft ** 2').m == pytest.approx(10.0)
    assert result.required_intake_area.m == pytest.approx(6.0)
    assert result.required_exhaust_area.m == pytest.approx(4.0)
    assert result.warnings == ()
    assert [str(r) for r in result.recommendations] == [
        'Install 6.0 sq ft of intake ventilation',
        'Install 4.0 sq ft of exhaust ventilation'
    ]


def test_stack_effect():
    assert stack_effect(Q_(1500, 'ft ** 2'), Q_(10, 'delta_degF')).to('cfm').m == pytest.approx(89.18, abs=0.01)
    assert stack_effect(Q_(1500, 'ft ** 2'), Q_(-10, 'delta_degF')).to('cfm').m == pytest.approx(-89.18, abs=0.01)
    assert stack_effect(Q_(1500, 'ft ** 2'), Q_(0, 'delta_degF')).m == 0.0


def test_status_never_decreases():
    result = calculate_attic_ventilation(_inputs(pressure=3.0, attic=(125.0, 62.0)))
    assert codes(result.warnings) == [
        AtticWarning.HIGH_TEMPERATURE_DIFFERENCE,
        AtticWarning.CRITICAL_TEMPERATURE_DIFFERENCE,
        AtticWarning.HIGH_PRESSURE_DIFFERENCE
    ]
    assert result.status is VentilationStatus.CRITICAL
    assert codes(result.recommendations)[-1] is AtticRecommendation.BALANCE_WITH_EXHAUST


def test_high_moisture():
    result = calculate_attic_ventilation(_inputs(attic=(100.0, 70.0)))
    assert codes(result.warnings) == [AtticWarning.HIGH_MOISTURE]
    assert result.status is VentilationStatus.INADEQUATE


def test_existing_vents_below_minimum():
    result = calculate_attic_ventilation(_inputs(intake='2', exhaust='1'))
    assert codes(result.warnings) == [AtticWarning.BELOW_MINIMUM_VENT_AREA]
    assert result.status is VentilationStatus.CRITICAL
    assert [str(r) for r in result.recommendations] == [
        'Add 4.0 sq ft of intake ventilation',
        'Add 3.0 sq ft of exhaust ventilation'
    ]


def test_existing_vents_below_recommended():
    result = calculate_attic_ventilation(_inputs(pressure=-1.0, intake='4', exhaust='3'))
    assert result.status is VentilationStatus.ADEQUATE
    assert codes(result.recommendations) == [
        AtticRecommendation.INCREASE_VENT_AREA,
        AtticRecommendation.ADD_INTAKE,
        AtticRecommendation.ADD_EXHAUST,
        AtticRecommendation.BALANCE_WITH_INTAKE
    ]


def test_only_one_existing_vent_area():
    result = calculate_attic_ventilation(_inputs(intake='8'))
    assert codes(result.recommendations) == [
        AtticRecommendation.INSTALL_INTAKE,
        AtticRecommendation.INSTALL_EXHAUST
    ]


def test_insufficient_input():
    inputs = AtticVentilationInputs.from_text(
        pressure_difference='1',
        outdoor_temperature='90',
        outdoor_dew_point='60',
        attic_temperature='100',
        attic_dew_point='62'
    )
    assert calculate_attic_ventilation(inputs) is None
