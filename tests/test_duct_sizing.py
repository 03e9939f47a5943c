import pytest
from hvacalc import Quantity
from hvacalc.core import InvalidOperatingPointError, codes
from hvacalc.air_distribution import (
    DEFAULT_COMPONENTS,
    DuctAdvisory,
    DuctInputs,
    DuctSection,
    DuctType,
    Fitting,
    FittingType,
    calculate_duct,
    equivalent_length,
    total_component_losses,
    velocity_pressure
)

Q_ = Quantity


def test_helpers():
    assert total_component_losses(DEFAULT_COMPONENTS).to('in_wc').m == pytest.approx(0.73)
    assert velocity_pressure(Q_(4005, 'fpm')).to('in_wc').m == pytest.approx(1.0)
    L_eq = equivalent_length(
        Q_(50, 'ft'),
        [Fitting(FittingType.ELBOW_90, 2), Fitting(FittingType.TEE)]
    )
    assert L_eq.to('ft').m == pytest.approx(51.6)


def test_target_velocity():
    assert DuctSection.SUPPLY_MAIN.target_velocity.m == pytest.approx(800.0)
    assert DuctSection.RETURN_BRANCH.target_velocity.m == pytest.approx(500.0)


def test_round_metal_duct():
    inputs = DuctInputs(
        duct_type=DuctType.ROUND_METAL,
        airflow=Q_(800, 'cfm'),
        straight_length=Q_(100, 'ft'),
        fittings=(Fitting(FittingType.TEE),),
        components=()
    )
    result = calculate_duct(inputs)
    assert result.size.diameter.to('inch').m == pytest.approx(14.0)
    assert result.velocity.to('fpm').m == pytest.approx(748.4, abs=0.5)
    assert result.equivalent_length.to('ft').m == pytest.approx(101.0)
    assert result.available_static_pressure.to('in_wc').m == pytest.approx(0.5)
    assert result.friction_rate.to('in_wc / hundred_feet').m == pytest.approx(0.495, abs=1e-3)
    # friction loss uses up the available static pressure, the tee adds to it
    assert codes(result.warnings) == [DuctAdvisory.DUCT_LOSSES_EXCEED_AVAILABLE]
    assert str(result.size) == '14" diameter'


def test_rectangular_duct():
    inputs = DuctInputs(
        duct_type=DuctType.RECT_METAL,
        airflow=Q_(800, 'cfm'),
        straight_length=Q_(60, 'ft'),
        width=Q_(10, 'inch')
    )
    result = calculate_duct(inputs)
    assert result.size.width.to('inch').m == pytest.approx(10.0)
    assert result.size.height.to('inch').m == pytest.approx(14.5)
    assert result.velocity.to('fpm').m == pytest.approx(794.5, abs=0.5)
    assert DuctAdvisory.COMPONENT_LOSSES_EXCEED_DESIGN in codes(result.warnings)


def test_rectangular_duct_without_width():
    inputs = DuctInputs(
        duct_type=DuctType.RECT_BOARD,
        airflow=Q_(800, 'cfm'),
        straight_length=Q_(60, 'ft')
    )
    assert calculate_duct(inputs) is None


def test_flex_duct_safety_factor():
    inputs = DuctInputs(
        duct_type=DuctType.ROUND_FLEX,
        airflow=Q_(1200, 'cfm'),
        straight_length=Q_(40, 'ft'),
        components=()
    )
    result = calculate_duct(inputs)
    assert result.size.diameter.to('inch').m == pytest.approx(17.0)
    assert result.static_pressure.to('in_wc').m == pytest.approx(1.5 * 0.5)
    assert DuctAdvisory.FLEX_SAFETY_FACTOR in codes(result.warnings)
    assert DuctAdvisory.FLEX_VELOCITY_ABOVE_LIMIT not in codes(result.warnings)


def test_zero_equivalent_length():
    inputs = DuctInputs(duct_type=DuctType.ROUND_METAL, airflow=Q_(800, 'cfm'))
    with pytest.raises(InvalidOperatingPointError):
        calculate_duct(inputs)


def test_from_text():
    inputs = DuctInputs.from_text(
        duct_type='round-metal',
        airflow='800',
        straight_length='100',
        duct_section='return-main',
        fittings=[('elbow-90', '2'), ('unknown', 1)],
        components=[('Filter', '0.1'), ('Grille', '')]
    )
    assert inputs.fittings == (Fitting(FittingType.ELBOW_90, 2),)
    assert inputs.duct_section is DuctSection.RETURN_MAIN
    assert total_component_losses(inputs.components).m == pytest.approx(0.1)
    result = calculate_duct(inputs)
    assert result.equivalent_length.to('ft').m == pytest.approx(100.6)
    assert result.available_static_pressure.to('in_wc').m == pytest.approx(0.4)


def test_insufficient_input():
    assert calculate_duct(DuctInputs.from_text(duct_type='round-metal', airflow='')) is None
