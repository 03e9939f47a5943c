import logging
import pytest
from hvacalc.calculators import CALCULATORS, calculate, get_calculator
from hvacalc.logging import ModuleLogger

FIELDS = {
    'filter': dict(
        system_size='3', climate_zone='hot-humid', filter_width='20',
        filter_height='25', filter_type='pleated-basic'
    ),
    'duct': dict(
        duct_type='round-flex', airflow='400', straight_length='25',
        duct_section='supply-branch', fittings=[('elbow-90', '2')]
    ),
    'dehumidifier': dict(latent_load='10000', indoor_temperature='75', indoor_rh='65'),
    'pressure': dict(
        mode='pressure', pressure='2', door_width='30', door_height='80',
        door_undercut='0.5'
    ),
    'mold': dict(temperature='70', relative_humidity='75'),
    'psychrometric': dict(
        airflow='1200', system_size='3', climate_zone='moist',
        entering_dry_bulb='78', entering_humidity='50',
        leaving_dry_bulb='58', leaving_humidity='90'
    ),
    'capacitor': dict(start_winding_current='5', voltage='230', rated_capacitance='60'),
    'attic': dict(
        pressure_difference='1', outdoor_temperature='90', outdoor_dew_point='60',
        attic_temperature='115', attic_dew_point='63', attic_area='1200'
    )
}


def test_registry():
    assert list(CALCULATORS) == [
        'filter', 'duct', 'dehumidifier', 'pressure', 'mold', 'psychrometric',
        'capacitor', 'attic'
    ]
    assert get_calculator('mold').name == 'Mold Risk'
    assert all(c.description for c in CALCULATORS.values())


def test_unknown_calculator():
    with pytest.raises(KeyError):
        calculate('heat-pump')


@pytest.mark.parametrize('calculator_id', list(FIELDS))
def test_calculate_is_idempotent(calculator_id):
    first = calculate(calculator_id, **FIELDS[calculator_id])
    second = calculate(calculator_id, **FIELDS[calculator_id])
    assert first is not None
    assert first == second


def test_results():
    assert calculate('filter', **FIELDS['filter']).airflow.to('cfm').m == pytest.approx(1050.0)
    assert calculate('dehumidifier', **FIELDS['dehumidifier']).recommended_size.m == 30
    assert calculate('capacitor', **FIELDS['capacitor']).rated_comparison.within_tolerance


def test_insufficient_input():
    assert calculate('mold', temperature='', relative_humidity='75') is None
    assert calculate('attic') is None


def test_insufficient_input_is_logged_once(caplog):
    ModuleLogger.set_level(ModuleLogger.DEBUG)
    try:
        with caplog.at_level(logging.DEBUG):
            assert calculate('mold', temperature='', relative_humidity='75') is None
    finally:
        ModuleLogger.set_level(ModuleLogger.WARNING)
    records = [r for r in caplog.records if 'nsufficient input' in r.getMessage()]
    assert len(records) == 1
    assert records[0].name == 'hvacalc.moisture.mold_risk'
    assert records[0].levelno == logging.DEBUG
