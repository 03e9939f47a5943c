import pytest
from hvacalc import Quantity
from hvacalc.core import codes
from hvacalc.moisture import (
    MoldRecommendation,
    MoldRiskInputs,
    MoldRiskLevel,
    absolute_humidity,
    calculate_mold_risk
)

Q_ = Quantity


def _assess(t: float, rh: float):
    return calculate_mold_risk(MoldRiskInputs(Q_(t, 'degF'), Q_(rh, 'pct')))


def test_high_risk():
    result = _assess(70.0, 75.0)
    assert result.risk_level is MoldRiskLevel.HIGH
    assert result.days_to_mold.to('day').m == 14
    assert codes(result.recommendations) == [
        MoldRecommendation.REDUCE_HUMIDITY,
        MoldRecommendation.IMPROVE_VENTILATION,
        MoldRecommendation.INSPECT_LEAKS,
        MoldRecommendation.CONTINUOUS_DEHUMIDIFICATION
    ]


def test_low_risk():
    result = _assess(70.0, 55.0)
    assert result.risk_level is MoldRiskLevel.LOW
    assert result.days_to_mold is None
    assert result.recommendations == ()


@pytest.mark.parametrize('rh, level, days', [
    (59.9, MoldRiskLevel.LOW, None),
    (60.0, MoldRiskLevel.MODERATE, 30),
    (70.0, MoldRiskLevel.HIGH, 14),
    (80.0, MoldRiskLevel.SEVERE, 7),
    (100.0, MoldRiskLevel.SEVERE, 7)
])
def test_risk_levels(rh, level, days):
    result = _assess(72.0, rh)
    assert result.risk_level is level
    if days is None:
        assert result.days_to_mold is None
    else:
        assert result.days_to_mold.m == days


def test_condensation_risk():
    result = _assess(70.0, 95.0)
    assert result.risk_level is MoldRiskLevel.SEVERE
    assert result.dew_point.to('degF').m > 66.0
    assert MoldRecommendation.PREVENT_CONDENSATION in codes(result.recommendations)


def test_moisture_properties():
    result = _assess(32.0, 50.0)
    assert result.saturation_pressure.to('kPa').m == pytest.approx(0.611)
    rho_w = absolute_humidity(Q_(20.0, 'degC'), Q_(50.0, 'pct'))
    assert rho_w.to('g / m ** 3').m == pytest.approx(8.62, abs=0.01)


def test_insufficient_input():
    assert calculate_mold_risk(MoldRiskInputs.from_text(temperature='70', relative_humidity=' ')) is None
