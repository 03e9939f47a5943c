import logging
import pytest
from CoolProp.HumidAirProp import HAPropsSI
from hvacalc import Quantity
from hvacalc.psychrometrics import (
    HumidAir,
    HumidityIndicator,
    saturation_pressure,
    humidity_ratio,
    dew_point_temperature,
    wet_bulb_temperature,
    relative_humidity_from_wet_bulb,
    relative_humidity_from_dew_point
)

Q_ = Quantity

TEMPERATURES = [60.0, 70.0, 80.0, 90.0, 100.0]
HUMIDITIES = [10.0, 30.0, 50.0, 70.0, 95.0]


def test_saturation_pressure():
    assert saturation_pressure(Q_(32.0, 'degF')).to('hPa').m == pytest.approx(6.11)
    assert saturation_pressure(Q_(20.0, 'degC')).to('hPa').m == pytest.approx(23.34, abs=0.01)


@pytest.mark.parametrize('t', TEMPERATURES)
@pytest.mark.parametrize('rh', HUMIDITIES + [0.0, 100.0])
def test_dew_point_and_wet_bulb_bounds(t, rh):
    T = Q_(t, 'degF')
    RH = Q_(rh, 'pct')
    T_dp = dew_point_temperature(T, RH).m
    T_wb = wet_bulb_temperature(T, RH).m
    assert T_dp <= t
    assert T_dp <= T_wb <= t


def test_saturated_air():
    T = Q_(75.0, 'degF')
    assert dew_point_temperature(T, Q_(100, 'pct')).m == pytest.approx(75.0)
    assert wet_bulb_temperature(T, Q_(100, 'pct')).m == pytest.approx(75.0, abs=0.05)


def test_dew_point_of_dry_air():
    T_dp = dew_point_temperature(Q_(70.0, 'degF'), Q_(0.0, 'pct'))
    assert T_dp.to('degC').m == pytest.approx(-243.04)


def test_saturation_pressure_vanishes_at_the_magnus_pole():
    assert saturation_pressure(Q_(-243.04, 'degC')).m == pytest.approx(0.0, abs=1e-12)
    assert saturation_pressure(Q_(-250.0, 'degC')).m == 0.0


def test_dry_air_from_its_dew_point():
    T = Q_(70.0, 'degF')
    T_dp = dew_point_temperature(T, Q_(0.0, 'pct'))
    assert relative_humidity_from_dew_point(T, T_dp).m == pytest.approx(0.0, abs=1e-9)
    air = HumidAir.from_dew_point(T, T_dp)
    assert air.RH.m == pytest.approx(0.0, abs=1e-9)
    assert air.W.m == pytest.approx(0.0, abs=1e-12)


def test_saturated_humidity_ratio_increases_with_temperature():
    W = [humidity_ratio(Q_(t, 'degF'), Q_(100, 'pct')).m for t in range(0, 121, 5)]
    assert all(w1 < w2 for w1, w2 in zip(W, W[1:]))


@pytest.mark.parametrize('t', TEMPERATURES)
@pytest.mark.parametrize('rh', HUMIDITIES)
def test_relative_humidity_from_wet_bulb_round_trip(t, rh):
    T = Q_(t, 'degF')
    T_wb = wet_bulb_temperature(T, Q_(rh, 'pct'))
    assert relative_humidity_from_wet_bulb(T, T_wb).m == pytest.approx(rh, abs=0.5)


def test_relative_humidity_from_dew_point_round_trip():
    air = HumidAir.from_dew_point(Q_(75.0, 'degF'), Q_(55.0, 'degF'))
    assert air.Tdp.m == pytest.approx(55.0, abs=1e-3)


def test_wet_bulb_is_idempotent():
    T, RH = Q_(85.0, 'degF'), Q_(40.0, 'pct')
    assert wet_bulb_temperature(T, RH) == wet_bulb_temperature(T, RH)
    assert HumidAir(T, RH) == HumidAir(T, RH)


def test_wet_bulb_iteration_limit_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger='hvacalc.psychrometrics.humid_air'):
        T_wb = wet_bulb_temperature(Q_(80.0, 'degF'), Q_(50.0, 'pct'), max_iterations=1)
    assert 'did not converge' in caplog.text
    assert T_wb.m <= 80.0


def test_relative_humidity_is_clamped():
    with pytest.warns(RuntimeWarning):
        air = HumidAir(Q_(70.0, 'degF'), Q_(120.0, 'pct'))
    assert air.RH.m == 100.0
    with pytest.warns(RuntimeWarning):
        air = HumidAir(Q_(70.0, 'degF'), Q_(-5.0, 'pct'))
    assert air.RH.m == 0.0


def test_wet_bulb_above_dry_bulb_is_clamped():
    with pytest.warns(RuntimeWarning):
        RH = relative_humidity_from_wet_bulb(Q_(70.0, 'degF'), Q_(75.0, 'degF'))
    assert RH.m == 100.0


def test_from_reading():
    T = Q_(80.0, 'degF')
    air_wb = HumidAir.from_reading(T, Q_(67.0, 'degF'), HumidityIndicator.WB)
    assert air_wb.Twb.m == pytest.approx(67.0, abs=0.1)
    air_rh = HumidAir.from_reading(T, air_wb.RH, HumidityIndicator.RH)
    assert air_rh.W.m == pytest.approx(air_wb.W.m)


@pytest.mark.parametrize('t_c, rh', [(15.0, 0.6), (25.0, 0.5), (35.0, 0.7)])
def test_against_coolprop(t_c, rh):
    T_k = t_c + 273.15
    air = HumidAir(Q_(t_c, 'degC'), Q_(100 * rh, 'pct'))
    W_ref = HAPropsSI('W', 'T', T_k, 'P', 101325.0, 'R', rh)
    T_wb_ref = HAPropsSI('B', 'T', T_k, 'P', 101325.0, 'R', rh)
    T_dp_ref = HAPropsSI('D', 'T', T_k, 'P', 101325.0, 'R', rh)
    assert air.W.m == pytest.approx(W_ref, rel=0.02)
    assert air.Twb.to('K').m == pytest.approx(T_wb_ref, abs=0.3)
    assert air.Tdp.to('K').m == pytest.approx(T_dp_ref, abs=0.3)


@pytest.mark.parametrize('t', [100.0, 120.0, 140.0, 160.0])
@pytest.mark.parametrize('rh', [10.0, 50.0, 95.0])
def test_wet_bulb_converges_in_hot_humid_air(t, rh, caplog):
    T = Q_(t, 'degF')
    with caplog.at_level(logging.WARNING, logger='hvacalc.psychrometrics.humid_air'):
        T_wb = wet_bulb_temperature(T, Q_(rh, 'pct'))
    assert 'did not converge' not in caplog.text
    assert relative_humidity_from_wet_bulb(T, T_wb).m == pytest.approx(rh, abs=0.5)
