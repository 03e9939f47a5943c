import pint

UNITS = pint.UnitRegistry()
Quantity = UNITS.Quantity

unit_definitions = [
    'fraction = [] = frac',
    'percent = 1e-2 frac = % = pct',
    'cubic_foot_per_minute = foot ** 3 / minute = cfm',
    'foot_per_minute = foot / minute = fpm',
    'inch_water_column = 249.0889 * pascal = in_wc',
    'hundred_feet = 100 * foot',
    'cooling_ton = 12000 * Btu / hour'
]
for ud in unit_definitions:
    UNITS.define(ud)

pint.set_application_registry(UNITS)
