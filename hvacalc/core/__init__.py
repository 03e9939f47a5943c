from .exceptions import CalculationError, InvalidOperatingPointError

from .advisories import Advisory, AdvisoryCode, codes

from .field_input import parse_number, parse_quantity, parse_choice, is_missing

from .climate_zone import ClimateZone
