import math
import numpy as np
from hvacalc import Quantity


class DuctSchedule:
    """Schedule of commercially available duct sizes."""

    def __init__(self, lookup_list: list[float], unit: str = 'inch'):
        """Creates a `DuctSchedule` instance.

        Parameters
        ----------
        lookup_list:
            The available sizes in ascending order.
        unit:
            The length unit in which the sizes of the schedule are expressed.
        """
        self.lookup_list = sorted(lookup_list)
        self.unit = unit

    def get_next_size(self, calculated_size: Quantity) -> Quantity:
        """Get the smallest available size that is not smaller than the
        calculated size. If the calculated size is larger than any size in
        the schedule, the largest size is returned.
        """
        calculated_size = calculated_size.to(self.unit).magnitude
        i = int(np.searchsorted(self.lookup_list, calculated_size, side='left'))
        i = min(i, len(self.lookup_list) - 1)
        return Quantity(self.lookup_list[i], self.unit)


def round_up(size: Quantity, increment: Quantity) -> Quantity:
    """Rounds `size` up to the next multiple of `increment`, expressed in the
    unit of `increment`.
    """
    unit = increment.units
    n = math.ceil(size.to(unit).magnitude / increment.magnitude)
    return Quantity(n * increment.magnitude, unit)


# round transfer and return ducts for room pressure balancing
round_duct_schedule = DuctSchedule([4, 5, 6, 7, 8, 9, 10, 12, 14, 16, 18, 20])
