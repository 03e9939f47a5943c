"""Airflow guidance per ton of cooling for the IECC climate zone groups.

Humid climates need lower airflow per ton so that the coil runs colder and
removes more moisture; dry climates can move more air per ton.
"""
from enum import Enum
from hvacalc import Quantity

Q_ = Quantity


class ClimateZone(Enum):
    """Groups of IECC climate zones. The value of each member is a tuple of
    the display label, the IECC zones that belong to the group, and the
    design airflow per ton of nominal cooling capacity.
    """
    HOT_HUMID = ('Hot/Humid (1A, 2A)', ('1A', '2A'), 350)
    MOIST = ('Moist (3A, 4A, 5A, 6A, 7A)', ('3A', '4A', '5A', '6A', '7A'), 400)
    DRY = ('Dry (2B, 3B, 4B, 5B, 6B, 7B)', ('2B', '3B', '4B', '5B', '6B', '7B'), 450)
    MARINE = ('Marine (3C, 4C)', ('3C', '4C'), 400)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def zones(self) -> tuple[str, ...]:
        return self.value[1]

    @property
    def cfm_per_ton(self) -> Quantity:
        return Q_(self.value[2], 'cfm / cooling_ton')

    def design_airflow(self, system_size: Quantity) -> Quantity:
        """Returns the design airflow of equipment with nominal capacity
        `system_size`.
        """
        V_dot = self.cfm_per_ton * system_size.to('cooling_ton')
        return V_dot.to('cfm')

    @classmethod
    def from_iecc_zone(cls, zone: str) -> 'ClimateZone':
        """Returns the group to which IECC climate zone `zone` (e.g. '2A')
        belongs.

        Raises
        ------
        ValueError
            If `zone` is not part of any group.
        """
        zone = zone.strip().upper()
        for member in cls:
            if zone in member.zones:
                return member
        raise ValueError(f"unknown IECC climate zone '{zone}'")
