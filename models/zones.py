"""Power zone definitions and calculations for courses."""

from typing import Dict, List, Tuple
from dataclasses import dataclass


@dataclass
class ZoneDefinition:
    """Definition of a training zone as a range of FTP fractions."""

    name: str
    min_value: float
    max_value: float
    color: str
    description: str

    def contains(self, value: float) -> bool:
        return self.min_value <= value < self.max_value


class ZoneCalculator:
    """Calculator for FTP-relative power zones."""

    @staticmethod
    def get_power_zones() -> Dict[str, ZoneDefinition]:
        """Get power zone definitions, colored the way Zwift draws them."""
        return {
            'Recovery': ZoneDefinition(
                name='Recovery',
                min_value=0.0,
                max_value=0.55,
                color='grey',
                description='Active recovery, very light effort'
            ),
            'Endurance': ZoneDefinition(
                name='Endurance',
                min_value=0.55,
                max_value=0.75,
                color='blue',
                description='Aerobic base, sustainable for hours'
            ),
            'Tempo': ZoneDefinition(
                name='Tempo',
                min_value=0.75,
                max_value=0.90,
                color='green',
                description='Sweet spot, sustainable for 20-60 minutes'
            ),
            'Threshold': ZoneDefinition(
                name='Threshold',
                min_value=0.90,
                max_value=1.05,
                color='yellow',
                description='Functional threshold power, 20-60 minutes'
            ),
            'VO2 Max': ZoneDefinition(
                name='VO2 Max',
                min_value=1.05,
                max_value=1.20,
                color='orange',
                description='Maximum aerobic capacity, 3-8 minutes'
            ),
            'Anaerobic': ZoneDefinition(
                name='Anaerobic',
                min_value=1.20,
                max_value=float('inf'),
                color='red',
                description='Short, very hard efforts'
            ),
        }

    @staticmethod
    def get_zone_for_value(value: float, zones: Dict[str, ZoneDefinition]) -> str:
        """Get the zone name for a given value.

        Args:
            value: Power as a fraction of FTP
            zones: Zone definitions

        Returns:
            Zone name or 'Unknown' if not found
        """
        for zone_name, zone_def in zones.items():
            if zone_def.contains(value):
                return zone_name
        return 'Unknown'

    @staticmethod
    def calculate_zone_time(
        steps: List[Tuple[float, float]], zones: Dict[str, ZoneDefinition]
    ) -> Dict[str, Dict[str, float]]:
        """Calculate time spent in each zone.

        Args:
            steps: (power, duration_seconds) pairs
            zones: Zone definitions

        Returns:
            Dictionary with seconds and percentage of total time per zone
        """
        seconds = {zone_name: 0.0 for zone_name in zones.keys()}
        for power, duration in steps:
            zone_name = ZoneCalculator.get_zone_for_value(power, zones)
            if zone_name in seconds:
                seconds[zone_name] += duration

        total = sum(duration for _, duration in steps)
        return {
            zone_name: {
                'seconds': zone_seconds,
                'percentage': (zone_seconds / total) * 100 if total > 0 else 0.0,
            }
            for zone_name, zone_seconds in seconds.items()
        }
