"""
Rate resolution: which pay band a clock time falls in, and which hourly
rate applies to a band.
"""

from typing import Mapping, Optional, Sequence

from .types import MINUTES_PER_DAY, PayBand, TimeOfDay


# Evening is paid at the day rate; there is no separate evening entry.
RATE_ALIASES = {
    "evening": "day",
}

UNKNOWN_BAND_LABEL = "不明"


class BandConfigurationError(ValueError):
    pass


class PayBandSet:
    """
    Ordered set of pay bands that tile the 24-hour clock.
    Bands are half-open: start inclusive, end exclusive.
    """

    def __init__(self, bands: Sequence[PayBand], default: Optional[str] = None):
        if not bands:
            raise BandConfigurationError("At least one pay band is required")

        self.bands = list(bands)
        names = [b.name for b in self.bands]
        if len(set(names)) != len(names):
            raise BandConfigurationError(f"Duplicate band names: {names}")

        self.default = default or self.bands[-1].name
        if self.default not in names:
            raise BandConfigurationError(f"Default band '{self.default}' is not defined")

        self._validate_tiling()

    def _validate_tiling(self) -> None:
        covered = sum(b.length_minutes for b in self.bands)
        if covered != MINUTES_PER_DAY:
            raise BandConfigurationError(
                f"Pay bands cover {covered} minutes, expected {MINUTES_PER_DAY}"
            )
        ordered = sorted(self.bands, key=lambda b: b.start.clock_minutes)
        for i, band in enumerate(ordered):
            following = ordered[(i + 1) % len(ordered)]
            if band.end.clock_minutes != following.start.clock_minutes:
                raise BandConfigurationError(
                    f"Gap or overlap between bands '{band.name}' and '{following.name}'"
                )

    def get(self, name: str) -> Optional[PayBand]:
        for band in self.bands:
            if band.name == name:
                return band
        return None

    def band_for_minute(self, clock_minute: int) -> PayBand:
        clock_minute %= MINUTES_PER_DAY
        for band in self.bands:
            if band.contains(clock_minute):
                return band
        return self.get(self.default)

    def band_for_time(self, time: TimeOfDay) -> PayBand:
        return self.band_for_minute(time.clock_minutes)

    def next_boundary(self, position: int) -> int:
        """
        First boundary strictly after position (extended-timeline minutes):
        the next occurrence of the current band's end.
        """
        band = self.band_for_minute(position)
        day_start = position - position % MINUTES_PER_DAY
        boundary = day_start + band.end.clock_minutes
        if boundary <= position:
            boundary += MINUTES_PER_DAY
        return boundary


DEFAULT_PAY_BANDS = PayBandSet(
    [
        PayBand("morning", TimeOfDay(6), TimeOfDay(9), "朝勤務"),
        PayBand("day", TimeOfDay(9), TimeOfDay(17), "昼勤務"),
        PayBand("evening", TimeOfDay(17), TimeOfDay(22), "夕方勤務"),
        PayBand("night", TimeOfDay(22), TimeOfDay(6), "深夜勤務"),
    ],
    default="night",
)


def band_for_time(time: TimeOfDay, bands: PayBandSet = DEFAULT_PAY_BANDS) -> str:
    return bands.band_for_time(time).name


def band_label(band: str, bands: PayBandSet = DEFAULT_PAY_BANDS) -> str:
    pay_band = bands.get(band)
    if pay_band is None or not pay_band.label:
        return UNKNOWN_BAND_LABEL
    return pay_band.label


def rate_for_band(
    band: str,
    rates: Optional[Mapping[str, float]] = None,
    fallback_rate: float = 0.0,
) -> float:
    """
    Hourly rate for a band. Never fails: no table, or no entry for the
    band, resolves to fallback_rate.
    """
    if not rates:
        return fallback_rate

    key = RATE_ALIASES.get(band, band)
    rate = rates.get(key)
    if rate is None:
        return fallback_rate
    return float(rate)


def generate_default_hourly_rates(base_rate: float) -> dict[str, float]:
    """Rate table derived from a base rate, with a 25% night premium."""
    return {
        "morning": base_rate,
        "day": base_rate,
        "night": round(base_rate * 1.25),
    }
