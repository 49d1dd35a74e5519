"""Support/Resistance levels from a uniform partition of the close range — pure functions."""

from fxdash.strategy.models import Candle, SupportResistanceLevels


def find_levels(
    candles: list[Candle],
    bucket_count: int = 5,
) -> SupportResistanceLevels:
    """Split the observed close range into *bucket_count* equal bands.

    Support levels step up from the lowest close, resistance levels step
    down from the highest close:

        support[i-1]    = min + step × i
        resistance[i-1] = max - step × i      for i = 1 .. bucket_count-1

    where ``step = (max - min) / bucket_count``.  These are not pivot or
    volume levels, just evenly spaced lines across the range.

    Args:
        candles: Candle history, oldest-first.
        bucket_count: Number of bands (default 5).

    Returns:
        ``SupportResistanceLevels``; both lists are empty for an empty series.

    Raises ``ValueError`` if *bucket_count* < 1.
    """
    if bucket_count < 1:
        raise ValueError(f"bucket_count must be >= 1, got {bucket_count}")
    if not candles:
        return SupportResistanceLevels()

    closes = [c.close for c in candles]
    low = min(closes)
    high = max(closes)
    step = (high - low) / bucket_count

    support = [low + step * i for i in range(1, bucket_count)]
    resistance = [high - step * i for i in range(1, bucket_count)]
    return SupportResistanceLevels(support=support, resistance=resistance)
