"""Priority sampling - Pure functions with an injectable random source.

Charts cannot render tens of thousands of points, so long windows are
downsampled. Priority sampling keeps every earthquake at or above a
magnitude threshold (as long as they fit in the budget) and fills the
remaining slots with a uniform random sample of the rest.

The only non-determinism is the shuffle. Pass a seeded ``random.Random``
as ``rng`` for reproducible results.
"""

import random

from src.core.earthquake import Earthquake, is_major


def sample_earthquakes(
    earthquakes: list[Earthquake],
    sample_size: int,
    rng: random.Random | None = None,
) -> list[Earthquake]:
    """Uniform random sample without replacement.

    Fisher-Yates shuffle of a copy, then slice.

    Args:
        earthquakes: Population to sample from
        sample_size: Number of earthquakes to return
        rng: Random source (a fresh non-deterministic one if None)

    Returns:
        At most sample_size earthquakes in random order
    """
    if not earthquakes or sample_size <= 0:
        return []

    rng = rng or random.Random()
    shuffled = list(earthquakes)
    rng.shuffle(shuffled)
    return shuffled[:sample_size]


def sample_with_priority(
    earthquakes: list[Earthquake],
    sample_size: int,
    priority_threshold: float,
    rng: random.Random | None = None,
) -> list[Earthquake]:
    """Downsample while retaining high-magnitude earthquakes first.

    If the priority earthquakes alone exceed the budget, a uniform sample of
    them is returned and some large events are dropped.

    Args:
        earthquakes: Population to sample from
        sample_size: Render budget
        priority_threshold: Magnitude at or above which an earthquake is priority
        rng: Random source (a fresh non-deterministic one if None)

    Returns:
        Sampled earthquakes; priority earthquakes precede the rest
    """
    if not earthquakes or sample_size <= 0:
        return []

    rng = rng or random.Random()

    if sample_size >= len(earthquakes):
        return sample_earthquakes(earthquakes, len(earthquakes), rng)

    priority = [e for e in earthquakes if is_major(e, priority_threshold)]
    other = [e for e in earthquakes if not is_major(e, priority_threshold)]

    if len(priority) >= sample_size:
        return sample_earthquakes(priority, sample_size, rng)

    remaining_slots = sample_size - len(priority)
    return priority + sample_earthquakes(other, remaining_slots, rng)
