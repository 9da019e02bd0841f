"""Score weight vector and priority-driven adjustments."""
from __future__ import annotations

from dataclasses import replace

from gigfeed.models import RankOptions, ScoreWeights

BASE_WEIGHTS = ScoreWeights()
FACTORS: tuple[str, ...] = tuple(BASE_WEIGHTS.as_dict())


def adjust(weights: ScoreWeights, factor: str, increase: float = 0.1) -> ScoreWeights:
    """Raise *factor* by *increase*, taking increase/4 from each other weight."""
    if factor not in FACTORS:
        raise ValueError(f"Unknown weight factor: {factor!r}")
    share = increase / (len(FACTORS) - 1)
    values = {
        name: value + increase if name == factor else value - share
        for name, value in weights.as_dict().items()
    }
    return replace(weights, **values)


def renormalize(weights: ScoreWeights) -> ScoreWeights:
    values = {k: max(0.0, v) for k, v in weights.as_dict().items()}
    total = sum(values.values())
    if total <= 0:
        return BASE_WEIGHTS
    return ScoreWeights(**{k: v / total for k, v in values.items()})


def weights_for(
    options: RankOptions | None,
    base: ScoreWeights | None = None,
    increase: float = 0.1,
) -> ScoreWeights:
    """Effective weights for a ranking pass.

    Each active priority flag applies one adjust(); flags compound and the
    result is renormalized to sum to exactly 1.0.
    """
    weights = base or BASE_WEIGHTS
    if options is None:
        return weights

    flags = (
        (options.prioritize_location, "location_match"),
        (options.prioritize_pay, "pay_match"),
        (options.prioritize_skills, "skill_match"),
    )
    active = [factor for enabled, factor in flags if enabled]
    if not active:
        return weights
    for factor in active:
        weights = adjust(weights, factor, increase)
    return renormalize(weights)
