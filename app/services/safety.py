"""Weight-loss safety rules: age brackets, safety validation, caloric deficit.

Everything here is a pure function of its inputs. The heuristics are simplified
and intentionally reproduced as-is.
"""
import math
from dataclasses import dataclass

from app.constants import (
    KCAL_PER_KG,
    MAX_DAILY_DEFICIT,
    MIN_DAILY_DEFICIT,
    MIN_WEEKLY_LOSS,
)
from app.models.weight_goal import (
    AgeBracket,
    SafetyValidation,
    Suggestion,
    SuggestionType,
    ValidationStatus,
)

AGGRESSIVE_LOSS_PENALTY = 30
SLOW_LOSS_PENALTY = 10
EXCESS_LOSS_PENALTY = 40

REJECTED_BELOW = 60
WARNING_BELOW = 80


@dataclass(frozen=True)
class SafetyLimits:
    """Per-bracket safety limits."""

    max_weekly_loss: float  # kg/week
    max_total_loss_percent: float
    max_deviation_percent: float


SAFETY_LIMITS = {
    AgeBracket.YOUNG: SafetyLimits(1.0, 20, 20),
    AgeBracket.ADULT: SafetyLimits(0.8, 15, 15),
    AgeBracket.SENIOR: SafetyLimits(0.5, 10, 10),
}

SAFETY_FACTORS = {
    AgeBracket.YOUNG: 1.0,
    AgeBracket.ADULT: 0.9,
    AgeBracket.SENIOR: 0.8,
}


def classify_age_bracket(age: int) -> AgeBracket:
    """
    Map an age to its bracket.

    Callers reject ages under 18 before classifying.

    Examples:
        >>> classify_age_bracket(25)
        <AgeBracket.YOUNG: 'young'>
        >>> classify_age_bracket(60)
        <AgeBracket.SENIOR: 'senior'>
    """
    if 18 <= age <= 25:
        return AgeBracket.YOUNG
    if 26 <= age <= 59:
        return AgeBracket.ADULT
    return AgeBracket.SENIOR


def status_for_score(score: int) -> ValidationStatus:
    """Derive the validation status from a (possibly negative) score."""
    if score < REJECTED_BELOW:
        return ValidationStatus.REJECTED
    if score < WARNING_BELOW:
        return ValidationStatus.WARNING
    return ValidationStatus.APPROVED


def validate_weight_loss_safety(
    current_weight: float,
    target_weight: float,
    duration_weeks: int,
    age_bracket: AgeBracket,
) -> SafetyValidation:
    """
    Score a weight-loss plan against the age bracket's safety limits.

    Penalties are independent and additive; the raw score is reported even
    when it drops below zero.

    Args:
        current_weight: Current weight in kg
        target_weight: Target weight in kg
        duration_weeks: Goal duration in weeks
        age_bracket: Bracket whose limits apply

    Returns:
        SafetyValidation with status, alerts, suggestions and score
    """
    total_loss = current_weight - target_weight
    weekly_loss = total_loss / duration_weeks
    loss_percent = total_loss / current_weight * 100

    limits = SAFETY_LIMITS[age_bracket]
    alerts: list[str] = []
    suggestions: list[Suggestion] = []
    score = 100

    if weekly_loss > limits.max_weekly_loss:
        score -= AGGRESSIVE_LOSS_PENALTY
        alerts.append("Weekly loss is too aggressive for your age bracket")
        suggested_weeks = math.ceil(total_loss / limits.max_weekly_loss)
        suggestions.append(
            Suggestion(
                type=SuggestionType.DEADLINE,
                suggested_value=suggested_weeks,
                rationale=f"We recommend {suggested_weeks} weeks for safe weight loss",
            )
        )

    if weekly_loss < MIN_WEEKLY_LOSS:
        score -= SLOW_LOSS_PENALTY
        alerts.append("Weekly loss is too slow and may hurt motivation")

    if loss_percent > limits.max_total_loss_percent:
        score -= EXCESS_LOSS_PENALTY
        alerts.append("Total loss exceeds the safe limit for your age bracket")
        max_safe_loss = current_weight * limits.max_total_loss_percent / 100
        suggestions.append(
            Suggestion(
                type=SuggestionType.TARGET_WEIGHT,
                suggested_value=current_weight - max_safe_loss,
                rationale=f"Maximum safe loss: {max_safe_loss:.1f}kg",
            )
        )

    return SafetyValidation(
        status=status_for_score(score),
        alerts=alerts,
        suggestions=suggestions,
        safety_score=score,
    )


def calculate_caloric_deficit(
    total_loss: float, duration_weeks: int, age_bracket: AgeBracket
) -> int:
    """
    Daily caloric deficit (kcal) needed for the planned loss.

    Rounds half up and clamps the result to [200, 1000].
    """
    days = duration_weeks * 7
    base_deficit = total_loss * KCAL_PER_KG / days
    adjusted = base_deficit * SAFETY_FACTORS[age_bracket]
    return max(MIN_DAILY_DEFICIT, min(MAX_DAILY_DEFICIT, math.floor(adjusted + 0.5)))
