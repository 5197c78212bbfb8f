"""Plan, alert and review generation for new weight goals."""
from datetime import datetime, timedelta

from app.constants import FIRST_REVIEW_DAYS, MAX_ACCELERATION, WEEKS_WITHOUT_PROGRESS
from app.models.weight_goal import (
    ActionPlan,
    AgeBracket,
    AlertPreferences,
    AlertType,
    ConfiguredAlert,
    Frequency,
    ObjectiveAlert,
    ReviewCriteria,
)
from app.services.safety import SAFETY_LIMITS


def calculate_review_frequency(duration_weeks: int) -> Frequency:
    """Pick the review cadence from the goal duration."""
    if duration_weeks <= 12:
        return Frequency.WEEKLY
    if duration_weeks <= 26:
        return Frequency.BIWEEKLY
    return Frequency.MONTHLY


def generate_review_criteria(age_bracket: AgeBracket) -> ReviewCriteria:
    """Build review thresholds from the bracket's deviation limit."""
    return ReviewCriteria(
        max_deviation_percent=SAFETY_LIMITS[age_bracket].max_deviation_percent,
        weeks_without_progress=WEEKS_WITHOUT_PROGRESS,
        max_acceleration=MAX_ACCELERATION,
    )


def first_review_date(now: datetime) -> datetime:
    """First checkpoint, one week out regardless of cadence."""
    return now + timedelta(days=FIRST_REVIEW_DAYS)


def generate_action_plan() -> ActionPlan:
    """
    Initial action plan.

    The content is the same for every goal; personalization would hook in here.
    """
    return ActionPlan(
        nutrition_recommendations=[
            "Eat more vegetables and lean proteins",
            "Cut back on refined carbohydrates and sugars",
            "Stay properly hydrated",
        ],
        suggested_activities=[
            "Walk 30 minutes a day",
            "Resistance training 2-3 times a week",
            "Daily stretching",
        ],
        next_steps=[
            "Log your starting weight",
            "Set regular meal times",
            "Plan your physical activities",
        ],
        weekly_schedule={
            "week1": ["Adapt to the new plan", "Log meals daily"],
            "week2": ["Start light exercise", "Adjust portion sizes"],
            "week3": ["Gradually increase intensity", "First check-in"],
            "week4": ["Consolidate habits", "Progress review"],
        },
    )


def generate_configured_alerts(preferences: AlertPreferences) -> list[ConfiguredAlert]:
    """
    Alerts for the user's requested alert types.

    Only weighing alerts are generated; other requested types produce nothing yet.
    """
    alerts = []
    if AlertType.WEIGHING in preferences.desired_types:
        alerts.append(
            ConfiguredAlert(
                type=AlertType.WEIGHING,
                frequency=Frequency.WEEKLY,
                time=preferences.preferred_times.morning,
                message="Time to log your weekly weight",
                active=True,
            )
        )
    return alerts


def generate_objective_alerts(preferences: AlertPreferences) -> list[ObjectiveAlert]:
    """The weekly weigh-in alert tied to the main weight objective."""
    return [
        ObjectiveAlert(
            type="weekly_weighing",
            frequency=Frequency.WEEKLY,
            suggested_time=preferences.preferred_times.morning,
            message="Log your weight to track your progress",
            based_on="main_weight_goal",
        )
    ]
