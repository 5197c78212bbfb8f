"""Weight goal service - lifecycle of weight-loss goals."""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from app.constants import MIN_GOAL_AGE
from app.errors import NotFoundError, UnderageError, UnsafeGoalError, ValidationError
from app.models.weight_goal import (
    GoalMetadata,
    ProposedAdjustments,
    ValidationStatus,
    WeightGoal,
    WeightGoalCreate,
    WeightGoalRevision,
    WeightGoalSummary,
    WeightGoalUpdate,
)
from app.repositories.goal_repository import GoalRepository
from app.services.planning import (
    calculate_review_frequency,
    first_review_date,
    generate_action_plan,
    generate_configured_alerts,
    generate_objective_alerts,
    generate_review_criteria,
)
from app.services.profile_lookup import UserProfileLookup
from app.services.safety import (
    calculate_caloric_deficit,
    classify_age_bracket,
    validate_weight_loss_safety,
)
from app.utils.locks import KeyedLocks

logger = logging.getLogger(__name__)

# Fields whose change triggers a new safety validation and deficit
RECALCULATED_FIELDS = {"current_weight", "target_weight", "duration_weeks"}

GOAL_NOT_FOUND = "Weight goal not found"
INVALID_TARGET = "Target weight must be lower than current weight"


def propose_adjustments(
    goal: WeightGoal, revision: WeightGoalRevision
) -> ProposedAdjustments:
    """
    Adjustments for a revision: manual overrides, else the current values.
    """
    manual = revision.manual_adjustments
    new_target_weight = goal.target_weight
    new_duration_weeks = goal.duration_weeks
    if manual is not None:
        if manual.new_target_weight is not None:
            new_target_weight = manual.new_target_weight
        if manual.new_duration_weeks is not None:
            new_duration_weeks = manual.new_duration_weeks

    return ProposedAdjustments(
        new_target_weight=new_target_weight,
        new_duration_weeks=new_duration_weeks,
        rationale=f"Revision due to: {revision.revision_reason.value}",
        plan_impact="The plan will be adjusted to the new parameters",
    )


class WeightGoalService:
    """Service for handling weight goal operations."""

    def __init__(
        self,
        goals: GoalRepository,
        profiles: UserProfileLookup,
        locks: Optional[KeyedLocks] = None,
    ):
        """
        Initialize service with its collaborators.

        Args:
            goals: Goal repository
            profiles: Lookup resolving a user's age
            locks: Shared per-goal locks; mutations of one goal are serialized
        """
        self.goals = goals
        self.profiles = profiles
        self.locks = locks or KeyedLocks()

    async def create_goal(self, goal_create: WeightGoalCreate) -> WeightGoal:
        """
        Create a new weight goal.

        Args:
            goal_create: Goal creation data

        Returns:
            Created goal with its safety validation and generated plan

        Raises:
            ValidationError: If the target weight is not below the current weight
            ProfileNotFoundError: If the user's age cannot be resolved
            UnderageError: If the user is under 18
            UnsafeGoalError: If the safety validation rejects the goal
        """
        total_loss = goal_create.current_weight - goal_create.target_weight
        if total_loss <= 0:
            raise ValidationError(INVALID_TARGET)

        user_age = await self.profiles.get_age(goal_create.user_id)
        if user_age < MIN_GOAL_AGE:
            raise UnderageError(
                f"User must be at least {MIN_GOAL_AGE} years old to use the platform"
            )

        age_bracket = classify_age_bracket(user_age)
        validation = validate_weight_loss_safety(
            goal_create.current_weight,
            goal_create.target_weight,
            goal_create.duration_weeks,
            age_bracket,
        )

        if validation.status == ValidationStatus.REJECTED:
            logger.info(
                "Rejected unsafe goal for user %s (score %s)",
                goal_create.user_id,
                validation.safety_score,
            )
            raise UnsafeGoalError(
                "Goal does not meet the safety criteria",
                details=validation.model_dump(mode="json", by_alias=True),
            )

        now = datetime.now(timezone.utc)
        goal = WeightGoal(
            id=await self.goals.next_id(),
            user_id=goal_create.user_id,
            current_weight=goal_create.current_weight,
            target_weight=goal_create.target_weight,
            duration_weeks=goal_create.duration_weeks,
            total_weight_to_lose=total_loss,
            metadata=GoalMetadata(age_bracket=age_bracket, user_age=user_age),
            secondary_goals=goal_create.secondary_goals,
            main_motivation=goal_create.main_motivation,
            personal_motivation=goal_create.personal_motivation,
            preferred_approach=goal_create.preferred_approach,
            previous_experience=goal_create.previous_experience,
            auto_milestones=goal_create.auto_milestones,
            milestone_frequency=goal_create.milestone_frequency,
            custom_milestones=goal_create.custom_milestones,
            safety_validation=validation,
            daily_caloric_deficit=calculate_caloric_deficit(
                total_loss, goal_create.duration_weeks, age_bracket
            ),
            action_plan=generate_action_plan(),
            configured_alerts=generate_configured_alerts(goal_create.alert_preferences),
            review_frequency=calculate_review_frequency(goal_create.duration_weeks),
            review_criteria=generate_review_criteria(age_bracket),
            next_review_date=first_review_date(now),
            alert_preferences=goal_create.alert_preferences,
            personalized_alerts=goal_create.personalized_alerts or [],
            smart_configuration=goal_create.smart_configuration,
            objective_alerts=generate_objective_alerts(goal_create.alert_preferences),
            active=True,
            created_at=now,
            updated_at=now,
        )

        await self.goals.add(goal)
        logger.info(
            "Created weight goal %s for user %s (%s)",
            goal.id,
            goal.user_id,
            validation.status.value,
        )
        return goal

    async def list_goals(self, user_id: int) -> list[WeightGoalSummary]:
        """
        List goal summaries for a user.

        Args:
            user_id: Owner id

        Returns:
            Summaries in insertion order
        """
        goals = await self.goals.get_by_user(user_id)
        return [
            WeightGoalSummary(
                id=goal.id,
                current_weight=goal.current_weight,
                target_weight=goal.target_weight,
                total_weight_to_lose=goal.total_weight_to_lose,
                duration_weeks=goal.duration_weeks,
                active=goal.active,
                created_at=goal.created_at,
            )
            for goal in goals
        ]

    async def get_goal(self, goal_id: int) -> WeightGoal:
        """
        Get a single goal by id.

        Raises:
            NotFoundError: If goal not found
        """
        goal = await self.goals.get_by_id(goal_id)
        if goal is None:
            raise NotFoundError(GOAL_NOT_FOUND)
        return goal

    async def update_goal(self, goal_id: int, goal_update: WeightGoalUpdate) -> WeightGoal:
        """
        Update a goal.

        Weight or duration changes refresh the safety validation and the
        caloric deficit using the bracket captured at creation. Unsafe results
        are stored, not rejected.

        Args:
            goal_id: Goal id
            goal_update: Update data

        Returns:
            Updated goal

        Raises:
            NotFoundError: If goal not found
            ValidationError: If the merged target weight is not below the current weight
        """
        async with self.locks.hold(goal_id):
            existing = await self.get_goal(goal_id)
            return await self._apply_changes(existing, goal_update.changes())

    async def delete_goal(self, goal_id: int) -> dict:
        """
        Permanently delete a goal.

        Raises:
            NotFoundError: If goal not found
        """
        async with self.locks.hold(goal_id):
            if not await self.goals.exists(goal_id):
                raise NotFoundError(GOAL_NOT_FOUND)
            await self.goals.delete(goal_id)

        logger.info("Deleted weight goal %s", goal_id)
        return {"message": "Weight goal deleted successfully"}

    async def revise_goal(self, goal_id: int, revision: WeightGoalRevision) -> WeightGoal:
        """
        Revise a goal.

        Computes proposed adjustments; when approved they are applied as an
        update, otherwise the stored goal is returned untouched.

        Raises:
            NotFoundError: If goal not found
            ValidationError: If the adjusted target weight is not below the current weight
        """
        async with self.locks.hold(goal_id):
            existing = await self.get_goal(goal_id)
            proposed = propose_adjustments(existing, revision)
            logger.info(
                "Revision of weight goal %s proposed target=%s weeks=%s (approved=%s)",
                goal_id,
                proposed.new_target_weight,
                proposed.new_duration_weeks,
                revision.approve_adjustments,
            )

            if not revision.approve_adjustments:
                return existing

            return await self._apply_changes(
                existing,
                {
                    "target_weight": proposed.new_target_weight,
                    "duration_weeks": proposed.new_duration_weeks,
                },
            )

    async def _apply_changes(self, existing: WeightGoal, changes: dict[str, Any]) -> WeightGoal:
        """Merge changes into a goal, recomputing derived fields. Caller holds the lock."""
        fields = dict(changes)

        if fields.keys() & RECALCULATED_FIELDS:
            current_weight = fields.get("current_weight", existing.current_weight)
            target_weight = fields.get("target_weight", existing.target_weight)
            duration_weeks = fields.get("duration_weeks", existing.duration_weeks)
            total_loss = current_weight - target_weight
            if total_loss <= 0:
                raise ValidationError(INVALID_TARGET)

            age_bracket = existing.metadata.age_bracket
            validation = validate_weight_loss_safety(
                current_weight, target_weight, duration_weeks, age_bracket
            )
            fields["total_weight_to_lose"] = total_loss
            fields["safety_validation"] = validation
            fields["daily_caloric_deficit"] = calculate_caloric_deficit(
                total_loss, duration_weeks, age_bracket
            )
            if validation.status == ValidationStatus.REJECTED:
                logger.warning(
                    "Weight goal %s now fails the safety validation (score %s)",
                    existing.id,
                    validation.safety_score,
                )

        fields["updated_at"] = datetime.now(timezone.utc)
        updated = await self.goals.update(existing.id, fields)
        if updated is None:
            raise NotFoundError(GOAL_NOT_FOUND)

        logger.info("Updated weight goal %s (%s)", existing.id, ", ".join(sorted(changes)))
        return updated
