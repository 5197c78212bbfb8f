"""Tests for WeightGoalService."""
from datetime import datetime, timezone

import pytest

from tests.factories import goal_payload


def _create(**overrides):
    from app.models.weight_goal import WeightGoalCreate

    return WeightGoalCreate.model_validate(goal_payload(**overrides))


def _service(goal_repository, profiles):
    from app.services.weight_goal_service import WeightGoalService

    return WeightGoalService(goal_repository, profiles)


@pytest.mark.asyncio
class TestWeightGoalServiceCreate:
    """Tests for creating weight goals."""

    async def test_create_goal_success(self, goal_repository, adult_profiles):
        """Test an approved goal is persisted with all derived fields."""
        from app.models.weight_goal import AgeBracket, Frequency, ValidationStatus

        service = _service(goal_repository, adult_profiles)
        goal = await service.create_goal(_create())

        assert goal.id == 1
        assert goal.total_weight_to_lose == 5
        assert goal.metadata.age_bracket == AgeBracket.ADULT
        assert goal.metadata.user_age == 30
        assert goal.safety_validation.status == ValidationStatus.APPROVED
        assert goal.safety_validation.safety_score == 100
        assert goal.daily_caloric_deficit == 248
        assert goal.review_frequency == Frequency.BIWEEKLY
        assert goal.review_criteria.max_deviation_percent == 15
        assert len(goal.configured_alerts) == 1
        assert len(goal.objective_alerts) == 1
        assert goal.secondary_objective_alerts == []
        assert goal.milestone_alerts == []
        assert goal.motivational_alerts == []
        assert goal.personalized_alerts == []
        assert goal.user_approval is False
        assert goal.active is True
        assert (goal.next_review_date - goal.created_at).days == 7
        assert await goal_repository.get_by_id(1) == goal

    async def test_create_goal_ids_increase(self, goal_repository, adult_profiles):
        """Test ids are assigned in strictly increasing order."""
        service = _service(goal_repository, adult_profiles)

        first = await service.create_goal(_create())
        second = await service.create_goal(_create())

        assert second.id > first.id

    async def test_create_goal_warning_is_persisted(self, goal_repository, adult_profiles):
        """Test a goal in warning status is still created."""
        from app.models.weight_goal import ValidationStatus

        service = _service(goal_repository, adult_profiles)
        # 9 kg in 10 weeks: 0.9 kg/week > 0.8 for adults
        goal = await service.create_goal(
            _create(currentWeight=100, targetWeight=91, durationWeeks=10)
        )

        assert goal.safety_validation.status == ValidationStatus.WARNING
        assert goal.safety_validation.safety_score == 70

    async def test_create_goal_target_not_below_current(self, adult_profiles):
        """Test target >= current fails before age lookup or validation."""
        from unittest.mock import AsyncMock
        from app.errors import ValidationError
        from app.repositories.goal_repository import InMemoryGoalRepository

        profiles = AsyncMock()
        service = _service(InMemoryGoalRepository(), profiles)

        with pytest.raises(ValidationError, match="Target weight must be lower"):
            await service.create_goal(_create(currentWeight=80, targetWeight=80))

        profiles.get_age.assert_not_called()

    async def test_create_goal_unsafe_persists_nothing(self, goal_repository, adult_profiles):
        """Test a rejected goal raises with the validation result and stores nothing."""
        from app.errors import UnsafeGoalError

        service = _service(goal_repository, adult_profiles)

        with pytest.raises(UnsafeGoalError) as exc_info:
            await service.create_goal(
                _create(currentWeight=100, targetWeight=70, durationWeeks=10)
            )

        details = exc_info.value.details
        assert details["status"] == "rejected"
        assert details["safetyScore"] == 30
        assert len(details["suggestions"]) == 2
        assert await goal_repository.get_by_user(1) == []
        assert await goal_repository.get_by_id(1) is None

    async def test_create_goal_underage(self, goal_repository):
        """Test users under 18 cannot create goals."""
        from app.errors import UnderageError
        from app.services.profile_lookup import FixedAgeProfileLookup

        service = _service(goal_repository, FixedAgeProfileLookup(17))

        with pytest.raises(UnderageError):
            await service.create_goal(_create())

        assert await goal_repository.get_by_user(1) == []

    async def test_create_goal_uses_age_bracket_limits(self, goal_repository):
        """Test the same goal is rejected for a senior."""
        from app.errors import UnsafeGoalError
        from app.services.profile_lookup import FixedAgeProfileLookup

        service = _service(goal_repository, FixedAgeProfileLookup(65))

        # 0.75 kg/week > 0.5 and 16.7% > 10% for seniors
        with pytest.raises(UnsafeGoalError):
            await service.create_goal(
                _create(currentWeight=90, targetWeight=75, durationWeeks=20)
            )


@pytest.mark.asyncio
class TestWeightGoalServiceRead:
    """Tests for listing and getting weight goals."""

    async def test_list_goals_for_user(self, goal_repository, adult_profiles):
        """Test listing returns summaries of the user's goals only."""
        service = _service(goal_repository, adult_profiles)
        await service.create_goal(_create(user_id=1))
        await service.create_goal(_create(user_id=2))
        await service.create_goal(_create(user_id=1, targetWeight=76))

        summaries = await service.list_goals(user_id=1)

        assert [s.id for s in summaries] == [1, 3]
        assert summaries[1].target_weight == 76
        assert summaries[1].total_weight_to_lose == 4

    async def test_get_goal_not_found(self, goal_repository, adult_profiles):
        """Test getting a missing goal raises NotFoundError."""
        from app.errors import NotFoundError

        service = _service(goal_repository, adult_profiles)

        with pytest.raises(NotFoundError, match="Weight goal not found"):
            await service.get_goal(99)


@pytest.mark.asyncio
class TestWeightGoalServiceUpdate:
    """Tests for updating weight goals."""

    async def test_update_active_only_keeps_validation(self, goal_repository, adult_profiles):
        """Test a non-weight change leaves validation and deficit untouched."""
        from app.models.weight_goal import WeightGoalUpdate

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())

        updated = await service.update_goal(created.id, WeightGoalUpdate(active=False))

        assert updated.active is False
        assert updated.safety_validation == created.safety_validation
        assert updated.daily_caloric_deficit == created.daily_caloric_deficit

    async def test_update_target_recomputes(self, goal_repository, adult_profiles):
        """Test a target change recomputes validation, deficit and updatedAt."""
        from app.models.weight_goal import ValidationStatus, WeightGoalUpdate

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())
        old = datetime(2020, 1, 1, tzinfo=timezone.utc)
        await goal_repository.update(created.id, {"updated_at": old})

        updated = await service.update_goal(created.id, WeightGoalUpdate(target_weight=78))

        assert updated.target_weight == 78
        assert updated.total_weight_to_lose == 2
        assert updated.safety_validation.safety_score == 90
        assert updated.safety_validation.status == ValidationStatus.APPROVED
        assert updated.daily_caloric_deficit == 200
        assert updated.updated_at > old
        assert updated.created_at == created.created_at

    async def test_update_does_not_reject_unsafe(self, goal_repository, adult_profiles):
        """Test update stores a rejected validation instead of failing."""
        from app.models.weight_goal import ValidationStatus, WeightGoalUpdate

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())

        updated = await service.update_goal(
            created.id,
            WeightGoalUpdate(current_weight=100, target_weight=70, duration_weeks=10),
        )

        assert updated.safety_validation.status == ValidationStatus.REJECTED
        assert updated.daily_caloric_deficit == 1000
        stored = await service.get_goal(created.id)
        assert stored.safety_validation.status == ValidationStatus.REJECTED

    async def test_update_uses_creation_bracket(self, goal_repository):
        """Test recomputation keeps the age bracket captured at creation."""
        from app.models.weight_goal import AgeBracket, WeightGoalUpdate
        from app.services.profile_lookup import FixedAgeProfileLookup

        service = _service(goal_repository, FixedAgeProfileLookup(22))
        created = await service.create_goal(_create())

        service.profiles = FixedAgeProfileLookup(70)
        updated = await service.update_goal(created.id, WeightGoalUpdate(duration_weeks=8))

        assert updated.metadata.age_bracket == AgeBracket.YOUNG
        # 5 kg in 8 weeks = 0.625 kg/week, fine for young
        assert updated.safety_validation.safety_score == 100

    async def test_update_rejects_target_above_current(self, goal_repository, adult_profiles):
        """Test merged values must keep target below current."""
        from app.errors import ValidationError
        from app.models.weight_goal import WeightGoalUpdate

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())

        with pytest.raises(ValidationError):
            await service.update_goal(created.id, WeightGoalUpdate(current_weight=74))

        assert (await service.get_goal(created.id)).current_weight == 80

    async def test_update_ignores_null_fields(self, goal_repository, adult_profiles):
        """Test explicit nulls do not overwrite stored values."""
        from app.models.weight_goal import WeightGoalUpdate

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create(personalMotivation="Run a marathon"))

        updated = await service.update_goal(
            created.id, WeightGoalUpdate.model_validate({"personalMotivation": None})
        )

        assert updated.personal_motivation == "Run a marathon"

    async def test_update_not_found(self, goal_repository, adult_profiles):
        """Test updating a missing goal raises NotFoundError."""
        from app.errors import NotFoundError
        from app.models.weight_goal import WeightGoalUpdate

        service = _service(goal_repository, adult_profiles)

        with pytest.raises(NotFoundError):
            await service.update_goal(42, WeightGoalUpdate(active=False))


@pytest.mark.asyncio
class TestWeightGoalServiceDelete:
    """Tests for deleting weight goals."""

    async def test_delete_goal(self, goal_repository, adult_profiles):
        """Test delete removes the goal and a second delete fails."""
        from app.errors import NotFoundError

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())

        result = await service.delete_goal(created.id)

        assert result == {"message": "Weight goal deleted successfully"}
        with pytest.raises(NotFoundError):
            await service.get_goal(created.id)
        with pytest.raises(NotFoundError):
            await service.delete_goal(created.id)

    async def test_deleted_id_not_reused(self, goal_repository, adult_profiles):
        """Test ids keep increasing after a delete."""
        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())
        await service.delete_goal(created.id)

        again = await service.create_goal(_create())

        assert again.id == created.id + 1


@pytest.mark.asyncio
class TestWeightGoalServiceRevise:
    """Tests for revising weight goals."""

    async def test_revise_preview_changes_nothing(self, goal_repository, adult_profiles):
        """Test an unapproved revision returns the stored goal unchanged."""
        from app.models.weight_goal import WeightGoalRevision

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())

        result = await service.revise_goal(
            created.id,
            WeightGoalRevision(
                revision_reason="slow_progress",
                approve_adjustments=False,
                manual_adjustments={"new_target_weight": 77, "new_duration_weeks": 30},
            ),
        )

        assert result == created
        assert await service.get_goal(created.id) == created

    async def test_revise_approved_applies_adjustments(self, goal_repository, adult_profiles):
        """Test an approved revision updates target and duration."""
        from app.models.weight_goal import Frequency, WeightGoalRevision

        service = _service(goal_repository, adult_profiles)
        created = await service.create_goal(_create())

        result = await service.revise_goal(
            created.id,
            WeightGoalRevision(
                revision_reason="circumstance_change",
                approve_adjustments=True,
                manual_adjustments={"new_target_weight": 76},
            ),
        )

        assert result.target_weight == 76
        assert result.duration_weeks == 20
        assert result.total_weight_to_lose == 4
        # Review schedule is only generated at creation
        assert result.review_frequency == Frequency.BIWEEKLY
        assert result.action_plan == created.action_plan

    async def test_revise_not_found(self, goal_repository, adult_profiles):
        """Test revising a missing goal raises NotFoundError."""
        from app.errors import NotFoundError
        from app.models.weight_goal import WeightGoalRevision

        service = _service(goal_repository, adult_profiles)

        with pytest.raises(NotFoundError):
            await service.revise_goal(
                7, WeightGoalRevision(revision_reason="new_goal", approve_adjustments=True)
            )


class TestProposeAdjustments:
    """Tests for revision proposals."""

    def test_defaults_to_current_values(self):
        """Test missing overrides keep the goal's target and duration."""
        from unittest.mock import MagicMock
        from app.models.weight_goal import WeightGoalRevision
        from app.services.weight_goal_service import propose_adjustments

        goal = MagicMock(target_weight=75.0, duration_weeks=20)
        proposal = propose_adjustments(
            goal,
            WeightGoalRevision(revision_reason="health_issue", approve_adjustments=False),
        )

        assert proposal.new_target_weight == 75.0
        assert proposal.new_duration_weeks == 20
        assert proposal.rationale == "Revision due to: health_issue"
