"""Evaluation service tests for store failures.

The evaluation, the history read and the warning letter share one
transaction: a failure at any step leaves no rows behind.
"""

from uuid import UUID

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from sims_api.database import Database
from sims_api.exceptions import DuplicateEvaluationError, InsertFailedError, QueryFailedError
from sims_api.models.domain.employee import CallerContext, EmployeeRole
from sims_api.models.domain.warning_letter import WarningSeverity
from sims_api.models.dto.evaluation import EvaluationCreateRequest
from sims_api.models.orm import WarningLetterORM, WeeklyEvaluationORM
from sims_api.repositories.evaluation_repository import EvaluationRepository
from sims_api.repositories.warning_letter_repository import WarningLetterRepository
from sims_api.services.evaluation_service import EvaluationService
from tests.conftest import FakeClock


def _store_down(*args, **kwargs):
    raise OperationalError(
        "SELECT 1", {}, Exception("could not reach postgresql://sims:secret@db:5432/sims")
    )


async def _count(database: Database, model) -> int:
    async with database.session_maker() as session:
        return await session.scalar(select(func.count()).select_from(model))


@pytest.fixture
def hr_caller(employees: dict[str, UUID]) -> CallerContext:
    return CallerContext(id=employees["hr"], role=EmployeeRole.HR)


async def _submit(database: Database, clock: FakeClock, caller: CallerContext, request):
    async with database.session_maker() as session:
        try:
            return await EvaluationService(session, clock=clock).submit(caller, request)
        except Exception:
            await session.rollback()
            raise


class TestEvaluationService:
    async def test_returns_severity_of_created_warning(
        self, database: Database, clock: FakeClock, employees: dict[str, UUID], hr_caller
    ) -> None:
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=1.0)

        assert await _submit(database, clock, hr_caller, request) is None
        clock.advance(weeks=1)
        assert await _submit(database, clock, hr_caller, request) == WarningSeverity.HIGH

    async def test_history_query_failure_rolls_back(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(EvaluationRepository, "get_recent_scores", _store_down)
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=2.0)

        with pytest.raises(QueryFailedError) as exc_info:
            await _submit(database, clock, hr_caller, request)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Query failed"
        assert await _count(database, WeeklyEvaluationORM) == 0

    async def test_warning_insert_failure_rolls_back(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=1.0)
        await _submit(database, clock, hr_caller, request)
        clock.advance(weeks=1)

        monkeypatch.setattr(WarningLetterRepository, "create", _store_down)

        with pytest.raises(InsertFailedError) as exc_info:
            await _submit(database, clock, hr_caller, request)

        assert exc_info.value.message == "Insert failed"
        assert await _count(database, WeeklyEvaluationORM) == 1
        assert await _count(database, WarningLetterORM) == 0

    async def test_evaluation_insert_failure(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(EvaluationRepository, "create", _store_down)
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=3.0)

        with pytest.raises(InsertFailedError):
            await _submit(database, clock, hr_caller, request)

    async def test_store_detail_sanitized_unless_debug(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(EvaluationRepository, "create", _store_down)
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=3.0)

        async with database.session_maker() as session:
            with pytest.raises(InsertFailedError) as quiet:
                await EvaluationService(session, clock=clock).submit(hr_caller, request)
            with pytest.raises(InsertFailedError) as verbose:
                await EvaluationService(session, clock=clock, debug=True).submit(hr_caller, request)

        assert quiet.value.details == {"detail": "could not reach [URL]"}
        assert "postgresql://sims:secret@db:5432/sims" in verbose.value.details["detail"]


class DriverError(Exception):
    """Driver exception carrying a PostgreSQL SQLSTATE."""

    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity_error(orig: Exception):
    def _raise(*args, **kwargs):
        raise IntegrityError("INSERT INTO employee_weekly_evaluations", {}, orig)

    return _raise


class TestDuplicateDetection:
    async def test_unique_violation_sqlstate_is_duplicate(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        orig = DriverError('duplicate key value violates unique constraint "uniq_eval_employee_week"', "23505")
        monkeypatch.setattr(EvaluationRepository, "create", _integrity_error(orig))
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=3.0)

        with pytest.raises(DuplicateEvaluationError) as exc_info:
            await _submit(database, clock, hr_caller, request)

        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {"week_start": "2026-10-12"}

    async def test_other_integrity_errors_are_insert_failures(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # Foreign key violation whose text happens to mention "duplicate"
        orig = DriverError("insert violates foreign key on duplicate employee row", "23503")
        monkeypatch.setattr(EvaluationRepository, "create", _integrity_error(orig))
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=3.0)

        with pytest.raises(InsertFailedError) as exc_info:
            await _submit(database, clock, hr_caller, request)

        assert not isinstance(exc_info.value, DuplicateEvaluationError)
        assert exc_info.value.status_code == 500

    async def test_unclassified_error_text_is_not_duplicate(
        self,
        database: Database,
        clock: FakeClock,
        employees: dict[str, UUID],
        hr_caller,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        orig = Exception("UNIQUE-looking text from an unknown driver")
        monkeypatch.setattr(EvaluationRepository, "create", _integrity_error(orig))
        request = EvaluationCreateRequest(employee_id=employees["report"], overall_score=3.0)

        with pytest.raises(InsertFailedError) as exc_info:
            await _submit(database, clock, hr_caller, request)

        assert not isinstance(exc_info.value, DuplicateEvaluationError)
