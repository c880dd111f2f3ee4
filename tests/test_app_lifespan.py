"""
School Survey — Application Lifespan Tests
============================================

What:  The lifespan builds the engine on app.state, leaves injected engines
       alone, and refuses to start in production without a database.
"""

import pytest

from school_survey.exceptions import DatabaseError
from school_survey.main import create_app, format_validation_errors


class TestLifespan:

    @pytest.mark.asyncio
    async def test_creates_and_disposes_engine(self, test_settings):
        app = create_app(test_settings)

        async with app.router.lifespan_context(app):
            assert app.state.engine is not None
            assert app.state.session_factory is not None

        assert app.state.engine is None
        assert app.state.session_factory is None

    @pytest.mark.asyncio
    async def test_keeps_injected_engine(self, app, db_engine):
        async with app.router.lifespan_context(app):
            assert app.state.engine is db_engine

        assert app.state.engine is db_engine

    @pytest.mark.asyncio
    async def test_unreachable_database_aborts_production_startup(self, tmp_path, test_settings):
        settings = test_settings.model_copy(
            update={
                "environment": "production",
                "database_url": f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'survey.db'}",
            }
        )
        app = create_app(settings)

        with pytest.raises(DatabaseError):
            async with app.router.lifespan_context(app):
                pass

    @pytest.mark.asyncio
    async def test_unreachable_database_tolerated_outside_production(self, tmp_path, test_settings):
        settings = test_settings.model_copy(
            update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'survey.db'}"}
        )
        app = create_app(settings)

        async with app.router.lifespan_context(app):
            assert app.state.engine is not None


class TestFormatValidationErrors:

    def test_value_errors_keep_their_text(self):
        errors = [{"type": "value_error", "loc": ("body", "schoolName"),
                   "msg": "Value error, Missing required field: schoolName"}]

        assert format_validation_errors(errors) == "Missing required field: schoolName"

    def test_missing_fields_named_by_alias(self):
        errors = [{"type": "missing", "loc": ("body", "frequencyRatings5"), "msg": "Field required"}]

        assert format_validation_errors(errors) == "Missing required field: frequencyRatings5"

    def test_type_errors_prefixed_with_location(self):
        errors = [
            {"type": "list_type", "loc": ("body", "studentGrades"), "msg": "Input should be a valid list"},
            {"type": "missing", "loc": ("body", "frequencyRatings7"), "msg": "Field required"},
        ]

        assert format_validation_errors(errors) == (
            "studentGrades: Input should be a valid list; "
            "Missing required field: frequencyRatings7"
        )
