"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

import httpx
from fastapi import Depends, FastAPI, Header, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError as StoreAPIError

from calorie_tracker.api.schemas import (
    ConsumedMealPayload,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import parse_period
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.errors import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from calorie_tracker.services.catalog import filter_meals

_logger = logging.getLogger(__name__)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserProfile:
    """Resolve the bearer token to the caller's profile."""
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer ") :].strip()
    return _container(request).user_service.authenticate(token)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    _register_error_handlers(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/register", status_code=status.HTTP_201_CREATED)
    async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
        """Create an account and its profile."""
        profile = _container(request).user_service.register(
            payload.email, payload.password, payload.display_name
        )
        return jsonable_encoder({"profile": profile})

    @app.post("/auth/login")
    async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
        """Exchange credentials for an access token."""
        session = _container(request).user_service.sign_in(
            payload.email, payload.password
        )
        return jsonable_encoder(session)

    @app.get("/profile")
    async def get_profile(
        request: Request, user: UserProfile = Depends(current_user)
    ) -> dict[str, object]:
        """Return the caller's profile with derived body metrics."""
        metrics = _container(request).user_service.get_body_metrics(user)
        return jsonable_encoder({"profile": user, "metrics": metrics})

    @app.put("/profile")
    async def update_profile(
        payload: ProfileUpdate,
        request: Request,
        user: UserProfile = Depends(current_user),
    ) -> dict[str, object]:
        """Update the caller's profile."""
        user_service = _container(request).user_service
        updated = user_service.update_profile(
            user.id, payload.model_dump(exclude_unset=True)
        )
        metrics = user_service.get_body_metrics(updated)
        return jsonable_encoder({"profile": updated, "metrics": metrics})

    @app.get("/catalog/categories")
    async def catalog_categories(request: Request) -> dict[str, object]:
        """Return catalog categories."""
        categories = await _container(request).catalog_service.categories()
        return jsonable_encoder({"categories": categories})

    @app.get("/catalog/browse")
    async def catalog_browse(request: Request, count: int = 20) -> dict[str, object]:
        """Return categories with a random sample of meals."""
        overview = await _container(request).catalog_service.browse(count)
        return jsonable_encoder(overview)

    @app.get("/catalog/meals")
    async def catalog_meals(
        request: Request, query: str | None = None, category: str | None = None
    ) -> dict[str, object]:
        """Search the catalog by name and narrow by category."""
        catalog_service = _container(request).catalog_service
        if query:
            meals = await catalog_service.search(query)
        elif category:
            meals = await catalog_service.by_category(category)
        else:
            meals = await catalog_service.random_meals()
        return jsonable_encoder(
            {"meals": filter_meals(meals, query=query, category=category)}
        )

    @app.get("/catalog/meals/{meal_id}")
    async def catalog_meal(meal_id: str, request: Request) -> dict[str, object]:
        """Return one catalog meal with its ingredients."""
        meal = await _container(request).catalog_service.get_meal(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal {meal_id} not found")
        return jsonable_encoder(meal)

    @app.get("/consumed-meals")
    async def list_consumed_meals(
        request: Request,
        user: UserProfile = Depends(current_user),
        date: date | None = None,
    ) -> dict[str, object]:
        """Return the caller's consumed meals, optionally for one day."""
        service = _container(request).consumed_meal_service
        if date is None:
            meals = service.list_all(user.id)
        else:
            meals = service.list_for_date(user.id, date)
        return jsonable_encoder({"meals": meals})

    @app.post("/consumed-meals", status_code=status.HTTP_201_CREATED)
    async def log_consumed_meal(
        payload: ConsumedMealPayload,
        request: Request,
        user: UserProfile = Depends(current_user),
    ) -> dict[str, object]:
        """Log a consumed meal."""
        meal = _container(request).consumed_meal_service.log_meal(
            user.id, payload.to_draft()
        )
        return jsonable_encoder(meal)

    @app.put("/consumed-meals/{consumed_meal_id}")
    async def replace_consumed_meal(
        consumed_meal_id: str,
        payload: ConsumedMealPayload,
        request: Request,
        user: UserProfile = Depends(current_user),
    ) -> dict[str, object]:
        """Replace a consumed meal."""
        meal = _container(request).consumed_meal_service.replace_meal(
            user.id, consumed_meal_id, payload.to_draft()
        )
        return jsonable_encoder(meal)

    @app.delete(
        "/consumed-meals/{consumed_meal_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def delete_consumed_meal(
        consumed_meal_id: str,
        request: Request,
        user: UserProfile = Depends(current_user),
    ) -> None:
        """Delete a consumed meal."""
        _container(request).consumed_meal_service.delete_meal(
            user.id, consumed_meal_id
        )

    @app.get("/today")
    async def today(
        request: Request, user: UserProfile = Depends(current_user)
    ) -> dict[str, object]:
        """Return today's meals by slot and progress toward the goal."""
        return jsonable_encoder(_container(request).stats_service.get_today(user))

    @app.get("/stats")
    async def stats(
        request: Request,
        user: UserProfile = Depends(current_user),
        period: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> dict[str, object]:
        """Return the statistics report for a period."""
        try:
            resolved_period = parse_period(period)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        report = _container(request).stats_service.get_period_report(
            user, resolved_period, start, end
        )
        return jsonable_encoder(report)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(AuthenticationError)
    async def unauthorized(_: Request, exc: AuthenticationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
        )

    async def upstream_failure(request: Request, exc: Exception) -> JSONResponse:
        _logger.exception(
            "Upstream request failed", extra={"path": request.url.path}, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Failed to load data"},
        )

    # Catalog and store failures.
    for exc_type in (httpx.HTTPError, StoreAPIError, RuntimeError):
        app.add_exception_handler(exc_type, upstream_failure)
