"""FastAPI web application for Chirpy."""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from chirpy import __version__
from chirpy.api.metrics import HitCounter, HitCountingStaticFiles, render_metrics_page
from chirpy.api.request_models import CreateChirpRequest, UserCredentialsRequest
from chirpy.api.responses import decode_json, json_request_body, read_body, respond_with_error, respond_with_json
from chirpy.auth.passwords import check_password_hash, hash_password, simulate_password_check
from chirpy.config import Settings, load_settings
from chirpy.database.chirp_repository import ChirpRepository
from chirpy.database.database import build_engine, build_session_factory, get_db
from chirpy.database.user_repository import UserRepository
from chirpy.errors import (
    AuthError,
    ConfigError,
    DecodeError,
    HashError,
    NotFoundError,
    PasswordMismatchError,
    StoreError,
    ValidationError,
)
from chirpy.models.chirp import Chirp
from chirpy.models.user import StoredUser, User
from chirpy.validation import validate_chirp_body

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"
INVALID_BODY = "Invalid request body"
INVALID_CREDENTIALS = "Incorrect email or password"

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hit_counter(request: Request) -> HitCounter:
    return request.app.state.hit_counter


def authenticate(users: UserRepository, email: str, password: str) -> StoredUser:
    """Look up `email` and check `password` against its hash.

    Raises:
        AuthError: Unknown email, wrong password, or an unusable stored hash
    """
    user = users.get_by_email(email)
    if user is None:
        # Same bcrypt cost as a real check, so response time does not reveal unknown emails.
        simulate_password_check()
        raise AuthError(f"no user with email {email}")
    try:
        check_password_hash(password, user.hashed_password)
    except (PasswordMismatchError, HashError) as e:
        raise AuthError(f"password check failed for {email}: {e}") from e
    return user


def get_chirp_or_raise(chirps: ChirpRepository, chirp_id: UUID) -> Chirp:
    chirp = chirps.get(chirp_id)
    if chirp is None:
        raise NotFoundError(f"chirp {chirp_id} not found")
    return chirp


def require_platform(settings: Settings) -> str:
    if not settings.platform:
        raise ConfigError("PLATFORM environment variable is not set")
    return settings.platform


@router.get("/api/healthz", response_class=PlainTextResponse)
def health_status() -> PlainTextResponse:
    """Readiness check."""
    return PlainTextResponse("OK")


@router.get("/admin/metrics", response_class=HTMLResponse)
def show_metrics(hit_counter: HitCounter = Depends(get_hit_counter)) -> HTMLResponse:
    """Admin page with the static file server's visit count."""
    return HTMLResponse(render_metrics_page(hit_counter.value))


@router.post("/admin/reset")
def reset_users(
    settings: Settings = Depends(get_settings),
    hit_counter: HitCounter = Depends(get_hit_counter),
    db: Session = Depends(get_db),
) -> Response:
    """Delete every user (and, through the cascade, every chirp). Dev platform only."""
    try:
        platform = require_platform(settings)
    except ConfigError as e:
        logger.error(str(e))
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    if not settings.is_dev:
        logger.warning(f"Refusing reset on platform {platform!r}")
        return PlainTextResponse("Forbidden", status_code=status.HTTP_403_FORBIDDEN)

    try:
        UserRepository(db).delete_all()
    except StoreError as e:
        logger.error(f"Error resetting users: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)
    hit_counter.reset()
    logger.info("Users reset successfully")
    return Response(status_code=status.HTTP_200_OK)


@router.post("/api/users", openapi_extra=json_request_body(UserCredentialsRequest))
def create_user(raw: bytes = Depends(read_body), db: Session = Depends(get_db)) -> Response:
    """Register a user. The response never includes the password hash."""
    try:
        req = decode_json(raw, UserCredentialsRequest)
    except DecodeError as e:
        logger.info(f"Error decoding JSON: {e}")
        return respond_with_error(status.HTTP_400_BAD_REQUEST, INVALID_BODY)

    try:
        hashed = hash_password(req.password)
    except HashError as e:
        logger.error(f"Error hashing password: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    try:
        user = UserRepository(db).create(req.email, hashed)
    except StoreError as e:
        logger.error(f"Error creating user: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    return respond_with_json(status.HTTP_201_CREATED, user.to_public(), User)


@router.post("/api/login", openapi_extra=json_request_body(UserCredentialsRequest))
def login_user(raw: bytes = Depends(read_body), db: Session = Depends(get_db)) -> Response:
    """Check credentials and return the user.

    Unknown email and wrong password produce the same 401.
    """
    try:
        req = decode_json(raw, UserCredentialsRequest)
    except DecodeError as e:
        logger.info(f"Error decoding JSON: {e}")
        return respond_with_error(status.HTTP_400_BAD_REQUEST, INVALID_BODY)

    try:
        user = authenticate(UserRepository(db), req.email, req.password)
    except AuthError as e:
        logger.info(f"Login failed: {e}")
        return respond_with_error(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS)
    except StoreError as e:
        # Collapsed into 401 as well; the client learns nothing about the account.
        logger.error(f"Error getting user by email: {e}")
        return respond_with_error(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS)

    return respond_with_json(status.HTTP_200_OK, user.to_public(), User)


@router.post("/api/chirps", openapi_extra=json_request_body(CreateChirpRequest))
def create_chirp(raw: bytes = Depends(read_body), db: Session = Depends(get_db)) -> Response:
    """Post a chirp of at most 140 characters."""
    try:
        req = decode_json(raw, CreateChirpRequest)
    except DecodeError as e:
        # Decode failures on this route are reported as 500, unlike /api/users and /api/login.
        logger.error(f"Error decoding JSON: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    try:
        body = validate_chirp_body(req.body)
    except ValidationError as e:
        logger.info(f"Rejected chirp from user {req.user_id}: {e}")
        return respond_with_error(status.HTTP_400_BAD_REQUEST, str(e))

    try:
        chirp = ChirpRepository(db).create(body, req.user_id)
    except StoreError as e:
        logger.error(f"Error creating chirp: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    return respond_with_json(status.HTTP_201_CREATED, chirp, Chirp)


@router.get("/api/chirps")
def get_chirps(db: Session = Depends(get_db)) -> Response:
    """All chirps, oldest first."""
    try:
        chirps = ChirpRepository(db).list_all()
    except StoreError as e:
        logger.error(f"Error getting chirps: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)
    return respond_with_json(status.HTTP_200_OK, chirps, List[Chirp])


@router.get("/api/chirps/{chirp_id}")
def get_chirp(chirp_id: str, db: Session = Depends(get_db)) -> Response:
    """Single chirp by ID."""
    try:
        parsed_id = UUID(chirp_id)
    except ValueError as e:
        logger.info(f"Error parsing chirp ID {chirp_id!r}: {e}")
        return respond_with_error(status.HTTP_400_BAD_REQUEST, "Invalid chirp ID")

    try:
        chirp = get_chirp_or_raise(ChirpRepository(db), parsed_id)
    except NotFoundError as e:
        logger.info(str(e))
        return respond_with_error(status.HTTP_404_NOT_FOUND, "Chirp not found")
    except StoreError as e:
        logger.error(f"Error getting chirp: {e}")
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    return respond_with_json(status.HTTP_200_OK, chirp, Chirp)


def create_app(
    settings: Optional[Settings] = None,
    hit_counter: Optional[HitCounter] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """Build the Chirpy application.

    Args:
        settings: Configuration; loaded from the environment when omitted
        hit_counter: Counter for static file visits; a fresh one when omitted
        engine: Database engine; built from ``settings.database_url`` when omitted
    """
    settings = settings or load_settings()
    hit_counter = hit_counter or HitCounter()
    engine = engine or build_engine(settings)

    app = FastAPI(
        title="Chirpy API",
        description="Post and read short text chirps",
        version=__version__,
    )
    app.state.settings = settings
    app.state.hit_counter = hit_counter
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.include_router(router)
    app.mount(
        "/app",
        HitCountingStaticFiles(directory=settings.fileserver_root, html=True, hit_counter=hit_counter),
        name="app",
    )
    return app


app = create_app()
