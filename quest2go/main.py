import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from quest2go.auth.jwt_handler import SessionTokenCodec
from quest2go.auth.passwords import PasswordHasher
from quest2go.core.config import Settings, validate_runtime_config
from quest2go.core.errors import register_error_handlers
from quest2go.database import build_engine, build_session_factory, create_schema
from quest2go.routes import article_routes, auth_routes
from quest2go.store.articles import ArticleStore

logger = logging.getLogger(__name__)


def initialize_database(engine: Engine, session_factory: sessionmaker) -> None:
    try:
        create_schema(engine)
        db = session_factory()
        try:
            seeded = ArticleStore(db).seed_defaults()
        finally:
            db.close()
        if seeded:
            logger.info('Seeded %d sample articles', seeded)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API from explicit settings; a missing signing key fails here, before serving.

    Run with ``uvicorn quest2go.main:create_app --factory``.
    """
    settings = settings or Settings.from_env()
    validate_runtime_config(settings)

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)-8s %(name)s - %(message)s',
    )

    engine = build_engine(settings.database_url)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        initialize_database(engine, session_factory)
        yield
        engine.dispose()

    app = FastAPI(title='Quest2Go API', lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_codec = SessionTokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.session_ttl_seconds,
    )

    register_error_handlers(app)

    @app.get('/')
    def root():
        return {'status': 'Quest2Go API Running'}

    app.include_router(auth_routes.router, prefix='/api')
    app.include_router(article_routes.router, prefix='/api')

    return app
