import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from geo_backend.core import config
from geo_backend.core.errors import register_exception_handlers
from geo_backend.database import engine, init_database
from geo_backend.models import location, user  # noqa: F401
from geo_backend.routes import auth_routes, location_routes, user_routes


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)


configure_logging()

app = FastAPI(title='Map Annotation API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=['*'],
    allow_headers=['Origin', 'Content-Length', 'Content-Type', 'Authorization', config.IDENTITY_HEADER],
)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_database(engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')
    else:
        logger.info('Database ready')


@app.get('/')
def root():
    return {'status': 'Map Annotation API Running'}


app.include_router(auth_routes.router)
app.include_router(location_routes.router, prefix='/locations')
app.include_router(user_routes.router, prefix='/users')
