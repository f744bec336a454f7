import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from student_auth.core import config
from student_auth.core.bootstrap import ensure_admin_seeded
from student_auth.core.errors import ServiceError, register_exception_handlers
from student_auth.core.logging import configure_logging
from student_auth.core.middleware import (
    request_id_middleware,
    request_logging_middleware,
    security_headers_middleware,
)
from student_auth.database import SessionLocal, ensure_schema
from student_auth.routes import auth_routes, student_routes

configure_logging(config.LOG_LEVEL)

app = FastAPI(title='Student Auth Service')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials='*' not in config.CORS_ALLOW_ORIGINS,
    allow_methods=['*'],
    allow_headers=['*'],
)
app.middleware('http')(security_headers_middleware)
app.middleware('http')(request_logging_middleware)
app.middleware('http')(request_id_middleware)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        ensure_schema()
        ensure_admin_seeded(SessionLocal)
    except (SQLAlchemyError, ServiceError):
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get(f'{config.API_PREFIX}/health')
def health():
    return {'status': 'OK', 'message': 'Auth service is running'}


app.include_router(auth_routes.router, prefix=config.API_PREFIX)
app.include_router(student_routes.router, prefix=config.API_PREFIX)
