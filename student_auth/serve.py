"""Run the auth service with uvicorn.

Usage:
    python -m student_auth.serve
"""
import uvicorn

from student_auth.core import config


def main() -> None:
    config.validate_runtime_config()
    uvicorn.run(
        'student_auth.main:app',
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
