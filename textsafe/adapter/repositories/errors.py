import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from textsafe.app.repositories.errors import StoreError

logger = logging.getLogger(__name__)


def translate_store_errors(func):
    """Re-raise driver/ORM failures of an async store method as StoreError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception(f"Store operation {func.__qualname__} failed")
            raise StoreError(f"{func.__qualname__} failed") from exc

    return wrapper
