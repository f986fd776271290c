from contextlib import contextmanager
from functools import wraps

from flask import current_app
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

from campusvote.services.errors import TransientStoreFailure


def is_transient(exc):
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def _store_failure(action, exc):
    current_app.logger.warning("Store failure while %s: %s", action, exc)
    return TransientStoreFailure(f"Store failure while {action}.")


@contextmanager
def store_errors(session, action):
    """Roll back on any failure and surface driver outages as TransientStoreFailure.

    Domain errors raised inside the block propagate unchanged after the rollback.
    """
    try:
        yield
    except Exception as exc:
        session.rollback()
        if is_transient(exc):
            raise _store_failure(action, exc) from exc
        raise


def store_read(action):
    """Decorate a service method that reads through ``self.session``.

    Driver outages become TransientStoreFailure. Domain errors pass through
    without touching the caller's transaction.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except TransientStoreFailure:
                raise
            except Exception as exc:
                if not is_transient(exc):
                    raise
                self.session.rollback()
                raise _store_failure(action, exc) from exc

        return wrapper

    return decorator


def commit(session, action):
    with store_errors(session, action):
        session.commit()
