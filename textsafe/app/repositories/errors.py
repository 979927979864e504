class StoreError(Exception):
    """A credential, session or text store operation failed (e.g. connectivity).

    Raised by adapters in place of driver exceptions so callers never
    inspect database error codes.
    """
