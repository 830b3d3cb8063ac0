class StorageError(Exception):
    """Storage could not complete a statement (connection failure, timeout, constraint)."""
