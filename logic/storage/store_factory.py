from .sql_store import SqlRoomStore


def get_store(backend, db):
    if backend is None:
        raise ValueError("The storage backend cannot be None. Check STORAGE_BACKEND.")

    kind = backend.strip().lower()

    if kind == "sql":
        return SqlRoomStore(db)

    raise ValueError(f"Unsupported storage backend: {kind}")
