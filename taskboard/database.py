import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine, select

from .config import DATABASE_URL, DB_FILE, STORAGE_BACKEND
from .models import Record

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "taskLists", "tasks")

Document = Dict[str, List[Dict[str, Any]]]


class StorageError(Exception):
    """The backing store could not be read or written."""


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise KeyError(f"Unknown collection: {collection}")


class Storage:
    """Get/put access to the three collections of the task store.

    Handlers mutate through :meth:`transaction`, which loads the whole
    document, lets the caller apply one change and writes the whole document
    back. The lock only serialises writers inside this process. It is
    reentrant, so ``put`` may be called inside a transaction; the
    transaction still writes its own document last.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def get(self, collection: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def put(self, collection: str, records: List[Dict[str, Any]]) -> None:
        raise NotImplementedError

    def load(self) -> Document:
        return {name: self.get(name) for name in COLLECTIONS}

    def save(self, document: Document) -> None:
        for name in COLLECTIONS:
            self.put(name, document.get(name, []))

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Read-modify-write the whole document.

        Nothing is written if the block raises.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)

    def close(self) -> None:
        return


class JsonFileStorage(Storage):
    """Whole-file JSON document store."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JsonFileStorage({str(self.path)!r})"

    def load(self) -> Document:
        if not self.path.exists():
            logger.debug("Store %s does not exist yet, starting empty", self.path)
            return empty_document()
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.exception("Could not read %s", self.path)
            raise StorageError(f"Could not read {self.path}") from exc

        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")

        document = empty_document()
        for name in COLLECTIONS:
            records = data.get(name, [])
            if not isinstance(records, list):
                raise StorageError(f"{self.path}: '{name}' is not a list")
            document[name] = records
        return document

    def save(self, document: Document) -> None:
        payload = {name: document.get(name, []) for name in COLLECTIONS}
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False, allow_nan=False)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Could not write %s", self.path)
            raise StorageError(f"Could not write {self.path}") from exc

    def get(self, collection: str) -> List[Dict[str, Any]]:
        _check_collection(collection)
        return self.load()[collection]

    def put(self, collection: str, records: List[Dict[str, Any]]) -> None:
        _check_collection(collection)
        with self._lock:
            document = self.load()
            document[collection] = list(records)
            self.save(document)


def _strict_json(value: Any) -> str:
    # NaN and Infinity are not JSON
    return json.dumps(value, allow_nan=False)


def _create_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            json_serializer=_strict_json,
            connect_args={"check_same_thread": False},
        )

    return create_engine(url, echo=False, json_serializer=_strict_json, pool_pre_ping=True)


class SqlStorage(Storage):
    """Collections kept as JSON rows of an SQL database through SQLModel."""

    def __init__(self, url: str) -> None:
        super().__init__()
        self.url = url
        self.engine = _create_engine(url)
        SQLModel.metadata.create_all(bind=self.engine)

    def __repr__(self) -> str:
        return f"SqlStorage({self.engine.url.render_as_string(hide_password=True)!r})"

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self.engine) as session:
                yield session
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            logger.exception("Database error on %r", self)
            raise StorageError("Database error") from exc

    def get(self, collection: str) -> List[Dict[str, Any]]:
        _check_collection(collection)
        with self._session() as session:
            rows = session.exec(
                select(Record).where(Record.collection == collection).order_by(Record.position)
            ).all()
            return [dict(row.body) for row in rows]

    def _replace(self, session: Session, collection: str, records: List[Dict[str, Any]]) -> None:
        for row in session.exec(select(Record).where(Record.collection == collection)).all():
            session.delete(row)
        session.flush()
        for position, body in enumerate(records):
            record_id = body.get("id")
            session.add(Record(
                collection=collection,
                position=position,
                id=None if record_id is None else str(record_id),
                body=body,
            ))

    def put(self, collection: str, records: List[Dict[str, Any]]) -> None:
        _check_collection(collection)
        with self._session() as session:
            self._replace(session, collection, records)
            session.commit()

    def save(self, document: Document) -> None:
        with self._session() as session:
            for name in COLLECTIONS:
                self._replace(session, name, document.get(name, []))
            session.commit()

    def close(self) -> None:
        self.engine.dispose()


def create_storage(backend: Optional[str] = None) -> Storage:
    """Build the storage selected by ``STORAGE_BACKEND``."""
    backend = (backend or STORAGE_BACKEND).lower()
    if backend == "json":
        storage: Storage = JsonFileStorage(DB_FILE)
    elif backend == "sql":
        storage = SqlStorage(DATABASE_URL)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")
    logger.info("Using %r", storage)
    return storage


_storage: Optional[Storage] = None


def get_storage() -> Storage:
    """Dependency returning the process-wide storage."""
    global _storage
    if _storage is None:
        _storage = create_storage()
    return _storage
