"""SQLite-backed registry of repository registrations.

SQLite is used as a plain ordered key-value engine. Three tables hold
``(key, value)`` pairs:

* ``repos``: zero-padded registration id -> JSON record
* ``repos_index``: business key -> zero-padded registration id
* ``sequences``: table name -> last issued id

Every public operation runs in a single transaction on its own connection.
Writers take ``BEGIN IMMEDIATE`` so SQLite admits one writer at a time, and the
database runs in WAL mode so readers keep a consistent snapshot meanwhile.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from issuebot.application.ports.registry_store import RegistryStorePort
from issuebot.domain.registration import Registration, Vendor
from issuebot.errors import InvalidArgumentError, RegistrationNotFoundError, StorageFailureError

logger = logging.getLogger("issuebot.store")

TABLE_REPOS = "repos"
TABLE_REPOS_INDEX = "repos_index"
TABLE_SEQUENCES = "sequences"

_ID_WIDTH = 20


class UnknownVendorRecordError(StorageFailureError):
    """Raised for a well-formed record whose vendor is not supported."""


class SqliteRegistryStore(RegistryStorePort):
    """Registry store persisted in a single SQLite file."""

    def __init__(self, path: Path | str, *, busy_timeout_seconds: float = 5.0) -> None:
        self._path = Path(path)
        self._busy_timeout = busy_timeout_seconds
        self.init()

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # lifecycle

    def init(self) -> None:
        """Create the tables when missing."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.execute("PRAGMA journal_mode=WAL")
        except sqlite3.Error as exc:
            raise StorageFailureError(f"init: {self._path}: {exc}") from exc
        finally:
            conn.close()
        with self._transaction(write=True) as conn:
            for table in (TABLE_REPOS, TABLE_REPOS_INDEX):
                conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {table} "
                    "(key TEXT PRIMARY KEY, value TEXT NOT NULL) WITHOUT ROWID"
                )
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {TABLE_SEQUENCES} "
                "(key TEXT PRIMARY KEY, value INTEGER NOT NULL) WITHOUT ROWID"
            )

    def close(self) -> None:
        """Connections are opened per operation; nothing to release."""

    # ------------------------------------------------------------------
    # public API

    def create_or_update(
        self,
        owner_user_id: str,
        vendor: Vendor | str,
        org_or_owner: str,
        repo_name: str,
        credential: str,
    ) -> tuple[Registration, bool]:
        candidate = Registration(
            owner_user_id=owner_user_id,
            vendor=Vendor.parse(vendor),
            org_or_owner=org_or_owner,
            repo_name=repo_name,
            credential=credential,
        )
        business_key = candidate.business_key
        with self._transaction(write=True) as conn:
            row = conn.execute(
                f"SELECT value FROM {TABLE_REPOS_INDEX} WHERE key = ?",
                (business_key,),
            ).fetchone()
            created = row is None
            if created:
                registration_id = self._next_sequence(conn, TABLE_REPOS)
                id_key = _id_key(registration_id)
                # index entry first; the record follows in the same transaction
                _put(conn, TABLE_REPOS_INDEX, business_key, id_key)
            else:
                id_key = row[0]
                registration_id = int(id_key)
            registration = candidate.with_id(registration_id)
            _put(conn, TABLE_REPOS, id_key, _encode(registration))
        logger.info(
            "registration saved",
            extra={"data": {"id": registration.id, "created": created}},
        )
        return registration, created

    def get(self, registration_id: int) -> Registration:
        _require_id(registration_id)
        with self._transaction(write=False) as conn:
            row = conn.execute(
                f"SELECT value FROM {TABLE_REPOS} WHERE key = ?",
                (_id_key(registration_id),),
            ).fetchone()
        if row is None:
            raise RegistrationNotFoundError(f"registration {registration_id} not found")
        return _decode(row[0])

    def list_by_owner(self, owner_user_id: str) -> list[Registration]:
        if not owner_user_id:
            raise InvalidArgumentError("owner_user_id must not be empty")
        with self._transaction(write=False) as conn:
            registrations = [
                registration
                for registration in self._scan(conn, skip_unknown_vendors=True)
                if registration.owner_user_id == owner_user_id
            ]
        registrations.sort(key=lambda registration: registration.display_name)
        return registrations

    def list_all(self) -> list[Registration]:
        with self._transaction(write=False) as conn:
            return list(self._scan(conn))

    def count_by_owner(self, owner_user_id: str) -> int:
        return len(self.list_by_owner(owner_user_id))

    def delete(self, registration_id: int) -> None:
        _require_id(registration_id)
        id_key = _id_key(registration_id)
        with self._transaction(write=True) as conn:
            conn.execute(f"DELETE FROM {TABLE_REPOS} WHERE key = ?", (id_key,))
            # the index is only addressable by business key, so scan for the id
            stale = [
                key
                for key, value in conn.execute(f"SELECT key, value FROM {TABLE_REPOS_INDEX}")
                if value == id_key
            ]
            for key in stale:
                conn.execute(f"DELETE FROM {TABLE_REPOS_INDEX} WHERE key = ?", (key,))
        logger.info(
            "registration deleted",
            extra={"data": {"id": registration_id, "index_entries_removed": len(stale)}},
        )

    # ------------------------------------------------------------------
    # maintenance

    def list_ids(self) -> list[int]:
        """Return the ids of all stored records in ascending order."""
        with self._transaction(write=False) as conn:
            return [int(key) for (key,) in conn.execute(f"SELECT key FROM {TABLE_REPOS} ORDER BY key")]

    def export(self) -> list[dict[str, Any]]:
        """Return all records as plain dicts ordered by id."""
        with self._transaction(write=False) as conn:
            return [registration.to_record() for registration in self._scan(conn)]

    def index_entries(self) -> dict[str, int]:
        """Return the secondary index as ``business key -> id``."""
        with self._transaction(write=False) as conn:
            rows = conn.execute(f"SELECT key, value FROM {TABLE_REPOS_INDEX} ORDER BY key").fetchall()
        return {key: int(value) for key, value in rows}

    def delete_all(self) -> None:
        """Remove all records and index entries; issued ids stay consumed."""
        with self._transaction(write=True) as conn:
            conn.execute(f"DELETE FROM {TABLE_REPOS}")
            conn.execute(f"DELETE FROM {TABLE_REPOS_INDEX}")
        logger.info("all registrations deleted")

    # ------------------------------------------------------------------
    # helpers

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self._path, timeout=self._busy_timeout, isolation_level=None)
        except sqlite3.Error as exc:
            raise StorageFailureError(f"open {self._path}: {exc}") from exc

    @contextmanager
    def _transaction(self, *, write: bool) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            raise StorageFailureError(f"registry store: {exc}") from exc
        finally:
            conn.close()

    def _next_sequence(self, conn: sqlite3.Connection, table: str) -> int:
        row = conn.execute(f"SELECT value FROM {TABLE_SEQUENCES} WHERE key = ?", (table,)).fetchone()
        value = (row[0] if row else 0) + 1
        conn.execute(
            f"INSERT OR REPLACE INTO {TABLE_SEQUENCES} (key, value) VALUES (?, ?)",
            (table, value),
        )
        return value

    def _scan(self, conn: sqlite3.Connection, *, skip_unknown_vendors: bool = False) -> Iterator[Registration]:
        for key, value in conn.execute(f"SELECT key, value FROM {TABLE_REPOS} ORDER BY key"):
            try:
                yield _decode(value)
            except UnknownVendorRecordError:
                if not skip_unknown_vendors:
                    raise
                logger.warning("skipping registration with unknown vendor", extra={"data": {"key": key}})


def _id_key(registration_id: int) -> str:
    return f"{registration_id:0{_ID_WIDTH}d}"


def _require_id(registration_id: int) -> None:
    if registration_id <= 0:
        raise InvalidArgumentError(f"invalid registration id: {registration_id}")


def _put(conn: sqlite3.Connection, table: str, key: str, value: str) -> None:
    conn.execute(f"INSERT OR REPLACE INTO {table} (key, value) VALUES (?, ?)", (key, value))


def _encode(registration: Registration) -> str:
    return json.dumps(registration.to_record(), sort_keys=True)


def _decode(value: str) -> Registration:
    try:
        record = json.loads(value)
    except ValueError as exc:
        raise StorageFailureError(f"corrupt registration record: {exc}") from exc
    if not isinstance(record, dict) or "vendor" not in record:
        raise StorageFailureError("corrupt registration record: not a registration object")
    try:
        Vendor.parse(str(record["vendor"]))
    except InvalidArgumentError as exc:
        raise UnknownVendorRecordError(f"registration {record.get('id')}: {exc}") from exc
    try:
        return Registration.from_record(record)
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageFailureError(f"corrupt registration record: {exc}") from exc


__all__ = ["SqliteRegistryStore", "UnknownVendorRecordError"]
