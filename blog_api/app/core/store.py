"""
In‑memory record stores.

A store keeps the records of one entity type in insertion order and
guards writers with a re‑entrant lock.  Records are looked up by their
``id`` attribute; when several records share an id (possible with the
``length`` post id policy) the first one in store order wins.

Reads hand out copies of the record list so a caller never observes a
collection that is being rewritten by another request.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from pydantic import BaseModel

from ..schemas.post import Post
from ..schemas.user import Role, User

RecordT = TypeVar("RecordT", bound=BaseModel)

ID_POLICIES = ("length", "sequence")


class InMemoryStore(Generic[RecordT]):
    """Ordered collection of records keyed by ``id``."""

    def __init__(self, records: Iterable[RecordT] = ()) -> None:
        self._records: List[RecordT] = list(records)
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator["InMemoryStore[RecordT]"]:
        """Hold the writer lock for a whole gate chain plus its mutation."""
        with self._lock:
            yield self

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def all(self) -> List[RecordT]:
        with self._lock:
            return list(self._records)

    def filter(self, predicate: Callable[[RecordT], bool]) -> List[RecordT]:
        with self._lock:
            return [record for record in self._records if predicate(record)]

    def _index_of(self, record_id: object) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return -1

    def get(self, record_id: object) -> Optional[RecordT]:
        with self._lock:
            index = self._index_of(record_id)
            return self._records[index] if index != -1 else None

    def exists(self, record_id: object) -> bool:
        return self.get(record_id) is not None

    def add(self, record: RecordT) -> RecordT:
        with self._lock:
            self._records.append(record)
            return record

    def replace(self, record: RecordT) -> RecordT:
        """Swap the first record with ``record.id`` for ``record``."""
        with self._lock:
            index = self._index_of(record.id)
            if index == -1:
                raise KeyError(record.id)
            self._records[index] = record
            return record

    def remove(self, record_id: object) -> RecordT:
        """Remove and return the first record with ``record_id``."""
        with self._lock:
            index = self._index_of(record_id)
            if index == -1:
                raise KeyError(record_id)
            return self._records.pop(index)

    def retain(self, predicate: Callable[[RecordT], bool]) -> List[RecordT]:
        """Keep only records matching ``predicate``; return the dropped ones."""
        with self._lock:
            kept = [record for record in self._records if predicate(record)]
            dropped = [record for record in self._records if not predicate(record)]
            if dropped:
                self._records = kept
            return dropped


class PostStore(InMemoryStore[Post]):
    """Post collection that also hands out ids for new posts."""

    def __init__(self, records: Iterable[Post] = (), id_policy: str = "length") -> None:
        if id_policy not in ID_POLICIES:
            raise ValueError(f"Unknown post id policy {id_policy!r}, expected one of {ID_POLICIES}")
        super().__init__(records)
        self.id_policy = id_policy
        self._last_id = max((record.id for record in self._records), default=0)

    def next_id(self) -> int:
        """Return the id the next created post receives.

        ``length`` reproduces the count based assignment, so a deletion
        lets a later post reuse an id that is still taken.
        """
        with self._lock:
            if self.id_policy == "sequence":
                return self._last_id + 1
            return len(self._records) + 1

    def add(self, record: Post) -> Post:
        with self._lock:
            super().add(record)
            self._last_id = max(self._last_id, record.id)
            return record


def seed_users() -> List[User]:
    """Users present when the service starts."""
    return [
        User(id=1, name="Thiago", email="flamengodecoracao@gmail.com", password="flamengo123", age=30, role=Role.admin),
        User(id=2, name="Gabriel Costa", email="mgm@gmail.com", password="paulaodasolda123", age=22, role=Role.user),
        User(id=3, name="Maria Vitoria", email="mavi@gmail.com", password="euaindaamominhaex", age=19, role=Role.user),
    ]
