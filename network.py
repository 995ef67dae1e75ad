import logging
from typing import List, Tuple

import numpy as np
from pydantic import BaseModel, Field

from errors import ErrorKind, NetworkError, malformed
from record_parser import parse_records
from user_record import UserRecord

logger = logging.getLogger(__name__)


class Relationships(BaseModel):
    follows: List[int] = Field(default_factory=list)
    followers: List[int] = Field(default_factory=list)
    mutuals: List[int] = Field(default_factory=list)


class SocialNetwork:
    """Follower graph over a dense set of user ids 1..N.

    Row and column k of the adjacency matrix belong to user k + 1, and
    adjacency[i, j] is True when user i + 1 follows user j + 1.
    """

    def __init__(self, records: List[UserRecord]) -> None:
        if not records:
            raise NetworkError(ErrorKind.EMPTY_NETWORK, "cannot build a social network from zero users")
        for record in records:
            if not record.is_valid():
                raise malformed(f"invalid user record (id={record.id}, name={record.name!r})")

        ids = [record.id for record in records]
        expected = list(range(1, len(records) + 1))
        if ids != expected:
            logger.debug("User ids are not in order 1..N, sorting records by id")
            records = sorted(records, key=UserRecord.sort_key)
            ids = [record.id for record in records]
            if ids != expected:
                raise malformed(f"user ids must be exactly 1..{len(records)} without gaps or duplicates")

        n = len(records)
        self.records: List[UserRecord] = list(records)
        self.adjacency = np.zeros((n, n), dtype=bool)
        self.names: List[str] = []

        for row, record in enumerate(self.records):
            for followed_id in record.follows:
                if not 1 <= followed_id <= n:
                    raise malformed(f"user {record.id} follows unknown id {followed_id} (valid ids are 1..{n})")
                self.adjacency[row, followed_id - 1] = True
            self.names.append(record.name)

        self.adjacency.setflags(write=False)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def ids(self) -> range:
        return range(1, len(self.records) + 1)

    def _index(self, user_id: int) -> int:
        if not 1 <= user_id <= len(self.records):
            raise IndexError(f"user id {user_id} outside 1..{len(self.records)}")
        return user_id - 1

    def get_user(self, user_id: int) -> UserRecord:
        return self.records[self._index(user_id)]

    def name_of(self, user_id: int) -> str:
        return self.names[self._index(user_id)]

    def is_following(self, follower_id: int, followed_id: int) -> bool:
        return bool(self.adjacency[self._index(follower_id), self._index(followed_id)])

    def follows(self, user_id: int) -> List[int]:
        return list(self.get_user(user_id).follows)

    def followers(self, user_id: int) -> List[int]:
        idx = self._index(user_id)
        column = self.adjacency[:, idx]
        return [int(row) + 1 for row in np.flatnonzero(column) if row != idx]

    def mutuals(self, user_id: int) -> List[int]:
        idx = self._index(user_id)
        both = self.adjacency[:, idx] & self.adjacency[idx, :]
        return [int(other) + 1 for other in np.flatnonzero(both) if other != idx]

    def relationships_for(self, user_id: int) -> Relationships:
        return Relationships(
            follows=self.follows(user_id),
            followers=self.followers(user_id),
            mutuals=self.mutuals(user_id),
        )

    def index_entries(self) -> List[Tuple[int, str]]:
        return list(zip(self.ids, self.names))


def read_network(path: str) -> SocialNetwork:
    """Read a user list file and build its network."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise NetworkError(ErrorKind.INPUT_OPEN, f"could not read {path}: {e}") from e

    records = parse_records(text)
    logger.info(f"Read {len(records)} users from {path}")
    return SocialNetwork(records)
