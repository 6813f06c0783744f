"""Article Repository - Workflow state storage with compare-and-swap writes"""
import threading
from datetime import datetime
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..domain.enums import ArticleStatus
from ..domain.errors import (
    AlreadyExistsError, ArticleNotFoundError, ConcurrentModificationError
)
from ..domain.models import ArticleWorkflowState
from ..utils.time import ensure_utc
from ..utils.logger import get_logger

logger = get_logger(__name__)

DATETIME_FIELDS = ("scheduled_at", "published_at", "created_at", "updated_at")


def _conflict(article_id: str, expected_status: ArticleStatus, expected_version: int) -> ConcurrentModificationError:
    return ConcurrentModificationError(
        f"Article {article_id} was modified. Please refresh and try again.",
        details={
            "article_id": article_id,
            "expected_status": expected_status.value,
            "expected_version": expected_version,
        }
    )


class ArticleRepository(ABC):
    """
    Storage boundary for article workflow state

    Every write after creation goes through `compare_and_set`, which must
    reject the write when the stored status or version no longer match.
    """

    @abstractmethod
    def create(self, state: ArticleWorkflowState) -> ArticleWorkflowState:
        """Insert a new record; raises AlreadyExistsError on duplicate id"""

    @abstractmethod
    def get(self, article_id: str) -> Optional[ArticleWorkflowState]:
        """Fetch a record or None"""

    @abstractmethod
    def compare_and_set(
        self,
        article_id: str,
        expected_status: ArticleStatus,
        expected_version: int,
        new_state: ArticleWorkflowState
    ) -> ArticleWorkflowState:
        """Write `new_state` if the stored status and version still match"""

    @abstractmethod
    def list_articles(
        self,
        statuses: Optional[Iterable[ArticleStatus]] = None,
        author_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[ArticleWorkflowState]:
        """List records, most recently updated first"""

    @abstractmethod
    def list_due_scheduled(self, now: datetime, limit: int = 200) -> List[ArticleWorkflowState]:
        """SCHEDULED records with scheduled_at <= now, earliest first"""

    @abstractmethod
    def count_by_status(self) -> Dict[ArticleStatus, int]:
        """Number of records per status (statuses with no records omitted)"""

    def get_or_raise(self, article_id: str) -> ArticleWorkflowState:
        """Get article by ID or raise error"""
        state = self.get(article_id)
        if state is None:
            raise ArticleNotFoundError(
                f"Article {article_id} not found",
                details={"article_id": article_id}
            )
        return state


class InMemoryArticleRepository(ArticleRepository):
    """Process-local store, used for development and tests"""

    def __init__(self):
        self._articles: Dict[str, ArticleWorkflowState] = {}
        self._lock = threading.Lock()

    def create(self, state: ArticleWorkflowState) -> ArticleWorkflowState:
        with self._lock:
            if state.article_id in self._articles:
                raise AlreadyExistsError(
                    f"Article {state.article_id} already exists",
                    details={"article_id": state.article_id}
                )
            self._articles[state.article_id] = state.model_copy(deep=True)
        logger.info(f"Created article: {state.article_id}", extra={"article_id": state.article_id})
        return state

    def get(self, article_id: str) -> Optional[ArticleWorkflowState]:
        with self._lock:
            state = self._articles.get(article_id)
            return state.model_copy(deep=True) if state else None

    def compare_and_set(
        self,
        article_id: str,
        expected_status: ArticleStatus,
        expected_version: int,
        new_state: ArticleWorkflowState
    ) -> ArticleWorkflowState:
        with self._lock:
            stored = self._articles.get(article_id)
            if stored is None:
                raise ArticleNotFoundError(
                    f"Article {article_id} not found",
                    details={"article_id": article_id}
                )
            if stored.status != expected_status or stored.version != expected_version:
                raise _conflict(article_id, expected_status, expected_version)
            written = new_state.model_copy(update={"version": expected_version + 1}, deep=True)
            self._articles[article_id] = written
            return written.model_copy(deep=True)

    def list_articles(
        self,
        statuses: Optional[Iterable[ArticleStatus]] = None,
        author_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[ArticleWorkflowState]:
        wanted = set(statuses) if statuses is not None else None
        with self._lock:
            matches = [
                s.model_copy(deep=True) for s in self._articles.values()
                if (wanted is None or s.status in wanted)
                and (author_id is None or s.author_id == author_id)
            ]
        matches.sort(key=lambda s: s.updated_at, reverse=True)
        return matches[skip:skip + limit]

    def list_due_scheduled(self, now: datetime, limit: int = 200) -> List[ArticleWorkflowState]:
        now = ensure_utc(now)
        with self._lock:
            due = [
                s.model_copy(deep=True) for s in self._articles.values()
                if s.status == ArticleStatus.SCHEDULED
                and s.scheduled_at is not None
                and ensure_utc(s.scheduled_at) <= now
            ]
        due.sort(key=lambda s: (ensure_utc(s.scheduled_at), s.article_id))
        return due[:limit]

    def count_by_status(self) -> Dict[ArticleStatus, int]:
        counts: Dict[ArticleStatus, int] = {}
        with self._lock:
            for state in self._articles.values():
                counts[state.status] = counts.get(state.status, 0) + 1
        return counts


class MongoArticleRepository(ArticleRepository):
    """MongoDB store; the compare-and-swap is a filtered find_one_and_update"""

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            from .mongo_client import get_collection, ARTICLES_COLLECTION
            collection = get_collection(ARTICLES_COLLECTION)
        self._articles: Collection = collection

    @staticmethod
    def _to_doc(state: ArticleWorkflowState) -> Dict[str, Any]:
        # Don't use mode="json" - datetimes must stay native for range queries
        doc = state.model_dump()
        doc["status"] = state.status.value
        doc["held_from"] = state.held_from.value if state.held_from else None
        return doc

    @staticmethod
    def _from_doc(doc: Dict[str, Any]) -> ArticleWorkflowState:
        doc.pop("_id", None)
        for field in DATETIME_FIELDS:
            if doc.get(field) is not None:
                doc[field] = ensure_utc(doc[field])
        return ArticleWorkflowState.model_validate(doc)

    def create(self, state: ArticleWorkflowState) -> ArticleWorkflowState:
        doc = self._to_doc(state)
        doc["_id"] = state.article_id
        try:
            self._articles.insert_one(doc)
        except DuplicateKeyError:
            raise AlreadyExistsError(
                f"Article {state.article_id} already exists",
                details={"article_id": state.article_id}
            )
        logger.info(f"Created article: {state.article_id}", extra={"article_id": state.article_id})
        return state

    def get(self, article_id: str) -> Optional[ArticleWorkflowState]:
        doc = self._articles.find_one({"article_id": article_id})
        return self._from_doc(doc) if doc else None

    def compare_and_set(
        self,
        article_id: str,
        expected_status: ArticleStatus,
        expected_version: int,
        new_state: ArticleWorkflowState
    ) -> ArticleWorkflowState:
        updates = self._to_doc(new_state)
        updates.pop("article_id", None)
        updates["version"] = expected_version + 1

        result = self._articles.find_one_and_update(
            {
                "article_id": article_id,
                "status": expected_status.value,
                "version": expected_version,
            },
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )

        if result is None:
            if self._articles.find_one({"article_id": article_id}, {"_id": 1}) is None:
                raise ArticleNotFoundError(
                    f"Article {article_id} not found",
                    details={"article_id": article_id}
                )
            raise _conflict(article_id, expected_status, expected_version)

        return self._from_doc(result)

    def list_articles(
        self,
        statuses: Optional[Iterable[ArticleStatus]] = None,
        author_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[ArticleWorkflowState]:
        query: Dict[str, Any] = {}
        if statuses is not None:
            query["status"] = {"$in": [s.value for s in statuses]}
        if author_id is not None:
            query["author_id"] = author_id

        cursor = self._articles.find(query).sort(
            [("updated_at", DESCENDING), ("article_id", ASCENDING)]
        ).skip(skip).limit(limit)
        return [self._from_doc(doc) for doc in cursor]

    def list_due_scheduled(self, now: datetime, limit: int = 200) -> List[ArticleWorkflowState]:
        # Served by the (status, scheduled_at) index; BSON dates are UTC
        cutoff = ensure_utc(now).replace(tzinfo=None)
        cursor = self._articles.find({
            "status": ArticleStatus.SCHEDULED.value,
            "scheduled_at": {"$lte": cutoff},
        }).sort(
            [("scheduled_at", ASCENDING), ("article_id", ASCENDING)]
        ).limit(limit)
        return [self._from_doc(doc) for doc in cursor]

    def count_by_status(self) -> Dict[ArticleStatus, int]:
        pipeline = [{"$group": {"_id": "$status", "count": {"$sum": 1}}}]
        return {
            ArticleStatus(row["_id"]): row["count"]
            for row in self._articles.aggregate(pipeline)
        }
