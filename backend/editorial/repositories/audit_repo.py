"""Audit Repository - Data access for audit events (append-only)"""
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from pymongo import ASCENDING
from pymongo.collection import Collection

from ..domain.models import AuditEvent
from ..domain.enums import AuditEventType
from ..utils.logger import get_logger
from ..utils.time import ensure_utc, parse_iso

logger = get_logger(__name__)


class AuditRepository(ABC):
    """Append-only store for transition history"""

    @abstractmethod
    def create_event(self, event: AuditEvent) -> AuditEvent:
        """Append an audit event"""

    @abstractmethod
    def get_events_for_article(
        self,
        article_id: str,
        event_types: Optional[List[AuditEventType]] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[AuditEvent]:
        """Events for one article, oldest first"""


class InMemoryAuditRepository(AuditRepository):
    """Process-local audit log"""

    def __init__(self):
        self._events: List[AuditEvent] = []
        self._lock = threading.Lock()

    def create_event(self, event: AuditEvent) -> AuditEvent:
        with self._lock:
            self._events.append(event)
        return event

    def get_events_for_article(
        self,
        article_id: str,
        event_types: Optional[List[AuditEventType]] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[AuditEvent]:
        with self._lock:
            events = [
                e for e in self._events
                if e.article_id == article_id
                and (not event_types or e.event_type in event_types)
            ]
        return events[skip:skip + limit]


class MongoAuditRepository(AuditRepository):
    """Repository for audit event operations (append-only)"""

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            from .mongo_client import get_collection, AUDIT_COLLECTION
            collection = get_collection(AUDIT_COLLECTION)
        self._audit_events: Collection = collection

    def create_event(self, event: AuditEvent) -> AuditEvent:
        doc = event.model_dump(mode="json")
        # Native datetime so events sort chronologically, not as ISO text
        doc["timestamp"] = ensure_utc(event.timestamp)
        doc["_id"] = event.audit_event_id

        self._audit_events.insert_one(doc)
        logger.info(
            f"Created audit event: {event.event_type.value}",
            extra={"article_id": event.article_id, "action": doc.get("action")}
        )
        return event

    def get_events_for_article(
        self,
        article_id: str,
        event_types: Optional[List[AuditEventType]] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[AuditEvent]:
        query: Dict[str, Any] = {"article_id": article_id}
        if event_types:
            query["event_type"] = {"$in": [et.value for et in event_types]}

        cursor = self._audit_events.find(query).sort("timestamp", ASCENDING).skip(skip).limit(limit)

        events = []
        for doc in cursor:
            doc.pop("_id", None)
            timestamp = doc.get("timestamp")
            if isinstance(timestamp, str):  # legacy ISO text
                doc["timestamp"] = parse_iso(timestamp)
            elif timestamp is not None:
                doc["timestamp"] = ensure_utc(timestamp)
            events.append(AuditEvent.model_validate(doc))
        return events
