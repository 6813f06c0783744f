"""Publish Scheduler - Publishes SCHEDULED articles once their time has come

Every instance may run the job: the engine's compare-and-swap makes sure only
one of several concurrent publishers wins, the others get a
CONCURRENT_MODIFICATION result and move on.
"""
from typing import List, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..config.settings import settings
from ..domain.enums import ArticleStatus
from ..domain.models import TransitionResult
from ..engine.engine import WorkflowEngine
from ..utils.idgen import generate_correlation_id
from ..utils.logger import get_logger, set_correlation_id
from ..utils.time import is_due

logger = get_logger(__name__)

SCHEDULER_ROLE = "SYSTEM"
BATCH_SIZE = 200


class PublishScheduler:
    """APScheduler wrapper around the scheduled-publish sweep"""

    def __init__(self, engine: WorkflowEngine, interval_seconds: Optional[int] = None):
        self.engine = engine
        self.interval_seconds = interval_seconds or settings.publish_scheduler_interval_seconds
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False

    def start(self) -> None:
        """Start the scheduler (requires a running event loop)"""
        if self._is_running:
            logger.warning("Publish scheduler already running")
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self._run,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id="publish_scheduled_articles",
            name="Publish scheduled articles",
            replace_existing=True
        )
        self.scheduler.start()
        self._is_running = True
        logger.info(f"Publish scheduler started (every {self.interval_seconds}s)")

    def stop(self) -> None:
        """Stop the scheduler"""
        if self.scheduler:
            self.scheduler.shutdown(wait=False)
            self._is_running = False
            logger.info("Publish scheduler stopped")

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def _run(self) -> None:
        set_correlation_id(generate_correlation_id())
        self.publish_due_articles()

    def publish_due_articles(self) -> List[TransitionResult]:
        """Publish every SCHEDULED article whose scheduled_at has passed"""
        now = self.engine.clock()
        # Earliest first, so a backlog larger than one batch drains over sweeps
        due = self.engine.article_repo.list_due_scheduled(now, limit=BATCH_SIZE)

        results = [
            self.engine.publish(article.article_id, ArticleStatus.SCHEDULED, actor_role=SCHEDULER_ROLE)
            for article in due
            if is_due(article.scheduled_at, now)
        ]

        if results:
            published = sum(1 for r in results if r.success)
            logger.info(
                f"Scheduled publish sweep: {published}/{len(results)} published",
                extra={"count": published}
            )
        return results


_scheduler: Optional[PublishScheduler] = None


def start_scheduler(engine: WorkflowEngine) -> None:
    """Start the global publish scheduler"""
    global _scheduler
    if _scheduler is None:
        _scheduler = PublishScheduler(engine)
    _scheduler.start()


def stop_scheduler() -> None:
    """Stop the global publish scheduler"""
    global _scheduler
    if _scheduler:
        _scheduler.stop()
        _scheduler = None
