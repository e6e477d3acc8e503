"""Persisted daily quota with calendar-day rollover."""

import logging
from typing import Optional

from ..entities.daily_quota import DEFAULT_DAILY_GOAL, DailyQuota
from ..errors import StorageError
from ..interfaces.clock import Clock
from ..interfaces.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_DATE_KEY = "meditationDate"
DEFAULT_COUNT_KEY = "meditationCount"


class QuotaStore:
    """
    Durable tracking of how many sessions were completed today.

    The record is two plain strings in a KeyValueStore: the calendar day and
    the count. A record whose day differs from today is stale and gets reset
    lazily, the first time it is read or written on the new day.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        clock: Clock,
        goal: int = DEFAULT_DAILY_GOAL,
        date_key: str = DEFAULT_DATE_KEY,
        count_key: str = DEFAULT_COUNT_KEY,
    ):
        """
        Initialize the quota store.

        Args:
            storage: Persistence collaborator holding the record
            clock: Source of the current calendar day
            goal: Maximum number of completed sessions per day
            date_key: Key of the stored day identifier
            count_key: Key of the stored count
        """
        if goal < 1:
            raise ValueError("goal must be at least 1")
        self.storage = storage
        self.clock = clock
        self.goal = goal
        self.date_key = date_key
        self.count_key = count_key
        self._quota: Optional[DailyQuota] = None

    @property
    def quota(self) -> Optional[DailyQuota]:
        """Last quota successfully loaded or persisted, None if unknown."""
        return self._quota

    def today(self) -> str:
        """Return the clock's current local calendar day as an ISO string."""
        return self.clock.now().date().isoformat()

    async def load(self) -> DailyQuota:
        """
        Read today's quota, resetting a stale record.

        Returns:
            DailyQuota: Today's quota.

        Raises:
            StorageError: If the record cannot be read or reset, or the stored
                count is not an integer.
        """
        today = self.today()
        try:
            saved_date = await self.storage.get(self.date_key)
            saved_count = await self.storage.get(self.count_key)
        except StorageError:
            self._quota = None
            logger.error("Failed to read daily quota", exc_info=True)
            raise

        if saved_date != today:
            logger.info(f"Quota record for {saved_date} is stale, resetting for {today}")
            return await self._reset(today)

        count = self._parse_count(saved_count)
        self._quota = DailyQuota(date=today, completed_count=count, goal=self.goal)
        logger.debug(f"Loaded quota {count}/{self.goal} for {today}")
        return self._quota

    async def increment(self) -> DailyQuota:
        """
        Count one more completed session for today, saturating at the goal.

        Returns:
            DailyQuota: The persisted quota.

        Raises:
            RuntimeError: If called before ``load``.
            StorageError: If the new count cannot be persisted.
        """
        if self._quota is None:
            raise RuntimeError("QuotaStore.increment() called before load()")

        today = self.today()
        current = self._quota
        if current.date != today:
            logger.info(f"Day rolled over to {today} before increment, resetting quota")
            current = await self._reset(today)

        new_count = min(current.completed_count + 1, self.goal)
        try:
            await self.storage.set(self.count_key, str(new_count))
        except StorageError:
            logger.error(f"Failed to persist quota count {new_count}", exc_info=True)
            raise

        self._quota = DailyQuota(date=today, completed_count=new_count, goal=self.goal)
        logger.info(f"Quota incremented to {new_count}/{self.goal} for {today}")
        return self._quota

    async def _reset(self, today: str) -> DailyQuota:
        # Count goes first: if the date write fails the record stays stale.
        try:
            await self.storage.set(self.count_key, "0")
            await self.storage.set(self.date_key, today)
        except StorageError:
            self._quota = None
            logger.error(f"Failed to reset quota for {today}", exc_info=True)
            raise

        self._quota = DailyQuota(date=today, completed_count=0, goal=self.goal)
        return self._quota

    def _parse_count(self, raw: Optional[str]) -> int:
        if raw is None:
            return 0
        try:
            count = int(raw)
        except ValueError as e:
            self._quota = None
            raise StorageError(f"Stored quota count is corrupt: {raw!r}") from e
        if not 0 <= count <= self.goal:
            logger.warning(f"Stored quota count {count} out of range, clamping to [0, {self.goal}]")
        return max(0, min(count, self.goal))
