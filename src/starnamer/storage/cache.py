"""SQLite cache for generator proposals."""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path

import aiosqlite

from starnamer.core.exceptions import CacheError
from starnamer.core.utils import utc_now
from starnamer.generator.models import StarProposal

logger = logging.getLogger(__name__)


class ProposalCache:
    """SQLite-based cache of generator proposals, keyed by emotion."""

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS proposal_cache (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        emotion_key TEXT NOT NULL,
        position INTEGER NOT NULL,
        data TEXT NOT NULL,
        cached_at TEXT NOT NULL,
        UNIQUE(emotion_key, position)
    );

    CREATE INDEX IF NOT EXISTS idx_proposal_emotion
    ON proposal_cache(emotion_key, cached_at);
    """

    def __init__(self, db_path: Path):
        """Initialize the cache.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self._connection: aiosqlite.Connection | None = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self.db_path)
            await self._init_schema()
        return self._connection

    async def _init_schema(self) -> None:
        """Initialize database schema."""
        conn = self._connection
        if conn:
            await conn.executescript(self.SCHEMA)
            await conn.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def get_proposals(
        self,
        emotion_key: str,
        ttl_hours: float = 24,
    ) -> list[StarProposal] | None:
        """Get cached proposals for an emotion.

        Args:
            emotion_key: Normalized emotion key
            ttl_hours: Maximum age of a cached batch

        Returns:
            Proposals in their original order, or None if missing/expired
        """
        try:
            conn = await self._get_connection()
            cursor = await conn.execute(
                """
                SELECT data, cached_at FROM proposal_cache
                WHERE emotion_key = ?
                ORDER BY position
                """,
                (emotion_key,),
            )
            rows = await cursor.fetchall()

            if not rows:
                return None

            # A batch is written in one transaction, so every row shares cached_at
            cached_at = datetime.fromisoformat(rows[0][1])
            age = utc_now() - cached_at
            if age > timedelta(hours=ttl_hours):
                logger.debug(f"Proposal cache expired for {emotion_key} (age: {age})")
                return None

            return [StarProposal.model_validate(json.loads(data)) for data, _ in rows]

        except Exception as e:
            logger.warning(f"Cache read error: {e}")
            return None

    async def set_proposals(
        self,
        emotion_key: str,
        proposals: list[StarProposal],
    ) -> None:
        """Replace the cached proposals for an emotion.

        Args:
            emotion_key: Normalized emotion key
            proposals: Proposals in rank order

        Raises:
            CacheError: If the write fails
        """
        try:
            conn = await self._get_connection()
            cached_at = utc_now().isoformat()

            rows = [
                (
                    emotion_key,
                    position,
                    json.dumps(proposal.model_dump(mode="json")),
                    cached_at,
                )
                for position, proposal in enumerate(proposals)
            ]

            await conn.execute(
                "DELETE FROM proposal_cache WHERE emotion_key = ?",
                (emotion_key,),
            )
            await conn.executemany(
                """
                INSERT INTO proposal_cache
                (emotion_key, position, data, cached_at)
                VALUES (?, ?, ?, ?)
                """,
                rows,
            )
            await conn.commit()

        except Exception as e:
            logger.warning(f"Cache write error: {e}")
            raise CacheError(f"Failed to cache proposals: {e}") from e

    async def clear(self, emotion_key: str | None = None) -> int:
        """Remove cached proposals.

        Args:
            emotion_key: Only clear this emotion (default: everything)

        Returns:
            Number of entries removed
        """
        try:
            conn = await self._get_connection()
            if emotion_key is None:
                cursor = await conn.execute("DELETE FROM proposal_cache")
            else:
                cursor = await conn.execute(
                    "DELETE FROM proposal_cache WHERE emotion_key = ?",
                    (emotion_key,),
                )
            await conn.commit()
            return cursor.rowcount

        except Exception as e:
            logger.warning(f"Cache clear error: {e}")
            return 0

    async def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dict with cache stats
        """
        try:
            conn = await self._get_connection()

            cursor = await conn.execute(
                "SELECT COUNT(*), COUNT(DISTINCT emotion_key) FROM proposal_cache"
            )
            total_entries, emotions = await cursor.fetchone()

            cursor = await conn.execute(
                "SELECT MIN(cached_at), MAX(cached_at) FROM proposal_cache"
            )
            oldest, newest = await cursor.fetchone()

            return {
                "total_entries": total_entries,
                "emotions": emotions,
                "oldest_entry": oldest,
                "newest_entry": newest,
                "db_path": str(self.db_path),
            }

        except Exception as e:
            logger.warning(f"Failed to get cache stats: {e}")
            return {"error": str(e)}
