"""
Search-count store for Movie Finder.

Handles all database operations including:
- Connection management with SQLAlchemy
- Table setup for recorded searches
- Counting searches and reading back the trending list
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    inspect,
    select,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .config import Config
from .exceptions import StoreError
from .models import Movie, TrendingSearch
from .utils import setup_logger

metadata = MetaData()

search_terms = Table(
    "search_terms",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("search_term", String(255), nullable=False, unique=True),
    Column("count", Integer, nullable=False, default=1),
    Column("movie_id", Integer, nullable=True),
    Column("title", String(500), nullable=True),
    Column("poster_url", String(500), nullable=True),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)


class SearchStore:
    """
    Persists how often each search term was used.

    Responsibilities:
    - Connection management with SQLAlchemy
    - Incrementing the count for a term (first hit stores display metadata)
    - Ranked reads for the trending section
    """

    TABLES = ["search_terms"]

    def __init__(self, config: Config, engine: Optional[Engine] = None):
        self.config = config
        self.engine = engine or self._create_engine()
        self.logger = setup_logger("search_store", config.log_dir)

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine; pooling options only apply to server databases."""
        if self.config.db_url.startswith("sqlite"):
            return create_engine(self.config.db_url)
        return create_engine(
            self.config.db_url,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    # ============ SETUP ============

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists."""
        try:
            return inspect(self.engine).has_table(table_name)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not inspect database: {e}") from e

    def create_tables(self) -> dict:
        """
        Create missing tables.

        Returns:
            Dict with 'created' and 'existing' table name lists
        """
        existing = [t for t in self.TABLES if self.table_exists(t)]
        try:
            metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not create tables: {e}") from e

        created = [t for t in self.TABLES if t not in existing]
        if created:
            self.logger.info(f"Created tables: {', '.join(created)}")
        return {"created": created, "existing": existing}

    # ============ WRITES ============

    def record_search(self, search_term: str, movie: Movie) -> TrendingSearch:
        """
        Count one more search for a term.

        The first occurrence stores the movie's id, title and poster;
        later occurrences only increment the count.

        Args:
            search_term: Query text as typed
            movie: Top result for the query

        Returns:
            The record after the update

        Raises:
            StoreError: If the database operation fails
        """
        try:
            if not self._increment(search_term):
                try:
                    self._insert(search_term, movie)
                except IntegrityError:
                    # Another writer inserted the same term first
                    self._increment(search_term)
            record = self.get_search(search_term)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not record search '{search_term}': {e}") from e

        self.logger.info(f"Recorded search '{search_term}' (count={record.count})")
        return record

    def _increment(self, search_term: str) -> bool:
        stmt = (
            update(search_terms)
            .where(search_terms.c.search_term == search_term)
            .values(count=search_terms.c.count + 1, updated_at=datetime.now())
        )
        with self.engine.begin() as conn:
            result = conn.execute(stmt)
            return result.rowcount > 0

    def _insert(self, search_term: str, movie: Movie) -> None:
        now = datetime.now()
        with self.engine.begin() as conn:
            conn.execute(
                search_terms.insert().values(
                    search_term=search_term,
                    count=1,
                    movie_id=movie.id,
                    title=movie.title,
                    poster_url=movie.get_poster_url(self.config.image_base_url),
                    created_at=now,
                    updated_at=now,
                )
            )

    # ============ READS ============

    def get_search(self, search_term: str) -> Optional[TrendingSearch]:
        """Get the record for a single term, or None."""
        stmt = select(search_terms).where(search_terms.c.search_term == search_term)
        try:
            with self.engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()
        except SQLAlchemyError as e:
            raise StoreError(f"Could not read search '{search_term}': {e}") from e
        return self._row_to_record(row) if row else None

    def get_trending(self, limit: int = 5) -> List[TrendingSearch]:
        """
        Get the most searched terms.

        Args:
            limit: Maximum number of records

        Returns:
            Records ordered by count descending, most recently used first on ties
        """
        stmt = (
            select(search_terms)
            .order_by(
                search_terms.c.count.desc(),
                search_terms.c.updated_at.desc(),
                search_terms.c.id.desc(),
            )
            .limit(limit)
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Could not read trending searches: {e}") from e
        return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row) -> TrendingSearch:
        return TrendingSearch(
            id=row["id"],
            search_term=row["search_term"],
            count=row["count"],
            movie_id=row["movie_id"],
            title=row["title"],
            poster_url=row["poster_url"],
        )
