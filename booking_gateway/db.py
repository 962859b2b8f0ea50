"""
Booking store abstraction: Supabase (PostgREST), SQLAlchemy and an
in-memory test implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from sqlalchemy import BigInteger, Column, Integer, String, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from booking_gateway.errors import StoreError


BOOKING_COLUMNS = "id,title,date,start_time,end_time,user_id"


class BookingStore(Protocol):
    """Interface for booking persistence."""

    def list_bookings(self) -> list["BookingRecord"]:
        """Return every booking ordered by date ascending."""
        ...

    def upsert_bookings(self, records: list["BookingRecord"]) -> int:
        """Insert or replace ``records`` in one batch and return the count."""
        ...

    def get_booking(self, booking_id: int) -> Optional["BookingRecord"]:
        ...

    def delete_booking(self, booking_id: int) -> None:
        ...


@dataclass
class BookingRecord:
    title: str
    date: str
    start_time: str
    end_time: str
    user_id: str
    id: Optional[int] = None

    def as_row(self) -> dict:
        row = {
            "title": self.title,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "user_id": self.user_id,
        }
        # Rows without an id get one assigned by the store.
        if self.id is not None:
            row["id"] = self.id
        return row

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "BookingRecord":
        return cls(
            id=row.get("id"),
            title=row["title"],
            date=str(row["date"]),
            start_time=str(row["start_time"]),
            end_time=str(row["end_time"]),
            user_id=row["user_id"],
        )


class InMemoryBookingStore:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.bookings: Dict[int, BookingRecord] = {}
        self._next_id = 1

    def list_bookings(self) -> list[BookingRecord]:
        return sorted(self.bookings.values(), key=lambda record: record.date)

    def upsert_bookings(self, records: list[BookingRecord]) -> int:
        for record in records:
            stored = BookingRecord(**vars(record))
            if stored.id is None:
                stored.id = self._next_id
            self._next_id = max(self._next_id, stored.id + 1)
            self.bookings[stored.id] = stored
        return len(records)

    def get_booking(self, booking_id: int) -> Optional[BookingRecord]:
        return self.bookings.get(booking_id)

    def delete_booking(self, booking_id: int) -> None:
        self.bookings.pop(booking_id, None)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.bookings.clear()
        self._next_id = 1


class SupabaseBookingStore:
    """
    Reads and writes the bookings table through the Supabase PostgREST API.
    """

    def __init__(self, client: Any, table: str = "bookings"):
        self._client = client
        self.table = table

    def _query(self):
        return self._client.table(self.table)

    def list_bookings(self) -> list[BookingRecord]:
        try:
            response = (
                self._query().select(BOOKING_COLUMNS).order("date").execute()
            )
        except Exception as e:
            raise StoreError(f"Failed to list bookings: {e}") from e
        return [BookingRecord.from_row(row) for row in response.data or []]

    def upsert_bookings(self, records: list[BookingRecord]) -> int:
        rows = [record.as_row() for record in records]
        try:
            # missing=default lets the id column default fill rows without an id
            self._query().upsert(rows, default_to_null=False).execute()
        except Exception as e:
            raise StoreError(f"Failed to upsert bookings: {e}") from e
        return len(rows)

    def get_booking(self, booking_id: int) -> Optional[BookingRecord]:
        try:
            response = (
                self._query()
                .select(BOOKING_COLUMNS)
                .eq("id", booking_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise StoreError(f"Failed to fetch booking {booking_id}: {e}") from e
        rows = response.data or []
        if not rows:
            return None
        return BookingRecord.from_row(rows[0])

    def delete_booking(self, booking_id: int) -> None:
        try:
            self._query().delete().eq("id", booking_id).execute()
        except Exception as e:
            raise StoreError(f"Failed to delete booking {booking_id}: {e}") from e


class SqlAlchemyBookingStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlAlchemyBookingStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_record(self, row: "BookingRow") -> BookingRecord:
        return BookingRecord(
            id=row.id,
            title=row.title,
            date=row.date,
            start_time=row.start_time,
            end_time=row.end_time,
            user_id=row.user_id,
        )

    def list_bookings(self) -> list[BookingRecord]:
        try:
            with self.Session() as session:
                stmt = select(BookingRow).order_by(
                    BookingRow.date.asc(), BookingRow.id.asc()
                )
                rows = session.execute(stmt).scalars().all()
                return [self._to_record(row) for row in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list bookings: {e}") from e

    def upsert_bookings(self, records: list[BookingRecord]) -> int:
        try:
            with self.Session() as session:
                for record in records:
                    row = (
                        session.get(BookingRow, record.id)
                        if record.id is not None
                        else None
                    )
                    if row:
                        row.title = record.title
                        row.date = record.date
                        row.start_time = record.start_time
                        row.end_time = record.end_time
                        row.user_id = record.user_id
                    else:
                        session.add(BookingRow(**record.as_row()))
                session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to upsert bookings: {e}") from e
        return len(records)

    def get_booking(self, booking_id: int) -> Optional[BookingRecord]:
        try:
            with self.Session() as session:
                row = session.get(BookingRow, booking_id)
                if not row:
                    return None
                return self._to_record(row)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch booking {booking_id}: {e}") from e

    def delete_booking(self, booking_id: int) -> None:
        try:
            with self.Session() as session:
                row = session.get(BookingRow, booking_id)
                if row:
                    session.delete(row)
                    session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to delete booking {booking_id}: {e}") from e


Base = declarative_base()


class BookingRow(Base):
    __tablename__ = "bookings"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    title = Column(String, nullable=False)
    date = Column(String(10), nullable=False, index=True)
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    user_id = Column(String, nullable=False, index=True)
