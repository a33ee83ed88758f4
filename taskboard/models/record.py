from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Record(SQLModel, table=True):
    """One stored object of the ``users``, ``taskLists`` or ``tasks`` collection.

    The whole object lives in ``body`` so fields written through a partial
    task update survive a round trip unchanged. Rows are keyed by their
    position in the collection; ``id`` is only a lookup column and may repeat.
    """
    __tablename__ = "records"

    collection: str = Field(primary_key=True)
    position: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    id: Optional[str] = Field(default=None, index=True)
    body: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
