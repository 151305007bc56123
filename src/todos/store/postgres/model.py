from datetime import datetime
from sqlalchemy import Boolean, DateTime, Index, Integer, String, false, func
from sqlalchemy.orm import declarative_base, Mapped, mapped_column

from src.config import get_settings


settings = get_settings()

Base = declarative_base()

TITLE_MAX_LENGTH = 500
MAX_ROW_ID = 2**31 - 1


class TaskModel(Base):
    __tablename__ = settings.TASK_STORE_NAMESPACE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


Index(
    f"idx_{settings.TASK_STORE_NAMESPACE}_created_at",
    TaskModel.created_at.desc(),
)
