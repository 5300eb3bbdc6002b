from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from .database import Base


def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String(1024), nullable=False)
    video_url = Column(String(1024), nullable=True)
    group = Column("group", String(128), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Exercise(id={self.id}, name='{self.name}')>"


class Sheet(Base):
    __tablename__ = "sheets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    # Ordered entries: {exercise_id, serie, repetitions, weight, notes}
    exercises = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return "<Sheet(id=%s, user_id=%s, name='%s')>" % (self.id, self.user_id, self.name)


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    sheet_id = Column(Integer, nullable=False, index=True)
    completed_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    total_seconds = Column(Integer, nullable=False)
    exercises = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return "<Workout(id=%s, sheet_id=%s, total_seconds=%s)>" % (self.id, self.sheet_id, self.total_seconds)
