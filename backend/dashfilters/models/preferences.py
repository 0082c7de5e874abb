from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Integer, String

from dashfilters.db.base import Base


class FilterPreference(Base):
    __tablename__ = 'filter_preferences'
    __table_args__ = (
        Index('ux_filter_preferences_scope_key', 'scope', 'pref_key', unique=True),
    )

    id = Column(Integer, primary_key=True, index=True)
    scope = Column(String(128), nullable=False, index=True)
    pref_key = Column(String(64), nullable=False, index=True)
    value = Column(String(255), nullable=False, default='')
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
