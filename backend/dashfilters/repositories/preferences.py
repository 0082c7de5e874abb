from datetime import datetime

from sqlalchemy.orm import Session

from dashfilters.models.preferences import FilterPreference


def _find(db: Session, scope: str, pref_key: str):
    return (
        db.query(FilterPreference)
        .filter(FilterPreference.scope == scope, FilterPreference.pref_key == pref_key)
        .first()
    )


def get_preference(db: Session, scope: str, pref_key: str) -> str | None:
    row = _find(db, scope, pref_key)
    if not row:
        return None
    return row.value


def save_preference(db: Session, scope: str, pref_key: str, value: str) -> str:
    row = _find(db, scope, pref_key)
    if row is None:
        row = FilterPreference(scope=scope, pref_key=pref_key, value=value)
        db.add(row)
    else:
        row.value = value
        row.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(row)
    return row.value


def delete_preferences(db: Session, scope: str) -> int:
    removed = db.query(FilterPreference).filter(FilterPreference.scope == scope).delete()
    db.commit()
    return int(removed or 0)
