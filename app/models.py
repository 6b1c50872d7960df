from flask_sqlalchemy import SQLAlchemy
from datetime import datetime, timezone

db = SQLAlchemy()


class StoredValue(db.Model):
    """One key of a browser's local key/value storage (bh_user, bh_progress)."""

    __tablename__ = "stored_values"
    id = db.Column(db.Integer, primary_key=True)
    owner = db.Column(db.String(64), nullable=False, index=True)  # client id from the session cookie
    key = db.Column(db.String(64), nullable=False)
    value = db.Column(db.Text, nullable=False)  # JSON document
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    __table_args__ = (db.UniqueConstraint("owner", "key"),)
