from database.db import db
from datetime import datetime

class StorageEntry(db.Model):
    """One JSON document per key, overwritten wholesale on every save."""
    __tablename__ = "storage_entries"

    key = db.Column(db.String(255), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<StorageEntry {self.key}>"
