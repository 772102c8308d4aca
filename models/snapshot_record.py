# models/snapshot_record.py
# Строка-хранилище: весь снимок лежит одним JSON-документом под ключом

from extensions import db


class SnapshotRecord(db.Model):
    __tablename__ = 'snapshots'
    key = db.Column(db.String(100), primary_key=True)
    payload = db.Column(db.Text, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.current_timestamp(),
        onupdate=db.func.current_timestamp(),
    )
