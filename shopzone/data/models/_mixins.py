# shopzone/data/models/_mixins.py
import uuid

from sqlalchemy import Column, DateTime, String

from shopzone.utils.time_utils import utcnow


def new_id() -> str:
    return str(uuid.uuid4())


def id_column():
    return Column(String(36), primary_key=True, default=new_id)


def created_at_column():
    return Column(DateTime, nullable=False, default=utcnow)


def updated_at_column():
    return Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
