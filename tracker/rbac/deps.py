from fastapi import Depends
from sqlalchemy.orm import Session

from tracker.db import get_db
from tracker.store import SqlStore

def get_store(db: Session = Depends(get_db)) -> SqlStore:
    return SqlStore(db)
