# culturix/api/logs.py

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from culturix.api.auth import require_auth
from culturix.core.identity import SessionContext
from culturix.core.logbook import create_entry, list_entries, serialize_entry
from culturix.database import get_db


router = APIRouter(prefix="/api")


class LogCreateRequest(BaseModel):
    content: str | None = None


@router.get("/logs")
def get_logs(context: SessionContext = Depends(require_auth), db: Session = Depends(get_db)):
    return [serialize_entry(entry) for entry in list_entries(db, context.user_id)]


@router.post("/logs", status_code=status.HTTP_201_CREATED)
def create_log(req: LogCreateRequest, context: SessionContext = Depends(require_auth), db: Session = Depends(get_db)):
    create_entry(db, context.user_id, req.content)
    return {"message": "Log created successfully"}
