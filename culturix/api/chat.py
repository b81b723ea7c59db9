# culturix/api/chat.py

from fastapi import APIRouter
from pydantic import BaseModel

from culturix.core import chat_proxy


router = APIRouter(prefix="/api")


class ChatRequest(BaseModel):
    message: str | None = None


@router.post("/chat")
def chat(req: ChatRequest):
    return {"reply": chat_proxy.chat(req.message)}
