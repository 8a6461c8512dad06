from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from foodtrack.database import get_db
from foodtrack.schemas.chat import ChatRequest, ChatResponse
from foodtrack.services import users

router = APIRouter()

GREETING = "Hello!"


@router.post("/", response_model=ChatResponse)
def chat(body: ChatRequest, db: Session = Depends(get_db)):
    """Placeholder chat endpoint: checks the user exists and greets them."""
    if not (body.user_id and body.user_id.strip()) or not (body.message and body.message.strip()):
        raise HTTPException(status_code=400, detail="user_id and message are required")
    user = users.get_user(db, body.user_id)
    return ChatResponse(success=True, message=GREETING, user_id=str(user.id))
