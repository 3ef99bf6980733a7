"""Customer feedback routes for restaurant owners."""

from typing import List, Optional

from fastapi import APIRouter, Query

from smartmenu.core.errors import NotFound
from smartmenu.core.rbac import CanViewFeedback
from smartmenu.db.session import DbSession
from smartmenu.models.restaurant import Feedback
from smartmenu.schemas.common import MessageResponse
from smartmenu.schemas.feedback import FeedbackResponse

router = APIRouter()


def _get_owned_feedback(db, owner_id: int, feedback_id: int) -> Feedback:
    feedback = db.query(Feedback).filter(Feedback.id == feedback_id, Feedback.owner_id == owner_id).first()
    if feedback is None:
        raise NotFound("Feedback not found")
    return feedback


@router.get("", response_model=List[FeedbackResponse])
def list_feedback(
    identity: CanViewFeedback,
    db: DbSession,
    rating: Optional[int] = Query(None, ge=1, le=5),
):
    """Feedback on the caller's orders, newest first."""
    query = db.query(Feedback).filter(Feedback.owner_id == identity.id)
    if rating is not None:
        query = query.filter(Feedback.rating == rating)
    return query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()


@router.get("/{feedback_id}", response_model=FeedbackResponse)
def get_feedback(feedback_id: int, identity: CanViewFeedback, db: DbSession):
    return _get_owned_feedback(db, identity.id, feedback_id)


@router.delete("/{feedback_id}", response_model=MessageResponse)
def delete_feedback(feedback_id: int, identity: CanViewFeedback, db: DbSession):
    feedback = _get_owned_feedback(db, identity.id, feedback_id)
    db.delete(feedback)
    db.commit()
    return MessageResponse(message="Feedback deleted successfully")
