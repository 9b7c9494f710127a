from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload
from typing import List
import logging

from dealtracker.db.session import get_db
from dealtracker.models import Comment, Deal, User
from dealtracker.schemas import CommentCreate, CommentResponse, CommentWithUserResponse
from dealtracker.services.activity import ADDED_COMMENT, log_activity
from dealtracker.services.deal_queries import touch_deal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["comments"])


@router.get("/deals/{deal_id}/comments", response_model=List[CommentWithUserResponse])
def list_comments(deal_id: int, db: Session = Depends(get_db)):
    """
    Get all comments for a deal with their authors, most recent first.
    """
    deal = db.query(Deal).filter(Deal.id == deal_id).first()
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")

    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.deal_id == deal_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


@router.post("/deals/{deal_id}/comments", response_model=CommentResponse, status_code=201)
def create_comment(
    deal_id: int,
    comment_data: CommentCreate,
    db: Session = Depends(get_db)
):
    """
    Post a comment on a deal.
    Also appends an activity entry and refreshes the deal's lastUpdated.
    """
    deal = db.query(Deal).filter(Deal.id == deal_id).first()
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    if db.get(User, comment_data.user_id) is None:
        raise HTTPException(status_code=400, detail=f"User {comment_data.user_id} does not exist")

    comment = Comment(
        deal_id=deal_id,
        user_id=comment_data.user_id,
        content=comment_data.content,
    )
    db.add(comment)
    db.flush()

    log_activity(
        db, deal_id, ADDED_COMMENT, user_id=comment_data.user_id,
        details={"commentId": comment.id},
    )
    # last_updated must not precede the comment's created_at
    touch_deal(deal)
    db.commit()
    db.refresh(comment)

    logger.info(f"Created comment {comment.id} for deal {deal_id}")
    return comment


@router.delete("/comments/{comment_id}", status_code=204)
def delete_comment(comment_id: int, db: Session = Depends(get_db)):
    """Delete a comment"""
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")

    db.delete(comment)
    db.commit()

    logger.info(f"Deleted comment {comment_id}")
    return None
