from typing import List

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from pizzaria.core.middlewares.users import get_current_user
from pizzaria.database.connection import get_session
from pizzaria.models.review import Review
from pizzaria.models.user.user import User
from pizzaria.schemas.review import ReviewCreate, ReviewRead

db_session = get_session


class ReviewRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tags = ["reviews"]
        self.add_api_route("/reviews", self.list_reviews, methods=["GET"], response_model=List[ReviewRead])
        self.add_api_route("/reviews", self.create_review, methods=["POST"], response_model=ReviewRead, status_code=201)

    def list_reviews(self, limit: int = Query(50, ge=1, le=200), session: Session = Depends(db_session)):
        return session.exec(select(Review).order_by(Review.created_at.desc(), Review.id.desc()).limit(limit)).all()

    def create_review(
        self,
        data: ReviewCreate,
        current_user: User = Depends(get_current_user),
        session: Session = Depends(db_session),
    ):
        review = Review(
            user_id=current_user.id,
            customer_name=current_user.name,
            rating=data.rating,
            comment=data.comment.strip(),
        )
        session.add(review)
        session.commit()
        session.refresh(review)
        return review
