from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlmodel import Session

from pizzaria.core.middlewares.users import get_current_user
from pizzaria.database.connection import get_session
from pizzaria.models.user.user import User
from pizzaria.schemas.user.user import AddressUpdate, ProfileResponse, ProfileUpdate

db_session = get_session


class ProfileRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tags = ["profile"]
        self.add_api_route("/profile", self.get_profile, methods=["GET"], response_model=ProfileResponse)
        self.add_api_route("/profile", self.update_profile, methods=["PUT"], response_model=ProfileResponse)
        self.add_api_route("/profile/address", self.update_address, methods=["PUT"], response_model=ProfileResponse)

    def get_profile(self, current_user: User = Depends(get_current_user)):
        return current_user

    def _save(self, session: Session, user: User) -> User:
        user.updated_at = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update_profile(
        self,
        data: ProfileUpdate,
        current_user: User = Depends(get_current_user),
        session: Session = Depends(db_session),
    ):
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(current_user, field, value.strip() if isinstance(value, str) else value)
        return self._save(session, current_user)

    def update_address(
        self,
        data: AddressUpdate,
        current_user: User = Depends(get_current_user),
        session: Session = Depends(db_session),
    ):
        for field, value in data.model_dump().items():
            setattr(current_user, field, value)
        return self._save(session, current_user)
