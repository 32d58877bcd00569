import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from pizzaria.core.middlewares.users import require_admin
from pizzaria.database.connection import get_session
from pizzaria.enums.user_role import UserRole
from pizzaria.models.user.role import UserRoleAssignment
from pizzaria.models.user.user import User
from pizzaria.schemas.user.user import RoleRequest, UserResponse

db_session = get_session


class AdminRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tags = ["admin"]
        self.add_api_route("/admin/users", self.get_all_users, methods=["GET"], response_model=List[UserResponse])
        self.add_api_route("/admin/users/{user_id}/roles", self.grant_role, methods=["POST"], response_model=UserResponse)
        self.add_api_route("/admin/users/{user_id}/roles/{role}", self.revoke_role, methods=["DELETE"],
                           response_model=UserResponse)

    def _get_user_or_404(self, session: Session, user_id: int) -> User:
        user = session.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não encontrado")
        return user

    def get_all_users(self, current_user: User = Depends(require_admin), session: Session = Depends(db_session)):
        users = session.exec(select(User).order_by(User.id)).all()
        return [UserResponse.model_validate(user) for user in users]

    def grant_role(
        self,
        user_id: int,
        data: RoleRequest,
        current_user: User = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        user = self._get_user_or_404(session, user_id)

        if data.role.value not in user.role_names:
            user.roles.append(UserRoleAssignment(role=data.role))
            session.add(user)
            session.commit()
            session.refresh(user)
            logging.info(f"ADMIN >>> Papel {data.role.value} concedido a {user.id} por {current_user.id}")

        return UserResponse.model_validate(user)

    def revoke_role(
        self,
        user_id: int,
        role: UserRole,
        current_user: User = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        user = self._get_user_or_404(session, user_id)

        if user.id == current_user.id and role == UserRole.ADMIN:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Você não pode remover seu próprio acesso de administrador")

        assignment = next((r for r in user.roles if r.role == role), None)
        if not assignment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuário não possui esse papel")

        user.roles.remove(assignment)
        session.add(user)
        session.commit()
        session.refresh(user)

        logging.info(f"ADMIN >>> Papel {role.value} removido de {user.id} por {current_user.id}")
        return UserResponse.model_validate(user)
