from fastapi import Depends, HTTPException, status

from pizzaria.auth.auth import AuthRouter
from pizzaria.models.user.user import User

get_current_user = AuthRouter().get_current_user


def is_employee(user: User):
    if not user.is_employee:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso restrito à equipe")


def is_admin(user: User):
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")


def require_employee(current_user: User = Depends(get_current_user)) -> User:
    is_employee(current_user)
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    is_admin(current_user)
    return current_user
