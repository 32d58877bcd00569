from datetime import datetime, timedelta, timezone
import logging

import bcrypt
import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session, select

from pizzaria.configuration.settings import Configuration
from pizzaria.database.connection import get_session
from pizzaria.enums.user_role import UserRole
from pizzaria.models.user.role import UserRoleAssignment
from pizzaria.models.user.user import User
from pizzaria.schemas.auth.auth import AuthCredentials, MeResponse, RegisterRequest, Token

configuration = Configuration()

SECRET_KEY = configuration.secret_key
JWT_EXPIRATION_HOURS = configuration.jwt_expiration_hours

db_session = get_session


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode(), password_hash.encode())


class AuthRouter(APIRouter):
    def __init__(self):
        super().__init__(prefix="/auth", tags=["auth"])
        self.add_api_route("/register", self.register, methods=["POST"], response_model=Token, status_code=201)
        self.add_api_route("/login", self.login, methods=["POST"], response_model=Token)
        self.add_api_route("/me", self.me, methods=["GET"], response_model=MeResponse)

    def _generate_jwt(self, user_id: int) -> str:
        expiration = datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRATION_HOURS)
        payload = {"user_id": user_id, "exp": expiration}
        return jwt.encode(payload, SECRET_KEY, algorithm="HS256")

    def decode_jwt(self, token: str) -> dict:
        try:
            return jwt.decode(token, SECRET_KEY, algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            raise HTTPException(status_code=401, detail="Token expirado")
        except jwt.InvalidTokenError:
            raise HTTPException(status_code=401, detail="Token inválido")

    def user_from_token(self, token: str, session: Session) -> User:
        payload = self.decode_jwt(token)
        user = session.get(User, payload.get("user_id"))

        if not user or not user.is_active:
            raise HTTPException(status_code=401, detail="Usuário não encontrado")
        return user

    def get_current_user(self, request: Request, session: Session = Depends(db_session)) -> User:
        authorization: str = request.headers.get("Authorization")
        if not authorization:
            raise HTTPException(status_code=401, detail="Acesso não autorizado")

        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HTTPException(status_code=401, detail="Formato de autenticação inválido")

        return self.user_from_token(parts[1], session)

    def register(self, data: RegisterRequest, session: Session = Depends(db_session)):
        existing = session.exec(select(User).where(User.email == data.email)).first()
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email já cadastrado")

        user = User(
            name=data.name.strip(),
            email=data.email,
            phone=data.phone,
            password_hash=hash_password(data.password),
        )
        user.roles.append(UserRoleAssignment(role=UserRole.CUSTOMER))
        session.add(user)
        session.commit()
        session.refresh(user)

        logging.info(f"AUTH >>> Novo cliente cadastrado: {user.id}")
        return Token(token=self._generate_jwt(user.id))

    def login(self, credentials: AuthCredentials, session: Session = Depends(db_session)):
        email = credentials.email.strip().lower()
        user = session.exec(select(User).where(User.email == email)).first()

        if not user or not user.is_active or not check_password(credentials.password, user.password_hash):
            raise HTTPException(status_code=401, detail="Email ou senha incorretos")

        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()

        return Token(token=self._generate_jwt(user.id))

    def me(self, request: Request, session: Session = Depends(db_session)):
        user = self.get_current_user(request, session)
        return MeResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            roles=user.role_names,
            is_employee=user.is_employee,
            is_admin=user.is_admin,
        )
