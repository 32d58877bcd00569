from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Optional, Any


class AppHttpException(HTTPException):
    """Erro de negócio com mensagem em português e, opcionalmente, uma dica de solução."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        solution: Optional[str] = None,
        errors: Optional[Any] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.solution = solution
        self.errors = errors

    @property
    def content(self) -> dict:
        body = {"detail": self.detail}
        if self.solution:
            body["solution"] = self.solution
        if self.errors:
            body["errors"] = self.errors
        return body


async def app_http_exception_handler(request: Request, exc: AppHttpException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.content)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    content = {
        "detail": jsonable_encoder(exc.errors()),
        "solution": "Revise os campos enviados e tente novamente.",
    }
    return JSONResponse(status_code=422, content=content)
