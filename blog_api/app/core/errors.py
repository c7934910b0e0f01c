"""
Error taxonomy shared by the services.

Each service pipeline raises one of the ``ServiceError`` subclasses as
soon as a gate fails.  ``register_exception_handlers`` turns them into
``{"message": ...}`` responses with the status code carried by the
exception class.  The message texts are the ones existing clients of
the service already depend on, hence Portuguese.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


# Users
MSG_USER_ID_INVALID = "ID inválido, deve ser um número."
MSG_USER_NOT_FOUND = "Utilizador não encontrado"
MSG_AGE_RANGE_REQUIRED = "Parâmetros 'min' e 'max' são obrigatórios."
MSG_AGE_RANGE_NOT_NUMERIC = "Parâmetros de idade devem ser números."
MSG_UPDATE_FIELDS_REQUIRED = "Para atualizar, todos os campos (name, email, role, age) são obrigatórios."
MSG_INVALID_TYPES = "Tipos de dados inválidos. Verifique os campos enviados."
MSG_INVALID_ROLE = "Papel inválido. Valores permitidos: admin, user."
MSG_INVALID_AGE = "Idade deve ser um número inteiro não negativo."
MSG_EMAIL_IN_USE = "E-mail já está em uso por outro utilizador."
MSG_USER_UPDATED = "Utilizador atualizado com sucesso!"
MSG_CLEANUP_CONFIRM_REQUIRED = "Parâmetro 'confirm=true' é obrigatório para executar a limpeza."
MSG_CLEANUP_DONE = "Limpeza de utilizadores inativos concluída."

# Posts
MSG_POST_FIELDS_REQUIRED = "É necessário preencher todos os campos"
MSG_TITLE_TOO_SHORT = "O título deve conter pelo menos 3 caracteres"
MSG_CONTENT_TOO_SHORT = "Conteúdo deve ter pelo menos 10 caracteres"
MSG_AUTHOR_NOT_FOUND = "Autor com id {author_id} não foi encontrado."
MSG_POST_CREATED = "Post criado com sucesso!"
MSG_POST_ID_INVALID = "ID do post inválido, deve ser um número."
MSG_POST_NOT_FOUND = "Post não encontrado"
MSG_PROTECTED_FIELD = "Não é permitido alterar o campo '{field}'."
MSG_POST_UPDATED = "Post atualizado com sucesso!"
MSG_USER_ID_HEADER_INVALID = "Header 'User-Id' é obrigatório e deve ser um número."
MSG_POST_NOT_FOUND_FOR_DELETE = "Post não encontrado."
MSG_ACTING_USER_NOT_FOUND = "Utilizador da requisição não encontrado."
MSG_DELETE_FORBIDDEN = "Ação não autorizada. Apenas o autor ou um admin pode apagar este post."
MSG_POST_DELETED = "Post apagado com sucesso."

# Transport
MSG_INVALID_BODY = "Corpo da requisição inválido."


class ServiceError(Exception):
    """Base class for errors raised by a failing gate."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(ServiceError):
    """Malformed, missing or wrongly typed parameters."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ServiceError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class Conflict(ServiceError):
    """A uniqueness constraint would be violated."""

    status_code = status.HTTP_409_CONFLICT


class Forbidden(ServiceError):
    """The acting user may not perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as a ``{"message": ...}`` payload."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        logger.info(
            "%s %s rejected with %s: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("%s %s has an unreadable body: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": MSG_INVALID_BODY},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
