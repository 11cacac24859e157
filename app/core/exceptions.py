"""
Exceções HTTP personalizadas para a API.
"""

from fastapi import HTTPException, status


class NotFoundException(HTTPException):
    """Recurso não encontrado (404)."""

    def __init__(self, resource: str = "Recurso", detail: str | None = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} não encontrado",
        )


class ConflictException(HTTPException):
    """Conflito de dados (409) — ex: código de forma de pagamento duplicado."""

    def __init__(self, detail: str = "O recurso já existe"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class ValidationException(HTTPException):
    """Erro de validação de negócio (422)."""

    def __init__(self, detail: str = "Erro de validação"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )
