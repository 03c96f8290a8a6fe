"""
Service-layer exceptions.

Every exception carries a Portuguese message that can be shown to the user
as is. Transport failures are chained with `raise ... from exc` so the
original httpx error is still in the traceback that gets logged.
"""


class ServiceError(Exception):
    """Base class for failures of an external collaborator."""

    default_message = "Erro inesperado. Tente novamente."

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class InvoiceSourceError(ServiceError):
    default_message = "Erro ao carregar notas fiscais. Tente novamente."


class MemberServiceError(ServiceError):
    default_message = "Erro ao processar a solicitação de membros."


class AuthError(ServiceError):
    default_message = "Erro de autenticação."
