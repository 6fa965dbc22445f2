"""
Exceções de Domínio do Painel de Instalações.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    ├── EntityNotFoundError (entidade não existe)
    ├── BusinessRuleViolationError (regra de negócio violada)
    ├── RepositoryError (falha no banco remoto)
    └── IntegrationError (falha em serviço externo: email, storage, n8n)
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(input_dto, contexto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada antes de qualquer requisição ao backend, quando dados
    fornecidos não atendem aos requisitos mínimos.

    Example:
        if not dominio.strip():
            raise ValidationError("Informe o domínio.", field="dominio")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Example:
        instalacao = repo.get_by_id(instalacao_id)
        if not instalacao:
            raise EntityNotFoundError(f"Instalação {instalacao_id} não encontrada")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Example:
        if status_invalido:
            raise BusinessRuleViolationError(
                "Status de destino inválido",
                rule="status_desconhecido"
            )
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class RepositoryError(DomainException):
    """
    Falha ao ler ou gravar no banco remoto.

    Cobre violação de constraint, erro de rede e respostas não-2xx.
    A operação é abortada sem estado parcial.

    Attributes:
        status_code: Status HTTP retornado pelo backend (se houver)
    """

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message, "REPOSITORY_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result


class IntegrationError(DomainException):
    """
    Falha em serviço externo (endpoint de email, storage, n8n).

    Attributes:
        service: Nome do serviço que falhou
        status_code: Status HTTP retornado (se houver)
    """

    def __init__(self, message: str, service: str = None, status_code: int = None):
        self.service = service
        self.status_code = status_code
        super().__init__(message, "INTEGRATION_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.service:
            result["service"] = self.service
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result
