from typing import Optional


class AppError(Exception):
    """Base class for all application-level errors."""
    pass


class DomainError(AppError):
    """Base for domain logic errors."""
    pass

class InvalidResponseError(DomainError):
    """The API answered 2xx but the body is missing what the check needs."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class MissingSettingError(DomainError):
    def __init__(self, name: str):
        self.name = name
        self.message = f"Missing required value '{name}' (pass it explicitly or set it in the environment)."
        super().__init__(self.message)



class InfrastructureError(AppError):
    """Base for infrastructure-related errors (DB, API, etc)."""
    pass

class VertexAPIError(InfrastructureError):
    """Non-2xx answer from Vertex. `message` is the final, user facing reason."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(self.message)
