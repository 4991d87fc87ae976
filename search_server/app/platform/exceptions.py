class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class CatalogLoadFailed(DomainError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"Catalog load failed for {source}: {reason}")
        self.source = source

class StorageFailed(DomainError):
    def __init__(self, key: str, reason: str):
        super().__init__(f"Storage write failed for {key}: {reason}")
        self.key = key
