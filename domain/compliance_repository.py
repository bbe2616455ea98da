from abc import ABC, abstractmethod
from typing import Optional

from backend.schemas import (
    CompanyIn,
    CompanyOut,
    EvidenceIn,
    EvidenceOut,
    FileIn,
    FileOut,
    FrameworkIn,
    FrameworkOut,
    RelationIn,
    RelationOut,
    SchemeIn,
    SchemeOut,
)


class NotFoundError(LookupError):
    """Raised when a referenced record does not exist."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} '{key}' not found")
        self.kind = kind
        self.key = key


class ComplianceRepository(ABC):
    """Data access for companies, the scheme catalog and evidence.

    Request handlers receive an implementation through dependency injection;
    nothing outside ``data/`` talks to the ORM directly.
    """

    # Companies
    @abstractmethod
    async def list_companies(self) -> list[CompanyOut]:
        """Newest first."""

    @abstractmethod
    async def get_company(self, company_id: str) -> Optional[CompanyOut]:
        pass

    @abstractmethod
    async def create_company(self, data: CompanyIn) -> CompanyOut:
        pass

    @abstractmethod
    async def update_company(self, company_id: str, data: CompanyIn) -> CompanyOut:
        """Replace every editable field. Raises NotFoundError."""

    @abstractmethod
    async def delete_company(self, company_id: str) -> None:
        """Raises NotFoundError."""

    # Schemes
    @abstractmethod
    async def list_schemes(self) -> list[SchemeOut]:
        """Ordered by category, then title."""

    @abstractmethod
    async def get_scheme(self, code: str) -> Optional[SchemeOut]:
        pass

    @abstractmethod
    async def upsert_scheme(self, data: SchemeIn) -> SchemeOut:
        pass

    @abstractmethod
    async def count_schemes(self) -> int:
        pass

    # Relations
    @abstractmethod
    async def list_relations(self) -> list[RelationOut]:
        pass

    @abstractmethod
    async def create_relation(self, data: RelationIn) -> RelationOut:
        """Idempotent on (from, to, type). Raises NotFoundError for unknown codes."""

    # Frameworks
    @abstractmethod
    async def list_frameworks(self) -> list[FrameworkOut]:
        pass

    @abstractmethod
    async def create_framework(self, data: FrameworkIn) -> FrameworkOut:
        pass

    # Files & evidence
    @abstractmethod
    async def list_files(self) -> list[FileOut]:
        pass

    @abstractmethod
    async def create_file(self, data: FileIn) -> FileOut:
        pass

    @abstractmethod
    async def list_evidence(self) -> list[EvidenceOut]:
        pass

    @abstractmethod
    async def create_evidence(self, data: EvidenceIn) -> EvidenceOut:
        """Raises NotFoundError if the company, requirement or file is unknown."""
