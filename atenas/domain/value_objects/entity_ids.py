"""Entity ID value objects"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EntityId:
    value: UUID

    def __post_init__(self):
        if not isinstance(self.value, UUID):
            raise ValueError(f"{type(self).__name__} must be a valid UUID")

    @classmethod
    def generate(cls):
        """Generate a new random UUID"""
        return cls(uuid4())

    @classmethod
    def from_str(cls, uuid_str: str):
        """Create the id from its string representation"""
        try:
            return cls(UUID(str(uuid_str)))
        except (TypeError, ValueError):
            raise ValueError(f"Invalid {cls.__name__}: {uuid_str}")

    def __str__(self) -> str:
        return str(self.value)


class UserId(EntityId):
    pass


class DonationId(EntityId):
    pass


class ProjectId(EntityId):
    pass


class HeadquartersId(EntityId):
    pass


class BeneficiaryId(EntityId):
    pass


class EvaluationId(EntityId):
    pass


class BoldTransactionId(EntityId):
    pass
