"""
Port interfaces (ABCs) for the budgeting bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sharedbudget.domain.budgeting.entities import Budget, Group, Transaction


class GroupRepository(ABC):
    """Port for persisting groups together with their embedded profiles."""

    @abstractmethod
    def list_all(self) -> list[Group]:
        """Return every group. An empty list when none exist."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, group_id: str) -> Optional[Group]:
        """Return a group by id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def add(self, group: Group) -> Group:
        """Insert a new group.

        Assigns ids to the group and to every profile lacking one.

        Returns:
            The stored group, with ids and timestamps set.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, group: Group) -> Optional[Group]:
        """Overwrite an existing group document.

        Returns:
            The stored group, or None if it no longer exists.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, group_id: str) -> bool:
        """Delete a group. Returns False if nothing was deleted."""
        raise NotImplementedError


class TransactionRepository(ABC):
    """Port for persisting profile transactions."""

    @abstractmethod
    def list(
        self, group_id: Optional[str] = None, profile_id: Optional[str] = None
    ) -> list[Transaction]:
        """Return transactions, optionally filtered by group and/or profile."""
        raise NotImplementedError

    @abstractmethod
    def add(self, transaction: Transaction) -> Transaction:
        """Insert a transaction and return it with its id set."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, transaction_id: str) -> bool:
        """Delete one transaction. Returns False if nothing was deleted."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_group(self, group_id: str) -> int:
        """Delete every transaction of a group. Returns the count."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_profile(self, profile_id: str) -> int:
        """Delete every transaction of a profile. Returns the count."""
        raise NotImplementedError


class BudgetRepository(ABC):
    """Port for persisting profile budgets."""

    @abstractmethod
    def list(
        self, group_id: Optional[str] = None, profile_id: Optional[str] = None
    ) -> list[Budget]:
        """Return budgets, optionally filtered by group and/or profile."""
        raise NotImplementedError

    @abstractmethod
    def add(self, budget: Budget) -> Budget:
        """Insert a budget and return it with its id set."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, budget_id: str) -> bool:
        """Delete one budget. Returns False if nothing was deleted."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_group(self, group_id: str) -> int:
        """Delete every budget of a group. Returns the count."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_profile(self, profile_id: str) -> int:
        """Delete every budget of a profile. Returns the count."""
        raise NotImplementedError
