"""
Base Data Access Object (DAO) class.

WHY: The DAO pattern separates database operations from business logic,
making the codebase more testable, maintainable, and allowing easier
database technology changes in the future.
"""

from typing import Generic, TypeVar, Type, Optional, List, Any
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from proposal_desk.models.base import Base

# Type variable for model class
ModelType = TypeVar("ModelType", bound=Base)


class BaseDAO(Generic[ModelType]):
    """
    Base Data Access Object providing CRUD operations for all models.

    WHY: Centralizing database operations in DAOs separates data access
    concerns from business logic. Using generics allows type-safe reuse
    across both models.

    Type Parameters:
        ModelType: The SQLAlchemy model class this DAO manages
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize DAO with model class and database session.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with database-generated fields populated

        Raises:
            IntegrityError: If unique constraints are violated
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()  # Flush to get generated fields
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        Retrieve a single record by primary key.

        Args:
            id: Primary key value

        Returns:
            The model instance if found, None otherwise
        """
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self, **filters: Any) -> List[ModelType]:
        """
        Retrieve every record matching equality filters.

        Args:
            **filters: Field name to value filters (e.g., user_id="u-1")

        Returns:
            List of model instances in the engine's natural order
        """
        query = select(self.model)

        for field, value in filters.items():
            if not hasattr(self.model, field):
                raise AttributeError(f"{self.model.__name__} has no field '{field}'")
            query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def apply(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Write field values onto a loaded record.

        WHY: Updating through the loaded instance keeps the session's
        identity map consistent with what was written.

        Args:
            instance: Record previously loaded by this DAO
            **kwargs: Fields to update

        Returns:
            The refreshed instance
        """
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def remove(self, instance: ModelType) -> ModelType:
        """
        Hard-delete a loaded record.

        Args:
            instance: Record previously loaded by this DAO

        Returns:
            The same instance, still carrying its prior field values
        """
        await self.session.delete(instance)
        await self.session.flush()
        return instance

    async def get_by_owner(self, user_id: str) -> List[ModelType]:
        """
        Retrieve records owned by a user.

        WHY: Owner-scoped queries are the whole access model. Enforcing the
        filter in the DAO means a caller cannot forget it.

        Args:
            user_id: Owner identity to filter by

        Returns:
            List of model instances owned by the user

        Raises:
            AttributeError: If the model doesn't have a user_id field
        """
        if not hasattr(self.model, "user_id"):
            raise AttributeError(
                f"{self.model.__name__} is not an owned model (no user_id field)"
            )

        return await self.get_all(user_id=user_id)

    async def get_by_id_and_owner(self, id: str, user_id: str) -> Optional[ModelType]:
        """
        Retrieve a record by ID, ensuring it belongs to the specified user.

        WHY: Critical for preventing cross-user data access (A01: Broken Access
        Control). A record owned by someone else is indistinguishable from a
        missing one.

        Args:
            id: Primary key value
            user_id: User that must own the record

        Returns:
            The model instance if found and owned by the user, None otherwise

        Raises:
            AttributeError: If the model doesn't have a user_id field
        """
        if not hasattr(self.model, "user_id"):
            raise AttributeError(
                f"{self.model.__name__} is not an owned model (no user_id field)"
            )

        result = await self.session.execute(
            select(self.model).where(
                self.model.id == id,
                self.model.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
