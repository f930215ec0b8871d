"""
Interfaces base para repositorios (Data Access Layer)

Estos protocols definen el contrato de persistencia por colección,
siguiendo el patrón Repository y el Dependency Inversion Principle.
"""

from abc import abstractmethod
from typing import Any, Generic, List, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")  # Entity type
ID = TypeVar("ID")  # ID type (int, str, UUID, etc.)


@runtime_checkable
class IRepository(Protocol, Generic[T, ID]):
    """
    Interface base para todos los repositorios.

    Las implementaciones no hacen commit: la sesión del request confirma
    todos los cambios juntos, de modo que un caso de uso se aplica completo
    o no se aplica.

    Type Parameters:
        T: Tipo de entidad que maneja el repositorio
        ID: Tipo de identificador de la entidad

    Example:
        ```python
        orders = await order_repository.find(user_id="u-1", status=OrderStatus.PENDING)
        pending = await order_repository.count(status=OrderStatus.PENDING)
        ```
    """

    @abstractmethod
    async def get(self, id: ID) -> Optional[T]:
        """
        Encuentra una entidad por su ID.

        Returns:
            Entidad encontrada o None si no existe
        """
        ...

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> List[T]:
        """
        Obtiene todas las entidades con paginación, más recientes primero.
        """
        ...

    @abstractmethod
    async def find(self, **criteria: Any) -> List[T]:
        """
        Filtra entidades por igualdad de atributos.

        Args:
            **criteria: Pares atributo-valor que deben coincidir
        """
        ...

    @abstractmethod
    async def create(self, entity: T) -> T:
        """
        Persiste una entidad nueva.

        Returns:
            Entidad guardada con su ID asignado

        Raises:
            DuplicateEntityException: si viola un índice único
        """
        ...

    @abstractmethod
    async def update(self, entity: T) -> T:
        """
        Reemplaza el estado persistido de una entidad existente.

        Raises:
            EntityNotFoundException: si la entidad ya no existe
        """
        ...

    @abstractmethod
    async def delete(self, id: ID) -> bool:
        """
        Elimina una entidad por su ID.

        Returns:
            True si se eliminó, False si no existía
        """
        ...

    @abstractmethod
    async def count(self, **criteria: Any) -> int:
        """
        Cuenta las entidades que cumplen los criterios.
        """
        ...
