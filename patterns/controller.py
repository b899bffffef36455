"""Generic CRUD controller: validate, call the repository, map, log, respond.

One controller class covers every entity. A concrete controller only names
its entity, DTO types and repository::

    class AuthorsController(CrudController[Author]):
        name = "Authors"
        entity = Author
        read_dto = AuthorDTO
        create_dto = AuthorCreateDTO
        update_dto = AuthorUpdateDTO

Every action returns a ControllerResult (status code + optional body) and
never raises: anything unexpected is logged in full and answered with the
generic 500 message. Each request logs an "attempt" entry followed by
exactly one outcome entry.
"""

from dataclasses import dataclass
from typing import Any, Generic, Protocol, Sequence, TypeVar

from patterns.mapper import Mapper
from patterns.repository import RepositoryResult

GENERIC_ERROR_MESSAGE = "Something went wrong. Please contact the administrator"

EntityT = TypeVar("EntityT")


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------

class Repository(Protocol[EntityT]):
    async def find_all(self) -> Sequence[EntityT]: ...

    async def find_by_id(self, item_id: int) -> EntityT | None: ...

    async def is_exists(self, item_id: int) -> bool: ...

    async def create(self, entity: EntityT) -> RepositoryResult: ...

    async def update(self, entity: EntityT) -> RepositoryResult: ...

    async def delete(self, entity: EntityT) -> RepositoryResult: ...


class Logger(Protocol):
    def log_info(self, message: str) -> None: ...

    def log_warn(self, message: str) -> None: ...

    def log_error(self, message: str) -> None: ...


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ControllerResult:
    """Status code plus an optional JSON-able (or plain string) body."""

    status_code: int
    body: Any = None

    @classmethod
    def ok(cls, body: Any) -> "ControllerResult":
        return cls(200, body)

    @classmethod
    def created(cls, body: Any) -> "ControllerResult":
        return cls(201, body)

    @classmethod
    def no_content(cls) -> "ControllerResult":
        return cls(204)

    @classmethod
    def bad_request(cls, errors: list[dict] | None = None) -> "ControllerResult":
        return cls(400, {"errors": errors} if errors else None)

    @classmethod
    def not_found(cls) -> "ControllerResult":
        return cls(404)

    @classmethod
    def internal_error(cls) -> "ControllerResult":
        return cls(500, GENERIC_ERROR_MESSAGE)


def _field_error(field: str, message: str) -> list[dict]:
    return [{"field": field, "message": message, "type": "value_error"}]


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------

class CrudController(Generic[EntityT]):
    """List / get / create / update / delete over one repository."""

    name: str
    entity: type
    read_dto: type
    create_dto: type
    update_dto: type

    def __init__(self, repository: Repository[EntityT], logger: Logger, mapper: Mapper):
        self.repository = repository
        self.logger = logger
        self.mapper = mapper

    def _location(self, action: str) -> str:
        return f"{self.name} - {action}"

    def _internal_error(self, message: str) -> ControllerResult:
        self.logger.log_error(message)
        return ControllerResult.internal_error()

    def _to_response(self, entity: EntityT) -> Any:
        return self.mapper.map(entity, self.read_dto).to_response()

    # -- Actions --

    async def list(self) -> ControllerResult:
        location = self._location("List")
        try:
            self.logger.log_info(f"{location}: Attempting call")
            entities = await self.repository.find_all()
            response = [dto.to_response() for dto in self.mapper.map_all(entities, self.read_dto)]
            self.logger.log_info(f"{location}: Successful, {len(response)} records")
            return ControllerResult.ok(response)
        except Exception as e:
            return self._internal_error(f"{location}: {e!r}")

    async def get(self, item_id: int) -> ControllerResult:
        location = self._location("Get")
        try:
            self.logger.log_info(f"{location}: Attempting call with id: {item_id}")
            entity = await self.repository.find_by_id(item_id)
            if entity is None:
                self.logger.log_warn(f"{location}: Failed to retrieve record with id: {item_id}")
                return ControllerResult.not_found()
            response = self._to_response(entity)
            self.logger.log_info(f"{location}: Successfully got record with id: {item_id}")
            return ControllerResult.ok(response)
        except Exception as e:
            return self._internal_error(f"{location}: {e!r}")

    async def create(self, payload: Any) -> ControllerResult:
        location = self._location("Create")
        try:
            self.logger.log_info(f"{location}: Create attempted")
            if payload is None:
                self.logger.log_warn(f"{location}: Empty request submitted")
                return ControllerResult.bad_request(_field_error("body", "Request body is required"))
            dto, errors = self.create_dto.validate_payload(payload)
            if errors:
                self.logger.log_warn(f"{location}: Data was incomplete: {errors}")
                return ControllerResult.bad_request(errors)

            entity = self.mapper.map(dto, self.entity)
            result = await self.repository.create(entity)
            if not result:
                return self._internal_error(f"{location}: Creation failed: {result.error}")

            response = self._to_response(entity)
            self.logger.log_info(f"{location}: Creation successful: {entity!r}")
            return ControllerResult.created(response)
        except Exception as e:
            return self._internal_error(f"{location}: {e!r}")

    async def update(self, item_id: int, payload: Any) -> ControllerResult:
        location = self._location("Update")
        try:
            self.logger.log_info(f"{location}: Update attempted with id: {item_id}")
            if item_id < 1 or payload is None:
                self.logger.log_warn(f"{location}: Update failed with bad data - id: {item_id}")
                return ControllerResult.bad_request(
                    _field_error("id", "Id must be positive") if item_id < 1
                    else _field_error("body", "Request body is required")
                )
            dto, errors = self.update_dto.validate_payload(payload)
            if errors:
                self.logger.log_warn(f"{location}: Data was incomplete: {errors}")
                return ControllerResult.bad_request(errors)
            if dto.id != item_id:
                self.logger.log_warn(
                    f"{location}: Path id {item_id} does not match body id {dto.id}"
                )
                return ControllerResult.bad_request(
                    _field_error("id", "Body id must match the path id")
                )

            if not await self.repository.is_exists(item_id):
                self.logger.log_warn(f"{location}: Failed to find record with id: {item_id}")
                return ControllerResult.not_found()

            entity = self.mapper.map(dto, self.entity)
            result = await self.repository.update(entity)
            if not result:
                return self._internal_error(
                    f"{location}: Failed to update id: {item_id}: {result.error}"
                )
            self.logger.log_info(f"{location}: Record with id: {item_id} successfully updated")
            return ControllerResult.no_content()
        except Exception as e:
            return self._internal_error(f"{location}: {e!r}")

    async def delete(self, item_id: int) -> ControllerResult:
        location = self._location("Delete")
        try:
            self.logger.log_info(f"{location}: Attempting to delete record with id: {item_id}")
            if item_id < 1:
                self.logger.log_warn(f"{location}: Bad data - id: {item_id}")
                return ControllerResult.bad_request(_field_error("id", "Id must be positive"))
            if not await self.repository.is_exists(item_id):
                self.logger.log_warn(f"{location}: Record with id: {item_id} was not found")
                return ControllerResult.not_found()

            # delete works on the loaded entity, not on the bare id
            entity = await self.repository.find_by_id(item_id)
            result = await self.repository.delete(entity)
            if not result:
                return self._internal_error(
                    f"{location}: Failed to delete id: {item_id}: {result.error}"
                )
            self.logger.log_info(f"{location}: Record with id: {item_id} deleted")
            return ControllerResult.no_content()
        except Exception as e:
            return self._internal_error(f"{location}: {e!r}")
