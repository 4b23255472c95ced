"""
ProjectHub Backend — Generic Entity Repository
================================================

What:  The persistence pattern shared by User, ActiveToken, Project and
       ProjectFile: lookup by id, filtered/sorted/paginated listing with a
       consistent total, create, change-set update, delete-by-id.
How:   Subclasses declare their model, sortable fields and filterable
       fields; this base builds parameterized SQLAlchemy statements.
Who:   Called by route handlers with the request's AsyncSession.

Failure Semantics:
    Reads fail soft:   a store error in find_by_id / find_all is logged and
                       surfaces as None / an empty page.
    Writes fail hard:  a store error in create / update / delete_by_id is
                       rolled back and re-raised as DatabaseError (→ 500).
    Constraint hits:   a foreign key to a missing row or a duplicate unique
                       value is re-raised as ValidationError (→ 400).

Change-sets:
    update(entity, changes) compares every proposed value with the current
    one (value equality) and only writes the fields that differ. An empty
    diff performs no store call at all.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from projecthub.database import MAX_ID, MIN_ID, Base
from projecthub.exceptions import DatabaseError, ValidationError
from projecthub.pagination import Pagination

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

VALID_ORDERS = ("asc", "desc")

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def id_in_range(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


def parse_int_filter(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValidationError(
            message=f"Invalid {name} filter. Must be an integer.",
            field=name,
        )
    if not id_in_range(value):
        raise ValidationError(
            message=f"Invalid {name} filter. Value is out of range.",
            field=name,
        )
    return value


def parse_bool_filter(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValidationError(
        message=f"Invalid {name} filter. Must be true or false.",
        field=name,
    )


@dataclass(frozen=True)
class FilterField:
    """
    A query-string filter.

    attribute: ORM attribute the filter applies to
    kind:      "int" / "bool" compare for equality, "contains" is a
               case-insensitive substring match
    nullable:  the literal value "null" matches rows where the column IS NULL
    """
    attribute: str
    kind: str = "int"
    nullable: bool = False


@dataclass
class Page(Generic[ModelT]):
    items: List[ModelT] = field(default_factory=list)
    total: int = 0


class Repository(Generic[ModelT]):
    """
    Base repository. Subclasses set:

        model:        the ORM class
        resource:     human name used in log lines and 404 messages
        sort_fields:  public sort name → ORM attribute (first entry is the default)
        filter_fields: public filter name → FilterField
    """

    model: ClassVar[Type[Base]]
    resource: ClassVar[str] = "resource"
    sort_fields: ClassVar[Dict[str, str]] = {}
    filter_fields: ClassVar[Dict[str, FilterField]] = {}

    _PARSERS: ClassVar[Dict[str, Callable[[str, str], Any]]] = {
        "int": parse_int_filter,
        "bool": parse_bool_filter,
    }

    # ── Query building ────────────────────────────────────────────────────

    @property
    def default_sort(self) -> str:
        return next(iter(self.sort_fields))

    def resolve_ordering(self, sort: Optional[str], order: Optional[str]) -> Tuple[Any, str]:
        """
        Validate sort/order against the allow-lists.

        Raises:
            ValidationError: unknown sort field or order direction (→ 400)
        """
        order = order if order is not None else "asc"
        if order not in VALID_ORDERS:
            raise ValidationError(
                message='Invalid order parameter. Must be "asc" or "desc".',
                field="order",
            )

        sort = sort if sort is not None else self.default_sort
        if sort not in self.sort_fields:
            raise ValidationError(
                message=f"Invalid sort parameter. Must be one of {', '.join(self.sort_fields)}.",
                field="sort",
            )
        return getattr(self.model, self.sort_fields[sort]), order

    def build_conditions(self, filters: Optional[Mapping[str, Optional[str]]]) -> List[Any]:
        """Turn raw query-string filters into WHERE clauses. Unknown keys are ignored."""
        conditions: List[Any] = []
        for name, raw in (filters or {}).items():
            filter_field = self.filter_fields.get(name)
            if filter_field is None or raw is None or raw == "":
                continue
            column = getattr(self.model, filter_field.attribute)
            if filter_field.nullable and raw.strip().lower() == "null":
                conditions.append(column.is_(None))
            elif filter_field.kind == "contains":
                conditions.append(func.lower(column).contains(raw.lower(), autoescape=True))
            else:
                conditions.append(column == self._PARSERS[filter_field.kind](name, raw))
        return conditions

    # ── Reads (fail soft) ─────────────────────────────────────────────────

    async def find_by_id(self, db: AsyncSession, entity_id: int) -> Optional[ModelT]:
        """Return the entity, or None when it does not exist or the read failed."""
        try:
            result = await db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error fetching %s with ID %s: %s", self.resource, entity_id, str(e))
            return None

    async def find_all(
        self,
        db: AsyncSession,
        pagination: Pagination,
        filters: Optional[Mapping[str, Optional[str]]] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> Page[ModelT]:
        """
        One page of entities plus the total matching the same filters.

        Sort, order and filters are validated before any statement is built,
        so a bad request never reaches the store.

        Raises:
            ValidationError: invalid sort, order or filter value
        """
        sort_column, direction = self.resolve_ordering(sort, order)
        conditions = self.build_conditions(filters)

        ordering = [asc(sort_column) if direction == "asc" else desc(sort_column)]
        if sort_column.key != "id":
            ordering.append(asc(self.model.id))

        query = select(self.model)
        count_query = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(*conditions)
            count_query = count_query.where(*conditions)
        query = query.order_by(*ordering).limit(pagination.limit).offset(pagination.offset)

        try:
            result = await db.execute(query)
            items = list(result.scalars().all())

            count_result = await db.execute(count_query)
            total = count_result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Error fetching %s list: %s", self.resource, str(e), exc_info=True)
            return Page()

        return Page(items=items, total=total)

    # ── Writes (fail hard) ────────────────────────────────────────────────

    async def _commit(self, db: AsyncSession, action: str, context: Dict[str, Any]) -> None:
        try:
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(
                "Constraint violated %s %s: %s | Context: %s",
                action, self.resource, str(e.orig), context,
            )
            raise ValidationError(
                message=f"Cannot save {self.resource}: a referenced record does not exist or a unique value is already taken.",
                context={**context, "original_error": type(e).__name__},
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error %s %s: %s | Context: %s", action, self.resource, str(e), context)
            raise DatabaseError(
                context={**context, "original_error": type(e).__name__},
            )

    async def create(self, db: AsyncSession, **fields: Any) -> ModelT:
        """INSERT a new row; the store assigns the id."""
        entity = self.model(**fields)
        db.add(entity)
        await self._commit(db, "creating", {"fields": list(fields)})
        logger.info("Created %s %s", self.resource, entity.id)
        return entity

    @staticmethod
    def diff_changes(entity: ModelT, changes: Mapping[str, Any]) -> Dict[str, Any]:
        """Fields of `changes` whose value differs from the entity's current value."""
        return {
            name: value
            for name, value in changes.items()
            if getattr(entity, name) != value
        }

    async def update(
        self, db: AsyncSession, entity: ModelT, changes: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """
        Apply a change-set to a persisted entity.

        Returns:
            The fields that were actually written. Empty means nothing
            differed and the store was not touched.
        """
        diff = self.diff_changes(entity, changes)
        if not diff:
            return diff

        for name, value in diff.items():
            setattr(entity, name, value)
        await self._commit(db, "updating", {"id": entity.id, "fields": list(diff)})
        logger.info("Updated %s %s: %s", self.resource, entity.id, ", ".join(diff))
        return diff

    async def delete_by_id(self, db: AsyncSession, entity_id: int) -> bool:
        """
        Delete a row after confirming it exists.

        Returns:
            False when no such row exists, True once deleted.
        """
        try:
            result = await db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            entity = result.scalar_one_or_none()
            if entity is None:
                return False
            await db.delete(entity)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error deleting %s %s: %s", self.resource, entity_id, str(e))
            raise DatabaseError(context={"id": entity_id, "original_error": type(e).__name__})

        await self._commit(db, "deleting", {"id": entity_id})
        logger.info("Deleted %s %s", self.resource, entity_id)
        return True
