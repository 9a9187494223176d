# backend/projectmanager/services/store.py
from typing import Any, Dict, Generic, Iterable, Optional, Tuple, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from ..utils.logging import db_logger
from .exceptions import ConflictError, NotFoundError, ValidationError
from .pagination import Page, PageParams, apply_filters, apply_sort, paginate

ModelT = TypeVar("ModelT")


class ResourceStore(Generic[ModelT]):
    """CRUD and filtered paging over one SQLAlchemy model.

    Subclasses set the model, which columns must stay unique, which can be
    filtered and sorted on, and override ``_apply`` where incoming fields need
    more than a plain ``setattr`` (hashing, resolving reference ids).
    """

    model: Type[ModelT]
    resource_name: str = "Record"
    plural_name: str = "records"
    unique_fields: Tuple[str, ...] = ()
    filter_fields: Tuple[str, ...] = ()
    sort_fields: Tuple[str, ...] = ("id", "created_at", "updated_at")
    required_fields: Tuple[str, ...] = ()
    # relationships loaded before delete so the removed record can still be serialized
    preload: Tuple[str, ...] = ()

    def __init__(self, db: Session):
        self.db = db

    # -- reads -----------------------------------------------------------

    def query(self) -> Query:
        return self.db.query(self.model)

    def get_by_id(self, record_id: int) -> ModelT:
        record = self.db.get(self.model, record_id)
        if record is None:
            db_logger.warning(f"{self.resource_name} not found", extra={"record_id": record_id})
            raise NotFoundError(f"{self.resource_name} not found.")
        return record

    def list(self, filters: Optional[Dict[str, Optional[str]]] = None,
             params: Optional[PageParams] = None, query: Optional[Query] = None) -> Page:
        params = params or PageParams()
        query = query if query is not None else self.query()

        columns = {
            getattr(self.model, name): value
            for name, value in (filters or {}).items()
            if name in self.filter_fields
        }
        query = apply_filters(query, columns)
        sortable = {name: getattr(self.model, name) for name in self.sort_fields}
        query = apply_sort(query, params.sort, sortable, default=self.model.id)
        return paginate(query, params, resource=self.plural_name)

    # -- writes ----------------------------------------------------------

    def create(self, fields: Dict[str, Any]) -> ModelT:
        self.ensure_unique(fields)
        record = self.model()
        self._apply(record, fields)
        self.db.add(record)
        self.commit()
        self.db.refresh(record)

        db_logger.info(f"{self.resource_name} created", extra={"record_id": record.id})
        return record

    def update(self, record_id: int, fields: Dict[str, Any]) -> ModelT:
        """Field-level merge: only keys present in ``fields`` are written"""
        self.ensure_present(fields)
        record = self.get_by_id(record_id)
        self.ensure_unique(fields, exclude_id=record.id)
        self._apply(record, fields)
        self.commit()
        self.db.refresh(record)

        db_logger.info(f"{self.resource_name} updated", extra={
            "record_id": record.id,
            "fields": sorted(fields.keys())
        })
        return record

    def delete(self, record_id: int) -> ModelT:
        record = self.get_by_id(record_id)
        self.remove(record)
        return record

    def remove(self, record: ModelT) -> None:
        record_id = record.id
        for name in self.preload:
            getattr(record, name)
        self._before_delete(record)
        self.db.delete(record)
        self.commit()
        db_logger.info(f"{self.resource_name} deleted", extra={"record_id": record_id})

    # -- helpers ---------------------------------------------------------

    def ensure_present(self, fields: Dict[str, Any]) -> None:
        for name in self.required_fields:
            if name in fields and fields[name] is None:
                raise ValidationError(f"{_label(name).capitalize()} cannot be empty.")

    def ensure_unique(self, fields: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        for name in self.unique_fields:
            value = fields.get(name)
            if value is None:
                continue
            query = self.query().filter(getattr(self.model, name) == value)
            if exclude_id is not None:
                query = query.filter(self.model.id != exclude_id)
            if query.first() is not None:
                raise ConflictError(
                    f"{self.resource_name} with given {_label(name)} already exists."
                )

    def commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            db_logger.warning(f"Integrity error on {self.resource_name}", extra={"error": str(e.orig)})
            raise ConflictError(f"{self.resource_name} violates a uniqueness constraint.") from e
        except Exception:
            self.db.rollback()
            raise

    def resolve_many(self, model, ids: Iterable[int], label: str) -> list:
        """Load every referenced row or raise NotFoundError naming the first missing id"""
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        rows = self.db.query(model).filter(model.id.in_(ids)).all()
        found = {row.id: row for row in rows}
        for record_id in ids:
            if record_id not in found:
                raise NotFoundError(f"{label} {record_id} not found.")
        return [found[record_id] for record_id in ids]

    def resolve_one(self, model, record_id: Optional[int], label: str):
        if record_id is None:
            return None
        row = self.db.get(model, record_id)
        if row is None:
            raise NotFoundError(f"{label} {record_id} not found.")
        return row

    def _apply(self, record: ModelT, fields: Dict[str, Any]) -> None:
        for name, value in fields.items():
            setattr(record, name, value)

    def _before_delete(self, record: ModelT) -> None:
        pass


def _label(field_name: str) -> str:
    return field_name.replace("_", " ")
