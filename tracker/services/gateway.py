"""Owner-scoped access to every persisted entity.

The gateway is built per request from the request's session and the caller's
resolved identity. All of its reads filter on ``owner_id`` as well as the
entity key, so a row owned by someone else is indistinguishable from a row
that does not exist. Writes repeat the same filter, and each confirmed write
is committed in the same transaction as exactly one audit log entry.
"""

from contextlib import contextmanager
import functools
import logging
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from tracker.core.errors import InternalError, InvalidRequest, StorageError, TrackerError
from tracker.services import audit
from tracker.services.resources import ResourceConfig, get_resource, plain

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = ("id", "owner_id")


def _boundary(method):
    """Map anything that is not already a TrackerError onto InternalError."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except TrackerError:
            raise
        except Exception as exc:
            self.db.rollback()
            logger.exception("Unexpected failure in gateway.%s", method.__name__)
            raise InternalError() from exc

    return wrapper


class OwnedResourceGateway:
    def __init__(self, db: Session, owner_id: str):
        self.db = db
        self.owner_id = owner_id
        self._batch = False

    def scoped(self, resource: ResourceConfig) -> Query:
        model = resource.model
        return self.db.query(model).filter(model.owner_id == self.owner_id)

    def owned(self, resource: ResourceConfig, entity_id: Any) -> Query:
        model = resource.model
        query = self.scoped(resource)
        for name, value in resource.key_values(entity_id).items():
            query = query.filter(getattr(model, name) == value)
        return query

    def find(self, resource: ResourceConfig, entity_id: Any) -> Optional[Any]:
        return self.owned(resource, entity_id).first()

    @_boundary
    def get(self, resource: ResourceConfig, entity_id: Any) -> Any:
        obj = self.find(resource, entity_id)
        if obj is None:
            logger.debug("%s %s not visible to owner %s", resource.entity, entity_id, self.owner_id)
            raise resource.not_found()
        return obj

    @_boundary
    def list(self, resource: ResourceConfig, **filters: Any) -> List[Any]:
        model = resource.model
        query = self.scoped(resource)
        for name, value in filters.items():
            if value is not None:
                query = query.filter(getattr(model, name) == value)
        for name in resource.order_by:
            column = getattr(model, name.lstrip("-"))
            query = query.order_by(column.desc() if name.startswith("-") else column)
        return query.all()

    @_boundary
    def create(
        self,
        resource: ResourceConfig,
        data: Dict[str, Any],
        action: str = audit.CREATE,
        extra_meta: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return self._insert(resource, self._writable(data), action, extra_meta)

    @_boundary
    def update(
        self,
        resource: ResourceConfig,
        entity_id: Any,
        changes: Dict[str, Any],
        action: str = audit.UPDATE,
        annotate=None,
    ) -> Any:
        obj = self.get(resource, entity_id)
        values = self._writable(changes)
        if not values:
            raise InvalidRequest("No changes provided")
        return self._modify(resource, obj, values, action, annotate)

    @_boundary
    def upsert(self, resource: ResourceConfig, data: Dict[str, Any], action: str = audit.UPDATE) -> Any:
        values = self._writable(data)
        existing = self.find(resource, values)
        if existing is None:
            return self._insert(resource, values, action)
        return self._modify(resource, existing, values, action)

    @_boundary
    def delete(self, resource: ResourceConfig, entity_id: Any, extra_meta: Optional[Dict[str, Any]] = None) -> None:
        obj = self.get(resource, entity_id)
        for guard in resource.delete_guards:
            guard(self, obj)

        audit_id = resource.audit_id(obj)
        meta = resource.snapshot(obj)
        meta.update(extra_meta or {})
        with self._write("delete", resource.entity, resource.noun):
            deleted = self.owned(resource, entity_id).delete(synchronize_session=False)
            if not deleted:
                raise resource.not_found()
            audit.record(self.db, self.owner_id, audit.DELETE, resource.entity, audit_id, meta)
        logger.info("Deleted %s %s for owner %s", resource.entity, audit_id, self.owner_id)

    def _writable(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {name: value for name, value in data.items() if name not in PROTECTED_FIELDS}

    def _insert(
        self,
        resource: ResourceConfig,
        values: Dict[str, Any],
        action: str,
        extra_meta: Optional[Dict[str, Any]] = None,
    ) -> Any:
        for validator in resource.validators:
            validator(self, values, None)
        self._check_parents(resource, values)
        self._check_unique(resource, values)

        obj = resource.model(**values, owner_id=self.owner_id)
        with self._write("create", resource.entity, resource.noun):
            self.db.add(obj)
            self.db.flush()
            audit_id = resource.audit_id(obj)
            meta = resource.snapshot(obj)
            meta.update(extra_meta or {})
            audit.record(self.db, self.owner_id, action, resource.entity, audit_id, meta)
        self.db.refresh(obj)
        logger.info("Created %s %s for owner %s", resource.entity, audit_id, self.owner_id)
        return obj

    def _modify(self, resource: ResourceConfig, obj: Any, values: Dict[str, Any], action: str, annotate=None) -> Any:
        for validator in resource.validators:
            validator(self, values, obj)
        self._check_parents(resource, values)
        self._check_unique(resource, values, exclude=obj)

        key = {name: getattr(obj, name) for name in resource.key_fields}
        changes = {name: value for name, value in values.items() if name not in resource.key_fields}
        audit_id = resource.audit_id(obj)
        meta = resource.snapshot(obj)
        meta["changes"] = {name: plain(value) for name, value in changes.items()}
        if annotate is not None:
            meta.update(annotate(obj, changes))

        with self._write("update", resource.entity, resource.noun):
            if changes:
                updated = self.owned(resource, key).update(changes, synchronize_session=False)
                if not updated:
                    raise resource.not_found()
            audit.record(self.db, self.owner_id, action, resource.entity, audit_id, meta)
        self.db.refresh(obj)
        logger.info("%s %s %s for owner %s", action, resource.entity, audit_id, self.owner_id)
        return obj

    def _check_parents(self, resource: ResourceConfig, values: Dict[str, Any]) -> None:
        for field, parent_key in resource.parents:
            parent_id = values.get(field)
            if parent_id is None:
                continue
            parent = get_resource(parent_key)
            if self.find(parent, parent_id) is None:
                raise parent.not_found()

    def _check_unique(self, resource: ResourceConfig, values: Dict[str, Any], exclude: Any = None) -> None:
        model = resource.model
        for field, label in resource.unique_fields:
            value = values.get(field)
            if value is None:
                continue
            query = self.scoped(resource).filter(getattr(model, field) == value)
            if exclude is not None:
                query = query.filter(model.id != exclude.id)
            if query.first() is not None:
                raise InvalidRequest(f"A {resource.noun} with this {label} already exists")

    @contextmanager
    def atomic(self, verb: str, entity: str, noun: str) -> Iterator[None]:
        """Run several gateway writes as one transaction.

        Writes made inside the block only flush; the block commits once at the
        end, or rolls every row and audit entry back together.
        """
        if self._batch:
            yield
            return
        with self._write(verb, entity, noun):
            self._batch = True
            try:
                yield
            finally:
                self._batch = False
        logger.info("Committed batch %s of %s for owner %s", verb, entity, self.owner_id)

    @contextmanager
    def _write(self, verb: str, entity: str, noun: str) -> Iterator[None]:
        try:
            yield
            if self._batch:
                self.db.flush()
            else:
                self.db.commit()
        except TrackerError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to %s %s for owner %s", verb, entity, self.owner_id)
            raise StorageError(f"Failed to {verb} {noun}") from exc
        except Exception:
            self.db.rollback()
            raise
