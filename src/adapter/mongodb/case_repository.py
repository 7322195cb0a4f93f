"""MongoDB implementation of CaseRepository."""

from logging import getLogger
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import CASES_COLLECTION_NAME
from domain.model.case import Case, CaseStatus
from domain.model.errors import PersistenceError

logger = getLogger(__name__)

# Case attribute name -> document key
_FIELD_KEYS = {
    'id': '_id',
    'title': 'title',
    'description': 'description',
    'status': 'status',
    'created_by': 'created_by',
    'created_at': 'created_at',
}


class MongoCaseRepository:
    def __init__(self, db: Database):
        self.collection = db[CASES_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for cases collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('created_at', 1)], 'idx_cases_created_at')
            create_index_safe(self.collection, [('created_by', 1)], 'idx_cases_created_by')
            return True
        except Exception as e:
            logger.error("Failed to create cases indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Case:
        """Convert MongoDB document to Case domain model."""
        return Case(
            id=doc['_id'],
            title=doc.get('title'),
            description=doc.get('description'),
            status=CaseStatus(doc.get('status', CaseStatus.IN_PROGRESS.value)),
            created_by=doc.get('created_by'),
            created_at=doc['created_at'],
        )

    def _to_document(self, changes: dict[str, Any]) -> dict[str, Any]:
        doc = {}
        for field_name, value in changes.items():
            if isinstance(value, CaseStatus):
                value = value.value
            doc[_FIELD_KEYS[field_name]] = value
        return doc

    # ── write operations ─────────────────────────────────────

    def save(self, case: Case) -> None:
        """Insert a new case document."""
        doc = self._to_document({
            'id': case.id,
            'title': case.title,
            'description': case.description,
            'status': case.status,
            'created_by': case.created_by,
            'created_at': case.created_at,
        })
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to save case", extra={"caseId": case.id, "error": str(e)})
            raise PersistenceError("Failed to save case") from e

        logger.info("Case saved", extra={"caseId": case.id, "createdBy": case.created_by})

    def update_by_id(self, case_id: str, changes: dict[str, Any]) -> Case | None:
        """Apply ``changes`` atomically and return the updated case."""
        if not changes:
            return self.get_by_id(case_id)

        try:
            doc = self.collection.find_one_and_update(
                {'_id': case_id},
                {'$set': self._to_document(changes)},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update case", extra={"caseId": case_id, "error": str(e)})
            raise PersistenceError("Failed to update case") from e

        if doc is None:
            logger.warning("Case not found for update", extra={"caseId": case_id})
            return None

        logger.info("Case updated", extra={"caseId": case_id, "fields": sorted(changes)})
        return self._to_domain(doc)

    def delete_by_id(self, case_id: str) -> bool:
        """Hard delete a case. Return True if a document was removed."""
        try:
            result = self.collection.delete_one({'_id': case_id})
        except PyMongoError as e:
            logger.error("Failed to delete case", extra={"caseId": case_id, "error": str(e)})
            raise PersistenceError("Failed to delete case") from e

        if result.deleted_count == 0:
            logger.debug("No case to delete", extra={"caseId": case_id})
            return False

        logger.info("Case deleted", extra={"caseId": case_id})
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, case_id: str) -> Case | None:
        """Retrieve case by ID."""
        try:
            doc = self.collection.find_one({'_id': case_id})
        except PyMongoError as e:
            logger.error("Failed to retrieve case", extra={"caseId": case_id, "error": str(e)})
            raise PersistenceError("Failed to retrieve case") from e
        return self._to_domain(doc) if doc else None

    def find_all(self) -> list[Case]:
        """List every case, oldest first."""
        try:
            docs = list(self.collection.find({}).sort('created_at', 1))
        except PyMongoError as e:
            logger.error("Failed to list cases", extra={"error": str(e)})
            raise PersistenceError("Failed to list cases") from e

        logger.info("Listed cases", extra={"count": len(docs)})
        return [self._to_domain(doc) for doc in docs]
