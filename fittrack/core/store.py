"""
Document store access.

Services never talk to Firestore directly; they take a ``DocumentStore`` so
the backing client can be swapped (Firestore in production, an in-memory
store in tests). Documents are plain dicts shaped ``{"id": ..., **fields}``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from google.cloud.firestore import FieldFilter

# (field, op, value), e.g. ("nutritionPlanId", "==", plan_id) or ("date", ">=", "2025-01-06")
Predicate = Tuple[str, str, Any]

SUPPORTED_OPERATORS = {"==", "!=", "<", "<=", ">", ">=", "in"}


class DocumentNotFoundError(LookupError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"Document {doc_id} not found in {collection}")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore(Protocol):
    def list_documents(
        self, collection: str, filters: Optional[Sequence[Predicate]] = None
    ) -> List[Dict[str, Any]]: ...

    def get_document(self, collection: str, doc_id: str) -> Dict[str, Any]: ...

    def create_document(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def update_document(
        self, collection: str, doc_id: str, data: Dict[str, Any]
    ) -> Dict[str, Any]: ...

    def delete_document(self, collection: str, doc_id: str) -> None: ...


class FirestoreDocumentStore:
    """DocumentStore backed by a ``google.cloud.firestore.Client``."""

    def __init__(self, db):
        self.db = db

    def list_documents(self, collection, filters=None):
        q = self.db.collection(collection)
        for field, op, value in filters or []:
            if op not in SUPPORTED_OPERATORS:
                raise ValueError(f"Unsupported query operator: {op}")
            q = q.where(filter=FieldFilter(field, op, value))

        return [{"id": d.id, **(d.to_dict() or {})} for d in q.stream()]

    def get_document(self, collection, doc_id):
        doc = self.db.collection(collection).document(doc_id).get()
        if not doc.exists:
            raise DocumentNotFoundError(collection, doc_id)
        return {"id": doc.id, **(doc.to_dict() or {})}

    def create_document(self, collection, data):
        ref = self.db.collection(collection).document()
        ref.set(data)
        return {"id": ref.id, **data}

    def update_document(self, collection, doc_id, data):
        ref = self.db.collection(collection).document(doc_id)
        if not ref.get().exists:
            raise DocumentNotFoundError(collection, doc_id)
        ref.update(data)
        return self.get_document(collection, doc_id)

    def delete_document(self, collection, doc_id):
        self.db.collection(collection).document(doc_id).delete()
