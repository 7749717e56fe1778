"""In-memory stand-in for FirestoreDocumentStore used by the tests."""
import itertools

from fittrack.core.store import DocumentNotFoundError

_OPS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a is not None and a < b,
    "<=": lambda a, b: a is not None and a <= b,
    ">": lambda a, b: a is not None and a > b,
    ">=": lambda a, b: a is not None and a >= b,
    "in": lambda a, b: a in b,
}


class FakeDocumentStore:
    def __init__(self, fail_on=None):
        self.collections = {}
        self.writes = []           # (collection, data) in call order
        self.deleted = []          # (collection, doc_id) in call order
        self._ids = itertools.count(1)
        # (collection, n): raise on the n-th create in that collection
        self.fail_on = fail_on

    def list_documents(self, collection, filters=None):
        out = []
        for doc_id, data in self.collections.get(collection, {}).items():
            if all(_OPS[op](data.get(field), value) for field, op, value in filters or []):
                out.append({"id": doc_id, **data})
        return out

    def get_document(self, collection, doc_id):
        data = self.collections.get(collection, {}).get(doc_id)
        if data is None:
            raise DocumentNotFoundError(collection, doc_id)
        return {"id": doc_id, **data}

    def create_document(self, collection, data):
        if self.fail_on is not None:
            fail_collection, n = self.fail_on
            created = sum(1 for c, _ in self.writes if c == fail_collection)
            if collection == fail_collection and created + 1 == n:
                raise ConnectionError("store unavailable")

        doc_id = f"doc{next(self._ids)}"
        self.collections.setdefault(collection, {})[doc_id] = dict(data)
        self.writes.append((collection, dict(data)))
        return {"id": doc_id, **data}

    def update_document(self, collection, doc_id, data):
        self.get_document(collection, doc_id)
        self.collections[collection][doc_id].update(data)
        return self.get_document(collection, doc_id)

    def delete_document(self, collection, doc_id):
        self.collections.get(collection, {}).pop(doc_id, None)
        self.deleted.append((collection, doc_id))

    def created(self, collection):
        return [data for c, data in self.writes if c == collection]
