from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from bson import ObjectId

from app.pipelines.pagination import PageRequest, QueryPlan, paginate


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ToggleResult:
    """(actor, target) 쌍의 토글 결과. active=True면 관계가 새로 생성됨"""
    active: bool
    document_id: Optional[ObjectId] = None


class BaseRepository:
    """컬렉션 하나를 감싸는 공통 저장소. db는 생성자로 주입된다."""

    COLLECTION_NAME = None

    def __init__(self, db):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    def ensure_indexes(self):
        pass

    def find_doc_by_id(self, entity_id: ObjectId, projection: Optional[Dict] = None) -> Optional[Dict]:
        return self.collection.find_one({'_id': entity_id}, projection)

    def exists(self, entity_id: ObjectId) -> bool:
        return self.collection.find_one({'_id': entity_id}, {'_id': 1}) is not None

    def delete_by_id(self, entity_id: ObjectId) -> bool:
        result = self.collection.delete_one({'_id': entity_id})
        return result.deleted_count == 1

    def aggregate(self, pipeline: List[Dict]) -> List[Dict]:
        return list(self.collection.aggregate(pipeline))

    def aggregate_one(self, pipeline: List[Dict]) -> Optional[Dict]:
        docs = self.aggregate(pipeline)
        return docs[0] if docs else None

    def find_page(self, plan: QueryPlan, page_request: PageRequest) -> Dict:
        return paginate(self.collection, plan, page_request)

    def _touch(self, update: Dict) -> Dict:
        update.setdefault('$set', {})['updatedAt'] = utc_now()
        return update
