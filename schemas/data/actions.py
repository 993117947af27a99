from pydantic import Field
from typing import Any, Dict, List

from schemas.data.entities import DataSnapshot


class ModifyRequest(DataSnapshot):
    # kept untyped: malformed actions are reported as rejected, not as 422
    action: Any = None


class SearchRequest(DataSnapshot):
    entity: str
    filters: List[Dict[str, Any]] = Field(default_factory=list)
    """{field, operator, value} objects; operator is one of =, >, <, >=, <=, includes, excludes."""
