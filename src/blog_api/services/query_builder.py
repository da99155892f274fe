"""
Parameterized SQL construction for the posts table

Filter values never reach the SQL text: every predicate contributes a
numbered placeholder and the value goes to the parameter list.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, Field

from blog_api.models.enums import PredicateKind

TABLE_NAME = "posts"
POST_FIELDS = ["id", "title", "content", "author_id", "category", "tags", "created_at", "updated_at"]
SEARCH_FIELDS = ["title", "content", "tags"]
WRITABLE_FIELDS = ["title", "content", "author_id", "category", "tags"]


class Predicate(BaseModel):
    """One WHERE condition drawn from the supported predicate kinds"""
    kind: PredicateKind
    value: str


class OrderByClause(BaseModel):
    """ORDER BY clause"""
    field: str
    dir: Literal["asc", "desc"] = "asc"


def _default_order() -> List[OrderByClause]:
    # id breaks ties between rows inserted within the same transaction
    return [
        OrderByClause(field="created_at", dir="desc"),
        OrderByClause(field="id", dir="desc"),
    ]


class PostListQuery(BaseModel):
    """SELECT over posts, AND-combining its predicates"""
    select: List[str] = Field(default_factory=lambda: list(POST_FIELDS))
    where: List[Predicate] = Field(default_factory=list)
    order_by: List[OrderByClause] = Field(default_factory=_default_order)

    @classmethod
    def from_filter(cls, search: Optional[str] = None, category: Optional[str] = None) -> "PostListQuery":
        """Build the listing query; empty filter values are ignored"""
        where = []
        if search:
            where.append(Predicate(kind=PredicateKind.SEARCH, value=search))
        if category:
            where.append(Predicate(kind=PredicateKind.CATEGORY, value=category))
        return cls(where=where)

    def build(self) -> Tuple[str, List[Any]]:
        """Render SQL text and its positional parameters"""
        params: List[Any] = []
        param_counter = 1

        query = f"SELECT {', '.join(self.select)} FROM {TABLE_NAME}"

        if self.where:
            where_parts = []
            for predicate in self.where:
                where_sql, where_params, param_counter = build_predicate(predicate, param_counter)
                where_parts.append(where_sql)
                params.extend(where_params)
            query += f" WHERE {' AND '.join(where_parts)}"

        if self.order_by:
            order_parts = [f"{clause.field} {clause.dir.upper()}" for clause in self.order_by]
            query += f" ORDER BY {', '.join(order_parts)}"

        return query, params


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_predicate(predicate: Predicate, param_counter: int) -> Tuple[str, List[Any], int]:
    """Build WHERE clause SQL for a single predicate"""
    if predicate.kind == PredicateKind.SEARCH:
        placeholder = f"${param_counter}"
        sql = "(" + " OR ".join(f"{field} ILIKE {placeholder}" for field in SEARCH_FIELDS) + ")"
        return sql, [f"%{escape_like(predicate.value)}%"], param_counter + 1
    elif predicate.kind == PredicateKind.CATEGORY:
        return f"category = ${param_counter}", [predicate.value], param_counter + 1
    else:
        raise ValueError(f"Unsupported predicate: {predicate.kind}")


def build_select_by_id_query(post_id: int) -> Tuple[str, List[Any]]:
    query = f"SELECT {', '.join(POST_FIELDS)} FROM {TABLE_NAME} WHERE id = $1"
    return query, [post_id]


def build_insert_query(values: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """INSERT returning the generated id; both timestamps come from one NOW()"""
    field_names = []
    placeholders = []
    params = []
    for param_counter, (field_name, value) in enumerate(_writable(values).items(), start=1):
        field_names.append(field_name)
        placeholders.append(f"${param_counter}")
        params.append(value)

    field_names.extend(["created_at", "updated_at"])
    placeholders.extend(["NOW()", "NOW()"])

    query = (
        f"INSERT INTO {TABLE_NAME} ({', '.join(field_names)}) "
        f"VALUES ({', '.join(placeholders)}) RETURNING id"
    )
    return query, params


def build_update_query(post_id: int, values: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """UPDATE of every given field plus updated_at, returning the id when a row matched"""
    set_parts = []
    params = []
    param_counter = 1
    for field_name, value in _writable(values).items():
        set_parts.append(f"{field_name} = ${param_counter}")
        params.append(value)
        param_counter += 1

    set_parts.append("updated_at = NOW()")
    query = (
        f"UPDATE {TABLE_NAME} SET {', '.join(set_parts)} "
        f"WHERE id = ${param_counter} RETURNING id"
    )
    params.append(post_id)
    return query, params


def build_delete_query(post_id: int) -> Tuple[str, List[Any]]:
    return f"DELETE FROM {TABLE_NAME} WHERE id = $1", [post_id]


def build_categories_query() -> Tuple[str, List[Any]]:
    # Binary collation keeps the ordering independent of the database locale
    return f'SELECT DISTINCT category COLLATE "C" AS category FROM {TABLE_NAME} ORDER BY category', []


def _writable(values: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(values) - set(WRITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Fields not writable on {TABLE_NAME}: {sorted(unknown)}")
    return {field: values[field] for field in WRITABLE_FIELDS if field in values}
