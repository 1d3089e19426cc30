"""CategoryRepository — raw text() SQL over the categories table."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_category.domain.models import Category

_COLUMNS = "id, user_id, name, type, created_at"

_INSERT_SQL = text(f"""
    INSERT INTO categories (user_id, name, type)
    VALUES (:user_id, :name, :type)
    RETURNING {_COLUMNS}
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_COLUMNS} FROM categories WHERE user_id = :user_id ORDER BY name, id
""")

_GET_SQL = text(f"SELECT {_COLUMNS} FROM categories WHERE id = :category_id")

_UPDATE_SQL = text(f"""
    UPDATE categories SET name = :name, type = :type
    WHERE id = :category_id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("DELETE FROM categories WHERE id = :category_id RETURNING id")

_ACCOUNT_IDS_SQL = text(
    "SELECT DISTINCT account_id FROM transactions WHERE category_id = :category_id"
)


def _row_to_category(row: object) -> Category:
    return Category(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        type=row.type,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class CategoryRepository:
    async def create(
        self, db: AsyncSession, user_id: int, name: str, category_type: str
    ) -> Category:
        result = await db.execute(
            _INSERT_SQL, {"user_id": user_id, "name": name, "type": category_type}
        )
        return _row_to_category(result.fetchone())

    async def list_by_user(self, db: AsyncSession, user_id: int) -> list[Category]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_category(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, category_id: int) -> Category | None:
        result = await db.execute(_GET_SQL, {"category_id": category_id})
        row = result.fetchone()
        return _row_to_category(row) if row else None

    async def update(
        self, db: AsyncSession, category_id: int, name: str, category_type: str
    ) -> Category | None:
        result = await db.execute(
            _UPDATE_SQL, {"category_id": category_id, "name": name, "type": category_type}
        )
        row = result.fetchone()
        return _row_to_category(row) if row else None

    async def delete(self, db: AsyncSession, category_id: int) -> bool:
        result = await db.execute(_DELETE_SQL, {"category_id": category_id})
        return result.fetchone() is not None

    async def account_ids_with_transactions(
        self, db: AsyncSession, category_id: int
    ) -> list[int]:
        result = await db.execute(_ACCOUNT_IDS_SQL, {"category_id": category_id})
        return [row.account_id for row in result.fetchall()]
