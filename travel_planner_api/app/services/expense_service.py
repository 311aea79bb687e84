"""Business logic for expenses attached to activities."""

import logging
from typing import List

from ..core.db import Database
from ..core.security import Principal
from ..schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from .lifecycle import fetch_row, insert_row, update_row
from .ownership import EntityKind, OwnershipResolver

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_for_activity(self, activity_id: str, principal: Principal) -> List[ExpenseRead]:
        with self.db.read() as conn:
            children = OwnershipResolver(conn).resolve_children(
                EntityKind.ACTIVITY, activity_id, EntityKind.EXPENSE, principal.id
            )
        return [ExpenseRead.model_validate(child.record) for child in children]

    async def get_expense(self, expense_id: str, principal: Principal) -> ExpenseRead:
        with self.db.read() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.EXPENSE, expense_id, principal.id)
        return ExpenseRead.model_validate(resolved.record)

    async def create_expense(self, data: ExpenseCreate, principal: Principal) -> ExpenseRead:
        values = data.model_dump()
        values["activity_id"] = str(data.activity_id)
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(
                EntityKind.ACTIVITY, values["activity_id"], principal.id, "create an expense for"
            )
            expense_id = insert_row(conn, "expenses", values)
            row = fetch_row(conn, "expenses", expense_id)
        logger.info("User %s created expense %s (%s %s)", principal.id, expense_id, data.amount, data.currency)
        return ExpenseRead.model_validate(row)

    async def update_expense(self, expense_id: str, updates: ExpenseUpdate, principal: Principal) -> ExpenseRead:
        changes = updates.changes()
        with self.db.transaction() as conn:
            resolver = OwnershipResolver(conn)
            resolved = resolver.resolve(EntityKind.EXPENSE, expense_id, principal.id, "update")
            resolver.check_parent_reference(resolved, updates.activity_id)
            update_row(conn, "expenses", expense_id, changes)
            row = fetch_row(conn, "expenses", expense_id)
        logger.info("User %s updated expense %s fields %s", principal.id, expense_id, sorted(changes))
        return ExpenseRead.model_validate(row)

    async def delete_expense(self, expense_id: str, principal: Principal) -> None:
        with self.db.transaction() as conn:
            OwnershipResolver(conn).resolve(EntityKind.EXPENSE, expense_id, principal.id, "delete")
            conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
        logger.info("User %s deleted expense %s", principal.id, expense_id)
