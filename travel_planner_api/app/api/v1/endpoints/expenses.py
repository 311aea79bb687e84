"""
Expense endpoints for API v1.

``amount`` may be sent as a number or a string of digits; responses
always carry it as an integer.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_planner_api.app.core.db import Database, get_db
from travel_planner_api.app.core.security import Principal, get_current_user
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from travel_planner_api.app.services.expense_service import ExpenseService


router = APIRouter()


def get_expense_service(db: Database = Depends(get_db)) -> ExpenseService:
    return ExpenseService(db)


@router.post("", response_model=Envelope[ExpenseRead], status_code=status.HTTP_201_CREATED)
async def create_expense(
    payload: ExpenseCreate,
    current_user: Principal = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    expense = await service.create_expense(payload, current_user)
    return Envelope(message="Expense successfully created", data=expense)


@router.get("/activities/{activity_id}", response_model=Envelope[List[ExpenseRead]])
async def list_expenses_for_activity(
    activity_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    expenses = await service.list_for_activity(str(activity_id), current_user)
    return Envelope(message="Expenses successfully retrieved", data=expenses)


@router.get("/{expense_id}", response_model=Envelope[ExpenseRead])
async def get_expense(
    expense_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    expense = await service.get_expense(str(expense_id), current_user)
    return Envelope(message="Expense successfully retrieved", data=expense)


@router.put("/{expense_id}", response_model=Envelope[ExpenseRead])
async def update_expense(
    expense_id: UUID,
    payload: ExpenseUpdate,
    current_user: Principal = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    expense = await service.update_expense(str(expense_id), payload, current_user)
    return Envelope(message="Expense successfully updated", data=expense)


@router.delete("/{expense_id}", response_model=Envelope[None])
async def delete_expense(
    expense_id: UUID,
    current_user: Principal = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    await service.delete_expense(str(expense_id), current_user)
    return Envelope(message="Expense successfully deleted")
