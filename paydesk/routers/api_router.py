from fastapi import APIRouter
from paydesk.routers import employees, payroll

# Centralized API router hub: main.py only imports this one router
api_router = APIRouter()

api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(payroll.router, tags=["Payroll"])
