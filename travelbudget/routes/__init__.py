# travelbudget/routes/__init__.py
from fastapi import APIRouter
from travelbudget.routes.trip import trip_routes
from travelbudget.routes.finance import finance_routes
from travelbudget.routes.currency import currency_routes


api_router = APIRouter()

# Trip routes
api_router.include_router(trip_routes.router)

# Finance dashboard routes
api_router.include_router(finance_routes.router)

# Currency routes
api_router.include_router(currency_routes.router)
