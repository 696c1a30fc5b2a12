from travelbudget.core.database import engine, Base
from travelbudget.models.trips.trip_model import TripRecord  # noqa: F401  registers the table

async def init_db(bind=None):
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
