from fastapi import FastAPI
from preplanner.api.routes import router
from preplanner.db.session import init_db


app = FastAPI(title="WDI PRE Planner API", version="0.1.0")
app.include_router(router, prefix="/api")

@app.on_event("startup")
async def on_startup():
    await init_db()
