from fastapi import FastAPI

from app.log import configure_logging
from app.person.router import router as person_router

configure_logging()

app = FastAPI(title="PersonStats", version="0.1.0")
app.include_router(person_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "person": {
            "list": "/person",
            "detail": "/person/{id}",
            "stats": "/person/{id}/stats",
            "bmi": "/person/{id}/bmi",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
