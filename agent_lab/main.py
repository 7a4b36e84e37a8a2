from fastapi import FastAPI

from agent_lab.api.resources import router as resources_router
from agent_lab.errors import register_error_handlers
from agent_lab.logging import configure_logging

configure_logging()

app = FastAPI(title="agent-lab API")
register_error_handlers(app)
app.include_router(resources_router, prefix="/api")


@app.get("/health", tags=["system"])
def health():
    return {"status": "ok"}
