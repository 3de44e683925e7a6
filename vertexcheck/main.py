from fastapi import FastAPI
from vertexcheck.api.diagnostics import router as diagnostics_router

app = FastAPI(title="vertexcheck")

# include routes
app.include_router(diagnostics_router)
