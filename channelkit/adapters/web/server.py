"""FastAPI application exposing welcome channel triggers."""

from fastapi import FastAPI

from channelkit.adapters.web.welcome_routes import registry, welcome_router

app = FastAPI(title="channelkit")
app.include_router(welcome_router)


@app.get("/health")
async def health():
    return {"status": "ok", "welcome_channels": len(registry)}
