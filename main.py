"""
Entry Point for the Recipe Import API

Runs the FastAPI web service that imports recipes from web page URLs for
the iOS app.
"""

from dotenv import load_dotenv
from fastapi import FastAPI

# Export .env to the process environment before settings and logfire read it
load_dotenv()

from api.recipe_import import router as recipe_import_router
from config.logging_setup import configure_logging
from config.settings import settings

configure_logging()

app = FastAPI(
    title="Recipe Import API",
    description="Structured recipe extraction from JSON-LD, Next.js and microdata pages",
    version="1.0.0"
)

app.include_router(recipe_import_router, prefix="/recipes", tags=["recipes"])


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        workers=1,
        log_level=settings.log_level.lower()
    )
