"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from merge_designer.api.routes import router
from merge_designer.config import config

app = FastAPI(
    title="Mail Merge Designer API",
    description="API to merge spreadsheet rows into letters, certificates, labels and envelopes"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=8000)
