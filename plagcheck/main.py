from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plagcheck.config import CORS_ORIGINS
from plagcheck.logger import logger
from plagcheck.routers.plagiarism import router as plagiarism_router

app = FastAPI(
    title="plagcheck",
    description="Phrase overlap detection against Wikipedia articles",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plagiarism_router)


@app.get("/health")
def health():
    return {"status": "healthy"}


logger.info("plagcheck API ready")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
