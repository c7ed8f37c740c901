# app/main.py
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from app.analysis import ProductAnalyzer, create_client
from app.config import DEFAULT_INDUSTRY, get_logger
from app.handler import HandlerResponse, handle_analyze, handle_categories
from app.schemas import ErrorResponse, SuccessResponse
from contextlib import asynccontextmanager

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app):
    # ---- STARTUP ----
    # One authenticated client shared by every request
    client = create_client()
    app.state.analyzer = ProductAnalyzer(client)
    logger.info("Product analyzer initialized")

    yield

    # ---- SHUTDOWN ----
    await client.close()
    app.state.analyzer = None
    logger.info("Product analyzer resources released")

app = FastAPI(title="Product Enrichment API", lifespan=lifespan)

RESPONSES = {
    200: {"model": SuccessResponse},
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_analyzer(request: Request) -> ProductAnalyzer:
    return request.app.state.analyzer


def _render(result: HandlerResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body, headers=result.headers)


@app.get("/")
def root():
    logger.info("Root endpoint accessed")
    return {"message": "Product Enrichment API is running"}


@app.post("/analyze", responses=RESPONSES)
async def analyze(request: Request, analyzer: ProductAnalyzer = Depends(get_analyzer)):
    """
    Accepts one product as a JSON object, asks the language model for its
    category and characteristics, and returns them in normalized form.
    An optional "industry" field scopes the categorization.
    """
    body = await request.body()
    result = await handle_analyze(body or None, analyzer, DEFAULT_INDUSTRY)
    logger.info(f"Analyze finished with status {result.status_code}")
    return _render(result)


@app.post("/categories", responses=RESPONSES)
async def categories(request: Request):
    """
    Builds the category hierarchy from attributes already on the product,
    without calling the language model.
    """
    body = await request.body()
    result = handle_categories(body or None)
    logger.info(f"Categories finished with status {result.status_code}")
    return _render(result)
