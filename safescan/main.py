from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time
import uuid
from safescan.core import rules
from safescan.models import ProfileInfo, ProfilesResponse, ScanRequest, ScanResponse
from safescan.services.product_service import product_service
from safescan.services.sources.base import ProductLookupError
from safescan.core.logging_config import get_logger

app = FastAPI(title="SafeScan Ingredient Checker API", version="0.1.0")
logger = get_logger(__name__)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000.0
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    response.headers["X-Request-ID"] = request_id
    return response

@app.exception_handler(ProductLookupError)
async def product_lookup_error_handler(request: Request, exc: ProductLookupError):
    logger.error(f"Product lookup failure for {exc.barcode}: {exc.reason}")
    return JSONResponse(
        status_code=502,
        content={
            "error_code": "PRODUCT_LOOKUP_FAILURE",
            "message": rules.LOOKUP_FAILED_MESSAGE,
            "barcode": exc.barcode
        }
    )

@app.get("/")
def read_root():
    return {"message": "Welcome to the SafeScan API. Visit /docs for documentation."}


@app.get("/api/profiles", response_model=ProfilesResponse)
def list_profiles():
    """
    List the profiles and the ingredient denylist each one applies.
    """
    evaluator = product_service.evaluator
    return ProfilesResponse(
        profiles=[
            ProfileInfo(name=profile, denylist=evaluator.denylist(profile))
            for profile in evaluator.profiles()
        ],
        default=product_service.config.default_profile
    )


@app.post("/api/scan", response_model=ScanResponse)
def scan_barcode(request: ScanRequest):
    """
    Look up a barcode and check its ingredients against the profile's denylist.
    """
    return product_service.scan(request.barcode, request.profile)
