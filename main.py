import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from accounts import AccountResolver
from cloudinary_delete import delete_media, delete_resources
from config import Settings, get_settings
from exceptions import InvalidRequest, RelayError

logger = logging.getLogger(__name__)

router = APIRouter()


# ================= REQUEST MODELS =================

class DeleteMediaRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    public_id: Any = None
    cloud_name: Optional[str] = Field(None, validation_alias=AliasChoices("cloud_name", "tenant_id"))
    secure_url: Optional[str] = Field(None, validation_alias=AliasChoices("secure_url", "resource_url"))
    resource_type: Optional[str] = None
    type: Optional[str] = Field(None, validation_alias=AliasChoices("type", "access_type"))
    invalidate: Any = None

    @field_validator("cloud_name", "secure_url", "resource_type", "type", mode="before")
    @classmethod
    def loose_string(cls, value):
        # numbers are stringified, anything else that isn't a string is ignored
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        if not isinstance(value, str):
            return None
        return value


# ================= DEPENDENCIES =================

def get_resolver(request: Request) -> AccountResolver:
    return request.app.state.resolver


def get_deleter(request: Request):
    return request.app.state.deleter


# ================= ROUTES =================

@router.get("/", response_class=PlainTextResponse)
def root():
    return "Hello from the Cloudinary Delete Server!"


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/deleteMedia")
def delete_media_route(
    req: DeleteMediaRequest,
    resolver: AccountResolver = Depends(get_resolver),
    deleter=Depends(get_deleter),
):
    return delete_media(req, resolver, deleter)


# ================= ERROR HANDLERS =================

async def relay_error_handler(request: Request, exc: RelayError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # only a body that isn't a JSON object gets here, so there is no public_id
    logger.info("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": InvalidRequest.message})


# ================= APP =================

def create_app(settings: Settings = None, resolver: AccountResolver = None,
               deleter=delete_resources) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Cloudinary Delete Server")
    app.state.resolver = resolver or AccountResolver.from_settings(settings)
    app.state.deleter = deleter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router)
    return app


settings = get_settings()
logging.basicConfig(level=settings.log_level, format="%(levelname)s:%(name)s: %(message)s")

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
