"""FastAPI application serving the generated registry store."""

from __future__ import annotations

import asyncio
import re
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urljoin

from pydantic import BaseModel

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI, Request
    from fastapi.responses import JSONResponse

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    Request = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..config import RegistryConfig
from ..logging import get_logger
from ..stores import RegistryStore

_SLUG_PATTERN = re.compile(r"^[a-z-]+$")

logger = get_logger("service")


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str
    suggestions: Optional[str] = None


def transform_registry_dependencies(item: Dict[str, Any], registry_url: str) -> Dict[str, Any]:
    """Rewrite ``registryDependencies`` into URLs resolvable by a consumer."""
    deps = item.get("registryDependencies")
    if not isinstance(deps, list):
        return item
    base = registry_url.rstrip("/") + "/"
    rewritten: List[str] = []
    for dep in deps:
        dep = str(dep)
        if dep.startswith("/"):
            rewritten.append(urljoin(base, dep))
        elif ".json" in dep:
            rewritten.append(dep if dep.startswith("http") else urljoin(base, f"/{dep}"))
        elif _SLUG_PATTERN.match(dep):
            rewritten.append(dep)
        else:
            rewritten.append(urljoin(base, f"/{dep}.json"))
    return {**item, "registryDependencies": rewritten}


def create_app(
    config: RegistryConfig,
    store_factory: Optional[Callable[[], RegistryStore]] = None,
) -> "FastAPI":
    """Create the FastAPI application exposing registry lookups."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    def _default_store() -> RegistryStore:
        return RegistryStore(config.output_dir)

    factory = store_factory or _default_store
    app = FastAPI(title=f"{config.base_name} registry", version="1.0.0")

    async def get_store() -> RegistryStore:
        return factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/registry.json")
    async def registry_index(store: RegistryStore = Depends(get_store)) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        index = await loop.run_in_executor(None, store.index)
        if index is not None:
            return index
        return {"name": config.base_name, "homepage": config.homepage, "items": []}

    @app.get("/all.json")
    async def registry_bundle(
        request: Request, store: RegistryStore = Depends(get_store)
    ) -> Any:
        loop = asyncio.get_running_loop()
        bundle = await loop.run_in_executor(None, store.bundle)
        if bundle is not None:
            return transform_registry_dependencies(bundle, _origin(request))
        payload = ErrorResponse(
            error="all.json not found.",
            suggestions="Please rebuild the registry assets.",
        )
        return JSONResponse(status_code=404, content=payload.model_dump())

    @app.get("/{component}.json")
    async def registry_item(
        component: str, request: Request, store: RegistryStore = Depends(get_store)
    ) -> Any:
        loop = asyncio.get_running_loop()
        item = await loop.run_in_executor(None, store.lookup, component)
        if item is not None:
            return transform_registry_dependencies(item, _origin(request))
        logger.warning('Component "%s" not found in registry', component)
        payload = ErrorResponse(
            error=f'Component "{component}" not found.',
            suggestions=(
                "Available endpoints: /all.json, or individual component names "
                "(e.g. /message.json)"
            ),
        )
        return JSONResponse(status_code=404, content=payload.model_dump())

    return app


def _origin(request: "Request") -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


def run_service(
    config: RegistryConfig, host: str = "0.0.0.0", port: int = 3001
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app(config)
    uvicorn.run(app, host=host, port=port)
