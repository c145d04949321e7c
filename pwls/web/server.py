"""
FastAPI web server: read-only JSON endpoints over a loaded PWLS catalog.

The catalog is built once by the caller and handed to ``create_app``;
request handlers read it from ``app.state`` and never modify it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel

from pwls.catalog import Catalog, catalog_to_dict, entities_to_list


log = logging.getLogger("pwls.server")

STATIC_DIR = Path(__file__).resolve().parent / "static"


# ── Models ─────────────────────────────────────────────────────────

class CompanyOut(BaseModel):
    code: int
    name: str


class NamedOut(BaseModel):
    name: str
    description: str


class PropertyOut(BaseModel):
    name: str
    description: str
    quantity: str
    guid: str
    parent: str | None = None
    sortOrder: int | None = None
    isAbstract: bool = False


class CurveOut(BaseModel):
    mnemonic: str
    shortMnemonic: str | None = None
    companyCode: int | None = None
    property: str
    quantity: str
    description: str | None = None


class ToolOut(BaseModel):
    toolCode: str
    companyCode: int | None = None
    group: str | None = None
    marketingName: str | None = None
    description: str | None = None
    genericType: str | None = None
    loggingMethod: str | None = None
    typeDescription: str | None = None
    curves: list[str] = []


class WarningOut(BaseModel):
    source: str
    key: str
    message: str


class StatusOut(BaseModel):
    ok: bool
    location: str
    counts: dict[str, int]
    warnings: list[WarningOut]


# ── App ────────────────────────────────────────────────────────────

def _catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def create_app(catalog: Catalog) -> FastAPI:
    """Build the web app around an already loaded catalog."""
    if catalog is None:
        raise ValueError("catalog cannot be None")

    app = FastAPI(title="PWLS")
    app.state.catalog = catalog

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_request(request, call_next):
        log.info("HTTP Request: %s %s %s", request.method, request.url.path, request.url.query)
        return await call_next(request)

    # ── Routes ─────────────────────────────────────────────────────

    @app.get("/")
    def index():
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/api/status", response_model=StatusOut)
    def status(request: Request):
        """Collection sizes and the warnings recorded while loading."""
        return catalog_to_dict(_catalog(request))

    @app.get("/properties", response_model=list[PropertyOut])
    def properties(request: Request,
                   name: str | None = None,
                   quantity: str | None = None):
        return entities_to_list(_catalog(request).get_properties(name, quantity))

    @app.get("/companies", response_model=list[CompanyOut])
    def companies(request: Request,
                  company_code: int | None = Query(None, alias="companyCode")):
        return entities_to_list(_catalog(request).get_companies(company_code))

    @app.get("/loggingMethods", response_model=list[NamedOut])
    def logging_methods(request: Request, name: str | None = None):
        return entities_to_list(_catalog(request).get_logging_methods(name))

    @app.get("/toolClasses", response_model=list[NamedOut])
    def tool_classes(request: Request, name: str | None = None):
        return entities_to_list(_catalog(request).get_tool_classes(name))

    @app.get("/tools", response_model=list[ToolOut])
    def tools(request: Request,
              tool_code: str | None = Query(None, alias="toolCode"),
              company_code: int | None = Query(None, alias="companyCode"),
              group: str | None = None,
              generic_type: str | None = Query(None, alias="genericType"),
              logging_method: str | None = Query(None, alias="loggingMethod")):
        return entities_to_list(_catalog(request).get_tools(
            tool_code, company_code, group, generic_type, logging_method))

    @app.get("/curves", response_model=list[CurveOut])
    def curves(request: Request,
               mnemonic: str | None = None,
               company_code: int | None = Query(None, alias="companyCode"),
               property: str | None = None,
               quantity: str | None = None):
        return entities_to_list(_catalog(request).get_curves(
            mnemonic, company_code, property, quantity))

    return app


def main(host: str | None = None, port: int | None = None, source: str | None = None):
    import uvicorn

    from pwls.config import Settings, load_env

    load_env()
    settings = Settings.from_env()
    catalog = Catalog.load(source or settings.source,
                           settings.properties_workbook,
                           settings.http_timeout_s)
    for w in catalog.warnings:
        log.warning("%s", w)

    uvicorn.run(create_app(catalog), host=host or settings.host, port=port or settings.port)


if __name__ == "__main__":
    main()
