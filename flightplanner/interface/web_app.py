"""Mini README: FastAPI service exposing the flight plan codecs.

Structure:
    * create_application - application factory wiring the routes.

A browser front-end uploads mavlink or KMZ files and posts JSON documents
back for edits or mavlink export. Every request works on a fresh
``Flightplan`` built from the request, so the service keeps no state.
Core errors are answered with HTTP 400 and the error message.
"""

from __future__ import annotations

import json
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from ..configuration import get_settings
from ..errors import FlightplanError, ParseError
from ..logging_utils import get_logger
from ..model import Flightplan
from .edits import apply_edits, summarise

LOGGER = get_logger(__name__)


def _flightplan_payload(plan: Flightplan) -> dict:
    return {"summary": summarise(plan), "flightplan": json.loads(plan.to_json())}


async def _read_upload(upload: UploadFile) -> str:
    try:
        return (await upload.read()).decode("utf-8")
    except UnicodeDecodeError as error:
        raise ParseError(f"Uploaded file {upload.filename} is not UTF-8 text") from error


def _load_document(document: str) -> Flightplan:
    plan = Flightplan()
    plan.from_json(document)
    return plan


def _bad_request(error: FlightplanError) -> HTTPException:
    LOGGER.warning("Rejected flight plan request: %s", error)
    return HTTPException(status_code=400, detail=str(error))


def create_application() -> FastAPI:
    """Create the FastAPI application with its routes."""

    app = FastAPI(title="Flightplanner", version="0.1.0")
    settings = get_settings()

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok", "environment": settings.environment})

    @app.post("/flightplans/mavlink")
    async def import_mavlink(mavlink: UploadFile = File(...)) -> JSONResponse:
        """Parse an uploaded mavlink file."""

        try:
            plan = Flightplan(await _read_upload(mavlink))
        except FlightplanError as error:
            raise _bad_request(error) from error
        LOGGER.info("Imported mavlink upload %s as '%s'", mavlink.filename, plan.name)
        return JSONResponse(_flightplan_payload(plan))

    @app.post("/flightplans/kmz")
    async def import_kmz(
        kmz: UploadFile = File(...),
        name: str = Form(...),
        bearing: Optional[float] = Form(None),
        radius: Optional[float] = Form(None),
    ) -> JSONResponse:
        """Parse the coordinate path of an uploaded KML document."""

        plan = Flightplan()
        try:
            plan.parse_kmz(
                await _read_upload(kmz),
                name,
                bearing=settings.default_bearing if bearing is None else bearing,
                waypoint_radius=settings.default_waypoint_radius if radius is None else radius,
            )
        except FlightplanError as error:
            raise _bad_request(error) from error
        LOGGER.info("Imported kmz upload %s as '%s'", kmz.filename, plan.name)
        return JSONResponse(_flightplan_payload(plan))

    @app.post("/flightplans/export/mavlink", response_class=PlainTextResponse)
    async def export_mavlink(
        document: str = Form(...),
        velocity: Optional[float] = Form(None),
        hold_time: Optional[float] = Form(None),
    ) -> PlainTextResponse:
        """Render a JSON document as mavlink text."""

        try:
            plan = _load_document(document)
            mavlink = plan.update_mavlink(
                velocity=settings.default_velocity if velocity is None else velocity,
                hold_time=settings.default_hold_time if hold_time is None else hold_time,
            )
        except FlightplanError as error:
            raise _bad_request(error) from error
        filename = f"{plan.name}.mavlink"
        return PlainTextResponse(
            mavlink, headers={"Content-Disposition": f'attachment; filename="{filename}"'}
        )

    @app.post("/flightplans/transform")
    async def transform(
        document: str = Form(...),
        step_size: Optional[float] = Form(None),
        densify: bool = Form(False),
        altitude: Optional[float] = Form(None),
        radius: Optional[float] = Form(None),
        bearing: Optional[float] = Form(None),
        bearing_to_center: bool = Form(False),
    ) -> JSONResponse:
        """Apply route edits to a JSON document and return the result."""

        try:
            plan = apply_edits(
                _load_document(document),
                step_size=step_size,
                densify=densify,
                altitude=altitude,
                radius=radius,
                bearing=bearing,
                bearing_to_center=bearing_to_center,
            )
        except FlightplanError as error:
            raise _bad_request(error) from error
        return JSONResponse(_flightplan_payload(plan))

    return app
