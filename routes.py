# routes.py
from fastapi import FastAPI
from controller.analysis_controller import analysis_router
from controller.fact_check_controller import fact_check_router
from controller.validation_controller import validation_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(validation_router)
    app.include_router(fact_check_router)
    app.include_router(analysis_router)
