"""
Calculator endpoints.

POST /api/calculators/{carbon-footprint|fertilizer|loan} run a calculator
POST /api/calculators/{carbon-footprint|loan}/report     same result as a PDF
GET  reference tables for the form dropdowns
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from .. import schemas
from ..calculators.base import CalculationError
from ..calculators.registry import get_calculator, list_calculators
from ..reference_data import ReferenceTables, get_reference_tables
from ..report_generator import generate_carbon_report, generate_loan_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculators", tags=["calculators"])


def _run(name: str, payload, tables: ReferenceTables) -> dict:
    calculator = get_calculator(name, tables)
    try:
        return calculator.calculate(payload.model_dump())
    except CalculationError as e:
        logger.info("%s calculation rejected: %s", name, e)
        raise HTTPException(status_code=422, detail=str(e))


def _pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/")
def calculators_index():
    return {"calculators": list_calculators()}


@router.post("/carbon-footprint", response_model=schemas.CarbonFootprintResult)
def carbon_footprint(payload: schemas.CarbonFootprintInput,
                     tables: ReferenceTables = Depends(get_reference_tables)):
    return _run("carbon_footprint", payload, tables)


@router.post("/carbon-footprint/report")
def carbon_footprint_report(payload: schemas.CarbonFootprintInput,
                            tables: ReferenceTables = Depends(get_reference_tables)):
    result = _run("carbon_footprint", payload, tables)
    return _pdf_response(generate_carbon_report(result), "carbon-footprint.pdf")


@router.post("/fertilizer", response_model=schemas.FertilizerResult)
def fertilizer(payload: schemas.FertilizerInput,
               tables: ReferenceTables = Depends(get_reference_tables)):
    return _run("fertilizer", payload, tables)


@router.get("/fertilizer/crops")
def fertilizer_crops(tables: ReferenceTables = Depends(get_reference_tables)):
    """Crop N-P-K requirements in kg/hectare."""
    return tables.crop_requirements


@router.get("/fertilizer/prices")
def fertilizer_prices(tables: ReferenceTables = Depends(get_reference_tables)):
    return tables.fertilizer_prices


@router.post("/loan", response_model=schemas.LoanResult)
def loan(payload: schemas.LoanInput,
         tables: ReferenceTables = Depends(get_reference_tables)):
    return _run("loan", payload, tables)


@router.post("/loan/report")
def loan_report(payload: schemas.LoanInput,
                tables: ReferenceTables = Depends(get_reference_tables)):
    result = _run("loan", payload, tables)
    return _pdf_response(generate_loan_report(result), "loan-repayment-plan.pdf")


@router.get("/loan/types")
def loan_types(tables: ReferenceTables = Depends(get_reference_tables)):
    return tables.loan_types
