"""
API routes for the Financial API.

Provides the /assets endpoint that reads and creates account records on
the ledger through the contract held in app state.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, ValidationError

from ledger_gateway import Contract, GatewayError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Assets"])


# --- Request Models ---


class Asset(BaseModel):
    """Financial account details as exchanged with the ledger."""

    DEALERID: str = Field(..., min_length=1, description="Dealer identifier")
    MSISDN: str = Field("", description="Phone number")
    MPIN: str = Field("", description="PIN")
    BALANCE: float = Field(0.0, strict=True, allow_inf_nan=False, description="Account balance")
    STATUS: str = Field("", description="Account status")
    TRANSAMOUNT: float = Field(
        0.0, strict=True, allow_inf_nan=False, description="Last transaction amount"
    )
    TRANSTYPE: str = Field("", description="Last transaction type")
    REMARKS: str = Field("", description="Free-text remarks")

    def to_args(self) -> list[str]:
        """CreateAsset arguments, numbers as fixed-point strings."""
        return [
            self.DEALERID,
            self.MSISDN,
            self.MPIN,
            f"{self.BALANCE:f}",
            self.STATUS,
            f"{self.TRANSAMOUNT:f}",
            self.TRANSTYPE,
            self.REMARKS,
        ]


# --- Dependencies ---


def get_contract(request: Request) -> Contract:
    """Get contract from app state."""
    return request.app.state.contract


# --- Asset Routes ---


@router.get("/assets")
async def get_asset(
    dealerid: str | None = Query(None, description="Dealer identifier"),
    contract: Contract = Depends(get_contract),
):
    """
    Read an account record.

    Returns the ledger's JSON for the dealer verbatim.
    """
    if not dealerid:
        raise HTTPException(status_code=400, detail="dealerid query parameter is required")

    logger.info(f"--> Evaluate Transaction: ReadAsset, for dealer {dealerid}")
    try:
        result = await contract.evaluate_transaction("ReadAsset", dealerid)
    except GatewayError as e:
        logger.error(f"ReadAsset failed for dealer {dealerid}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to evaluate transaction: {e}"
        ) from e

    return Response(content=result, media_type="application/json")


@router.post("/assets", status_code=201, response_class=PlainTextResponse)
async def create_asset(
    request: Request,
    contract: Contract = Depends(get_contract),
):
    """
    Create an account record.

    The body is validated before anything is sent to the ledger.
    """
    body = await request.body()
    try:
        asset = Asset.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info(f"--> Submit Transaction: CreateAsset, for dealer {asset.DEALERID}")
    try:
        await contract.submit_transaction("CreateAsset", *asset.to_args())
    except GatewayError as e:
        logger.error(f"CreateAsset failed for dealer {asset.DEALERID}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to submit transaction: {e}"
        ) from e

    return PlainTextResponse(f"Asset {asset.DEALERID} created successfully", status_code=201)
