"""
api/routes/stocks.py -- Stock REST endpoints.

Routes:
  GET    /api/company/{id}/stock?page&limit   -- members; scoped by the role's stocks
  POST   /api/company/{id}/stock              -- owner only
  PUT    /api/company/{id}/stock/{stockId}    -- owner only
  DELETE /api/company/{id}/stock/{stockId}    -- owner only; drops role grants naming the stock
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Request

from api.deps import (
    allowed_company,
    company_store,
    member_access,
    parse_page_params,
    require_user,
    translator,
    validate_body,
)
from api.errors import UnknownRecord
from api.models import MessageResponse, Page, PaginationModel, StockResponse
from companies.models import Stock
from companies.schemas import get_stock_schema
from core.pagination import paginate

router = APIRouter()


@router.get("/company/{company_id}/stock", response_model=Page[StockResponse])
def list_stocks(request: Request, company_id: str, page: Optional[str] = None, limit: Optional[str] = None):
    params = parse_page_params(page, limit)
    user = require_user(request)
    access = member_access(request, company_id, user)
    total, stocks = company_store(request).list_stocks(
        access.company.id, params.start_index, params.limit, ids=access.stock_ids
    )
    return Page[StockResponse](
        result=[StockResponse.model_validate(s) for s in stocks],
        pagination=PaginationModel.model_validate(paginate(params.start_index, params.page, params.limit, total)),
    )


@router.post("/company/{company_id}/stock", response_model=StockResponse)
def create_stock(request: Request, company_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_stock_schema(translator(request, "Schemas")), payload)
    stock = company_store(request).create_stock(Stock(name=data.name, company_id=company.id))
    return StockResponse.model_validate(stock)


@router.put("/company/{company_id}/stock/{stock_id}", response_model=StockResponse)
def update_stock(request: Request, company_id: str, stock_id: str, payload: Any = Body(default=None)):
    company = allowed_company(request, company_id)
    data = validate_body(get_stock_schema(translator(request, "Schemas")), payload)
    stock = company_store(request).update_stock(company.id, stock_id, data.name)
    if stock is None:
        raise UnknownRecord()
    return StockResponse.model_validate(stock)


@router.delete("/company/{company_id}/stock/{stock_id}", response_model=MessageResponse)
def delete_stock(request: Request, company_id: str, stock_id: str):
    company = allowed_company(request, company_id)
    if not company_store(request).delete_stock(company.id, stock_id):
        raise UnknownRecord()
    return MessageResponse(message=translator(request)("stockDeleted"))
