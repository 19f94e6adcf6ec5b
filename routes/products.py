from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from core.db import get_db
from core.pagination import PageRequest, page_request
from schemas.common import Page, PathId
from schemas.product import ProductIn, ProductOut
from services import products as product_service

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=Page[ProductOut])
def list_products(page: PageRequest = Depends(page_request), db: Session = Depends(get_db)):
    return product_service.list_products(db, page)


@router.get("/search", response_model=Page[ProductOut])
def search_products(
    query: str = Query(..., min_length=1, description="Matches name, description or category"),
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    return product_service.search_products(db, query, page)


@router.get("/filter", response_model=Page[ProductOut])
def filter_products(
    category: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    return product_service.filter_products(db, page, category=category, min_price=min_price, max_price=max_price)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: PathId, db: Session = Depends(get_db)):
    return product_service.get_product(db, product_id)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(data: ProductIn, db: Session = Depends(get_db)):
    return product_service.create_product(db, data)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: PathId, data: ProductIn, db: Session = Depends(get_db)):
    return product_service.update_product(db, product_id, data)


@router.delete("/{product_id}", status_code=204, response_class=Response)
def delete_product(product_id: PathId, db: Session = Depends(get_db)):
    product_service.delete_product(db, product_id)
    return Response(status_code=204)
