"""Product catalog endpoints. Writes are admin-only."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from core.application.dtos.product_dto import (
    CreateProductRequest,
    ProductDTO,
    RestockRequest,
    UpdateProductRequest,
)
from core.application.services import ProductCatalogService

from apps.api.deps import get_catalog_service, require_admin

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductDTO])
async def list_products(
    service: ProductCatalogService = Depends(get_catalog_service),
) -> List[ProductDTO]:
    """List active products, newest first."""
    return await service.list_products()


@router.get("/{product_id}", response_model=ProductDTO)
async def get_product(
    product_id: int,
    service: ProductCatalogService = Depends(get_catalog_service),
) -> ProductDTO:
    product = await service.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product


@router.post("", response_model=ProductDTO, status_code=201, dependencies=[Depends(require_admin)])
async def create_product(
    request: CreateProductRequest,
    service: ProductCatalogService = Depends(get_catalog_service),
) -> ProductDTO:
    return await service.create_product(request)


@router.put("/{product_id}", response_model=ProductDTO, dependencies=[Depends(require_admin)])
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    service: ProductCatalogService = Depends(get_catalog_service),
) -> ProductDTO:
    product = await service.update_product(product_id, request)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_product(
    product_id: int,
    service: ProductCatalogService = Depends(get_catalog_service),
) -> Response:
    """Soft delete: hidden from the catalog, kept for order history."""
    if not await service.delete_product(product_id):
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return Response(status_code=204)


@router.post("/{product_id}/restock", response_model=ProductDTO, dependencies=[Depends(require_admin)])
async def restock_product(
    product_id: int,
    request: RestockRequest,
    service: ProductCatalogService = Depends(get_catalog_service),
) -> ProductDTO:
    product = await service.restock(product_id, request.quantity)
    if not product:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product
