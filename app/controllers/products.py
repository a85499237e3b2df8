# controllers/products.py
"""Product API endpoints with full CRUD operations."""

import logging

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_store
from ..models.product import DynamoProductStore, StoreError
from ..schemas import product as schemas

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", summary="Health check")
def health():
    return {}


@router.get("/product", summary="Get a product")
def get_product(
    product_id: str = Query(..., alias="productId", min_length=1),
    store: DynamoProductStore = Depends(get_store)
):
    """Fetch one product by key; an unknown key yields an empty object."""
    logger.debug(f"Fetching product {product_id}")
    return store.get(product_id)


@router.get("/products", summary="List all products")
def get_products(store: DynamoProductStore = Depends(get_store)):
    """Scan the whole table, following continuation keys page by page.

    A failure partway through does not fail the request: the pages read so
    far are returned with ``partial`` set and the error attached.
    """
    products = []
    start_key = None
    while True:
        try:
            items, start_key = store.scan(start_key)
        except StoreError as e:
            logger.exception(f"Scan stopped after {len(products)} products")
            return {"products": products, "partial": True, "error": e.to_dict()}
        products.extend(items)
        if not start_key:
            break

    logger.debug(f"Listed {len(products)} products")
    return {"products": products}


@router.post("/product", summary="Create or replace a product")
def save_product(
    product: schemas.Product,
    store: DynamoProductStore = Depends(get_store)
):
    """Write the product, overwriting any existing record with the same key."""
    logger.info(f"Saving product {product.productId}")
    item = product.model_dump()
    store.put(item)
    return {
        "operation": "SAVE",
        "message": "Product saved successfully",
        "item": item,
    }


@router.patch("/product", summary="Update one field of a product")
def update_product(
    data: schemas.ProductUpdate,
    store: DynamoProductStore = Depends(get_store)
):
    """Set a single attribute and return the attributes that changed."""
    logger.info(f"Updating product {data.productId}: {data.updateKey}")
    attributes = store.update(data.productId, data.updateKey, data.updateValue)
    return {
        "operation": "UPDATE",
        "message": "Product updated successfully",
        "item": attributes,
    }


@router.delete("/product", summary="Delete a product")
def delete_product(
    data: schemas.ProductKey,
    store: DynamoProductStore = Depends(get_store)
):
    logger.info(f"Deleting product {data.productId}")
    result = store.delete(data.productId)
    return {
        "operation": "DELETE",
        "message": "Product deleted successfully",
        "item": result,
    }
