"""FastAPI endpoints for storefront catalogue browsing."""

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from sqlalchemy.orm import Session

from catalogue.api.schemas import BrandResponse, CategoryResponse, CategoryTreeNode, ProductResponse
from catalogue.brand.repository import BrandRepository
from catalogue.category.repository import CategoryRepository
from catalogue.product.repository import ProductRepository
from shared.database import get_session

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
brand_router = APIRouter(prefix="/brands", tags=["brands"])


# --- Category endpoints ---


def _tree_node(node: dict) -> CategoryTreeNode:
    return CategoryTreeNode(
        **CategoryResponse.model_validate(node["category"]).model_dump(),
        children=[_tree_node(child) for child in node["children"]],
    )


@category_router.get("", response_model=list[CategoryResponse])
def list_categories(session: Session = Depends(get_session)) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in CategoryRepository(session).list_ordered()]


@category_router.get("/tree", response_model=list[CategoryTreeNode])
def category_tree(session: Session = Depends(get_session)) -> list[CategoryTreeNode]:
    return [_tree_node(node) for node in CategoryRepository(session).tree()]


@category_router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, session: Session = Depends(get_session)) -> CategoryResponse:
    return CategoryResponse.model_validate(CategoryRepository(session).get(category_id))


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
def list_products(
    category_id: int | None = Query(None, alias="categoryId"),
    brand_id: int | None = Query(None, alias="brandId"),
    limit: int | None = Query(None, ge=1),
    is_featured: bool | None = Query(None, alias="isFeatured"),
    is_hot_deal: bool | None = Query(None, alias="isHotDeal"),
    is_best_seller: bool | None = Query(None, alias="isBestSeller"),
    is_new_arrival: bool | None = Query(None, alias="isNewArrival"),
    free_shipping: bool | None = Query(None, alias="freeShipping"),
    session: Session = Depends(get_session),
) -> list[ProductResponse]:
    products = ProductRepository(session).filter(
        limit=limit,
        category_id=category_id,
        brand_id=brand_id,
        is_featured=is_featured,
        is_hot_deal=is_hot_deal,
        is_best_seller=is_best_seller,
        is_new_arrival=is_new_arrival,
        free_shipping=free_shipping,
        active_only=True,
    )
    return [ProductResponse.model_validate(p) for p in products]


@product_router.get("/slug/{slug}", response_model=ProductResponse)
def get_product_by_slug(slug: str, session: Session = Depends(get_session)) -> ProductResponse:
    product = ProductRepository(session).get_by_slug(slug)
    if product is None:
        raise ObjectNotFoundError({"_entity": "Product not found"})
    return ProductResponse.model_validate(product)


@product_router.get("/search/{query}", response_model=list[ProductResponse])
def search_products(query: str, session: Session = Depends(get_session)) -> list[ProductResponse]:
    return [ProductResponse.model_validate(p) for p in ProductRepository(session).search(query)]


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, session: Session = Depends(get_session)) -> ProductResponse:
    return ProductResponse.model_validate(ProductRepository(session).get(product_id))


@product_router.get("/{product_id}/recommendations", response_model=list[ProductResponse])
def product_recommendations(
    product_id: int,
    limit: int = Query(4, ge=1, le=20),
    session: Session = Depends(get_session),
) -> list[ProductResponse]:
    repo = ProductRepository(session)
    product = repo.get(product_id)
    return [ProductResponse.model_validate(p) for p in repo.related(product, limit=limit)]


@product_router.get("/{product_id}/frequently-bought-together", response_model=list[ProductResponse])
def frequently_bought_together(
    product_id: int,
    limit: int = Query(4, ge=1, le=20),
    session: Session = Depends(get_session),
) -> list[ProductResponse]:
    repo = ProductRepository(session)
    product = repo.get(product_id)
    return [ProductResponse.model_validate(p) for p in repo.frequently_bought_with(product.id, limit=limit)]


# --- Brand endpoints ---


@brand_router.get("", response_model=list[BrandResponse])
def list_brands(
    is_featured: bool | None = Query(None, alias="isFeatured"),
    session: Session = Depends(get_session),
) -> list[BrandResponse]:
    return [BrandResponse.model_validate(b) for b in BrandRepository(session).list(is_featured=is_featured)]


@brand_router.get("/featured", response_model=list[BrandResponse])
def featured_brands(session: Session = Depends(get_session)) -> list[BrandResponse]:
    return [BrandResponse.model_validate(b) for b in BrandRepository(session).list(is_featured=True)]


@brand_router.get("/{brand_id}", response_model=BrandResponse)
def get_brand(brand_id: int, session: Session = Depends(get_session)) -> BrandResponse:
    return BrandResponse.model_validate(BrandRepository(session).get(brand_id))
