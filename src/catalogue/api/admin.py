"""Back-office endpoints for products, categories and brands."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from catalogue.api.schemas import (
    AdminProductListResponse,
    BrandResponse,
    BrandWithCountResponse,
    CategoryResponse,
    CategoryWithCountResponse,
    CreateBrandRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    DeleteProductResponse,
    ProductDetailResponse,
    ProductFilters,
    UpdateBrandRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from catalogue.brand.management import create_brand, delete_brand, update_brand
from catalogue.brand.repository import BrandRepository
from catalogue.category.management import create_category, delete_category, update_category
from catalogue.category.repository import CategoryRepository
from catalogue.product.management import create_product, delete_product, update_product
from catalogue.product.repository import ProductRepository
from shared.database import get_session
from shared.schemas import PaginationSchema, StatusResponse

admin_product_router = APIRouter(prefix="/products", tags=["admin: products"])
admin_category_router = APIRouter(prefix="/categories", tags=["admin: categories"])
admin_brand_router = APIRouter(prefix="/brands", tags=["admin: brands"])


# --- Product endpoints ---


@admin_product_router.get("", response_model=AdminProductListResponse)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    search: str | None = None,
    category_id: int | None = Query(None, alias="categoryId"),
    brand_id: int | None = Query(None, alias="brandId"),
    session: Session = Depends(get_session),
) -> AdminProductListResponse:
    result = ProductRepository(session).list(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        category_id=category_id,
        brand_id=brand_id,
    )
    return AdminProductListResponse(
        products=[ProductDetailResponse.model_validate(p) for p in result.items],
        pagination=PaginationSchema.from_page(result),
        filters=ProductFilters(
            categories=[CategoryResponse.model_validate(c) for c in CategoryRepository(session).list_ordered()],
            brands=[BrandResponse.model_validate(b) for b in BrandRepository(session).list()],
        ),
    )


@admin_product_router.get("/{product_id}", response_model=ProductDetailResponse)
def get_product(product_id: int, session: Session = Depends(get_session)) -> ProductDetailResponse:
    return ProductDetailResponse.model_validate(ProductRepository(session).get(product_id))


@admin_product_router.post("", status_code=201, response_model=ProductDetailResponse)
def create_product_endpoint(
    body: CreateProductRequest, session: Session = Depends(get_session)
) -> ProductDetailResponse:
    product = create_product(session, **body.model_dump())
    return ProductDetailResponse.model_validate(product)


@admin_product_router.put("/{product_id}", response_model=ProductDetailResponse)
def update_product_endpoint(
    product_id: int, body: UpdateProductRequest, session: Session = Depends(get_session)
) -> ProductDetailResponse:
    product = update_product(session, product_id, **body.model_dump(exclude_unset=True))
    return ProductDetailResponse.model_validate(product)


@admin_product_router.delete("/{product_id}", response_model=DeleteProductResponse)
def delete_product_endpoint(product_id: int, session: Session = Depends(get_session)) -> DeleteProductResponse:
    if delete_product(session, product_id):
        return DeleteProductResponse(deleted=True)
    return DeleteProductResponse(
        deleted=False,
        message="Product has been marked as inactive as it has orders associated with it",
    )


# --- Category endpoints ---


@admin_category_router.get("", response_model=list[CategoryWithCountResponse])
def list_categories(session: Session = Depends(get_session)) -> list[CategoryWithCountResponse]:
    repo = CategoryRepository(session)
    counts = repo.product_counts()
    return [
        CategoryWithCountResponse(
            **CategoryResponse.model_validate(c).model_dump(),
            product_count=counts.get(c.id, 0),
        )
        for c in repo.list_ordered()
    ]


@admin_category_router.get("/{category_id}", response_model=CategoryWithCountResponse)
def get_category(category_id: int, session: Session = Depends(get_session)) -> CategoryWithCountResponse:
    repo = CategoryRepository(session)
    category = repo.get(category_id)
    return CategoryWithCountResponse(
        **CategoryResponse.model_validate(category).model_dump(),
        product_count=repo.product_count(category.id),
    )


@admin_category_router.post("", status_code=201, response_model=CategoryResponse)
def create_category_endpoint(
    body: CreateCategoryRequest, session: Session = Depends(get_session)
) -> CategoryResponse:
    return CategoryResponse.model_validate(create_category(session, **body.model_dump()))


@admin_category_router.put("/{category_id}", response_model=CategoryResponse)
def update_category_endpoint(
    category_id: int, body: UpdateCategoryRequest, session: Session = Depends(get_session)
) -> CategoryResponse:
    category = update_category(session, category_id, **body.model_dump(exclude_unset=True))
    return CategoryResponse.model_validate(category)


@admin_category_router.delete("/{category_id}", response_model=StatusResponse)
def delete_category_endpoint(category_id: int, session: Session = Depends(get_session)) -> StatusResponse:
    delete_category(session, category_id)
    return StatusResponse()


# --- Brand endpoints ---


@admin_brand_router.get("", response_model=list[BrandWithCountResponse])
def list_brands(session: Session = Depends(get_session)) -> list[BrandWithCountResponse]:
    repo = BrandRepository(session)
    counts = repo.product_counts()
    return [
        BrandWithCountResponse(**BrandResponse.model_validate(b).model_dump(), product_count=counts.get(b.id, 0))
        for b in repo.list()
    ]


@admin_brand_router.get("/{brand_id}", response_model=BrandWithCountResponse)
def get_brand(brand_id: int, session: Session = Depends(get_session)) -> BrandWithCountResponse:
    repo = BrandRepository(session)
    brand = repo.get(brand_id)
    return BrandWithCountResponse(
        **BrandResponse.model_validate(brand).model_dump(),
        product_count=repo.product_count(brand.id),
    )


@admin_brand_router.post("", status_code=201, response_model=BrandResponse)
def create_brand_endpoint(body: CreateBrandRequest, session: Session = Depends(get_session)) -> BrandResponse:
    return BrandResponse.model_validate(create_brand(session, **body.model_dump()))


@admin_brand_router.put("/{brand_id}", response_model=BrandResponse)
def update_brand_endpoint(
    brand_id: int, body: UpdateBrandRequest, session: Session = Depends(get_session)
) -> BrandResponse:
    return BrandResponse.model_validate(update_brand(session, brand_id, **body.model_dump(exclude_unset=True)))


@admin_brand_router.delete("/{brand_id}", response_model=StatusResponse)
def delete_brand_endpoint(brand_id: int, session: Session = Depends(get_session)) -> StatusResponse:
    delete_brand(session, brand_id)
    return StatusResponse()
