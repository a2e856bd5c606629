"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel, PaginationSchema

# --- Request Schemas ---


class CreateCategoryRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Điện thoại",
                    "nameEn": "Phones",
                    "nameZh": "手机",
                    "icon": "smartphone",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    name_en: str | None = Field(None, max_length=255)
    name_zh: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=255)
    icon: str | None = Field(None, max_length=255)
    parent_id: int | None = None


class UpdateCategoryRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    name_en: str | None = Field(None, max_length=255)
    name_zh: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=255)
    icon: str | None = Field(None, max_length=255)
    parent_id: int | None = None


class CreateBrandRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    logo_url: str | None = Field(None, max_length=500)
    is_featured: bool = False


class UpdateBrandRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    logo_url: str | None = Field(None, max_length=500)
    is_featured: bool | None = None


class CreateProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Tai nghe không dây",
                    "nameEn": "Wireless Earbuds",
                    "nameZh": "无线耳机",
                    "price": 590000,
                    "originalPrice": 790000,
                    "discountPercentage": 25,
                    "imageUrl": "https://cdn.example.com/earbuds.jpg",
                    "stock": 120,
                    "categoryId": 1,
                    "isHotDeal": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    name_en: str | None = Field(None, max_length=255)
    name_zh: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=255)
    description: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    price: float = Field(..., gt=0)
    original_price: float | None = Field(None, gt=0)
    discount_percentage: int | None = Field(None, ge=0, le=100)
    image_url: str = Field("", max_length=500)
    stock: int = Field(0, ge=0)
    category_id: int | None = None
    brand_id: int | None = None
    is_featured: bool = False
    is_hot_deal: bool = False
    is_best_seller: bool = False
    is_new_arrival: bool = False
    free_shipping: bool = False
    is_active: bool = True


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    name_en: str | None = Field(None, max_length=255)
    name_zh: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=255)
    description: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    price: float | None = Field(None, gt=0)
    original_price: float | None = Field(None, gt=0)
    discount_percentage: int | None = Field(None, ge=0, le=100)
    image_url: str | None = Field(None, max_length=500)
    stock: int | None = Field(None, ge=0)
    category_id: int | None = None
    brand_id: int | None = None
    is_featured: bool | None = None
    is_hot_deal: bool | None = None
    is_best_seller: bool | None = None
    is_new_arrival: bool | None = None
    free_shipping: bool | None = None
    is_active: bool | None = None


# --- Response Schemas ---


class CategoryResponse(CamelModel):
    id: int
    name: str
    name_en: str
    name_zh: str
    slug: str
    icon: str | None = None
    parent_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryWithCountResponse(CategoryResponse):
    product_count: int = 0


class CategoryTreeNode(CategoryResponse):
    children: list[CategoryTreeNode] = []


class BrandResponse(CamelModel):
    id: int
    name: str
    logo_url: str | None = None
    is_featured: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BrandWithCountResponse(BrandResponse):
    product_count: int = 0


class ProductResponse(CamelModel):
    id: int
    name: str
    name_en: str
    name_zh: str
    slug: str
    description: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    price: float
    original_price: float | None = None
    discount_percentage: int | None = None
    image_url: str
    category_id: int | None = None
    brand_id: int | None = None
    rating: float
    review_count: int
    stock: int
    is_featured: bool
    is_hot_deal: bool
    is_best_seller: bool
    is_new_arrival: bool
    free_shipping: bool
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductDetailResponse(ProductResponse):
    category: CategoryResponse | None = None
    brand: BrandResponse | None = None


class ProductFilters(CamelModel):
    categories: list[CategoryResponse]
    brands: list[BrandResponse]


class AdminProductListResponse(CamelModel):
    products: list[ProductDetailResponse]
    pagination: PaginationSchema
    filters: ProductFilters


class DeleteProductResponse(CamelModel):
    success: bool = True
    deleted: bool
    message: str | None = None
